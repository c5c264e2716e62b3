"""Pytest configuration and fixtures."""

import logging

import pytest

from committer import registry
from committer.registry import register_committer
from tests.committers import RecorderA, RecorderB


@pytest.fixture(autouse=True)
def restore_committer_registry():
    """Undo registrations made by a test."""
    original_registry = registry.COMMITTER_REGISTRY.copy()
    original_names = registry._CANONICAL_NAMES.copy()
    try:
        yield
    finally:
        registry.COMMITTER_REGISTRY.clear()
        registry.COMMITTER_REGISTRY.update(original_registry)
        registry._CANONICAL_NAMES.clear()
        registry._CANONICAL_NAMES.update(original_names)


@pytest.fixture
def ab_types():
    """Register the two test committer types ``A`` and ``B``."""
    register_committer("A")(RecorderA)
    register_committer("B")(RecorderB)
    return RecorderA, RecorderB


@pytest.fixture
def reset_root_logging():
    """Drop handlers installed by setup_logging() and restore the root level."""
    root = logging.getLogger()
    original_level = root.level
    try:
        yield root
    finally:
        for handler in list(root.handlers):
            # pytest manages its own capture handlers
            if type(handler).__module__ != "_pytest.logging":
                handler.close()
                root.removeHandler(handler)
        root.setLevel(original_level)
