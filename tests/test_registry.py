"""Tests for the committer type registry."""

import pytest

from committer import MultipleCommitters
from committer.exceptions import UnknownCommitterError
from committer.registry import (
    COMMITTER_REGISTRY,
    committer_type_of,
    get_committer_factory,
    list_committer_types,
    register_committer,
    unregister_committer,
)
from tests.committers import RecordingCommitter


def test_builtin_committers_are_registered():
    types = list_committer_types()
    for name in (
        "MultipleCommitters",
        "committer.impl.multiple.MultipleCommitters",
        "NilCommitter",
        "committer.impl.nil.NilCommitter",
        "MemoryCommitter",
        "committer.impl.memory.MemoryCommitter",
    ):
        assert name in types
    assert types == sorted(types)


def test_register_and_resolve_class():
    @register_committer("tests.Recording", "Recording")
    class Registered(RecordingCommitter):
        pass

    assert get_committer_factory("tests.Recording") is Registered
    assert get_committer_factory("Recording") is Registered
    assert committer_type_of(Registered()) == "tests.Recording"


def test_register_factory_function():
    @register_committer("factory-made")
    def build():
        return RecordingCommitter("built")

    instance = get_committer_factory("factory-made")()
    assert instance.label == "built"
    assert committer_type_of(instance) == "tests.committers.RecordingCommitter"


def test_first_registration_stays_canonical():
    register_committer("alias-for-multiple")(MultipleCommitters)

    assert get_committer_factory("alias-for-multiple") is MultipleCommitters
    assert (
        committer_type_of(MultipleCommitters())
        == "committer.impl.multiple.MultipleCommitters"
    )


def test_unregister_committer():
    register_committer("temporary")(RecordingCommitter)
    unregister_committer("temporary")
    unregister_committer("never-registered")

    assert "temporary" not in COMMITTER_REGISTRY
    with pytest.raises(UnknownCommitterError):
        get_committer_factory("temporary")


def test_register_requires_a_name():
    with pytest.raises(ValueError):
        register_committer()


def test_registrations_do_not_leak_between_tests():
    assert "temporary" not in COMMITTER_REGISTRY
    assert "tests.Recording" not in COMMITTER_REGISTRY
