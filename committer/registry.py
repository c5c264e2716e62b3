"""Committer type registry.

Configuration documents name committer types by string identifier. Types
become resolvable by registering a zero-argument factory (usually the class
itself) under one or more identifiers:

    @register_committer("mypackage.committers.SolrCommitter", "SolrCommitter")
    class SolrCommitter(Committer, ConfigConfigurable):
        ...
"""

from __future__ import annotations

from typing import Any, Callable, Dict, List

from .exceptions import UnknownCommitterError

CommitterFactory = Callable[[], Any]

COMMITTER_REGISTRY: Dict[str, CommitterFactory] = {}
_CANONICAL_NAMES: Dict[type, str] = {}


def register_committer(
    *names: str,
) -> Callable[[CommitterFactory], CommitterFactory]:
    """Register a committer factory under one or more type identifiers.

    The first identifier registered for a class is the one written back when
    an instance of that class is saved.
    """
    if not names:
        raise ValueError("register_committer() requires at least one name")

    def decorator(factory: CommitterFactory) -> CommitterFactory:
        for name in names:
            COMMITTER_REGISTRY[name] = factory
        if isinstance(factory, type):
            _CANONICAL_NAMES.setdefault(factory, names[0])
        return factory

    return decorator


def unregister_committer(name: str) -> None:
    factory = COMMITTER_REGISTRY.pop(name, None)
    if isinstance(factory, type) and _CANONICAL_NAMES.get(factory) == name:
        del _CANONICAL_NAMES[factory]


def get_committer_factory(name: str) -> CommitterFactory:
    """Get the factory registered for a type identifier."""
    factory = COMMITTER_REGISTRY.get(name)
    if factory is None:
        raise UnknownCommitterError(name, available=list_committer_types())
    return factory


def list_committer_types() -> List[str]:
    """List all registered committer type identifiers."""
    return sorted(COMMITTER_REGISTRY.keys())


def committer_type_of(obj: Any) -> str:
    cls = type(obj)
    name = _CANONICAL_NAMES.get(cls)
    if name is not None:
        return name
    return f"{cls.__module__}.{cls.__qualname__}"
