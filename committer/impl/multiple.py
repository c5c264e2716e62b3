"""Composite committer dispatching to an ordered list of committers.

Every request is handed to each nested committer in the order they were
added. The first failure is raised to the caller immediately and the
remaining committers do not see that request; committers already invoked
keep whatever they did.

Configuration usage:

    committer:
      class: MultipleCommitters
      committer:
        - class: (committer type)
          (committer-specific configuration)
        - class: (committer type)
          (committer-specific configuration)
"""

from __future__ import annotations

import logging
from typing import (
    Any,
    Dict,
    FrozenSet,
    Iterable,
    Iterator,
    List,
    Optional,
    TextIO,
    Tuple,
)

from committer.base import Committer, ConfigConfigurable, Content, Metadata
from committer.config import (
    CLASS_KEY,
    COMMITTER_KEY,
    configurations_at,
    configure,
    load_config_fragment,
    new_instance,
    save_fragment,
    write_fragment,
)
from committer.exceptions import ConfigurationError
from committer.registry import (
    COMMITTER_REGISTRY,
    committer_type_of,
    register_committer,
)

logger = logging.getLogger(__name__)


@register_committer("committer.impl.multiple.MultipleCommitters", "MultipleCommitters")
class MultipleCommitters(Committer, ConfigConfigurable):
    """Defines many committers as one."""

    def __init__(self, committers: Optional[Iterable[Committer]] = None) -> None:
        self._committers: List[Committer] = list(committers or [])
        # Type identifiers loaded members were built from, keyed by id().
        self._loaded_types: Dict[int, str] = {}
        self._loaded_type: Optional[str] = None

    def add_committer(self, *committers: Committer) -> None:
        """Append one or more committers, keeping call order."""
        self._committers.extend(committers)

    def remove_committer(self, *committers: Committer) -> None:
        """Remove every occurrence of the given committers, by identity."""
        self._committers = [
            existing
            for existing in self._committers
            if not any(existing is removed for removed in committers)
        ]
        for removed in committers:
            self._loaded_types.pop(id(removed), None)

    def get_committers(self) -> List[Committer]:
        return list(self._committers)

    def __len__(self) -> int:
        return len(self._committers)

    def __repr__(self) -> str:
        return f"{type(self).__name__}({self._committers!r})"

    def queue_add(self, reference: str, content: Content, metadata: Metadata) -> None:
        logger.debug(
            "Queuing addition of %s on %d committers", reference, len(self._committers)
        )
        for committer in self._committers:
            committer.queue_add(reference, content, metadata)

    def queue_remove(
        self, reference: str, content: Content, metadata: Metadata
    ) -> None:
        logger.debug(
            "Queuing removal of %s on %d committers", reference, len(self._committers)
        )
        for committer in self._committers:
            committer.queue_remove(reference, content, metadata)

    def commit(self) -> None:
        logger.debug("Committing %d committers", len(self._committers))
        for committer in self._committers:
            committer.commit()

    def load_from_config(self, source: Any) -> None:
        """Append the committers described by ``source``.

        Children are built depth-first in document order. A nested
        ``MultipleCommitters`` is appended to its parent once all of its own
        children have loaded. Loading twice appends twice. When a nested
        committer fails to load, the committers appended before it stay in
        place.
        """
        fragment = load_config_fragment(source)
        if COMMITTER_REGISTRY.get(fragment[CLASS_KEY]) is type(self):
            self._loaded_type = fragment[CLASS_KEY]

        frames: List[Tuple[MultipleCommitters, Iterator[Dict[str, Any]], str]] = [
            (self, iter(configurations_at(fragment)), fragment[CLASS_KEY])
        ]
        while frames:
            composite, children, class_name = frames[-1]
            child = next(children, None)
            if child is None:
                frames.pop()
                if frames:
                    frames[-1][0]._append_loaded(composite, class_name)
                continue

            committer = new_instance(child)
            if _is_plain_composite(committer, "load_from_config"):
                committer._loaded_type = child[CLASS_KEY]
                frames.append(
                    (committer, iter(configurations_at(child)), child[CLASS_KEY])
                )
                continue
            if isinstance(committer, ConfigConfigurable):
                configure(committer, child)
            composite._append_loaded(committer, child[CLASS_KEY])

    def save_to_config(self, sink: TextIO) -> None:
        """Write this committer and its nested committers to ``sink``.

        Loaded committers keep the type identifier they were loaded from.
        Nested committers that are not ``ConfigConfigurable`` are logged and
        left out of the document.
        """
        write_fragment(self._build_fragment(), sink)

    def _append_loaded(self, committer: Committer, class_name: str) -> None:
        self._loaded_types[id(committer)] = class_name
        self.add_committer(committer)

    def _member_type(self, committer: Any) -> Optional[str]:
        return self._loaded_types.get(id(committer))

    def _build_fragment(self) -> Dict[str, Any]:
        root: Dict[str, Any] = {
            CLASS_KEY: self._loaded_type or committer_type_of(self),
            COMMITTER_KEY: [],
        }
        pending: List[Tuple[MultipleCommitters, Dict[str, Any], FrozenSet[int]]] = [
            (self, root, frozenset([id(self)]))
        ]
        while pending:
            composite, node, ancestors = pending.pop()
            for committer in composite.get_committers():
                loaded_type = composite._member_type(committer)
                if _is_plain_composite(committer, "save_to_config"):
                    if id(committer) in ancestors:
                        raise ConfigurationError(
                            "Cannot save committers: a MultipleCommitters contains itself",
                            committer_type=committer_type_of(committer),
                        )
                    child: Dict[str, Any] = {
                        CLASS_KEY: loaded_type or committer_type_of(committer),
                        COMMITTER_KEY: [],
                    }
                    pending.append((committer, child, ancestors | {id(committer)}))
                elif isinstance(committer, ConfigConfigurable):
                    child = save_fragment(committer)
                    if loaded_type:
                        child[CLASS_KEY] = loaded_type
                else:
                    logger.warning(
                        "Cannot save committer to configuration as it does not "
                        "implement ConfigConfigurable: %r",
                        committer,
                    )
                    continue
                node[COMMITTER_KEY].append(child)
        return root


def _is_plain_composite(committer: Any, method: str) -> bool:
    # Subclasses overriding the method handle their own fragment.
    return isinstance(committer, MultipleCommitters) and getattr(
        type(committer), method
    ) is getattr(MultipleCommitters, method)
