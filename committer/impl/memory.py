"""Committer keeping queued and committed requests in memory."""

from __future__ import annotations

import logging
from dataclasses import dataclass, field
from typing import Any, Dict, List, Optional, TextIO

from committer.base import Committer, ConfigConfigurable, Content, Metadata
from committer.config import (
    CLASS_KEY,
    load_config_fragment,
    parse_fragment,
    write_fragment,
)
from committer.exceptions import ConfigurationError
from committer.registry import committer_type_of, register_committer

logger = logging.getLogger(__name__)

ADD = "add"
REMOVE = "remove"


@dataclass
class QueuedOperation:
    """One queued request."""

    operation: str
    reference: str
    content: Content = None
    metadata: Dict[str, List[str]] = field(default_factory=dict)


@register_committer("committer.impl.memory.MemoryCommitter", "MemoryCommitter")
class MemoryCommitter(Committer, ConfigConfigurable):
    """Queues requests in memory and moves them to ``committed`` on commit.

    Configuration usage:

        committer:
          class: MemoryCommitter
          name: (optional label shown in logs)
    """

    def __init__(self, name: Optional[str] = None) -> None:
        self.name = name
        self.queued: List[QueuedOperation] = []
        self.committed: List[QueuedOperation] = []
        self.commit_count = 0

    def __repr__(self) -> str:
        return f"MemoryCommitter(name={self.name!r})"

    def queue_add(self, reference: str, content: Content, metadata: Metadata) -> None:
        self.queued.append(QueuedOperation(ADD, reference, content, _copy(metadata)))

    def queue_remove(
        self, reference: str, content: Content, metadata: Metadata
    ) -> None:
        self.queued.append(
            QueuedOperation(REMOVE, reference, content, _copy(metadata))
        )

    def commit(self) -> None:
        logger.info(
            "Committing %d queued operation(s) in %s", len(self.queued), self.name or "memory"
        )
        self.committed.extend(self.queued)
        self.queued = []
        self.commit_count += 1

    def load_from_config(self, source: Any) -> None:
        fields = parse_fragment(load_config_fragment(source)).extra_fields()
        name = fields.get("name")
        if name is not None and not isinstance(name, str):
            raise ConfigurationError(
                "MemoryCommitter 'name' must be a string",
                committer_type=committer_type_of(self),
            )
        self.name = name

    def save_to_config(self, sink: TextIO) -> None:
        fragment: Dict[str, Any] = {CLASS_KEY: committer_type_of(self)}
        if self.name is not None:
            fragment["name"] = self.name
        write_fragment(fragment, sink)


def _copy(metadata: Metadata) -> Dict[str, List[str]]:
    return {key: list(values) for key, values in (metadata or {}).items()}
