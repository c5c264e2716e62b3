"""Committer that discards everything it receives."""

from __future__ import annotations

import logging
from typing import Any, TextIO

from committer.base import Committer, ConfigConfigurable, Content, Metadata
from committer.config import CLASS_KEY, load_config_fragment, write_fragment
from committer.registry import committer_type_of, register_committer

logger = logging.getLogger(__name__)


@register_committer("committer.impl.nil.NilCommitter", "NilCommitter")
class NilCommitter(Committer, ConfigConfigurable):
    """Accepts every request and does nothing with it.

    Useful to disable committing without removing a committer section from
    a configuration document.
    """

    def queue_add(self, reference: str, content: Content, metadata: Metadata) -> None:
        logger.debug("Ignoring addition of %s", reference)

    def queue_remove(
        self, reference: str, content: Content, metadata: Metadata
    ) -> None:
        logger.debug("Ignoring removal of %s", reference)

    def commit(self) -> None:
        pass

    def load_from_config(self, source: Any) -> None:
        load_config_fragment(source)

    def save_to_config(self, sink: TextIO) -> None:
        write_fragment({CLASS_KEY: committer_type_of(self)}, sink)
