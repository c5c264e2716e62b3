"""Capability contracts shared by all committers."""

from __future__ import annotations

import os
from abc import ABC, abstractmethod
from typing import Any, BinaryIO, List, Mapping, Optional, TextIO, Union

Metadata = Mapping[str, List[str]]
Content = Optional[Union[BinaryIO, bytes, os.PathLike, str]]


class Committer(ABC):
    """A pluggable unit that queues document additions and removals and
    later commits them to some sink.

    Queuing state lives entirely in the implementation; callers invoke
    ``queue_add``/``queue_remove`` while processing documents and ``commit``
    at batch boundaries.
    """

    @abstractmethod
    def queue_add(self, reference: str, content: Content, metadata: Metadata) -> None:
        ...

    @abstractmethod
    def queue_remove(
        self, reference: str, content: Content, metadata: Metadata
    ) -> None:
        ...

    @abstractmethod
    def commit(self) -> None:
        ...


class ConfigConfigurable(ABC):
    """An object that can be configured from, and saved to, a committer
    configuration document.

    ``source`` is anything :func:`committer.config.load_config_fragment`
    accepts: a text stream, YAML text, a path, or an already-parsed fragment
    mapping handed down by a parent. ``sink`` is a writable text stream.
    """

    @abstractmethod
    def load_from_config(self, source: Any) -> None:
        ...

    @abstractmethod
    def save_to_config(self, sink: TextIO) -> None:
        ...
