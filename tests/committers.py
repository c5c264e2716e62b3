"""Committers used by the test suite."""

from __future__ import annotations

from typing import Any, List, Optional, TextIO, Tuple

from committer.base import Committer, ConfigConfigurable
from committer.config import CLASS_KEY, load_config_fragment, parse_fragment, write_fragment
from committer.registry import committer_type_of


class RecordingCommitter(Committer):
    """Records every call; ``log`` may be shared to observe ordering."""

    def __init__(self, label: str = "recorder", log: Optional[List[Tuple[str, str]]] = None):
        self.label = label
        self.log = log if log is not None else []
        self.calls: List[Tuple[Any, ...]] = []

    def __repr__(self) -> str:
        return f"{type(self).__name__}({self.label!r})"

    def _record(self, operation: str, *args: Any) -> None:
        self.calls.append((operation,) + args)
        self.log.append((self.label, operation))

    def queue_add(self, reference, content, metadata):
        self._record("queue_add", reference, content, metadata)

    def queue_remove(self, reference, content, metadata):
        self._record("queue_remove", reference, content, metadata)

    def commit(self):
        self._record("commit")


class FailingCommitter(RecordingCommitter):
    """Records the call, then raises ``error`` for the operations in ``fail_on``."""

    def __init__(self, label="failing", log=None, fail_on=("commit",), error=None):
        super().__init__(label, log)
        self.fail_on = set(fail_on)
        self.error = error or RuntimeError(f"{label} failed")

    def _record(self, operation, *args):
        super()._record(operation, *args)
        if operation in self.fail_on:
            raise self.error


class ConfigurableRecorder(RecordingCommitter, ConfigConfigurable):
    def __init__(self, label: str = "recorder", log=None):
        super().__init__(label, log)

    def load_from_config(self, source: Any) -> None:
        fields = parse_fragment(load_config_fragment(source)).extra_fields()
        self.label = fields.get("label", self.label)

    def save_to_config(self, sink: TextIO) -> None:
        write_fragment({CLASS_KEY: committer_type_of(self), "label": self.label}, sink)


class RecorderA(ConfigurableRecorder):
    def __init__(self):
        super().__init__("A")


class RecorderB(ConfigurableRecorder):
    def __init__(self):
        super().__init__("B")


class BrokenLoadRecorder(ConfigurableRecorder):
    def load_from_config(self, source: Any) -> None:
        raise KeyError("missing setting")


class BrokenSaveRecorder(ConfigurableRecorder):
    def save_to_config(self, sink: TextIO) -> None:
        raise OSError("disk full")


class ExplodingFactoryCommitter(RecordingCommitter):
    def __init__(self):
        raise RuntimeError("cannot connect")
