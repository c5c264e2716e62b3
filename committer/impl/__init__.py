"""Built-in committers. Importing this package registers them."""

from .memory import MemoryCommitter, QueuedOperation
from .multiple import MultipleCommitters
from .nil import NilCommitter

__all__ = ["MemoryCommitter", "MultipleCommitters", "NilCommitter", "QueuedOperation"]
