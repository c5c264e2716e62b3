"""committer-core: dispatch document additions and removals to pluggable
committers configured from YAML documents.

Importing the package registers the built-in committers.
"""

__version__ = "1.0.0"

from committer.base import Committer, ConfigConfigurable, Content, Metadata
from committer.exceptions import (
    CommitterError,
    CommitterInstantiationError,
    ConfigurationError,
    UnknownCommitterError,
)
from committer.registry import (
    COMMITTER_REGISTRY,
    committer_type_of,
    get_committer_factory,
    list_committer_types,
    register_committer,
    unregister_committer,
)
from committer.config import (
    CommitterFragment,
    configurations_at,
    load_committer,
    load_config_fragment,
    new_instance,
    save_committer,
)
from committer.impl import MemoryCommitter, MultipleCommitters, NilCommitter

__all__ = [
    "COMMITTER_REGISTRY",
    "Committer",
    "CommitterError",
    "CommitterFragment",
    "CommitterInstantiationError",
    "ConfigConfigurable",
    "ConfigurationError",
    "Content",
    "MemoryCommitter",
    "Metadata",
    "MultipleCommitters",
    "NilCommitter",
    "UnknownCommitterError",
    "committer_type_of",
    "configurations_at",
    "get_committer_factory",
    "list_committer_types",
    "load_committer",
    "load_config_fragment",
    "new_instance",
    "register_committer",
    "save_committer",
    "unregister_committer",
]
