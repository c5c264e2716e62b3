"""Committer configuration documents.

A document is YAML with a single ``committer`` root key. Every committer
fragment is a mapping naming its type under ``class``, carrying its own
fields, and listing nested committer fragments under ``committer``:

    committer:
      class: MultipleCommitters
      committer:
        - class: MemoryCommitter
          name: primary
        - class: NilCommitter

Child order is significant and preserved on load and save.
"""

from __future__ import annotations

import io
import logging
import os
from pathlib import Path
from typing import Any, Dict, List, Mapping, Optional, TextIO

import yaml
from pydantic import BaseModel, ConfigDict, Field, ValidationError, field_validator

from .base import ConfigConfigurable
from .env_substitution import apply_env_substitution
from .exceptions import CommitterError, CommitterInstantiationError, ConfigurationError
from .registry import committer_type_of, get_committer_factory

logger = logging.getLogger(__name__)

COMMITTER_KEY = "committer"
CLASS_KEY = "class"


class CommitterFragment(BaseModel):
    """Validated shape of one committer fragment."""

    model_config = ConfigDict(extra="allow")

    class_name: str = Field(alias=CLASS_KEY, min_length=1)
    committer: List[Dict[str, Any]] = Field(default_factory=list)

    @field_validator("committer", mode="before")
    @classmethod
    def _single_child_as_list(cls, value: Any) -> Any:
        if value is None:
            return []
        if isinstance(value, Mapping):
            return [dict(value)]
        return value

    def extra_fields(self) -> Dict[str, Any]:
        """Committer-specific fields, excluding ``class`` and children."""
        return dict(self.__pydantic_extra__ or {})


def parse_fragment(data: Any) -> CommitterFragment:
    if not isinstance(data, Mapping):
        raise ConfigurationError(
            f"Committer fragment must be a mapping, got {type(data).__name__}"
        )
    try:
        return CommitterFragment.model_validate(dict(data))
    except ValidationError as exc:
        problems = "; ".join(
            f"{'.'.join(str(part) for part in err['loc']) or '<root>'}: {err['msg']}"
            for err in exc.errors()
        )
        class_name = data.get(CLASS_KEY)
        raise ConfigurationError(
            f"Malformed committer fragment: {problems}",
            committer_type=class_name if isinstance(class_name, str) else None,
            original_error=exc,
        ) from exc


def _read_yaml(source: Any) -> Any:
    try:
        if isinstance(source, os.PathLike):
            path = Path(source)
            logger.info("Loading committer config from %s", path)
            if not path.exists():
                raise ConfigurationError(f"Config file not found: {path}")
            with open(path, "r", encoding="utf-8") as handle:
                return yaml.safe_load(handle)
        if isinstance(source, str) or hasattr(source, "read"):
            return yaml.safe_load(source)
    except yaml.YAMLError as exc:
        raise ConfigurationError(
            "Invalid YAML in committer configuration", original_error=exc
        ) from exc
    except OSError as exc:
        raise ConfigurationError(
            "Cannot read committer configuration", original_error=exc
        ) from exc
    raise ConfigurationError(
        f"Unsupported configuration source: {type(source).__name__}"
    )


def load_config_fragment(
    source: Any, *, enable_env_substitution: bool = True
) -> Dict[str, Any]:
    """Read a committer fragment from any supported source.

    Args:
        source: A text stream, YAML text, a path, or an already-parsed
            fragment mapping. A leading ``committer`` root key is unwrapped.
        enable_env_substitution: Substitute ${VAR} and ${VAR:default} in
            documents read from text. Parsed mappings are used as given.

    Returns:
        The validated fragment as a plain dictionary.
    """
    if isinstance(source, Mapping):
        data: Any = dict(source)
    else:
        data = _read_yaml(source)
        if isinstance(data, dict) and enable_env_substitution:
            data = apply_env_substitution(data)

    if not isinstance(data, Mapping):
        raise ConfigurationError("Committer configuration must be a YAML mapping")
    if COMMITTER_KEY in data and CLASS_KEY not in data:
        if len(data) != 1:
            raise ConfigurationError(
                f"Committer document must contain only the '{COMMITTER_KEY}' root key"
            )
        data = data[COMMITTER_KEY]

    parse_fragment(data)
    return dict(data)


def configurations_at(fragment: Mapping[str, Any]) -> List[Dict[str, Any]]:
    """Return the nested committer fragments of ``fragment``, in order."""
    return parse_fragment(fragment).committer


def new_instance(fragment: Mapping[str, Any]) -> Any:
    """Construct a default instance of the type named by ``fragment``."""
    model = parse_fragment(fragment)
    factory = get_committer_factory(model.class_name)
    try:
        instance = factory()
    except Exception as exc:
        raise CommitterInstantiationError(
            f"Cannot instantiate committer '{model.class_name}'",
            committer_type=model.class_name,
            original_error=exc,
        ) from exc
    logger.debug("Instantiated committer %s", model.class_name)
    return instance


def configure(instance: ConfigConfigurable, fragment: Mapping[str, Any]) -> None:
    """Load ``fragment`` into ``instance``, wrapping foreign failures."""
    try:
        instance.load_from_config(fragment)
    except CommitterError:
        raise
    except Exception as exc:
        committer_type = committer_type_of(instance)
        raise ConfigurationError(
            f"Committer '{committer_type}' failed to load its configuration",
            committer_type=committer_type,
            original_error=exc,
        ) from exc


def write_fragment(fragment: Mapping[str, Any], sink: TextIO) -> None:
    """Write ``fragment`` as a complete document under the root key."""
    try:
        yaml.safe_dump(
            {COMMITTER_KEY: dict(fragment)},
            sink,
            sort_keys=False,
            default_flow_style=False,
        )
    except yaml.YAMLError as exc:
        raise ConfigurationError(
            "Cannot save as YAML",
            committer_type=fragment.get(CLASS_KEY),
            original_error=exc,
        ) from exc


def _save_text(instance: ConfigConfigurable) -> str:
    buffer = io.StringIO()
    try:
        instance.save_to_config(buffer)
    except CommitterError:
        raise
    except Exception as exc:
        committer_type = committer_type_of(instance)
        raise ConfigurationError(
            f"Committer '{committer_type}' failed to save its configuration",
            committer_type=committer_type,
            original_error=exc,
        ) from exc
    return buffer.getvalue()


def save_fragment(instance: ConfigConfigurable) -> Dict[str, Any]:
    """Save ``instance`` and return the fragment it wrote."""
    return load_config_fragment(_save_text(instance), enable_env_substitution=False)


def load_committer(source: Any, *, enable_env_substitution: bool = True) -> Any:
    """Build the committer described by a configuration document."""
    fragment = load_config_fragment(
        source, enable_env_substitution=enable_env_substitution
    )
    committer = new_instance(fragment)
    if isinstance(committer, ConfigConfigurable):
        configure(committer, fragment)
    return committer


def save_committer(committer: Any, sink: Optional[TextIO] = None) -> str:
    """Save a configurable committer as a document.

    Writes to ``sink`` when given and always returns the document text.
    """
    if not isinstance(committer, ConfigConfigurable):
        raise ConfigurationError(
            f"Committer {committer!r} does not support configuration saving",
            committer_type=committer_type_of(committer),
        )
    text = _save_text(committer)
    if sink is not None:
        sink.write(text)
    return text
