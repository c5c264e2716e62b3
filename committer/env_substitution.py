"""Environment variable substitution for committer configuration values.

Supports ${VAR_NAME} and ${VAR_NAME:default_value} in any string value of
a configuration document, at any nesting depth.
"""

from __future__ import annotations

import os
import re
from typing import Any, Dict, List

from .exceptions import ConfigurationError

_ENV_VAR_PATTERN = re.compile(r"\$\{([^}:]+)(?::([^}]*))?\}")


def _substitute_string(value: str) -> str:
    def replacer(match: re.Match) -> str:
        var_name = match.group(1)
        default_value = match.group(2)

        env_value = os.environ.get(var_name)
        if env_value is not None:
            return env_value
        if default_value is not None:
            return default_value
        raise ConfigurationError(
            f"Environment variable '{var_name}' is not set and no default provided"
        )

    return _ENV_VAR_PATTERN.sub(replacer, value)


def substitute_env_vars(value: Any) -> Any:
    """Substitute environment variables in a parsed configuration value.

    Walks nested mappings and sequences with an explicit stack so deeply
    nested committer documents are handled without recursion.

    Raises:
        ConfigurationError: If a referenced variable is unset and has no default
    """
    if isinstance(value, str):
        return _substitute_string(value)
    if not isinstance(value, (dict, list)):
        return value

    root: Any = {} if isinstance(value, dict) else []
    pending: List[tuple] = [(value, root)]
    while pending:
        source, target = pending.pop()
        items = source.items() if isinstance(source, dict) else enumerate(source)
        for key, item in items:
            if isinstance(item, (dict, list)):
                copied: Any = {} if isinstance(item, dict) else []
                pending.append((item, copied))
            elif isinstance(item, str):
                copied = _substitute_string(item)
            else:
                copied = item
            if isinstance(target, dict):
                target[key] = copied
            else:
                target.append(copied)
    return root


def apply_env_substitution(config: Dict[str, Any]) -> Dict[str, Any]:
    """Apply environment variable substitution to an entire document."""
    return substitute_env_vars(config)
