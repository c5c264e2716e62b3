"""Custom exception classes for committer-core.

Configuration problems (unknown types, failed instantiation, malformed
documents) are reported with these types. Errors raised by individual
committers while dispatching are never wrapped.
"""

from typing import Optional, Dict, Any


class CommitterError(Exception):
    """Base exception for all committer-core errors."""

    error_code: str = "ERR000"

    def __init__(
        self,
        message: str,
        details: Optional[Dict[str, Any]] = None,
        error_code: Optional[str] = None,
    ):
        super().__init__(message)
        self.message = message
        self.details = details or {}
        if error_code:
            self.error_code = error_code

    def __str__(self) -> str:
        parts = [f"[{self.error_code}] {self.message}"]
        if self.details:
            detail_str = ", ".join(f"{k}={v}" for k, v in self.details.items())
            parts.append(f"({detail_str})")
        return " ".join(parts)


class ConfigurationError(CommitterError):
    """Raised when a committer configuration cannot be loaded or saved.

    Examples:
        - Invalid YAML
        - Fragment without a ``class`` key
        - A nested committer failing to load or save its own fragment
    """

    error_code = "CFG001"

    def __init__(
        self,
        message: str,
        committer_type: Optional[str] = None,
        original_error: Optional[Exception] = None,
    ):
        """
        Initialize configuration error.

        Args:
            message: Description of the failure
            committer_type: Type identifier of the fragment being processed
            original_error: Underlying exception, if any
        """
        details: Dict[str, Any] = {}
        if committer_type:
            details["committer_type"] = committer_type
        if original_error:
            details["original_error"] = str(original_error)
            details["error_type"] = type(original_error).__name__
        super().__init__(message, details)
        self.original_error = original_error


class UnknownCommitterError(ConfigurationError):
    """Raised when a ``class`` identifier is not in the registry."""

    error_code = "CFG002"

    def __init__(self, committer_type: str, available: Optional[list] = None):
        message = f"Committer type '{committer_type}' is not registered"
        super().__init__(message, committer_type=committer_type)
        if available is not None:
            self.details["available"] = ", ".join(available) or "none"


class CommitterInstantiationError(ConfigurationError):
    """Raised when a registered factory fails to build an instance."""

    error_code = "CFG003"
