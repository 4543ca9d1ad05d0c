"""
Exception hierarchy for mergetext.

Exception hierarchy::

    MergetextError
    ├── CatalogImportError (also an OSError)
    ├── UnsupportedOperation
    └── ConfigError

Each exception carries an optional ``context`` dict with structured
metadata (source path, domain, setting name) for callers that log it.
"""

from __future__ import annotations

from typing import Any


class MergetextError(Exception):
    """Base class for all mergetext exceptions."""

    def __init__(self, message: str, context: dict[str, Any] | None = None):
        self.context = context or {}
        super().__init__(message)


class CatalogImportError(MergetextError, OSError):
    """Raised when a compiled catalog cannot be read, stored, or copied."""

    def __init__(self, message: str, path: str = "", domain: str | None = None):
        context: dict[str, Any] = {"path": path}
        if domain:
            context["domain"] = domain
        super().__init__(message, context=context)


class UnsupportedOperation(MergetextError):
    """Raised on any attempt to mutate a native-backed catalog."""

    def __init__(self, operation: str):
        super().__init__(
            f"'{operation}' is not supported: native catalogs are read-only",
            context={"operation": operation},
        )


class ConfigError(MergetextError):
    """Raised when a configuration value is invalid."""

    def __init__(self, setting: str, value: Any, reason: str = ""):
        msg = f"Invalid value for '{setting}': {value!r}"
        if reason:
            msg += f" ({reason})"
        super().__init__(msg, context={"setting": setting, "value": value})
