"""Fatal errors that abort an analysis instead of becoming findings."""

from __future__ import annotations


class ToolUnavailableError(RuntimeError):
    """Raised when a required external tool or grammar is not installed."""


class RegistryError(RuntimeError):
    """Raised when a registry command fails for a reason other than 'not found'."""


class EntryPointError(RuntimeError):
    """Raised when a fetched package has no resolvable entry file."""


__all__ = ["EntryPointError", "RegistryError", "ToolUnavailableError"]
