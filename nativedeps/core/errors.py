"""
Error taxonomy — every failure the reconcilers can report.

Per-module failures (ConfigurationError raised while synthesizing a
snippet, MissingResourceError for an absent template) are isolated by
the reconcilers. Directory-level I/O failures are plain OSError and
propagate to the caller as build-fatal.
"""

from __future__ import annotations


class NativeDepsError(Exception):
    """Base class for all reconciliation errors."""


class ConfigurationError(NativeDepsError):
    """Settings, project file, or a dependency snippet is malformed."""


class MissingResourceError(NativeDepsError):
    """A template file or host plugin that should exist was not found."""


class DuplicateResourceError(NativeDepsError):
    """More than one candidate was found where exactly one is required."""

    def __init__(self, message: str, candidates: list[str] | None = None):
        super().__init__(message)
        self.candidates = candidates or []
