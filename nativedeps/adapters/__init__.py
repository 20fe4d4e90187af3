"""Adapters — bindings to the host tools nativedeps drives."""

from nativedeps.adapters.base import Adapter, ExecutionContext
from nativedeps.adapters.mock import MockAdapter
from nativedeps.adapters.registry import AdapterRegistry
from nativedeps.adapters.shell.command import ShellCommandAdapter

__all__ = [
    "Adapter",
    "AdapterRegistry",
    "ExecutionContext",
    "MockAdapter",
    "ShellCommandAdapter",
]
