"""
Mock adapter — stands in for the host tools.

Tests register it (or put the registry in mock mode with it) and then
assert on how many times each hook fired and in what order.
"""

from __future__ import annotations

from nativedeps.adapters.base import Adapter, ExecutionContext
from nativedeps.core.models.action import Receipt


class MockAdapter(Adapter):
    """Recording adapter: succeeds by default, failures configurable per hook."""

    def __init__(self, adapter_name: str = "mock", available: bool = True):
        self._name = adapter_name
        self._available = available
        self._failures: dict[str, str] = {}
        self._call_log: list[ExecutionContext] = []

    @property
    def name(self) -> str:
        return self._name

    @property
    def call_log(self) -> list[ExecutionContext]:
        """All execution contexts this mock has received."""
        return self._call_log

    @property
    def call_count(self) -> int:
        return len(self._call_log)

    def calls_for(self, action_id: str) -> list[ExecutionContext]:
        """Calls made for one hook, in order."""
        return [ctx for ctx in self._call_log if ctx.action.id == action_id]

    def count(self, action_id: str) -> int:
        """Number of times a given hook fired."""
        return len(self.calls_for(action_id))

    def is_available(self) -> bool:
        return self._available

    def set_failure(self, action_id: str, error: str = "Mock failure") -> None:
        """Make a specific hook fail."""
        self._failures[action_id] = error

    def validate(self, context: ExecutionContext) -> tuple[bool, str]:
        return True, ""

    def execute(self, context: ExecutionContext) -> Receipt:
        self._call_log.append(context)
        action_id = context.action.id
        if action_id in self._failures:
            return Receipt.failure(
                adapter=self._name,
                action_id=action_id,
                error=self._failures[action_id],
            )
        return Receipt.success(
            adapter=self._name,
            action_id=action_id,
            output=f"[mock] {action_id}",
            metadata={"mock": True},
        )

    def reset(self) -> None:
        """Clear call log and configured failures."""
        self._call_log.clear()
        self._failures.clear()
