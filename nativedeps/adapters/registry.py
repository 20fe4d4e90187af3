"""
Adapter registry — single dispatch point for hook invocations.

Owns the adapters by name, routes to the mock adapter in mock mode and
runs the availability and validation checks before a hook executes.
"""

from __future__ import annotations

import logging
import time

from nativedeps.adapters.base import Adapter, ExecutionContext
from nativedeps.core.models.action import Action, Receipt

logger = logging.getLogger(__name__)


class AdapterRegistry:
    """Adapters by name, plus the mock switch used by ``--mock`` and tests.

    In mock mode every action goes to the mock adapter (if one was
    given) or succeeds without running anything.
    """

    def __init__(self, mock_mode: bool = False):
        self._adapters: dict[str, Adapter] = {}
        self._mock_mode = mock_mode
        self._mock_adapter: Adapter | None = None

    @property
    def mock_mode(self) -> bool:
        return self._mock_mode

    def set_mock_mode(self, enabled: bool, mock_adapter: Adapter | None = None) -> None:
        """Enable or disable mock mode, optionally with a recording adapter."""
        self._mock_mode = enabled
        self._mock_adapter = mock_adapter

    def register(self, adapter: Adapter) -> None:
        if adapter.name in self._adapters:
            logger.warning("Replacing hook adapter %s", adapter.name)
        self._adapters[adapter.name] = adapter

    def get(self, name: str) -> Adapter | None:
        return self._adapters.get(name)

    def execute_action(self, action: Action, project_root: str = ".") -> Receipt:
        """Run ``action`` on its adapter. Never raises; problems become failed receipts."""
        if self._mock_mode and self._mock_adapter is None:
            return Receipt.success(
                adapter=action.adapter,
                action_id=action.id,
                output=f"[mock] {action.id}",
                metadata={"mock": True},
            )

        adapter = self._mock_adapter if self._mock_mode else self._adapters.get(action.adapter)
        if adapter is None:
            return Receipt.failure(
                adapter=action.adapter,
                action_id=action.id,
                error=f"No adapter registered for '{action.adapter}'",
            )
        if not adapter.is_available():
            return Receipt.failure(
                adapter=adapter.name,
                action_id=action.id,
                error=f"Adapter '{adapter.name}' is not available on this machine",
            )

        context = ExecutionContext(action=action, project_root=project_root, params=action.params)
        is_valid, error_msg = adapter.validate(context)
        if not is_valid:
            return Receipt.failure(
                adapter=adapter.name,
                action_id=action.id,
                error=f"Validation failed: {error_msg}",
            )

        start = time.monotonic()
        try:
            receipt = adapter.execute(context)
        except Exception as e:
            logger.error("Adapter %s raised while running %s: %s", adapter.name, action.id, e)
            receipt = Receipt.failure(
                adapter=adapter.name,
                action_id=action.id,
                error=f"Unexpected error: {e}",
            )
        receipt.duration_ms = int((time.monotonic() - start) * 1000)
        return receipt
