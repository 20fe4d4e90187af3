"""
Host bridge — the three external steps the reconcilers trigger.

Asset-index refresh, dependency resolution and plugin enabling are all
fire-and-forget: the bridge dispatches the configured hook through the
adapter registry, logs a failed receipt and carries on.
"""

from __future__ import annotations

import logging
import shlex
from pathlib import Path

from nativedeps.adapters.registry import AdapterRegistry
from nativedeps.core.models.action import Action, Receipt
from nativedeps.core.models.project import HookCommands
from nativedeps.core.models.settings import BuildTarget

logger = logging.getLogger(__name__)

REFRESH_ASSETS = "refresh_assets"
RESOLVE_DEPENDENCIES = "resolve_dependencies"
ENABLE_PLUGIN = "enable_plugin"


class HostBridge:
    """Dispatches host hooks as Actions through an AdapterRegistry."""

    def __init__(
        self,
        registry: AdapterRegistry,
        hooks: HookCommands | None = None,
        project_root: Path | None = None,
        adapter: str = "shell",
    ):
        self._registry = registry
        self._hooks = hooks or HookCommands()
        self._project_root = project_root or Path(".")
        self._adapter = adapter

    def refresh_assets(self) -> Receipt:
        """Tell the host that files under its asset root changed."""
        return self._dispatch(REFRESH_ASSETS, self._hooks.refresh)

    def resolve_dependencies(self, target: BuildTarget) -> Receipt:
        """Ask the external resolver to rescan manifests and fetch packages."""
        return self._dispatch(
            RESOLVE_DEPENDENCIES,
            self._hooks.resolve,
            target=target,
            placeholders={"{target}": target.value},
        )

    def enable_plugin(self, path: Path) -> Receipt:
        """Make sure the plugin at ``path`` is loaded by the host editor."""
        return self._dispatch(
            ENABLE_PLUGIN,
            self._hooks.enable_plugin,
            placeholders={"{path}": str(path)},
            extra={"plugin_path": str(path)},
        )

    def _dispatch(
        self,
        hook_id: str,
        command: str,
        target: BuildTarget | None = None,
        placeholders: dict[str, str] | None = None,
        extra: dict[str, str] | None = None,
    ) -> Receipt:
        for key, value in (placeholders or {}).items():
            command = command.replace(key, shlex.quote(value))

        if not command and not self._registry.mock_mode:
            logger.debug("Hook %s is not configured, skipping", hook_id)
            return Receipt.skip(adapter=self._adapter, action_id=hook_id, reason="not configured")

        action = Action(
            id=hook_id,
            adapter=self._adapter,
            name=hook_id.replace("_", " "),
            params={"command": command, "timeout": self._hooks.timeout, **(extra or {})},
            target=target.value if target else None,
        )
        receipt = self._registry.execute_action(action, project_root=str(self._project_root))

        if receipt.failed:
            logger.warning("Hook %s failed: %s", hook_id, receipt.error)
        else:
            logger.debug("Hook %s %s (%dms)", hook_id, receipt.status, receipt.duration_ms)
        return receipt
