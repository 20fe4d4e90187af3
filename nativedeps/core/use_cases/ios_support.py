"""
iOS support use case — flip the support symbol and base template.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass
from pathlib import Path

from nativedeps.adapters.registry import AdapterRegistry
from nativedeps.core.errors import NativeDepsError
from nativedeps.core.persistence.state_file import save_state
from nativedeps.core.services.define_symbols import StateSymbolStore
from nativedeps.core.services.ios_deps import IOSSupportResult
from nativedeps.core.use_cases.build import open_build_context

logger = logging.getLogger(__name__)


@dataclass
class IOSSupportUpdate:
    support: IOSSupportResult | None = None
    symbols: str = ""
    error: str | None = None

    def to_dict(self) -> dict:
        if self.error:
            return {"error": self.error}
        return {
            "support": self.support.to_dict() if self.support else None,
            "symbols": self.symbols,
        }


def set_ios_support(
    enabled: bool,
    config_path: Path | None = None,
    adapters: AdapterRegistry | None = None,
    mock_mode: bool = False,
) -> IOSSupportUpdate:
    """Enable or disable iOS support and persist the define-symbol list."""
    update = IOSSupportUpdate()
    try:
        ctx = open_build_context(config_path, adapters, mock_mode)
        group = ctx.project.ios.symbol_group
        store = StateSymbolStore(ctx.state)
        update.support = ctx.session.ios.set_ios_support_enabled(enabled, store, group)
        update.symbols = store.get(group)
        save_state(ctx.state, ctx.state_path)
    except (NativeDepsError, OSError) as e:
        logger.error("Updating iOS support failed: %s", e)
        update.error = str(e)
    return update
