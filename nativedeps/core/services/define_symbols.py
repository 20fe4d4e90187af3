"""
Scripting define symbols — token-level edits of a delimited symbol list.

The host keeps one semicolon-delimited string per platform group. It is
split into tokens, the one symbol being toggled is inserted or removed,
and the tokens are re-joined. Every other token is written back as it
was read, duplicates and empty entries included.
"""

from __future__ import annotations

import logging
from abc import ABC, abstractmethod
from collections.abc import Iterable, Iterator

from nativedeps.core.models.state import BuildState

logger = logging.getLogger(__name__)

SYMBOL_DELIMITER = ";"
IOS_SUPPORT_SYMBOL = "ARCORE_EXTENSIONS_IOS_SUPPORT"


class DefineSymbolList:
    """Tokens of a delimited define-symbol string, in their original order."""

    def __init__(self, symbols: Iterable[str] = ()):
        self._symbols = list(symbols)

    @classmethod
    def parse(cls, raw: str | None) -> DefineSymbolList:
        return cls(raw.split(SYMBOL_DELIMITER) if raw else ())

    def add(self, symbol: str) -> bool:
        """Append ``symbol``; False if it was already present."""
        if symbol in self:
            return False
        self._symbols.append(symbol)
        return True

    def remove(self, symbol: str) -> bool:
        """Drop every occurrence of ``symbol``; False if there was none."""
        if symbol not in self:
            return False
        self._symbols = [token for token in self._symbols if token.strip() != symbol]
        return True

    def __contains__(self, symbol: object) -> bool:
        return any(token.strip() == symbol for token in self._symbols)

    def __iter__(self) -> Iterator[str]:
        return iter(self._symbols)

    def __len__(self) -> int:
        return len(self._symbols)

    def __str__(self) -> str:
        return SYMBOL_DELIMITER.join(self._symbols)


class DefineSymbolStore(ABC):
    """Where the host keeps its per-group symbol strings."""

    @abstractmethod
    def get(self, group: str) -> str:
        """Raw delimited symbol string for ``group`` ("" when unset)."""

    @abstractmethod
    def set(self, group: str, value: str) -> None:
        """Replace the symbol string for ``group``."""


class StateSymbolStore(DefineSymbolStore):
    """Symbol strings kept in the persisted BuildState."""

    def __init__(self, state: BuildState):
        self._state = state

    def get(self, group: str) -> str:
        return self._state.define_symbols.get(group, "")

    def set(self, group: str, value: str) -> None:
        self._state.define_symbols[group] = value


def update_define_symbol(
    store: DefineSymbolStore,
    group: str,
    symbol: str,
    enabled: bool,
) -> bool:
    """Make ``symbol`` present iff ``enabled``. Returns True if the list changed."""
    symbols = DefineSymbolList.parse(store.get(group))

    if enabled and symbol not in symbols:
        logger.info("Adding %s define symbol.", symbol)
        symbols.add(symbol)
    elif not enabled and symbol in symbols:
        logger.info("Removing %s define symbol.", symbol)
        symbols.remove(symbol)
    else:
        return False

    store.set(group, str(symbols))
    return True
