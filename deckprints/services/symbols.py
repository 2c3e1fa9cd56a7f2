"""
Mana symbol cache.

Loads Scryfall's symbology once so mana costs can be rendered as icons.
"""

import logging
import re
from typing import Any, Protocol

from deckprints.models.card import ManaSymbol
from deckprints.parsers.scryfall import symbol_from_scryfall
from deckprints.services.scryfall_client import FetchError

logger = logging.getLogger(__name__)

# Pattern: "{2}", "{R}", "{W/U}", "{2/W}"
SYMBOL_PATTERN = re.compile(r"\{[^}]+\}")


class SymbolProvider(Protocol):
    async def list_symbols(self) -> list[dict[str, Any]]: ...


def split_mana_cost(mana_cost: str) -> list[str]:
    """
    Split a mana cost into its symbols.

    "{2}{R}{R}" -> ["{2}", "{R}", "{R}"]. Faces of multi-faced cards
    ("{1}{U} // {3}{U}") are flattened in order.
    """
    return SYMBOL_PATTERN.findall(mana_cost or "")


class SymbolCache:
    """Card symbols keyed by their text form ("{R}")."""

    def __init__(self, provider: SymbolProvider) -> None:
        self.provider = provider
        self.is_loading = False
        self.error: str | None = None
        self._symbols: dict[str, ManaSymbol] = {}

    async def load(self) -> None:
        """Fetch symbols unless already loaded or loading."""
        if self._symbols or self.is_loading:
            return

        self.is_loading = True
        self.error = None

        try:
            records = await self.provider.list_symbols()
            for record in records:
                symbol = symbol_from_scryfall(record)
                self._symbols[symbol.symbol] = symbol
        except FetchError as e:
            logger.error("Error loading symbols: %s", e)
            self.error = "Failed to load mana symbols"
        finally:
            self.is_loading = False

    def get(self, symbol: str) -> ManaSymbol | None:
        return self._symbols.get(symbol)

    def all(self) -> list[ManaSymbol]:
        return list(self._symbols.values())

    def symbols_for(self, mana_cost: str) -> list[ManaSymbol]:
        """Known symbols of a mana cost, in order. Unknown tokens are omitted."""
        found = (self._symbols.get(token) for token in split_mana_cost(mana_cost))
        return [symbol for symbol in found if symbol is not None]

    def __len__(self) -> int:
        return len(self._symbols)
