from collections.abc import Callable
from typing import Any

import pytest

from deckprints.services.scryfall_client import FetchError, NotFoundError

CardRecordFactory = Callable[..., dict[str, Any]]


class FakeScryfall:
    """In-memory stand-in for ScryfallClient.

    printings maps card name -> records, or an exception to raise.
    Unknown names raise NotFoundError, like the real API's 404.
    """

    def __init__(self) -> None:
        self.printings: dict[str, list[dict[str, Any]] | Exception] = {}
        self.sets: list[dict[str, Any]] | Exception = []
        self.symbols: list[dict[str, Any]] | Exception = []
        self.search_calls: list[str] = []
        self.set_calls = 0
        self.symbol_calls = 0

    async def search_printings(self, card_name: str) -> list[dict[str, Any]]:
        self.search_calls.append(card_name)
        result = self.printings.get(card_name)
        if result is None:
            raise NotFoundError(f"No cards found matching {card_name}")
        if isinstance(result, Exception):
            raise result
        return list(result)

    async def list_sets(self) -> list[dict[str, Any]]:
        self.set_calls += 1
        if isinstance(self.sets, Exception):
            raise self.sets
        return list(self.sets)

    async def list_symbols(self) -> list[dict[str, Any]]:
        self.symbol_calls += 1
        if isinstance(self.symbols, Exception):
            raise self.symbols
        return list(self.symbols)


@pytest.fixture
def card_record() -> CardRecordFactory:
    """Factory for Scryfall card objects."""

    def _make(
        name: str = "Lightning Bolt",
        set_code: str = "lea",
        set_name: str = "Limited Edition Alpha",
        collector_number: str = "161",
        **overrides: Any,
    ) -> dict[str, Any]:
        record: dict[str, Any] = {
            "object": "card",
            "name": name,
            "set": set_code,
            "set_name": set_name,
            "collector_number": collector_number,
            "mana_cost": "{R}",
            "color_identity": ["R"],
            "type_line": "Instant",
            "rarity": "common",
            "set_type": "core",
            "released_at": "1993-08-05",
        }
        record.update(overrides)
        return record

    return _make


@pytest.fixture
def sample_sets() -> list[dict[str, Any]]:
    """Sample Scryfall set objects."""
    return [
        {
            "object": "set",
            "code": "lea",
            "name": "Limited Edition Alpha",
            "set_type": "core",
            "released_at": "1993-08-05",
            "icon_svg_uri": "https://svgs.scryfall.io/sets/lea.svg",
        },
        {
            "object": "set",
            "code": "m11",
            "name": "Magic 2011",
            "set_type": "core",
            "released_at": "2010-07-16",
            "icon_svg_uri": "https://svgs.scryfall.io/sets/m11.svg",
        },
        {
            "object": "set",
            "code": "2x2",
            "name": "Double Masters 2022",
            "set_type": "masters",
            "released_at": "2022-07-08",
            "icon_svg_uri": "https://svgs.scryfall.io/sets/2x2.svg",
        },
    ]


@pytest.fixture
def sample_symbols() -> list[dict[str, Any]]:
    """Sample Scryfall card symbol objects."""
    return [
        {
            "object": "card_symbol",
            "symbol": "{R}",
            "svg_uri": "https://svgs.scryfall.io/card-symbols/R.svg",
            "english": "one red mana",
            "represents_mana": True,
            "appears_in_mana_costs": True,
            "cmc": 1.0,
            "loose_variant": "R",
            "transposable": False,
        },
        {
            "object": "card_symbol",
            "symbol": "{U}",
            "svg_uri": "https://svgs.scryfall.io/card-symbols/U.svg",
            "english": "one blue mana",
            "represents_mana": True,
            "appears_in_mana_costs": True,
            "cmc": 1.0,
            "loose_variant": "U",
            "transposable": False,
        },
        {
            "object": "card_symbol",
            "symbol": "{2}",
            "svg_uri": "https://svgs.scryfall.io/card-symbols/2.svg",
            "english": "two generic mana",
            "represents_mana": True,
            "appears_in_mana_costs": True,
            "cmc": 2.0,
            "loose_variant": "2",
            "transposable": False,
        },
    ]


@pytest.fixture
def fake_scryfall(sample_sets: list[dict[str, Any]]) -> FakeScryfall:
    """Fake provider with set data loaded and no printings."""
    fake = FakeScryfall()
    fake.sets = sample_sets
    return fake


@pytest.fixture
def fetch_error() -> FetchError:
    return FetchError("Scryfall is down for maintenance")


@pytest.fixture
def sample_deck_list() -> str:
    """Sample deck list for testing."""
    return """// Burn
4 Lightning Bolt
2x Counterspell
Sol Ring

12 Mountain
Plains"""
