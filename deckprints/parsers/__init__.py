from deckprints.parsers.deck_list import entries_to_quantities, is_basic_land, parse_deck_list
from deckprints.parsers.scryfall import (
    printing_from_scryfall,
    set_from_scryfall,
    symbol_from_scryfall,
)

__all__ = [
    "entries_to_quantities",
    "is_basic_land",
    "parse_deck_list",
    "printing_from_scryfall",
    "set_from_scryfall",
    "symbol_from_scryfall",
]
