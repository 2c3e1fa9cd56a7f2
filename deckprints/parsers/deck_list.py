"""
Parser for plain-text deck lists.

Format, one card per line:
    [<quantity>[x] ]<card name>

Example:
    4 Lightning Bolt
    2x Counterspell
    Sol Ring
    // comments and blank lines are ignored

Basic lands are dropped: they are not worth tracking printings for.

A leading number is always read as the quantity, so a name that starts
with digits needs an explicit one: "1996 World Champion" parses as 1996
copies of "World Champion", while "1 1996 World Champion" is one copy.
"""

import re

from deckprints.models.card import DeckEntry

# Pattern: "4 Lightning Bolt", "4x Lightning Bolt" or "Lightning Bolt"
# Groups: (quantity or None, card_name)
DECK_LINE_PATTERN = re.compile(r"^(?:(\d+)x?\s+)?(.+)$")

COMMENT_PREFIX = "//"

BASIC_LANDS = frozenset({"plains", "island", "swamp", "mountain", "forest", "wastes"})


def is_basic_land(card_name: str) -> bool:
    """Check a card name against the basic land list (case-insensitive)."""
    return card_name.strip().lower() in BASIC_LANDS


def parse_deck_list(text: str) -> list[DeckEntry]:
    """
    Parse deck list text into DeckEntry objects.

    Args:
        text: Raw deck list (clipboard paste)

    Returns:
        Entries in first-seen order. A card named on several lines appears
        once, with the quantity from its last line.

    Raises:
        TypeError: If text is not a string
    """
    if not isinstance(text, str):
        raise TypeError(f"Deck list must be text, got {type(text).__name__}")

    quantities: dict[str, int] = {}

    for line in text.split("\n"):
        line = line.strip()

        if not line or line.startswith(COMMENT_PREFIX):
            continue

        match = DECK_LINE_PATTERN.match(line)
        if not match:
            continue

        quantity_str, name = match.groups()
        name = name.strip()
        quantity = int(quantity_str) if quantity_str else 1

        # "0 Card" requests nothing
        if quantity < 1 or not name or is_basic_land(name):
            continue

        quantities[name] = quantity

    return [DeckEntry(card_name=name, required_quantity=qty) for name, qty in quantities.items()]


def entries_to_quantities(entries: list[DeckEntry]) -> dict[str, int]:
    """Map card name -> required quantity."""
    return {entry.card_name: entry.required_quantity for entry in entries}
