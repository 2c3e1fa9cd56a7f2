"""
Grouped printing view.

Projects accumulated printings into set groups for display:
filter by set type and explicit set selection, keep one printing per
card per set, order cards within a set, then order the sets.

Pure functions only: the same printings and preferences always produce
the same groups.
"""

from collections.abc import Callable, Iterable
from dataclasses import dataclass, field
from typing import Any

from deckprints.models.card import CardPrinting
from deckprints.models.preferences import CardOrder, SetOrder, ViewPreferences
from deckprints.services.collation import collation_key
from deckprints.services.set_metadata import SetMetadataCache

COLOR_ORDER = ("W", "U", "B", "R", "G", "C")

RARITY_ORDER = ("mythic", "rare", "uncommon", "common", "special")


@dataclass
class SetGroup:
    """Printings from one set, ready for display."""

    set_name: str
    icon: str = ""
    cards: list[CardPrinting] = field(default_factory=list)

    @property
    def latest_release(self) -> str:
        """Most recent release date among the cards (ISO dates sort as text)."""
        return max((card.release_date for card in self.cards), default="")


def color_bucket(printing: CardPrinting) -> int:
    """Position of a printing's first color identity symbol; colorless last."""
    first = printing.color_identity[0] if printing.color_identity else "C"
    return COLOR_ORDER.index(first) if first in COLOR_ORDER else len(COLOR_ORDER)


def rarity_rank(printing: CardPrinting) -> int:
    """Position in RARITY_ORDER; unknown rarities sort last."""
    rarity = printing.rarity.lower()
    return RARITY_ORDER.index(rarity) if rarity in RARITY_ORDER else len(RARITY_ORDER)


def _name_key(printing: CardPrinting) -> tuple[Any, ...]:
    return (collation_key(printing.card_name),)


def _color_key(printing: CardPrinting) -> tuple[Any, ...]:
    return (color_bucket(printing), collation_key(printing.card_name))


def _type_key(printing: CardPrinting) -> tuple[Any, ...]:
    return (collation_key(printing.type_line), collation_key(printing.card_name))


def _rarity_key(printing: CardPrinting) -> tuple[Any, ...]:
    return (rarity_rank(printing), collation_key(printing.card_name))


CARD_SORT_KEYS: dict[CardOrder, Callable[[CardPrinting], tuple[Any, ...]]] = {
    CardOrder.NAME: _name_key,
    CardOrder.COLOR: _color_key,
    CardOrder.TYPE: _type_key,
    CardOrder.RARITY: _rarity_key,
}


def filter_printings(
    printings: Iterable[CardPrinting], preferences: ViewPreferences
) -> list[CardPrinting]:
    """Keep printings whose set type is selected and whose set passes the set selection."""
    return [p for p in printings if preferences.includes(p.set_type, p.set_code)]


def group_printings(printings: Iterable[CardPrinting]) -> dict[str, list[CardPrinting]]:
    """
    Group printings by set name, in first-seen order.

    Only the first printing of each card name is kept per set.
    """
    groups: dict[str, list[CardPrinting]] = {}
    seen: dict[str, set[str]] = {}

    for printing in printings:
        cards = groups.setdefault(printing.set_name, [])
        names = seen.setdefault(printing.set_name, set())
        if printing.card_name in names:
            continue
        names.add(printing.card_name)
        cards.append(printing)

    return groups


def sort_cards(cards: Iterable[CardPrinting], card_order: CardOrder) -> list[CardPrinting]:
    """Order cards within a set."""
    return sorted(cards, key=CARD_SORT_KEYS[card_order])


def sort_groups(groups: Iterable[SetGroup], set_order: SetOrder) -> list[SetGroup]:
    """
    Order set groups.

    RELEASE_DATE: newest first.
    CARD_COUNT: most cards first, then set name.
    """
    if set_order == SetOrder.CARD_COUNT:
        return sorted(groups, key=lambda g: (-len(g.cards), collation_key(g.set_name)))
    return sorted(groups, key=lambda g: g.latest_release, reverse=True)


def group_by_set(
    printings: Iterable[CardPrinting],
    preferences: ViewPreferences,
    set_metadata: SetMetadataCache | None = None,
) -> list[SetGroup]:
    """
    Build the grouped printing view.

    Args:
        printings: Accumulated printings (not modified)
        preferences: Filter and ordering preferences
        set_metadata: Source of set icons; icons are empty without it

    Returns:
        Ordered set groups, each with its ordered cards
    """
    grouped = group_printings(filter_printings(printings, preferences))

    groups = []
    for set_name, cards in grouped.items():
        icon = set_metadata.icon_for(cards[0].set_code) if set_metadata is not None else ""
        groups.append(
            SetGroup(
                set_name=set_name,
                icon=icon,
                cards=sort_cards(cards, preferences.card_order),
            )
        )

    return sort_groups(groups, preferences.set_order)
