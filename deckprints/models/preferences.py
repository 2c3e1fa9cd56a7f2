from dataclasses import dataclass, field
from enum import Enum

from deckprints.config import DEFAULT_SET_TYPES


class SetOrder(str, Enum):
    """How set groups are ordered against each other."""

    RELEASE_DATE = "releaseDate"
    CARD_COUNT = "cardCount"


class CardOrder(str, Enum):
    """How cards are ordered inside a set group."""

    NAME = "name"
    COLOR = "color"
    TYPE = "type"
    RARITY = "rarity"


@dataclass
class ViewPreferences:
    """
    Filter and sort preferences for the grouped printing view.

    Attributes:
        selected_set_types: Set types to show (persisted)
        selected_sets: Set codes to restrict to; empty means no restriction
        set_order: Ordering of set groups
        card_order: Ordering of cards within a group
    """

    selected_set_types: set[str] = field(default_factory=lambda: set(DEFAULT_SET_TYPES))
    selected_sets: set[str] = field(default_factory=set)
    set_order: SetOrder = SetOrder.RELEASE_DATE
    card_order: CardOrder = CardOrder.NAME

    def includes(self, set_type: str, set_code: str) -> bool:
        """True if a printing from this set passes the filter."""
        if set_type not in self.selected_set_types:
            return False
        return not self.selected_sets or set_code in self.selected_sets
