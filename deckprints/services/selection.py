"""
Selection tracker.

Counts how many copies of each card the user has picked, bounded by the
quantity the deck list requires.
"""

from collections.abc import Mapping


class SelectionTracker:
    """
    Per-card selection counters.

    Invariant: 0 <= selected(name) <= required(name) for every card name.
    Cards not in the deck list have a required quantity of 0, so they can
    never be selected.
    """

    def __init__(self, required: Mapping[str, int] | None = None) -> None:
        self._required: dict[str, int] = dict(required or {})
        self._selected: dict[str, int] = {}

    def set_required(self, required: Mapping[str, int]) -> None:
        """Replace the required quantities and drop all selections."""
        self._required = dict(required)
        self._selected.clear()

    def reset(self) -> None:
        """Drop all selections, keeping required quantities."""
        self._selected.clear()

    def get_selected(self, card_name: str) -> int:
        return self._selected.get(card_name, 0)

    def get_required(self, card_name: str) -> int:
        return self._required.get(card_name, 0)

    def increment(self, card_name: str) -> int:
        """Select one more copy unless the requirement is already met. Returns the new count."""
        current = self.get_selected(card_name)
        required = self.get_required(card_name)
        if current < required:
            self._selected[card_name] = min(current + 1, required)
        return self.get_selected(card_name)

    def decrement(self, card_name: str) -> int:
        """Unselect one copy, never going below zero. Returns the new count."""
        current = self.get_selected(card_name)
        if current > 0:
            self._selected[card_name] = current - 1
        return self.get_selected(card_name)

    def is_complete(self, card_name: str) -> bool:
        """True if every required copy of a card has been selected."""
        required = self.get_required(card_name)
        return required > 0 and self.get_selected(card_name) >= required
