"""
Deck session.

Ties the pieces together for one user working on one deck list:
parse the list, resolve printings, show them grouped by set and track
which copies have been picked.

Reentrancy: every method except load_printings()/submit() is synchronous
and safe to call while a resolution is running; readers simply see the
printings accumulated so far. Only one resolution may run at a time.
"""

import logging

from deckprints.config import settings
from deckprints.models.card import DeckEntry
from deckprints.models.failure import ResolutionInProgressError
from deckprints.models.preferences import CardOrder, SetOrder, ViewPreferences
from deckprints.parsers.deck_list import entries_to_quantities, parse_deck_list
from deckprints.services.aggregation import SetGroup, group_by_set
from deckprints.services.preferences import (
    PreferenceStore,
    load_selected_set_types,
    save_selected_set_types,
)
from deckprints.services.printing_resolver import (
    PrintingCollection,
    PrintingProvider,
    PrintingResolver,
    ResolutionResult,
)
from deckprints.services.scryfall_client import ScryfallClient
from deckprints.services.selection import SelectionTracker
from deckprints.services.set_metadata import SetMetadataCache
from deckprints.services.symbols import SymbolCache

logger = logging.getLogger(__name__)


class DeckSession:
    """State for one deck list: entries, printings, selections and view preferences."""

    def __init__(
        self,
        provider: PrintingProvider,
        set_metadata: SetMetadataCache | None = None,
        preferences: ViewPreferences | None = None,
    ) -> None:
        self.set_metadata = set_metadata
        self.resolver = PrintingResolver(provider, set_metadata)
        self.selection = SelectionTracker()
        self.preferences = preferences or ViewPreferences()
        self.entries: list[DeckEntry] = []
        self._set_error: str | None = None

    # --- Deck list ---

    @property
    def deck_list(self) -> dict[str, int]:
        """Required quantity by card name."""
        return entries_to_quantities(self.entries)

    @property
    def printings(self) -> PrintingCollection:
        return self.resolver.printings

    @property
    def is_loading(self) -> bool:
        return self.resolver.is_loading

    @property
    def error(self) -> str | None:
        """User-visible error from the last resolution, or the set data load it saw."""
        return self.resolver.error or self._set_error

    def add_deck_list(self, text: str) -> list[DeckEntry]:
        """
        Replace the deck list.

        Clears printings and selections, then parses the new list.
        Does not resolve printings; call load_printings() for that.
        """
        self.clear_all()
        self.entries = parse_deck_list(text)
        self.selection.set_required(self.deck_list)
        logger.info("Parsed %d deck entries", len(self.entries))
        return self.entries

    async def load_printings(self) -> ResolutionResult:
        """
        Resolve printings for the current deck list.

        Selections are reset: counters never carry over between runs.

        Raises:
            ResolutionInProgressError: If a run is already in flight
        """
        if self.resolver.is_loading:
            raise ResolutionInProgressError()
        self.selection.reset()
        self._set_error = None
        result = await self.resolver.resolve(self.entries)
        if not result.superseded and self.set_metadata is not None:
            self._set_error = self.set_metadata.error
        return result

    async def submit(self, text: str) -> ResolutionResult:
        """Parse a deck list and resolve its printings."""
        if self.resolver.is_loading:
            raise ResolutionInProgressError()
        self.add_deck_list(text)
        return await self.load_printings()

    def clear_all(self) -> None:
        """Forget the deck list, printings, selections and errors."""
        self.entries = []
        self._set_error = None
        self.resolver.reset()
        self.selection.set_required({})

    # --- Grouped view ---

    def grouped_by_set(self) -> list[SetGroup]:
        """Printings grouped by set under the current view preferences."""
        return group_by_set(self.printings, self.preferences, self.set_metadata)

    def set_view(
        self,
        set_order: SetOrder | None = None,
        card_order: CardOrder | None = None,
        selected_sets: set[str] | None = None,
    ) -> ViewPreferences:
        """Update session-only view preferences. None leaves a value unchanged."""
        if set_order is not None:
            self.preferences.set_order = set_order
        if card_order is not None:
            self.preferences.card_order = card_order
        if selected_sets is not None:
            self.preferences.selected_sets = set(selected_sets)
        return self.preferences

    def toggle_set(self, set_code: str) -> set[str]:
        """Add or remove a set from the explicit set selection."""
        selected = self.preferences.selected_sets
        if set_code in selected:
            selected.remove(set_code)
        else:
            selected.add(set_code)
        return selected

    def clear_set_selection(self) -> None:
        self.preferences.selected_sets.clear()

    async def load_preferences(self, store: PreferenceStore) -> set[str]:
        """Load the persisted set type selection into this session."""
        self.preferences.selected_set_types = await load_selected_set_types(store)
        return self.preferences.selected_set_types

    async def set_selected_set_types(self, set_types: set[str], store: PreferenceStore) -> None:
        """Change and persist the set type selection."""
        self.preferences.selected_set_types = set(set_types)
        await save_selected_set_types(store, self.preferences.selected_set_types)

    # --- Selections ---

    def increment_card(self, card_name: str) -> int:
        return self.selection.increment(card_name)

    def decrement_card(self, card_name: str) -> int:
        return self.selection.decrement(card_name)

    def get_card_count(self, card_name: str) -> int:
        return self.selection.get_selected(card_name)

    def get_required_count(self, card_name: str) -> int:
        return self.selection.get_required(card_name)

    def is_card_complete(self, card_name: str) -> bool:
        return self.selection.is_complete(card_name)


class SessionRegistry:
    """
    In-process deck sessions keyed by session id.

    All sessions share one provider client and one set metadata cache,
    so set data is fetched once per process. At most max_sessions are
    kept; creating one more drops the least recently used idle session.
    """

    def __init__(
        self,
        client: ScryfallClient | None = None,
        max_sessions: int | None = None,
    ) -> None:
        self.client = client or ScryfallClient()
        self.set_metadata = SetMetadataCache(self.client)
        self.symbols = SymbolCache(self.client)
        self.max_sessions = settings.max_sessions if max_sessions is None else max_sessions
        # Insertion order doubles as recency order
        self._sessions: dict[str, DeckSession] = {}

    def get(self, session_id: str) -> DeckSession | None:
        session = self._sessions.pop(session_id, None)
        if session is not None:
            self._sessions[session_id] = session
        return session

    def create(self, session_id: str) -> DeckSession:
        session = DeckSession(self.client, self.set_metadata)
        self._sessions.pop(session_id, None)
        self._sessions[session_id] = session
        self._evict()
        return session

    def get_or_create(self, session_id: str) -> tuple[DeckSession, bool]:
        """
        Get existing session or create new one.

        Returns:
            Tuple of (session, created) where created is True if new.
        """
        session = self.get(session_id)
        if session:
            return session, False
        return self.create(session_id), True

    def remove(self, session_id: str) -> bool:
        return self._sessions.pop(session_id, None) is not None

    def _evict(self) -> None:
        """Drop least recently used sessions over the limit. Loading sessions are kept."""
        excess = len(self._sessions) - self.max_sessions
        if excess <= 0:
            return
        idle = [sid for sid, session in self._sessions.items() if not session.is_loading]
        for session_id in idle[:excess]:
            del self._sessions[session_id]
            logger.info("Evicted idle deck session %s", session_id)

    def __len__(self) -> int:
        return len(self._sessions)
