"""
DeckPrints services.

Printing lookup, grouping and selection tracking for deck lists.
"""

from deckprints.services.aggregation import SetGroup, group_by_set
from deckprints.services.preferences import (
    DatabasePreferenceStore,
    InMemoryPreferenceStore,
    PreferenceStore,
    load_selected_set_types,
    save_selected_set_types,
)
from deckprints.services.printing_resolver import (
    PrintingCollection,
    PrintingResolver,
    ResolutionResult,
)
from deckprints.services.scryfall_client import FetchError, NotFoundError, ScryfallClient
from deckprints.services.selection import SelectionTracker
from deckprints.services.session import DeckSession, SessionRegistry
from deckprints.services.set_metadata import SetMetadataCache
from deckprints.services.symbols import SymbolCache, split_mana_cost

__all__ = [
    "DatabasePreferenceStore",
    "DeckSession",
    "FetchError",
    "InMemoryPreferenceStore",
    "NotFoundError",
    "PreferenceStore",
    "PrintingCollection",
    "PrintingResolver",
    "ResolutionResult",
    "ScryfallClient",
    "SelectionTracker",
    "SessionRegistry",
    "SetGroup",
    "SetMetadataCache",
    "SymbolCache",
    "group_by_set",
    "load_selected_set_types",
    "save_selected_set_types",
    "split_mana_cost",
]
