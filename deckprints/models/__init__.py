from deckprints.models.card import CardPrinting, DeckEntry, ManaSymbol, SetMetadata
from deckprints.models.failure import (
    FailureDetail,
    FailureKind,
    InvalidInputError,
    KnownError,
    ResolutionInProgressError,
    ServiceUnavailableError,
)
from deckprints.models.preferences import CardOrder, SetOrder, ViewPreferences

__all__ = [
    "CardOrder",
    "CardPrinting",
    "DeckEntry",
    "FailureDetail",
    "FailureKind",
    "InvalidInputError",
    "KnownError",
    "ManaSymbol",
    "ResolutionInProgressError",
    "ServiceUnavailableError",
    "SetMetadata",
    "SetOrder",
    "ViewPreferences",
]
