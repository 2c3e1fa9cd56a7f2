from deckprints.api.deck import router as deck_router
from deckprints.api.health import router as health_router
from deckprints.api.preferences import router as preferences_router
from deckprints.api.symbols import router as symbols_router

__all__ = [
    "deck_router",
    "health_router",
    "preferences_router",
    "symbols_router",
]
