from deckprints.db.database import get_session, init_db
from deckprints.db.operations import (
    delete_preference,
    get_preference,
    get_preference_row,
    set_preference,
)

__all__ = [
    "delete_preference",
    "get_preference",
    "get_preference_row",
    "get_session",
    "init_db",
    "set_preference",
]
