"""
Shared FastAPI dependencies.

Deck sessions live in one in-process registry. Tests replace it through
app.dependency_overrides[get_registry].

Only requests that change a session create one: read-only routes use
find_deck_session and answer for a missing session as if it were empty.
"""

from typing import Annotated

from fastapi import Depends
from sqlalchemy.ext.asyncio import AsyncSession

from deckprints.db.database import get_session
from deckprints.services.preferences import DatabasePreferenceStore
from deckprints.services.session import DeckSession, SessionRegistry

_registry: SessionRegistry | None = None


def get_registry() -> SessionRegistry:
    """Process-wide session registry, created on first use."""
    global _registry
    if _registry is None:
        _registry = SessionRegistry()
    return _registry


async def get_deck_session(
    session_id: str,
    registry: Annotated[SessionRegistry, Depends(get_registry)],
    db: Annotated[AsyncSession, Depends(get_session)],
) -> DeckSession:
    """
    Deck session for the session_id path parameter, created if missing.

    New sessions start with the persisted set type selection.
    """
    deck_session, created = registry.get_or_create(session_id)
    if created:
        await deck_session.load_preferences(DatabasePreferenceStore(db, namespace=session_id))
    return deck_session


async def find_deck_session(
    session_id: str,
    registry: Annotated[SessionRegistry, Depends(get_registry)],
) -> DeckSession | None:
    """Existing deck session for the session_id path parameter, or None."""
    return registry.get(session_id)
