"""
Preference API endpoints.

The set type filter is persisted per session id; other view settings
are session-only (see /sessions/{session_id}/view).
"""

from typing import Annotated

from fastapi import APIRouter, Depends
from pydantic import BaseModel, Field
from sqlalchemy.ext.asyncio import AsyncSession

from deckprints.api.dependencies import find_deck_session, get_deck_session
from deckprints.config import DEFAULT_SET_TYPES
from deckprints.db.database import get_session
from deckprints.models.failure import InvalidInputError
from deckprints.services.preferences import DatabasePreferenceStore, load_selected_set_types
from deckprints.services.session import DeckSession

router = APIRouter(prefix="/sessions/{session_id}/preferences", tags=["preferences"])


class SetTypesResponse(BaseModel):
    """Response model for the set type filter."""

    session_id: str
    set_types: list[str] = Field(default_factory=list)
    defaults: list[str] = Field(default_factory=lambda: list(DEFAULT_SET_TYPES))


class SetTypesUpdateRequest(BaseModel):
    """Request model for changing the set type filter."""

    set_types: list[str] = Field(
        ...,
        description="Set types to show (expansion, core, masters, ...)",
        examples=[["expansion", "core"]],
    )


@router.get("/set-types", response_model=SetTypesResponse)
async def get_set_types(
    session_id: str,
    deck_session: Annotated[DeckSession | None, Depends(find_deck_session)],
    db: Annotated[AsyncSession, Depends(get_session)],
) -> SetTypesResponse:
    """
    Set types currently shown in the grouped view.

    Without a live session the persisted selection is read directly.
    """
    if deck_session is not None:
        set_types = deck_session.preferences.selected_set_types
    else:
        set_types = await load_selected_set_types(DatabasePreferenceStore(db, namespace=session_id))

    return SetTypesResponse(session_id=session_id, set_types=sorted(set_types))


@router.put("/set-types", response_model=SetTypesResponse)
async def update_set_types(
    session_id: str,
    request: SetTypesUpdateRequest,
    deck_session: Annotated[DeckSession, Depends(get_deck_session)],
    db: Annotated[AsyncSession, Depends(get_session)],
) -> SetTypesResponse:
    """Change and persist the set types shown in the grouped view."""
    set_types = {set_type.strip() for set_type in request.set_types if set_type.strip()}
    if not set_types:
        raise InvalidInputError(
            "Select at least one set type",
            suggestion="Choose from: " + ", ".join(DEFAULT_SET_TYPES),
        )

    store = DatabasePreferenceStore(db, namespace=session_id)
    await deck_session.set_selected_set_types(set_types, store)

    return SetTypesResponse(session_id=session_id, set_types=sorted(set_types))
