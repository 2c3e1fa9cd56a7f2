"""
Health check endpoints.

/health is a liveness check. /ready checks the preference database and
reports the state of the shared Scryfall caches. Only the database
decides readiness.
"""

from typing import Annotated, Literal

from fastapi import APIRouter, Depends, Response, status
from pydantic import BaseModel
from sqlalchemy import text
from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.ext.asyncio import AsyncSession

from deckprints.api.dependencies import get_registry
from deckprints.db.database import get_session
from deckprints.services.session import SessionRegistry

router = APIRouter(tags=["health"])

CacheState = Literal["not_loaded", "loaded", "error"]


class HealthResponse(BaseModel):
    """Liveness response."""

    status: str


class ReadyResponse(BaseModel):
    """Readiness response with database and cache state."""

    status: str
    database: str
    set_metadata: CacheState
    symbols: CacheState
    sessions: int


def _cache_state(loaded: bool, error: str | None) -> CacheState:
    if error:
        return "error"
    return "loaded" if loaded else "not_loaded"


@router.get("/health", response_model=HealthResponse)
async def health() -> HealthResponse:
    """
    Liveness check.

    Does not check dependencies.
    """
    return HealthResponse(status="healthy")


@router.get(
    "/ready",
    response_model=ReadyResponse,
    responses={503: {"model": ReadyResponse}},
)
async def ready(
    response: Response,
    session: Annotated[AsyncSession, Depends(get_session)],
    registry: Annotated[SessionRegistry, Depends(get_registry)],
) -> ReadyResponse:
    """
    Readiness check.

    Returns 503 if the preference database is unavailable.
    """
    try:
        await session.execute(text("SELECT 1"))
        database = "connected"
    except SQLAlchemyError:
        response.status_code = status.HTTP_503_SERVICE_UNAVAILABLE
        database = "disconnected"

    set_metadata = registry.set_metadata
    return ReadyResponse(
        status="ready" if database == "connected" else "not ready",
        database=database,
        set_metadata=_cache_state(len(set_metadata) > 0, set_metadata.error),
        symbols=_cache_state(len(registry.symbols) > 0, registry.symbols.error),
        sessions=len(registry),
    )
