"""
Mana symbol endpoint.
"""

from typing import Annotated

from fastapi import APIRouter, Depends
from pydantic import BaseModel

from deckprints.api.dependencies import get_registry
from deckprints.models.failure import ServiceUnavailableError
from deckprints.services.session import SessionRegistry

router = APIRouter(tags=["symbols"])


class SymbolResponse(BaseModel):
    """A card symbol and its icon."""

    symbol: str
    svg_uri: str
    english: str
    represents_mana: bool
    cmc: float | None = None


@router.get("/symbols", response_model=list[SymbolResponse])
async def list_symbols(
    registry: Annotated[SessionRegistry, Depends(get_registry)],
) -> list[SymbolResponse]:
    """
    All known card symbols.

    Loaded from Scryfall on first request. Returns 503 if they could
    not be loaded.
    """
    symbols = registry.symbols
    await symbols.load()

    if symbols.error and not len(symbols):
        raise ServiceUnavailableError(symbols.error)

    return [
        SymbolResponse(
            symbol=s.symbol,
            svg_uri=s.svg_uri,
            english=s.english,
            represents_mana=s.represents_mana,
            cmc=s.cmc,
        )
        for s in symbols.all()
    ]
