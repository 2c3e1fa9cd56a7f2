"""
Deck session API endpoints.

Submit a deck list, browse its printings grouped by set and track which
copies have been picked.
"""

from typing import Annotated

from fastapi import APIRouter, Depends
from pydantic import BaseModel, Field

from deckprints.api.dependencies import find_deck_session, get_deck_session, get_registry
from deckprints.models.card import CardPrinting
from deckprints.models.failure import InvalidInputError, ResolutionInProgressError
from deckprints.models.preferences import CardOrder, SetOrder, ViewPreferences
from deckprints.services.session import DeckSession, SessionRegistry
from deckprints.services.symbols import SymbolCache

router = APIRouter(prefix="/sessions/{session_id}", tags=["deck"])


class DeckSubmitRequest(BaseModel):
    """Request model for submitting a deck list."""

    text: str = Field(
        ...,
        description="Raw deck list, one '<quantity> <card name>' per line",
        examples=["4 Lightning Bolt\n2x Counterspell\nSol Ring"],
    )
    resolve: bool = Field(
        default=True,
        description="Look up printings right away",
    )


class DeckEntryResponse(BaseModel):
    """A deck entry with its selection progress."""

    card_name: str
    required: int
    selected: int = 0
    complete: bool = False


class DeckResponse(BaseModel):
    """Response model for deck state."""

    session_id: str
    entries: list[DeckEntryResponse] = Field(default_factory=list)
    printing_count: int = 0
    is_loading: bool = False
    skipped: list[str] = Field(
        default_factory=list,
        description="Cards with no known printings (only on submit)",
    )
    error: str | None = None


class PrintingResponse(BaseModel):
    """A single printing."""

    set_name: str
    set_code: str
    card_name: str
    mana_cost: str
    mana_symbols: list[str] = Field(
        default_factory=list,
        description="SVG URIs of the mana cost symbols, in order",
    )
    color_identity: list[str]
    type_line: str
    rarity: str
    collector_number: str
    set_type: str
    release_date: str


class SetGroupResponse(BaseModel):
    """Printings from one set."""

    set_name: str
    icon: str
    cards: list[PrintingResponse]


class PrintingsResponse(BaseModel):
    """Response model for the grouped printing view."""

    session_id: str
    set_order: SetOrder
    card_order: CardOrder
    total_printings: int
    groups: list[SetGroupResponse] = Field(default_factory=list)
    is_loading: bool = False
    error: str | None = None


class ViewUpdateRequest(BaseModel):
    """Request model for changing the grouped view. Omitted fields are unchanged."""

    set_order: SetOrder | None = None
    card_order: CardOrder | None = None
    selected_sets: list[str] | None = Field(
        default=None,
        description="Set codes to restrict to; empty list removes the restriction",
    )


class ViewResponse(BaseModel):
    """Current session-only view preferences."""

    session_id: str
    set_order: SetOrder
    card_order: CardOrder
    selected_sets: list[str]


class SelectionResponse(BaseModel):
    """Selection progress for one card."""

    card_name: str
    selected: int
    required: int
    complete: bool = False


def _deck_response(
    session_id: str,
    deck_session: DeckSession | None,
    skipped: list[str] | None = None,
) -> DeckResponse:
    if deck_session is None:
        return DeckResponse(session_id=session_id)

    return DeckResponse(
        session_id=session_id,
        entries=[
            DeckEntryResponse(
                card_name=entry.card_name,
                required=entry.required_quantity,
                selected=deck_session.get_card_count(entry.card_name),
                complete=deck_session.is_card_complete(entry.card_name),
            )
            for entry in deck_session.entries
        ],
        printing_count=len(deck_session.printings),
        is_loading=deck_session.is_loading,
        skipped=skipped or [],
        error=deck_session.error,
    )


def _selection_response(card_name: str, deck_session: DeckSession | None) -> SelectionResponse:
    if deck_session is None:
        return SelectionResponse(card_name=card_name, selected=0, required=0)

    return SelectionResponse(
        card_name=card_name,
        selected=deck_session.get_card_count(card_name),
        required=deck_session.get_required_count(card_name),
        complete=deck_session.is_card_complete(card_name),
    )


def _printing_response(printing: CardPrinting, symbols: SymbolCache) -> PrintingResponse:
    return PrintingResponse(
        set_name=printing.set_name,
        set_code=printing.set_code,
        card_name=printing.card_name,
        mana_cost=printing.mana_cost,
        mana_symbols=[s.svg_uri for s in symbols.symbols_for(printing.mana_cost)],
        color_identity=list(printing.color_identity),
        type_line=printing.type_line,
        rarity=printing.rarity,
        collector_number=printing.collector_number,
        set_type=printing.set_type,
        release_date=printing.release_date,
    )


@router.put("/deck", response_model=DeckResponse)
async def submit_deck(
    session_id: str,
    request: DeckSubmitRequest,
    deck_session: Annotated[DeckSession, Depends(get_deck_session)],
    registry: Annotated[SessionRegistry, Depends(get_registry)],
) -> DeckResponse:
    """
    Replace the session's deck list.

    Clears previous printings and selections. With resolve=true, every
    printing of every card is looked up before responding. A lookup
    failure is reported in `error`; printings found before it are kept.
    """
    if not request.text.strip():
        raise InvalidInputError(
            "Deck list cannot be empty",
            suggestion="Paste one '<quantity> <card name>' per line.",
        )

    if deck_session.is_loading:
        raise ResolutionInProgressError(session_id)

    if not request.resolve:
        deck_session.add_deck_list(request.text)
        return _deck_response(session_id, deck_session)

    await registry.symbols.load()
    result = await deck_session.submit(request.text)

    return _deck_response(session_id, deck_session, skipped=result.skipped)


@router.get("/deck", response_model=DeckResponse)
async def get_deck(
    session_id: str,
    deck_session: Annotated[DeckSession | None, Depends(find_deck_session)],
) -> DeckResponse:
    """Current deck entries with selection progress. Unknown sessions are empty."""
    return _deck_response(session_id, deck_session)


@router.delete("/deck", response_model=DeckResponse)
async def clear_deck(
    session_id: str,
    deck_session: Annotated[DeckSession | None, Depends(find_deck_session)],
    registry: Annotated[SessionRegistry, Depends(get_registry)],
) -> DeckResponse:
    """
    Forget the deck list, its printings and selections.

    The session itself is dropped; persisted set types are kept.
    """
    if deck_session is not None:
        deck_session.clear_all()
        registry.remove(session_id)
    return _deck_response(session_id, None)


@router.get("/printings", response_model=PrintingsResponse)
async def get_printings(
    session_id: str,
    deck_session: Annotated[DeckSession | None, Depends(find_deck_session)],
    registry: Annotated[SessionRegistry, Depends(get_registry)],
) -> PrintingsResponse:
    """Printings grouped by set, filtered and ordered by the session's preferences."""
    if deck_session is None:
        defaults = ViewPreferences()
        return PrintingsResponse(
            session_id=session_id,
            set_order=defaults.set_order,
            card_order=defaults.card_order,
            total_printings=0,
        )

    groups = deck_session.grouped_by_set()
    preferences = deck_session.preferences

    return PrintingsResponse(
        session_id=session_id,
        set_order=preferences.set_order,
        card_order=preferences.card_order,
        total_printings=len(deck_session.printings),
        groups=[
            SetGroupResponse(
                set_name=group.set_name,
                icon=group.icon,
                cards=[_printing_response(card, registry.symbols) for card in group.cards],
            )
            for group in groups
        ],
        is_loading=deck_session.is_loading,
        error=deck_session.error,
    )


@router.put("/view", response_model=ViewResponse)
async def update_view(
    session_id: str,
    request: ViewUpdateRequest,
    deck_session: Annotated[DeckSession, Depends(get_deck_session)],
) -> ViewResponse:
    """Change set/card ordering or the explicit set selection for this session."""
    preferences = deck_session.set_view(
        set_order=request.set_order,
        card_order=request.card_order,
        selected_sets=set(request.selected_sets) if request.selected_sets is not None else None,
    )
    return ViewResponse(
        session_id=session_id,
        set_order=preferences.set_order,
        card_order=preferences.card_order,
        selected_sets=sorted(preferences.selected_sets),
    )


@router.post("/cards/{card_name:path}/increment", response_model=SelectionResponse)
async def increment_card(
    card_name: str,
    deck_session: Annotated[DeckSession | None, Depends(find_deck_session)],
) -> SelectionResponse:
    """Pick one more copy of a card, up to the quantity the deck requires."""
    if deck_session is not None:
        deck_session.increment_card(card_name)
    return _selection_response(card_name, deck_session)


@router.post("/cards/{card_name:path}/decrement", response_model=SelectionResponse)
async def decrement_card(
    card_name: str,
    deck_session: Annotated[DeckSession | None, Depends(find_deck_session)],
) -> SelectionResponse:
    """Unpick one copy of a card."""
    if deck_session is not None:
        deck_session.decrement_card(card_name)
    return _selection_response(card_name, deck_session)
