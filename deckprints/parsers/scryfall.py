"""
Scryfall record normalization.

Converts raw Scryfall API objects (cards, sets, symbols) into the
internal dataclasses. Missing fields fall back to empty values so a
sparse record never aborts a lookup.

API docs: https://scryfall.com/docs/api
"""

from typing import Any

from deckprints.models.card import CardPrinting, ManaSymbol, SetMetadata

FACE_SEPARATOR = " // "


def _from_faces(record: dict[str, Any], field: str) -> str:
    """Join a field across card_faces (split, transform and MDFC cards)."""
    faces = record.get("card_faces") or []
    values = [str(face.get(field, "")) for face in faces if face.get(field)]
    return FACE_SEPARATOR.join(values)


def printing_from_scryfall(record: dict[str, Any]) -> CardPrinting:
    """
    Build a CardPrinting from a Scryfall card object.

    Args:
        record: Card object from /cards/search

    Returns:
        Normalized CardPrinting
    """
    mana_cost = record.get("mana_cost")
    if mana_cost is None:
        mana_cost = _from_faces(record, "mana_cost")

    type_line = record.get("type_line")
    if type_line is None:
        type_line = _from_faces(record, "type_line")

    return CardPrinting(
        set_name=record.get("set_name", ""),
        set_code=record.get("set", ""),
        card_name=record.get("name", ""),
        mana_cost=mana_cost,
        color_identity=tuple(record.get("color_identity") or ()),
        type_line=type_line,
        rarity=record.get("rarity", ""),
        collector_number=str(record.get("collector_number", "")),
        set_type=record.get("set_type", ""),
        release_date=record.get("released_at", ""),
    )


def set_from_scryfall(record: dict[str, Any]) -> SetMetadata:
    """Build SetMetadata from a Scryfall set object."""
    return SetMetadata(
        code=record.get("code", ""),
        name=record.get("name", ""),
        icon_url=record.get("icon_svg_uri") or "",
        release_date=record.get("released_at") or "",
    )


def symbol_from_scryfall(record: dict[str, Any]) -> ManaSymbol:
    """Build a ManaSymbol from a Scryfall card symbol object."""
    return ManaSymbol(
        symbol=record.get("symbol", ""),
        svg_uri=record.get("svg_uri") or "",
        english=record.get("english", ""),
        represents_mana=bool(record.get("represents_mana", False)),
        appears_in_mana_costs=bool(record.get("appears_in_mana_costs", False)),
        cmc=record.get("cmc"),
        loose_variant=record.get("loose_variant"),
        transposable=bool(record.get("transposable", False)),
    )
