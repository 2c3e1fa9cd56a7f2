from dataclasses import dataclass


@dataclass(frozen=True, slots=True)
class DeckEntry:
    """
    One line of a deck list.

    Attributes:
        card_name: Card name as written in the deck list
        required_quantity: Copies the deck calls for (always >= 1)
    """

    card_name: str
    required_quantity: int


@dataclass(frozen=True, slots=True)
class CardPrinting:
    """
    A single physical printing of a card.

    Two printings with the same (set_code, collector_number, card_name)
    are the same printing.

    Attributes:
        set_name: Full set name (e.g., "Limited Edition Alpha")
        set_code: Short set code (e.g., "lea")
        card_name: Card name
        mana_cost: Mana cost string (e.g., "{1}{U}")
        color_identity: Color symbols (W, U, B, R, G), empty for colorless
        type_line: Type line (e.g., "Instant")
        rarity: common, uncommon, rare, mythic or special
        collector_number: Collector number within the set (e.g., "163", "290a")
        set_type: Set category (expansion, core, masters, ...)
        release_date: ISO date the set was released (e.g., "1993-08-05")
    """

    set_name: str
    set_code: str
    card_name: str
    mana_cost: str = ""
    color_identity: tuple[str, ...] = ()
    type_line: str = ""
    rarity: str = ""
    collector_number: str = ""
    set_type: str = ""
    release_date: str = ""

    @property
    def identity(self) -> tuple[str, str, str]:
        """Deduplication key."""
        return (self.set_code, self.collector_number, self.card_name)


@dataclass(frozen=True, slots=True)
class SetMetadata:
    """A known set, keyed by code."""

    code: str
    name: str
    icon_url: str = ""
    release_date: str = ""


@dataclass(frozen=True, slots=True)
class ManaSymbol:
    """A mana/card symbol such as "{R}" or "{2/W}"."""

    symbol: str
    svg_uri: str = ""
    english: str = ""
    represents_mana: bool = False
    appears_in_mana_costs: bool = False
    cmc: float | None = None
    loose_variant: str | None = None
    transposable: bool = False
