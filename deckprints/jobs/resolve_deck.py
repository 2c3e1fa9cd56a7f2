"""
Resolve a deck list file and print its printings grouped by set.

Usage:
    python -m deckprints.jobs.resolve_deck deck.txt --set-order cardCount
"""

import argparse
import asyncio
import logging
import sys
from pathlib import Path

from deckprints.config import DEFAULT_SET_TYPES
from deckprints.models.preferences import CardOrder, SetOrder, ViewPreferences
from deckprints.services.aggregation import SetGroup
from deckprints.services.scryfall_client import ScryfallClient
from deckprints.services.session import DeckSession
from deckprints.services.set_metadata import SetMetadataCache

logger = logging.getLogger(__name__)


def format_groups(groups: list[SetGroup]) -> str:
    """Render groups as plain text, one set header per group."""
    lines: list[str] = []
    for group in groups:
        header = f"{group.set_name} ({len(group.cards)})"
        if group.icon:
            header += f"  {group.icon}"
        lines.append(header)
        for card in group.cards:
            lines.append(f"  {card.collector_number:>5}  {card.card_name} ({card.rarity})")
        lines.append("")
    return "\n".join(lines)


async def run_resolve(
    deck_text: str,
    preferences: ViewPreferences,
    client: ScryfallClient | None = None,
) -> tuple[DeckSession, bool]:
    """
    Resolve a deck list.

    Args:
        deck_text: Raw deck list
        preferences: View preferences for the grouped output
        client: Scryfall client (defaults to one built from settings)

    Returns:
        Tuple of (session, ok) where ok is False if the lookup aborted
    """
    client = client or ScryfallClient()
    session = DeckSession(client, SetMetadataCache(client), preferences)

    result = await session.submit(deck_text)

    if result.skipped:
        logger.warning("No printings found for: %s", ", ".join(result.skipped))
    if result.aborted:
        logger.error("%s", result.error)

    return session, not result.aborted


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(description="List every printing of the cards in a deck list.")
    parser.add_argument("deck_file", type=Path, help="Deck list, one '<qty> <card name>' per line")
    parser.add_argument(
        "--set-order",
        choices=[o.value for o in SetOrder],
        default=SetOrder.RELEASE_DATE.value,
    )
    parser.add_argument(
        "--card-order",
        choices=[o.value for o in CardOrder],
        default=CardOrder.NAME.value,
    )
    parser.add_argument(
        "--set-type",
        action="append",
        dest="set_types",
        help=f"Set type to include (repeatable). Default: {', '.join(DEFAULT_SET_TYPES)}",
    )
    parser.add_argument(
        "--set",
        action="append",
        dest="sets",
        help="Restrict to this set code (repeatable)",
    )
    return parser


def main(argv: list[str] | None = None) -> int:
    """CLI entry point."""
    logging.basicConfig(
        level=logging.INFO,
        format="%(asctime)s - %(name)s - %(levelname)s - %(message)s",
    )
    args = build_parser().parse_args(argv)

    preferences = ViewPreferences(
        selected_set_types=set(args.set_types or DEFAULT_SET_TYPES),
        selected_sets=set(args.sets or ()),
        set_order=SetOrder(args.set_order),
        card_order=CardOrder(args.card_order),
    )

    deck_text = args.deck_file.read_text(encoding="utf-8")
    session, ok = asyncio.run(run_resolve(deck_text, preferences))

    print(format_groups(session.grouped_by_set()))
    return 0 if ok else 1


if __name__ == "__main__":
    sys.exit(main())
