"""
Printing resolver.

Looks up every paper printing of each deck entry and accumulates them
into one deduplicated collection.

Entries are resolved one at a time, in order. A card the provider does
not know is skipped; any other provider failure aborts the run but keeps
everything accumulated so far.
"""

import logging
from collections.abc import Iterable, Iterator
from dataclasses import dataclass, field
from typing import Any, Protocol

from deckprints.models.card import CardPrinting, DeckEntry
from deckprints.models.failure import ResolutionInProgressError
from deckprints.parsers.scryfall import printing_from_scryfall
from deckprints.services.collation import collation_key, collector_number_key
from deckprints.services.scryfall_client import FetchError, NotFoundError
from deckprints.services.set_metadata import SetMetadataCache

logger = logging.getLogger(__name__)


class PrintingProvider(Protocol):
    async def search_printings(self, card_name: str) -> list[dict[str, Any]]: ...


class PrintingCollection:
    """
    Accumulated printings, in insertion order.

    Never holds two printings with the same identity
    (set_code, collector_number, card_name).
    """

    def __init__(self) -> None:
        self._printings: list[CardPrinting] = []
        self._identities: set[tuple[str, str, str]] = set()

    def add(self, printing: CardPrinting) -> bool:
        """Add a printing. Returns False if an identical printing is already stored."""
        if printing.identity in self._identities:
            return False
        self._identities.add(printing.identity)
        self._printings.append(printing)
        return True

    def merge(self, printings: Iterable[CardPrinting]) -> int:
        """Add each printing not already present. Returns the number added."""
        return sum(1 for printing in printings if self.add(printing))

    def clear(self) -> None:
        self._printings.clear()
        self._identities.clear()

    def snapshot(self) -> tuple[CardPrinting, ...]:
        """Immutable view of the current contents."""
        return tuple(self._printings)

    def __iter__(self) -> Iterator[CardPrinting]:
        return iter(self.snapshot())

    def __len__(self) -> int:
        return len(self._printings)


@dataclass
class ResolutionResult:
    """
    Outcome of one resolution run.

    Attributes:
        resolved: Card names whose printings were merged
        skipped: Card names the provider did not know
        added: Printings added to the collection
        error: User-visible message if the run aborted
        superseded: True if a reset or newer run took over mid-run
    """

    resolved: list[str] = field(default_factory=list)
    skipped: list[str] = field(default_factory=list)
    added: int = 0
    error: str | None = None
    superseded: bool = False

    @property
    def aborted(self) -> bool:
        return self.error is not None


def batch_sort_key(printing: CardPrinting) -> tuple[Any, ...]:
    """Order of one lookup's printings: set name, then collector number."""
    return (collation_key(printing.set_name), collector_number_key(printing.collector_number))


class PrintingResolver:
    """
    Resolves deck entries into accumulated printings.

    One run at a time: resolve() raises ResolutionInProgressError while
    a run is in flight. Each run holds a token; reset() invalidates it,
    and a run whose token is stale stops writing.
    """

    def __init__(
        self,
        provider: PrintingProvider,
        set_metadata: SetMetadataCache | None = None,
    ) -> None:
        self.provider = provider
        self.set_metadata = set_metadata
        self.printings = PrintingCollection()
        self.is_loading = False
        self.error: str | None = None
        self._run_id = 0

    def reset(self) -> None:
        """Drop accumulated printings and invalidate any in-flight run."""
        self._run_id += 1
        self.printings.clear()
        self.error = None
        self.is_loading = False

    def _is_current(self, run_id: int) -> bool:
        return run_id == self._run_id

    async def resolve(self, entries: Iterable[DeckEntry]) -> ResolutionResult:
        """
        Resolve entries into printings, replacing any previous results.

        Args:
            entries: Parsed deck entries, resolved in order

        Returns:
            ResolutionResult describing what was resolved, skipped or failed

        Raises:
            ResolutionInProgressError: If a run is already in flight
        """
        if self.is_loading:
            raise ResolutionInProgressError()

        entries = list(entries)
        self.reset()
        run_id = self._run_id
        self.is_loading = True
        result = ResolutionResult()

        logger.info("Resolving printings for %d cards", len(entries))

        try:
            if self.set_metadata is not None:
                await self.set_metadata.ensure_loaded()

            for entry in entries:
                if not self._is_current(run_id):
                    break

                try:
                    records = await self.provider.search_printings(entry.card_name)
                except NotFoundError:
                    logger.info("No printings found for %s, skipping", entry.card_name)
                    result.skipped.append(entry.card_name)
                    continue

                if not self._is_current(run_id):
                    break

                batch = sorted(
                    (printing_from_scryfall(record) for record in records),
                    key=batch_sort_key,
                )
                result.added += self.printings.merge(batch)
                result.resolved.append(entry.card_name)

        except FetchError as e:
            result.error = f"Error processing deck list: {e}"
            logger.error("Resolution aborted: %s", e)
            if self._is_current(run_id):
                self.error = result.error

        finally:
            if self._is_current(run_id):
                self.is_loading = False
            else:
                result.superseded = True
                logger.info("Resolution superseded by a newer run")

        logger.info(
            "Resolved %d cards (%d skipped), %d printings total",
            len(result.resolved),
            len(result.skipped),
            len(self.printings),
        )
        return result
