"""
Set metadata cache.

Fetches the full Scryfall set list once per process and indexes it by
set code. Used for set icons in the grouped printing view.
"""

import logging
from typing import Any, Protocol

from deckprints.models.card import SetMetadata
from deckprints.parsers.scryfall import set_from_scryfall
from deckprints.services.scryfall_client import FetchError

logger = logging.getLogger(__name__)


class SetProvider(Protocol):
    async def list_sets(self) -> list[dict[str, Any]]: ...


class SetMetadataCache:
    """
    Set records keyed by code.

    Loading is one-shot: the loaded flag is set before the fetch starts,
    so concurrent callers never trigger a second fetch. A failed load is
    not retried; lookups simply miss.
    """

    def __init__(self, provider: SetProvider) -> None:
        self.provider = provider
        self.is_loaded = False
        self.error: str | None = None
        self._sets: dict[str, SetMetadata] = {}

    async def ensure_loaded(self) -> None:
        """Fetch set metadata unless a load has already started."""
        if self.is_loaded:
            return
        self.is_loaded = True

        try:
            records = await self.provider.list_sets()
        except FetchError as e:
            logger.error("Error fetching sets metadata: %s", e)
            self.error = f"Error loading set data: {e}"
            return

        for record in records:
            metadata = set_from_scryfall(record)
            self._sets[metadata.code] = metadata

        logger.info("Loaded metadata for %d sets", len(self._sets))

    def get(self, set_code: str) -> SetMetadata | None:
        """Look up a set by code."""
        return self._sets.get(set_code)

    def icon_for(self, set_code: str) -> str:
        """Icon URL for a set, empty string if unknown."""
        metadata = self._sets.get(set_code)
        return metadata.icon_url if metadata else ""

    def __len__(self) -> int:
        return len(self._sets)
