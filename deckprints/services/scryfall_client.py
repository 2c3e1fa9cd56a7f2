"""Scryfall API client.

Read-only access to the three endpoints the printing lookup needs:
set list, symbology and exact-name printing search.
Respects Scryfall rate limits by spacing requests out.
"""

import asyncio
import logging
import time
from typing import Any

import httpx

from deckprints.config import settings

logger = logging.getLogger(__name__)


class FetchError(Exception):
    """Raised when a Scryfall request fails for any reason other than not-found."""

    pass


class NotFoundError(Exception):
    """Raised when Scryfall reports that nothing matched (HTTP 404)."""

    pass


def exact_name_query(card_name: str) -> str:
    """Scryfall search query for every paper printing of one card."""
    escaped = card_name.replace('"', '\\"')
    return f'!"{escaped}" game:paper'


class ScryfallClient:
    """Async client for the Scryfall REST API.

    A fresh httpx.AsyncClient is opened per call. Requests made through one
    instance are spaced at least request_delay seconds apart.
    """

    def __init__(
        self,
        base_url: str | None = None,
        timeout: float | None = None,
        request_delay: float | None = None,
        user_agent: str | None = None,
    ) -> None:
        self.base_url = (base_url or settings.scryfall_api_url).rstrip("/")
        self.timeout = settings.request_timeout if timeout is None else timeout
        self.request_delay = settings.request_delay if request_delay is None else request_delay
        self.user_agent = user_agent or settings.scryfall_user_agent
        self._next_slot = 0.0

    def _client(self) -> httpx.AsyncClient:
        return httpx.AsyncClient(
            timeout=self.timeout,
            headers={"User-Agent": self.user_agent, "Accept": "application/json"},
            follow_redirects=True,
        )

    async def _throttle(self) -> None:
        """Wait for this caller's request slot.

        The slot is reserved before sleeping, so concurrent callers
        sharing one client queue up instead of firing together.
        """
        if self.request_delay <= 0:
            return
        now = time.monotonic()
        slot = max(now, self._next_slot)
        self._next_slot = slot + self.request_delay
        if slot > now:
            await asyncio.sleep(slot - now)

    async def _get_json(
        self,
        client: httpx.AsyncClient,
        url: str,
        params: dict[str, str] | None = None,
    ) -> dict[str, Any]:
        """GET a Scryfall endpoint and decode the JSON body.

        Raises:
            NotFoundError: On HTTP 404
            FetchError: On any other failure
        """
        await self._throttle()

        try:
            response = await client.get(url, params=params)
        except httpx.RequestError as e:
            raise FetchError(f"Request to {url} failed: {e}") from e

        if response.status_code == 404:
            raise NotFoundError(_error_details(response) or f"Not found: {url}")

        if response.is_error:
            details = _error_details(response)
            raise FetchError(details or f"HTTP {response.status_code} from {url}")

        try:
            data: dict[str, Any] = response.json()
        except ValueError as e:
            raise FetchError(f"Invalid JSON from {url}") from e

        return data

    async def list_sets(self) -> list[dict[str, Any]]:
        """Fetch every known set.

        Raises:
            FetchError: If the request fails (including not-found)
        """
        async with self._client() as client:
            try:
                data = await self._get_json(client, f"{self.base_url}/sets")
            except NotFoundError as e:
                raise FetchError(f"Failed to fetch sets data: {e}") from e

        return list(data.get("data", []))

    async def list_symbols(self) -> list[dict[str, Any]]:
        """Fetch every card symbol.

        Raises:
            FetchError: If the request fails (including not-found)
        """
        async with self._client() as client:
            try:
                data = await self._get_json(client, f"{self.base_url}/symbology")
            except NotFoundError as e:
                raise FetchError(f"Failed to fetch symbols: {e}") from e

        return list(data.get("data", []))

    async def search_printings(self, card_name: str) -> list[dict[str, Any]]:
        """Fetch every paper printing of a card by exact name.

        Follows result pagination.

        Args:
            card_name: Exact card name

        Returns:
            Raw Scryfall card objects, one per printing

        Raises:
            NotFoundError: If no card has this exact name
            FetchError: If the request fails otherwise
        """
        records: list[dict[str, Any]] = []
        url = f"{self.base_url}/cards/search"
        params: dict[str, str] | None = {
            "q": exact_name_query(card_name),
            "unique": "prints",
        }

        async with self._client() as client:
            has_more = True
            while has_more:
                data = await self._get_json(client, url, params)
                records.extend(data.get("data", []))

                has_more = bool(data.get("has_more", False))
                if has_more:
                    url = data.get("next_page", "")
                    params = None  # Next page URL includes params
                    if not url:
                        logger.warning("Missing next_page for %s, stopping early", card_name)
                        break

        return records


def _error_details(response: httpx.Response) -> str | None:
    """Extract Scryfall's error 'details' message, if the body has one."""
    try:
        body = response.json()
    except ValueError:
        return None
    if isinstance(body, dict):
        details = body.get("details")
        return str(details) if details else None
    return None
