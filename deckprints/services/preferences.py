"""
Persistent user preferences.

The grouped view persists one preference, the selected set types, as a
JSON array. Storage is pluggable: in memory for scripts and tests, or a
database table behind the HTTP API.
"""

import json
import logging
from typing import Protocol

from sqlalchemy.ext.asyncio import AsyncSession

from deckprints.config import DEFAULT_SET_TYPES, SELECTED_SET_TYPES_KEY
from deckprints.db.operations import get_preference, set_preference

logger = logging.getLogger(__name__)


class PreferenceStore(Protocol):
    async def get(self, key: str) -> str | None: ...

    async def set(self, key: str, value: str) -> None: ...


class InMemoryPreferenceStore:
    """Preferences held in a dict for the lifetime of the object."""

    def __init__(self, values: dict[str, str] | None = None) -> None:
        self.values: dict[str, str] = dict(values or {})

    async def get(self, key: str) -> str | None:
        return self.values.get(key)

    async def set(self, key: str, value: str) -> None:
        self.values[key] = value


class DatabasePreferenceStore:
    """Preferences stored in the preferences table under one namespace."""

    def __init__(self, session: AsyncSession, namespace: str = "") -> None:
        self.session = session
        self.namespace = namespace

    async def get(self, key: str) -> str | None:
        return await get_preference(self.session, self.namespace, key)

    async def set(self, key: str, value: str) -> None:
        await set_preference(self.session, self.namespace, key, value)


async def load_selected_set_types(store: PreferenceStore) -> set[str]:
    """
    Read the persisted set type selection.

    Returns DEFAULT_SET_TYPES if nothing is stored or the stored value
    is unreadable.
    """
    raw = await store.get(SELECTED_SET_TYPES_KEY)
    if raw is None:
        return set(DEFAULT_SET_TYPES)

    try:
        values = json.loads(raw)
    except ValueError:
        logger.warning("Ignoring unreadable set type preference: %r", raw)
        return set(DEFAULT_SET_TYPES)

    if not isinstance(values, list) or not all(isinstance(v, str) for v in values):
        logger.warning("Ignoring malformed set type preference: %r", raw)
        return set(DEFAULT_SET_TYPES)

    return set(values)


async def save_selected_set_types(store: PreferenceStore, set_types: set[str]) -> None:
    """Persist the set type selection (sorted, for a stable stored value)."""
    await store.set(SELECTED_SET_TYPES_KEY, json.dumps(sorted(set_types)))
