"""
Database CRUD operations for persisted preferences.
"""

from sqlalchemy import delete, select
from sqlalchemy.ext.asyncio import AsyncSession

from deckprints.models.db import PreferenceDB


async def get_preference_row(
    session: AsyncSession, namespace: str, key: str
) -> PreferenceDB | None:
    """Get a preference row, or None if it was never set."""
    result = await session.execute(
        select(PreferenceDB).where(PreferenceDB.namespace == namespace, PreferenceDB.key == key)
    )
    return result.scalar_one_or_none()


async def get_preference(session: AsyncSession, namespace: str, key: str) -> str | None:
    """Get a preference value, or None if it was never set."""
    row = await get_preference_row(session, namespace, key)
    return row.value if row else None


async def set_preference(
    session: AsyncSession, namespace: str, key: str, value: str
) -> PreferenceDB:
    """Create or replace a preference value."""
    row = await get_preference_row(session, namespace, key)
    if row is None:
        row = PreferenceDB(namespace=namespace, key=key, value=value)
        session.add(row)
    else:
        row.value = value

    await session.flush()
    return row


async def delete_preference(session: AsyncSession, namespace: str, key: str) -> bool:
    """
    Delete a preference.

    Returns True if deleted, False if not found.
    """
    result = await session.execute(
        delete(PreferenceDB).where(PreferenceDB.namespace == namespace, PreferenceDB.key == key)
    )
    return bool(result.rowcount)
