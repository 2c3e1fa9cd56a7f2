"""Tests for preference storage."""

import pytest
from sqlalchemy.ext.asyncio import AsyncSession, async_sessionmaker, create_async_engine

from deckprints.config import DEFAULT_SET_TYPES, SELECTED_SET_TYPES_KEY
from deckprints.db.operations import delete_preference, get_preference, set_preference
from deckprints.models.db import Base
from deckprints.services.preferences import (
    DatabasePreferenceStore,
    InMemoryPreferenceStore,
    load_selected_set_types,
    save_selected_set_types,
)


@pytest.fixture
async def session() -> AsyncSession:
    """In-memory SQLite session with tables created."""
    engine = create_async_engine("sqlite+aiosqlite:///:memory:", echo=False)
    async with engine.begin() as conn:
        await conn.run_sync(Base.metadata.create_all)

    async_session = async_sessionmaker(engine, class_=AsyncSession, expire_on_commit=False)
    async with async_session() as session:
        yield session

    await engine.dispose()


class TestPreferenceOperations:
    async def test_missing_preference(self, session: AsyncSession) -> None:
        assert await get_preference(session, "user-1", "theme") is None

    async def test_set_and_get(self, session: AsyncSession) -> None:
        await set_preference(session, "user-1", "theme", "dark")

        assert await get_preference(session, "user-1", "theme") == "dark"

    async def test_set_replaces_value(self, session: AsyncSession) -> None:
        await set_preference(session, "user-1", "theme", "dark")
        await set_preference(session, "user-1", "theme", "light")

        assert await get_preference(session, "user-1", "theme") == "light"

    async def test_namespaces_are_separate(self, session: AsyncSession) -> None:
        await set_preference(session, "user-1", "theme", "dark")
        await set_preference(session, "user-2", "theme", "light")

        assert await get_preference(session, "user-1", "theme") == "dark"
        assert await get_preference(session, "user-2", "theme") == "light"

    async def test_delete(self, session: AsyncSession) -> None:
        await set_preference(session, "user-1", "theme", "dark")

        assert await delete_preference(session, "user-1", "theme") is True
        assert await delete_preference(session, "user-1", "theme") is False
        assert await get_preference(session, "user-1", "theme") is None


class TestSelectedSetTypes:
    async def test_defaults_when_missing(self) -> None:
        assert await load_selected_set_types(InMemoryPreferenceStore()) == set(DEFAULT_SET_TYPES)

    async def test_round_trip(self) -> None:
        store = InMemoryPreferenceStore()

        await save_selected_set_types(store, {"expansion", "core"})

        assert store.values[SELECTED_SET_TYPES_KEY] == '["core", "expansion"]'
        assert await load_selected_set_types(store) == {"expansion", "core"}

    async def test_corrupt_value_falls_back_to_defaults(self) -> None:
        store = InMemoryPreferenceStore({SELECTED_SET_TYPES_KEY: "expansion,core"})

        assert await load_selected_set_types(store) == set(DEFAULT_SET_TYPES)

    async def test_wrong_shape_falls_back_to_defaults(self) -> None:
        store = InMemoryPreferenceStore({SELECTED_SET_TYPES_KEY: '{"expansion": true}'})

        assert await load_selected_set_types(store) == set(DEFAULT_SET_TYPES)

    async def test_database_store(self, session: AsyncSession) -> None:
        store = DatabasePreferenceStore(session, namespace="user-1")

        await save_selected_set_types(store, {"masters"})

        assert await load_selected_set_types(store) == {"masters"}
        other = DatabasePreferenceStore(session, namespace="user-2")
        assert await load_selected_set_types(other) == set(DEFAULT_SET_TYPES)
