import asyncio
from typing import Any

import pytest

from deckprints.models.card import CardPrinting, DeckEntry
from deckprints.models.failure import ResolutionInProgressError
from deckprints.services.printing_resolver import PrintingCollection, PrintingResolver
from deckprints.services.set_metadata import SetMetadataCache


def _entries(*names: str) -> list[DeckEntry]:
    return [DeckEntry(card_name=name, required_quantity=1) for name in names]


class BlockingProvider:
    """Provider whose lookups wait until released."""

    def __init__(self, records: list[dict[str, Any]]) -> None:
        self.records = records
        self.started = asyncio.Event()
        self.release = asyncio.Event()

    async def search_printings(self, card_name: str) -> list[dict[str, Any]]:
        self.started.set()
        await self.release.wait()
        return self.records


class TestPrintingCollection:
    def test_duplicate_identity_stored_once(self) -> None:
        """Two records for the same set, number and name are one printing."""
        collection = PrintingCollection()
        first = CardPrinting(
            set_name="Limited Edition Alpha",
            set_code="lea",
            card_name="Ancestral Recall",
            collector_number="1",
        )
        second = CardPrinting(
            set_name="Limited Edition Alpha",
            set_code="lea",
            card_name="Ancestral Recall",
            collector_number="1",
            rarity="rare",
        )

        assert collection.add(first) is True
        assert collection.add(second) is False
        assert len(collection) == 1
        assert collection.snapshot() == (first,)

    def test_merge_counts_new_printings(self) -> None:
        collection = PrintingCollection()
        a = CardPrinting(set_name="Alpha", set_code="lea", card_name="Lightning Bolt", collector_number="161")
        b = CardPrinting(set_name="Beta", set_code="leb", card_name="Lightning Bolt", collector_number="162")

        assert collection.merge([a, b, a]) == 2

    def test_clear(self) -> None:
        collection = PrintingCollection()
        printing = CardPrinting(set_name="Alpha", set_code="lea", card_name="Lightning Bolt")
        collection.add(printing)

        collection.clear()

        assert len(collection) == 0
        assert collection.add(printing) is True


class TestResolve:
    async def test_accumulates_printings(self, fake_scryfall, card_record) -> None:
        fake_scryfall.printings = {
            "Lightning Bolt": [
                card_record(),
                card_record(set_code="m11", set_name="Magic 2011", collector_number="149"),
            ],
            "Counterspell": [card_record(name="Counterspell", collector_number="54")],
        }
        resolver = PrintingResolver(fake_scryfall)

        result = await resolver.resolve(_entries("Lightning Bolt", "Counterspell"))

        assert len(resolver.printings) == 3
        assert result.resolved == ["Lightning Bolt", "Counterspell"]
        assert result.added == 3
        assert result.aborted is False
        assert resolver.is_loading is False

    async def test_duplicate_records_merge(self, fake_scryfall, card_record) -> None:
        """Duplicate provider records are stored once."""
        recall = card_record(name="Ancestral Recall", collector_number="1")
        fake_scryfall.printings = {"Ancestral Recall": [recall, dict(recall)]}
        resolver = PrintingResolver(fake_scryfall)

        await resolver.resolve(_entries("Ancestral Recall"))

        assert len(resolver.printings) == 1

    async def test_no_duplicates_across_entries(self, fake_scryfall, card_record) -> None:
        """A printing returned for two entries is stored once."""
        fire_ice = card_record(
            name="Fire // Ice", set_code="apc", set_name="Apocalypse", collector_number="128"
        )
        fake_scryfall.printings = {"Fire // Ice": [fire_ice], "Fire": [fire_ice]}
        resolver = PrintingResolver(fake_scryfall)

        result = await resolver.resolve(_entries("Fire // Ice", "Fire"))

        assert len(resolver.printings) == 1
        assert result.added == 1
        identities = [p.identity for p in resolver.printings]
        assert len(identities) == len(set(identities))

    async def test_not_found_is_skipped(self, fake_scryfall, card_record) -> None:
        """A card the provider doesn't know is skipped, later cards still resolve."""
        fake_scryfall.printings = {"Lightning Bolt": [card_record()]}
        resolver = PrintingResolver(fake_scryfall)

        result = await resolver.resolve(_entries("Not A Real Card", "Lightning Bolt"))

        assert result.skipped == ["Not A Real Card"]
        assert result.resolved == ["Lightning Bolt"]
        assert len(resolver.printings) == 1
        assert resolver.error is None

    async def test_not_found_leaves_collection_unchanged(self, fake_scryfall, card_record) -> None:
        fake_scryfall.printings = {"Lightning Bolt": [card_record()]}
        resolver = PrintingResolver(fake_scryfall)

        await resolver.resolve(_entries("Lightning Bolt", "Not A Real Card"))

        assert [p.card_name for p in resolver.printings] == ["Lightning Bolt"]

    async def test_fetch_error_aborts_and_keeps_earlier_printings(
        self, fake_scryfall, card_record, fetch_error
    ) -> None:
        fake_scryfall.printings = {
            "Lightning Bolt": [card_record()],
            "Counterspell": fetch_error,
            "Sol Ring": [card_record(name="Sol Ring", collector_number="270")],
        }
        resolver = PrintingResolver(fake_scryfall)

        result = await resolver.resolve(_entries("Lightning Bolt", "Counterspell", "Sol Ring"))

        assert result.aborted is True
        assert result.error == "Error processing deck list: Scryfall is down for maintenance"
        assert resolver.error == result.error
        assert [p.card_name for p in resolver.printings] == ["Lightning Bolt"]
        assert "Sol Ring" not in fake_scryfall.search_calls
        assert resolver.is_loading is False

    async def test_entries_resolved_in_order(self, fake_scryfall, card_record) -> None:
        fake_scryfall.printings = {
            name: [card_record(name=name)] for name in ("Ponder", "Brainstorm", "Preordain")
        }
        resolver = PrintingResolver(fake_scryfall)

        await resolver.resolve(_entries("Ponder", "Brainstorm", "Preordain"))

        assert fake_scryfall.search_calls == ["Ponder", "Brainstorm", "Preordain"]

    async def test_batch_sorted_by_set_then_collector_number(self, fake_scryfall, card_record) -> None:
        """Collector numbers sort naturally within a set."""
        fake_scryfall.printings = {
            "Lightning Bolt": [
                card_record(set_code="zen", set_name="Zendikar", collector_number="5"),
                card_record(set_code="lea", set_name="Alpha", collector_number="10"),
                card_record(set_code="lea", set_name="Alpha", collector_number="9"),
            ]
        }
        resolver = PrintingResolver(fake_scryfall)

        await resolver.resolve(_entries("Lightning Bolt"))

        assert [(p.set_name, p.collector_number) for p in resolver.printings] == [
            ("Alpha", "9"),
            ("Alpha", "10"),
            ("Zendikar", "5"),
        ]

    async def test_new_run_replaces_previous_results(self, fake_scryfall, card_record) -> None:
        fake_scryfall.printings = {
            "Lightning Bolt": [card_record()],
            "Counterspell": [card_record(name="Counterspell", collector_number="54")],
        }
        resolver = PrintingResolver(fake_scryfall)

        await resolver.resolve(_entries("Lightning Bolt"))
        await resolver.resolve(_entries("Counterspell"))

        assert [p.card_name for p in resolver.printings] == ["Counterspell"]

    async def test_new_run_clears_previous_error(self, fake_scryfall, card_record, fetch_error) -> None:
        fake_scryfall.printings = {"Lightning Bolt": fetch_error}
        resolver = PrintingResolver(fake_scryfall)
        await resolver.resolve(_entries("Lightning Bolt"))

        fake_scryfall.printings = {"Lightning Bolt": [card_record()]}
        await resolver.resolve(_entries("Lightning Bolt"))

        assert resolver.error is None

    async def test_loads_set_metadata(self, fake_scryfall, card_record) -> None:
        fake_scryfall.printings = {"Lightning Bolt": [card_record()]}
        set_metadata = SetMetadataCache(fake_scryfall)
        resolver = PrintingResolver(fake_scryfall, set_metadata)

        await resolver.resolve(_entries("Lightning Bolt"))

        assert set_metadata.is_loaded is True
        assert fake_scryfall.set_calls == 1

    async def test_set_metadata_failure_does_not_block(
        self, fake_scryfall, card_record, fetch_error
    ) -> None:
        fake_scryfall.sets = fetch_error
        fake_scryfall.printings = {"Lightning Bolt": [card_record()]}
        set_metadata = SetMetadataCache(fake_scryfall)
        resolver = PrintingResolver(fake_scryfall, set_metadata)

        result = await resolver.resolve(_entries("Lightning Bolt"))

        assert result.aborted is False
        assert len(resolver.printings) == 1
        assert set_metadata.error is not None

    async def test_empty_entries(self, fake_scryfall) -> None:
        resolver = PrintingResolver(fake_scryfall)

        result = await resolver.resolve([])

        assert result.resolved == []
        assert len(resolver.printings) == 0


class TestConcurrentRuns:
    async def test_second_run_rejected_while_loading(self, card_record) -> None:
        provider = BlockingProvider([card_record()])
        resolver = PrintingResolver(provider)

        task = asyncio.create_task(resolver.resolve(_entries("Lightning Bolt")))
        await provider.started.wait()

        assert resolver.is_loading is True
        with pytest.raises(ResolutionInProgressError):
            await resolver.resolve(_entries("Lightning Bolt"))

        provider.release.set()
        result = await task

        assert result.resolved == ["Lightning Bolt"]
        assert resolver.is_loading is False

    async def test_reset_invalidates_running_resolution(self, card_record) -> None:
        """Printings from a run that was reset are never written."""
        provider = BlockingProvider([card_record()])
        resolver = PrintingResolver(provider)

        task = asyncio.create_task(resolver.resolve(_entries("Lightning Bolt")))
        await provider.started.wait()
        resolver.reset()
        provider.release.set()
        result = await task

        assert result.superseded is True
        assert len(resolver.printings) == 0
        assert resolver.is_loading is False

    async def test_readers_see_partial_results(self, card_record) -> None:
        """Printings are visible while later entries are still loading."""
        blocking = BlockingProvider([card_record(name="Counterspell", collector_number="54")])

        class MixedProvider:
            async def search_printings(self, card_name: str) -> list[dict[str, Any]]:
                if card_name == "Lightning Bolt":
                    return [card_record()]
                return await blocking.search_printings(card_name)

        resolver = PrintingResolver(MixedProvider())
        task = asyncio.create_task(resolver.resolve(_entries("Lightning Bolt", "Counterspell")))
        await blocking.started.wait()

        assert [p.card_name for p in resolver.printings] == ["Lightning Bolt"]

        blocking.release.set()
        await task
        assert len(resolver.printings) == 2

