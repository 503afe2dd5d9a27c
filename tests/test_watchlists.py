"""Tests for WatchlistManager CRUD, coin-id updates and notes."""
import pytest

from crypto_dashboard.services.exceptions import (NotFoundError,
                                                  ValidationRejectedError)


@pytest.mark.asyncio
async def test_create_starts_empty_with_fresh_id(watchlist_manager):
    first = await watchlist_manager.create("AI Narrative")
    second = await watchlist_manager.create("AI Narrative")

    assert first.id != second.id
    assert first.id.startswith("watchlist-")
    assert first.coin_ids == []
    assert first.notes_by_coin_id == {}
    assert len(await watchlist_manager.list_watchlists()) == 3


@pytest.mark.asyncio
@pytest.mark.parametrize("name", ["", "   ", "\t\n"])
async def test_create_rejects_blank_name(watchlist_manager, name):
    with pytest.raises(ValidationRejectedError):
        await watchlist_manager.create(name)
    assert len(await watchlist_manager.list_watchlists()) == 1


@pytest.mark.asyncio
async def test_rename(watchlist_manager):
    renamed = await watchlist_manager.rename("watchlist-1", "Core")

    assert renamed.name == "Core"
    assert renamed.coin_ids == ["bitcoin", "ethereum"]
    assert (await watchlist_manager.get("watchlist-1")).name == "Core"


@pytest.mark.asyncio
async def test_rename_rejects_blank_and_unknown(watchlist_manager):
    with pytest.raises(ValidationRejectedError):
        await watchlist_manager.rename("watchlist-1", " ")
    with pytest.raises(NotFoundError):
        await watchlist_manager.rename("missing", "Name")


@pytest.mark.asyncio
async def test_delete_then_operations_raise_not_found(watchlist_manager):
    await watchlist_manager.delete("watchlist-1")

    assert await watchlist_manager.list_watchlists() == []
    with pytest.raises(NotFoundError):
        await watchlist_manager.delete("watchlist-1")
    with pytest.raises(NotFoundError):
        await watchlist_manager.set_note("watchlist-1", "bitcoin", "x")
    with pytest.raises(NotFoundError):
        await watchlist_manager.merge_coin_ids("watchlist-1", ["pepe"])
    with pytest.raises(NotFoundError):
        await watchlist_manager.set_coin_ids("watchlist-1", ["pepe"])


@pytest.mark.asyncio
async def test_merge_coin_ids_unions_without_duplicates(watchlist_manager):
    await watchlist_manager.set_coin_ids("watchlist-1", ["c1", "c2"])

    merged = await watchlist_manager.merge_coin_ids("watchlist-1", ["c2", "c3"])

    assert merged.coin_ids == ["c1", "c2", "c3"]


@pytest.mark.asyncio
async def test_set_coin_ids_replaces_and_collapses_duplicates(watchlist_manager):
    updated = await watchlist_manager.set_coin_ids("watchlist-1", ["pepe", "pepe", "solana"])

    assert updated.coin_ids == ["pepe", "solana"]


@pytest.mark.asyncio
async def test_set_note_upserts_and_stores_empty_text(watchlist_manager):
    updated = await watchlist_manager.set_note("watchlist-1", "ethereum", "Watch the merge")
    assert updated.notes_by_coin_id == {
        "bitcoin": "Great entry point",
        "ethereum": "Watch the merge",
    }

    cleared = await watchlist_manager.set_note("watchlist-1", "bitcoin", "")
    assert cleared.notes_by_coin_id["bitcoin"] == ""


@pytest.mark.asyncio
async def test_returned_copies_do_not_alias_store(watchlist_manager):
    copy = await watchlist_manager.get("watchlist-1")
    copy.coin_ids.append("pepe")
    copy.notes_by_coin_id["pepe"] = "sneaky"

    stored = await watchlist_manager.get("watchlist-1")
    assert stored.coin_ids == ["bitcoin", "ethereum"]
    assert "pepe" not in stored.notes_by_coin_id
