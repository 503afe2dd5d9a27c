"""Tests for AssetRepository ordering and query resolution."""
import pytest

from crypto_dashboard.services import AssetRepository
from crypto_dashboard.services.exceptions import NotFoundError, ServiceFailureError


@pytest.mark.asyncio
async def test_list_assets_is_rank_ordered_snapshot(repository):
    first = await repository.list_assets()
    second = await repository.list_assets()

    assert [a.rank for a in first] == [1, 2, 3, 4, 5]
    assert first is not second
    first.clear()
    assert len(await repository.list_assets()) == 5


@pytest.mark.asyncio
async def test_find_by_query_matches_symbol_case_insensitively(repository):
    assert await repository.find_by_query("BTC, eth") == ["bitcoin", "ethereum"]


@pytest.mark.asyncio
async def test_find_by_query_dedupes_repeated_tokens(repository):
    assert await repository.find_by_query("btc BTC bitcoin,eth") == ["bitcoin", "ethereum"]


@pytest.mark.asyncio
async def test_find_by_query_matches_full_name_not_substring(repository):
    assert await repository.find_by_query("solana") == ["solana"]
    assert await repository.find_by_query("sol") == ["solana"]
    assert await repository.find_by_query("sola") == []
    assert await repository.find_by_query("bit") == []


@pytest.mark.asyncio
async def test_find_by_query_keeps_first_match_order(repository):
    assert await repository.find_by_query("pepe\nbtc") == ["pepe", "bitcoin"]


@pytest.mark.asyncio
async def test_find_by_query_returns_empty_list_when_nothing_matches(repository):
    assert await repository.find_by_query("doge, shib") == []
    assert await repository.find_by_query("  ,  ") == []


@pytest.mark.asyncio
async def test_find_by_query_prefers_best_ranked_duplicate_symbol(asset_factory, fake_provider_cls):
    provider = fake_provider_cls([
        asset_factory("copycat", 9, symbol="DUP", name="Copycat"),
        asset_factory("original", 2, symbol="DUP", name="Original"),
    ])
    repository = AssetRepository(provider)

    assert await repository.find_by_query("dup") == ["original"]


@pytest.mark.asyncio
async def test_top_movers_sorted_by_24h_change(repository):
    movers = await repository.top_movers(limit=3)

    assert [a.id for a in movers] == ["pepe", "ethereum", "bitcoin"]


@pytest.mark.asyncio
async def test_get_asset_unknown_raises_not_found(repository):
    assert (await repository.get_asset("pepe")).symbol == "PEPE"
    with pytest.raises(NotFoundError):
        await repository.get_asset("nope")


@pytest.mark.asyncio
async def test_refresh_and_close_delegate_to_provider(repository, provider):
    await repository.refresh()
    await repository.close()

    assert provider.refresh_calls == 1
    assert provider.closed


@pytest.mark.asyncio
async def test_refresh_failure_is_a_service_failure(repository, provider):
    provider.fail = True

    with pytest.raises(ServiceFailureError):
        await repository.refresh()
