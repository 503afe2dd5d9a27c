"""Tests for the simulated asset catalog."""
import pytest

from crypto_dashboard.constants import NARRATIVES
from crypto_dashboard.providers import MockAssetProvider


@pytest.mark.asyncio
async def test_catalog_shape():
    async with MockAssetProvider(count=40, seed=1) as provider:
        assets = await provider.get_assets()

    assert len(assets) == 40
    assert [a.rank for a in assets] == list(range(1, 41))
    assert [a.symbol for a in assets[:3]] == ["BTC", "ETH", "SOL"]
    assert assets[20].id == "coin-21"
    assert assets[20].symbol == "TICKER21"
    assert len({a.id for a in assets}) == 40
    for asset in assets:
        assert asset.categories
        assert set(asset.categories) <= set(NARRATIVES)
        assert -10 <= asset.change_24h <= 10


@pytest.mark.asyncio
async def test_same_seed_same_catalog():
    first = await MockAssetProvider(count=25, seed=3).get_assets()
    second = await MockAssetProvider(count=25, seed=3).get_assets()

    assert first == second


@pytest.mark.asyncio
async def test_refresh_keeps_identities():
    provider = MockAssetProvider(count=25, seed=5)
    before = await provider.get_assets()

    await provider.refresh()
    after = await provider.get_assets()

    assert [(a.id, a.rank, a.categories) for a in after] == [
        (a.id, a.rank, a.categories) for a in before
    ]
    assert [a.price for a in after] != [a.price for a in before]


def test_count_must_be_positive():
    with pytest.raises(ValueError):
        MockAssetProvider(count=0)
