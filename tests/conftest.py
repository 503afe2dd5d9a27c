"""Shared fixtures: a small hand-built catalog and fresh store instances."""
import pytest

from crypto_dashboard.providers import AssetProviderABC
from crypto_dashboard.schemas import Asset, Watchlist
from crypto_dashboard.services import (AssetRepository, DashboardController,
                                       RefreshConfigManager, WatchlistManager)


def make_asset(
    asset_id: str,
    rank: int,
    change_24h: float = 0.0,
    categories: list[str] | None = None,
    *,
    name: str | None = None,
    symbol: str | None = None,
    price: float = 1.0,
    volume_24h: float = 0.0,
    market_cap: float = 0.0,
) -> Asset:
    return Asset(
        id=asset_id,
        name=name or asset_id.title(),
        symbol=symbol or asset_id[:3].upper(),
        rank=rank,
        price=price,
        change_1h=change_24h / 5,
        change_12h=change_24h / 2,
        change_24h=change_24h,
        change_7d=change_24h * 2,
        volume_24h=volume_24h,
        market_cap=market_cap,
        categories=categories or ["L1"],
    )


class FakeAssetProvider(AssetProviderABC):
    """Serves a fixed list; can be told to fail or count refreshes."""

    def __init__(self, assets: list[Asset]) -> None:
        self.assets = list(assets)
        self.fail = False
        self.refresh_calls = 0
        self.closed = False

    async def get_assets(self) -> list[Asset]:
        if self.fail:
            raise RuntimeError("provider down")
        return list(self.assets)

    async def refresh(self) -> None:
        self.refresh_calls += 1
        if self.fail:
            raise RuntimeError("provider down")

    async def close(self) -> None:
        self.closed = True


@pytest.fixture
def asset_factory():
    return make_asset


@pytest.fixture
def fake_provider_cls():
    return FakeAssetProvider


@pytest.fixture
def catalog() -> list[Asset]:
    # Deliberately not in rank order.
    return [
        make_asset("ethereum", 2, 3.5, ["L1", "DeFi"], name="Ethereum", symbol="ETH"),
        make_asset("bitcoin", 1, 1.2, ["L1"], name="Bitcoin", symbol="BTC"),
        make_asset("pepe", 4, 12.0, ["Meme"], name="Pepe", symbol="PEPE"),
        make_asset("solana", 3, -6.0, ["L1"], name="Solana", symbol="SOL"),
        make_asset("fetch-ai", 5, -2.0, ["AI"], name="Fetch.ai", symbol="FET"),
    ]


@pytest.fixture
def provider(catalog) -> FakeAssetProvider:
    return FakeAssetProvider(catalog)


@pytest.fixture
def repository(provider) -> AssetRepository:
    return AssetRepository(provider)


@pytest.fixture
def watchlist_manager() -> WatchlistManager:
    return WatchlistManager(
        [
            Watchlist(
                id="watchlist-1",
                name="Top Favorites",
                coin_ids=["bitcoin", "ethereum"],
                notes_by_coin_id={"bitcoin": "Great entry point"},
            )
        ]
    )


@pytest.fixture
def config_manager() -> RefreshConfigManager:
    return RefreshConfigManager()


@pytest.fixture
def controller(repository, watchlist_manager, config_manager) -> DashboardController:
    return DashboardController(repository, watchlist_manager, config_manager)
