"""Fixed reference data: narratives, views and seed records."""
from datetime import datetime, timedelta, timezone

from crypto_dashboard.schemas import RefreshConfig, StreamId, Watchlist

NARRATIVES: tuple[str, ...] = (
    "Meme", "AI", "DeFi", "L2", "Gaming", "RWA",
    "Infra", "Exchange", "Privacy", "L1", "Oracle", "SocialFi",
)

DASHBOARD_VIEW = "dashboard"
SETTINGS_VIEW = "settings"

TOP_SLICE_LIMIT = 200

# Streams disabled together with price.
PRICE_DEPENDENTS: tuple[StreamId, ...] = (StreamId.CHANGE, StreamId.VOLUME)


def default_refresh_configs(now: datetime | None = None) -> list[RefreshConfig]:
    """Seed configs in display order."""
    now = now or datetime.now(timezone.utc)
    return [
        RefreshConfig(
            id=StreamId.PRICE,
            name="Price Data",
            source="Binance",
            interval="10s",
            recommended="10s",
            allowed_intervals=["5s", "10s", "30s"],
            last_updated=now,
        ),
        RefreshConfig(
            id=StreamId.CHANGE,
            name="Percentage Change Data",
            source="Binance",
            interval="60s",
            recommended="60s",
            allowed_intervals=["30s", "60s", "120s"],
            last_updated=now,
        ),
        RefreshConfig(
            id=StreamId.VOLUME,
            name="Volume Data",
            source="Binance",
            interval="60s",
            recommended="60s",
            allowed_intervals=["30s", "60s", "120s"],
            last_updated=now,
        ),
        RefreshConfig(
            id=StreamId.MARKET_CAP,
            name="Market Cap Data",
            source="CoinGecko",
            interval="5m",
            recommended="5m",
            allowed_intervals=["1m", "3m", "5m", "10m"],
            last_updated=now - timedelta(minutes=5),
        ),
        RefreshConfig(
            id=StreamId.CATEGORIES,
            name="Coin Category / Narrative Data",
            source="CoinGecko",
            interval="12h",
            recommended="12h",
            allowed_intervals=["1h", "6h", "12h", "24h"],
            last_updated=now - timedelta(hours=1),
        ),
    ]


def initial_watchlists() -> list[Watchlist]:
    return [
        Watchlist(
            id="watchlist-1",
            name="Top Favorites",
            coin_ids=["bitcoin", "ethereum", "solana"],
            notes_by_coin_id={"bitcoin": "Great entry point"},
        )
    ]
