"""Simulated asset catalog: seeded random market data, no network."""
import logging
import random

from crypto_dashboard.constants import NARRATIVES
from crypto_dashboard.providers.core import AssetProviderABC, round2
from crypto_dashboard.schemas import Asset

logger = logging.getLogger(__name__)

# (id, name, symbol, categories) for the head of the catalog, in rank order.
KNOWN_COINS: tuple[tuple[str, str, str, tuple[str, ...]], ...] = (
    ("bitcoin", "Bitcoin", "BTC", ("L1",)),
    ("ethereum", "Ethereum", "ETH", ("L1", "DeFi")),
    ("solana", "Solana", "SOL", ("L1",)),
    ("binancecoin", "BNB", "BNB", ("Exchange", "L1")),
    ("chainlink", "Chainlink", "LINK", ("Oracle", "Infra")),
    ("arbitrum", "Arbitrum", "ARB", ("L2",)),
    ("dogecoin", "Dogecoin", "DOGE", ("Meme",)),
    ("pepe", "Pepe", "PEPE", ("Meme",)),
    ("render-token", "Render", "RENDER", ("AI", "Infra")),
    ("fetch-ai", "Fetch.ai", "FET", ("AI",)),
    ("ondo-finance", "Ondo", "ONDO", ("RWA", "DeFi")),
    ("immutable-x", "Immutable", "IMX", ("Gaming", "L2")),
    ("monero", "Monero", "XMR", ("Privacy",)),
    ("uniswap", "Uniswap", "UNI", ("DeFi", "Exchange")),
    ("friend-tech", "Friend.tech", "FRIEND", ("SocialFi",)),
)


class MockAssetProvider(AssetProviderABC):
    """Generates a catalog of `count` assets; refresh() simulates a market tick.

    Identity fields (id, name, symbol, rank, categories) are fixed at
    construction. Market fields are re-drawn on every refresh.
    """

    def __init__(self, count: int = 200, seed: int | None = None) -> None:
        if count < 1:
            raise ValueError("Asset count must be positive")
        self._rng = random.Random(seed)
        self._identities = self._build_identities(count)
        self._assets = [self._draw(*identity) for identity in self._identities]

    def _build_identities(
        self, count: int
    ) -> list[tuple[str, str, str, int, list[str]]]:
        identities = []
        for rank in range(1, count + 1):
            if rank <= len(KNOWN_COINS):
                coin_id, name, symbol, categories = KNOWN_COINS[rank - 1]
                identities.append((coin_id, name, symbol, rank, list(categories)))
            else:
                identities.append(
                    (f"coin-{rank}", f"Asset {rank}", f"TICKER{rank}", rank,
                     self._random_categories())
                )
        return identities

    def _random_categories(self) -> list[str]:
        return self._rng.sample(NARRATIVES, self._rng.randint(1, 2))

    def _random_change(self) -> float:
        return self._rng.uniform(-10.0, 10.0)

    def _draw(
        self, coin_id: str, name: str, symbol: str, rank: int, categories: list[str]
    ) -> Asset:
        return Asset(
            id=coin_id,
            name=name,
            symbol=symbol,
            rank=rank,
            price=round(self._rng.uniform(0.0, 50_000.0), 6),
            change_1h=round2(self._random_change() / 5),
            change_12h=round2(self._random_change() / 2),
            change_24h=round2(self._random_change()),
            change_7d=round2(self._random_change() * 2),
            volume_24h=round2(self._rng.uniform(0.0, 1e9)),
            market_cap=round2(self._rng.uniform(0.0, 5e11)),
            categories=categories,
        )

    async def get_assets(self) -> list[Asset]:
        return list(self._assets)

    async def refresh(self) -> None:
        self._assets = [self._draw(*identity) for identity in self._identities]
        logger.debug("Simulated market tick for %d assets", len(self._assets))
