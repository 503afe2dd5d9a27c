"""Asset repository: rank-ordered catalog snapshots and query lookups."""
import logging
from operator import attrgetter

from crypto_dashboard.constants import TOP_SLICE_LIMIT
from crypto_dashboard.providers.core import AssetProviderABC
from crypto_dashboard.schemas import Asset
from crypto_dashboard.services.exceptions import NotFoundError, ServiceFailureError
from crypto_dashboard.services.utils import simulate_latency, tokenize_query

logger = logging.getLogger(__name__)


class AssetRepository:
    """Read-side access to the asset catalog.

    Every read returns a fresh list in rank order, so callers may slice the
    head of it as the market-cap top N.
    """

    def __init__(self, provider: AssetProviderABC, *, latency: float = 0.0) -> None:
        self._provider = provider
        self._latency = latency

    async def _catalog(self) -> list[Asset]:
        assets = await self._provider.get_assets()
        return sorted(assets, key=attrgetter("rank"))

    async def list_assets(self) -> list[Asset]:
        """Return a snapshot of the full catalog in rank order."""
        await simulate_latency(self._latency)
        return await self._catalog()

    async def get_asset(self, asset_id: str) -> Asset:
        for asset in await self._catalog():
            if asset.id == asset_id:
                return asset
        raise NotFoundError("Asset", asset_id)

    async def find_by_query(self, text: str) -> list[str]:
        """Resolve a free-text list of tickers/names to asset ids.

        Each token matches the first asset (in rank order) whose symbol or
        full name equals it case-insensitively. Ids are de-duplicated and
        keep the order in which their tokens first matched. An empty list
        means nothing matched.
        """
        await simulate_latency(self._latency)
        catalog = await self._catalog()
        found: list[str] = []
        for token in tokenize_query(text):
            match = next(
                (
                    a for a in catalog
                    if a.symbol.lower() == token or a.name.lower() == token
                ),
                None,
            )
            if match is not None and match.id not in found:
                found.append(match.id)
        logger.debug("Query %r matched %d assets", text, len(found))
        return found

    async def top_movers(self, limit: int = TOP_SLICE_LIMIT) -> list[Asset]:
        """Assets ordered by 24h change, biggest gainers first."""
        await simulate_latency(self._latency)
        assets = await self._catalog()
        return sorted(assets, key=attrgetter("change_24h"), reverse=True)[:limit]

    async def refresh(self) -> None:
        """Ask the provider for a market tick."""
        try:
            await self._provider.refresh()
        except Exception as exc:
            raise ServiceFailureError("Asset provider refresh failed") from exc

    async def close(self) -> None:
        await self._provider.close()
