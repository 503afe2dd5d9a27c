"""Asset catalog routes: raw catalog, lookups, and stateless derived views."""
import logging

from fastapi import APIRouter, HTTPException, Query

from crypto_dashboard.deps import (AssetRepositoryDep, TopSliceLimit,
                                   WatchlistManagerDep)
from crypto_dashboard.schemas import (Asset, CategoryTrend, MovementFilter,
                                      SortDirection, TableQuery)
from crypto_dashboard.services import ServiceErrorMapper
from crypto_dashboard.services.derivation import (compute_category_trends,
                                                  derive_table_view)
from crypto_dashboard.services.exceptions import DashboardError

logger = logging.getLogger(__name__)
router = APIRouter(prefix="/assets", tags=["assets"])

_errors = ServiceErrorMapper(api_name="Asset catalog")

# Route order: fixed paths before /{asset_id}.


@router.get("", response_model=list[Asset])
async def list_assets(repository: AssetRepositoryDep) -> list[Asset]:
    """Full catalog snapshot in rank order."""
    return await repository.list_assets()


@router.get("/search", response_model=list[str])
async def search_assets(
    repository: AssetRepositoryDep,
    q: str = Query(min_length=1, description="Tickers or names, comma/space separated"),
) -> list[str]:
    """Resolve tickers/names to asset ids. An empty list means no matches."""
    if not q.strip():
        raise HTTPException(status_code=422, detail="Query must not be blank")
    return await repository.find_by_query(q)


@router.get("/top-movers", response_model=list[Asset])
async def get_top_movers(
    repository: AssetRepositoryDep,
    limit: int = Query(default=200, ge=1, le=1000, description="Max results"),
) -> list[Asset]:
    """Assets sorted by 24h change, biggest gainers first."""
    return await repository.top_movers(limit)


@router.get("/table", response_model=list[Asset])
async def get_table_view(
    repository: AssetRepositoryDep,
    watchlists: WatchlistManagerDep,
    top_slice_limit: TopSliceLimit,
    search: str = Query(default=""),
    sort_key: str = Query(default="change_24h"),
    sort_direction: SortDirection = Query(default=SortDirection.DESC),
    movement: MovementFilter = Query(default=MovementFilter.ALL),
    category: str | None = Query(default=None),
    watchlist_id: str | None = Query(default=None, description="Scope to a watchlist"),
) -> list[Asset]:
    """Derived table rows: scope, category, text, movement, then sort."""
    query = TableQuery(
        search=search,
        sort_key=sort_key,
        sort_direction=sort_direction,
        movement=movement,
        category=category,
    )
    try:
        watchlist = await watchlists.get(watchlist_id) if watchlist_id else None
    except DashboardError as exc:
        _errors.raise_http(exc)
    assets = await repository.list_assets()
    return derive_table_view(assets, query, watchlist=watchlist, limit=top_slice_limit)


@router.get("/trends", response_model=list[CategoryTrend])
async def get_category_trends(repository: AssetRepositoryDep) -> list[CategoryTrend]:
    """Narrative heatmap over the full catalog, hottest first."""
    return compute_category_trends(await repository.list_assets())


@router.post("/refresh")
async def refresh_assets(repository: AssetRepositoryDep) -> dict[str, str]:
    """Force the provider to refresh market data."""
    try:
        await repository.refresh()
    except DashboardError as exc:
        logger.exception("Failed to refresh asset provider")
        _errors.raise_http(exc)
    return {"status": "refreshed"}


@router.get("/{asset_id}", response_model=Asset)
async def get_asset(asset_id: str, repository: AssetRepositoryDep) -> Asset:
    try:
        return await repository.get_asset(asset_id)
    except DashboardError as exc:
        _errors.raise_http(exc)
