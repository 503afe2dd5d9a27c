"""Pure derivations over the asset catalog: table views and narrative trends.

No I/O. Inputs are the rank-ordered asset list from the repository plus the
active watchlist and table controls; outputs are new lists, inputs are never
reordered in place.

Table pipeline, in order:
    scope (watchlist or top slice) -> category -> text -> movement -> sort

Narrative trends are always computed over the full catalog, not the table.
"""
from collections.abc import Iterable, Sequence
from operator import attrgetter

from crypto_dashboard.constants import NARRATIVES, TOP_SLICE_LIMIT
from crypto_dashboard.schemas import (Asset, CategoryTrend, HeatLevel,
                                      HeatmapMode, MovementFilter,
                                      SortDirection, TableQuery, Watchlist)

SORTABLE_FIELDS: frozenset[str] = frozenset({
    "rank",
    "price",
    "change_1h",
    "change_12h",
    "change_24h",
    "change_7d",
    "volume_24h",
    "market_cap",
})

TOP_COINS_PER_TREND = 3


def top_slice(assets: Sequence[Asset], limit: int = TOP_SLICE_LIMIT) -> list[Asset]:
    """First `limit` assets in the given (rank) order; never re-sorted."""
    return list(assets[:limit])


def select_scope(
    assets: Sequence[Asset],
    watchlist: Watchlist | None = None,
    limit: int = TOP_SLICE_LIMIT,
) -> list[Asset]:
    """Watchlist members in catalog order, or the top slice without a watchlist.

    Stale watchlist ids (not in the catalog) simply drop out.
    """
    if watchlist is None:
        return top_slice(assets, limit)
    members = set(watchlist.coin_ids)
    return [a for a in assets if a.id in members]


def filter_by_category(assets: Iterable[Asset], category: str | None) -> list[Asset]:
    if not category:
        return list(assets)
    return [a for a in assets if category in a.categories]


def filter_by_text(assets: Iterable[Asset], search: str) -> list[Asset]:
    """Case-insensitive substring match on name or symbol."""
    needle = search.lower()
    return [
        a for a in assets
        if needle in a.name.lower() or needle in a.symbol.lower()
    ]


def filter_by_movement(assets: Iterable[Asset], movement: MovementFilter) -> list[Asset]:
    if movement is MovementFilter.GAINERS:
        return [a for a in assets if a.change_24h > 0]
    if movement is MovementFilter.LOSERS:
        return [a for a in assets if a.change_24h < 0]
    return list(assets)


def sort_assets(
    assets: Iterable[Asset],
    sort_key: str,
    direction: SortDirection = SortDirection.DESC,
) -> list[Asset]:
    """Stable sort by a numeric field; unknown or non-numeric keys keep order."""
    if sort_key not in SORTABLE_FIELDS:
        return list(assets)
    return sorted(
        assets,
        key=attrgetter(sort_key),
        reverse=direction is SortDirection.DESC,
    )


def toggle_sort(query: TableQuery, sort_key: str) -> TableQuery:
    """Header click: same key flips direction, a new key starts descending."""
    if query.sort_key == sort_key:
        flipped = (
            SortDirection.ASC
            if query.sort_direction is SortDirection.DESC
            else SortDirection.DESC
        )
        return query.model_copy(update={"sort_direction": flipped})
    return query.model_copy(
        update={"sort_key": sort_key, "sort_direction": SortDirection.DESC}
    )


def derive_table_view(
    assets: Sequence[Asset],
    query: TableQuery,
    watchlist: Watchlist | None = None,
    limit: int = TOP_SLICE_LIMIT,
) -> list[Asset]:
    """Run the full table pipeline for the given controls."""
    rows = select_scope(assets, watchlist, limit)
    rows = filter_by_category(rows, query.category)
    rows = filter_by_text(rows, query.search)
    rows = filter_by_movement(rows, query.movement)
    return sort_assets(rows, query.sort_key, query.sort_direction)


def heat_level(score: float) -> HeatLevel:
    if score > 8:
        return HeatLevel.HIGHEST
    if score > 5:
        return HeatLevel.HIGH
    if score > 3:
        return HeatLevel.MEDIUM
    return HeatLevel.LOW


def heat_label(trend: CategoryTrend, mode: HeatmapMode) -> str:
    """Tile label for the heatmap display mode."""
    if mode is HeatmapMode.COUNT:
        return f"{trend.coin_count} assets"
    return f"+{trend.trend_score:.1f}%"


def category_trend(assets: Iterable[Asset], category: str) -> CategoryTrend:
    tagged = [a for a in assets if category in a.categories]
    score = (
        sum(abs(a.change_24h) for a in tagged) / len(tagged) if tagged else 0.0
    )
    top = sorted(tagged, key=attrgetter("change_24h"), reverse=True)
    return CategoryTrend(
        category=category,
        coin_count=len(tagged),
        trend_score=score,
        top_coins=top[:TOP_COINS_PER_TREND],
        heat_level=heat_level(score),
    )


def compute_category_trends(
    assets: Sequence[Asset],
    narratives: Iterable[str] = NARRATIVES,
) -> list[CategoryTrend]:
    """Per-narrative trends, hottest first. Ties keep narrative order."""
    trends = [category_trend(assets, category) for category in narratives]
    return sorted(trends, key=attrgetter("trend_score"), reverse=True)
