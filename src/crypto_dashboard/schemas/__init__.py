"""Pydantic schemas for API and runtime use. Not persisted."""
from datetime import datetime
from enum import Enum

from pydantic import BaseModel, ConfigDict, Field


class StreamId(str, Enum):
    """Data streams whose refresh cadence is configurable."""

    PRICE = "price"
    CHANGE = "change"
    VOLUME = "volume"
    MARKET_CAP = "marketCap"
    CATEGORIES = "categories"


class SortDirection(str, Enum):
    ASC = "asc"
    DESC = "desc"


class MovementFilter(str, Enum):
    """Gainer/loser filter applied to the 24h change."""

    ALL = "all"
    GAINERS = "gainers"
    LOSERS = "losers"


class HeatLevel(str, Enum):
    HIGHEST = "highest"
    HIGH = "high"
    MEDIUM = "medium"
    LOW = "low"


class HeatmapMode(str, Enum):
    TREND = "trend"
    COUNT = "count"


class ActionStatus(str, Enum):
    """Outcome of a dashboard action."""

    OK = "ok"
    REJECTED = "rejected"  # another action is in flight
    INVALID = "invalid"
    NO_MATCHES = "no_matches"
    NOT_FOUND = "not_found"
    FAILED = "failed"


class Asset(BaseModel):
    """A tracked coin/token. Immutable per fetch."""

    model_config = ConfigDict(frozen=True)

    id: str
    name: str
    symbol: str
    rank: int = Field(gt=0)
    price: float = Field(ge=0)
    change_1h: float
    change_12h: float
    change_24h: float
    change_7d: float
    volume_24h: float = Field(ge=0)
    market_cap: float = Field(ge=0)
    categories: list[str] = Field(min_length=1)


class Watchlist(BaseModel):
    """User-curated named set of asset ids with per-asset notes.

    coin_ids may reference assets that are no longer in the catalog.
    """

    id: str
    name: str
    coin_ids: list[str] = Field(default_factory=list)
    notes_by_coin_id: dict[str, str] = Field(default_factory=dict)


class RefreshConfig(BaseModel):
    """Refresh settings for one data stream."""

    id: StreamId
    name: str
    source: str
    enabled: bool = True
    interval: str
    recommended: str
    allowed_intervals: list[str] = Field(min_length=1)
    last_updated: datetime


class RefreshConfigUpdate(BaseModel):
    """Partial update for a RefreshConfig."""

    enabled: bool | None = None
    interval: str | None = None


class CategoryTrend(BaseModel):
    """Aggregate of one narrative tag over the full asset set."""

    category: str
    coin_count: int
    trend_score: float
    top_coins: list[Asset]
    heat_level: HeatLevel


class TableQuery(BaseModel):
    """Table controls: search, sort and filters."""

    search: str = ""
    sort_key: str = "change_24h"
    sort_direction: SortDirection = SortDirection.DESC
    movement: MovementFilter = MovementFilter.ALL
    category: str | None = None


class WatchlistName(BaseModel):
    name: str


class CoinIds(BaseModel):
    coin_ids: list[str]


class NoteText(BaseModel):
    text: str = ""


class ImportQuery(BaseModel):
    query: str


class ImportResult(BaseModel):
    """Ids matched by an import query and the resulting watchlist."""

    matched_ids: list[str]
    watchlist: Watchlist


class ActionResult(BaseModel):
    model_config = ConfigDict(frozen=True)

    status: ActionStatus
    message: str = ""

    @property
    def ok(self) -> bool:
        return self.status is ActionStatus.OK


class DashboardSnapshot(BaseModel):
    """Everything the dashboard renders for the current view."""

    view: str
    title: str
    is_loading: bool
    is_refreshing: bool
    is_action_loading: bool
    selected_category: str | None
    heatmap_mode: HeatmapMode
    table_query: TableQuery
    watchlists: list[Watchlist]
    refresh_configs: list[RefreshConfig]
    rows: list[Asset]
    trends: list[CategoryTrend]
    heat_labels: dict[str, str]
    asset_count: int
    active_watchlist: Watchlist | None = None


class ActionResponse(BaseModel):
    result: ActionResult
    state: DashboardSnapshot


__all__ = [
    "ActionResponse",
    "ActionResult",
    "ActionStatus",
    "Asset",
    "CategoryTrend",
    "CoinIds",
    "DashboardSnapshot",
    "HeatLevel",
    "HeatmapMode",
    "ImportQuery",
    "ImportResult",
    "MovementFilter",
    "NoteText",
    "RefreshConfig",
    "RefreshConfigUpdate",
    "SortDirection",
    "StreamId",
    "TableQuery",
    "Watchlist",
    "WatchlistName",
]
