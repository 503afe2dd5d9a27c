"""Dashboard controller: session state, serialized actions and rendered views.

The controller holds read-only snapshots of the store's collections and
replaces them only with values returned by the managers. Mutating actions
share one in-flight flag; a second action (or a refresh) issued while one is
pending is rejected instead of queued.
"""
import asyncio
import logging
from collections.abc import Awaitable, Callable
from dataclasses import dataclass

from crypto_dashboard.constants import (DASHBOARD_VIEW, NARRATIVES,
                                        SETTINGS_VIEW, TOP_SLICE_LIMIT)
from crypto_dashboard.schemas import (ActionResult, ActionStatus, Asset,
                                      CategoryTrend, DashboardSnapshot,
                                      HeatmapMode, MovementFilter,
                                      RefreshConfig, RefreshConfigUpdate,
                                      SortDirection, StreamId, TableQuery,
                                      Watchlist)
from crypto_dashboard.services.asset_repository import AssetRepository
from crypto_dashboard.services.derivation import (compute_category_trends,
                                                  derive_table_view, heat_label,
                                                  toggle_sort)
from crypto_dashboard.services.exceptions import (NoMatchesError,
                                                  NotFoundError,
                                                  ValidationRejectedError)
from crypto_dashboard.services.refresh_configs import RefreshConfigManager
from crypto_dashboard.services.watchlists import WatchlistManager

logger = logging.getLogger(__name__)

OK = ActionResult(status=ActionStatus.OK)


def _invalid(message: str) -> ActionResult:
    return ActionResult(status=ActionStatus.INVALID, message=message)


@dataclass(frozen=True)
class _SavedState:
    view: str
    watchlists: list[Watchlist]
    refresh_configs: list[RefreshConfig]


class DashboardController:
    """Owns the state behind one dashboard session."""

    def __init__(
        self,
        assets: AssetRepository,
        watchlists: WatchlistManager,
        refresh_configs: RefreshConfigManager,
        *,
        top_slice_limit: int = TOP_SLICE_LIMIT,
    ) -> None:
        self._asset_repo = assets
        self._watchlist_manager = watchlists
        self._config_manager = refresh_configs
        self._top_slice_limit = top_slice_limit

        self.view: str = DASHBOARD_VIEW
        self.assets: list[Asset] = []
        self.watchlists: list[Watchlist] = []
        self.refresh_configs: list[RefreshConfig] = []
        self.is_loading = True
        self.is_refreshing = False
        # is_loading starts True before any load runs; this tracks a running one.
        self._load_in_flight = False
        self.is_action_loading = False
        self.heatmap_mode = HeatmapMode.TREND
        self.table_query = TableQuery()

    # ---- Loading ----
    async def _fetch(self) -> None:
        assets, watchlists, configs = await asyncio.gather(
            self._asset_repo.list_assets(),
            self._watchlist_manager.list_watchlists(),
            self._config_manager.list_configs(),
        )
        self.assets = assets
        self.watchlists = watchlists
        self.refresh_configs = configs
        self._drop_dangling_view()

    async def load(self) -> ActionResult:
        """Initial, blocking load. Existing data is kept if it fails."""
        if self._load_in_flight or self.is_refreshing or self.is_action_loading:
            return self._busy()
        self._load_in_flight = True
        self.is_loading = True
        try:
            await self._fetch()
        except Exception:  # pylint: disable=broad-except
            logger.exception("Failed to load dashboard data")
            return ActionResult(status=ActionStatus.FAILED, message="Failed to load data")
        finally:
            self._load_in_flight = False
            self.is_loading = False
        return OK

    async def refresh(self) -> ActionResult:
        """Manual refresh; stale data stays visible until new data arrives."""
        if self.busy:
            return self._busy()
        self.is_refreshing = True
        try:
            await self._fetch()
        except Exception:  # pylint: disable=broad-except
            logger.exception("Failed to refresh dashboard data")
            return ActionResult(status=ActionStatus.FAILED, message="Failed to refresh data")
        finally:
            self.is_refreshing = False
        return OK

    @property
    def busy(self) -> bool:
        return self.is_loading or self.is_refreshing or self.is_action_loading

    @staticmethod
    def _busy() -> ActionResult:
        return ActionResult(
            status=ActionStatus.REJECTED, message="Another action is in progress"
        )

    # ---- Serialized actions ----
    def _save(self) -> _SavedState:
        return _SavedState(
            view=self.view,
            watchlists=list(self.watchlists),
            refresh_configs=list(self.refresh_configs),
        )

    def _restore(self, saved: _SavedState) -> None:
        self.view = saved.view
        self.watchlists = saved.watchlists
        self.refresh_configs = saved.refresh_configs

    async def _resync(self) -> None:
        try:
            self.watchlists, self.refresh_configs = await asyncio.gather(
                self._watchlist_manager.list_watchlists(),
                self._config_manager.list_configs(),
            )
        except Exception as exc:  # pylint: disable=broad-except
            logger.warning("Re-sync after failed action did not complete: %s", exc)
        self._drop_dangling_view()

    async def _run_action(
        self, label: str, action: Callable[[], Awaitable[ActionResult]]
    ) -> ActionResult:
        if self.busy:
            return self._busy()
        self.is_action_loading = True
        saved = self._save()
        try:
            return await action()
        except NoMatchesError as exc:
            self._restore(saved)
            return ActionResult(status=ActionStatus.NO_MATCHES, message=str(exc))
        except ValidationRejectedError as exc:
            self._restore(saved)
            return _invalid(str(exc))
        except NotFoundError as exc:
            self._restore(saved)
            logger.warning("%s failed: %s", label, exc)
            await self._resync()
            return ActionResult(status=ActionStatus.NOT_FOUND, message=str(exc))
        except Exception:  # pylint: disable=broad-except
            logger.exception("%s failed", label)
            self._restore(saved)
            return ActionResult(status=ActionStatus.FAILED, message=f"{label} failed")
        finally:
            self.is_action_loading = False

    def _replace_watchlist(self, updated: Watchlist) -> None:
        self.watchlists = [updated if w.id == updated.id else w for w in self.watchlists]

    async def create_watchlist(self, name: str) -> ActionResult:
        """Create a watchlist and navigate to it."""
        if not name.strip():
            return _invalid("Watchlist name must not be blank")

        async def action() -> ActionResult:
            created = await self._watchlist_manager.create(name)
            if not any(w.id == created.id for w in self.watchlists):
                self.watchlists = [*self.watchlists, created]
            self.view = created.id
            return ActionResult(status=ActionStatus.OK, message=f"Created '{created.name}'")

        return await self._run_action("Create watchlist", action)

    async def rename_watchlist(self, watchlist_id: str, name: str) -> ActionResult:
        if not name.strip():
            return _invalid("Watchlist name must not be blank")

        async def action() -> ActionResult:
            self._replace_watchlist(
                await self._watchlist_manager.rename(watchlist_id, name)
            )
            return OK

        return await self._run_action("Rename watchlist", action)

    async def delete_watchlist(self, watchlist_id: str) -> ActionResult:
        """Delete a watchlist; viewing it sends the view back to the dashboard."""

        async def action() -> ActionResult:
            await self._watchlist_manager.delete(watchlist_id)
            self.watchlists = [w for w in self.watchlists if w.id != watchlist_id]
            if self.view == watchlist_id:
                self.view = DASHBOARD_VIEW
            return OK

        return await self._run_action("Delete watchlist", action)

    async def import_coins(self, watchlist_id: str, query: str) -> ActionResult:
        """Resolve tickers/names and merge the matches into a watchlist."""
        if not query.strip():
            return _invalid("Enter at least one ticker or name")

        async def action() -> ActionResult:
            found = await self._asset_repo.find_by_query(query)
            if not found:
                raise NoMatchesError(query)
            self._replace_watchlist(
                await self._watchlist_manager.merge_coin_ids(watchlist_id, found)
            )
            return ActionResult(
                status=ActionStatus.OK, message=f"Imported {len(found)} assets"
            )

        return await self._run_action("Import coins", action)

    async def update_note(self, coin_id: str, text: str) -> ActionResult:
        """Set the note for a coin on the watchlist being viewed."""
        active = self.active_watchlist
        if active is None:
            return _invalid("Notes can only be edited on a watchlist")

        async def action() -> ActionResult:
            self._replace_watchlist(
                await self._watchlist_manager.set_note(active.id, coin_id, text)
            )
            return OK

        return await self._run_action("Update note", action)

    def _config(self, config_id: StreamId | str) -> RefreshConfig | None:
        return next((c for c in self.refresh_configs if c.id == config_id), None)

    async def _update_config(
        self, config_id: StreamId | str, update: RefreshConfigUpdate
    ) -> ActionResult:
        async def action() -> ActionResult:
            self.refresh_configs = await self._config_manager.update(config_id, update)
            return OK

        return await self._run_action("Update refresh config", action)

    async def set_refresh_enabled(
        self, config_id: StreamId | str, enabled: bool
    ) -> ActionResult:
        return await self._update_config(config_id, RefreshConfigUpdate(enabled=enabled))

    async def toggle_refresh_config(self, config_id: StreamId | str) -> ActionResult:
        current = self._config(config_id)
        if current is None:
            return ActionResult(
                status=ActionStatus.NOT_FOUND,
                message=f"Refresh config '{config_id}' not found",
            )
        return await self.set_refresh_enabled(current.id, not current.enabled)

    async def set_refresh_interval(
        self, config_id: StreamId | str, interval: str
    ) -> ActionResult:
        """Change a stream's interval. Disabled streams cannot be edited."""
        current = self._config(config_id)
        if current is None:
            return ActionResult(
                status=ActionStatus.NOT_FOUND,
                message=f"Refresh config '{config_id}' not found",
            )
        if not current.enabled:
            return _invalid(f"{current.name} is disabled")
        if interval not in current.allowed_intervals:
            return _invalid(f"Interval {interval!r} is not allowed for {current.name}")
        return await self._update_config(current.id, RefreshConfigUpdate(interval=interval))

    # ---- Local view state ----
    def _drop_dangling_view(self) -> None:
        if self.view not in (DASHBOARD_VIEW, SETTINGS_VIEW) and self.active_watchlist is None:
            self.view = DASHBOARD_VIEW

    def navigate(self, view: str) -> ActionResult:
        if view in (DASHBOARD_VIEW, SETTINGS_VIEW) or any(w.id == view for w in self.watchlists):
            self.view = view
            return OK
        return ActionResult(status=ActionStatus.NOT_FOUND, message=f"Unknown view '{view}'")

    def select_category(self, category: str | None) -> ActionResult:
        if category is not None and category not in NARRATIVES:
            return _invalid(f"Unknown category '{category}'")
        self.table_query = self.table_query.model_copy(update={"category": category})
        return OK

    def toggle_category(self, category: str) -> ActionResult:
        """Heatmap tile click: selects the category, or clears it if already selected."""
        if self.table_query.category == category:
            return self.select_category(None)
        return self.select_category(category)

    def set_heatmap_mode(self, mode: HeatmapMode) -> None:
        self.heatmap_mode = mode

    def set_table_controls(
        self,
        *,
        search: str | None = None,
        movement: MovementFilter | None = None,
        sort_key: str | None = None,
        sort_direction: SortDirection | None = None,
    ) -> None:
        changes = {
            "search": search,
            "movement": movement,
            "sort_key": sort_key,
            "sort_direction": sort_direction,
        }
        self.table_query = self.table_query.model_copy(
            update={k: v for k, v in changes.items() if v is not None}
        )

    def sort_by(self, sort_key: str) -> None:
        self.table_query = toggle_sort(self.table_query, sort_key)

    # ---- Derived views ----
    @property
    def selected_category(self) -> str | None:
        return self.table_query.category

    @property
    def active_watchlist(self) -> Watchlist | None:
        return next((w for w in self.watchlists if w.id == self.view), None)

    def table_view(self) -> list[Asset]:
        if self.view == SETTINGS_VIEW:
            return []
        return derive_table_view(
            self.assets,
            self.table_query,
            watchlist=self.active_watchlist,
            limit=self._top_slice_limit,
        )

    def category_trends(self) -> list[CategoryTrend]:
        return compute_category_trends(self.assets)

    def title(self) -> str:
        if self.view == SETTINGS_VIEW:
            return "Application Settings"
        if self.view == DASHBOARD_VIEW:
            return f"Top {self._top_slice_limit} Movers"
        active = self.active_watchlist
        return active.name if active else "Watchlist"

    def snapshot(self) -> DashboardSnapshot:
        trends = self.category_trends()
        return DashboardSnapshot(
            view=self.view,
            title=self.title(),
            is_loading=self.is_loading,
            is_refreshing=self.is_refreshing,
            is_action_loading=self.is_action_loading,
            selected_category=self.selected_category,
            heatmap_mode=self.heatmap_mode,
            table_query=self.table_query,
            watchlists=self.watchlists,
            refresh_configs=self.refresh_configs,
            rows=self.table_view(),
            trends=trends,
            heat_labels={t.category: heat_label(t, self.heatmap_mode) for t in trends},
            asset_count=len(self.assets),
            active_watchlist=self.active_watchlist,
        )
