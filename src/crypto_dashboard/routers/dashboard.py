"""Dashboard session routes: thin handlers over DashboardController.

Every action answers 200 with {result, state}; result.status tells the client
whether the action ran, was rejected (another action in flight), was invalid,
found nothing, or failed.
"""
from fastapi import APIRouter
from pydantic import BaseModel

from crypto_dashboard.deps import DashboardControllerDep
from crypto_dashboard.schemas import (ActionResponse, ActionResult,
                                      ActionStatus, DashboardSnapshot,
                                      HeatmapMode, ImportQuery,
                                      MovementFilter, NoteText, SortDirection,
                                      WatchlistName)
from crypto_dashboard.services import DashboardController

router = APIRouter(prefix="/dashboard", tags=["dashboard"])


class ViewSelection(BaseModel):
    view: str


class CategorySelection(BaseModel):
    category: str | None = None


class HeatmapModeSelection(BaseModel):
    mode: HeatmapMode


class TableControls(BaseModel):
    search: str | None = None
    movement: MovementFilter | None = None
    sort_key: str | None = None
    sort_direction: SortDirection | None = None


class IntervalSelection(BaseModel):
    interval: str


def _respond(controller: DashboardController, result: ActionResult) -> ActionResponse:
    return ActionResponse(result=result, state=controller.snapshot())


def _ok(controller: DashboardController) -> ActionResponse:
    return _respond(controller, ActionResult(status=ActionStatus.OK))


@router.get("", response_model=DashboardSnapshot)
async def get_dashboard(controller: DashboardControllerDep) -> DashboardSnapshot:
    """Current view, collections, flags, table rows and narrative trends."""
    return controller.snapshot()


@router.post("/load", response_model=ActionResponse)
async def load(controller: DashboardControllerDep) -> ActionResponse:
    return _respond(controller, await controller.load())


@router.post("/refresh", response_model=ActionResponse)
async def refresh(controller: DashboardControllerDep) -> ActionResponse:
    return _respond(controller, await controller.refresh())


@router.put("/view", response_model=ActionResponse)
async def navigate(body: ViewSelection, controller: DashboardControllerDep) -> ActionResponse:
    """Switch to 'dashboard', 'settings' or a watchlist id."""
    return _respond(controller, controller.navigate(body.view))


@router.put("/category", response_model=ActionResponse)
async def select_category(
    body: CategorySelection, controller: DashboardControllerDep
) -> ActionResponse:
    return _respond(controller, controller.select_category(body.category))


@router.post("/category/{category}/toggle", response_model=ActionResponse)
async def toggle_category(category: str, controller: DashboardControllerDep) -> ActionResponse:
    """Heatmap tile click."""
    return _respond(controller, controller.toggle_category(category))


@router.put("/heatmap-mode", response_model=ActionResponse)
async def set_heatmap_mode(
    body: HeatmapModeSelection, controller: DashboardControllerDep
) -> ActionResponse:
    controller.set_heatmap_mode(body.mode)
    return _ok(controller)


@router.patch("/table", response_model=ActionResponse)
async def set_table_controls(
    body: TableControls, controller: DashboardControllerDep
) -> ActionResponse:
    controller.set_table_controls(**body.model_dump(exclude_none=True))
    return _ok(controller)


@router.post("/sort/{sort_key}", response_model=ActionResponse)
async def sort_by(sort_key: str, controller: DashboardControllerDep) -> ActionResponse:
    """Column header click: same key flips direction, new key sorts descending."""
    controller.sort_by(sort_key)
    return _ok(controller)


@router.post("/watchlists", response_model=ActionResponse)
async def create_watchlist(
    body: WatchlistName, controller: DashboardControllerDep
) -> ActionResponse:
    return _respond(controller, await controller.create_watchlist(body.name))


@router.patch("/watchlists/{watchlist_id}", response_model=ActionResponse)
async def rename_watchlist(
    watchlist_id: str, body: WatchlistName, controller: DashboardControllerDep
) -> ActionResponse:
    return _respond(controller, await controller.rename_watchlist(watchlist_id, body.name))


@router.delete("/watchlists/{watchlist_id}", response_model=ActionResponse)
async def delete_watchlist(
    watchlist_id: str, controller: DashboardControllerDep
) -> ActionResponse:
    return _respond(controller, await controller.delete_watchlist(watchlist_id))


@router.post("/watchlists/{watchlist_id}/import", response_model=ActionResponse)
async def import_coins(
    watchlist_id: str, body: ImportQuery, controller: DashboardControllerDep
) -> ActionResponse:
    return _respond(controller, await controller.import_coins(watchlist_id, body.query))


@router.put("/notes/{coin_id}", response_model=ActionResponse)
async def update_note(
    coin_id: str, body: NoteText, controller: DashboardControllerDep
) -> ActionResponse:
    """Edit a note on the watchlist currently being viewed."""
    return _respond(controller, await controller.update_note(coin_id, body.text))


@router.post("/refresh-configs/{config_id}/toggle", response_model=ActionResponse)
async def toggle_refresh_config(
    config_id: str, controller: DashboardControllerDep
) -> ActionResponse:
    return _respond(controller, await controller.toggle_refresh_config(config_id))


@router.put("/refresh-configs/{config_id}/interval", response_model=ActionResponse)
async def set_refresh_interval(
    config_id: str, body: IntervalSelection, controller: DashboardControllerDep
) -> ActionResponse:
    return _respond(
        controller, await controller.set_refresh_interval(config_id, body.interval)
    )
