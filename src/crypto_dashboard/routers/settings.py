"""Refresh configuration routes.

PATCH accepts interval edits on disabled streams; the dashboard routes
(controller) are the ones that refuse them.
"""
from fastapi import APIRouter

from crypto_dashboard.deps import RefreshConfigManagerDep
from crypto_dashboard.schemas import RefreshConfig, RefreshConfigUpdate
from crypto_dashboard.services import ServiceErrorMapper
from crypto_dashboard.services.exceptions import DashboardError

router = APIRouter(prefix="/settings", tags=["settings"])

_errors = ServiceErrorMapper()


@router.get("/refresh-configs", response_model=list[RefreshConfig])
async def list_refresh_configs(manager: RefreshConfigManagerDep) -> list[RefreshConfig]:
    """Configs in display order."""
    return await manager.list_configs()


@router.patch("/refresh-configs/{config_id}", response_model=list[RefreshConfig])
async def update_refresh_config(
    config_id: str, body: RefreshConfigUpdate, manager: RefreshConfigManagerDep
) -> list[RefreshConfig]:
    """Apply a partial update. Returns every config, since price cascades."""
    try:
        return await manager.update(config_id, body)
    except DashboardError as exc:
        _errors.raise_http(exc)
