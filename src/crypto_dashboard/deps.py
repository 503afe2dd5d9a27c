"""FastAPI dependency injection: app.state.container holds the singletons.

create_app() (main.py) attaches the Container; these getters are used by Depends().
"""
from typing import Annotated

from fastapi import Depends, Request

from crypto_dashboard.container import Container
from crypto_dashboard.services import (AssetRepository, DashboardController,
                                       RefreshConfigManager, WatchlistManager)


def _container(request: Request) -> Container:
    return request.app.state.container


def get_asset_repository(request: Request) -> AssetRepository:
    """Resolve the AssetRepository singleton."""
    return _container(request).asset_repository()


def get_watchlist_manager(request: Request) -> WatchlistManager:
    """Resolve the WatchlistManager singleton."""
    return _container(request).watchlist_manager()


def get_refresh_config_manager(request: Request) -> RefreshConfigManager:
    """Resolve the RefreshConfigManager singleton."""
    return _container(request).refresh_config_manager()


def get_dashboard_controller(request: Request) -> DashboardController:
    """Resolve the session DashboardController."""
    return _container(request).dashboard_controller()


def get_top_slice_limit(request: Request) -> int:
    return _container(request).settings().top_slice_limit


# Type aliases for route injection
AssetRepositoryDep = Annotated[AssetRepository, Depends(get_asset_repository)]
WatchlistManagerDep = Annotated[WatchlistManager, Depends(get_watchlist_manager)]
RefreshConfigManagerDep = Annotated[RefreshConfigManager, Depends(get_refresh_config_manager)]
DashboardControllerDep = Annotated[DashboardController, Depends(get_dashboard_controller)]
TopSliceLimit = Annotated[int, Depends(get_top_slice_limit)]
