"""DI container: the composition root for the dashboard store and controller.

The app keeps one Container on app.state; deps.py resolves singletons from it.
"""
from dependency_injector import containers, providers

from crypto_dashboard.config import load_settings
from crypto_dashboard.constants import initial_watchlists
from crypto_dashboard.providers import MockAssetProvider
from crypto_dashboard.services import (AssetRepository, DashboardController,
                                       RefreshConfigManager, WatchlistManager)


class Container(containers.DeclarativeContainer):
    settings = providers.Singleton(load_settings)

    asset_provider = providers.Singleton(
        MockAssetProvider,
        count=settings.provided.asset_count,
        seed=settings.provided.seed,
    )

    asset_repository = providers.Singleton(
        AssetRepository,
        asset_provider,
        latency=settings.provided.latency_seconds,
    )
    watchlist_manager = providers.Singleton(
        WatchlistManager,
        providers.Callable(initial_watchlists),
        latency=settings.provided.latency_seconds,
    )
    refresh_config_manager = providers.Singleton(
        RefreshConfigManager,
        latency=settings.provided.latency_seconds,
    )

    dashboard_controller = providers.Singleton(
        DashboardController,
        assets=asset_repository,
        watchlists=watchlist_manager,
        refresh_configs=refresh_config_manager,
        top_slice_limit=settings.provided.top_slice_limit,
    )


def init_container() -> Container:
    """Create a container with settings from the environment."""
    return Container()
