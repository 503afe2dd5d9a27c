"""Service layer: the dashboard store (repository and managers), pure
derivations, and the session controller that orchestrates them.
"""
from crypto_dashboard.services.asset_repository import AssetRepository
from crypto_dashboard.services.controller import DashboardController
from crypto_dashboard.services.error_mapper import ServiceErrorMapper
from crypto_dashboard.services.refresh_configs import RefreshConfigManager
from crypto_dashboard.services.watchlists import WatchlistManager

__all__ = [
    "AssetRepository",
    "DashboardController",
    "RefreshConfigManager",
    "ServiceErrorMapper",
    "WatchlistManager",
]
