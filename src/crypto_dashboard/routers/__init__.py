"""API routers for the dashboard service.

Includes routes for:
- /assets - Asset catalog, ticker lookup, derived table and narrative trends
- /watchlists - Watchlist CRUD, coin ids, notes and import
- /settings - Data stream refresh configuration
- /dashboard - Session controller (view state and serialized actions)
"""
from crypto_dashboard.routers.assets import router as assets_router
from crypto_dashboard.routers.dashboard import router as dashboard_router
from crypto_dashboard.routers.settings import router as settings_router
from crypto_dashboard.routers.watchlists import router as watchlists_router

__all__ = [
    "assets_router",
    "dashboard_router",
    "settings_router",
    "watchlists_router",
]
