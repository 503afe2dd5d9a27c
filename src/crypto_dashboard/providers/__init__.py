"""Asset catalog providers.

Available providers:
- MockAssetProvider: seeded simulated catalog (no network)
"""
from crypto_dashboard.providers.core import AssetProviderABC
from crypto_dashboard.providers.mock import MockAssetProvider

__all__ = [
    "AssetProviderABC",
    "MockAssetProvider",
]
