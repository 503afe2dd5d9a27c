"""Core provider abstractions."""
from crypto_dashboard.providers.core.asset_provider_abc import AssetProviderABC
from crypto_dashboard.providers.core.utils import round2

__all__ = [
    "AssetProviderABC",
    "round2",
]
