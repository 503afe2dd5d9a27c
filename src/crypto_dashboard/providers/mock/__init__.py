"""Simulated market data provider."""
from crypto_dashboard.providers.mock.mock_provider import (KNOWN_COINS,
                                                          MockAssetProvider)

__all__ = ["KNOWN_COINS", "MockAssetProvider"]
