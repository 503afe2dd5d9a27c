"""Abstract base class for asset catalog providers."""
from abc import ABC, abstractmethod

from crypto_dashboard.schemas import Asset


class AssetProviderABC(ABC):
    """Base interface for all asset catalog providers.

    A provider answers with a full replacement snapshot of the catalog on every
    call; the repository layer owns ordering and lookups.
    """

    @abstractmethod
    async def get_assets(self) -> list[Asset]:
        """Fetch the full asset catalog.

        Returns:
            Every known asset. Order is not guaranteed.
        """

    @abstractmethod
    async def refresh(self) -> None:
        """Force refresh market fields (re-fetch, re-connect or re-simulate)."""

    async def close(self) -> None:
        """Clean up resources (connections, clients).

        Override in subclasses if cleanup is needed.
        """

    async def __aenter__(self) -> "AssetProviderABC":
        """Async context manager entry."""
        return self

    async def __aexit__(self, exc_type, exc_val, exc_tb) -> None:  # noqa: ANN001
        """Async context manager exit - calls close()."""
        await self.close()
