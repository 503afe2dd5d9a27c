"""Domain errors raised by the dashboard managers and repository."""


class DashboardError(Exception):
    """Base class for dashboard domain errors."""


class NotFoundError(DashboardError):
    """Target watchlist, config or asset id does not exist."""

    def __init__(self, resource: str, key: str) -> None:
        super().__init__(f"{resource} '{key}' not found")
        self.resource = resource
        self.key = key


class ValidationRejectedError(DashboardError, ValueError):
    """Input rejected before it reaches the store (blank name, empty query, bad interval)."""


class NoMatchesError(DashboardError):
    """Import query resolved to zero asset ids."""

    def __init__(self, query: str) -> None:
        super().__init__("No coins found for those names/tickers.")
        self.query = query


class ServiceFailureError(DashboardError):
    """Unexpected failure in a backing collaborator."""
