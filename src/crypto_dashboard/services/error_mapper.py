"""Maps dashboard domain errors to HTTP responses."""
from dataclasses import dataclass

from fastapi import HTTPException

from crypto_dashboard.services.exceptions import (NoMatchesError,
                                                  NotFoundError,
                                                  ServiceFailureError,
                                                  ValidationRejectedError)


@dataclass(frozen=True)
class ServiceErrorMapper:
    """Maps domain exceptions to HTTP (status_code, detail).

    NotFoundError already names its resource and key, so 404 details are the
    exception message. api_name labels 502s from a failing collaborator.
    """

    api_name: str = "Dashboard store"

    def to_http(self, exc: Exception) -> tuple[int, str]:
        """Map an exception to (status_code, detail).

        Args:
            exc: The exception raised by a manager or repository.

        Returns:
            (status_code, detail) suitable for HTTPException.
        """
        if isinstance(exc, (NotFoundError, NoMatchesError)):
            return (404, str(exc))
        if isinstance(exc, ValidationRejectedError):
            return (422, str(exc) or "Invalid input")
        if isinstance(exc, ServiceFailureError):
            return (502, f"{self.api_name} error")
        return (500, "Internal server error")

    def raise_http(self, exc: Exception) -> None:
        """Map exception to HTTP and raise HTTPException. Never returns."""
        status_code, detail = self.to_http(exc)
        raise HTTPException(status_code=status_code, detail=detail) from exc
