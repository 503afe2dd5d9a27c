"""Environment-driven settings for the dashboard service."""
import os

from pydantic import BaseModel, Field

from crypto_dashboard.constants import TOP_SLICE_LIMIT


class Settings(BaseModel):
    """Runtime settings. Read once at startup via load_settings()."""

    asset_count: int = Field(default=200, ge=1)
    seed: int | None = None
    latency_seconds: float = Field(default=0.0, ge=0)  # simulated store round-trip
    top_slice_limit: int = Field(default=TOP_SLICE_LIMIT, ge=1)
    host: str = "127.0.0.1"
    port: int = 8001
    log_level: str = "INFO"


def _optional_int(value: str | None) -> int | None:
    return int(value) if value not in (None, "") else None


def load_settings() -> Settings:
    """Build Settings from DASHBOARD_* and LOG_LEVEL environment variables."""
    return Settings(
        asset_count=int(os.getenv("DASHBOARD_ASSET_COUNT", "200")),
        seed=_optional_int(os.getenv("DASHBOARD_SEED")),
        latency_seconds=float(os.getenv("DASHBOARD_LATENCY", "0")),
        top_slice_limit=int(os.getenv("DASHBOARD_TOP_SLICE", str(TOP_SLICE_LIMIT))),
        host=os.getenv("DASHBOARD_HOST", "127.0.0.1"),
        port=int(os.getenv("DASHBOARD_PORT", "8001")),
        log_level=os.getenv("LOG_LEVEL", "INFO").upper(),
    )
