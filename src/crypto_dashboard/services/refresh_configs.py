"""Refresh configuration manager: per-stream cadence and the price cascade."""
import logging
from collections.abc import Iterable

from crypto_dashboard.constants import PRICE_DEPENDENTS, default_refresh_configs
from crypto_dashboard.schemas import RefreshConfig, RefreshConfigUpdate, StreamId
from crypto_dashboard.services.exceptions import (NotFoundError,
                                                  ValidationRejectedError)
from crypto_dashboard.services.utils import parse_interval, simulate_latency

logger = logging.getLogger(__name__)


def _check_intervals(config: RefreshConfig) -> None:
    for label in config.allowed_intervals:
        parse_interval(label)
    if config.interval not in config.allowed_intervals:
        raise ValueError(f"{config.id.value}: interval {config.interval!r} not in allowed_intervals")


class RefreshConfigManager:
    """Holds one RefreshConfig per data stream, in seed order.

    Disabling price forces its dependents (change, volume) off in the same
    update. Enabling price leaves them untouched.

    Interval edits on a disabled stream are accepted here; blocking them is
    the caller's policy (the dashboard controller rejects them).
    """

    def __init__(
        self,
        configs: Iterable[RefreshConfig] | None = None,
        *,
        latency: float = 0.0,
    ) -> None:
        seed = default_refresh_configs() if configs is None else configs
        self._configs: list[RefreshConfig] = [c.model_copy() for c in seed]
        for config in self._configs:
            _check_intervals(config)
        self._latency = latency

    def _snapshot(self) -> list[RefreshConfig]:
        return [c.model_copy() for c in self._configs]

    def _index(self, config_id: StreamId | str) -> int:
        for i, config in enumerate(self._configs):
            if config.id == config_id:
                return i
        raise NotFoundError("Refresh config", str(getattr(config_id, "value", config_id)))

    async def list_configs(self) -> list[RefreshConfig]:
        await simulate_latency(self._latency)
        return self._snapshot()

    async def update(
        self, config_id: StreamId | str, update: RefreshConfigUpdate
    ) -> list[RefreshConfig]:
        """Apply a partial update, then the price cascade.

        Returns:
            The full config list, since one update can change several streams.
        """
        await simulate_latency(self._latency)
        index = self._index(config_id)
        target = self._configs[index]
        changes = update.model_dump(exclude_none=True)
        interval = changes.get("interval")
        if interval is not None and interval not in target.allowed_intervals:
            raise ValidationRejectedError(
                f"Interval {interval!r} not allowed for {target.id.value}; "
                f"choose one of {', '.join(target.allowed_intervals)}"
            )
        self._configs[index] = target.model_copy(update=changes)

        if target.id is StreamId.PRICE and changes.get("enabled") is False:
            self._configs = [
                c.model_copy(update={"enabled": False}) if c.id in PRICE_DEPENDENTS else c
                for c in self._configs
            ]
            logger.info("Price stream disabled; disabled %s",
                        ", ".join(s.value for s in PRICE_DEPENDENTS))
        return self._snapshot()
