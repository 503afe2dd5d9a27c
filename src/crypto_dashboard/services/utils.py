"""Shared helpers for the store services."""
import asyncio
import re
from datetime import timedelta

_TOKEN_SPLIT = re.compile(r"[\s,]+")
_INTERVAL = re.compile(r"^(\d+)([smhd])$")
_UNIT_SECONDS = {"s": 1, "m": 60, "h": 3600, "d": 86400}


async def simulate_latency(seconds: float) -> None:
    """Sleep for a simulated round-trip; no-op when seconds <= 0."""
    if seconds > 0:
        await asyncio.sleep(seconds)


def tokenize_query(text: str) -> list[str]:
    """Split on whitespace/commas and lowercase; drops empty tokens."""
    return [t.lower() for t in _TOKEN_SPLIT.split(text.strip()) if t]


def parse_interval(value: str) -> timedelta:
    """Parse an interval label such as "10s", "5m", "12h" or "1d"."""
    match = _INTERVAL.match(value.strip())
    if match is None:
        raise ValueError(f"Invalid interval: {value!r}")
    amount, unit = match.groups()
    return timedelta(seconds=int(amount) * _UNIT_SECONDS[unit])
