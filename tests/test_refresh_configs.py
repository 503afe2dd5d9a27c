"""Tests for RefreshConfigManager updates and the price cascade."""
from datetime import timedelta

import pytest

from crypto_dashboard.constants import default_refresh_configs
from crypto_dashboard.schemas import RefreshConfigUpdate, StreamId
from crypto_dashboard.services import RefreshConfigManager
from crypto_dashboard.services.exceptions import (NotFoundError,
                                                  ValidationRejectedError)
from crypto_dashboard.services.utils import parse_interval


def _enabled(configs) -> dict[StreamId, bool]:
    return {c.id: c.enabled for c in configs}


@pytest.mark.asyncio
async def test_list_keeps_seed_order(config_manager):
    configs = await config_manager.list_configs()

    assert [c.id for c in configs] == [
        StreamId.PRICE,
        StreamId.CHANGE,
        StreamId.VOLUME,
        StreamId.MARKET_CAP,
        StreamId.CATEGORIES,
    ]
    assert all(c.enabled for c in configs)
    assert all(c.interval in c.allowed_intervals for c in configs)


@pytest.mark.asyncio
async def test_disabling_price_disables_change_and_volume(config_manager):
    configs = await config_manager.update("price", RefreshConfigUpdate(enabled=False))

    assert _enabled(configs) == {
        StreamId.PRICE: False,
        StreamId.CHANGE: False,
        StreamId.VOLUME: False,
        StreamId.MARKET_CAP: True,
        StreamId.CATEGORIES: True,
    }


@pytest.mark.asyncio
async def test_cascade_applies_even_when_dependents_already_off(config_manager):
    await config_manager.update(StreamId.VOLUME, RefreshConfigUpdate(enabled=False))

    configs = await config_manager.update(StreamId.PRICE, RefreshConfigUpdate(enabled=False))
    again = await config_manager.update(StreamId.PRICE, RefreshConfigUpdate(enabled=False))

    assert _enabled(configs) == _enabled(again)
    assert not _enabled(again)[StreamId.CHANGE]
    assert not _enabled(again)[StreamId.VOLUME]


@pytest.mark.asyncio
async def test_reenabling_price_does_not_reenable_dependents(config_manager):
    await config_manager.update("price", RefreshConfigUpdate(enabled=False))

    configs = await config_manager.update("price", RefreshConfigUpdate(enabled=True))

    enabled = _enabled(configs)
    assert enabled[StreamId.PRICE]
    assert not enabled[StreamId.CHANGE]
    assert not enabled[StreamId.VOLUME]


@pytest.mark.asyncio
async def test_disabling_dependent_does_not_touch_price(config_manager):
    configs = await config_manager.update("change", RefreshConfigUpdate(enabled=False))

    enabled = _enabled(configs)
    assert enabled[StreamId.PRICE]
    assert enabled[StreamId.VOLUME]
    assert not enabled[StreamId.CHANGE]


@pytest.mark.asyncio
async def test_interval_update_on_price_keeps_dependents(config_manager):
    configs = await config_manager.update("price", RefreshConfigUpdate(interval="30s"))

    assert configs[0].interval == "30s"
    assert all(c.enabled for c in configs)


@pytest.mark.asyncio
async def test_interval_update_allowed_on_disabled_stream(config_manager):
    await config_manager.update("marketCap", RefreshConfigUpdate(enabled=False))

    configs = await config_manager.update("marketCap", RefreshConfigUpdate(interval="1m"))

    market_cap = next(c for c in configs if c.id is StreamId.MARKET_CAP)
    assert market_cap.interval == "1m"
    assert not market_cap.enabled


@pytest.mark.asyncio
async def test_interval_outside_allowed_set_rejected(config_manager):
    with pytest.raises(ValidationRejectedError):
        await config_manager.update("price", RefreshConfigUpdate(interval="12h"))
    assert (await config_manager.list_configs())[0].interval == "10s"


@pytest.mark.asyncio
async def test_unknown_config_raises_not_found(config_manager):
    with pytest.raises(NotFoundError):
        await config_manager.update("funding", RefreshConfigUpdate(enabled=False))


@pytest.mark.asyncio
async def test_list_returns_copies(config_manager):
    configs = await config_manager.list_configs()
    configs[0].enabled = False

    assert (await config_manager.list_configs())[0].enabled


@pytest.mark.parametrize(
    "label,expected",
    [
        ("5s", timedelta(seconds=5)),
        ("10m", timedelta(minutes=10)),
        ("12h", timedelta(hours=12)),
        ("1d", timedelta(days=1)),
    ],
)
def test_parse_interval(label, expected):
    assert parse_interval(label) == expected


def test_parse_interval_rejects_garbage():
    with pytest.raises(ValueError):
        parse_interval("soon")


def test_seed_config_with_unlisted_interval_is_refused():
    bad = default_refresh_configs()[0].model_copy(update={"interval": "15s"})

    with pytest.raises(ValueError):
        RefreshConfigManager([bad])
