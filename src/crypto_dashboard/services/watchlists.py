"""Watchlist manager: CRUD over named asset collections and their notes."""
import logging
import uuid
from collections.abc import Iterable

from crypto_dashboard.schemas import Watchlist
from crypto_dashboard.services.exceptions import (NotFoundError,
                                                  ValidationRejectedError)
from crypto_dashboard.services.utils import simulate_latency

logger = logging.getLogger(__name__)


def _dedupe(ids: Iterable[str]) -> list[str]:
    return list(dict.fromkeys(ids))


def _validate_name(name: str) -> str:
    if not name or not name.strip():
        raise ValidationRejectedError("Watchlist name must not be blank")
    return name


class WatchlistManager:
    """Single-writer store of watchlists.

    Every mutation returns a copy of the stored watchlist; callers replace
    their cached copy with it rather than applying the change themselves.
    Empty note text is stored as an empty string, not removed.
    """

    def __init__(
        self,
        initial: Iterable[Watchlist] = (),
        *,
        latency: float = 0.0,
    ) -> None:
        self._latency = latency
        self._watchlists: dict[str, Watchlist] = {
            w.id: w.model_copy(deep=True) for w in initial
        }

    def _require(self, watchlist_id: str) -> Watchlist:
        try:
            return self._watchlists[watchlist_id]
        except KeyError:
            raise NotFoundError("Watchlist", watchlist_id) from None

    def _store(self, watchlist: Watchlist) -> Watchlist:
        self._watchlists[watchlist.id] = watchlist
        return watchlist.model_copy(deep=True)

    async def list_watchlists(self) -> list[Watchlist]:
        await simulate_latency(self._latency)
        return [w.model_copy(deep=True) for w in self._watchlists.values()]

    async def get(self, watchlist_id: str) -> Watchlist:
        await simulate_latency(self._latency)
        return self._require(watchlist_id).model_copy(deep=True)

    async def create(self, name: str) -> Watchlist:
        _validate_name(name)
        await simulate_latency(self._latency)
        watchlist = Watchlist(id=f"watchlist-{uuid.uuid4().hex[:12]}", name=name)
        logger.info("Created watchlist %s (%s)", watchlist.id, name)
        return self._store(watchlist)

    async def rename(self, watchlist_id: str, name: str) -> Watchlist:
        _validate_name(name)
        await simulate_latency(self._latency)
        current = self._require(watchlist_id)
        return self._store(current.model_copy(update={"name": name}))

    async def delete(self, watchlist_id: str) -> None:
        await simulate_latency(self._latency)
        self._require(watchlist_id)
        del self._watchlists[watchlist_id]
        logger.info("Deleted watchlist %s", watchlist_id)

    async def set_coin_ids(self, watchlist_id: str, coin_ids: Iterable[str]) -> Watchlist:
        """Replace the coin-id set (duplicates collapse, first occurrence wins)."""
        await simulate_latency(self._latency)
        current = self._require(watchlist_id)
        return self._store(current.model_copy(update={"coin_ids": _dedupe(coin_ids)}))

    async def merge_coin_ids(self, watchlist_id: str, coin_ids: Iterable[str]) -> Watchlist:
        """Union new ids into the set; existing ids keep their position."""
        await simulate_latency(self._latency)
        current = self._require(watchlist_id)
        merged = _dedupe([*current.coin_ids, *coin_ids])
        return self._store(current.model_copy(update={"coin_ids": merged}))

    async def set_note(self, watchlist_id: str, coin_id: str, text: str) -> Watchlist:
        await simulate_latency(self._latency)
        current = self._require(watchlist_id)
        notes = {**current.notes_by_coin_id, coin_id: text}
        return self._store(current.model_copy(update={"notes_by_coin_id": notes}))
