"""Watchlist routes: CRUD, coin-id updates, notes and ticker import."""
import logging

from fastapi import APIRouter, Response

from crypto_dashboard.deps import AssetRepositoryDep, WatchlistManagerDep
from crypto_dashboard.schemas import (CoinIds, ImportQuery, ImportResult,
                                      NoteText, Watchlist, WatchlistName)
from crypto_dashboard.services import ServiceErrorMapper
from crypto_dashboard.services.exceptions import (DashboardError,
                                                  NoMatchesError,
                                                  ValidationRejectedError)

logger = logging.getLogger(__name__)
router = APIRouter(prefix="/watchlists", tags=["watchlists"])

_errors = ServiceErrorMapper()


@router.get("", response_model=list[Watchlist])
async def list_watchlists(manager: WatchlistManagerDep) -> list[Watchlist]:
    return await manager.list_watchlists()


@router.post("", response_model=Watchlist, status_code=201)
async def create_watchlist(body: WatchlistName, manager: WatchlistManagerDep) -> Watchlist:
    try:
        return await manager.create(body.name)
    except DashboardError as exc:
        _errors.raise_http(exc)


@router.get("/{watchlist_id}", response_model=Watchlist)
async def get_watchlist(watchlist_id: str, manager: WatchlistManagerDep) -> Watchlist:
    try:
        return await manager.get(watchlist_id)
    except DashboardError as exc:
        _errors.raise_http(exc)


@router.patch("/{watchlist_id}", response_model=Watchlist)
async def rename_watchlist(
    watchlist_id: str, body: WatchlistName, manager: WatchlistManagerDep
) -> Watchlist:
    try:
        return await manager.rename(watchlist_id, body.name)
    except DashboardError as exc:
        _errors.raise_http(exc)


@router.delete("/{watchlist_id}", status_code=204)
async def delete_watchlist(watchlist_id: str, manager: WatchlistManagerDep) -> Response:
    try:
        await manager.delete(watchlist_id)
    except DashboardError as exc:
        _errors.raise_http(exc)
    return Response(status_code=204)


@router.put("/{watchlist_id}/coins", response_model=Watchlist)
async def set_coin_ids(
    watchlist_id: str, body: CoinIds, manager: WatchlistManagerDep
) -> Watchlist:
    """Replace the watchlist's coin ids."""
    try:
        return await manager.set_coin_ids(watchlist_id, body.coin_ids)
    except DashboardError as exc:
        _errors.raise_http(exc)


@router.post("/{watchlist_id}/coins", response_model=Watchlist)
async def merge_coin_ids(
    watchlist_id: str, body: CoinIds, manager: WatchlistManagerDep
) -> Watchlist:
    """Union coin ids into the watchlist."""
    try:
        return await manager.merge_coin_ids(watchlist_id, body.coin_ids)
    except DashboardError as exc:
        _errors.raise_http(exc)


@router.put("/{watchlist_id}/notes/{coin_id}", response_model=Watchlist)
async def set_note(
    watchlist_id: str, coin_id: str, body: NoteText, manager: WatchlistManagerDep
) -> Watchlist:
    """Upsert a note. Empty text is stored as an empty note."""
    try:
        return await manager.set_note(watchlist_id, coin_id, body.text)
    except DashboardError as exc:
        _errors.raise_http(exc)


@router.post("/{watchlist_id}/import", response_model=ImportResult)
async def import_coins(
    watchlist_id: str,
    body: ImportQuery,
    manager: WatchlistManagerDep,
    repository: AssetRepositoryDep,
) -> ImportResult:
    """Resolve tickers/names and merge the matches into the watchlist.

    Returns 404 when nothing matches; the watchlist is left unchanged.
    """
    try:
        if not body.query.strip():
            raise ValidationRejectedError("Enter at least one ticker or name")
        await manager.get(watchlist_id)
        found = await repository.find_by_query(body.query)
        if not found:
            raise NoMatchesError(body.query)
        updated = await manager.merge_coin_ids(watchlist_id, found)
    except DashboardError as exc:
        _errors.raise_http(exc)
    logger.info("Imported %d assets into %s", len(found), watchlist_id)
    return ImportResult(matched_ids=found, watchlist=updated)
