"""JSON API endpoints exposing the dashboard store."""

from __future__ import annotations

import dataclasses
from decimal import Decimal
from typing import Any

from fastapi import APIRouter, Request
from fastapi.responses import JSONResponse

router = APIRouter()


def _jsonable(obj: Any) -> Any:
    """Recursively convert dataclasses and Decimals into JSON-safe values."""
    if dataclasses.is_dataclass(obj) and not isinstance(obj, type):
        return _jsonable(dataclasses.asdict(obj))
    if isinstance(obj, Decimal):
        return str(obj)
    if isinstance(obj, dict):
        return {k: _jsonable(v) for k, v in obj.items()}
    if isinstance(obj, list):
        return [_jsonable(item) for item in obj]
    return obj


@router.get("/tokens")
async def get_tokens(request: Request) -> JSONResponse:
    """Listed tokens with the current selection."""
    tokens = request.app.state.store.tokens
    return JSONResponse(content=_jsonable({
        "tokens": tokens.tokens,
        "selected_symbol": tokens.selected_symbol.symbol if tokens.selected_symbol else None,
        "selected_quote": tokens.selected_quote.symbol if tokens.selected_quote else None,
        "loading": tokens.loading,
        "error": tokens.error,
    }))


@router.get("/price-history")
async def get_price_history(request: Request, limit: int | None = None) -> JSONResponse:
    """Newest-first display rows for the selected pair."""
    store = request.app.state.store
    count = limit if limit is not None else request.app.state.settings.history.display_rows
    return JSONResponse(content=_jsonable(store.latest_prices(count)))


@router.get("/statistics")
async def get_statistics(request: Request) -> JSONResponse:
    """Indicative clearing statistics for the selected pair, or null."""
    return JSONResponse(content=_jsonable(request.app.state.store.price_history.statistics))


@router.get("/next-session")
async def get_next_session(request: Request) -> JSONResponse:
    """Next auction session, or null."""
    return JSONResponse(content=_jsonable(request.app.state.store.price_history.next_session))
