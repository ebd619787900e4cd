"""POST endpoints for selection changes and order-size previews."""

from __future__ import annotations

import structlog
from fastapi import APIRouter, Request
from fastapi.responses import HTMLResponse
from fastapi.templating import Jinja2Templates

from auction.dashboard.context import history_context
from auction.exceptions import InvalidMagnitudeError

log = structlog.get_logger(__name__)

router = APIRouter()


@router.post("/select/{symbol}", response_class=HTMLResponse)
async def select_symbol(request: Request, symbol: str) -> HTMLResponse:
    """Select a token, refresh its history, and return the history partial."""
    templates: Jinja2Templates = request.app.state.templates
    store = request.app.state.store
    settings = request.app.state.settings

    token = store.find_token(symbol)
    if token is None:
        log.warning("select_unknown_symbol", symbol=symbol)
        return templates.TemplateResponse(
            request,
            "partials/error.html",
            {"error": f"Unknown token {symbol}"},
            status_code=404,
        )

    store.set_selected_symbol(token)
    await request.app.state.price_history_service.refresh_selected()
    log.info("symbol_selected_via_dashboard", symbol=symbol)

    return templates.TemplateResponse(
        request,
        "partials/history.html",
        history_context(store, settings.history.display_rows),
    )


@router.post("/order-preview", response_class=HTMLResponse)
async def order_preview(request: Request) -> HTMLResponse:
    """Snap a typed order amount to the selected pair's volume step.

    Uses the most recent settled price as the reference price.
    """
    templates: Jinja2Templates = request.app.state.templates
    store = request.app.state.store
    order_sizer = request.app.state.order_sizer

    form = await request.form()
    amount_text = str(form.get("amount", ""))

    symbol = store.tokens.selected_symbol
    quote = store.tokens.selected_quote
    latest = store.latest_prices(1)
    preview = None
    error = ""

    if symbol is None or not latest:
        error = "No price available for the selected token."
    else:
        try:
            preview = order_sizer.preview(
                amount_text,
                latest[0].price,
                symbol.decimals,
                quote.decimals if quote is not None else None,
            )
        except InvalidMagnitudeError as e:
            error = str(e)
            log.warning("order_preview_rejected", error=error)

    return templates.TemplateResponse(
        request,
        "partials/order_preview.html",
        {"preview": preview, "error": error, "symbol": symbol},
    )
