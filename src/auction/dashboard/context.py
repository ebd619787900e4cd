"""Template context shared by the page route, action partials and the update loop."""

from __future__ import annotations

from typing import Any

from auction.models import ChartScale
from auction.numeric.display import calculate_min_max
from auction.store import AppStore


def history_context(store: AppStore, display_rows: int) -> dict[str, Any]:
    """Gather everything the history panel renders for the current selection."""
    rows = store.latest_prices(display_rows)
    chart_scale: ChartScale | None = None
    if rows:
        chart_scale = calculate_min_max([row.price for row in rows])

    return {
        "selected": store.tokens.selected_symbol,
        "quote": store.tokens.selected_quote,
        "rows": rows,
        "chart_scale": chart_scale,
        "statistics": store.price_history.statistics,
        "next_session": store.price_history.next_session,
        "history_loading": store.price_history.loading,
    }


def tokens_context(store: AppStore) -> dict[str, Any]:
    """Gather the token list panel state."""
    return {
        "tokens": store.tokens.tokens,
        "selected": store.tokens.selected_symbol,
        "loading": store.tokens.loading,
        "error": store.tokens.error,
    }
