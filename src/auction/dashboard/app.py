"""FastAPI dashboard application factory with Jinja2 templates and WebSocket hub."""

from __future__ import annotations

from pathlib import Path
from typing import Any

from fastapi import FastAPI
from fastapi.templating import Jinja2Templates

from auction.dashboard.routes import actions, api, pages, ws
from auction.dashboard.routes.ws import DashboardHub
from auction.numeric.display import format_amount
from auction.numeric.normalize import to_canonical_decimal_text

TEMPLATES_DIR = Path(__file__).parent / "templates"


def _format_amount(value: Any, max_digits: int = 2) -> str:
    """Jinja filter: grouped thousands, 2 to ``max_digits`` fraction digits."""
    return format_amount(value, max_digits)


def _canonical(value: Any) -> str:
    """Jinja filter: plain decimal text without exponent or trailing zeros."""
    return to_canonical_decimal_text(value) if value is not None else "0"


def create_dashboard_app(lifespan: Any = None) -> FastAPI:
    """Build the dashboard app: templates with number filters, hub and routers.

    Args:
        lifespan: Startup/shutdown context manager; main.py passes one that
                  loads tokens and runs the refresh loop. Tests pass None.

    The caller puts ``store``, ``settings``, ``price_history_service`` and
    ``order_sizer`` on ``app.state`` before serving requests.
    """
    app = FastAPI(
        title="Auction Price Dashboard",
        lifespan=lifespan,
    )

    templates = Jinja2Templates(directory=str(TEMPLATES_DIR))
    templates.env.filters["format_amount"] = _format_amount
    templates.env.filters["canonical"] = _canonical
    app.state.templates = templates

    app.state.hub = DashboardHub()

    app.include_router(pages.router)
    app.include_router(api.router, prefix="/api")
    app.include_router(actions.router, prefix="/actions")
    app.include_router(ws.router)

    return app
