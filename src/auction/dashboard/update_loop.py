"""Periodic refresh loop for the selected pair.

Re-fetches history for the current selection, renders the history partial
and broadcasts it as an OOB-swap fragment to all WebSocket clients.
"""

from __future__ import annotations

import asyncio

import structlog
from fastapi import FastAPI
from fastapi.templating import Jinja2Templates

from auction.dashboard.context import history_context

log = structlog.get_logger(__name__)


def render_history_fragment(app: FastAPI) -> str:
    """Render the history partial wrapped for an out-of-band swap."""
    templates: Jinja2Templates = app.state.templates
    settings = app.state.settings
    tpl = templates.env.get_template("partials/history.html")
    html = tpl.render(**history_context(app.state.store, settings.history.display_rows))
    return f'<div id="history-panel" hx-swap-oob="true">{html}</div>'


async def dashboard_update_loop(app: FastAPI) -> None:
    """Refresh and broadcast the selected pair until cancelled.

    History is re-fetched every ``history.refresh_interval`` seconds; clients
    are pushed a fragment every ``dashboard.update_interval`` seconds while
    any are connected.
    """
    settings = app.state.settings
    update_interval = settings.dashboard.update_interval
    refresh_every = max(settings.history.refresh_interval // max(update_interval, 1), 1)

    log.info(
        "dashboard_update_loop_started",
        interval=update_interval,
        refresh_interval=settings.history.refresh_interval,
    )

    tick = 0
    while True:
        try:
            await asyncio.sleep(update_interval)
            tick += 1

            if tick % refresh_every == 0:
                await app.state.price_history_service.refresh_selected()

            hub = app.state.hub
            if not hub.connections:
                continue

            await hub.broadcast(render_history_fragment(app))

        except asyncio.CancelledError:
            log.info("dashboard_update_loop_cancelled")
            break
        except Exception:
            log.warning("dashboard_update_loop_error", exc_info=True)
            await asyncio.sleep(1)
