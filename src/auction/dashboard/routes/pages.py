"""Page routes serving the main dashboard HTML template."""

from __future__ import annotations

from fastapi import APIRouter, Request
from fastapi.responses import HTMLResponse
from fastapi.templating import Jinja2Templates

from auction.dashboard.context import history_context, tokens_context

router = APIRouter()


@router.get("/", response_class=HTMLResponse)
async def dashboard_index(request: Request) -> HTMLResponse:
    """Main dashboard page: token list beside the newest-first history table."""
    templates: Jinja2Templates = request.app.state.templates
    store = request.app.state.store
    settings = request.app.state.settings

    context = {
        **tokens_context(store),
        **history_context(store, settings.history.display_rows),
    }
    return templates.TemplateResponse(request, "index.html", context)
