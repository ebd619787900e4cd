"""Tests for the WebSocket hub and the periodic refresh loop."""

import asyncio
from unittest.mock import AsyncMock, MagicMock

import pytest

from auction.config import AppSettings, DashboardSettings, HistorySettings
from auction.dashboard.app import create_dashboard_app
from auction.dashboard.routes.ws import DashboardHub
from auction.dashboard.update_loop import dashboard_update_loop, render_history_fragment
from auction.store import AppStore


def _socket(fails: bool = False) -> MagicMock:
    ws = MagicMock()
    ws.send_text = AsyncMock(side_effect=RuntimeError("closed") if fails else None)
    return ws


class TestDashboardHub:
    @pytest.mark.asyncio
    async def test_broadcast_drops_failed_sockets(self) -> None:
        hub = DashboardHub()
        good, bad = _socket(), _socket(fails=True)
        hub.connections.update({good, bad})

        delivered = await hub.broadcast("<p>hi</p>")

        assert delivered == 1
        assert hub.connections == {good}
        good.send_text.assert_awaited_once_with("<p>hi</p>")

    def test_disconnect_unknown_socket(self) -> None:
        hub = DashboardHub()
        hub.disconnect(_socket())
        assert hub.connections == set()


class TestRenderHistoryFragment:
    def test_wrapped_for_oob_swap(
        self, store: AppStore, mock_settings: AppSettings, make_item
    ) -> None:
        app = create_dashboard_app()
        app.state.store = store
        app.state.settings = mock_settings
        store.set_price_history_data([make_item(0, 30000.0, 1.5, 45000.0)])

        html = render_history_fragment(app)

        assert html.startswith('<div id="history-panel" hx-swap-oob="true">')
        assert "30,000.00" in html


class TestUpdateLoop:
    @pytest.mark.asyncio
    async def test_refreshes_and_broadcasts_until_cancelled(self, store: AppStore) -> None:
        app = create_dashboard_app()
        app.state.store = store
        app.state.settings = AppSettings(
            dashboard=DashboardSettings(update_interval=0),
            history=HistorySettings(refresh_interval=0),
        )
        app.state.price_history_service = AsyncMock()
        ws = _socket()
        app.state.hub.connections.add(ws)

        task = asyncio.create_task(dashboard_update_loop(app))
        for _ in range(10):
            await asyncio.sleep(0)
        task.cancel()
        await asyncio.gather(task, return_exceptions=True)

        assert app.state.price_history_service.refresh_selected.await_count >= 1
        assert ws.send_text.await_count >= 1
        assert task.done()
