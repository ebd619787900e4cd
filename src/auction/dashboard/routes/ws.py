"""WebSocket hub for pushing refreshed history fragments to dashboard clients."""

from __future__ import annotations

import asyncio

import structlog
from fastapi import APIRouter, WebSocket, WebSocketDisconnect

log = structlog.get_logger(__name__)

router = APIRouter()


class DashboardHub:
    """Open dashboard sockets; fragments go out to all of them at once."""

    def __init__(self) -> None:
        self.connections: set[WebSocket] = set()

    async def connect(self, ws: WebSocket) -> None:
        await ws.accept()
        self.connections.add(ws)
        log.info("dashboard_ws_connected", total=len(self.connections))

    def disconnect(self, ws: WebSocket) -> None:
        self.connections.discard(ws)
        log.info("dashboard_ws_disconnected", total=len(self.connections))

    async def broadcast(self, html: str) -> int:
        """Send a fragment to every client concurrently, dropping sockets that fail.

        Returns:
            Number of clients that received the fragment.
        """
        targets = list(self.connections)
        results = await asyncio.gather(
            *(ws.send_text(html) for ws in targets), return_exceptions=True
        )

        failed = [ws for ws, result in zip(targets, results) if isinstance(result, Exception)]
        for ws in failed:
            self.connections.discard(ws)
        if failed:
            log.warning(
                "dashboard_ws_send_failed",
                dropped=len(failed),
                remaining=len(self.connections),
            )
        return len(targets) - len(failed)


@router.websocket("/ws")
async def websocket_endpoint(websocket: WebSocket) -> None:
    """Hold a client subscription open until the browser goes away."""
    hub: DashboardHub = websocket.app.state.hub
    await hub.connect(websocket)
    try:
        # Inbound messages are ignored; reading detects the disconnect.
        while True:
            await websocket.receive_text()
    except WebSocketDisconnect:
        hub.disconnect(websocket)
