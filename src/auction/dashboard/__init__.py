"""Web dashboard -- FastAPI app, routes, templates and the WebSocket refresh loop."""
