"""Dashboard route modules: pages, JSON API, actions and WebSocket."""
