"""Entry point for the auction price dashboard.

Wires all components together and serves the FastAPI dashboard with uvicorn.
Startup work (loading tokens, first history fetch, the refresh loop) runs in
FastAPI's lifespan so it shares uvicorn's event loop.

Components are built in this order (see _build_components):
1. AppSettings (configuration)
2. Logging setup
3. AuctionClient (IcAuctionClient over ic-py)
4. AppStore (state container)
5. TokenService (token list and quote)
6. PriceHistoryService (history, statistics, next session)
7. OrderSizer (order amount quantization)
"""

import asyncio
from contextlib import asynccontextmanager
from typing import Any

import uvicorn
from fastapi import FastAPI

from auction.client.ic_client import IcAuctionClient
from auction.config import AppSettings
from auction.logging import get_logger, setup_logging
from auction.market_data.order_sizer import OrderSizer
from auction.market_data.price_history import PriceHistoryService
from auction.market_data.token_service import TokenService
from auction.store import AppStore


def _build_components(settings: AppSettings) -> dict[str, Any]:
    """Build the dependency graph from settings.

    Does not touch the network; the lifespan performs the first fetches.
    """
    client = IcAuctionClient(settings.auction)
    store = AppStore()

    return {
        "client": client,
        "store": store,
        "token_service": TokenService(client, store, settings.auction),
        "price_history_service": PriceHistoryService(
            client, store, settings.history, settings.orders
        ),
        "order_sizer": OrderSizer(settings.orders),
    }


@asynccontextmanager
async def lifespan(app: FastAPI):
    """Load tokens and the initial history, then keep refreshing until shutdown."""
    from auction.dashboard.update_loop import dashboard_update_loop

    logger = get_logger("auction.main")
    components = app.state.components

    app.state.store = components["store"]
    app.state.price_history_service = components["price_history_service"]
    app.state.order_sizer = components["order_sizer"]

    await components["token_service"].load_tokens()
    await components["price_history_service"].refresh_selected()

    update_task = asyncio.create_task(dashboard_update_loop(app))
    logger.info("lifespan_started", tokens=len(components["store"].tokens.tokens))

    yield

    update_task.cancel()
    try:
        await update_task
    except asyncio.CancelledError:
        pass

    await components["client"].close()
    logger.info("auction_dashboard_stopped")


async def run() -> None:
    """Run the dashboard server."""
    settings = AppSettings()
    setup_logging(settings.log_level)
    logger = get_logger("auction.main")

    from auction.dashboard.app import create_dashboard_app

    app = create_dashboard_app(lifespan=lifespan)
    app.state.settings = settings
    app.state.components = _build_components(settings)

    logger.info(
        "starting_dashboard",
        host=settings.dashboard.host,
        port=settings.dashboard.port,
        canister_id=settings.auction.canister_id,
    )

    config = uvicorn.Config(
        app,
        host=settings.dashboard.host,
        port=settings.dashboard.port,
        log_level="warning",
    )
    server = uvicorn.Server(config)
    await server.serve()


def main() -> None:
    """Console script entry point."""
    asyncio.run(run())


if __name__ == "__main__":
    main()
