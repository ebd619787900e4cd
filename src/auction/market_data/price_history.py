"""Price history, indicative statistics and next-session queries.

Every fetch degrades instead of raising: a failed history query yields an
empty list, failed statistics or session queries yield None. The display
layer never sees a transport exception.
"""

from datetime import datetime, timezone

import structlog

from auction.client.client import AuctionClient
from auction.config import HistorySettings, OrderSettings
from auction.logging import get_logger
from auction.models import (
    NextSession,
    PriceHistoryItem,
    RawPriceRecord,
    Statistics,
    TokenMetadata,
)
from auction.numeric.converter import get_decimals, price_from_raw, volume_from_raw
from auction.numeric.precision import add_decimal
from auction.store import AppStore

logger = get_logger(__name__)

_DATETIME_FORMAT = "%b %d, %Y, %I:%M:%S %p"
_DATE_FORMAT = "%b %d, %Y"
_TIME_FORMAT = "%I:%M %p"
_SESSION_FORMAT = "%b %d, %I:%M %p"


def _from_nanoseconds(timestamp_ns: int) -> datetime:
    return datetime.fromtimestamp(timestamp_ns / 1_000_000_000, tz=timezone.utc)


def build_history_item(
    index: int,
    record: RawPriceRecord,
    symbol: TokenMetadata,
    quote: TokenMetadata,
    digits_limit: int,
) -> PriceHistoryItem:
    """Convert one raw canister row to a display row."""
    moment = _from_nanoseconds(record.timestamp_ns)
    base_decimals = get_decimals(symbol)

    price = price_from_raw(record.raw_price, base_decimals, get_decimals(quote))
    volumes = volume_from_raw(record.raw_volume, base_decimals, price)

    return PriceHistoryItem(
        id=index,
        datetime=moment.strftime(_DATETIME_FORMAT),
        date=moment.strftime(_DATE_FORMAT),
        time=moment.strftime(_TIME_FORMAT),
        price=price,
        volume=volumes.volume_in_quote,
        volume_in_quote=volumes.volume_in_quote,
        volume_in_base=volumes.volume_in_base,
        quote_decimals=quote.decimals,
        price_digits_limit=digits_limit,
    )


class PriceHistoryService:
    """Fetches and converts history for the selected pair.

    Args:
        client: Auction canister client.
        store: Application state container.
        history: History query/display settings.
        orders: Order policy settings (digits limit).
    """

    def __init__(
        self,
        client: AuctionClient,
        store: AppStore,
        history: HistorySettings,
        orders: OrderSettings,
    ) -> None:
        self._client = client
        self._store = store
        self._history = history
        self._orders = orders

    async def get_price_history(
        self,
        symbol: TokenMetadata | None,
        quote: TokenMetadata,
        digits_limit: int,
    ) -> list[PriceHistoryItem]:
        """Fetch the pair's settled sessions, oldest first, at display scale.

        Zero-price sessions (no clearing) are dropped before conversion.
        """
        principal = symbol.principal if symbol else None
        if not principal:
            return []
        try:
            rows = await self._client.query_price_history(
                principal, self._history.limit, self._history.skip
            )
            settled = [row for row in reversed(rows) if row.raw_price != 0]
            items = [
                build_history_item(index, row, symbol, quote, digits_limit)
                for index, row in enumerate(settled)
            ]
            return add_decimal(items, self._history.significant_digits)
        except Exception:
            logger.error("price_history_fetch_failed", principal=principal, exc_info=True)
            return []

    async def get_statistics(
        self, symbol: TokenMetadata | None, quote: TokenMetadata
    ) -> Statistics | None:
        """Fetch indicative clearing statistics at display scale."""
        principal = symbol.principal if symbol else None
        if not principal:
            return None
        try:
            stats = await self._client.indicative_stats(principal)
            base_decimals = get_decimals(symbol)

            def base_volume(raw: int) -> float:
                return volume_from_raw(raw, base_decimals, 0).volume_in_base

            return Statistics(
                clearing_price=price_from_raw(
                    stats["clearingPrice"], base_decimals, get_decimals(quote)
                ),
                clearing_volume=base_volume(stats["clearingVolume"]),
                total_ask_volume=base_volume(stats["totalAskVolume"]),
                total_bid_volume=base_volume(stats["totalBidVolume"]),
            )
        except Exception:
            logger.error("statistics_fetch_failed", principal=principal, exc_info=True)
            return None

    async def get_next_session(self) -> NextSession | None:
        """Fetch when the next auction session starts."""
        try:
            session = await self._client.next_session()
            timestamp_s = int(session["timestamp"])
            moment = datetime.fromtimestamp(timestamp_s, tz=timezone.utc)
            return NextSession(
                next_session=moment.strftime(_SESSION_FORMAT),
                datetime=timestamp_s * 1000,
                counter=str(session["counter"]),
            )
        except Exception:
            logger.error("next_session_fetch_failed", exc_info=True)
            return None

    async def refresh_selected(self) -> None:
        """Re-fetch history, statistics and next session for the current selection."""
        async with self._store.refresh_lock:
            symbol = self._store.tokens.selected_symbol
            quote = self._store.tokens.selected_quote
            if symbol is None or quote is None:
                logger.debug("refresh_skipped_no_selection")
                return

            structlog.contextvars.bind_contextvars(symbol=symbol.symbol, quote=quote.symbol)
            try:
                self._store.set_price_history_loading(True)
                data = await self.get_price_history(
                    symbol, quote, self._orders.price_digits_limit
                )
                statistics = await self.get_statistics(symbol, quote)
                next_session = await self.get_next_session()

                # The selection may have moved on while the fetches were awaited.
                current = self._store.tokens.selected_symbol
                if current is None or current.symbol != symbol.symbol:
                    logger.info(
                        "price_history_refresh_discarded",
                        selected=current.symbol if current else None,
                    )
                    return

                self._store.set_price_history_data(data)
                self._store.set_statistics(statistics)
                self._store.set_next_session(next_session)
                self._store.set_price_history_error(None)
                logger.info("price_history_refreshed", rows=len(data))
            finally:
                self._store.set_price_history_loading(False)
                structlog.contextvars.unbind_contextvars("symbol", "quote")
