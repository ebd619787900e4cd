"""Application state container for tokens, selection and fetched history.

Two slices, each changed only through explicit transition methods.
An asyncio.Lock serializes whole refresh cycles so a selection change and a
background refresh never interleave their dispatches.
"""

import asyncio
from dataclasses import dataclass, field

from auction.logging import get_logger
from auction.models import NextSession, PriceHistoryItem, Statistics, TokenMetadata

logger = get_logger(__name__)


@dataclass
class TokensState:
    tokens: list[TokenMetadata] = field(default_factory=list)
    selected_symbol: TokenMetadata | None = None
    selected_quote: TokenMetadata | None = None
    loading: bool = False
    error: str | None = None


@dataclass
class PriceHistoryState:
    data: list[PriceHistoryItem] = field(default_factory=list)
    statistics: Statistics | None = None
    next_session: NextSession | None = None
    loading: bool = False
    error: str | None = None


class AppStore:
    """Process-wide dashboard state.

    Readers get the current slice objects; writers go through the set_*
    transitions, which replace values rather than mutating shared lists.
    """

    def __init__(self) -> None:
        self.tokens = TokensState()
        self.price_history = PriceHistoryState()
        self.refresh_lock = asyncio.Lock()

    # -- tokens slice -------------------------------------------------------

    def set_tokens(self, tokens: list[TokenMetadata]) -> None:
        self.tokens.tokens = list(tokens)
        logger.debug("store_tokens_set", count=len(tokens))

    def set_selected_symbol(self, token: TokenMetadata | None) -> None:
        self.tokens.selected_symbol = token
        logger.debug("store_symbol_selected", symbol=token.symbol if token else None)

    def set_selected_quote(self, token: TokenMetadata | None) -> None:
        self.tokens.selected_quote = token

    def set_loading(self, loading: bool) -> None:
        self.tokens.loading = loading

    def set_error(self, error: str | None) -> None:
        self.tokens.error = error

    # -- price history slice ------------------------------------------------

    def set_price_history_data(self, data: list[PriceHistoryItem]) -> None:
        self.price_history.data = list(data)

    def set_statistics(self, statistics: Statistics | None) -> None:
        self.price_history.statistics = statistics

    def set_next_session(self, next_session: NextSession | None) -> None:
        self.price_history.next_session = next_session

    def set_price_history_loading(self, loading: bool) -> None:
        self.price_history.loading = loading

    def set_price_history_error(self, error: str | None) -> None:
        self.price_history.error = error

    # -- selectors ----------------------------------------------------------

    def find_token(self, symbol: str) -> TokenMetadata | None:
        """Return the listed token with the given symbol, or None."""
        for token in self.tokens.tokens:
            if token.symbol == symbol:
                return token
        return None

    def latest_prices(self, count: int = 17) -> list[PriceHistoryItem]:
        """Newest-first slice of the fetched history for the table."""
        return list(reversed(self.price_history.data))[:count]
