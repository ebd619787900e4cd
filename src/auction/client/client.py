"""Abstract auction client interface.

Defines the contract for reaching the auction canister and token ledgers.
Services and dashboard code depend only on this interface,
keeping Internet Computer agent details isolated in the concrete implementation.
"""

from abc import ABC, abstractmethod

from auction.models import RawPriceRecord, TokenMetadata


class AuctionClient(ABC):
    """Abstract base class for auction canister clients."""

    @abstractmethod
    async def close(self) -> None:
        """Release transport resources."""
        ...

    @abstractmethod
    async def query_price_history(
        self, principal: str, limit: int, skip: int
    ) -> list[RawPriceRecord]:
        """Fetch settled price history rows for one token ledger.

        Rows come back in canister order (newest first); callers reverse
        them when they need chronological order.
        """
        ...

    @abstractmethod
    async def supported_tokens(self) -> list[str]:
        """Return principals (text) of all ledgers the auction trades."""
        ...

    @abstractmethod
    async def quote_ledger(self) -> str:
        """Return the principal (text) of the quote currency ledger."""
        ...

    @abstractmethod
    async def token_metadata(self, principal: str, quote: str | None) -> TokenMetadata:
        """Fetch and decode ICRC-1 metadata for a ledger.

        The fee stays in raw ledger units; callers convert it for display.
        """
        ...

    @abstractmethod
    async def indicative_stats(self, principal: str) -> dict:
        """Fetch raw indicative clearing statistics for the next session.

        Returns a dict with keys clearingPrice, clearingVolume,
        totalAskVolume and totalBidVolume in canister units.
        """
        ...

    @abstractmethod
    async def next_session(self) -> dict:
        """Fetch the next session counter and its start timestamp (seconds)."""
        ...
