"""Auction canister client over the Internet Computer HTTP agent (ic-py).

Queries run as the anonymous identity; the dashboard only reads public data.
"""

from typing import Any

from ic.agent import Agent
from ic.candid import Types, encode
from ic.client import Client
from ic.identity import Identity

from auction.client import candid_types
from auction.client.client import AuctionClient
from auction.client.decode import parse_price_rows, principal_text, record_field
from auction.client.metadata import parse_metadata
from auction.config import AuctionSettings
from auction.exceptions import RemoteServiceError
from auction.logging import get_logger
from auction.models import RawPriceRecord, TokenMetadata

logger = get_logger(__name__)

_STATS_FIELDS = ("clearingPrice", "clearingVolume", "totalAskVolume", "totalBidVolume")


class IcAuctionClient(AuctionClient):
    """Concrete auction client using ic-py's async query calls."""

    def __init__(self, settings: AuctionSettings) -> None:
        self._settings = settings
        self._agent = Agent(Identity(anonymous=True), Client(url=settings.host))

    @property
    def canister_id(self) -> str:
        return self._settings.canister_id

    async def _query(
        self,
        canister_id: str,
        method: str,
        return_type: Any,
        args: list[dict] | None = None,
    ) -> Any:
        """Run a query call and return the first decoded return value.

        The reply is decoded against ``return_type`` so records and variants
        come back keyed by their declared labels.
        """
        try:
            result = await self._agent.query_raw_async(
                canister_id, method, encode(args or []), return_type=return_type
            )
        except Exception as exc:
            raise RemoteServiceError(f"{method} on {canister_id} failed: {exc}") from exc

        # Rejections come back as the reject message rather than decoded values.
        if isinstance(result, str):
            raise RemoteServiceError(f"{method} on {canister_id} rejected: {result}")
        if not result:
            return None
        return result[0]["value"]

    async def close(self) -> None:
        """Nothing is pooled per client; logged for lifecycle symmetry."""
        logger.info("auction_client_closed", canister_id=self.canister_id)

    async def query_price_history(
        self, principal: str, limit: int, skip: int
    ) -> list[RawPriceRecord]:
        rows = await self._query(
            self.canister_id,
            "queryPriceHistory",
            candid_types.PRICE_HISTORY,
            [
                {"type": Types.Opt(Types.Principal), "value": [principal]},
                {"type": Types.Nat, "value": limit},
                {"type": Types.Nat, "value": skip},
            ],
        )
        records = parse_price_rows(rows)
        logger.debug("price_history_fetched", principal=principal, rows=len(records))
        return records

    async def supported_tokens(self) -> list[str]:
        principals = await self._query(
            self.canister_id, "icrc84_supported_tokens", candid_types.SUPPORTED_TOKENS
        )
        return [principal_text(p) for p in principals or []]

    async def quote_ledger(self) -> str:
        ledger = await self._query(
            self.canister_id, "getQuoteLedger", candid_types.QUOTE_LEDGER
        )
        return principal_text(ledger)

    async def token_metadata(self, principal: str, quote: str | None) -> TokenMetadata:
        entries = await self._query(principal, "icrc1_metadata", candid_types.ICRC1_METADATA)
        token = parse_metadata(entries or [], quote)
        token.principal = principal
        return token

    async def indicative_stats(self, principal: str) -> dict:
        record = await self._query(
            self.canister_id,
            "indicativeStats",
            candid_types.INDICATIVE_STATS,
            [{"type": Types.Principal, "value": principal}],
        )
        return {name: record_field(record, name) for name in _STATS_FIELDS}

    async def next_session(self) -> dict:
        record = await self._query(
            self.canister_id, "nextSession", candid_types.NEXT_SESSION
        )
        return {
            "counter": record_field(record, "counter"),
            "timestamp": record_field(record, "timestamp"),
        }
