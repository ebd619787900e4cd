"""Auction client layer -- canister and ledger queries via the Internet Computer agent.

The ic-py backed IcAuctionClient is imported from auction.client.ic_client
by the entry point only.
"""

from auction.client.client import AuctionClient
from auction.client.decode import parse_price_rows
from auction.client.metadata import parse_metadata

__all__ = ["AuctionClient", "parse_metadata", "parse_price_rows"]
