"""Token list loading -- supported ledgers, their metadata, and the quote token.

Fees arrive in raw ledger units and are converted to display scale before
the token list reaches the store.
"""

import asyncio
from urllib.parse import quote

from auction.client.client import AuctionClient
from auction.config import AuctionSettings
from auction.logging import get_logger
from auction.models import TokenMetadata
from auction.numeric.converter import volume_from_raw
from auction.numeric.normalize import to_canonical_decimal_text
from auction.store import AppStore

logger = get_logger(__name__)

# Neutral coin shown for ledgers whose metadata carries no icrc1:logo.
_DEFAULT_LOGO_SVG = (
    '<svg xmlns="http://www.w3.org/2000/svg" viewBox="0 0 32 32">'
    '<circle cx="16" cy="16" r="15" fill="#c9ccd3" stroke="#8a8f99" stroke-width="2"/>'
    "</svg>"
)
DEFAULT_LOGO = "data:image/svg+xml," + quote(_DEFAULT_LOGO_SVG)


class TokenService:
    """Loads tradable tokens into the store.

    Args:
        client: Auction canister client.
        store: Application state container.
        settings: Auction settings (default quote symbol).
    """

    def __init__(
        self, client: AuctionClient, store: AppStore, settings: AuctionSettings
    ) -> None:
        self._client = client
        self._store = store
        self._settings = settings

    async def get_quote_token(self) -> TokenMetadata | None:
        """Resolve the quote ledger's metadata, or None if it cannot be fetched."""
        try:
            principal = await self._client.quote_ledger()
            token = await self._client.token_metadata(principal, None)
        except Exception:
            logger.warning("quote_token_fetch_failed", exc_info=True)
            return None
        return token

    async def _load_token(self, principal: str, quote_symbol: str) -> TokenMetadata:
        token = await self._client.token_metadata(principal, quote_symbol)
        fee = volume_from_raw(int(token.fee), token.decimals, 0)
        token.fee = to_canonical_decimal_text(fee.volume_in_base)
        token.principal = principal
        token.logo = token.logo or DEFAULT_LOGO
        return token

    async def load_tokens(self) -> list[TokenMetadata]:
        """Fetch all supported tokens and publish them to the store.

        The first token by symbol becomes the initial selection. On failure
        the store's error is set and an empty list is returned.
        """
        self._store.set_loading(True)
        try:
            quote_token, principals = await asyncio.gather(
                self.get_quote_token(),
                self._client.supported_tokens(),
            )
            quote_symbol = quote_token.base if quote_token else self._settings.default_quote

            tokens = list(
                await asyncio.gather(
                    *(self._load_token(p, quote_symbol) for p in principals)
                )
            )
            tokens.sort(key=lambda t: t.symbol)

            self._store.set_tokens(tokens)
            self._store.set_selected_quote(quote_token)
            self._store.set_selected_symbol(tokens[0] if tokens else None)
            self._store.set_error(None)
            logger.info("tokens_loaded", count=len(tokens), quote=quote_symbol)
            return tokens
        except Exception:
            logger.error("tokens_fetch_failed", exc_info=True)
            self._store.set_error("Failed to fetch tokens.")
            return []
        finally:
            self._store.set_loading(False)
