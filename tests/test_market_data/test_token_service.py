"""Tests for TokenService token list loading.

All tests use a mocked AuctionClient to avoid canister calls.
"""

from unittest.mock import AsyncMock

import pytest

from auction.config import AppSettings
from auction.market_data.token_service import DEFAULT_LOGO, TokenService
from auction.models import TokenMetadata
from auction.store import AppStore

RAW_METADATA = {
    "p-btc": ("BTC", 8, "10"),
    "p-eth": ("ETH", 18, "2000000000000"),
    "p-usdt": ("USDT", 6, "10000"),
}


def _metadata(principal: str, quote: str | None) -> TokenMetadata:
    """Fresh metadata per call, fee still in raw ledger units."""
    symbol, decimals, fee = RAW_METADATA[principal]
    return TokenMetadata(
        symbol=symbol,
        name=symbol,
        decimals=decimals,
        fee=fee,
        base=symbol,
        quote=quote or "USDT",
    )


@pytest.fixture
def token_service(
    mock_client: AsyncMock, store: AppStore, mock_settings: AppSettings
) -> TokenService:
    mock_client.quote_ledger.return_value = "p-usdt"
    mock_client.supported_tokens.return_value = ["p-eth", "p-btc"]
    mock_client.token_metadata.side_effect = _metadata
    return TokenService(mock_client, store, mock_settings.auction)


class TestGetQuoteToken:
    @pytest.mark.asyncio
    async def test_resolves_quote_ledger(
        self, token_service: TokenService, mock_client: AsyncMock
    ) -> None:
        quote = await token_service.get_quote_token()
        assert quote is not None
        assert quote.base == "USDT"
        mock_client.token_metadata.assert_awaited_once_with("p-usdt", None)

    @pytest.mark.asyncio
    async def test_failure_returns_none(
        self, token_service: TokenService, mock_client: AsyncMock
    ) -> None:
        mock_client.quote_ledger.side_effect = RuntimeError("canister unreachable")
        assert await token_service.get_quote_token() is None


class TestLoadTokens:
    @pytest.mark.asyncio
    async def test_tokens_sorted_and_selected(
        self, token_service: TokenService, store: AppStore
    ) -> None:
        tokens = await token_service.load_tokens()

        assert [t.symbol for t in tokens] == ["BTC", "ETH"]
        assert store.tokens.tokens == tokens
        assert store.tokens.selected_symbol.symbol == "BTC"
        assert store.tokens.selected_quote.symbol == "USDT"
        assert store.tokens.loading is False
        assert store.tokens.error is None

    @pytest.mark.asyncio
    async def test_missing_logo_falls_back_to_default(
        self, token_service: TokenService
    ) -> None:
        btc, eth = await token_service.load_tokens()
        assert btc.logo == eth.logo == DEFAULT_LOGO
        assert DEFAULT_LOGO.startswith("data:image/svg+xml,%3Csvg")

    @pytest.mark.asyncio
    async def test_ledger_logo_kept(
        self, token_service: TokenService, mock_client: AsyncMock
    ) -> None:
        def with_logo(principal: str, quote: str | None) -> TokenMetadata:
            token = _metadata(principal, quote)
            token.logo = f"data:image/png;base64,{principal}"
            return token

        mock_client.token_metadata.side_effect = with_logo
        btc, _ = await token_service.load_tokens()
        assert btc.logo == "data:image/png;base64,p-btc"

    @pytest.mark.asyncio
    async def test_fee_converted_to_display_scale(self, token_service: TokenService) -> None:
        btc, eth = await token_service.load_tokens()
        assert btc.fee == "0.0000001"
        assert eth.fee == "0.000002"

    @pytest.mark.asyncio
    async def test_principal_and_quote_attached(self, token_service: TokenService) -> None:
        btc, _ = await token_service.load_tokens()
        assert btc.principal == "p-btc"
        assert btc.quote == "USDT"

    @pytest.mark.asyncio
    async def test_quote_failure_falls_back_to_default(
        self,
        token_service: TokenService,
        mock_client: AsyncMock,
        store: AppStore,
    ) -> None:
        mock_client.quote_ledger.side_effect = RuntimeError("down")

        tokens = await token_service.load_tokens()

        assert len(tokens) == 2
        assert all(t.quote == "USDT" for t in tokens)
        assert store.tokens.selected_quote is None

    @pytest.mark.asyncio
    async def test_failure_sets_error(
        self,
        token_service: TokenService,
        mock_client: AsyncMock,
        store: AppStore,
    ) -> None:
        mock_client.supported_tokens.side_effect = RuntimeError("down")

        tokens = await token_service.load_tokens()

        assert tokens == []
        assert store.tokens.error == "Failed to fetch tokens."
        assert store.tokens.loading is False

    @pytest.mark.asyncio
    async def test_no_supported_tokens(
        self,
        token_service: TokenService,
        mock_client: AsyncMock,
        store: AppStore,
    ) -> None:
        mock_client.supported_tokens.return_value = []

        assert await token_service.load_tokens() == []
        assert store.tokens.selected_symbol is None
        assert store.tokens.error is None
