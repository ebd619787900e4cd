"""Shared test fixtures for the auction dashboard."""

from decimal import Decimal
from unittest.mock import AsyncMock

import pytest

from auction.client.client import AuctionClient
from auction.config import AppSettings, AuctionSettings, HistorySettings, OrderSettings
from auction.models import PriceHistoryItem, TokenMetadata
from auction.store import AppStore


@pytest.fixture
def mock_settings() -> AppSettings:
    """Return AppSettings with test defaults."""
    return AppSettings(
        log_level="DEBUG",
        auction=AuctionSettings(canister_id="test-canister"),
        history=HistorySettings(limit=100, significant_digits=2, display_rows=17),
        orders=OrderSettings(
            minimum_notional_in_quote=Decimal("10"),
            price_digits_limit=10,
        ),
    )


@pytest.fixture
def btc_token() -> TokenMetadata:
    """Base token with 8 decimals."""
    return TokenMetadata(
        symbol="BTC",
        name="BTC",
        decimals=8,
        fee="0.0000001",
        base="BTC",
        quote="USDT",
        principal="p-btc",
    )


@pytest.fixture
def eth_token() -> TokenMetadata:
    """Base token with 18 decimals."""
    return TokenMetadata(
        symbol="ETH",
        name="ETH",
        decimals=18,
        base="ETH",
        quote="USDT",
        principal="p-eth",
    )


@pytest.fixture
def usdt_token() -> TokenMetadata:
    """Quote token with 6 decimals."""
    return TokenMetadata(
        symbol="USDT",
        name="Tether USD",
        decimals=6,
        base="USDT",
        quote="USDT",
        principal="p-usdt",
    )


@pytest.fixture
def mock_client() -> AsyncMock:
    """Mock AuctionClient with no canned responses."""
    return AsyncMock(spec=AuctionClient)


@pytest.fixture
def store() -> AppStore:
    """Fresh, empty AppStore."""
    return AppStore()


def _make_item(index: int, price: float, volume_in_base: float, volume_in_quote: float) -> PriceHistoryItem:
    return PriceHistoryItem(
        id=index,
        datetime="Nov 14, 2023, 10:13:20 PM",
        date="Nov 14, 2023",
        time="10:13 PM",
        price=price,
        volume=volume_in_quote,
        volume_in_quote=volume_in_quote,
        volume_in_base=volume_in_base,
        quote_decimals=6,
        price_digits_limit=10,
    )


@pytest.fixture
def make_item():
    """Factory for display rows with fixed date fields."""
    return _make_item
