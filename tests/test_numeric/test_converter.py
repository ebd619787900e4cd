"""Tests for fixed-point conversion between canister units and display scale."""

from decimal import Decimal

import pytest

from auction.exceptions import InvalidMagnitudeError
from auction.models import TokenMetadata
from auction.numeric.converter import (
    DEFAULT_ASSET_DECIMALS,
    get_decimals,
    price_from_raw,
    price_to_raw,
    volume_from_raw,
    volume_to_raw,
)


class TestPriceFromRaw:
    """price = raw * 10**base_decimals / 10**quote_decimals."""

    def test_pinned_fixture(self) -> None:
        """500000 * 10**8 / 10**6 = 50,000,000."""
        assert price_from_raw(500000, 8, 6) == 50_000_000.0

    def test_btc_usdt_price(self) -> None:
        """300 raw with 8/6 decimals is 30,000 USDT per BTC."""
        assert price_from_raw(300, 8, 6) == 30000.0

    def test_zero_price(self) -> None:
        assert price_from_raw(0, 8, 6) == 0.0

    def test_quote_heavier_than_base(self) -> None:
        assert price_from_raw(5, 6, 18) == pytest.approx(5e-12)

    def test_raw_beyond_float_precision(self) -> None:
        """Raw values past 2**53 keep their leading digits through scaling."""
        raw = 2**70 + 1
        assert price_from_raw(raw, 0, 18) == float(Decimal(raw) / Decimal(10**18))

    def test_negative_raw_rejected(self) -> None:
        with pytest.raises(InvalidMagnitudeError):
            price_from_raw(-1, 8, 6)

    def test_float_raw_price(self) -> None:
        """Canisters reporting float64 prices convert the same way."""
        assert price_from_raw(0.5, 8, 6) == 50.0


class TestPriceToRaw:
    """Inverse scaling used when building outbound orders."""

    def test_inverse_of_fixture(self) -> None:
        assert price_to_raw(50_000_000.0, 8, 6) == 500000.0

    @pytest.mark.parametrize(
        ("raw", "price_decimals", "quote_decimals"),
        [
            (123456789, 8, 6),
            (1, 0, 18),
            (987654321012345, 18, 6),
            (42, 6, 6),
            (0, 8, 6),
        ],
    )
    def test_round_trip(self, raw: int, price_decimals: int, quote_decimals: int) -> None:
        price = price_from_raw(raw, price_decimals, quote_decimals)
        assert price_to_raw(price, price_decimals, quote_decimals) == pytest.approx(raw, rel=1e-12)


class TestVolumeFromRaw:
    """Volume in base and quote units."""

    def test_btc_volume(self) -> None:
        result = volume_from_raw(150_000_000, 8, 30000.5)
        assert result.volume_in_base == 1.5
        assert result.volume_in_quote == 45000.75

    def test_quote_multiplication_is_decimal_safe(self) -> None:
        """0.3 * 0.1 in binary floats is 0.030000000000000002."""
        result = volume_from_raw(3, 1, 0.1)
        assert result.volume_in_base == 0.3
        assert result.volume_in_quote == 0.03

    def test_zero_price_gives_zero_quote(self) -> None:
        result = volume_from_raw(10, 8, 0)
        assert result.volume_in_base == 1e-07
        assert result.volume_in_quote == 0.0

    def test_default_decimals_make_volume_negligible(self) -> None:
        result = volume_from_raw(1_000_000, DEFAULT_ASSET_DECIMALS, 1)
        assert result.volume_in_base == pytest.approx(1e-14)

    def test_negative_volume_rejected(self) -> None:
        with pytest.raises(InvalidMagnitudeError):
            volume_from_raw(-5, 8, 1)


class TestVolumeToRaw:
    """Base amount to smallest ledger unit, always an int."""

    def test_exact_amount(self) -> None:
        raw = volume_to_raw(1.5, 8)
        assert raw == 150_000_000
        assert isinstance(raw, int)

    def test_rounds_half_up(self) -> None:
        assert volume_to_raw(0.123456789, 8) == 12_345_679
        assert volume_to_raw(0.000000005, 8) == 1

    def test_zero(self) -> None:
        assert volume_to_raw(0, 18) == 0

    def test_decimal_input(self) -> None:
        assert volume_to_raw(Decimal("2.000000000000000001"), 18) == 2 * 10**18 + 1

    @pytest.mark.parametrize("amount", [0, 1.5, 0.123456789, 1234.56789, 0.00000001])
    def test_raw_round_trip_is_idempotent(self, amount: float) -> None:
        raw = volume_to_raw(amount, 8)
        base = volume_from_raw(raw, 8, 1).volume_in_base
        assert volume_to_raw(base, 8) == raw


class TestGetDecimals:
    """Asset decimals resolution with the 20-place fallback."""

    def test_token_metadata(self, btc_token: TokenMetadata) -> None:
        assert get_decimals(btc_token) == 8

    def test_mapping(self) -> None:
        assert get_decimals({"decimals": 6}) == 6

    @pytest.mark.parametrize("asset", [None, [], ["BTC"], "BTC", {"symbol": "BTC"}])
    def test_unresolvable_falls_back(self, asset: object) -> None:
        assert get_decimals(asset) == DEFAULT_ASSET_DECIMALS == 20

    def test_non_integer_decimals_fall_back(self) -> None:
        assert get_decimals({"decimals": "8"}) == 20
        assert get_decimals({"decimals": True}) == 20
