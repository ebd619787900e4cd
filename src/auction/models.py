"""Shared data models for the auction dashboard.

Raw quantities from the canister are Python ints (arbitrary precision).
Display values are floats derived from them by ``auction.numeric`` and are
never stored apart from the raw record and asset decimals they came from.
"""

from dataclasses import dataclass
from decimal import Decimal


@dataclass
class TokenMetadata:
    """ICRC-1 ledger metadata for a tradable token, plus its quote pairing."""

    symbol: str
    name: str
    decimals: int
    logo: str = ""
    fee: str = "0"  # display scale, converted from the ledger's raw fee
    base: str = ""
    quote: str = ""
    principal: str | None = None


@dataclass(frozen=True)
class RawPriceRecord:
    """One price history row exactly as the auction canister reports it."""

    timestamp_ns: int
    session_number: int
    ledger: str
    raw_volume: int
    raw_price: int | float  # some canister versions report float64 prices


@dataclass(frozen=True)
class PriceHistoryItem:
    """A display-scale price history row.

    The ``*_decimals`` fields are batch-wide rendering hints filled in by
    ``auction.numeric.precision.add_decimal``.
    """

    id: int
    datetime: str
    date: str
    time: str
    price: float
    volume: float
    volume_in_quote: float
    volume_in_base: float
    quote_decimals: int
    price_digits_limit: int
    price_decimals: int = 0
    volume_in_base_decimals: int = 0
    volume_in_quote_decimals: int = 0


@dataclass(frozen=True)
class Statistics:
    """Indicative clearing statistics for the upcoming auction session."""

    clearing_price: float
    clearing_volume: float
    total_ask_volume: float
    total_bid_volume: float


@dataclass(frozen=True)
class NextSession:
    """When the next auction session runs."""

    next_session: str
    datetime: int  # Unix milliseconds
    counter: str


@dataclass(frozen=True)
class VolumeConversion:
    """A raw volume expressed in base and quote display units."""

    volume_in_base: float
    volume_in_quote: float


@dataclass(frozen=True)
class StepSizeResult:
    """An order amount quantized to the step implied by the minimum notional."""

    volume: str
    volume_floor: str
    step_size: Decimal
    decimal_places: int


@dataclass(frozen=True)
class PrecisionHints:
    """Fraction digits needed per quantity class across a history batch."""

    price: int
    volume_in_base: int
    volume_in_quote: int


@dataclass(frozen=True)
class ChartScale:
    """Rounded axis bounds for the price chart."""

    min_value: float
    max_value: float


@dataclass(frozen=True)
class OrderPreview:
    """Result of sanitizing and quantizing a user-entered order amount."""

    amount_text: str
    volume: str
    volume_floor: str
    step_size: Decimal
    price_within_limit: bool
    amount_decimals: int
    reference_price: str
