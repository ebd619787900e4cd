"""Order entry preview: sanitize a typed amount and snap it to the pair's step.

Uses the numeric core only; nothing here talks to the canister.
"""

from decimal import Decimal

from auction.config import OrderSettings
from auction.logging import get_logger
from auction.models import OrderPreview
from auction.numeric.digits import clamp_fractional_input, is_within_digit_limit
from auction.numeric.display import format_amount, minimum_fraction_digits
from auction.numeric.normalize import to_canonical_decimal_text
from auction.numeric.quantizer import volume_step_size, volume_step_size_decimals

logger = get_logger(__name__)


class OrderSizer:
    """Turns free-text order amounts into step-aligned volumes.

    Args:
        settings: Order settings with the minimum notional, quote volume
                  step and digits limit.
    """

    def __init__(self, settings: OrderSettings) -> None:
        self._settings = settings

    def amount_decimals(self, price: float, decimals: int, quote_decimals: int | None) -> int:
        """Fraction digits a typed base amount may keep at this price.

        Without a quote token only the base asset's decimals apply.
        """
        if quote_decimals is None:
            return decimals
        allowed = volume_step_size_decimals(
            price, self._settings.quote_volume_step, decimals, quote_decimals
        )
        return max(min(allowed, decimals), 0)

    def reference_price(self, price: float) -> str:
        """Price text padded with fraction digits up to the digits limit."""
        digits = minimum_fraction_digits(
            to_canonical_decimal_text(price), self._settings.price_digits_limit
        )
        return format_amount(float(price), digits)

    def preview(
        self,
        amount_text: str,
        price: float,
        decimals: int,
        quote_decimals: int | None = None,
    ) -> OrderPreview:
        """Quantize a typed base amount at the given display price.

        Args:
            amount_text: Raw user input, possibly malformed.
            price: Display price in quote units (must be positive).
            decimals: Decimal places of the base asset.
            quote_decimals: Decimal places of the quote asset, if known.

        Raises:
            InvalidMagnitudeError: If price is not positive.
        """
        amount_decimals = self.amount_decimals(price, decimals, quote_decimals)
        cleaned = clamp_fractional_input(amount_text, amount_decimals)
        amount = Decimal(cleaned) if cleaned.strip(".") else Decimal("0")

        result = volume_step_size(
            price, amount, decimals, self._settings.minimum_notional_in_quote
        )
        within_limit = is_within_digit_limit(price, self._settings.price_digits_limit)

        logger.debug(
            "order_preview",
            amount=cleaned,
            amount_decimals=amount_decimals,
            volume=result.volume,
            step_size=str(result.step_size),
        )
        return OrderPreview(
            amount_text=cleaned,
            volume=result.volume,
            volume_floor=result.volume_floor,
            step_size=result.step_size,
            price_within_limit=within_limit,
            amount_decimals=amount_decimals,
            reference_price=self.reference_price(price),
        )
