"""Market data layer -- token loading, price history and order sizing."""

from auction.market_data.order_sizer import OrderSizer
from auction.market_data.price_history import PriceHistoryService
from auction.market_data.token_service import TokenService

__all__ = ["OrderSizer", "PriceHistoryService", "TokenService"]
