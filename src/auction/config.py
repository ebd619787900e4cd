"""Dashboard settings loaded from environment variables and an optional .env file."""

from decimal import Decimal

from pydantic_settings import BaseSettings, SettingsConfigDict


class AuctionSettings(BaseSettings):
    """Auction canister connection settings."""

    model_config = SettingsConfigDict(env_prefix="AUCTION_")

    host: str = "https://ic0.app"
    canister_id: str = "g2mgr-byaaa-aaaai-actsq-cai"
    default_quote: str = "USDT"  # used when the quote ledger cannot be resolved


class HistorySettings(BaseSettings):
    """Price history query and display parameters.

    All fields configurable via HISTORY_ environment variable prefix.
    """

    model_config = SettingsConfigDict(env_prefix="HISTORY_")

    limit: int = 10000  # rows requested per query
    skip: int = 0
    significant_digits: int = 2  # extra digits kept past the first non-zero fraction digit
    display_rows: int = 17  # newest-first rows shown in the table
    refresh_interval: int = 30  # seconds between background refreshes


class OrderSettings(BaseSettings):
    """Order entry policy values."""

    model_config = SettingsConfigDict(env_prefix="ORDERS_")

    minimum_notional_in_quote: Decimal = Decimal("10")
    price_digits_limit: int = 10  # significant digits allowed in a price
    quote_volume_step: Decimal = Decimal("0.01")  # smallest quote volume increment


class DashboardSettings(BaseSettings):
    """Where the dashboard listens and how often it pushes updates."""

    model_config = SettingsConfigDict(env_prefix="DASHBOARD_")

    host: str = "0.0.0.0"
    port: int = 8080
    update_interval: int = 5  # seconds between WebSocket pushes


class AppSettings(BaseSettings):
    """Top-level settings; nested groups override as AUCTION__HOST and so on."""

    model_config = SettingsConfigDict(
        env_file=".env",
        env_file_encoding="utf-8",
        env_nested_delimiter="__",
    )

    log_level: str = "INFO"
    auction: AuctionSettings = AuctionSettings()
    history: HistorySettings = HistorySettings()
    orders: OrderSettings = OrderSettings()
    dashboard: DashboardSettings = DashboardSettings()
