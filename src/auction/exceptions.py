"""Custom exceptions for the auction dashboard.

Numeric-core, metadata and transport exceptions live here
to avoid circular imports between modules.
"""


class AuctionError(Exception):
    """Base exception for all dashboard errors."""


class InvalidMagnitudeError(AuctionError, ValueError):
    """Raised when a numeric value is outside the domain an operation needs.

    Covers log10 of a non-positive quantity, negative raw quantities and
    non-finite inputs. The numeric core raises this instead of returning
    NaN or Infinity.
    """


class MetadataDecodeError(AuctionError):
    """Raised when ledger metadata lacks a required field or has a mismatched variant."""


class RemoteServiceError(AuctionError):
    """Raised when the auction canister or a token ledger cannot be queried."""
