"""ICRC-1 ledger metadata decoding.

Metadata arrives as (key, variant) pairs where the variant is one of
Nat, Int, Text or Blob. Decoding is exhaustive: every variant tag is checked,
the fields the dashboard relies on must have the tag they are specified with,
and symbol, name and decimals are required.
"""

from collections.abc import Iterable, Mapping
from typing import Any

from auction.client.decode import hashed_label, tuple_fields
from auction.exceptions import MetadataDecodeError
from auction.models import TokenMetadata

DEFAULT_QUOTE = "USDT"

VARIANT_TAGS = frozenset({"Nat", "Int", "Text", "Blob"})

_TAGS_BY_HASH = {hashed_label(tag): tag for tag in VARIANT_TAGS}

# Metadata key -> (field name, expected variant tag)
KNOWN_FIELDS: dict[str, tuple[str, str]] = {
    "icrc1:symbol": ("symbol", "Text"),
    "icrc1:name": ("name", "Text"),
    "icrc1:decimals": ("decimals", "Nat"),
    "icrc1:logo": ("logo", "Text"),
    "icrc1:fee": ("fee", "Nat"),
}

REQUIRED_FIELDS = ("symbol", "name", "decimals")

# Chain-key tokens (ckBTC, ckETH) are listed under their underlying symbol.
_CHAIN_KEY_PREFIX = "ck"


def decode_variant(variant: Any) -> tuple[str, Any]:
    """Split a single-tag variant mapping into (tag, value).

    Hashed tags from an untyped decode are mapped back to their names.
    """
    if not isinstance(variant, Mapping) or len(variant) != 1:
        raise MetadataDecodeError(f"Expected a single-tag variant, got {variant!r}")
    (tag, value), = variant.items()
    tag = _TAGS_BY_HASH.get(tag, tag)
    if tag not in VARIANT_TAGS:
        raise MetadataDecodeError(f"Unknown metadata variant tag {tag!r}")
    return tag, value


def decode_entries(entries: Iterable[Any]) -> dict[str, Any]:
    """Decode known metadata entries into a field -> value dict."""
    fields: dict[str, Any] = {}
    for entry in entries:
        key, variant = tuple_fields(entry, 2)
        tag, value = decode_variant(variant)
        known = KNOWN_FIELDS.get(key)
        if known is None:
            continue
        field_name, expected_tag = known
        if tag != expected_tag:
            raise MetadataDecodeError(
                f"Metadata {key} expected {expected_tag}, got {tag}"
            )
        fields[field_name] = value

    missing = [name for name in REQUIRED_FIELDS if name not in fields]
    if missing:
        raise MetadataDecodeError(f"Metadata missing required fields: {', '.join(missing)}")
    return fields


def parse_metadata(entries: Iterable[Any], quote: str | None) -> TokenMetadata:
    """Build TokenMetadata from ICRC-1 metadata entries.

    Args:
        entries: Raw (key, variant) pairs from icrc1_metadata.
        quote: Symbol of the quote token, or None to use DEFAULT_QUOTE.

    Raises:
        MetadataDecodeError: If a required field is missing or mistyped.
    """
    fields = decode_entries(entries)

    symbol = str(fields["symbol"]).removeprefix(_CHAIN_KEY_PREFIX)
    name = str(fields["name"]).removeprefix(_CHAIN_KEY_PREFIX)

    return TokenMetadata(
        symbol=symbol,
        name=name,
        decimals=int(fields["decimals"]),
        logo=str(fields.get("logo", "")),
        fee=str(fields.get("fee", 0)),
        base=symbol,
        quote=quote or DEFAULT_QUOTE,
    )
