"""Helpers for reading Candid values as the agent decodes them.

Replies decoded against a declared return type carry their real labels.
Without one the agent names record fields and variant tags ``_<hash>``,
and positional fields ``_0``, ``_1`` ... These helpers accept both shapes.
"""

from collections.abc import Mapping, Sequence
from typing import Any

from auction.models import RawPriceRecord


def idl_hash(label: str) -> int:
    """Candid field label hash."""
    result = 0
    for byte in label.encode("utf-8"):
        result = (result * 223 + byte) % 2**32
    return result


def hashed_label(label: str) -> str:
    """Key the agent uses for ``label`` when decoding without a return type."""
    return f"_{idl_hash(label)}"


def tuple_fields(value: Any, count: int) -> list[Any]:
    """Return the first ``count`` positional fields of a Candid tuple."""
    if isinstance(value, Mapping):
        try:
            return [value[f"_{index}"] for index in range(count)]
        except KeyError as exc:
            raise ValueError(f"Tuple record lacks field {exc.args[0]}") from exc
    if isinstance(value, Sequence) and not isinstance(value, (str, bytes)):
        if len(value) < count:
            raise ValueError(f"Expected {count} tuple fields, got {len(value)}")
        return list(value[:count])
    raise ValueError(f"Not a tuple: {value!r}")


def record_field(record: Mapping[str, Any], name: str) -> Any:
    """Look up a named record field by label or by its hashed label."""
    if name in record:
        return record[name]
    hashed = hashed_label(name)
    if hashed in record:
        return record[hashed]
    raise KeyError(name)


def principal_text(value: Any) -> str:
    """Render a decoded principal as its textual form."""
    to_str = getattr(value, "to_str", None)
    if callable(to_str):
        return to_str()
    return str(value)


def _quantity(value: Any) -> int | float:
    # Nat decodes to int; float64 prices are kept as-is.
    if isinstance(value, bool):
        raise ValueError(f"Expected a quantity, got {value!r}")
    if isinstance(value, (int, float)):
        return value
    return int(value)


def parse_price_rows(rows: Sequence[Any] | None) -> list[RawPriceRecord]:
    """Decode (timestamp, session, ledger, volume, price) rows."""
    records = []
    for row in rows or []:
        ts, session, ledger, volume, price = tuple_fields(row, 5)
        records.append(
            RawPriceRecord(
                timestamp_ns=int(ts),
                session_number=int(session),
                ledger=principal_text(ledger),
                raw_volume=int(volume),
                raw_price=_quantity(price),
            )
        )
    return records
