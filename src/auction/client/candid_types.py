"""Candid return types for the auction canister and ICRC-1 ledger queries.

Passing these to the agent makes it decode records and variants under their
declared labels instead of numeric label hashes.
"""

from ic.candid import Types

METADATA_VALUE = Types.Variant(
    {
        "Nat": Types.Nat,
        "Int": Types.Int,
        "Text": Types.Text,
        "Blob": Types.Vec(Types.Nat8),
    }
)

# icrc1_metadata : () -> (vec record { text; MetadataValue }) query
ICRC1_METADATA = Types.Vec(Types.Tuple(Types.Text, METADATA_VALUE))

# queryPriceHistory rows: (timestamp, session number, ledger, volume, price)
PRICE_HISTORY = Types.Vec(
    Types.Tuple(Types.Nat64, Types.Nat, Types.Principal, Types.Nat, Types.Float64)
)

SUPPORTED_TOKENS = Types.Vec(Types.Principal)

QUOTE_LEDGER = Types.Principal

INDICATIVE_STATS = Types.Record(
    {
        "clearingPrice": Types.Float64,
        "clearingVolume": Types.Nat,
        "totalAskVolume": Types.Nat,
        "totalBidVolume": Types.Nat,
    }
)

NEXT_SESSION = Types.Record({"counter": Types.Nat, "timestamp": Types.Nat})
