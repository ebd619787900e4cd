"""Price history dashboard for an ICRC-84 auction canister on the Internet Computer."""
