"""
THORChain client constants
==========================

Integer-domain constants for base units, plus the discovery/cache parameters
used by the address oracle. Decimal precisions here only size local contexts;
no module mutates the global Decimal context.
"""

# NOTE: Midgard reports every pool depth on a 1e8 grid regardless of the asset's native decimals.

from datetime import timedelta

# ---------------------------------------------------------------------------
# Amount grids
# ---------------------------------------------------------------------------

#: Default number of decimals for a base unit (1 RUNE = 10^8 base units).
DEFAULT_DECIMALS: int = 8

#: Supported decimal exponent range (ERC20 tokens go up to 18).
MIN_DECIMALS: int = 0
MAX_DECIMALS: int = 18

#: Base units per whole native unit on the default grid.
BASE_UNITS_PER_RUNE: int = 10 ** DEFAULT_DECIMALS

#: Maximum significant digits accepted in a decimal literal.
AMOUNT_PRECISION: int = 60

#: Local context precision for slip ratios (Decimal).
SLIP_PRECISION: int = 40

#: Local context precision for square roots in the swap input inversion.
SQRT_PRECISION: int = 80


# ---------------------------------------------------------------------------
# Network fees
# ---------------------------------------------------------------------------

#: Outbound transaction fee charged by the network, in rune base units (1 RUNE).
DEFAULT_TRANSACTION_FEE: int = BASE_UNITS_PER_RUNE


# ---------------------------------------------------------------------------
# Discovery / cache
# ---------------------------------------------------------------------------

#: Inbound addresses rotate on vault churn; a fetched set is trusted this long.
ADDRESS_TTL: timedelta = timedelta(minutes=15)

#: Per-request timeout in seconds for every indexer/bootstrap call.
REQUEST_TIMEOUT: float = 10.0

#: Number of bootstrap nodes sampled per refresh.
NODE_SAMPLE_SIZE: int = 3

#: Minimum number of agreeing indexer responses.
MIN_QUORUM: int = 2

#: Midgard port exposed by every node.
MIDGARD_PORT: int = 8080

INBOUND_ADDRESSES_PATH: str = "/v2/thorchain/inbound_addresses"
POOLS_PATH: str = "/v2/pools"

#: Router deposits of the chain's gas asset use the zero address.
ZERO_ADDRESS: str = "0x0000000000000000000000000000000000000000"

POOL_STATUS_AVAILABLE: str = "available"


__all__ = [
    "DEFAULT_DECIMALS",
    "MIN_DECIMALS",
    "MAX_DECIMALS",
    "BASE_UNITS_PER_RUNE",
    "AMOUNT_PRECISION",
    "SLIP_PRECISION",
    "SQRT_PRECISION",
    "DEFAULT_TRANSACTION_FEE",
    "ADDRESS_TTL",
    "REQUEST_TIMEOUT",
    "NODE_SAMPLE_SIZE",
    "MIN_QUORUM",
    "MIDGARD_PORT",
    "INBOUND_ADDRESSES_PATH",
    "POOLS_PATH",
    "ZERO_ADDRESS",
    "POOL_STATUS_AVAILABLE",
]
