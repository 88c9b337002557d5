"""
THORChain Client Core
=====================

Unified exports for integer-domain amount primitives, shared datatypes,
constants and exceptions. All monetary arithmetic uses Python ints; Decimal
appears only at the human-unit boundary and for ratios.
"""

# NOTE:
#   Rounding is ROUND_HALF_UP everywhere (Decimal -> int and int / int).
#   Amounts on different decimals grids must be rescaled before they are combined.

# Constants
from .constants import (
    DEFAULT_DECIMALS,
    MIN_DECIMALS,
    MAX_DECIMALS,
    BASE_UNITS_PER_RUNE,
    AMOUNT_PRECISION,
    DEFAULT_TRANSACTION_FEE,
    ADDRESS_TTL,
    REQUEST_TIMEOUT,
    NODE_SAMPLE_SIZE,
    MIN_QUORUM,
)

# Amount primitives and bridges
from .amounts import (
    BaseAmount,
    AssetAmount,
    base_from_decimal,
    decimal_from_base,
    div_round,
    to_decimal,
)

# Formatting helpers (non-core arithmetic)
from .fmt import (
    fmt_dec,
    fmt_amount,
    fmt_percent,
    round_places,
    truncate_places,
)

# Shared datatypes
from .datatypes import (
    PoolData,
    StakeData,
    UnitData,
    InboundAddress,
    CachedAddressSet,
    MidgardPool,
    SwapCalculations,
)

# Core exceptions
from .exc import (
    AmountDomainError,
    PrecisionOverflow,
    DivisionDegenerate,
    InvalidPoolStatus,
    UnknownAsset,
    Unreachable,
    Disagreement,
)

__all__ = [
    # constants
    "DEFAULT_DECIMALS",
    "MIN_DECIMALS",
    "MAX_DECIMALS",
    "BASE_UNITS_PER_RUNE",
    "AMOUNT_PRECISION",
    "DEFAULT_TRANSACTION_FEE",
    "ADDRESS_TTL",
    "REQUEST_TIMEOUT",
    "NODE_SAMPLE_SIZE",
    "MIN_QUORUM",
    # amounts
    "BaseAmount",
    "AssetAmount",
    "base_from_decimal",
    "decimal_from_base",
    "div_round",
    "to_decimal",
    # fmt
    "fmt_dec",
    "fmt_amount",
    "fmt_percent",
    "round_places",
    "truncate_places",
    # datatypes
    "PoolData",
    "StakeData",
    "UnitData",
    "InboundAddress",
    "CachedAddressSet",
    "MidgardPool",
    "SwapCalculations",
    # exceptions
    "AmountDomainError",
    "PrecisionOverflow",
    "DivisionDegenerate",
    "InvalidPoolStatus",
    "UnknownAsset",
    "Unreachable",
    "Disagreement",
]
