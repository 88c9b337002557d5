# Top-level API for thorchain_client (integer-domain).
"""
Top-level API for thorchain_client (integer-domain).

This module exposes the stable client-facing interface:
  - swap / liquidity maths on integer base units (match on-chain execution)
  - AddressOracle: quorum-verified inbound addresses with a 15-minute cache
  - SwapOrchestrator: one-call swap preparation (descriptor + estimate)
  - memo builders and asset identifiers

Amount types, datatypes and exceptions live in `thorchain_client.core` and are
re-exported here for convenience.
"""

# NOTE:
#   The maths modules never touch the network. Only `midgard`, `oracle` and
#   `orchestrator` perform I/O, and they log through the stdlib `logging` tree.

from __future__ import annotations

from .assets import Asset, RUNE_NATIVE, RUNE_B1A, BNB, BTC, BCH, LTC, ETH
from .core import (
    BaseAmount,
    AssetAmount,
    base_from_decimal,
    decimal_from_base,
    PoolData,
    StakeData,
    UnitData,
    InboundAddress,
    CachedAddressSet,
    MidgardPool,
    SwapCalculations,
    AmountDomainError,
    PrecisionOverflow,
    DivisionDegenerate,
    InvalidPoolStatus,
    UnknownAsset,
    Unreachable,
    Disagreement,
)
from .swap import (
    get_swap_output,
    get_swap_slip,
    get_swap_fee,
    get_swap_output_with_fee,
    get_swap_input,
    get_value_of_asset_in_rune,
    get_value_of_rune_in_asset,
    get_value_of_asset1_in_asset2,
    get_double_swap_output,
    get_double_swap_slip,
    get_double_swap_fee,
    get_double_swap_input,
    get_double_swap_output_with_fee,
)
from .liquidity import get_stake_units, get_pool_share, get_slip_on_stake
from .memo import (
    get_swap_memo,
    get_deposit_memo,
    get_withdraw_memo,
    get_switch_memo,
    get_bond_memo,
    get_unbond_memo,
    get_leave_memo,
)
from .midgard import Network
from .oracle import AddressOracle
from .txparams import RegularTransaction, RoutedTransaction, TxParams
from .orchestrator import SwapOrchestrator

__all__ = [
    # assets
    "Asset",
    "RUNE_NATIVE",
    "RUNE_B1A",
    "BNB",
    "BTC",
    "BCH",
    "LTC",
    "ETH",
    # amounts
    "BaseAmount",
    "AssetAmount",
    "base_from_decimal",
    "decimal_from_base",
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
    # swap maths
    "get_swap_output",
    "get_swap_slip",
    "get_swap_fee",
    "get_swap_output_with_fee",
    "get_swap_input",
    "get_value_of_asset_in_rune",
    "get_value_of_rune_in_asset",
    "get_value_of_asset1_in_asset2",
    "get_double_swap_output",
    "get_double_swap_slip",
    "get_double_swap_fee",
    "get_double_swap_input",
    "get_double_swap_output_with_fee",
    # liquidity maths
    "get_stake_units",
    "get_pool_share",
    "get_slip_on_stake",
    # memos
    "get_swap_memo",
    "get_deposit_memo",
    "get_withdraw_memo",
    "get_switch_memo",
    "get_bond_memo",
    "get_unbond_memo",
    "get_leave_memo",
    # network
    "Network",
    "AddressOracle",
    "RegularTransaction",
    "RoutedTransaction",
    "TxParams",
    "SwapOrchestrator",
]
