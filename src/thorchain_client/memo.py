"""
Transaction memo builders.

The network routes an inbound transfer by its memo text, so these strings are a
compatibility contract: colon-separated fields, the asset in `CHAIN.SYMBOL`
form, and empty trailing fields kept as an empty string (e.g. `SWAP:BNB.BNB:bnb123:`).
"""
from __future__ import annotations

from decimal import Decimal, ROUND_HALF_UP
from typing import Optional, Union

from .assets import Asset
from .core.amounts import to_decimal

_MAX_BASIS_POINTS = 10_000


def _field(value) -> str:
    return "" if value is None else str(value)


def get_swap_memo(asset: Asset, destination_address: str = "", limit: Optional[int] = None) -> str:
    """SWAP:{asset}:{destination}:{limit}. `limit` is the minimum output in base units."""
    return f"SWAP:{asset.memo_string}:{destination_address}:{_field(limit)}"


def get_deposit_memo(asset: Asset, address: Optional[str] = None) -> str:
    """ADD:{asset}:{paired address}. The paired address links an asymmetric deposit to its rune side."""
    return f"ADD:{asset.memo_string}:{_field(address)}"


def _basis_points(percent: Union[Decimal, int, str]) -> int:
    bp = (to_decimal(percent) * 100).to_integral_value(rounding=ROUND_HALF_UP)
    return max(0, min(_MAX_BASIS_POINTS, int(bp)))


def get_withdraw_memo(
    asset: Asset,
    percent: Union[Decimal, int, str],
    target_asset: Optional[Asset] = None,
) -> str:
    """WITHDRAW:{asset}:{basis points}:{target asset}.

    `percent` is clamped to [0, 100] and written in basis points (11 -> 1100).
    A target asset requests an asymmetric withdrawal paid out in that asset only.
    """
    target = target_asset.memo_string if target_asset is not None else ""
    return f"WITHDRAW:{asset.memo_string}:{_basis_points(percent)}:{target}"


def get_switch_memo(address: str) -> str:
    return f"SWITCH:{address}"


def get_bond_memo(thor_address: str) -> str:
    return f"BOND:{thor_address}"


def get_unbond_memo(thor_address: str, units: int) -> str:
    return f"UNBOND:{thor_address}:{units}"


def get_leave_memo(thor_address: str) -> str:
    return f"LEAVE:{thor_address}"


__all__ = [
    "get_swap_memo",
    "get_deposit_memo",
    "get_withdraw_memo",
    "get_switch_memo",
    "get_bond_memo",
    "get_unbond_memo",
    "get_leave_memo",
]
