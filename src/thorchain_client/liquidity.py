"""
Liquidity provision maths: unit issuance, redemption share and deposit slip.

All amounts are BaseAmount on the pool's grid. Results are rounded once, at the
end, with the same half-away-from-zero rule as the swap maths.
"""
from __future__ import annotations

from decimal import Decimal, localcontext
from typing import Optional

from .core import BaseAmount, PoolData, StakeData, UnitData
from .core.amounts import div_round
from .core.constants import SLIP_PRECISION
from .core.exc import AmountDomainError, DivisionDegenerate

# --- Debug utilities (toggleable) ---
DEBUG_LIQUIDITY = False

def _dbg(msg: str) -> None:
    if DEBUG_LIQUIDITY:
        print(f"[LP] {msg}")


def get_stake_units(stake: StakeData, pool: PoolData, total_units: Optional[BaseAmount] = None) -> BaseAmount:
    """Liquidity units issued for depositing `stake` into `pool`.

    With R and A the pool's rune and asset balances *after* the deposit (r, a added):

        units = basis * (r*A + R*a) / (2*R*A)

    `basis` is the pool's unit supply. When `total_units` is not given it is
    approximated by (R + A) / 2, which gives 10.5 units for (11 asset, 10 rune)
    into (110, 100) and 5 units for (0 asset, 10 rune) into the same pool.
    """
    R_amt = pool.rune_balance + stake.rune
    A_amt = pool.asset_balance + stake.asset
    r, a = stake.rune.amount, stake.asset.amount
    R, A = R_amt.amount, A_amt.amount
    if r < 0 or a < 0:
        raise AmountDomainError("deposit amounts must be >= 0")
    if R <= 0 or A <= 0:
        raise DivisionDegenerate("pool is empty after the deposit")
    weighted = r * A + R * a
    if total_units is None:
        if R_amt.decimals != A_amt.decimals:
            raise AmountDomainError("rune and asset grids differ; pass total_units explicitly")
        units = div_round((R + A) * weighted, 4 * R * A)
        decimals = R_amt.decimals
    else:
        units = div_round(total_units.amount * weighted, 2 * R * A)
        decimals = total_units.decimals
    _dbg(f"stake_units: r={r}, a={a}, R={R}, A={A} -> {units}")
    return BaseAmount(units, decimals)


def get_pool_share(unit_data: UnitData, pool: PoolData) -> StakeData:
    """Proportional redemption: (A * units / total, R * units / total)."""
    units, total = unit_data.stake_units, unit_data.total_units
    if units.decimals != total.decimals:
        raise AmountDomainError("stake_units and total_units must share a grid")
    if total.amount <= 0:
        raise DivisionDegenerate("pool has no liquidity units")
    A, R = pool.asset_balance, pool.rune_balance
    return StakeData(
        asset=BaseAmount(div_round(A.amount * units.amount, total.amount), A.decimals),
        rune=BaseAmount(div_round(R.amount * units.amount, total.amount), R.decimals),
    )


def get_slip_on_stake(stake: StakeData, pool: PoolData) -> Decimal:
    """Price impact of an asymmetric deposit: |a*R - A*r| / (A*r + R*A).

    A symmetric deposit (a/r == A/R) has zero slip.
    """
    r, a = stake.rune.amount, stake.asset.amount
    R, A = pool.rune_balance.amount, pool.asset_balance.amount
    den = A * r + R * A
    if den <= 0:
        raise DivisionDegenerate("slip on stake undefined for an empty pool")
    with localcontext() as ctx:
        ctx.prec = SLIP_PRECISION
        return abs(Decimal(a * R - A * r) / Decimal(den))


__all__ = [
    "get_stake_units",
    "get_pool_share",
    "get_slip_on_stake",
]
