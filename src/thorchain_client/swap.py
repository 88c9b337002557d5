"""
Swap pricing (continuous liquidity pools, slip-based fee): **pool math only**.

Reproduces the network's swap formulas on integer base units so client-side
estimates agree with on-chain execution to within one base unit.

Orientation for single swaps: `to_rune=True` means the input is the pool asset
(X = asset balance, Y = rune balance); `to_rune=False` means the input is rune
(X = rune balance, Y = asset balance).

    slip(x)   = x / (x + X)
    fee(x)    = slip(x) * Y*x / (x + X)        = x^2 * Y / (x + X)^2
    output(x) = Y*x / (x + X) - fee(x)         = x * X * Y / (x + X)^2

Double swaps route asset1 -> RUNE -> asset2 through pool1 then pool2.
"""
from __future__ import annotations

from decimal import Decimal, ROUND_HALF_UP, localcontext
from typing import Optional, Tuple

from .core import BaseAmount, PoolData
from .core.amounts import div_round
from .core.constants import DEFAULT_TRANSACTION_FEE, SLIP_PRECISION, SQRT_PRECISION
from .core.exc import AmountDomainError, DivisionDegenerate

# --- Debug utilities (toggleable) ---
DEBUG_SWAP = False

def _dbg(msg: str) -> None:
    if DEBUG_SWAP:
        print(f"[SWAP] {msg}")


# ----------------------------
# Orientation helpers
# ----------------------------

def _orient(pool: PoolData, to_rune: bool) -> Tuple[BaseAmount, BaseAmount]:
    """Return (input-side balance, output-side balance) for the swap direction."""
    if to_rune:
        return pool.asset_balance, pool.rune_balance
    return pool.rune_balance, pool.asset_balance


def _input_units(amount: BaseAmount, side: BaseAmount, *, signed: bool = False) -> int:
    if not isinstance(amount, BaseAmount):
        raise AmountDomainError("swap maths requires BaseAmount inputs")
    if amount.decimals != side.decimals:
        raise AmountDomainError(
            f"input decimals {amount.decimals} do not match pool side decimals {side.decimals}"
        )
    if amount.amount < 0 and not signed:
        raise AmountDomainError("swap input must be >= 0")
    return amount.amount


def _default_fee(transaction_fee: Optional[BaseAmount]) -> BaseAmount:
    return transaction_fee if transaction_fee is not None else BaseAmount(DEFAULT_TRANSACTION_FEE)


# ----------------------------
# Single swap
# ----------------------------

def get_swap_output(input_amount: BaseAmount, pool: PoolData, to_rune: bool) -> BaseAmount:
    """Amount received for `input_amount`, net of the liquidity (slip) fee."""
    X_amt, Y_amt = _orient(pool, to_rune)
    x = _input_units(input_amount, X_amt)
    X, Y = X_amt.amount, Y_amt.amount
    if x + X <= 0:
        raise DivisionDegenerate("swap output undefined for an empty pool and zero input")
    out = div_round(x * X * Y, (x + X) ** 2)
    _dbg(f"output: x={x}, X={X}, Y={Y} -> {out}")
    return BaseAmount(out, Y_amt.decimals)


def get_swap_slip(input_amount: BaseAmount, pool: PoolData, to_rune: bool) -> Decimal:
    """Price impact x / (x + X) as a 0..1 Decimal."""
    X_amt, _ = _orient(pool, to_rune)
    x = _input_units(input_amount, X_amt)
    X = X_amt.amount
    if x + X <= 0:
        raise DivisionDegenerate("swap slip undefined for an empty pool and zero input")
    with localcontext() as ctx:
        ctx.prec = SLIP_PRECISION
        return Decimal(x) / Decimal(x + X)


def get_swap_fee(input_amount: BaseAmount, pool: PoolData, to_rune: bool) -> BaseAmount:
    """Liquidity fee x^2 * Y / (x + X)^2, in the output asset."""
    X_amt, Y_amt = _orient(pool, to_rune)
    x = _input_units(input_amount, X_amt)
    X, Y = X_amt.amount, Y_amt.amount
    if x + X <= 0:
        raise DivisionDegenerate("swap fee undefined for an empty pool and zero input")
    return BaseAmount(div_round(x * x * Y, (x + X) ** 2), Y_amt.decimals)


def get_swap_output_with_fee(
    input_amount: BaseAmount,
    pool: PoolData,
    to_rune: bool,
    transaction_fee: Optional[BaseAmount] = None,
) -> BaseAmount:
    """Output minus the network's outbound transaction fee (a rune amount).

    When the output is the pool asset, the rune fee is valued through the
    pool as it stands after the swap. The result is not clamped: small
    inputs give a negative value.
    """
    fee_rune = _default_fee(transaction_fee)
    output = get_swap_output(input_amount, pool, to_rune)
    if to_rune:
        return output - fee_rune
    pool_after = PoolData(
        asset_balance=pool.asset_balance - output,
        rune_balance=pool.rune_balance + input_amount,
    )
    return output - get_value_of_rune_in_asset(fee_rune, pool_after)


def get_swap_input(to_rune: bool, pool: PoolData, output_amount: BaseAmount) -> BaseAmount:
    """Input needed to receive `output_amount` (inverse of get_swap_output).

    Solves y * (x + X)^2 = x * X * Y for the smaller root, written in the
    cancellation-free form x = 2*X*y / ((Y - 2y) + sqrt(Y * (Y - 4y))).
    The output curve peaks at Y/4, so requests above that are rejected.
    """
    X_amt, Y_amt = _orient(pool, to_rune)
    if not isinstance(output_amount, BaseAmount):
        raise AmountDomainError("swap maths requires BaseAmount inputs")
    y = output_amount.amount
    X, Y = X_amt.amount, Y_amt.amount
    if y < 0:
        raise AmountDomainError("requested output must be >= 0")
    if y == 0:
        return BaseAmount(0, X_amt.decimals)
    if X <= 0 or Y <= 0:
        raise DivisionDegenerate("swap input undefined for an empty pool")
    if 4 * y > Y:
        raise DivisionDegenerate(f"requested output {y} exceeds the pool's maximum output {Y // 4}")
    with localcontext() as ctx:
        ctx.prec = SQRT_PRECISION
        root = Decimal(Y * (Y - 4 * y)).sqrt()
        x = Decimal(2 * X * y) / (Decimal(Y - 2 * y) + root)
        units = int(x.to_integral_value(rounding=ROUND_HALF_UP))
    _dbg(f"input: y={y}, X={X}, Y={Y} -> {x} ~ {units}")
    return BaseAmount(units, X_amt.decimals)


# ----------------------------
# Spot values (no slip)
# ----------------------------

def get_value_of_asset_in_rune(input_asset: BaseAmount, pool: PoolData) -> BaseAmount:
    """Spot value a * R / A of an asset amount, in rune."""
    A, R = pool.asset_balance, pool.rune_balance
    a = _input_units(input_asset, A, signed=True)
    if A.amount <= 0:
        raise DivisionDegenerate("asset balance is zero")
    return BaseAmount(div_round(a * R.amount, A.amount), R.decimals)


def get_value_of_rune_in_asset(input_rune: BaseAmount, pool: PoolData) -> BaseAmount:
    """Spot value r * A / R of a rune amount, in the pool asset."""
    A, R = pool.asset_balance, pool.rune_balance
    r = _input_units(input_rune, R, signed=True)
    if R.amount <= 0:
        raise DivisionDegenerate("rune balance is zero")
    return BaseAmount(div_round(r * A.amount, R.amount), A.decimals)


def get_value_of_asset1_in_asset2(input_asset: BaseAmount, pool1: PoolData, pool2: PoolData) -> BaseAmount:
    """Spot value of asset1 in asset2 through rune: a * (R1/A1) * (A2/R2), rounded once."""
    A1, R1 = pool1.asset_balance, pool1.rune_balance
    A2, R2 = pool2.asset_balance, pool2.rune_balance
    a = _input_units(input_asset, A1)
    if A1.amount <= 0 or R2.amount <= 0:
        raise DivisionDegenerate("pool balance is zero")
    return BaseAmount(div_round(a * R1.amount * A2.amount, A1.amount * R2.amount), A2.decimals)


# ----------------------------
# Double swap (asset1 -> RUNE -> asset2)
# ----------------------------

def get_double_swap_output(input_amount: BaseAmount, pool1: PoolData, pool2: PoolData) -> BaseAmount:
    r = get_swap_output(input_amount, pool1, True)
    return get_swap_output(r, pool2, False)


def get_double_swap_slip(
    input_amount: BaseAmount,
    pool1: PoolData,
    pool2: PoolData,
    *,
    compound: bool = True,
) -> Decimal:
    """Combined price impact of both hops.

    compound=True:  1 - (1 - s1) * (1 - s2)
    compound=False: s1 + s2 (the figure quoted by the network's own tooling)

    s2 is measured on the rune actually delivered by the first hop.
    """
    s1 = get_swap_slip(input_amount, pool1, True)
    r = get_swap_output(input_amount, pool1, True)
    s2 = get_swap_slip(r, pool2, False)
    with localcontext() as ctx:
        ctx.prec = SLIP_PRECISION
        if not compound:
            return s1 + s2
        return 1 - (1 - s1) * (1 - s2)


def get_double_swap_fee(input_amount: BaseAmount, pool1: PoolData, pool2: PoolData) -> BaseAmount:
    """Total liquidity fee of both hops, in asset2.

    The first hop's fee is a rune amount; it is valued in asset2 at pool2's
    spot price before being added to the second hop's fee.
    """
    fee1 = get_swap_fee(input_amount, pool1, True)
    r = get_swap_output(input_amount, pool1, True)
    fee2 = get_swap_fee(r, pool2, False)
    return fee2 + get_value_of_rune_in_asset(fee1, pool2)


def get_double_swap_input(pool1: PoolData, pool2: PoolData, output_amount: BaseAmount) -> BaseAmount:
    """Asset1 input needed to receive `output_amount` of asset2."""
    r = get_swap_input(False, pool2, output_amount)
    return get_swap_input(True, pool1, r)


def get_double_swap_output_with_fee(
    input_amount: BaseAmount,
    pool1: PoolData,
    pool2: PoolData,
    transaction_fee: Optional[BaseAmount] = None,
) -> BaseAmount:
    """Double swap output minus the outbound transaction fee valued in asset2 (may be negative)."""
    fee_rune = _default_fee(transaction_fee)
    r = get_swap_output(input_amount, pool1, True)
    output = get_swap_output(r, pool2, False)
    pool2_after = PoolData(
        asset_balance=pool2.asset_balance - output,
        rune_balance=pool2.rune_balance + r,
    )
    return output - get_value_of_rune_in_asset(fee_rune, pool2_after)


__all__ = [
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
]
