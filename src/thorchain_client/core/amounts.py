"""
Amount primitives: BaseAmount (integer base units) and AssetAmount (decimal units).

- BaseAmount: Python ints (arbitrary precision) counting an asset's smallest unit.
- AssetAmount: Decimal quantity in human units plus the asset's decimal exponent.
- Signed domain: negative and zero amounts are valid (signed fee/output results).
- Rounding semantics: one rule everywhere, ROUND_HALF_UP (ties away from zero,
  symmetric for negatives), both for Decimal -> int and for integer division.

Floats never represent amounts: AssetAmount and base_from_decimal accept str,
int or Decimal only. Conversions back to Decimal are exact (digit tuples, no
context rounding).
"""

from __future__ import annotations

from dataclasses import dataclass
from decimal import Decimal, InvalidOperation, ROUND_HALF_UP, localcontext

from .constants import (
    DEFAULT_DECIMALS,
    MIN_DECIMALS,
    MAX_DECIMALS,
    AMOUNT_PRECISION,
)
from .exc import AmountDomainError, PrecisionOverflow, DivisionDegenerate

# Debug printing control
DEBUG_AMOUNTS = False

def _dbg(msg: str) -> None:
    if DEBUG_AMOUNTS:
        print(msg)


DecimalLike = Decimal | int | str


# ----------------------------
# Validation / bridges
# ----------------------------

def _check_decimals(decimals: int) -> int:
    if isinstance(decimals, bool) or not isinstance(decimals, int):
        raise AmountDomainError(f"decimals must be int, got {type(decimals).__name__}")
    if decimals < MIN_DECIMALS or decimals > MAX_DECIMALS:
        raise AmountDomainError(
            f"decimals must be within [{MIN_DECIMALS}, {MAX_DECIMALS}], got {decimals}"
        )
    return decimals


def to_decimal(x: DecimalLike) -> Decimal:
    """Bridge a str/int/Decimal to Decimal without any float round-trip.

    Raises AmountDomainError for floats, bools, NaN/Infinity and malformed
    literals; PrecisionOverflow when the literal has more significant digits
    than AMOUNT_PRECISION.
    """
    if isinstance(x, bool):
        raise AmountDomainError("bool is not an amount")
    if isinstance(x, float):
        raise AmountDomainError("float amounts are not accepted; pass a str or Decimal")
    if isinstance(x, Decimal):
        d = x
    elif isinstance(x, int):
        d = Decimal(x)
    elif isinstance(x, str):
        try:
            d = Decimal(x.strip())
        except InvalidOperation:
            raise AmountDomainError(f"invalid decimal literal: {x!r}") from None
    else:
        raise AmountDomainError(f"unsupported amount type: {type(x).__name__}")
    if d.is_nan() or d.is_infinite():
        raise AmountDomainError("NaN/Infinity is not an amount")
    n_digits = len(d.as_tuple().digits)
    if n_digits > AMOUNT_PRECISION:
        raise PrecisionOverflow(
            f"decimal literal has {n_digits} significant digits (max {AMOUNT_PRECISION})"
        )
    return d


# ----------------------------
# Integer rounding helpers (centralised)
# ----------------------------

def div_round(num: int, den: int) -> int:
    """Integer num/den rounded half away from zero (same rule as base_from_decimal)."""
    if den == 0:
        raise DivisionDegenerate(f"division by zero (numerator={num})")
    if den < 0:
        num, den = -num, -den
    q, r = divmod(abs(num), den)
    if 2 * r >= den:
        q += 1
    return q if num >= 0 else -q


def decimal_from_base(amount: int, decimals: int = DEFAULT_DECIMALS) -> Decimal:
    """Exact Decimal value of `amount` base units: amount / 10^decimals."""
    if isinstance(amount, bool) or not isinstance(amount, int):
        raise AmountDomainError("decimal_from_base: amount must be int")
    decimals = _check_decimals(decimals)
    sign = 1 if amount < 0 else 0
    digits = tuple(int(c) for c in str(abs(amount)))
    return Decimal((sign, digits, -decimals))


def base_from_decimal(value: DecimalLike, decimals: int = DEFAULT_DECIMALS) -> "BaseAmount":
    """Convert a decimal quantity to base units: round(value * 10^decimals), ROUND_HALF_UP."""
    decimals = _check_decimals(decimals)
    d = to_decimal(value)
    with localcontext() as ctx:
        # Wide enough that scaleb and the integral rounding are exact.
        ctx.prec = AMOUNT_PRECISION + MAX_DECIMALS + 2
        scaled = d.scaleb(decimals)
        units = scaled.to_integral_value(rounding=ROUND_HALF_UP)
    _dbg(f"base_from_decimal: value={d}, decimals={decimals}, units={units}")
    return BaseAmount(int(units), decimals)


# ----------------------------
# BaseAmount (integer base units)
# ----------------------------

@dataclass(frozen=True)
class BaseAmount:
    """Integer count of an asset's smallest unit on a `decimals` grid (signed)."""
    amount: int
    decimals: int = DEFAULT_DECIMALS

    def __post_init__(self):
        if isinstance(self.amount, bool) or not isinstance(self.amount, int):
            raise AmountDomainError(
                f"BaseAmount requires an int, got {type(self.amount).__name__}"
            )
        _check_decimals(self.decimals)

    # ------------- conversions -------------

    @property
    def asset_amount(self) -> "AssetAmount":
        return AssetAmount(decimal_from_base(self.amount, self.decimals), self.decimals)

    def to_decimal(self) -> Decimal:
        return decimal_from_base(self.amount, self.decimals)

    def rescale(self, decimals: int) -> "BaseAmount":
        """Move to another decimals grid; scaling down rounds half away from zero."""
        decimals = _check_decimals(decimals)
        if decimals == self.decimals:
            return self
        if decimals > self.decimals:
            return BaseAmount(self.amount * 10 ** (decimals - self.decimals), decimals)
        return BaseAmount(div_round(self.amount, 10 ** (self.decimals - decimals)), decimals)

    # ------------- predicates -------------

    def is_zero(self) -> bool:
        return self.amount == 0

    # ------------- comparisons / arithmetic (same grid only) -------------

    def _same_grid(self, other: object) -> "BaseAmount":
        if not isinstance(other, BaseAmount):
            raise AmountDomainError("BaseAmount arithmetic requires BaseAmount operands")
        if other.decimals != self.decimals:
            raise AmountDomainError(
                f"decimals mismatch ({self.decimals} vs {other.decimals}); rescale first"
            )
        return other

    def __lt__(self, other: "BaseAmount") -> bool:
        return self.amount < self._same_grid(other).amount

    def __le__(self, other: "BaseAmount") -> bool:
        return self.amount <= self._same_grid(other).amount

    def __gt__(self, other: "BaseAmount") -> bool:
        return self.amount > self._same_grid(other).amount

    def __ge__(self, other: "BaseAmount") -> bool:
        return self.amount >= self._same_grid(other).amount

    def __add__(self, other: "BaseAmount") -> "BaseAmount":
        return BaseAmount(self.amount + self._same_grid(other).amount, self.decimals)

    def __sub__(self, other: "BaseAmount") -> "BaseAmount":
        return BaseAmount(self.amount - self._same_grid(other).amount, self.decimals)

    def __neg__(self) -> "BaseAmount":
        return BaseAmount(-self.amount, self.decimals)

    def __str__(self) -> str:
        return str(self.amount)


# ----------------------------
# AssetAmount (decimal units)
# ----------------------------

@dataclass(frozen=True)
class AssetAmount:
    """Decimal quantity in human units, e.g. AssetAmount("1.5") BTC or AssetAmount("0.1", 18) ETH."""
    amount: Decimal
    decimals: int = DEFAULT_DECIMALS

    def __post_init__(self):
        object.__setattr__(self, "amount", to_decimal(self.amount))
        _check_decimals(self.decimals)

    @property
    def base_amount(self) -> BaseAmount:
        return base_from_decimal(self.amount, self.decimals)

    def __str__(self) -> str:
        return str(self.amount)


__all__ = [
    "DecimalLike",
    "to_decimal",
    "div_round",
    "decimal_from_base",
    "base_from_decimal",
    "BaseAmount",
    "AssetAmount",
]
