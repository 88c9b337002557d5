"""
Formatting helpers (non-core arithmetic).

Core arithmetic runs on ints. Decimal here is only for display, logs and
comparing ratios (slips) at a fixed number of places.
"""

from decimal import Decimal, ROUND_DOWN, ROUND_HALF_UP

from .exc import AmountDomainError
from .amounts import BaseAmount


# ---------------------------------------------------------------------------
# Formatting helpers
# ---------------------------------------------------------------------------

def fmt_dec(x: Decimal, places: int = 18) -> str:
    """Format a Decimal in scientific notation with fixed fractional digits.

    The output is stable for logs and tests, e.g.:
      Decimal('1')        -> '1.000000000000000000E+0'
      Decimal('1e-9')     -> '1.000000000000000000E-9'
    """
    return format(x, f".{places}E")


def _quantum(places: int) -> Decimal:
    if places < 0:
        raise AmountDomainError("places must be >= 0")
    return Decimal(1).scaleb(-places)


def round_places(x: Decimal, places: int = 8) -> Decimal:
    """Round to `places` fractional digits, ties away from zero ('plain' rounding)."""
    return x.quantize(_quantum(places), rounding=ROUND_HALF_UP)


def truncate_places(x: Decimal, places: int = 8) -> Decimal:
    """Cut to `places` fractional digits toward zero (display only)."""
    return x.quantize(_quantum(places), rounding=ROUND_DOWN)


def fmt_amount(a: BaseAmount, places: int = 8) -> str:
    """Human string of a BaseAmount truncated to `places`, for logs."""
    if not isinstance(a, BaseAmount):
        raise AmountDomainError("fmt_amount(): expected BaseAmount")
    return str(truncate_places(a.to_decimal(), min(places, a.decimals)))


def fmt_percent(ratio: Decimal, places: int = 4) -> str:
    """Render a 0..1 ratio as a percentage string, e.g. 0.009009 -> '0.9009 %'."""
    return f"{truncate_places(ratio * 100, places)} %"


__all__ = [
    "fmt_dec",
    "round_places",
    "truncate_places",
    "fmt_amount",
    "fmt_percent",
]
