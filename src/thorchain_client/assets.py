"""Asset identifiers in the network's `CHAIN.SYMBOL[-CONTRACT]` notation."""

from __future__ import annotations

from dataclasses import dataclass

from .core.constants import ZERO_ADDRESS


@dataclass(frozen=True)
class Asset:
    """A pool asset, e.g. Asset("BTC", "BTC") or Asset("ETH", "USDT-0X62E2...").

    Comparison is case-insensitive on both parts (Midgard reports upper case).
    """

    chain: str
    symbol: str

    def __post_init__(self):
        if not self.chain or not self.symbol:
            raise ValueError("asset chain and symbol must be non-empty")
        object.__setattr__(self, "chain", self.chain.upper())
        object.__setattr__(self, "symbol", self.symbol.upper())

    @classmethod
    def from_string(cls, s: str) -> "Asset":
        """Parse "CHAIN.SYMBOL" (as used in memos and Midgard payloads)."""
        chain, sep, symbol = s.strip().partition(".")
        if not sep:
            raise ValueError(f"asset must look like CHAIN.SYMBOL, got {s!r}")
        return cls(chain, symbol)

    @property
    def ticker(self) -> str:
        """Symbol without its contract suffix, e.g. "USDT"."""
        return self.symbol.split("-")[0]

    @property
    def memo_string(self) -> str:
        return f"{self.chain}.{self.symbol}"

    @property
    def contract_address(self) -> str:
        """Token contract from the symbol suffix (lower case), or the zero address for gas assets."""
        parts = self.symbol.split("-")
        if len(parts) == 2:
            return parts[1].lower()
        return ZERO_ADDRESS

    def is_rune(self) -> bool:
        return self == RUNE_NATIVE

    def __str__(self) -> str:
        return self.memo_string


RUNE_NATIVE = Asset("THOR", "RUNE")
RUNE_B1A = Asset("BNB", "RUNE-B1A")
BNB = Asset("BNB", "BNB")
BTC = Asset("BTC", "BTC")
BCH = Asset("BCH", "BCH")
LTC = Asset("LTC", "LTC")
ETH = Asset("ETH", "ETH")


__all__ = [
    "Asset",
    "RUNE_NATIVE",
    "RUNE_B1A",
    "BNB",
    "BTC",
    "BCH",
    "LTC",
    "ETH",
]
