"""
Core datatypes shared by the calculation engines, the oracle and the orchestrator.

These datatypes are intentionally minimal and immutable so that the pure
engines stay deterministic and the oracle's cache can only be replaced whole.

Notes:
- Balances use BaseAmount (integer base units). No floats.
- `InboundAddress` equality is structural; quorum comparisons use `quorum_key()`.
"""

from __future__ import annotations

from dataclasses import dataclass
from datetime import datetime, timedelta
from decimal import Decimal
from typing import Optional, Tuple

from .amounts import BaseAmount
from .constants import ADDRESS_TTL
from .exc import AmountDomainError


# ---------------------------------------------------------------------------
# Pool / liquidity snapshots
# ---------------------------------------------------------------------------

@dataclass(frozen=True)
class PoolData:
    """Reserves of one pool: non-rune asset balance and rune balance (both >= 0)."""

    asset_balance: BaseAmount
    rune_balance: BaseAmount

    def __post_init__(self):
        if self.asset_balance.amount < 0 or self.rune_balance.amount < 0:
            raise AmountDomainError("pool balances must be >= 0")


@dataclass(frozen=True)
class StakeData:
    """Asset/rune pair for a liquidity event (contribution or redemption share)."""

    asset: BaseAmount
    rune: BaseAmount


@dataclass(frozen=True)
class UnitData:
    """Liquidity units held by a provider and the pool's total units."""

    stake_units: BaseAmount
    total_units: BaseAmount


# ---------------------------------------------------------------------------
# Inbound addresses
# ---------------------------------------------------------------------------

@dataclass(frozen=True)
class InboundAddress:
    """One chain's current inbound vault as reported by an indexer.

    Fields:
    - chain: source chain ticker, e.g. "BTC", "ETH".
    - pub_key: vault public key.
    - address: vault address. Valid only until the next churn (~15 minutes).
    - router: router contract address; empty string when funds go straight to `address`.
    - halted: chain halted by the network; such entries are never used.
    """

    chain: str
    pub_key: str
    address: str
    router: str = ""
    halted: bool = False

    def quorum_key(self) -> Tuple[str, str, str, bool]:
        """Fields that must agree across indexers for the address set to be accepted."""
        return (self.chain, self.address, self.router, self.halted)

    def has_router(self) -> bool:
        return bool(self.router)


@dataclass(frozen=True)
class CachedAddressSet:
    """Quorum-accepted inbound addresses and the instant they were fetched."""

    addresses: Tuple[InboundAddress, ...]
    fetched_at: datetime

    def is_fresh(self, now: datetime, ttl: timedelta = ADDRESS_TTL) -> bool:
        """True while now - fetched_at < ttl."""
        return now - self.fetched_at < ttl


# ---------------------------------------------------------------------------
# Pool snapshot (indexer)
# ---------------------------------------------------------------------------

@dataclass(frozen=True)
class MidgardPool:
    """The fields of a Midgard `/v2/pools` entry consumed by the engines."""

    asset: str
    asset_depth: int
    rune_depth: int
    status: str
    units: Optional[int] = None

    def pool_data(self) -> PoolData:
        return PoolData(
            asset_balance=BaseAmount(self.asset_depth),
            rune_balance=BaseAmount(self.rune_depth),
        )


# ---------------------------------------------------------------------------
# Swap summary
# ---------------------------------------------------------------------------

@dataclass(frozen=True)
class SwapCalculations:
    """Estimated outcome of a swap, for the user to review before sending funds.

    - slip: price impact as a 0..1 ratio. For double swaps this is the
      compounded figure 1 - (1 - s1) * (1 - s2), not the plain sum s1 + s2.
    - output: amount of the target asset received (net of liquidity fees).
    - fee: liquidity fee, in the target asset.
    - asset_depth_first_swap / asset_depth_second_swap: pool snapshots used
      (second is None for single swaps).
    """

    slip: Decimal
    output: BaseAmount
    fee: BaseAmount
    asset_depth_first_swap: PoolData
    asset_depth_second_swap: Optional[PoolData] = None


__all__ = [
    "PoolData",
    "StakeData",
    "UnitData",
    "InboundAddress",
    "CachedAddressSet",
    "MidgardPool",
    "SwapCalculations",
]
