"""
Transaction descriptors produced by a swap.

A descriptor tells the caller where to send funds and with which memo. The vault
address inside is only valid for ~15 minutes (vaults churn), so the accessors
stop returning it once that window has passed; the caller must then build a
fresh descriptor instead of sending to a possibly retired vault.

TxParams is a tagged union: check `params.kind` ("regular" or "routed").
"""
from __future__ import annotations

from dataclasses import dataclass, field
from datetime import datetime, timedelta, timezone
from typing import Callable, Literal, Optional, Union

from .core.amounts import AssetAmount
from .core.constants import ADDRESS_TTL


def _utc_now() -> datetime:
    return datetime.now(timezone.utc)


def _valid_at(created_at: datetime, now: datetime, ttl: timedelta) -> bool:
    return now - created_at < ttl


@dataclass(frozen=True)
class RegularTransaction:
    """Plain transfer of `amount` to the vault with `memo` attached."""

    _recipient: str
    amount: AssetAmount
    memo: str
    created_at: datetime = field(default_factory=_utc_now)
    clock: Callable[[], datetime] = field(default=_utc_now, repr=False, compare=False)
    ttl: timedelta = field(default=ADDRESS_TTL, repr=False)
    kind: Literal["regular"] = "regular"

    def recipient_at(self, now: datetime) -> Optional[str]:
        return self._recipient if _valid_at(self.created_at, now, self.ttl) else None

    @property
    def recipient(self) -> Optional[str]:
        """Vault address, or None once `ttl` has elapsed since creation."""
        return self.recipient_at(self.clock())


@dataclass(frozen=True)
class RoutedTransaction:
    """Call to a router contract's deposit(vault, asset, amount, memo).

    `asset_address` is the token contract, or the zero address for the chain's gas asset.
    """

    router_contract_address: str
    _payable_vault_address: str
    asset_address: str
    amount: AssetAmount
    memo: str
    created_at: datetime = field(default_factory=_utc_now)
    clock: Callable[[], datetime] = field(default=_utc_now, repr=False, compare=False)
    ttl: timedelta = field(default=ADDRESS_TTL, repr=False)
    kind: Literal["routed"] = "routed"

    def payable_vault_address_at(self, now: datetime) -> Optional[str]:
        return self._payable_vault_address if _valid_at(self.created_at, now, self.ttl) else None

    @property
    def payable_vault_address(self) -> Optional[str]:
        return self.payable_vault_address_at(self.clock())


TxParams = Union[RegularTransaction, RoutedTransaction]


__all__ = [
    "RegularTransaction",
    "RoutedTransaction",
    "TxParams",
]
