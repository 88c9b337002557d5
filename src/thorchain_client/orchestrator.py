"""
Swap orchestration: inbound address + pool snapshot + maths + memo -> descriptor.

`SwapOrchestrator.perform_swap` is the one call a wallet needs before asking
the user to confirm a swap. It never raises for network or pool problems; it
logs the reason and returns None so the caller can simply retry later.
"""
from __future__ import annotations

import logging
from typing import Callable, Iterable, List, Optional, Tuple

import requests

from .assets import Asset
from .core.amounts import AssetAmount, BaseAmount
from .core.constants import DEFAULT_DECIMALS
from .core.datatypes import InboundAddress, MidgardPool, SwapCalculations
from .core.exc import AmountDomainError, DivisionDegenerate, InvalidPoolStatus, UnknownAsset
from .core.fmt import fmt_amount, fmt_percent, truncate_places
from .memo import get_swap_memo
from .midgard import fetch_pools, find_pool
from .oracle import AddressOracle
from .swap import (
    get_double_swap_fee,
    get_double_swap_output,
    get_double_swap_slip,
    get_swap_fee,
    get_swap_output,
    get_swap_slip,
)
from .txparams import RegularTransaction, RoutedTransaction, TxParams

log = logging.getLogger(__name__)

PoolSource = Callable[[], Iterable[MidgardPool]]

# Only the ETH router has been exercised end to end.
ROUTER_CHAINS = ("ETH",)


def swap_limit(output: BaseAmount) -> int:
    """Minimum acceptable output written into the memo: 90% of the estimate, in base units."""
    return output.amount // 10 * 9


def calculate_swap(
    from_asset: Asset,
    to_asset: Asset,
    input_amount: BaseAmount,
    pools: Iterable[MidgardPool],
) -> SwapCalculations:
    """Slip, output and fee for swapping `input_amount` of `from_asset` into `to_asset`.

    A single pool is used when either side is rune; otherwise the swap is routed
    from_asset -> rune -> to_asset. Raises UnknownAsset or InvalidPoolStatus.
    """
    pools = list(pools)
    if from_asset.is_rune() or to_asset.is_rune():
        to_rune = to_asset.is_rune()
        non_rune = from_asset if to_rune else to_asset
        pool = find_pool(pools, non_rune).pool_data()
        return SwapCalculations(
            slip=get_swap_slip(input_amount, pool, to_rune),
            output=get_swap_output(input_amount, pool, to_rune),
            fee=get_swap_fee(input_amount, pool, to_rune),
            asset_depth_first_swap=pool,
        )
    pool1 = find_pool(pools, from_asset).pool_data()
    pool2 = find_pool(pools, to_asset).pool_data()
    return SwapCalculations(
        slip=get_double_swap_slip(input_amount, pool1, pool2),
        output=get_double_swap_output(input_amount, pool1, pool2),
        fee=get_double_swap_fee(input_amount, pool1, pool2),
        asset_depth_first_swap=pool1,
        asset_depth_second_swap=pool2,
    )


class SwapOrchestrator:
    """Builds swap descriptors from verified addresses and live pool depths.

    `pool_source` returns the current pool snapshots; by default they are read
    from the oracle network's Midgard with the oracle's session.
    """

    def __init__(self, oracle: AddressOracle, pool_source: Optional[PoolSource] = None):
        self.oracle = oracle
        self.pool_source = pool_source if pool_source is not None else self._fetch_pools

    def _fetch_pools(self) -> List[MidgardPool]:
        return fetch_pools(self.oracle.session, self.oracle.network.midgard_url, self.oracle.timeout)

    def _inbound_for(self, chain: str) -> Optional[InboundAddress]:
        addresses = self.oracle.refresh()
        if not addresses:
            return None
        for address in addresses:
            if address.chain.upper() == chain:
                return address
        return None

    def perform_swap(
        self,
        from_asset: Asset,
        to_asset: Asset,
        destination_address: str,
        amount: AssetAmount,
    ) -> Optional[Tuple[TxParams, SwapCalculations]]:
        """Descriptor and estimate for swapping `amount` of `from_asset` into `to_asset`.

        Returns None when the swap cannot be prepared right now.
        """
        if from_asset == to_asset:
            log.info(f"Refusing to swap {from_asset} into itself")
            return None
        if from_asset.is_rune():
            # Native rune is spent with a MsgDeposit, not sent to a vault.
            log.info("Swaps from native rune are not sent through an inbound address")
            return None

        inbound = self._inbound_for(from_asset.chain)
        if inbound is None:
            log.warning(f"No verified inbound address for chain {from_asset.chain}")
            return None

        try:
            pools = list(self.pool_source())
        except (requests.RequestException, ValueError) as e:
            log.warning(f"Could not fetch Midgard pools: {e}")
            return None

        try:
            input_base = amount.base_amount.rescale(DEFAULT_DECIMALS)
            calc = calculate_swap(from_asset, to_asset, input_base, pools)
        except (UnknownAsset, InvalidPoolStatus, DivisionDegenerate, AmountDomainError) as e:
            log.warning(f"Swap aborted: {e}")
            return None

        memo = get_swap_memo(to_asset, destination_address, swap_limit(calc.output))
        log.info(f"Swapping {truncate_places(amount.amount, 8)} {from_asset.ticker} to {to_asset.ticker}")
        log.info(f"Slip: {fmt_percent(calc.slip)}")
        log.info(f"Output: {fmt_amount(calc.output)} {to_asset.ticker}")
        log.info(f"Fee: {fmt_amount(calc.fee, 4)} {to_asset.ticker}")

        clock = self.oracle.clock
        if inbound.has_router():
            if from_asset.chain not in ROUTER_CHAINS:
                log.warning(f"Router deposits are only supported on {', '.join(ROUTER_CHAINS)}, not {from_asset.chain}")
                return None
            tx: TxParams = RoutedTransaction(
                inbound.router,
                inbound.address,
                from_asset.contract_address,
                amount,
                memo,
                created_at=clock(),
                clock=clock,
                ttl=self.oracle.ttl,
            )
            log.info(f"{inbound.router}.deposit(vault={inbound.address}, asset={tx.asset_address}, memo={memo})")
        else:
            tx = RegularTransaction(
                inbound.address,
                amount,
                memo,
                created_at=clock(),
                clock=clock,
                ttl=self.oracle.ttl,
            )
            log.info(f"Send to {inbound.address} with memo {memo} (do not cache the address)")
        return tx, calc


__all__ = [
    "SwapOrchestrator",
    "PoolSource",
    "calculate_swap",
    "swap_limit",
]
