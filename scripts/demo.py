"""Demo: THORChain swap and liquidity maths on the reference pools (offline).

Scenarios covered:
S1) Single swap BNB -> RUNE on pool (A=110, R=100)
S2) Inverse single swap and spot values
S3) Double swap asset1 -> RUNE -> asset2 (pools (110,100) and (10,100))
S4) Liquidity: units, redemption share, slip on stake
S5) Memos

With --live, additionally asks the network for quorum-verified inbound addresses.
"""
from __future__ import annotations

import argparse
import logging
import sys
from decimal import Decimal
from typing import Callable, List, Optional

from thorchain_client import (
    AddressOracle,
    BaseAmount,
    BNB,
    BTC,
    Network,
    PoolData,
    RUNE_NATIVE,
    StakeData,
    UnitData,
    get_deposit_memo,
    get_double_swap_fee,
    get_double_swap_input,
    get_double_swap_output,
    get_double_swap_output_with_fee,
    get_double_swap_slip,
    get_pool_share,
    get_slip_on_stake,
    get_stake_units,
    get_swap_fee,
    get_swap_input,
    get_swap_memo,
    get_swap_output,
    get_swap_output_with_fee,
    get_swap_slip,
    get_value_of_asset1_in_asset2,
    get_value_of_asset_in_rune,
    get_value_of_rune_in_asset,
    get_withdraw_memo,
)
from thorchain_client.core import base_from_decimal, fmt_amount, fmt_percent

# ---------- fixtures ----------

def units(x: str) -> BaseAmount:
    return base_from_decimal(Decimal(x))


POOL1 = PoolData(asset_balance=units("110"), rune_balance=units("100"))
POOL2 = PoolData(asset_balance=units("10"), rune_balance=units("100"))
ONE = units("1")


# ---------- scenarios ----------

def s1_single_swap() -> None:
    print("\n=== S1) Single swap 1 BNB -> RUNE ===")
    print(f"- pool: A={fmt_amount(POOL1.asset_balance)} R={fmt_amount(POOL1.rune_balance)}")
    print(f"- output : {fmt_amount(get_swap_output(ONE, POOL1, True))} RUNE")
    print(f"- fee    : {fmt_amount(get_swap_fee(ONE, POOL1, True))} RUNE")
    print(f"- slip   : {fmt_percent(get_swap_slip(ONE, POOL1, True))}")
    print(f"- output after outbound fee (RUNE -> BNB): {fmt_amount(get_swap_output_with_fee(ONE, POOL1, False))} BNB")


def s2_inverse_and_spot() -> None:
    print("\n=== S2) Inverse swap and spot values ===")
    want = units("0.89278468")
    print(f"- input for {fmt_amount(want)} RUNE: {fmt_amount(get_swap_input(True, POOL1, want))} BNB")
    print(f"- 1 BNB in RUNE (spot): {fmt_amount(get_value_of_asset_in_rune(ONE, POOL1))}")
    print(f"- 1 RUNE in BNB (spot): {fmt_amount(get_value_of_rune_in_asset(ONE, POOL1))}")
    print(f"- 1 asset1 in asset2 (spot): {fmt_amount(get_value_of_asset1_in_asset2(ONE, POOL1, POOL2))}")


def s3_double_swap() -> None:
    print("\n=== S3) Double swap 1 asset1 -> RUNE -> asset2 ===")
    x = ONE
    out = get_double_swap_output(x, POOL1, POOL2)
    print(f"- output : {fmt_amount(out)}")
    print(f"- fee    : {fmt_amount(get_double_swap_fee(x, POOL1, POOL2))}")
    print(f"- slip (compound): {fmt_percent(get_double_swap_slip(x, POOL1, POOL2))}")
    print(f"- slip (sum)     : {fmt_percent(get_double_swap_slip(x, POOL1, POOL2, compound=False))}")
    print(f"- input for that output: {fmt_amount(get_double_swap_input(POOL1, POOL2, out))}")
    print(f"- output after outbound fee: {fmt_amount(get_double_swap_output_with_fee(x, POOL1, POOL2))}")


def s4_liquidity() -> None:
    print("\n=== S4) Liquidity ===")
    pool = PoolData(asset_balance=units("110"), rune_balance=units("100"))
    sym = StakeData(asset=units("11"), rune=units("10"))
    asym = StakeData(asset=units("0"), rune=units("10"))
    print(f"- units (11 A + 10 R): {fmt_amount(get_stake_units(sym, pool))}")
    print(f"- units (0 A + 10 R) : {fmt_amount(get_stake_units(asym, pool))}")
    share = get_pool_share(UnitData(stake_units=units("10.5"), total_units=units("115.5")),
                           PoolData(asset_balance=units("121"), rune_balance=units("110")))
    print(f"- share of 10.5/115.5 units: A={fmt_amount(share.asset)} R={fmt_amount(share.rune)}")
    print(f"- slip on stake (0 A + 10 R): {fmt_percent(get_slip_on_stake(asym, pool))}")


def s5_memos() -> None:
    print("\n=== S5) Memos ===")
    print("- " + get_swap_memo(BNB, "bnb123", 1234))
    print("- " + get_deposit_memo(BTC, "bnb123"))
    print("- " + get_withdraw_memo(BTC, 100, RUNE_NATIVE))


def live_addresses(network: Network) -> None:
    print(f"\n=== LIVE) Inbound addresses on {network.name} ===")
    addresses = AddressOracle(network).refresh()
    if addresses is None:
        print("- no quorum (see log)")
        return
    for a in addresses:
        router = f" router={a.router}" if a.router else ""
        print(f"- {a.chain}: {a.address}{router}")


# -------- scenario registry helpers --------
class Scenario:
    def __init__(self, sid: str, fn: Callable[[], None]):
        self.sid = sid
        self.fn = fn


SCENARIOS: List[Scenario] = [
    Scenario("S1", s1_single_swap),
    Scenario("S2", s2_inverse_and_spot),
    Scenario("S3", s3_double_swap),
    Scenario("S4", s4_liquidity),
    Scenario("S5", s5_memos),
]


def _ids(raw: Optional[str]) -> set:
    return {s.strip() for s in raw.split(",") if s.strip()} if raw else set()


def main(argv: Optional[List[str]] = None) -> int:
    parser = argparse.ArgumentParser(description="THORChain swap/liquidity maths demo")
    parser.add_argument("--only", type=str, default=None, help="Comma-separated scenario ids to run (e.g., S1,S3)")
    parser.add_argument("--skip", type=str, default=None, help="Comma-separated scenario ids to skip")
    parser.add_argument("--live", choices=[n.name.lower() for n in Network], default=None,
                        help="Also fetch quorum-verified inbound addresses from this network")
    parser.add_argument("-v", "--verbose", action="store_true", help="Debug logging")
    args = parser.parse_args(sys.argv[1:] if argv is None else argv)

    logging.basicConfig(level=logging.DEBUG if args.verbose else logging.INFO,
                        format="%(asctime)s [%(levelname)s] %(name)s: %(message)s")

    only, skip = _ids(args.only), _ids(args.skip)
    for sc in SCENARIOS:
        if only and sc.sid not in only:
            continue
        if sc.sid in skip:
            continue
        sc.fn()

    if args.live:
        live_addresses(Network[args.live.upper()])
    return 0


if __name__ == "__main__":
    sys.exit(main())
