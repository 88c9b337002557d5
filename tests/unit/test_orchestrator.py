import logging
import random
from decimal import Decimal

import pytest
import requests

from conftest import FakeResponse, FakeSession
from thorchain_client.assets import BCH, BNB, BTC, ETH, LTC, RUNE_NATIVE, Asset
from thorchain_client.core import AssetAmount, BaseAmount, MidgardPool
from thorchain_client.core.constants import ZERO_ADDRESS
from thorchain_client.midgard import Network
from thorchain_client.oracle import AddressOracle
from thorchain_client.orchestrator import SwapOrchestrator, calculate_swap, swap_limit
from thorchain_client.txparams import RegularTransaction, RoutedTransaction

BOOTSTRAP = Network.MAINNET.bootstrap_url
MIDGARD = "https://midgard.thorchain.info"
HOSTS = ["10.0.0.1", "10.0.0.2", "10.0.0.3"]
USDT = Asset("ETH", "USDT-0xdAC17F958D2ee523a2206206994597C13D831ec7")

INBOUND = [
    {"chain": "BTC", "pub_key": "pk", "address": "bc1vault"},
    {"chain": "BNB", "pub_key": "pk", "address": "bnbvault", "router": "0xnotsupported"},
    {"chain": "ETH", "pub_key": "pk", "address": "0xvault", "router": "0xrouter"},
]

E8 = 100_000_000
POOLS = [
    MidgardPool("BTC.BTC", 110 * E8, 100 * E8, "available"),
    MidgardPool("ETH.ETH", 10 * E8, 100 * E8, "available"),
    MidgardPool(USDT.memo_string, 110 * E8, 100 * E8, "Available"),
    MidgardPool("LTC.LTC", 10 * E8, 100 * E8, "staged"),
]


def node(host: str) -> str:
    return f"http://{host}:8080/v2/thorchain/inbound_addresses"


def make_session(inbound=INBOUND) -> FakeSession:
    routes = {BOOTSTRAP: FakeResponse(HOSTS), MIDGARD + "/v2/thorchain/inbound_addresses": FakeResponse(inbound)}
    for h in HOSTS:
        routes[node(h)] = FakeResponse(inbound)
    return FakeSession(routes)


def make_orchestrator(fake_clock, session=None, pools=POOLS) -> SwapOrchestrator:
    oracle = AddressOracle(Network.MAINNET, session=session or make_session(), clock=fake_clock, rng=random.Random(3))
    return SwapOrchestrator(oracle, pool_source=lambda: pools)


def test_single_swap_regular_transaction(fake_clock):
    orch = make_orchestrator(fake_clock)
    result = orch.perform_swap(BTC, RUNE_NATIVE, "thor1dest", AssetAmount("1"))
    assert result is not None
    tx, calc = result
    print(f"\n[perform_swap] BTC->RUNE memo={tx.memo} output={calc.output.amount}")
    assert isinstance(tx, RegularTransaction) and tx.kind == "regular"
    assert tx.recipient == "bc1vault"
    assert calc.output.amount == 89278468
    assert tx.memo == "SWAP:THOR.RUNE:thor1dest:80350614"
    assert calc.asset_depth_second_swap is None

    fake_clock.advance(minutes=15)
    assert tx.recipient is None


def test_double_swap_between_assets(fake_clock, round8):
    orch = make_orchestrator(fake_clock)
    tx, calc = orch.perform_swap(BTC, ETH, "0xdest", AssetAmount("1"))
    print(f"[perform_swap] BTC->ETH output={calc.output.amount} fee={calc.fee.amount} slip={calc.slip}")
    assert abs(calc.output.amount - 8770544) <= 1
    assert abs(calc.fee.amount - 159464) <= 1
    # compounded, not s1 + s2 (0.01785785)
    assert round8(calc.slip) == Decimal("0.01777814")
    assert calc.asset_depth_second_swap is not None
    assert tx.memo == f"SWAP:ETH.ETH:0xdest:{calc.output.amount // 10 * 9}"


def test_router_transaction_for_erc20(fake_clock):
    orch = make_orchestrator(fake_clock)
    tx, calc = orch.perform_swap(USDT, RUNE_NATIVE, "thor1dest", AssetAmount("1", 6))
    print(f"[perform_swap] routed deposit asset={tx.asset_address}")
    assert isinstance(tx, RoutedTransaction) and tx.kind == "routed"
    assert tx.router_contract_address == "0xrouter"
    assert tx.payable_vault_address == "0xvault"
    assert tx.asset_address == "0xdac17f958d2ee523a2206206994597c13d831ec7"
    # 1 USDT on a 6-decimals grid is rescaled to 8 decimals before pricing
    assert calc.output.amount == 89278468


def test_router_transaction_for_gas_asset_uses_zero_address(fake_clock):
    orch = make_orchestrator(fake_clock)
    tx, _ = orch.perform_swap(ETH, BTC, "bc1dest", AssetAmount("0.1", 18))
    assert tx.asset_address == ZERO_ADDRESS


@pytest.mark.parametrize(
    "from_asset,to_asset,why",
    [
        (BTC, BTC, "same asset"),
        (RUNE_NATIVE, BTC, "native rune is deposited, not sent"),
        (BNB, RUNE_NATIVE, "router on a non-ETH chain"),
        (BTC, LTC, "staged pool"),
        (BTC, Asset("DOGE", "DOGE"), "unknown pool"),
        (LTC, RUNE_NATIVE, "no inbound address for LTC"),
        (BTC, BCH, "second pool has no rune depth"),
        (BTC, Asset("DOGE", "DOGE"), "negative asset depth"),
    ],
)
def test_perform_swap_returns_none(fake_clock, from_asset, to_asset, why):
    pools = POOLS + [
        MidgardPool("BNB.BNB", 110 * E8, 100 * E8, "available"),
        MidgardPool("BCH.BCH", 10 * E8, 0, "available"),
    ]
    if why == "negative asset depth":
        pools.append(MidgardPool("DOGE.DOGE", -5, 100 * E8, "available"))
    orch = make_orchestrator(fake_clock, pools=pools)
    print(f"[perform_swap] {from_asset} -> {to_asset}: {why} -> None")
    assert orch.perform_swap(from_asset, to_asset, "dest", AssetAmount("1")) is None


def test_perform_swap_without_quorum(fake_clock):
    session = make_session()
    session.routes[MIDGARD + "/v2/thorchain/inbound_addresses"] = FakeResponse(
        [dict(INBOUND[0], address="bc1attacker")] + INBOUND[1:]
    )
    orch = make_orchestrator(fake_clock, session=session)
    assert orch.perform_swap(BTC, RUNE_NATIVE, "thor1dest", AssetAmount("1")) is None


def test_pool_fetch_failure(fake_clock):
    def broken():
        raise requests.ConnectionError("midgard down")

    oracle = AddressOracle(Network.MAINNET, session=make_session(), clock=fake_clock, rng=random.Random(3))
    orch = SwapOrchestrator(oracle, pool_source=broken)
    assert orch.perform_swap(BTC, RUNE_NATIVE, "thor1dest", AssetAmount("1")) is None


def test_default_pool_source_reads_midgard(fake_clock):
    session = make_session()
    session.routes[MIDGARD + "/v2/pools"] = FakeResponse([
        {"asset": "BTC.BTC", "assetDepth": str(110 * E8), "runeDepth": str(100 * E8), "status": "available"},
    ])
    oracle = AddressOracle(Network.MAINNET, session=session, clock=fake_clock, rng=random.Random(3))
    tx, calc = SwapOrchestrator(oracle).perform_swap(BTC, RUNE_NATIVE, "thor1dest", AssetAmount("1"))
    assert calc.output.amount == 89278468
    assert MIDGARD + "/v2/pools" in session.calls


def test_calculate_swap_to_asset_from_rune():
    calc = calculate_swap(RUNE_NATIVE, BTC, BaseAmount(E8), POOLS)
    print(f"[calculate_swap] RUNE->BTC output={calc.output.amount}")
    # rune in: X = rune depth (100), Y = asset depth (110); 1e8 * 100 * 110 / 101^2
    assert calc.output.amount == 107832565
    assert swap_limit(BaseAmount(99)) == 81


def test_negative_midgard_depth_is_a_pool_fetch_failure(fake_clock, caplog):
    session = make_session()
    session.routes[MIDGARD + "/v2/pools"] = FakeResponse([
        {"asset": "BTC.BTC", "assetDepth": "-5", "runeDepth": str(100 * E8), "status": "available"},
    ])
    oracle = AddressOracle(Network.MAINNET, session=session, clock=fake_clock, rng=random.Random(3))
    with caplog.at_level(logging.WARNING, logger="thorchain_client.orchestrator"):
        result = SwapOrchestrator(oracle).perform_swap(BTC, RUNE_NATIVE, "thor1dest", AssetAmount("1"))
    print(f"[perform_swap] assetDepth=-5 -> {result}")
    assert result is None
    assert any("Could not fetch Midgard pools" in r.getMessage() for r in caplog.records)
