import pytest
import requests

from conftest import FakeResponse, FakeSession
from thorchain_client.assets import BNB, BTC, ETH
from thorchain_client.core import BaseAmount, InboundAddress
from thorchain_client.core.exc import InvalidPoolStatus, UnknownAsset
from thorchain_client.midgard import (
    Network,
    fetch_json,
    fetch_pools,
    find_pool,
    inbound_url,
    node_inbound_url,
    parse_bootstrap_nodes,
    parse_inbound_addresses,
    parse_pools,
    pools_url,
)

POOLS_PAYLOAD = [
    {"asset": "BNB.BNB", "assetDepth": "11000000000", "runeDepth": "10000000000", "status": "available", "units": "10500000000"},
    {"asset": "BTC.BTC", "assetDepth": "1000000000", "runeDepth": "10000000000", "status": "staged"},
]


def test_network_urls():
    print("[network] mainnet/testnet endpoints")
    assert Network.MAINNET.bootstrap_url == "https://seed.thorchain.info"
    assert Network.MAINNET.midgard_url == "https://midgard.thorchain.info"
    assert Network.TESTNET.bootstrap_url == "https://testnet.seed.thorchain.info"
    assert Network.TESTNET.midgard_url == "https://testnet.midgard.thorchain.info"


def test_url_builders():
    assert node_inbound_url("1.2.3.4") == "http://1.2.3.4:8080/v2/thorchain/inbound_addresses"
    assert inbound_url("https://midgard.example/") == "https://midgard.example/v2/thorchain/inbound_addresses"
    assert pools_url("https://midgard.example") == "https://midgard.example/v2/pools"


def test_parse_bootstrap_nodes_dedupes():
    assert parse_bootstrap_nodes(["1.1.1.1", "2.2.2.2", "1.1.1.1"]) == ["1.1.1.1", "2.2.2.2"]
    assert parse_bootstrap_nodes([]) == []
    with pytest.raises(ValueError):
        parse_bootstrap_nodes({"nodes": []})
    with pytest.raises(ValueError):
        parse_bootstrap_nodes([1234])


def test_parse_inbound_addresses_optional_fields():
    payload = [
        {"chain": "BTC", "pub_key": "pk1", "address": "bc1vault"},
        {"chain": "ETH", "pub_key": "pk2", "address": "0xvault", "router": "0xrouter", "halted": False},
        {"chain": "BNB", "pub_key": "pk3", "address": "bnbvault", "halted": True},
    ]
    parsed = parse_inbound_addresses(payload)
    print(f"[inbound] parsed {len(parsed)} entries")
    assert parsed[0] == InboundAddress("BTC", "pk1", "bc1vault")
    assert parsed[1].has_router() and parsed[1].router == "0xrouter"
    assert parsed[2].halted
    with pytest.raises(ValueError):
        parse_inbound_addresses([{"chain": "BTC"}])
    with pytest.raises(ValueError):
        parse_inbound_addresses([{"chain": "BTC", "pub_key": "p", "address": "a", "halted": "yes"}])
    print("[inbound] null or empty string fields are rejected")
    with pytest.raises(ValueError):
        parse_inbound_addresses([{"chain": "BTC", "pub_key": "p", "address": None}])
    with pytest.raises(ValueError):
        parse_inbound_addresses([{"chain": None, "pub_key": "p", "address": "a"}])
    with pytest.raises(ValueError):
        parse_inbound_addresses([{"chain": "BTC", "pub_key": 7, "address": "a"}])
    with pytest.raises(ValueError):
        parse_inbound_addresses([{"chain": "", "pub_key": "p", "address": "a"}])


def test_parse_pools_and_find():
    pools = parse_pools(POOLS_PAYLOAD)
    bnb = find_pool(pools, BNB)
    print(f"[pools] {bnb}")
    assert bnb.units == 10500000000
    assert bnb.pool_data().asset_balance == BaseAmount(11000000000)
    assert bnb.pool_data().rune_balance == BaseAmount(10000000000)
    with pytest.raises(InvalidPoolStatus):
        find_pool(pools, BTC)
    with pytest.raises(UnknownAsset):
        find_pool(pools, ETH)
    with pytest.raises(ValueError):
        parse_pools([{"asset": "BNB.BNB", "assetDepth": 1.5, "runeDepth": "1", "status": "available"}])
    print("[pools] negative depth rejected")
    with pytest.raises(ValueError):
        parse_pools([{"asset": "BTC.BTC", "assetDepth": "-5", "runeDepth": "10000000000", "status": "available"}])
    with pytest.raises(ValueError):
        parse_pools([{"asset": "BTC.BTC", "assetDepth": "5", "runeDepth": -1, "status": "available"}])


def test_fetch_json_and_pools():
    url = "https://midgard.example/v2/pools"
    session = FakeSession({url: FakeResponse(POOLS_PAYLOAD)})
    pools = fetch_pools(session, "https://midgard.example", timeout=3.0)
    assert [p.asset for p in pools] == ["BNB.BNB", "BTC.BTC"]
    assert session.timeouts == [3.0]

    session.routes[url] = FakeResponse(status_code=503)
    with pytest.raises(requests.HTTPError):
        fetch_json(session, url)
    session.routes[url] = FakeResponse(bad_json=True)
    with pytest.raises(ValueError):
        fetch_json(session, url)
