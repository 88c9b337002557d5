"""
Midgard / bootstrap I/O: network endpoints, HTTP fetch and payload parsing.

Everything here is a thin layer over `requests`. Parsers turn the indexer's
JSON into the immutable datatypes from `core.datatypes` and raise ValueError on
payloads of the wrong shape, so a caller can treat "transport failed" and
"garbage came back" the same way.
"""
from __future__ import annotations

import logging
from enum import Enum
from typing import Any, Iterable, List, Optional

import requests

from .assets import Asset
from .core.constants import (
    INBOUND_ADDRESSES_PATH,
    MIDGARD_PORT,
    POOL_STATUS_AVAILABLE,
    POOLS_PATH,
    REQUEST_TIMEOUT,
)
from .core.datatypes import InboundAddress, MidgardPool
from .core.exc import InvalidPoolStatus, UnknownAsset

log = logging.getLogger(__name__)


class Network(Enum):
    """Which THORChain deployment to talk to: (bootstrap directory, default Midgard)."""

    MAINNET = ("https://seed.thorchain.info", "https://midgard.thorchain.info")
    TESTNET = ("https://testnet.seed.thorchain.info", "https://testnet.midgard.thorchain.info")

    @property
    def bootstrap_url(self) -> str:
        return self.value[0]

    @property
    def midgard_url(self) -> str:
        return self.value[1]


# ----------------------------
# URL builders
# ----------------------------

def node_inbound_url(host: str) -> str:
    """Inbound-addresses URL on a bootstrap-listed node (plain HTTP, Midgard port)."""
    return f"http://{host}:{MIDGARD_PORT}{INBOUND_ADDRESSES_PATH}"


def join_path(base_url: str, path: str) -> str:
    return base_url.rstrip("/") + "/" + path.lstrip("/")


def inbound_url(base_url: str) -> str:
    return join_path(base_url, INBOUND_ADDRESSES_PATH)


def pools_url(base_url: str) -> str:
    return join_path(base_url, POOLS_PATH)


# ----------------------------
# HTTP
# ----------------------------

def fetch_json(session: requests.Session, url: str, timeout: float = REQUEST_TIMEOUT, params=None) -> Any:
    """GET `url` and decode JSON. Raises requests.RequestException or ValueError."""
    log.debug(f"GET {url}")
    response = session.get(url, timeout=timeout, params=params)
    response.raise_for_status()
    return response.json()


# ----------------------------
# Parsers
# ----------------------------

def parse_bootstrap_nodes(payload: Any) -> List[str]:
    """Bootstrap directory payload: a JSON list of host strings. Duplicates removed, order kept."""
    if not isinstance(payload, list):
        raise ValueError("bootstrap payload must be a JSON list")
    hosts: List[str] = []
    for item in payload:
        if not isinstance(item, str) or not item.strip():
            raise ValueError(f"bootstrap entry is not a host string: {item!r}")
        host = item.strip()
        if host not in hosts:
            hosts.append(host)
    return hosts


def _parse_halted(value: Any) -> bool:
    if value is None:
        return False
    if isinstance(value, bool):
        return value
    raise ValueError(f"halted must be a boolean, got {value!r}")


def _parse_str(entry: dict, key: str) -> str:
    value = entry[key]
    if not isinstance(value, str) or not value.strip():
        raise ValueError(f"{key} must be a non-empty string, got {value!r}")
    return value


def parse_inbound_addresses(payload: Any) -> List[InboundAddress]:
    """Parse `/v2/thorchain/inbound_addresses`. `router` and `halted` are optional."""
    if not isinstance(payload, list):
        raise ValueError("inbound addresses payload must be a JSON list")
    out: List[InboundAddress] = []
    for entry in payload:
        try:
            out.append(InboundAddress(
                chain=_parse_str(entry, "chain"),
                pub_key=_parse_str(entry, "pub_key"),
                address=_parse_str(entry, "address"),
                router=str(entry.get("router") or ""),
                halted=_parse_halted(entry.get("halted")),
            ))
        except (KeyError, TypeError, AttributeError) as e:
            raise ValueError(f"malformed inbound address entry {entry!r}: {e}") from e
    return out


def _parse_depth(entry: dict, key: str) -> int:
    # Midgard encodes integers as strings.
    value = entry[key]
    if isinstance(value, bool) or not isinstance(value, (str, int)):
        raise ValueError(f"{key} must be an integer string, got {value!r}")
    depth = int(value)
    if depth < 0:
        raise ValueError(f"{key} must be >= 0, got {value!r}")
    return depth


def parse_pools(payload: Any) -> List[MidgardPool]:
    """Parse `/v2/pools` into MidgardPool snapshots."""
    if not isinstance(payload, list):
        raise ValueError("pools payload must be a JSON list")
    out: List[MidgardPool] = []
    for entry in payload:
        try:
            units = entry.get("units")
            out.append(MidgardPool(
                asset=str(entry["asset"]),
                asset_depth=_parse_depth(entry, "assetDepth"),
                rune_depth=_parse_depth(entry, "runeDepth"),
                status=str(entry["status"]),
                units=int(units) if units is not None else None,
            ))
        except (KeyError, TypeError, AttributeError) as e:
            raise ValueError(f"malformed pool entry {entry!r}: {e}") from e
    return out


def fetch_pools(
    session: requests.Session,
    midgard_url: str,
    timeout: float = REQUEST_TIMEOUT,
    status: Optional[str] = None,
) -> List[MidgardPool]:
    """Fetch and parse all pools, optionally filtered server-side by `status`."""
    params = {"status": status} if status else None
    return parse_pools(fetch_json(session, pools_url(midgard_url), timeout, params=params))


def find_pool(pools: Iterable[MidgardPool], asset: Asset) -> MidgardPool:
    """Pool for `asset`; raises UnknownAsset if absent, InvalidPoolStatus if not available."""
    for pool in pools:
        if pool.asset.upper() == asset.memo_string:
            if pool.status.lower() != POOL_STATUS_AVAILABLE:
                raise InvalidPoolStatus(pool.asset, pool.status)
            return pool
    raise UnknownAsset(asset.memo_string)


__all__ = [
    "Network",
    "node_inbound_url",
    "join_path",
    "inbound_url",
    "pools_url",
    "fetch_json",
    "parse_bootstrap_nodes",
    "parse_inbound_addresses",
    "parse_pools",
    "fetch_pools",
    "find_pool",
]
