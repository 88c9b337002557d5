"""
Inbound address oracle: quorum-verified vault addresses with a short-lived cache.

Sending funds to a stale or forged vault address loses them, so addresses are
only accepted when several independent indexers report exactly the same set.

One refresh:
  1) GET the bootstrap directory (JSON list of node hosts);
  2) sample up to `sample_size` distinct hosts at random;
  3) query the sampled nodes, the caller's trusted indexers and the network's
     default Midgard concurrently, one `timeout` each; failures are dropped;
  4) remove halted chains from every response;
  5) accept iff at least two responses came back and all of them agree;
  6) on accept, replace the cache wholesale; on reject, leave it alone.

A cached set is served for `ttl` (15 minutes) after it was fetched.
"""
from __future__ import annotations

import logging
import random
import threading
from concurrent.futures import ThreadPoolExecutor
from datetime import datetime, timedelta, timezone
from typing import Callable, Iterable, List, Optional, Sequence

import requests

from .core.constants import ADDRESS_TTL, MIN_QUORUM, NODE_SAMPLE_SIZE, REQUEST_TIMEOUT
from .core.datatypes import CachedAddressSet, InboundAddress
from .core.exc import Disagreement, Unreachable
from .midgard import (
    Network,
    fetch_json,
    inbound_url,
    node_inbound_url,
    parse_bootstrap_nodes,
    parse_inbound_addresses,
)

log = logging.getLogger(__name__)

Clock = Callable[[], datetime]


def _utc_now() -> datetime:
    return datetime.now(timezone.utc)


def responses_agree(
    responses: Sequence[Sequence[InboundAddress]],
    *,
    require_same_order: bool = True,
) -> bool:
    """True iff every response equals the first, entry by entry, on the quorum key.

    With require_same_order=False the entries are compared sorted by chain, so
    two indexers listing the same vaults in a different order still agree.
    """
    if not responses:
        return False

    def keys(resp):
        ks = [a.quorum_key() for a in resp]
        return ks if require_same_order else sorted(ks)

    first = keys(responses[0])
    return all(keys(r) == first for r in responses[1:])


class AddressOracle:
    """Discovers and caches the network's active inbound addresses.

    Parameters
    ----------
    network : Network
        Deployment whose bootstrap directory and default Midgard are used.
    trusted_urls : iterable of str
        Extra indexer base URLs always queried alongside the sampled nodes.
    session : requests.Session, optional
        HTTP session (injectable for tests).
    clock : callable, optional
        Returns the current time as an aware datetime.
    rng : random.Random, optional
        Source of randomness for node sampling.
    """

    def __init__(
        self,
        network: Network = Network.MAINNET,
        trusted_urls: Iterable[str] = (),
        *,
        session: Optional[requests.Session] = None,
        timeout: float = REQUEST_TIMEOUT,
        sample_size: int = NODE_SAMPLE_SIZE,
        ttl: timedelta = ADDRESS_TTL,
        clock: Optional[Clock] = None,
        rng: Optional[random.Random] = None,
        require_same_order: bool = True,
    ):
        if sample_size < 0:
            raise ValueError("sample_size must be >= 0")
        self.network = network
        self.trusted_urls = list(trusted_urls)
        self.session = session if session is not None else requests.Session()
        self.timeout = timeout
        self.sample_size = sample_size
        self.ttl = ttl
        self.clock = clock if clock is not None else _utc_now
        self.rng = rng if rng is not None else random.Random()
        self.require_same_order = require_same_order
        self._lock = threading.Lock()
        self._cache: Optional[CachedAddressSet] = None

    # ----------------------------
    # Cache access
    # ----------------------------

    @property
    def cached(self) -> Optional[CachedAddressSet]:
        """Last accepted address set regardless of age (None before the first accept)."""
        with self._lock:
            return self._cache

    @property
    def latest(self) -> Optional[List[InboundAddress]]:
        """Cached addresses while they are younger than `ttl`, else None."""
        cache = self.cached
        if cache is None or not cache.is_fresh(self.clock(), self.ttl):
            return None
        return list(cache.addresses)

    def address_for_chain(self, chain: str) -> Optional[InboundAddress]:
        addresses = self.latest
        if addresses is None:
            return None
        for address in addresses:
            if address.chain.upper() == chain.upper():
                return address
        return None

    # ----------------------------
    # Refresh
    # ----------------------------

    def _bootstrap_hosts(self) -> List[str]:
        url = self.network.bootstrap_url
        try:
            hosts = parse_bootstrap_nodes(fetch_json(self.session, url, self.timeout))
        except (requests.RequestException, ValueError) as e:
            raise Unreachable(f"bootstrap directory {url} unavailable: {e}") from e
        if not hosts:
            raise Unreachable(f"bootstrap directory {url} returned no nodes")
        return hosts

    def query_urls(self, hosts: Sequence[str]) -> List[str]:
        """Sampled node URLs, then trusted indexers, then the default Midgard."""
        k = min(self.sample_size, len(hosts))
        sampled = self.rng.sample(list(hosts), k)
        urls = [node_inbound_url(h) for h in sampled]
        urls += [inbound_url(u) for u in self.trusted_urls]
        urls.append(inbound_url(self.network.midgard_url))
        return urls

    def _query_one(self, url: str) -> Optional[List[InboundAddress]]:
        try:
            addresses = parse_inbound_addresses(fetch_json(self.session, url, self.timeout))
        except (requests.RequestException, ValueError) as e:
            log.warning(f"Inbound address query failed for {url}: {e}")
            return None
        return [a for a in addresses if not a.halted]

    def _query_all(self, urls: Sequence[str]) -> List[Optional[List[InboundAddress]]]:
        # Join barrier: every query finishes (or times out) before the quorum check.
        with ThreadPoolExecutor(max_workers=max(1, len(urls))) as ex:
            futures = [ex.submit(self._query_one, u) for u in urls]
            return [fut.result() for fut in futures]

    def fetch_verified(self) -> List[InboundAddress]:
        """Run one refresh and return the accepted addresses.

        Raises Unreachable when the bootstrap directory or every indexer fails,
        Disagreement when fewer than two indexers answered or their answers differ.
        """
        hosts = self._bootstrap_hosts()
        urls = self.query_urls(hosts)
        log.info(f"Querying {len(urls)} indexers for inbound addresses")
        results = self._query_all(urls)
        valid = [r for r in results if r is not None]

        if not valid:
            raise Unreachable(f"none of {len(urls)} indexers answered")
        if len(valid) < MIN_QUORUM:
            raise Disagreement(
                f"only {len(valid)} of {len(urls)} indexers answered, need {MIN_QUORUM}",
                responses=len(valid),
            )
        if not responses_agree(valid, require_same_order=self.require_same_order):
            raise Disagreement(
                f"inbound addresses from {len(valid)} indexers do not match",
                responses=len(valid),
            )

        addresses = tuple(valid[0])
        with self._lock:
            self._cache = CachedAddressSet(addresses=addresses, fetched_at=self.clock())
        log.info(f"Accepted {len(addresses)} inbound addresses from {len(valid)} indexers")
        return list(addresses)

    def refresh(self) -> Optional[List[InboundAddress]]:
        """Like fetch_verified(), but logs and returns None instead of raising."""
        try:
            return self.fetch_verified()
        except (Unreachable, Disagreement) as e:
            log.warning(f"Inbound address refresh rejected: {e}")
            return None


__all__ = [
    "AddressOracle",
    "responses_agree",
]
