from __future__ import annotations

from datetime import datetime, timedelta, timezone
from decimal import Decimal, ROUND_HALF_UP
from typing import Any, Dict, List, Optional

import pytest
import requests

from thorchain_client.core import BaseAmount, PoolData, base_from_decimal


# -----------------------------
# Test helpers (pure functions)
# -----------------------------

def units(x: str, decimals: int = 8) -> BaseAmount:
    """Human decimal string -> BaseAmount (e.g. "1.5" -> 150000000)."""
    return base_from_decimal(Decimal(x), decimals)


class FakeResponse:
    """Minimal stand-in for requests.Response: status code, json() and raise_for_status()."""

    def __init__(self, payload: Any = None, status_code: int = 200, bad_json: bool = False) -> None:
        self.payload = payload
        self.status_code = status_code
        self.bad_json = bad_json

    def raise_for_status(self) -> None:
        if self.status_code >= 400:
            raise requests.HTTPError(f"HTTP {self.status_code}")

    def json(self) -> Any:
        if self.bad_json:
            raise ValueError("Expecting value: line 1 column 1 (char 0)")
        return self.payload


class FakeSession:
    """URL-keyed fake for requests.Session.get.

    Routes map a URL to a FakeResponse, or to an exception instance to raise
    (e.g. requests.Timeout). Unknown URLs raise requests.ConnectionError.
    """

    def __init__(self, routes: Optional[Dict[str, Any]] = None) -> None:
        self.routes: Dict[str, Any] = dict(routes or {})
        self.calls: List[str] = []
        self.timeouts: List[float] = []

    def get(self, url: str, timeout: float = None, params=None) -> FakeResponse:
        self.calls.append(url)
        self.timeouts.append(timeout)
        route = self.routes.get(url)
        if route is None:
            raise requests.ConnectionError(f"no route to {url}")
        if isinstance(route, Exception):
            raise route
        return route


class FakeClock:
    """Settable clock returning aware UTC datetimes."""

    def __init__(self, start: Optional[datetime] = None) -> None:
        self.now = start or datetime(2024, 1, 1, 12, 0, tzinfo=timezone.utc)

    def __call__(self) -> datetime:
        return self.now

    def advance(self, **kwargs) -> None:
        self.now = self.now + timedelta(**kwargs)


# -----------------------------
# Pytest fixtures
# -----------------------------

@pytest.fixture()
def approx_units():
    """Comparator allowing at most one base unit of difference."""
    def _check(actual: BaseAmount, expected: int, tol: int = 1) -> bool:
        diff = abs(actual.amount - expected)
        print(f"    approx_units: actual={actual.amount} expected={expected} diff={diff}")
        return diff <= tol
    return _check


@pytest.fixture()
def round8():
    def _round(x: Decimal) -> Decimal:
        return x.quantize(Decimal("0.00000001"), rounding=ROUND_HALF_UP)
    return _round


@pytest.fixture()
def pool_110_100() -> PoolData:
    # asset=110, rune=100 (reference single-swap pool)
    return PoolData(asset_balance=units("110"), rune_balance=units("100"))


@pytest.fixture()
def pool_10_100() -> PoolData:
    # asset=10, rune=100 (second hop of the reference double swap)
    return PoolData(asset_balance=units("10"), rune_balance=units("100"))


@pytest.fixture()
def fake_clock() -> FakeClock:
    return FakeClock()
