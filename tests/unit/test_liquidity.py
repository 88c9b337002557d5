import pytest
from decimal import Decimal

from thorchain_client.core import BaseAmount, PoolData, StakeData, UnitData
from thorchain_client.core.exc import AmountDomainError, DivisionDegenerate
from thorchain_client.liquidity import get_pool_share, get_slip_on_stake, get_stake_units

E8 = 100_000_000


def _stake(asset: int, rune: int) -> StakeData:
    return StakeData(asset=BaseAmount(asset * E8), rune=BaseAmount(rune * E8))


def _pool(asset: int, rune: int) -> PoolData:
    return PoolData(asset_balance=BaseAmount(asset * E8), rune_balance=BaseAmount(rune * E8))


def test_stake_units_symmetric_deposit():
    print("\n===== STAKE_UNITS (11 asset, 10 rune) into (110, 100) =====")
    u = get_stake_units(_stake(11, 10), _pool(110, 100))
    print(f"    units={u.amount}")
    assert u == BaseAmount(1_050_000_000)


def test_stake_units_asymmetric_deposit():
    print("[stake_units] (0 asset, 10 rune) into (110, 100) -> 5 units on basis 110")
    u = get_stake_units(_stake(0, 10), _pool(110, 100))
    assert u == BaseAmount(500_000_000)
    explicit = get_stake_units(_stake(0, 10), _pool(110, 100), total_units=BaseAmount(110 * E8))
    assert explicit == u


def test_stake_units_scale_with_total_units():
    base = get_stake_units(_stake(11, 10), _pool(110, 100), total_units=BaseAmount(100 * E8))
    doubled = get_stake_units(_stake(11, 10), _pool(110, 100), total_units=BaseAmount(200 * E8))
    print(f"[stake_units] basis 100 -> {base.amount}, basis 200 -> {doubled.amount}")
    assert doubled.amount == 2 * base.amount


def test_stake_units_rejects_bad_inputs():
    with pytest.raises(AmountDomainError):
        get_stake_units(StakeData(asset=BaseAmount(-1), rune=BaseAmount(0)), _pool(110, 100))
    with pytest.raises(DivisionDegenerate):
        get_stake_units(_stake(0, 0), _pool(0, 0))


def test_pool_share_reference():
    print("\n===== POOL_SHARE 10.5 of 115.5 units over (121, 110) =====")
    share = get_pool_share(
        UnitData(stake_units=BaseAmount(1_050_000_000), total_units=BaseAmount(11_550_000_000)),
        _pool(121, 110),
    )
    print(f"    asset={share.asset.amount} rune={share.rune.amount}")
    assert share == _stake(11, 10)


def test_pool_share_asymmetric_and_degenerate():
    share = get_pool_share(
        UnitData(stake_units=BaseAmount(5 * E8), total_units=BaseAmount(110 * E8)),
        _pool(110, 110),
    )
    assert share == _stake(5, 5)
    with pytest.raises(DivisionDegenerate):
        get_pool_share(UnitData(stake_units=BaseAmount(0), total_units=BaseAmount(0)), _pool(1, 1))


def test_slip_on_stake(round8):
    print("\n===== SLIP_ON_STAKE =====")
    s_rune = get_slip_on_stake(_stake(0, 10), _pool(110, 100))
    s_asset = get_slip_on_stake(_stake(20, 0), _pool(110, 100))
    print(f"    rune-only={s_rune} asset-only={s_asset}")
    assert round8(s_rune) == Decimal("0.09090909")
    assert round8(s_asset) == Decimal("0.18181818")


def test_symmetric_deposit_has_no_slip():
    assert get_slip_on_stake(_stake(11, 10), _pool(110, 100)) == 0
