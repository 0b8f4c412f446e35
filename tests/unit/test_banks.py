"""Unit tests for minimum payment rules"""

import pytest
from finance_calendar.domain.banks import (
    TURKISH_BANKS,
    calculate_minimum_payment,
    find_bank,
    floor_rate_by_limit,
)


@pytest.mark.parametrize(
    "limit, rate",
    [(None, 0.30), (0, 0.30), (10_000, 0.30), (15_000, 0.30), (15_001, 0.35), (20_000, 0.35), (20_001, 0.40)],
)
def test_floor_rate_by_limit(limit, rate):
    assert floor_rate_by_limit(limit) == rate


def test_no_debt_means_no_minimum():
    assert calculate_minimum_payment("Akbank", 10_000, 0) == 0
    assert calculate_minimum_payment("Akbank", 10_000, None) == 0
    assert calculate_minimum_payment("Akbank", 10_000, -50) == 0


def test_floor_rate_applies_over_lower_bank_default():
    """Akbank advertises 25% but the 30% floor wins"""
    assert calculate_minimum_payment("Akbank", 10_000, 5_000) == 1_500


def test_higher_limit_tiers():
    assert calculate_minimum_payment("Akbank", 18_000, 10_000) == 3_500
    assert calculate_minimum_payment("Akbank", 60_000, 10_000) == 4_000


def test_special_rate_never_drops_below_floor():
    """Limit above the special threshold still pays at least the floor"""
    assert calculate_minimum_payment("Ziraat Bankası", 60_000, 1_000) == 400


def test_bank_minimum_amount():
    assert calculate_minimum_payment("Akbank", 10_000, 100) == 50
    assert calculate_minimum_payment("TEB", 10_000, 100) == 75


def test_unknown_bank_uses_default_minimum():
    assert calculate_minimum_payment("Bilinmeyen Banka", 10_000, 100) == 100
    assert calculate_minimum_payment(None, None, 1_000) == 300


def test_rounding_halves_up():
    # 40% tier: 400.4 → 400, 400.5 → 401
    assert calculate_minimum_payment("Akbank", 60_000, 1001) == 400
    assert calculate_minimum_payment("Akbank", 60_000, 1001.25) == 401


def test_bank_table_lookup():
    assert find_bank("Garanti BBVA").minimum_amount == 50
    assert find_bank("nope") is None
    assert find_bank(None) is None
    assert len({bank.name for bank in TURKISH_BANKS}) == len(TURKISH_BANKS)
