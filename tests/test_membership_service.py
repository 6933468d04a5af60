"""
Unit tests for tier derivation and discount mapping
"""
import pytest
from hypothesis import given, strategies as st

from models.member import MemberAccount
from models.tier import Tier
from services.membership_service import (
    compute_tier,
    discount_rate,
    find_member,
    find_member_by_phone,
    next_tier,
    tier_label,
)


@pytest.mark.parametrize("spend, expected", [
    (0, Tier.BASE),
    (4999.99, Tier.BASE),
    (5000, Tier.SILVER),
    (9999.99, Tier.SILVER),
    (10000, Tier.GOLD),
    (19999.99, Tier.GOLD),
    (20000, Tier.DIAMOND),
    (1000000, Tier.DIAMOND),
])
def test_tier_boundaries(spend, expected):
    assert compute_tier(spend) == expected


@given(
    st.floats(min_value=0, max_value=1e7, allow_nan=False),
    st.floats(min_value=0, max_value=1e7, allow_nan=False),
)
def test_tier_is_monotonic_in_spend(a, b):
    low, high = sorted((a, b))
    assert compute_tier(low) <= compute_tier(high)


@pytest.mark.parametrize("tier, rate", [
    (Tier.DIAMOND, 0.80),
    (Tier.GOLD, 0.90),
    (Tier.SILVER, 0.95),
    (Tier.BASE, 1.00),
])
def test_discount_rate(tier, rate):
    assert discount_rate(tier) == rate


def test_higher_tier_never_pays_more():
    rates = [discount_rate(t) for t in Tier]
    assert rates == sorted(rates, reverse=True)


def test_tier_label_and_next_tier():
    assert tier_label(Tier.GOLD) == "Gold"
    assert next_tier(Tier.BASE) == Tier.SILVER
    assert next_tier(Tier.GOLD) == Tier.DIAMOND
    assert next_tier(Tier.DIAMOND) is None


def test_find_helpers_return_first_match_or_none():
    members = [
        MemberAccount(1, "A", "111", "1990-01-01"),
        MemberAccount(2, "B", "222", "1990-01-01"),
        MemberAccount(3, "C", "222", "1990-01-01"),
    ]
    assert find_member(members, 2).name == "B"
    assert find_member(members, 9) is None
    assert find_member_by_phone(members, "222").id == 2
    assert find_member_by_phone(members, "999") is None
