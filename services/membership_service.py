# services/membership_service.py
"""
membership_service.py

Provides helper functions for managing loyalty membership tiers.

Features:
- Compute membership tier based on annual (calendar-year) spending.
- Map each tier to the discount rate applied at purchase time.
- Search for existing members in a roster.

Thresholds (inclusive lower bounds):
    BASE    : spend < 5000
    SILVER  : 5000 ≤ spend < 10000
    GOLD    : 10000 ≤ spend < 20000
    DIAMOND : spend ≥ 20000
"""

from __future__ import annotations

from typing import Iterable, Optional

from models.tier import Tier

TIER_THRESHOLDS = {
    Tier.SILVER: 5000,
    Tier.GOLD: 10000,
    Tier.DIAMOND: 20000,
}

# fraction of the list price actually paid
TIER_DISCOUNTS = {
    Tier.BASE: 1.00,
    Tier.SILVER: 0.95,
    Tier.GOLD: 0.90,
    Tier.DIAMOND: 0.80,
}

TIER_LABELS = {
    Tier.BASE: "Base",
    Tier.SILVER: "Silver",
    Tier.GOLD: "Gold",
    Tier.DIAMOND: "Diamond",
}


def compute_tier(annual_spend: float) -> Tier:
    # Compute membership tier based on spending in the current year.
    if annual_spend >= TIER_THRESHOLDS[Tier.DIAMOND]:
        return Tier.DIAMOND
    elif annual_spend >= TIER_THRESHOLDS[Tier.GOLD]:
        return Tier.GOLD
    elif annual_spend >= TIER_THRESHOLDS[Tier.SILVER]:
        return Tier.SILVER
    else:
        return Tier.BASE


def discount_rate(tier: Tier) -> float:
    return TIER_DISCOUNTS[tier]


def tier_label(tier: Tier) -> str:
    return TIER_LABELS[tier]


def next_tier(tier: Tier) -> Optional[Tier]:
    # None once the top tier is reached.
    if tier == Tier.DIAMOND:
        return None
    return Tier(tier + 1)


def find_member(members: Iterable, member_id: int):
    # Search for a member by id; plain linear scan, rosters are small.
    for m in members:
        if m.id == member_id:
            return m
    return None


def find_member_by_phone(members: Iterable, phone: str):
    for m in members:
        if m.phone == phone:
            return m
    return None
