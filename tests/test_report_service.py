"""
Tests for roster statistics and the year-end tier forecast
"""
from datetime import datetime

import pytest

from models.member import MemberAccount
from models.tier import Tier
from services.report_service import ReportService

from conftest import THIS_YEAR


def test_summary_of_empty_roster(registry):
    summary = ReportService(registry).roster_summary()
    assert summary["members"] == 0
    assert summary["tier_counts"] == {"Base": 0, "Silver": 0, "Gold": 0, "Diamond": 0}
    assert summary["points_outstanding"] == 0
    assert summary["top_spenders"] == []


def test_summary_counts_tiers_and_ranks_spenders(populated_registry, now):
    populated_registry.spend(1, 6000, now=now)
    populated_registry.spend(2, 25000, now=now)
    populated_registry.spend(3, 100, now=now)

    summary = ReportService(populated_registry).roster_summary(top=2)

    assert summary["members"] == 3
    assert summary["tier_counts"] == {"Base": 1, "Silver": 1, "Gold": 0, "Diamond": 1}
    assert summary["lifetime_spend"] == 31100
    assert summary["points_outstanding"] == sum(m.points for m in populated_registry.members)
    assert [s[0] for s in summary["top_spenders"]] == [2, 1]


def test_forecast_projects_monthly_average():
    acc = MemberAccount(1, "A", "1234567", "1990-01-01",
                        annual_spend=3000, last_year=THIS_YEAR)
    f = ReportService(None).forecast_tier(acc, now=datetime(THIS_YEAR, 3, 10))

    assert f.monthly_average == 1000
    assert f.remaining_months == 9
    assert f.projected_spend == 12000
    assert f.current_tier == Tier.BASE
    assert f.projected_tier == Tier.GOLD
    assert f.next_tier == Tier.SILVER
    assert f.amount_to_next_tier == 2000


def test_forecast_ignores_last_years_spend():
    acc = MemberAccount(1, "A", "1234567", "1990-01-01",
                        annual_spend=15000, last_year=THIS_YEAR - 1)
    f = ReportService(None).forecast_tier(acc, now=datetime(THIS_YEAR, 2, 1))

    assert f.annual_spend == 0
    assert f.current_tier == Tier.BASE
    assert f.projected_tier == Tier.BASE
    assert f.amount_to_next_tier == 5000


def test_forecast_at_top_tier():
    acc = MemberAccount(1, "A", "1234567", "1990-01-01",
                        annual_spend=24000, last_year=THIS_YEAR)
    f = ReportService(None).forecast_tier(acc, now=datetime(THIS_YEAR, 12, 31))

    assert f.remaining_months == 0
    assert f.projected_spend == pytest.approx(24000)
    assert f.next_tier is None
    assert f.amount_to_next_tier is None
