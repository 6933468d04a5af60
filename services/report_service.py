# services/report_service.py
from __future__ import annotations

from collections import Counter
from dataclasses import dataclass
from datetime import datetime

from models.tier import Tier
from services.membership_service import (
    TIER_THRESHOLDS,
    compute_tier,
    next_tier,
    tier_label,
)


@dataclass(frozen=True)
class TierForecast:
    annual_spend: float
    monthly_average: float
    remaining_months: int
    projected_spend: float
    current_tier: Tier
    projected_tier: Tier
    next_tier: Tier | None
    amount_to_next_tier: float | None


# report_service.py is a service module (Service Layer)
# with the class name ReportService, responsible for roster statistics and tier forecasts.
class ReportService:
    def __init__(self, registry):
        self.registry = registry

    def roster_summary(self, top: int = 5) -> dict:
        # Totals across the whole roster.
        # Counter tracks how many members sit in each tier;
        # top spenders are ranked by lifetime spend.
        members = self.registry.members
        tier_counts = Counter({tier_label(t): 0 for t in Tier})
        for m in members:
            tier_counts[tier_label(m.tier)] += 1

        ranked = sorted(members, key=lambda m: m.lifetime_spend, reverse=True)
        top_spenders = [(m.id, m.name, round(m.lifetime_spend, 2)) for m in ranked[:top]]

        return {
            "members": len(members),
            "tier_counts": dict(tier_counts),
            "lifetime_spend": round(sum(m.lifetime_spend for m in members), 2),
            "annual_spend": round(sum(m.annual_spend for m in members), 2),
            "points_outstanding": sum(m.points for m in members),
            "top_spenders": top_spenders,
        }

    def forecast_tier(self, member, now: datetime | None = None) -> TierForecast:
        # Project year-end spend from the monthly average so far this year.
        if now is None:
            now = datetime.now()
        month = now.month

        # nothing bought yet this year -> the stored annual figure is stale
        annual = member.annual_spend if member.last_year == now.year else 0.0
        current = compute_tier(annual)

        monthly_average = annual / month
        remaining = 12 - month
        projected = annual + monthly_average * remaining

        upcoming = next_tier(current)
        gap = None
        if upcoming is not None:
            gap = round(TIER_THRESHOLDS[upcoming] - annual, 2)

        return TierForecast(
            annual_spend=annual,
            monthly_average=monthly_average,
            remaining_months=remaining,
            projected_spend=projected,
            current_tier=current,
            projected_tier=compute_tier(projected),
            next_tier=upcoming,
            amount_to_next_tier=gap,
        )
