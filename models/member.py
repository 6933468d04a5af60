from __future__ import annotations

import math
from dataclasses import dataclass
from datetime import datetime

from models.tier import Tier
from services.membership_service import compute_tier, discount_rate

# Member model: identity, balances, tier state and the purchase log.

RECORD_FIELDS = 10


class LedgerError(ValueError):
    # Base class for recoverable domain failures.
    pass


class InvalidAmountError(LedgerError):
    pass


class InsufficientPointsError(LedgerError):
    pass


def require_whole_number(value, what: str) -> int:
    # points and rates are stored as integers; bool is an int subclass but not a count
    if isinstance(value, bool) or not isinstance(value, int):
        raise InvalidAmountError(f"{what} must be a whole number.")
    if value <= 0:
        raise InvalidAmountError(f"{what} must be greater than 0.")
    return value


@dataclass(frozen=True)
class ConsumptionRecord:
    list_price: float
    rate: float

    @property
    def paid(self) -> float:
        return self.list_price * self.rate


@dataclass(frozen=True)
class PurchaseReceipt:
    list_price: float
    rate: float
    paid: float
    earned_points: int
    tier: Tier


class MemberAccount:
    """
    One loyalty member.

    Tier is always derived from annual_spend (see compute_tier). Annual figures
    reset the first time a purchase lands in a new calendar year, so a member
    can drop a tier after a slow year.
    """

    def __init__(
        self,
        member_id: int,
        name: str,
        phone: str,
        birthday: str,
        points_rate: int = 1,
        annual_spend: float = 0.0,
        tier: Tier = Tier.BASE,
        last_year: int = 0,
    ):
        self.id = member_id
        self.name = name
        self.phone = phone
        self.birthday = birthday
        self.lifetime_spend = annual_spend
        self.points = 0
        self.points_rate = points_rate
        self.annual_spend = annual_spend
        self.last_year = last_year
        self.history: list[ConsumptionRecord] = []
        # tier argument is only a restore hint, the derivation always wins
        self.tier = compute_tier(self.annual_spend)

    def __repr__(self):
        return (
            f"MemberAccount(id={self.id}, name={self.name!r}, tier={self.tier.name}, "
            f"points={self.points})"
        )

    @property
    def discount_rate(self) -> float:
        return discount_rate(self.tier)

    def record_purchase(self, amount: float, now: datetime | None = None) -> PurchaseReceipt:
        # amount is the list price; points accrue on what was actually paid
        if isinstance(amount, bool) or not isinstance(amount, (int, float)):
            raise InvalidAmountError("Purchase amount must be a number.")
        if not math.isfinite(amount) or amount <= 0:
            raise InvalidAmountError("Purchase amount must be a positive number.")

        # "now" can be injected for tests, otherwise use the real clock
        if now is None:
            now = datetime.now()
        current_year = now.year

        if self.last_year != current_year:
            self.annual_spend = 0.0
            self.last_year = current_year

        self.annual_spend += amount
        self.tier = compute_tier(self.annual_spend)

        rate = discount_rate(self.tier)
        paid = amount * rate
        earned = int(paid * self.points_rate)

        self.lifetime_spend += amount
        self.points += earned
        self.history.append(ConsumptionRecord(amount, rate))

        return PurchaseReceipt(
            list_price=amount,
            rate=rate,
            paid=paid,
            earned_points=earned,
            tier=self.tier,
        )

    def redeem(self, points: int) -> int:
        require_whole_number(points, "Points to redeem")
        if points > self.points:
            raise InsufficientPointsError(
                f"Insufficient points: requested {points}, available {self.points}."
            )
        self.points -= points
        return self.points

    def set_points_rate(self, rate: int) -> None:
        self.points_rate = require_whole_number(rate, "Points rate")

    def update_phone(self, phone: str) -> None:
        self.phone = phone

    def recent_history(self, n: int | None = None) -> list[ConsumptionRecord]:
        # None -> whole log, oldest first
        if n is None:
            return list(self.history)
        if n <= 0:
            return []
        return self.history[-n:]

    def to_record(self) -> list[str]:
        return [
            str(self.id),
            self.name,
            self.phone,
            self.birthday,
            repr(float(self.lifetime_spend)),
            str(self.points),
            str(self.points_rate),
            repr(float(self.annual_spend)),
            str(int(self.tier)),
            str(self.last_year),
        ]

    @classmethod
    def from_record(cls, fields: list[str]) -> MemberAccount:
        # Raises ValueError on a malformed record.
        if len(fields) != RECORD_FIELDS:
            raise ValueError(f"Expected {RECORD_FIELDS} fields, got {len(fields)}")

        member_id = int(fields[0])
        lifetime_spend = float(fields[4])
        points = int(fields[5])
        points_rate = int(fields[6])
        annual_spend = float(fields[7])
        tier_index = int(fields[8])
        last_year = int(fields[9])
        if not (math.isfinite(lifetime_spend) and math.isfinite(annual_spend)):
            raise ValueError("Spend figures must be finite")

        # clamp to the legal domain
        lifetime_spend = max(lifetime_spend, 0.0)
        points = max(points, 0)
        points_rate = max(points_rate, 1)
        annual_spend = max(annual_spend, 0.0)
        if tier_index < Tier.BASE or tier_index > Tier.DIAMOND:
            tier_index = Tier.BASE
        last_year = max(last_year, 0)

        account = cls(
            member_id,
            fields[1],
            fields[2],
            fields[3],
            points_rate=points_rate,
            annual_spend=annual_spend,
            tier=Tier(tier_index),
            last_year=last_year,
        )
        account.lifetime_spend = lifetime_spend
        account.points = points
        return account
