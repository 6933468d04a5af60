# services/registry_service.py

from __future__ import annotations

from dataclasses import dataclass
from datetime import datetime
from enum import Enum
from typing import Any

from config import get_settings
from data.repository import MemberRepository
from models.member import (
    LedgerError,
    MemberAccount,
    RECORD_FIELDS,
    require_whole_number,
)
from services.membership_service import (
    find_member,
    find_member_by_phone,
    tier_label,
)
from utils.logger import get_logger

logger = get_logger("registry")


class ErrorKind(Enum):
    NOT_FOUND = "not_found"
    INVALID_VALUE = "invalid_value"
    RESOURCE_UNAVAILABLE = "resource_unavailable"


@dataclass
class OperationResult:
    ok: bool
    message: str
    member: MemberAccount | None = None
    data: Any = None
    error: ErrorKind | None = None

    def __bool__(self):
        return self.ok


def _success(message: str, member=None, data=None) -> OperationResult:
    logger.info(message)
    return OperationResult(True, message, member=member, data=data)


def _failure(kind: ErrorKind, message: str) -> OperationResult:
    logger.warning(message)
    return OperationResult(False, message, error=kind)


class MemberRegistry:
    """
    In-memory roster of loyalty members.

    The registry is the only way callers reach a MemberAccount: it hands out
    ids (never reused, even after a delete), routes spend/redeem to the right
    account and owns the data file format. Failures come back as
    OperationResult objects instead of exceptions.

    Not thread safe; one session owns a registry.
    """

    def __init__(self, repo: MemberRepository | None = None, default_points_rate: int | None = None):
        settings = get_settings()
        self.repo = repo if repo is not None else MemberRepository(settings.storage_dir)
        self.data_file = settings.data_file
        if default_points_rate is None:
            default_points_rate = settings.default_points_rate
        self.default_points_rate = default_points_rate
        self.next_id = 1
        self._members: list[MemberAccount] = []

    def __len__(self):
        return len(self._members)

    @property
    def members(self) -> list[MemberAccount]:
        # copy, so callers cannot reorder the roster
        return list(self._members)

    def get(self, member_id: int) -> MemberAccount | None:
        return find_member(self._members, member_id)

    def _not_found(self, member_id) -> OperationResult:
        return _failure(ErrorKind.NOT_FOUND, f"Member with ID {member_id} not found.")

    # Roster maintenance

    def add(self, name: str, phone: str, birthday: str) -> OperationResult:
        member = MemberAccount(
            self.next_id, name, phone, birthday,
            points_rate=self.default_points_rate,
        )
        self.next_id += 1
        self._members.append(member)
        return _success(f"Member {name} added. ID: {member.id}", member=member)

    def delete(self, member_id: int) -> OperationResult:
        member = self.get(member_id)
        if member is None:
            return self._not_found(member_id)
        self._members.remove(member)
        return _success(f"Member {member.name} (ID: {member_id}) deleted.", member=member)

    def find_by_phone(self, phone: str) -> OperationResult:
        member = find_member_by_phone(self._members, phone)
        if member is None:
            return _failure(ErrorKind.NOT_FOUND, f"No member found with phone {phone}.")
        return OperationResult(True, f"Found member {member.name} (ID: {member.id}).", member=member)

    def lookup(self, key: str) -> OperationResult:
        # Accepts a phone number or a member id; phone wins when both match.
        key = key.strip()
        member = find_member_by_phone(self._members, key)
        if member is None and key.isdigit():
            member = self.get(int(key))
        if member is None:
            return _failure(ErrorKind.NOT_FOUND, f"No member found for '{key}'.")
        return OperationResult(True, f"Found member {member.name} (ID: {member.id}).", member=member)

    def update_phone(self, member_id: int, new_phone: str) -> OperationResult:
        # Only the phone changes; points, tier and history are kept.
        member = self.get(member_id)
        if member is None:
            return self._not_found(member_id)
        member.update_phone(new_phone)
        return _success(f"Member {member_id} phone updated to {new_phone}.", member=member)

    # Points and spending

    def spend(self, member_id: int, amount: float, now: datetime | None = None) -> OperationResult:
        member = self.get(member_id)
        if member is None:
            return self._not_found(member_id)
        try:
            receipt = member.record_purchase(amount, now=now)
        except LedgerError as e:
            return _failure(ErrorKind.INVALID_VALUE, str(e))
        return _success(
            f"Member {member_id} spent {receipt.list_price:.2f} at rate {receipt.rate:.2f} "
            f"({tier_label(receipt.tier)}), paid {receipt.paid:.2f}, "
            f"earned {receipt.earned_points} points, balance {member.points}.",
            member=member,
            data=receipt,
        )

    def redeem(self, member_id: int, points: int) -> OperationResult:
        member = self.get(member_id)
        if member is None:
            return self._not_found(member_id)
        try:
            remaining = member.redeem(points)
        except LedgerError as e:
            return _failure(ErrorKind.INVALID_VALUE, str(e))
        return _success(
            f"Member {member_id} redeemed {points} points, remaining {remaining}.",
            member=member,
            data=remaining,
        )

    def history(self, member_id: int, n: int | None = None) -> OperationResult:
        member = self.get(member_id)
        if member is None:
            return self._not_found(member_id)
        records = member.recent_history(n)
        return OperationResult(
            True,
            f"{len(records)} purchase record(s) for member {member_id}.",
            member=member,
            data=records,
        )

    # Points rate

    def set_default_points_rate(self, rate: int) -> OperationResult:
        # Affects members added from now on only.
        try:
            require_whole_number(rate, "Points rate")
        except LedgerError as e:
            return _failure(ErrorKind.INVALID_VALUE, str(e))
        self.default_points_rate = rate
        return _success(f"Default points rate for new members set to {rate}.", data=rate)

    def apply_points_rate_to_all(self, rate: int) -> OperationResult:
        # checked up front so no member is left half-updated
        try:
            require_whole_number(rate, "Points rate")
        except LedgerError as e:
            return _failure(ErrorKind.INVALID_VALUE, str(e))
        for member in self._members:
            member.set_points_rate(rate)
        return _success(f"Points rate {rate} applied to {len(self._members)} member(s).", data=rate)

    def set_points_rate(self, rate: int) -> OperationResult:
        # Default for new members AND overwrite every existing member.
        result = self.set_default_points_rate(rate)
        if not result:
            return result
        return self.apply_points_rate_to_all(rate)

    # Persistence

    def persist(self, destination=None) -> OperationResult:
        if destination is None:
            destination = self.data_file
        records = [m.to_record() for m in self._members]
        try:
            path = self.repo.write_records(destination, records)
        except OSError as e:
            return _failure(ErrorKind.RESOURCE_UNAVAILABLE, f"Cannot open file {destination}: {e}")
        except UnicodeEncodeError as e:
            return _failure(ErrorKind.RESOURCE_UNAVAILABLE, f"Cannot write file {destination} as UTF-8: {e}")
        return _success(f"Saved {len(records)} member(s) to {path}.", data=len(records))

    def restore(self, source=None) -> OperationResult:
        if source is None:
            source = self.data_file
        try:
            records = self.repo.read_records(source)
        except OSError as e:
            # roster is left as it was
            return _failure(ErrorKind.RESOURCE_UNAVAILABLE, f"Cannot open file {source}: {e}")
        except UnicodeDecodeError as e:
            return _failure(ErrorKind.RESOURCE_UNAVAILABLE, f"Cannot read file {source} as UTF-8: {e}")

        self._members.clear()
        self.next_id = 1

        skipped = 0
        for fields in records:
            if len(fields) != RECORD_FIELDS:
                skipped += 1
                continue
            try:
                member = MemberAccount.from_record(fields)
            except ValueError as e:
                logger.warning(f"Skipping malformed record {fields[0]!r}: {e}")
                skipped += 1
                continue
            self.next_id = max(self.next_id, member.id + 1)
            self._members.append(member)

        message = f"Loaded {len(self._members)} member(s) from {source}."
        if skipped:
            message += f" Skipped {skipped} malformed line(s)."
        return _success(message, data=len(self._members))
