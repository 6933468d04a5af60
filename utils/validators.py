"""
validators.py

Input checks used by the front-end before anything reaches the registry.
The registry trusts what it is given, so every field a user types goes
through here first.
"""

from __future__ import annotations

import re
from datetime import date

MAX_NAME_LENGTH = 20

# front-end input limits
MEMBER_ID_RANGE = (1, 999999)
AMOUNT_RANGE = (0.01, 1000000.0)
REDEEM_RANGE = (1, 1000000)
POINTS_RATE_RANGE = (1, 100)
HISTORY_COUNT_RANGE = (1, 1000)

_BIRTHDAY_RE = re.compile(r"^\d{4}-\d{2}-\d{2}$")


def is_valid_name(name: str) -> bool:
    name = name.strip()
    # commas would break the data file
    return bool(name) and len(name) <= MAX_NAME_LENGTH and "," not in name


def is_valid_phone(phone: str) -> bool:
    # 7/8 digit landlines or 11 digit mobiles starting with 1
    if not phone or not phone.isdigit():
        return False
    if len(phone) not in (7, 8, 11):
        return False
    if len(phone) == 11 and phone[0] != "1":
        return False
    return True


def is_valid_birthday(birthday: str, today: date | None = None) -> bool:
    if not birthday or not _BIRTHDAY_RE.match(birthday):
        return False
    try:
        d = date.fromisoformat(birthday)
    except ValueError:
        # e.g. 2023-02-30
        return False
    if d.year < 1900 or d.year > 2100:
        return False
    if today is None:
        today = date.today()
    return d <= today


def in_range(value, low, high) -> bool:
    return low <= value <= high


def validate_member_inputs(name: str, phone: str, birthday: str) -> list[str]:
    errors: list[str] = []
    if not is_valid_name(name):
        errors.append(f"Name is required (max {MAX_NAME_LENGTH} characters, no commas).")
    if not is_valid_phone(phone):
        errors.append("Phone must be 7, 8 or 11 digits (11-digit numbers start with 1).")
    if not is_valid_birthday(birthday):
        errors.append("Birthday must be a valid past date (YYYY-MM-DD).")
    return errors
