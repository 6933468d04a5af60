"""
Tests for the front-end input checks
"""
from datetime import date

import pytest

from utils.validators import (
    in_range,
    is_valid_birthday,
    is_valid_name,
    is_valid_phone,
    validate_member_inputs,
)


@pytest.mark.parametrize("phone, ok", [
    ("13800000000", True),
    ("1234567", True),
    ("12345678", True),
    ("23800000000", False),
    ("123456", False),
    ("1380000000a", False),
    ("", False),
])
def test_phone(phone, ok):
    assert is_valid_phone(phone) is ok


@pytest.mark.parametrize("birthday, ok", [
    ("1990-01-01", True),
    ("2000-02-29", True),
    ("1900-01-01", True),
    ("2023-02-29", False),
    ("1899-12-31", False),
    ("1990-13-01", False),
    ("1990/01/01", False),
    ("90-01-01", False),
    ("2024-06-16", False),
    ("", False),
])
def test_birthday(birthday, ok):
    assert is_valid_birthday(birthday, today=date(2024, 6, 15)) is ok


def test_name():
    assert is_valid_name("Alice")
    assert not is_valid_name("   ")
    assert not is_valid_name("x" * 21)
    assert not is_valid_name("Smith, John")


def test_in_range_is_inclusive():
    assert in_range(1, 1, 10)
    assert in_range(10, 1, 10)
    assert not in_range(0.001, 0.01, 100)


def test_validate_member_inputs_collects_errors():
    assert validate_member_inputs("Alice", "13800000000", "1990-01-01") == []
    errors = validate_member_inputs("", "12", "tomorrow")
    assert len(errors) == 3
