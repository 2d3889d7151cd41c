"""
Field validators — pure predicates over formatted (or raw) form values.

Validators never raise: malformed or non-string input simply yields False.
`FIELD_RULES` binds every regulated form field to its predicate and to the
message shown next to the field when the check fails.
"""
from __future__ import annotations

import re
from datetime import date
from typing import Callable, NamedTuple, Optional

from pitchbot.wizard.formatters import digits_only

_EMAIL_RE = re.compile(r"^[^\s@]+@[^\s@]+\.[^\s@]+$")


def _digit_count(value: object) -> int:
    if not isinstance(value, str):
        return -1
    return len(digits_only(value))


def validate_email(value: object) -> bool:
    return isinstance(value, str) and bool(_EMAIL_RE.match(value))


def validate_phone(value: object) -> bool:
    return _digit_count(value) == 10


def validate_card_number(value: object) -> bool:
    return _digit_count(value) == 16


def validate_zip_code(value: object) -> bool:
    return _digit_count(value) == 5


def validate_cvv(value: object) -> bool:
    return _digit_count(value) == 3


def expand_two_digit_year(yy: int, today: date) -> int:
    """
    Anchor a two-digit year to a full year.

    The year is placed in the century that puts it within
    [today.year - 50, today.year + 49], so "00" read in 2099 is 2100.
    """
    candidate = today.year - today.year % 100 + yy
    if candidate < today.year - 50:
        candidate += 100
    elif candidate > today.year + 49:
        candidate -= 100
    return candidate


def validate_card_expiry(value: object, today: Optional[date] = None) -> bool:
    """MM/YY with a real month, not before the current month."""
    if _digit_count(value) != 4:
        return False
    digits = digits_only(value)  # type: ignore[arg-type]
    month = int(digits[:2])
    if month < 1 or month > 12:
        return False

    today = today or date.today()
    year = expand_two_digit_year(int(digits[2:]), today)
    return (year, month) >= (today.year, today.month)


# ── Regulated fields ──────────────────────────────────────────────────────────

class FieldRule(NamedTuple):
    check: Callable[..., bool]
    message: str
    dated: bool = False     # check takes the reference date as second argument


FIELD_RULES: dict[str, FieldRule] = {
    "email":           FieldRule(validate_email,       "Please enter a valid email address"),
    "phone":           FieldRule(validate_phone,       "Phone number must be 10 digits"),
    "emergency_phone": FieldRule(validate_phone,       "Phone number must be 10 digits"),
    "card_number":     FieldRule(validate_card_number, "Card number must be 16 digits"),
    "card_expiry":     FieldRule(validate_card_expiry, "Invalid expiry date (MM/YY)", dated=True),
    "card_cvv":        FieldRule(validate_cvv,         "CVV must be 3 digits"),
    "billing_zip":     FieldRule(validate_zip_code,    "ZIP code must be 5 digits"),
}

PAYMENT_FIELDS: tuple[str, ...] = ("card_number", "card_expiry", "card_cvv", "billing_zip")


def check_field(name: str, value: object, today: Optional[date] = None) -> Optional[str]:
    """Return the error message for a regulated field, or None when it passes."""
    rule = FIELD_RULES.get(name)
    if rule is None:
        return None
    ok = rule.check(value, today) if rule.dated else rule.check(value)
    return None if ok else rule.message
