"""
Keystroke formatters for booking form fields.

Every formatter takes the raw text the customer just typed plus the value
currently stored for the field, and returns the canonical display string.
Output is always re-derived from the digits in the input, so formatters
never fail and tolerate deletions.
"""
from __future__ import annotations

import re

_NON_DIGIT_RE = re.compile(r"\D")

PHONE_DIGITS = 10
CARD_DIGITS = 16
EXPIRY_DIGITS = 4


def digits_only(raw: str, limit: int | None = None) -> str:
    """Strip everything but digits, optionally capped at `limit` digits."""
    digits = _NON_DIGIT_RE.sub("", raw or "")
    if limit is not None:
        digits = digits[:limit]
    return digits


def _render_phone(digits: str) -> str:
    if not digits:
        return ""
    if len(digits) <= 3:
        return digits
    if len(digits) <= 6:
        return f"({digits[:3]}) {digits[3:]}"
    return f"({digits[:3]}) {digits[3:6]}-{digits[6:10]}"


def format_phone(raw: str, previous: str = "") -> str:
    """
    Render a US phone number progressively:
    ``""`` → ``"DDD"`` → ``"(DDD) DDD"`` → ``"(DDD) DDD-DDDD"``.

    When the input got shorter than the stored value the customer is
    deleting: the remaining digits are rendered in the shorter layout, so a
    backspace over ``"(555) 1"`` yields ``"555"`` and not ``"(555) "``.
    """
    raw = raw or ""
    if len(raw) < len(previous or ""):
        return _render_phone(digits_only(raw))
    return _render_phone(digits_only(raw, PHONE_DIGITS))


def format_card_number(raw: str, previous: str = "") -> str:
    """Group up to 16 digits as ``DDDD-DDDD-DDDD-DDDD``."""
    digits = digits_only(raw, CARD_DIGITS)
    groups = [digits[i:i + 4] for i in range(0, len(digits), 4)]
    return "-".join(groups)


def format_card_expiry(raw: str, previous: str = "") -> str:
    """
    Render a card expiry as ``MM/YY``.

    A literal ``/`` typed by the customer is honoured: the month part is
    zero-padded when it is a single digit greater than 1 (``"3/"`` becomes
    ``"03/"``). Without a slash the digits are capped at four and the slash
    is inserted after the month.
    """
    raw = raw or ""
    if "/" in raw:
        month_part, _, year_part = raw.partition("/")
        month = digits_only(month_part)
        year = digits_only(year_part)
        if len(month) == 1 and int(month) > 1:
            month = "0" + month
        month = month[:2]
        year = year[:2]
        return f"{month}/{year}" if year else f"{month}/"

    digits = digits_only(raw, EXPIRY_DIGITS)
    if len(digits) <= 2:
        return digits
    return f"{digits[:2]}/{digits[2:]}"


def format_cvv(raw: str, previous: str = "") -> str:
    """Keep the first three digits."""
    return digits_only(raw, 3)


def format_zip_code(raw: str, previous: str = "") -> str:
    """Keep the first five digits of a US ZIP code."""
    return digits_only(raw, 5)
