"""
Unit tests — keystroke formatters (wizard/formatters.py).

Formatters are pure and never raise; every call is synchronous.
"""
from __future__ import annotations

import pytest

from pitchbot.wizard.formatters import (
    digits_only,
    format_card_expiry,
    format_card_number,
    format_cvv,
    format_phone,
    format_zip_code,
)


# ─────────────────────────── Phone ────────────────────────────────────────────

class TestFormatPhone:
    def test_typing_sequence_hits_breakpoints(self) -> None:
        typed = ["5", "55", "555", "5551", "55512", "5551234"]
        expected = ["5", "55", "555", "(555) 1", "(555) 12", "(555) 123-4"]
        previous = ""
        results = []
        for raw in typed:
            previous = format_phone(raw, previous)
            results.append(previous)
        assert results == expected

    def test_full_number(self) -> None:
        assert format_phone("5551234567") == "(555) 123-4567"

    def test_extra_digits_are_dropped(self) -> None:
        assert format_phone("555123456789") == "(555) 123-4567"

    def test_non_digits_ignored(self) -> None:
        assert format_phone("555-abc-1234") == "(555) 123-4"

    def test_empty(self) -> None:
        assert format_phone("") == ""

    def test_backspace_over_breakpoint(self) -> None:
        # "(555) 1" minus its last character
        assert format_phone("(555) ", previous="(555) 1") == "555"

    @pytest.mark.parametrize("prefix_len", range(0, 15))
    def test_never_longer_than_full_layout(self, prefix_len: int) -> None:
        out = format_phone("55512345678901"[:prefix_len])
        assert len(out) <= len("(555) 123-4567")

    @pytest.mark.parametrize("raw", ["5", "555", "5551", "555123", "5551234", "5551234567"])
    def test_reformatting_own_output_is_stable(self, raw: str) -> None:
        once = format_phone(raw)
        assert format_phone(digits_only(once), previous=once) == once


# ─────────────────────────── Card number ──────────────────────────────────────

class TestFormatCardNumber:
    @pytest.mark.parametrize("raw, expected", [
        ("4",                   "4"),
        ("4242",                "4242"),
        ("42424",               "4242-4"),
        ("4242424242424242",    "4242-4242-4242-4242"),
        ("4242 4242 4242 4242", "4242-4242-4242-4242"),
        ("42424242424242429999", "4242-4242-4242-4242"),
        ("",                    ""),
    ])
    def test_grouping(self, raw: str, expected: str) -> None:
        assert format_card_number(raw) == expected

    def test_output_never_exceeds_sixteen_digits(self) -> None:
        out = format_card_number("1" * 40)
        assert len(digits_only(out)) == 16


# ─────────────────────────── Expiry ───────────────────────────────────────────

class TestFormatCardExpiry:
    @pytest.mark.parametrize("raw, expected", [
        ("1",     "1"),
        ("12",    "12"),
        ("123",   "12/3"),
        ("1230",  "12/30"),
        ("12305", "12/30"),
        ("3/",    "03/"),
        ("1/",    "1/"),
        ("3/27",  "03/27"),
        ("12/",   "12/"),
        ("12/345", "12/34"),
    ])
    def test_layout(self, raw: str, expected: str) -> None:
        assert format_card_expiry(raw) == expected


# ─────────────────────────── Short numeric fields ─────────────────────────────

class TestDigitCaps:
    def test_cvv_capped_at_three(self) -> None:
        assert format_cvv("12345") == "123"

    def test_zip_capped_at_five(self) -> None:
        assert format_zip_code("90210-1234") == "90210"

    def test_digits_only_handles_none(self) -> None:
        assert digits_only(None) == ""  # type: ignore[arg-type]
