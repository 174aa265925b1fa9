import math
from datetime import date, datetime

import pytest

from ikigai.engine.sanitize import (
    clamp_unit,
    format_money,
    format_pct,
    months_between,
    parse_iso_date,
    period_key,
    to_non_negative,
    to_safe_number,
)


@pytest.mark.parametrize("raw", ["", "abc", None, math.nan, float("inf"), -float("inf"), "nan", "1,000", [], {}])
def test_to_safe_number_returns_zero_for_non_numeric(raw):
    assert to_safe_number(raw) == 0.0


@pytest.mark.parametrize("raw, expected", [("42", 42.0), (" 12.5 ", 12.5), (7, 7.0), (-3.25, -3.25), ("1e3", 1000.0)])
def test_to_safe_number_keeps_finite_values(raw, expected):
    assert to_safe_number(raw) == expected


def test_to_non_negative_floors_at_zero():
    assert to_non_negative("-50") == 0.0
    assert to_non_negative("50") == 50.0


@pytest.mark.parametrize("raw", [-5, -0.1, 0, 0.3, 1, 1.7, 1e9, math.nan, math.inf, -math.inf, "x"])
def test_clamp_unit_is_idempotent_and_bounded(raw):
    once = clamp_unit(raw)

    assert 0.0 <= once <= 1.0
    assert clamp_unit(once) == once


def test_clamp_unit_maps_nan_to_zero_and_inf_to_one():
    assert clamp_unit(math.nan) == 0.0
    assert clamp_unit(math.inf) == 1.0


def test_format_money_scales():
    assert format_money(2_500_000_000) == "$2.50B"
    assert format_money(1_234_567) == "$1.23M"
    assert format_money(12_345.6) == "$12,346"
    assert format_money(999) == "$999"
    assert format_money("junk") == "$0"


def test_format_pct():
    assert format_pct(0.125) == "12.50%"
    assert format_pct(0.5, 0) == "50%"


def test_period_key_zero_pads_month():
    assert period_key(date(2024, 3, 9)) == "2024-03"


def test_parse_iso_date_is_tolerant():
    assert parse_iso_date("2025-06-30") == date(2025, 6, 30)
    assert parse_iso_date("2025-06-30T10:00:00") == date(2025, 6, 30)
    assert parse_iso_date("2025-06") == date(2025, 6, 1)
    assert parse_iso_date("2024-02-30") is None
    assert parse_iso_date("2025-13") is None
    assert parse_iso_date(datetime(2025, 1, 2, 3, 4)) == date(2025, 1, 2)
    assert parse_iso_date("") is None
    assert parse_iso_date("soon") is None
    assert parse_iso_date(None) is None


def test_months_between_counts_calendar_months_and_never_goes_negative():
    assert months_between(date(2024, 1, 31), date(2024, 9, 1)) == 8
    assert months_between(date(2024, 12, 1), date(2025, 1, 1)) == 1
    assert months_between(date(2024, 5, 1), date(2023, 5, 1)) == 0
