# engine/sanitize.py
from __future__ import annotations

import math
import re
from datetime import date, datetime
from typing import Any

_YEAR_MONTH = re.compile(r"(\d{4})-(\d{1,2})")


def _as_float(value: Any) -> float:
    if isinstance(value, str):
        value = value.strip()
        if not value:
            return math.nan
    try:
        return float(value)
    except (TypeError, ValueError, OverflowError):
        return math.nan


def to_safe_number(value: Any) -> float:
    """Return ``value`` as a finite float, or 0.0 when it is not one."""
    number = _as_float(value)
    return number if math.isfinite(number) else 0.0


def to_non_negative(value: Any) -> float:
    return max(0.0, to_safe_number(value))


def clamp_unit(value: Any) -> float:
    """Clamp a ratio to [0, 1]. NaN and non-numeric input give 0."""
    number = _as_float(value)
    if math.isnan(number):
        return 0.0
    return max(0.0, min(1.0, number))


def _round_half_up(value: float) -> int:
    return math.floor(value + 0.5)


def format_money(value: Any) -> str:
    amount = to_safe_number(value)
    magnitude = abs(amount)
    if magnitude >= 1_000_000_000:
        return f"${amount / 1_000_000_000:.2f}B"
    if magnitude >= 1_000_000:
        return f"${amount / 1_000_000:.2f}M"
    if magnitude >= 1_000:
        return f"${_round_half_up(amount):,}"
    return f"${amount:.0f}"


def format_pct(ratio: Any, decimals: int = 2) -> str:
    return f"{to_safe_number(ratio) * 100:.{decimals}f}%"


def period_key(day: date) -> str:
    """Year-month key used to deduplicate monthly snapshots, e.g. ``2024-03``."""
    return f"{day.year}-{day.month:02d}"


def parse_iso_date(value: Any) -> date | None:
    if isinstance(value, datetime):
        return value.date()
    if isinstance(value, date):
        return value
    text = str(value or "").strip()
    if not text:
        return None
    try:
        return date.fromisoformat(text[:10])
    except ValueError:
        pass
    # Month pickers send "YYYY-MM"
    match = _YEAR_MONTH.fullmatch(text)
    if match is None:
        return None
    try:
        return date(int(match.group(1)), int(match.group(2)), 1)
    except ValueError:
        return None


def months_between(start: date, end: date) -> int:
    """Whole calendar months from ``start`` to ``end``, floored at 0. Days are ignored."""
    delta = (end.year * 12 + end.month) - (start.year * 12 + start.month)
    return max(0, delta)
