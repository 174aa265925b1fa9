# engine/history.py
from __future__ import annotations

from typing import Iterable, Tuple

import pandas as pd

from ..data_model.records import NetWorthSnapshot
from .sanitize import to_safe_number

HISTORY_LIMIT = 24
REQUIRED_COLUMNS = {"Period", "MonthIndex", "CalendarYear", "MonthInYear", "NetWorth"}


def record_snapshot(
    history: Iterable[NetWorthSnapshot],
    key: str,
    value: float,
    limit: int = HISTORY_LIMIT,
) -> Tuple[NetWorthSnapshot, ...]:
    """Overwrite the snapshot for ``key`` or append one, keeping the newest ``limit``."""
    points = list(history)
    point = NetWorthSnapshot(period_key=key, value=to_safe_number(value))
    for idx, existing in enumerate(points):
        if existing.period_key == key:
            points[idx] = point
            break
    else:
        points.append(point)
    if limit > 0:
        points = points[-limit:]
    return tuple(points)


def _split_key(key: str) -> tuple[int, int] | None:
    try:
        year, month = map(int, str(key).split("-")[:2])
    except (ValueError, TypeError):
        return None
    if not 1 <= month <= 12:
        return None
    return year, month


def history_frame(history: Iterable[NetWorthSnapshot]) -> pd.DataFrame:
    """Snapshots as a frame ordered by month. Unparsable keys are skipped."""
    records = []
    for point in history:
        parts = _split_key(point.period_key)
        if parts is None:
            continue
        year, month = parts
        records.append(
            {
                "Period": point.period_key,
                "MonthIndex": year * 12 + (month - 1),
                "CalendarYear": year,
                "MonthInYear": month,
                "NetWorth": point.value,
            }
        )
    if not records:
        return pd.DataFrame(columns=sorted(REQUIRED_COLUMNS))
    return pd.DataFrame(records).sort_values("MonthIndex").reset_index(drop=True)


def aggregate_history(df: pd.DataFrame, freq: str = "M") -> pd.DataFrame:
    """Collapse monthly snapshots to M/Q/Y, keeping the last value in each period."""
    if df.empty:
        return df
    missing = REQUIRED_COLUMNS.difference(df.columns)
    if missing:
        raise KeyError(f"Missing required columns: {', '.join(sorted(missing))}")

    freq = (freq or "M").upper()
    df = df.sort_values("MonthIndex").copy()

    if freq == "Q":
        df["PeriodValue"] = df["MonthIndex"] // 3
        quarter = ((df["MonthInYear"] - 1) // 3 + 1).astype(int)
        df["Period"] = df["CalendarYear"].astype(str) + " Q" + quarter.astype(str)
        return df.groupby("PeriodValue", as_index=False).last()

    if freq == "Y":
        df["PeriodValue"] = df["MonthIndex"] // 12
        df["Period"] = df["CalendarYear"].astype(str)
        return df.groupby("PeriodValue", as_index=False).last()

    df["PeriodValue"] = df["MonthIndex"]
    return df.reset_index(drop=True)
