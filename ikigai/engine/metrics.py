"""Derived dashboard metrics.

Everything here is a pure function of the record store. ``summarize`` bundles
the figures the dashboard shows and is memoized on its (hashable) arguments;
the cache never changes results.
"""
from __future__ import annotations

from dataclasses import dataclass
from datetime import date
from functools import lru_cache
from typing import Iterable, List, Literal, Tuple

import pandas as pd

from ..data_model.records import Asset, Liability, Profile, SpendingItem
from ..data_model.store import RecordStore
from .goals import GoalProgress, goal_progress
from .sanitize import clamp_unit, to_safe_number

SpendView = Literal["monthly", "annual"]
RetirementView = Literal["ongoing", "all"]

NEED_WANT_LABELS = {"need": "Need", "want": "Want"}


@dataclass(frozen=True)
class BreakdownRow:
    name: str
    value: float


@dataclass(frozen=True)
class RetirementTargets:
    ongoing: float
    all: float

    def for_view(self, view: RetirementView) -> float:
        return self.all if view == "all" else self.ongoing


def total_monthly_income(profile: Profile) -> float:
    return sum((to_safe_number(source.monthly_amount) for source in profile.income_sources), 0.0)


def total_monthly_spend_ongoing(items: Iterable[SpendingItem]) -> float:
    return sum((to_safe_number(item.monthly_amount) for item in items if not item.is_temporary), 0.0)


def total_monthly_spend_all(items: Iterable[SpendingItem]) -> float:
    return sum((to_safe_number(item.monthly_amount) for item in items), 0.0)


def leftover_monthly(income: float, spend_all: float) -> float:
    """Income left after all spending. Overspending reads as 0, see ``monthly_deficit``."""
    return max(0.0, to_safe_number(income) - to_safe_number(spend_all))


def monthly_deficit(income: float, spend_all: float) -> float:
    return max(0.0, to_safe_number(spend_all) - to_safe_number(income))


def savings_rate(leftover: float, income: float) -> float:
    income = to_safe_number(income)
    if income <= 0:
        return 0.0
    return clamp_unit(to_safe_number(leftover) / income)


def spend_for_view(monthly_spend: float, view: SpendView = "monthly") -> float:
    monthly_spend = to_safe_number(monthly_spend)
    return monthly_spend * 12 if view == "annual" else monthly_spend


def spend_by_category(items: Iterable[SpendingItem]) -> List[BreakdownRow]:
    """Monthly spend per category, largest first. Ties keep first-seen order."""
    rows = [{"category": item.category, "amount": to_safe_number(item.monthly_amount)} for item in items]
    if not rows:
        return []
    df = pd.DataFrame(rows)
    totals = df.groupby("category", sort=False)["amount"].sum()
    totals = totals.sort_values(ascending=False, kind="stable")
    return [BreakdownRow(name=str(name), value=float(value)) for name, value in totals.items()]


def spend_by_need_or_want(items: Iterable[SpendingItem]) -> List[BreakdownRow]:
    buckets = {"need": 0.0, "want": 0.0}
    for item in items:
        if item.need_or_want in buckets:
            buckets[item.need_or_want] += to_safe_number(item.monthly_amount)
    return [
        BreakdownRow(name=NEED_WANT_LABELS[key], value=value)
        for key, value in buckets.items()
        if value > 0
    ]


def total_assets(assets: Iterable[Asset]) -> float:
    return sum((to_safe_number(asset.value) for asset in assets), 0.0)


def total_liabilities(liabilities: Iterable[Liability]) -> float:
    return sum((to_safe_number(liability.balance) for liability in liabilities), 0.0)


def net_worth(assets: Iterable[Asset], liabilities: Iterable[Liability]) -> float:
    return total_assets(assets) - total_liabilities(liabilities)


def store_net_worth(store: RecordStore) -> float:
    return net_worth(store.assets, store.liabilities)


def retirement_target(monthly_spend: float, withdrawal_rate: float) -> float:
    """Nest egg needed so that ``withdrawal_rate`` of it covers a year of spending."""
    withdrawal_rate = to_safe_number(withdrawal_rate)
    if withdrawal_rate <= 0:
        return 0.0
    return to_safe_number(monthly_spend) * 12 / withdrawal_rate


def retirement_targets(items: Iterable[SpendingItem], withdrawal_rate: float) -> RetirementTargets:
    items = tuple(items)
    return RetirementTargets(
        ongoing=retirement_target(total_monthly_spend_ongoing(items), withdrawal_rate),
        all=retirement_target(total_monthly_spend_all(items), withdrawal_rate),
    )


@dataclass(frozen=True)
class DashboardSummary:
    income_monthly: float
    spend_ongoing_monthly: float
    spend_all_monthly: float
    leftover_monthly: float
    deficit_monthly: float
    savings_rate: float
    by_category: Tuple[BreakdownRow, ...]
    by_need_or_want: Tuple[BreakdownRow, ...]
    goals: Tuple[GoalProgress, ...]
    total_assets: float
    total_liabilities: float
    net_worth: float
    withdrawal_rate: float
    retirement: RetirementTargets


def compute_summary(
    store: RecordStore,
    withdrawal_rate: float,
    today: date,
    default_horizon: int = 12,
) -> DashboardSummary:
    income = total_monthly_income(store.profile)
    spend_all = total_monthly_spend_all(store.items)
    leftover = leftover_monthly(income, spend_all)
    assets_total = total_assets(store.assets)
    liabilities_total = total_liabilities(store.liabilities)
    return DashboardSummary(
        income_monthly=income,
        spend_ongoing_monthly=total_monthly_spend_ongoing(store.items),
        spend_all_monthly=spend_all,
        leftover_monthly=leftover,
        deficit_monthly=monthly_deficit(income, spend_all),
        savings_rate=savings_rate(leftover, income),
        by_category=tuple(spend_by_category(store.items)),
        by_need_or_want=tuple(spend_by_need_or_want(store.items)),
        goals=tuple(goal_progress(store.goals, today, default_horizon)),
        total_assets=assets_total,
        total_liabilities=liabilities_total,
        net_worth=assets_total - liabilities_total,
        withdrawal_rate=to_safe_number(withdrawal_rate),
        retirement=retirement_targets(store.items, withdrawal_rate),
    )


@lru_cache(maxsize=64)
def summarize(
    store: RecordStore,
    withdrawal_rate: float,
    today: date,
    default_horizon: int = 12,
) -> DashboardSummary:
    """Memoized :func:`compute_summary`."""
    return compute_summary(store, withdrawal_rate, today, default_horizon)
