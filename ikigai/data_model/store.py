"""Immutable record store and the pure functions that edit it.

Every mutation returns a new :class:`RecordStore`; when nothing changes the
same instance is returned so callers can skip persistence with an identity
check.
"""
from __future__ import annotations

from dataclasses import dataclass, field, replace
from typing import Any, Mapping, Tuple, TypeVar

from .records import (
    Asset,
    Goal,
    IncomeSource,
    Liability,
    NetWorthSnapshot,
    Profile,
    SpendingItem,
    new_id,
)

COLLECTIONS = ("items", "goals", "assets", "liabilities")

_R = TypeVar("_R", IncomeSource, SpendingItem, Goal, Asset, Liability)


@dataclass(frozen=True)
class RecordStore:
    profile: Profile = field(default_factory=Profile)
    items: Tuple[SpendingItem, ...] = ()
    goals: Tuple[Goal, ...] = ()
    assets: Tuple[Asset, ...] = ()
    liabilities: Tuple[Liability, ...] = ()
    net_worth_history: Tuple[NetWorthSnapshot, ...] = ()
    onboarding_done: bool = False


def _replace_by_id(records: Tuple[_R, ...], record_id: str, changes: Mapping[str, Any]) -> Tuple[_R, ...] | None:
    updated = []
    found = False
    for record in records:
        if record.id == record_id:
            record = replace(record, **changes)
            found = True
        updated.append(record)
    return tuple(updated) if found else None


def _remove_by_id(records: Tuple[_R, ...], record_id: str) -> Tuple[_R, ...] | None:
    kept = tuple(record for record in records if record.id != record_id)
    return kept if len(kept) != len(records) else None


def _has_name(name: Any) -> bool:
    return bool(str(name or "").strip())


# --- profile / income -------------------------------------------------------

def update_profile(store: RecordStore, **changes: Any) -> RecordStore:
    changes.pop("income_sources", None)
    if not changes:
        return store
    profile = replace(store.profile, **changes)
    if profile == store.profile:
        return store
    return replace(store, profile=profile)


def add_income_source(store: RecordStore, name: str = "Other income", monthly_amount: Any = 0.0) -> RecordStore:
    if not _has_name(name):
        return store
    source = IncomeSource(id=new_id(), name=name, monthly_amount=monthly_amount)
    profile = replace(store.profile, income_sources=store.profile.income_sources + (source,))
    return replace(store, profile=profile)


def update_income_source(store: RecordStore, source_id: str, **changes: Any) -> RecordStore:
    sources = _replace_by_id(store.profile.income_sources, source_id, changes)
    if sources is None or sources == store.profile.income_sources:
        return store
    return replace(store, profile=replace(store.profile, income_sources=sources))


def remove_income_source(store: RecordStore, source_id: str) -> RecordStore:
    sources = _remove_by_id(store.profile.income_sources, source_id)
    if sources is None:
        return store
    return replace(store, profile=replace(store.profile, income_sources=sources))


# --- top-level collections --------------------------------------------------

def add_spending_item(
    store: RecordStore,
    name: str,
    category: str = "Other",
    monthly_amount: Any = 0.0,
    need_or_want: str = "need",
    is_temporary: bool = False,
    end_date: Any = None,
) -> RecordStore:
    if not _has_name(name):
        return store
    item = SpendingItem(
        id=new_id(),
        name=name,
        category=category,
        monthly_amount=monthly_amount,
        need_or_want=need_or_want,
        is_temporary=is_temporary,
        end_date=end_date,
    )
    return replace(store, items=(item,) + store.items)


def add_goal(
    store: RecordStore,
    name: str,
    category: str = "Emergency",
    target_amount: Any = 0.0,
    current_amount: Any = 0.0,
    monthly_contribution: Any = 0.0,
    end_date: Any = None,
) -> RecordStore:
    if not _has_name(name):
        return store
    goal = Goal(
        id=new_id(),
        name=name,
        category=category,
        target_amount=target_amount,
        current_amount=current_amount,
        monthly_contribution=monthly_contribution,
        end_date=end_date,
    )
    return replace(store, goals=(goal,) + store.goals)


def add_asset(store: RecordStore, name: str, asset_type: str = "Investment", value: Any = 0.0) -> RecordStore:
    if not _has_name(name):
        return store
    asset = Asset(id=new_id(), name=name, asset_type=asset_type, value=value)
    return replace(store, assets=(asset,) + store.assets)


def add_liability(store: RecordStore, name: str, balance: Any = 0.0) -> RecordStore:
    if not _has_name(name):
        return store
    liability = Liability(id=new_id(), name=name, balance=balance)
    return replace(store, liabilities=(liability,) + store.liabilities)


def update_record(store: RecordStore, collection: str, record_id: str, **changes: Any) -> RecordStore:
    """Patch one record of ``collection`` (items/goals/assets/liabilities) by id."""
    if collection not in COLLECTIONS:
        raise ValueError(f"Unknown collection: {collection}")
    current = getattr(store, collection)
    changes.pop("id", None)
    updated = _replace_by_id(current, record_id, changes)
    if updated is None or updated == current:
        return store
    return replace(store, **{collection: updated})


def remove_record(store: RecordStore, collection: str, record_id: str) -> RecordStore:
    if collection not in COLLECTIONS:
        raise ValueError(f"Unknown collection: {collection}")
    kept = _remove_by_id(getattr(store, collection), record_id)
    if kept is None:
        return store
    return replace(store, **{collection: kept})


def replace_collection(store: RecordStore, collection: str, records: Tuple[Any, ...]) -> RecordStore:
    """Swap a whole collection, e.g. after an editable table changed."""
    if collection == "income_sources":
        records = tuple(records)
        if records == store.profile.income_sources:
            return store
        return replace(store, profile=replace(store.profile, income_sources=records))
    if collection not in COLLECTIONS:
        raise ValueError(f"Unknown collection: {collection}")
    records = tuple(records)
    if records == getattr(store, collection):
        return store
    return replace(store, **{collection: records})


def set_history(store: RecordStore, history: Tuple[NetWorthSnapshot, ...]) -> RecordStore:
    history = tuple(history)
    if history == store.net_worth_history:
        return store
    return replace(store, net_worth_history=history)


def set_onboarding_done(store: RecordStore, done: bool = True) -> RecordStore:
    if store.onboarding_done == bool(done):
        return store
    return replace(store, onboarding_done=bool(done))
