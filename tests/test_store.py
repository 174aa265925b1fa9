from datetime import date

import pytest

from ikigai.data_model import RecordStore, SpendingItem
from ikigai.data_model import store as ops


def test_default_store_has_one_salary_source():
    store = RecordStore()

    assert [s.name for s in store.profile.income_sources] == ["Salary"]
    assert store.items == ()
    assert store.onboarding_done is False


def test_add_spending_item_prepends_and_sanitizes():
    store = ops.add_spending_item(RecordStore(), "Rent", category="Housing", monthly_amount="1200")
    store = ops.add_spending_item(store, "Gym", category="Health & Fitness", monthly_amount="abc", need_or_want="WANT")

    assert [item.name for item in store.items] == ["Gym", "Rent"]
    assert store.items[0].monthly_amount == 0.0
    assert store.items[0].need_or_want == "want"
    assert store.items[1].monthly_amount == 1200.0
    assert store.items[0].id != store.items[1].id


def test_blank_name_is_not_added():
    store = RecordStore()

    assert ops.add_spending_item(store, "   ", monthly_amount=10) is store
    assert ops.add_goal(store, "") is store
    assert ops.add_asset(store, None) is store
    assert ops.add_liability(store, " ") is store
    assert ops.add_income_source(store, "") is store


def test_income_sources_are_appended():
    store = ops.add_income_source(RecordStore(), "Freelance", "800")

    assert [s.name for s in store.profile.income_sources] == ["Salary", "Freelance"]
    assert store.profile.income_sources[-1].monthly_amount == 800.0


def test_update_income_source_by_id():
    store = RecordStore()
    source_id = store.profile.income_sources[0].id

    updated = ops.update_income_source(store, source_id, monthly_amount="4500")

    assert updated.profile.income_sources[0].monthly_amount == 4500.0
    assert store.profile.income_sources[0].monthly_amount == 0.0


def test_remove_income_source_allows_empty_list():
    store = RecordStore()

    store = ops.remove_income_source(store, store.profile.income_sources[0].id)

    assert store.profile.income_sources == ()


def test_update_record_resanitizes_and_returns_new_snapshot():
    store = ops.add_goal(RecordStore(), "House", target_amount=50000)
    goal_id = store.goals[0].id

    updated = ops.update_record(store, "goals", goal_id, current_amount="-20", end_date="2026-01-01")

    assert updated is not store
    assert updated.goals[0].current_amount == 0.0
    assert updated.goals[0].end_date == date(2026, 1, 1)
    assert store.goals[0].end_date is None


def test_update_and_remove_unknown_id_leave_store_unchanged():
    store = ops.add_asset(RecordStore(), "Cash", asset_type="Cash", value=100)

    assert ops.update_record(store, "assets", "missing", value=5) is store
    assert ops.remove_record(store, "assets", "missing") is store


def test_remove_record_by_id():
    store = ops.add_liability(RecordStore(), "Loan", balance=100)
    store = ops.add_liability(store, "Card", balance=50)

    store = ops.remove_record(store, "liabilities", store.liabilities[0].id)

    assert [l.name for l in store.liabilities] == ["Loan"]


def test_unknown_collection_is_rejected():
    with pytest.raises(ValueError):
        ops.update_record(RecordStore(), "pets", "x", name="Rex")


def test_update_profile_ignores_income_sources_and_coerces_counts():
    store = RecordStore()

    updated = ops.update_profile(store, kids_count="2", pets_count="lots", income_sources=())

    assert updated.profile.kids_count == 2
    assert updated.profile.pets_count == 0
    assert updated.profile.income_sources == store.profile.income_sources


def test_replace_collection_returns_same_store_when_equal():
    item = SpendingItem(id="i", name="Rent", monthly_amount=1000)
    store = ops.replace_collection(RecordStore(), "items", (item,))

    assert ops.replace_collection(store, "items", [item]) is store


def test_store_is_hashable():
    store = ops.add_spending_item(RecordStore(), "Rent", monthly_amount=1000)

    assert hash(store) == hash(ops.replace_collection(store, "items", store.items))


def test_set_onboarding_done():
    store = ops.set_onboarding_done(RecordStore(), True)

    assert store.onboarding_done is True
    assert ops.set_onboarding_done(store, True) is store
