import json
import math

from ikigai.data_model import RecordStore
from ikigai.data_model import store as ops
from ikigai.engine.storage import (
    _sanitize_json_compat,
    load_state,
    save_state,
    store_from_payload,
    store_to_payload,
)


def test_sanitize_json_compat_replaces_special_numbers():
    payload = {
        "float": math.nan,
        "list": [1, float("inf"), -float("inf")],
        "nested": {"value": math.nan},
        "tuple": (1.5, math.nan),
    }

    clean = _sanitize_json_compat(payload)

    assert clean == {
        "float": None,
        "list": [1, None, None],
        "nested": {"value": None},
        "tuple": [1.5, None],
    }


def test_save_state_persists_sanitized_values(tmp_path):
    path = tmp_path / "nested" / "state.json"
    data = {"items": [{"monthlyAmount": math.nan}], "onboardingDone": True}

    assert save_state(str(path), data) is True

    with path.open("r", encoding="utf-8") as handle:
        stored = json.load(handle)

    assert stored == {"items": [{"monthlyAmount": None}], "onboardingDone": True}
    assert not (tmp_path / "nested" / "state.json.tmp").exists()


def test_save_state_failure_is_swallowed(tmp_path):
    blocker = tmp_path / "blocker"
    blocker.write_text("not a directory", encoding="utf-8")

    assert save_state(str(blocker / "state.json"), {"items": []}) is False


def test_load_state_missing_empty_or_malformed(tmp_path):
    empty = tmp_path / "empty.json"
    empty.write_text("   ", encoding="utf-8")
    broken = tmp_path / "broken.json"
    broken.write_text("{not json", encoding="utf-8")
    listed = tmp_path / "list.json"
    listed.write_text("[1, 2]", encoding="utf-8")

    assert load_state(str(tmp_path / "missing.json")) == {}
    assert load_state(str(empty)) == {}
    assert load_state(str(broken)) == {}
    assert load_state(str(listed)) == {}


def test_round_trip_restores_equal_store(tmp_path):
    store = RecordStore()
    store = ops.add_spending_item(store, "Rent", category="Housing", monthly_amount=1200)
    store = ops.add_spending_item(store, "Course", category="Education", monthly_amount=200, is_temporary=True, end_date="2025-05-01")
    store = ops.add_goal(store, "Trip", category="Vacation", target_amount=3000, current_amount=500, monthly_contribution=250)
    store = ops.add_asset(store, "Brokerage", value=40000)
    store = ops.add_liability(store, "Car loan", balance=9000)
    store = ops.set_onboarding_done(store, True)
    path = str(tmp_path / "state.json")

    save_state(path, store_to_payload(store))

    assert store_from_payload(load_state(path)) == store


def test_each_field_falls_back_independently():
    payload = {
        "profile": "oops",
        "items": [{"id": "i1", "name": "Rent", "monthlyAmount": "900"}, "junk", 5],
        "goals": {"not": "a list"},
        "assets": [{"id": "a1", "name": "Cash", "value": "abc"}],
        "netWorthHistory": [{"periodKey": "2024-01", "value": 10}],
        "onboardingDone": "yes",
    }

    store = store_from_payload(payload)

    assert [s.name for s in store.profile.income_sources] == ["Salary"]
    assert [(i.id, i.monthly_amount) for i in store.items] == [("i1", 900.0)]
    assert store.goals == ()
    assert store.assets[0].value == 0.0
    assert store.liabilities == ()
    assert store.net_worth_history[0].period_key == "2024-01"
    assert store.onboarding_done is False


def test_legacy_short_keys_are_accepted():
    payload = {
        "profile": {"kids": 2, "pets": 1, "incomeSources": [{"id": "s", "name": "Salary", "monthly": 5000}]},
        "items": [{"id": "i", "name": "Netflix", "category": "Subscriptions", "monthly": 15, "needWant": "want", "temporary": False, "endDate": ""}],
        "goals": [{"id": "g", "name": "Fund", "category": "Emergency", "target": 1000, "current": 100, "monthly": 50, "endDate": ""}],
        "netWorthHistory": [{"t": "2024-05", "value": 123}],
    }

    store = store_from_payload(payload)

    assert store.profile.kids_count == 2
    assert store.profile.income_sources[0].monthly_amount == 5000.0
    assert store.items[0].need_or_want == "want"
    assert store.goals[0].monthly_contribution == 50.0
    assert store.net_worth_history[0].period_key == "2024-05"
