import math

from ikigai.config import PlannerSettings
from ikigai.data_model import Asset, Goal, SpendingItem, build_table_models


def _models():
    return build_table_models(PlannerSettings(spending_categories=["Housing", "Gifts"]))


def test_spending_model_uses_configured_categories():
    model = _models()["items"]

    category = next(col for col in model.columns if col.field == "category")

    assert category.options == ["Housing", "Gifts", "Other"]


def test_rows_round_trip_through_records():
    model = _models()["items"]
    items = (
        SpendingItem(id="a", name="Rent", category="Housing", monthly_amount=1200),
        SpendingItem(id="b", name="Course", category="Education", monthly_amount=90, is_temporary=True, end_date="2025-02-01"),
    )

    rows = model.records_to_rows(items)

    assert rows[0]["id"] == "a"
    assert rows[1]["endDate"] == "2025-02-01"
    assert model.rows_to_records(rows) == items


def test_edited_rows_are_sanitized_and_unnamed_new_rows_dropped():
    model = _models()["goals"]
    rows = [
        {"id": "g", "name": "Trip", "targetAmount": "2000", "currentAmount": math.nan, "monthlyContribution": "x"},
        {"name": "  ", "targetAmount": 10},
        {"name": "Fresh", "targetAmount": 5},
    ]

    goals = model.rows_to_records(rows)

    assert [g.name for g in goals] == ["Trip", "Fresh"]
    assert goals[0] == Goal(id="g", name="Trip", target_amount=2000)
    assert goals[1].id


def test_duration_dropdown_labels_booleans():
    model = _models()["items"]

    duration = next(col for col in model.columns if col.field == "isTemporary")

    assert duration.dropdown_options() == [
        {"label": "Ongoing", "value": False},
        {"label": "Temporary", "value": True},
    ]


def test_empty_collection_renders_no_rows_but_keeps_columns():
    model = _models()["liabilities"]

    frame = model.records_to_df(())

    assert list(frame.columns) == ["id", "name", "balance"]
    assert model.blank_row() == {"name": "New liability", "balance": 0.0}


def test_clearing_the_name_of_an_existing_row_keeps_the_record():
    model = _models()["assets"]
    before = (Asset(id="a", name="Brokerage", value=50000), Asset(id="b", name="Cash", value=10))
    rows = model.records_to_rows(before)
    rows[0]["name"] = ""
    rows[1]["name"] = None

    assets = model.rows_to_records(rows, before)

    assert assets == before


def test_existing_row_without_previous_name_is_kept_blank():
    model = _models()["liabilities"]

    liabilities = model.rows_to_records([{"id": "x", "name": " ", "balance": 300}])

    assert [(debt.id, debt.name, debt.balance) for debt in liabilities] == [("x", "", 300.0)]


def test_money_columns_and_help_text_reach_the_table_config():
    from components.sidebar import table_config

    columns, dropdowns, tooltips = table_config(_models()["items"])
    by_id = {col["id"]: col for col in columns}

    assert "format" in by_id["monthlyAmount"]
    assert "format" not in by_id["name"]
    assert tooltips == {"isTemporary": "Temporary items are left out of the ongoing retirement target"}
    assert set(dropdowns) == {"category", "needOrWant", "isTemporary"}
