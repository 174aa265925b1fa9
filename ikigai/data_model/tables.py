from __future__ import annotations

from typing import List

from ..config import PlannerSettings, get_settings
from .base import ColumnDefinition, TableModel
from .records import Asset, Goal, IncomeSource, Liability, SpendingItem

NEED_OR_WANT_OPTIONS = ["need", "want"]


def _money(field: str, label: str) -> ColumnDefinition:
    return ColumnDefinition(field, label, kind="number", default=0.0, format="money")


class IncomeTableModel(TableModel):
    def __init__(self) -> None:
        columns = [
            ColumnDefinition("name", "Source", default="Other income"),
            _money("monthlyAmount", "Monthly (USD)"),
        ]
        super().__init__("income", columns, IncomeSource.from_dict)


class SpendingTableModel(TableModel):
    def __init__(self, categories: List[str]) -> None:
        columns = [
            ColumnDefinition("name", "Item", default="New item"),
            ColumnDefinition("category", "Category", kind="select", default="Other", options=list(categories)),
            _money("monthlyAmount", "Monthly (USD)"),
            ColumnDefinition(
                "needOrWant",
                "Need / Want",
                kind="select",
                default="need",
                options=NEED_OR_WANT_OPTIONS,
            ),
            ColumnDefinition(
                "isTemporary",
                "Duration",
                kind="select",
                default=False,
                options=[False, True],
                option_labels=["Ongoing", "Temporary"],
                help="Temporary items are left out of the ongoing retirement target",
            ),
            ColumnDefinition("endDate", "Ends (YYYY-MM-DD)", kind="date", default=""),
        ]
        super().__init__("items", columns, SpendingItem.from_dict)


class GoalTableModel(TableModel):
    def __init__(self, presets: List[str]) -> None:
        columns = [
            ColumnDefinition("name", "Goal", default="New goal"),
            ColumnDefinition("category", "Category", kind="select", default="Emergency", options=list(presets)),
            _money("targetAmount", "Target (USD)"),
            _money("currentAmount", "Saved (USD)"),
            _money("monthlyContribution", "Per month (USD)"),
            ColumnDefinition(
                "endDate",
                "End date (YYYY-MM-DD)",
                kind="date",
                default="",
                help="Setting an end date enables on-track guidance",
            ),
        ]
        super().__init__("goals", columns, Goal.from_dict)


class AssetTableModel(TableModel):
    def __init__(self, asset_types: List[str]) -> None:
        columns = [
            ColumnDefinition("name", "Asset", default="New asset"),
            ColumnDefinition("type", "Type", kind="select", default="Investment", options=list(asset_types)),
            _money("value", "Value (USD)"),
        ]
        super().__init__("assets", columns, Asset.from_dict)


class LiabilityTableModel(TableModel):
    def __init__(self) -> None:
        columns = [
            ColumnDefinition("name", "Liability", default="New liability"),
            _money("balance", "Balance (USD)"),
        ]
        super().__init__("liabilities", columns, Liability.from_dict)


def build_table_models(settings: PlannerSettings | None = None) -> dict[str, TableModel]:
    settings = settings or get_settings()
    return {
        "income_sources": IncomeTableModel(),
        "items": SpendingTableModel(settings.spending_categories),
        "goals": GoalTableModel(settings.goal_presets),
        "assets": AssetTableModel(settings.asset_types),
        "liabilities": LiabilityTableModel(),
    }
