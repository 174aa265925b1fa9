from .base import ColumnDefinition, TableModel
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
from .store import RecordStore
from .tables import (
    AssetTableModel,
    GoalTableModel,
    IncomeTableModel,
    LiabilityTableModel,
    SpendingTableModel,
    build_table_models,
)

__all__ = [
    "Asset",
    "AssetTableModel",
    "ColumnDefinition",
    "Goal",
    "GoalTableModel",
    "IncomeSource",
    "IncomeTableModel",
    "Liability",
    "LiabilityTableModel",
    "NetWorthSnapshot",
    "Profile",
    "RecordStore",
    "SpendingItem",
    "SpendingTableModel",
    "TableModel",
    "build_table_models",
    "new_id",
]
