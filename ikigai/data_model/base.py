from __future__ import annotations

from dataclasses import dataclass
from typing import Any, Callable, Iterable, List, Mapping

import pandas as pd


@dataclass
class ColumnDefinition:
    """Lightweight schema descriptor used by the Dash editors."""

    field: str
    label: str
    kind: str = "text"  # text | number | select | date
    default: Any = ""
    options: List[Any] | None = None
    option_labels: List[str] | None = None
    format: str | None = None  # "money" renders with a currency template
    help: str | None = None

    def dropdown_options(self) -> List[dict[str, Any]]:
        labels = self.option_labels or [str(opt) for opt in self.options or []]
        return [{"label": label, "value": value} for label, value in zip(labels, self.options or [])]


@dataclass
class TableModel:
    """Container for a table schema plus the record type behind each row."""

    name: str
    columns: List[ColumnDefinition]
    record_factory: Callable[[Mapping[str, Any]], Any]

    @property
    def fields(self) -> List[str]:
        return [col.field for col in self.columns]

    def blank_row(self) -> dict[str, Any]:
        return {col.field: col.default for col in self.columns}

    def records_to_df(self, records: Iterable[Any]) -> pd.DataFrame:
        rows = [record.to_dict() for record in records]
        return pd.DataFrame(rows, columns=["id", *self.fields])

    def records_to_rows(self, records: Iterable[Any]) -> List[dict[str, Any]]:
        return self.records_to_df(records).to_dict("records")

    def rows_to_records(
        self, rows: Iterable[Mapping[str, Any]] | None, previous: Iterable[Any] = ()
    ) -> tuple:
        """Build records from edited table rows.

        New rows without a name are dropped. A row that already carries an id
        keeps its record; a cleared name falls back to the name in ``previous``.
        """
        names = {record.id: record.name for record in previous}
        records = []
        for row in rows or []:
            clean = {key: (None if _is_missing(value) else value) for key, value in dict(row).items()}
            if not str(clean.get("name") or "").strip():
                if not clean.get("id"):
                    continue
                clean["name"] = names.get(clean["id"], "")
            records.append(self.record_factory(clean))
        return tuple(records)


def _is_missing(value: Any) -> bool:
    try:
        return bool(pd.isna(value))
    except (TypeError, ValueError):
        return False
