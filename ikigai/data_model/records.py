# data_model/records.py
from __future__ import annotations

import uuid
from dataclasses import dataclass, field
from datetime import date
from typing import Any, Literal, Mapping, Tuple

from ..engine.sanitize import parse_iso_date, to_non_negative, to_safe_number

NeedOrWant = Literal["need", "want"]


def new_id() -> str:
    return str(uuid.uuid4())


def _pick(data: Mapping[str, Any], *keys: str, default: Any = None) -> Any:
    """First present, non-null value among ``keys`` (newer key names first)."""
    for key in keys:
        if key in data and data[key] is not None:
            return data[key]
    return default


def _to_bool(value: Any) -> bool:
    if isinstance(value, str):
        return value.strip().lower() in {"true", "yes", "1", "y", "temporary"}
    return bool(value)


def _text(value: Any) -> str:
    return "" if value is None else str(value).strip()


def _iso(day: date | None) -> str:
    return day.isoformat() if day else ""


def _set(obj: Any, name: str, value: Any) -> None:
    object.__setattr__(obj, name, value)


@dataclass(frozen=True)
class IncomeSource:
    id: str
    name: str = ""
    monthly_amount: float = 0.0

    def __post_init__(self) -> None:
        _set(self, "name", _text(self.name))
        _set(self, "monthly_amount", to_safe_number(self.monthly_amount))

    @classmethod
    def from_dict(cls, data: Mapping[str, Any]) -> "IncomeSource":
        return cls(
            id=_text(_pick(data, "id")) or new_id(),
            name=_pick(data, "name", default=""),
            monthly_amount=_pick(data, "monthlyAmount", "monthly", default=0.0),
        )

    def to_dict(self) -> dict[str, Any]:
        return {"id": self.id, "name": self.name, "monthlyAmount": self.monthly_amount}


def default_income_sources() -> Tuple[IncomeSource, ...]:
    return (IncomeSource(id=new_id(), name="Salary", monthly_amount=0.0),)


@dataclass(frozen=True)
class Profile:
    age: str = ""
    location: str = ""
    relationship: str = ""
    kids_count: int = 0
    pets_count: int = 0
    income_sources: Tuple[IncomeSource, ...] = field(default_factory=default_income_sources)

    def __post_init__(self) -> None:
        _set(self, "age", _text(self.age))
        _set(self, "location", _text(self.location))
        _set(self, "relationship", _text(self.relationship))
        _set(self, "kids_count", int(to_safe_number(self.kids_count)))
        _set(self, "pets_count", int(to_safe_number(self.pets_count)))
        _set(self, "income_sources", tuple(self.income_sources))

    @classmethod
    def from_dict(cls, data: Mapping[str, Any]) -> "Profile":
        raw_sources = _pick(data, "incomeSources")
        if isinstance(raw_sources, list):
            sources = tuple(IncomeSource.from_dict(row) for row in raw_sources if isinstance(row, Mapping))
        else:
            sources = default_income_sources()
        return cls(
            age=_pick(data, "age", default=""),
            location=_pick(data, "location", default=""),
            relationship=_pick(data, "relationship", default=""),
            kids_count=_pick(data, "kidsCount", "kids", default=0),
            pets_count=_pick(data, "petsCount", "pets", default=0),
            income_sources=sources,
        )

    def to_dict(self) -> dict[str, Any]:
        return {
            "age": self.age,
            "location": self.location,
            "relationship": self.relationship,
            "kidsCount": self.kids_count,
            "petsCount": self.pets_count,
            "incomeSources": [source.to_dict() for source in self.income_sources],
        }


@dataclass(frozen=True)
class SpendingItem:
    id: str
    name: str = ""
    category: str = "Other"
    monthly_amount: float = 0.0
    need_or_want: NeedOrWant = "need"
    is_temporary: bool = False
    end_date: date | None = None

    def __post_init__(self) -> None:
        _set(self, "name", _text(self.name))
        _set(self, "category", _text(self.category) or "Other")
        _set(self, "monthly_amount", to_safe_number(self.monthly_amount))
        need_or_want = _text(self.need_or_want).lower()
        _set(self, "need_or_want", "want" if need_or_want == "want" else "need")
        _set(self, "is_temporary", _to_bool(self.is_temporary))
        _set(self, "end_date", parse_iso_date(self.end_date))

    @classmethod
    def from_dict(cls, data: Mapping[str, Any]) -> "SpendingItem":
        return cls(
            id=_text(_pick(data, "id")) or new_id(),
            name=_pick(data, "name", default=""),
            category=_pick(data, "category", default="Other"),
            monthly_amount=_pick(data, "monthlyAmount", "monthly", default=0.0),
            need_or_want=_pick(data, "needOrWant", "needWant", default="need"),
            is_temporary=_pick(data, "isTemporary", "temporary", default=False),
            end_date=_pick(data, "endDate", default=None),
        )

    def to_dict(self) -> dict[str, Any]:
        return {
            "id": self.id,
            "name": self.name,
            "category": self.category,
            "monthlyAmount": self.monthly_amount,
            "needOrWant": self.need_or_want,
            "isTemporary": self.is_temporary,
            "endDate": _iso(self.end_date),
        }


@dataclass(frozen=True)
class Goal:
    """Savings goal. Amounts are never negative."""

    id: str
    name: str = ""
    category: str = "Emergency"
    target_amount: float = 0.0
    current_amount: float = 0.0
    monthly_contribution: float = 0.0
    end_date: date | None = None

    def __post_init__(self) -> None:
        _set(self, "name", _text(self.name))
        _set(self, "category", _text(self.category) or "Other")
        _set(self, "target_amount", to_non_negative(self.target_amount))
        _set(self, "current_amount", to_non_negative(self.current_amount))
        _set(self, "monthly_contribution", to_non_negative(self.monthly_contribution))
        _set(self, "end_date", parse_iso_date(self.end_date))

    @classmethod
    def from_dict(cls, data: Mapping[str, Any]) -> "Goal":
        return cls(
            id=_text(_pick(data, "id")) or new_id(),
            name=_pick(data, "name", default=""),
            category=_pick(data, "category", default="Emergency"),
            target_amount=_pick(data, "targetAmount", "target", default=0.0),
            current_amount=_pick(data, "currentAmount", "current", default=0.0),
            monthly_contribution=_pick(data, "monthlyContribution", "monthly", default=0.0),
            end_date=_pick(data, "endDate", default=None),
        )

    def to_dict(self) -> dict[str, Any]:
        return {
            "id": self.id,
            "name": self.name,
            "category": self.category,
            "targetAmount": self.target_amount,
            "currentAmount": self.current_amount,
            "monthlyContribution": self.monthly_contribution,
            "endDate": _iso(self.end_date),
        }


@dataclass(frozen=True)
class Asset:
    id: str
    name: str = ""
    asset_type: str = "Investment"
    value: float = 0.0

    def __post_init__(self) -> None:
        _set(self, "name", _text(self.name))
        _set(self, "asset_type", _text(self.asset_type) or "Other")
        _set(self, "value", to_safe_number(self.value))

    @classmethod
    def from_dict(cls, data: Mapping[str, Any]) -> "Asset":
        return cls(
            id=_text(_pick(data, "id")) or new_id(),
            name=_pick(data, "name", default=""),
            asset_type=_pick(data, "type", "assetType", default="Investment"),
            value=_pick(data, "value", default=0.0),
        )

    def to_dict(self) -> dict[str, Any]:
        return {"id": self.id, "name": self.name, "type": self.asset_type, "value": self.value}


@dataclass(frozen=True)
class Liability:
    id: str
    name: str = ""
    balance: float = 0.0

    def __post_init__(self) -> None:
        _set(self, "name", _text(self.name))
        _set(self, "balance", to_safe_number(self.balance))

    @classmethod
    def from_dict(cls, data: Mapping[str, Any]) -> "Liability":
        return cls(
            id=_text(_pick(data, "id")) or new_id(),
            name=_pick(data, "name", default=""),
            balance=_pick(data, "balance", default=0.0),
        )

    def to_dict(self) -> dict[str, Any]:
        return {"id": self.id, "name": self.name, "balance": self.balance}


@dataclass(frozen=True)
class NetWorthSnapshot:
    period_key: str
    value: float = 0.0

    def __post_init__(self) -> None:
        _set(self, "period_key", _text(self.period_key))
        _set(self, "value", to_safe_number(self.value))

    @classmethod
    def from_dict(cls, data: Mapping[str, Any]) -> "NetWorthSnapshot":
        return cls(
            period_key=_pick(data, "periodKey", "t", default=""),
            value=_pick(data, "value", default=0.0),
        )

    def to_dict(self) -> dict[str, Any]:
        return {"periodKey": self.period_key, "value": self.value}
