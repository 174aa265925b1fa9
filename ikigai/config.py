"""Application settings.

Values come from ``IKIGAI_``-prefixed environment variables or a ``.env`` file.
List fields accept JSON, e.g. ``IKIGAI_SPENDING_CATEGORIES='["Housing", "Gifts"]'``.
"""
from __future__ import annotations

from functools import lru_cache
from typing import List

from pydantic import Field, field_validator
from pydantic_settings import BaseSettings, SettingsConfigDict

DEFAULT_SPENDING_CATEGORIES: List[str] = [
    "Housing",
    "Car / Transportation",
    "Food & Drink",
    "Utilities",
    "Insurance",
    "Health & Fitness",
    "Personal Care",
    "Entertainment",
    "Household",
    "Clothing",
    "Subscriptions",
    "Travel & Vacation",
    "Education",
    "Donations",
    "Debt payments",
    "Fees",
    "Pet",
    "Other",
]

DEFAULT_GOAL_PRESETS: List[str] = [
    "Emergency",
    "Vacation",
    "Occasion",
    "Home down payment",
    "Car down payment",
    "Education",
    "Other",
]

DEFAULT_ASSET_TYPES: List[str] = ["Investment", "Real Estate", "Cash", "Vehicle", "Other"]


class PlannerSettings(BaseSettings):
    """Planner configuration."""

    model_config = SettingsConfigDict(
        env_prefix="IKIGAI_",
        env_file=".env",
        env_file_encoding="utf-8",
        extra="ignore",
    )

    storage_path: str = Field(
        default="user_data/ikigai_state.json",
        description="JSON file holding the persisted planner state",
    )
    withdrawal_rate: float = Field(
        default=0.04,
        ge=0.0,
        le=1.0,
        description="Initial safe withdrawal rate used for the retirement target",
    )
    history_limit: int = Field(
        default=24,
        ge=1,
        description="Number of monthly net worth snapshots kept",
    )
    default_goal_horizon_months: int = Field(
        default=12,
        ge=0,
        description="Projection horizon for goals without an end date",
    )

    spending_categories: List[str] = Field(default_factory=lambda: list(DEFAULT_SPENDING_CATEGORIES))
    goal_presets: List[str] = Field(default_factory=lambda: list(DEFAULT_GOAL_PRESETS))
    asset_types: List[str] = Field(default_factory=lambda: list(DEFAULT_ASSET_TYPES))

    host: str = Field(default="127.0.0.1")
    port: int = Field(default=8050, ge=1, le=65535)
    debug: bool = Field(default=False)
    log_level: str = Field(default="INFO")
    log_json: bool = Field(default=False, description="Render logs as JSON lines")

    @field_validator("spending_categories", "goal_presets", "asset_types")
    @classmethod
    def _strip_labels(cls, values: List[str]) -> List[str]:
        labels: List[str] = []
        for value in values:
            label = str(value).strip()
            if label and label not in labels:
                labels.append(label)
        if "Other" not in labels:
            labels.append("Other")
        return labels

    @field_validator("log_level")
    @classmethod
    def _upper_level(cls, value: str) -> str:
        return str(value).strip().upper() or "INFO"


@lru_cache
def get_settings() -> PlannerSettings:
    return PlannerSettings()
