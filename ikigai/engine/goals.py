# engine/goals.py
from __future__ import annotations

import math
from dataclasses import dataclass
from datetime import date
from typing import Iterable, List, Literal, Optional

from ..data_model.records import Goal
from .sanitize import clamp_unit, months_between, to_safe_number

GoalStatus = Literal["on_track", "behind"]

DEFAULT_HORIZON_MONTHS = 12


@dataclass(frozen=True)
class GoalProgress:
    goal_id: str
    months_remaining: Optional[int]
    progress_ratio: float
    projected_ratio: float
    required_monthly: Optional[float]
    status: Optional[GoalStatus]
    months_to_goal: Optional[int]
    footer: str


def months_remaining(goal: Goal, today: date) -> Optional[int]:
    if goal.end_date is None:
        return None
    return months_between(today, goal.end_date)


def progress_ratio(goal: Goal) -> float:
    """Share of the target already saved. Contributions are not counted."""
    target = to_safe_number(goal.target_amount)
    if target <= 0:
        return 0.0
    return clamp_unit(to_safe_number(goal.current_amount) / target)


def projected_ratio(goal: Goal, months_left: Optional[int], default_horizon: int = DEFAULT_HORIZON_MONTHS) -> float:
    """Linear projection of savings after ``months_left`` (or the default horizon) of contributions."""
    target = to_safe_number(goal.target_amount)
    if target <= 0:
        return 0.0
    horizon = months_left if months_left is not None else default_horizon
    saved = to_safe_number(goal.current_amount) + to_safe_number(goal.monthly_contribution) * horizon
    return clamp_unit(saved / target)


def required_monthly(goal: Goal, months_left: Optional[int]) -> Optional[float]:
    if not months_left or months_left <= 0:
        return None
    remaining = max(0.0, to_safe_number(goal.target_amount) - to_safe_number(goal.current_amount))
    return remaining / months_left


def goal_status(goal: Goal, months_left: Optional[int]) -> Optional[GoalStatus]:
    if to_safe_number(goal.target_amount) <= 0:
        return None
    required = required_monthly(goal, months_left)
    if required is None:
        return None
    return "on_track" if to_safe_number(goal.monthly_contribution) >= required else "behind"


def months_to_goal(goal: Goal) -> Optional[int]:
    target = to_safe_number(goal.target_amount)
    monthly = to_safe_number(goal.monthly_contribution)
    if target <= 0 or monthly <= 0:
        return None
    remaining = max(0.0, target - to_safe_number(goal.current_amount))
    return math.ceil(remaining / monthly)


def eta_text(goal: Goal) -> str:
    if to_safe_number(goal.target_amount) <= 0:
        return ""
    months = months_to_goal(goal)
    if months is None:
        return "Add a $/mo to estimate timing."
    return f"At this pace, you'll reach this in ~{months} months."


def goal_footer(goal: Goal, months_left: Optional[int]) -> str:
    if months_left is not None:
        return f"{months_left} months left"
    return eta_text(goal)


def evaluate_goal(goal: Goal, today: date, default_horizon: int = DEFAULT_HORIZON_MONTHS) -> GoalProgress:
    months_left = months_remaining(goal, today)
    return GoalProgress(
        goal_id=goal.id,
        months_remaining=months_left,
        progress_ratio=progress_ratio(goal),
        projected_ratio=projected_ratio(goal, months_left, default_horizon),
        required_monthly=required_monthly(goal, months_left),
        status=goal_status(goal, months_left),
        months_to_goal=months_to_goal(goal),
        footer=goal_footer(goal, months_left),
    )


def goal_progress(
    goals: Iterable[Goal],
    today: date,
    default_horizon: int = DEFAULT_HORIZON_MONTHS,
) -> List[GoalProgress]:
    return [evaluate_goal(goal, today, default_horizon) for goal in goals]
