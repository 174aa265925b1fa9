from datetime import date

from ikigai.data_model import Goal
from ikigai.engine.goals import (
    eta_text,
    evaluate_goal,
    goal_progress,
    months_to_goal,
    progress_ratio,
    projected_ratio,
)

TODAY = date(2024, 1, 15)


def _goal(**kwargs):
    values = {"id": "g1", "name": "Emergency fund", "target_amount": 1000, "current_amount": 200}
    values.update(kwargs)
    return Goal(**values)


def test_goal_with_deadline_and_enough_contribution_is_on_track():
    goal = _goal(monthly_contribution=100, end_date="2024-09-15")

    progress = evaluate_goal(goal, TODAY)

    assert progress.months_remaining == 8
    assert progress.progress_ratio == 0.2
    assert progress.required_monthly == 100.0
    assert progress.status == "on_track"
    assert progress.projected_ratio == 1.0
    assert progress.footer == "8 months left"


def test_goal_with_deadline_and_low_contribution_is_behind():
    goal = _goal(monthly_contribution=50, end_date="2024-09-15")

    progress = evaluate_goal(goal, TODAY)

    assert progress.required_monthly == 100.0
    assert progress.status == "behind"
    assert progress.projected_ratio == 0.6


def test_goal_without_deadline_projects_default_horizon():
    goal = _goal(target_amount=1200, current_amount=0, monthly_contribution=100)

    progress = evaluate_goal(goal, TODAY)

    assert progress.months_remaining is None
    assert progress.status is None
    assert progress.projected_ratio == 1.0
    assert progress.months_to_goal == 12
    assert progress.footer == "At this pace, you'll reach this in ~12 months."


def test_past_deadline_yields_zero_months_and_no_status():
    goal = _goal(monthly_contribution=100, end_date="2023-06-01")

    progress = evaluate_goal(goal, TODAY)

    assert progress.months_remaining == 0
    assert progress.status is None
    assert progress.required_monthly is None
    assert progress.projected_ratio == progress.progress_ratio == 0.2


def test_zero_target_has_no_progress_status_or_eta():
    goal = _goal(target_amount=0, current_amount=50, monthly_contribution=10, end_date="2024-06-01")

    progress = evaluate_goal(goal, TODAY)

    assert progress.progress_ratio == 0.0
    assert progress.projected_ratio == 0.0
    assert progress.status is None
    assert eta_text(goal) == ""
    assert months_to_goal(goal) is None


def test_eta_without_contribution_cannot_estimate():
    goal = _goal(monthly_contribution=0)

    assert months_to_goal(goal) is None
    assert eta_text(goal) == "Add a $/mo to estimate timing."


def test_eta_rounds_months_up():
    goal = _goal(monthly_contribution=300)

    assert months_to_goal(goal) == 3


def test_progress_ignores_contribution_and_clamps():
    overfunded = _goal(current_amount=5000, monthly_contribution=999)

    assert progress_ratio(overfunded) == 1.0
    assert projected_ratio(overfunded, None) == 1.0


def test_negative_and_garbage_inputs_are_sanitized():
    goal = Goal(id="g", name="x", target_amount="-100", current_amount="abc", monthly_contribution=None)

    progress = evaluate_goal(goal, TODAY)

    assert goal.target_amount == 0.0
    assert progress.progress_ratio == 0.0
    assert progress.status is None


def test_goal_progress_keeps_goal_order():
    goals = [_goal(id="a"), _goal(id="b"), _goal(id="c")]

    assert [p.goal_id for p in goal_progress(goals, TODAY)] == ["a", "b", "c"]
