"""Read-only dashboard pieces built from a :class:`DashboardSummary`."""
from __future__ import annotations

from typing import Iterable, Sequence

import dash_bootstrap_components as dbc
import pandas as pd
import plotly.graph_objects as go
from dash import html

from ikigai.data_model import Goal
from ikigai.engine.goals import GoalProgress
from ikigai.engine.history import aggregate_history
from ikigai.engine.metrics import BreakdownRow, DashboardSummary, spend_for_view
from ikigai.engine.sanitize import format_money, format_pct

BRAND_GREEN = "#2f7f6f"
BRAND_BLUE = "#3a9fbf"

CATEGORY_COLORS = {
    "Housing": "#7aa6a1",
    "Car / Transportation": "#a0a9b8",
    "Food & Drink": "#d1a06a",
    "Utilities": "#8aa4c6",
    "Insurance": "#93b8a0",
    "Health & Fitness": "#b88fb7",
    "Personal Care": "#c6a48a",
    "Entertainment": "#caa1a7",
    "Household": "#9fb0a2",
    "Clothing": "#a8a6c7",
    "Subscriptions": "#b1b1b1",
    "Travel & Vacation": "#7fb6c4",
    "Education": "#b6a07f",
    "Donations": "#9ab6c4",
    "Debt payments": "#c08f7e",
    "Fees": "#9e9e9e",
    "Pet": "#a7b98b",
    "Other": "#8f9aa7",
    "Need": BRAND_GREEN,
    "Want": BRAND_BLUE,
}
FALLBACK_COLOR = "#8f9aa7"


def _tile(title: str, value: str, note: str | None = None):
    body = [html.Div(title, className="small text-muted"), html.H4(value, className="mb-0")]
    if note:
        body.append(html.Div(note, className="small text-muted"))
    return dbc.Col(dbc.Card(body, body=True), md=3, className="mb-2")


def summary_tiles(summary: DashboardSummary, spend_view: str = "monthly"):
    suffix = "/yr" if spend_view == "annual" else "/mo"
    deficit_note = None
    if summary.deficit_monthly > 0:
        deficit_note = f"Over budget by {format_money(spend_for_view(summary.deficit_monthly, spend_view))}{suffix}"
    return dbc.Row(
        [
            _tile("Income", format_money(spend_for_view(summary.income_monthly, spend_view)) + suffix),
            _tile("Spending", format_money(spend_for_view(summary.spend_all_monthly, spend_view)) + suffix),
            _tile(
                "Left over",
                format_money(spend_for_view(summary.leftover_monthly, spend_view)) + suffix,
                deficit_note,
            ),
            _tile("Savings rate", format_pct(summary.savings_rate, 1)),
        ]
    )


def breakdown_figure(rows: Sequence[BreakdownRow], title: str) -> go.Figure:
    fig = go.Figure()
    if rows:
        fig.add_trace(
            go.Pie(
                labels=[row.name for row in rows],
                values=[row.value for row in rows],
                hole=0.55,
                marker={"colors": [CATEGORY_COLORS.get(row.name, FALLBACK_COLOR) for row in rows]},
                sort=False,
            )
        )
    fig.update_layout(title=title, margin={"l": 10, "r": 10, "t": 40, "b": 10}, showlegend=True)
    return fig


def goal_cards(goals: Iterable[Goal], progress: Iterable[GoalProgress]):
    by_id = {item.goal_id: item for item in progress}
    cards = []
    for goal in goals:
        gp = by_id.get(goal.id)
        if gp is None:
            continue
        header = [html.Strong(goal.name)]
        if gp.status is not None:
            on_track = gp.status == "on_track"
            header += [" ", dbc.Badge("On track" if on_track else "Behind", color="success" if on_track else "warning")]
        cards.append(
            dbc.Col(
                dbc.Card(
                    [
                        html.Div(header),
                        html.Div(f"Category: {goal.category}", className="small text-muted"),
                        dbc.Progress(
                            [
                                dbc.Progress(value=gp.progress_ratio * 100, color="success", bar=True),
                                dbc.Progress(
                                    value=max(0.0, gp.projected_ratio - gp.progress_ratio) * 100,
                                    color="info",
                                    bar=True,
                                ),
                            ],
                            className="my-2",
                        ),
                        html.Div(
                            f"{format_pct(gp.progress_ratio, 0)} saved, "
                            f"{format_pct(gp.projected_ratio, 0)} projected",
                            className="small",
                        ),
                        html.Div(gp.footer, className="small text-muted"),
                    ],
                    body=True,
                ),
                md=4,
                className="mb-2",
            )
        )
    if not cards:
        return html.P("No goals yet. Add one above.", className="text-muted")
    return dbc.Row(cards)


def net_worth_figure(history: pd.DataFrame, freq: str = "M") -> go.Figure:
    fig = go.Figure()
    frame = aggregate_history(history, freq)
    if not frame.empty:
        fig.add_trace(
            go.Scatter(
                x=frame["Period"],
                y=frame["NetWorth"],
                mode="lines+markers",
                line={"color": BRAND_GREEN},
                name="Net worth",
            )
        )
    fig.update_layout(title="Net worth history", margin={"l": 10, "r": 10, "t": 40, "b": 10})
    return fig


def net_worth_tiles(summary: DashboardSummary):
    return dbc.Row(
        [
            _tile("Assets", format_money(summary.total_assets)),
            _tile("Liabilities", format_money(summary.total_liabilities)),
            _tile("Net worth", format_money(summary.net_worth)),
        ]
    )


def retirement_panel(summary: DashboardSummary, view: str = "ongoing"):
    label = "all spending" if view == "all" else "ongoing spending"
    return html.Div(
        [
            html.Div(f"Target nest egg ({label})", className="small text-muted"),
            html.H2(format_money(summary.retirement.for_view(view))),
            html.Div(f"Uses withdrawal rate {format_pct(summary.withdrawal_rate, 2)}.", className="small text-muted"),
        ]
    )
