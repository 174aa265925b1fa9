# components/sidebar.py
from __future__ import annotations

from typing import Any, List

import dash_bootstrap_components as dbc
from dash import dash_table, dcc, html
from dash.dash_table import FormatTemplate

from ikigai.data_model import Profile, TableModel
from ikigai.engine.state import ONBOARDING_STEPS

ONBOARDING_COPY = {
    1: ("About you", "Fill in a few basics below. Everything stays on this machine."),
    2: ("Your income", "List every monthly income source below. Add rows for side income."),
    3: ("Your spending", "Open the Spending tab and add what you spend each month, marked need or want."),
    4: ("You're set", "Goals, Net Worth and Retirement now update as you edit."),
}


def table_config(model: TableModel):
    columns = []
    dropdowns = {}
    tooltips = {}
    for col in model.columns:
        col_def = {"name": col.label, "id": col.field}
        if col.kind == "number":
            col_def["type"] = "numeric"
            if col.format == "money":
                col_def["format"] = FormatTemplate.money(2)
        if col.kind == "select" and col.options:
            col_def["presentation"] = "dropdown"
            dropdowns[col.field] = col.dropdown_options()
        if col.help:
            tooltips[col.field] = col.help
        columns.append(col_def)
    return columns, dropdowns, tooltips


def editable_table(id_value: str, model: TableModel, data: List[dict[str, Any]]):
    columns, dropdowns, tooltips = table_config(model)
    table = dash_table.DataTable(
        id=id_value,
        data=data,
        columns=columns,
        editable=True,
        row_deletable=True,
        tooltip_header=tooltips,
        style_table={"height": "auto", "overflowY": "visible"},
        style_header={"backgroundColor": "#2f7f6f", "color": "#fff", "fontWeight": "bold"},
        style_cell={"textAlign": "left", "padding": "6px"},
        dropdown={col: {"options": opts} for col, opts in dropdowns.items()},
        fill_width=True,
    )
    return html.Div(table, style={"maxHeight": "320px", "overflowY": "auto"})


def collection_editor(key: str, title: str, model: TableModel, data: List[dict[str, Any]], add_label: str):
    return dbc.Card(
        [
            html.H5(title, className="card-title"),
            editable_table(f"{key}-table", model, data),
            dbc.Button(add_label, id=f"add-{key}-btn", color="secondary", size="sm", className="mt-2"),
        ],
        body=True,
        className="mb-3",
    )


RELATIONSHIP_OPTIONS = ["Single", "Partnered", "Married"]

# Onboarding step that shows each Home panel; once onboarding is done every panel is visible.
PANEL_STEPS = {"profile-panel": 1, "income-panel": 2}


def relationship_options(current: str) -> List[dict[str, str]]:
    values = list(RELATIONSHIP_OPTIONS)
    if current and current not in values:
        values.append(current)
    return [{"label": "Choose…", "value": ""}] + [{"label": value, "value": value} for value in values]


def build_profile_form(profile: Profile):
    def _field(label: str, id_value: str, value: Any, kind: str = "text"):
        return dbc.Col(
            [dbc.Label(label), dbc.Input(id=id_value, value=value, type=kind, debounce=True)],
            md=4,
        )

    return dbc.Card(
        [
            html.H5("Profile", className="card-title"),
            dbc.Row(
                [
                    _field("Age", "profile-age", profile.age),
                    _field("Location", "profile-location", profile.location),
                    dbc.Col(
                        [
                            dbc.Label("Relationship"),
                            dbc.Select(
                                id="profile-relationship",
                                options=relationship_options(profile.relationship),
                                value=profile.relationship,
                            ),
                        ],
                        md=4,
                    ),
                ]
            ),
            dbc.Row(
                [
                    _field("Kids", "profile-kids", profile.kids_count, kind="number"),
                    _field("Pets", "profile-pets", profile.pets_count, kind="number"),
                ],
                className="mt-2",
            ),
        ],
        body=True,
        className="mb-3",
    )


def onboarding_body(step: int):
    step = max(1, min(ONBOARDING_STEPS, step))
    title, hint = ONBOARDING_COPY[step]
    return [
        html.Div(f"Step {step} of {ONBOARDING_STEPS}", className="small text-muted"),
        html.H4(title),
        html.P(hint),
        dbc.Progress(value=step * 100 // ONBOARDING_STEPS, className="mb-2"),
    ]


def panel_styles(step: int, done: bool) -> List[dict[str, str]]:
    """Display styles for the Home panels, in ``PANEL_STEPS`` order."""
    return [
        {} if done or step == panel_step else {"display": "none"}
        for panel_step in PANEL_STEPS.values()
    ]


def theme_switch(dark: bool = False):
    return dbc.Switch(id="theme-switch", label="Dark mode", value=dark, className="ms-auto")


def build_onboarding(step: int, done: bool):
    return dbc.Collapse(
        dbc.Card(
            [
                html.Div(onboarding_body(step), id="onboarding-body"),
                dbc.ButtonGroup(
                    [
                        dbc.Button("Back", id="onboarding-back", color="secondary", size="sm"),
                        dbc.Button("Next", id="onboarding-next", color="primary", size="sm"),
                        dbc.Button("Finish", id="onboarding-finish", color="success", size="sm"),
                    ]
                ),
            ],
            body=True,
            className="mb-3",
        ),
        id="onboarding-collapse",
        is_open=not done,
    )


def toggle(id_value: str, options: List[dict[str, str]], value: str):
    return dcc.RadioItems(
        id=id_value,
        options=options,
        value=value,
        inline=True,
        inputStyle={"marginRight": "4px", "marginLeft": "10px"},
    )


__all__ = [
    "PANEL_STEPS",
    "RELATIONSHIP_OPTIONS",
    "ONBOARDING_COPY",
    "build_onboarding",
    "build_profile_form",
    "collection_editor",
    "editable_table",
    "onboarding_body",
    "panel_styles",
    "relationship_options",
    "table_config",
    "theme_switch",
    "toggle",
]
