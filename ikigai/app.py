"""Dash front end for the planner, served from a Flask app."""

from __future__ import annotations

from typing import Any, Dict, List

import dash
import dash_bootstrap_components as dbc
from dash import Input, Output, State, ctx, dcc, html
from flask import Flask, jsonify

from components.dashboard import (
    breakdown_figure,
    goal_cards,
    net_worth_figure,
    net_worth_tiles,
    retirement_panel,
    summary_tiles,
)
from components.sidebar import (
    build_onboarding,
    build_profile_form,
    collection_editor,
    onboarding_body,
    panel_styles,
    theme_switch,
    toggle,
)
from ikigai.config import PlannerSettings, get_settings
from ikigai.data_model import TableModel, build_table_models
from ikigai.data_model import store as ops
from ikigai.engine.history import history_frame
from ikigai.engine.state import PlannerState
from ikigai.log import configure_logging, get_logger

logger = get_logger(__name__)

EDITORS = (
    ("income_sources", "Income sources", "Add Income"),
    ("items", "Monthly spending", "Add Item"),
    ("goals", "Savings goals", "Add Goal"),
    ("assets", "Assets", "Add Asset"),
    ("liabilities", "Liabilities", "Add Liability"),
)

SPEND_VIEW_OPTIONS = [{"label": "Monthly", "value": "monthly"}, {"label": "Annual", "value": "annual"}]
RETIREMENT_VIEW_OPTIONS = [
    {"label": "Ongoing only", "value": "ongoing"},
    {"label": "Ongoing + temporary", "value": "all"},
]
FREQ_OPTIONS = [
    {"label": "Monthly", "value": "M"},
    {"label": "Quarterly", "value": "Q"},
    {"label": "Yearly", "value": "Y"},
]


def _collection(store: ops.RecordStore, key: str):
    if key == "income_sources":
        return store.profile.income_sources
    return getattr(store, key)


def collection_records(state: PlannerState, key: str):
    return _collection(state.store, key)


def add_blank_record(state: PlannerState, key: str, model: TableModel) -> None:
    blank = model.blank_row()
    settings = state.settings
    if key == "income_sources":
        state.apply(ops.add_income_source, blank["name"])
    elif key == "items":
        state.apply(ops.add_spending_item, blank["name"], category=blank["category"])
    elif key == "goals":
        state.apply(ops.add_goal, blank["name"], category=settings.goal_presets[0])
    elif key == "assets":
        state.apply(ops.add_asset, blank["name"], asset_type=settings.asset_types[0])
    elif key == "liabilities":
        state.apply(ops.add_liability, blank["name"])


def sync_table(state: PlannerState, key: str, model: TableModel, rows: List[Dict[str, Any]] | None) -> None:
    """Replace a collection with the rows of its edited table (edits, deletions, new rows)."""
    def _sync(store: ops.RecordStore) -> ops.RecordStore:
        return ops.replace_collection(store, key, model.rows_to_records(rows, _collection(store, key)))

    state.apply(_sync)


def build_layout(state: PlannerState, models: Dict[str, TableModel]):
    def _editor(key: str, title: str, add_label: str):
        model = models[key]
        return collection_editor(key, title, model, model.records_to_rows(collection_records(state, key)), add_label)

    editors = {key: _editor(key, title, add_label) for key, title, add_label in EDITORS}
    rate_pct = round(state.withdrawal_rate * 100, 2)
    profile_style, income_style = panel_styles(state.onboarding_step, state.store.onboarding_done)

    home = [
        build_onboarding(state.onboarding_step, state.store.onboarding_done),
        html.Div(build_profile_form(state.store.profile), id="profile-panel", style=profile_style),
        html.Div(editors["income_sources"], id="income-panel", style=income_style),
        dbc.Button("Restart guide", id="onboarding-restart", color="link", size="sm"),
    ]
    spending = [
        html.Div([html.Span("Show amounts: "), toggle("spend-view", SPEND_VIEW_OPTIONS, "monthly")], className="mb-2"),
        html.Div(id="summary-tiles"),
        editors["items"],
        dbc.Row(
            [
                dbc.Col(dcc.Graph(id="category-chart"), md=6),
                dbc.Col(dcc.Graph(id="need-want-chart"), md=6),
            ]
        ),
    ]
    goals = [editors["goals"], html.Div(id="goal-cards")]
    net_worth = [
        html.Div(id="net-worth-tiles"),
        dbc.Row([dbc.Col(editors["assets"], md=6), dbc.Col(editors["liabilities"], md=6)]),
        html.Div(
            [
                dbc.Button("Snapshot now", id="snapshot-btn", color="secondary", size="sm", className="me-3"),
                toggle("history-freq", FREQ_OPTIONS, "M"),
            ]
        ),
        dcc.Graph(id="net-worth-chart"),
    ]
    retirement = [
        toggle("retirement-view", RETIREMENT_VIEW_OPTIONS, "ongoing"),
        html.Div(id="retirement-panel", className="my-3"),
        dbc.Label("Withdrawal rate (%)"),
        dcc.Slider(
            id="withdrawal-rate",
            min=2.5,
            max=6,
            step=0.25,
            value=rate_pct,
            marks={v: f"{v}%" for v in (2.5, 3, 4, 5, 6)},
            tooltip={"placement": "bottom", "always_visible": False},
        ),
        html.Div(
            "Most people explore ~3%-5%. Higher rates lower the target but increase risk.",
            className="small text-muted",
        ),
    ]

    return dbc.Container(
        [
            dcc.Store(id="revision", data=0),
            dcc.Store(id="theme", data="light"),
            html.Div(
                [html.H2("Ikigai", style={"color": "#2f7f6f"}), theme_switch()],
                className="d-flex align-items-center my-3",
            ),
            dbc.Tabs(
                [
                    dbc.Tab(home, label="Home", tab_id="home"),
                    dbc.Tab(spending, label="Spending", tab_id="spending"),
                    dbc.Tab(goals, label="Goals", tab_id="goals"),
                    dbc.Tab(net_worth, label="Net Worth", tab_id="networth"),
                    dbc.Tab(retirement, label="Retirement", tab_id="retirement"),
                ],
                active_tab="home",
            ),
        ],
        fluid=True,
    )


def _register_editor(app: dash.Dash, state: PlannerState, key: str, model: TableModel) -> None:
    @app.callback(
        Output(f"{key}-table", "data"),
        Output("revision", "data", allow_duplicate=True),
        Input(f"add-{key}-btn", "n_clicks"),
        Input(f"{key}-table", "data_timestamp"),
        State(f"{key}-table", "data"),
        State("revision", "data"),
        prevent_initial_call=True,
    )
    def _on_edit(_clicks, _timestamp, rows, revision):
        if ctx.triggered_id == f"add-{key}-btn":
            add_blank_record(state, key, model)
        else:
            sync_table(state, key, model, rows)
        return model.records_to_rows(collection_records(state, key)), (revision or 0) + 1


def register_callbacks(app: dash.Dash, state: PlannerState, models: Dict[str, TableModel]) -> None:
    for key, _title, _label in EDITORS:
        _register_editor(app, state, key, models[key])

    @app.callback(
        Output("revision", "data", allow_duplicate=True),
        Input("profile-age", "value"),
        Input("profile-location", "value"),
        Input("profile-relationship", "value"),
        Input("profile-kids", "value"),
        Input("profile-pets", "value"),
        State("revision", "data"),
        prevent_initial_call=True,
    )
    def _on_profile(age, location, relationship, kids, pets, revision):
        state.apply(
            ops.update_profile,
            age=age,
            location=location,
            relationship=relationship,
            kids_count=kids,
            pets_count=pets,
        )
        return (revision or 0) + 1

    app.clientside_callback(
        """
        function(dark) {
            const theme = dark ? "dark" : "light";
            document.documentElement.setAttribute("data-bs-theme", theme);
            return theme;
        }
        """,
        Output("theme", "data"),
        Input("theme-switch", "value"),
    )

    @app.callback(
        Output("onboarding-body", "children"),
        Output("onboarding-collapse", "is_open"),
        Output("profile-panel", "style"),
        Output("income-panel", "style"),
        Input("onboarding-back", "n_clicks"),
        Input("onboarding-next", "n_clicks"),
        Input("onboarding-finish", "n_clicks"),
        Input("onboarding-restart", "n_clicks"),
        prevent_initial_call=True,
    )
    def _on_onboarding(_back, _next, _finish, _restart):
        trigger = ctx.triggered_id
        if trigger == "onboarding-back":
            state.previous_step()
        elif trigger == "onboarding-next":
            state.next_step()
        elif trigger == "onboarding-finish":
            state.finish_onboarding()
        elif trigger == "onboarding-restart":
            state.restart_onboarding()
        done = state.store.onboarding_done
        return (onboarding_body(state.onboarding_step), not done, *panel_styles(state.onboarding_step, done))

    @app.callback(
        Output("revision", "data", allow_duplicate=True),
        Input("snapshot-btn", "n_clicks"),
        State("revision", "data"),
        prevent_initial_call=True,
    )
    def _on_snapshot(_clicks, revision):
        state.snapshot_net_worth()
        return (revision or 0) + 1

    @app.callback(
        Output("revision", "data", allow_duplicate=True),
        Input("withdrawal-rate", "value"),
        State("revision", "data"),
        prevent_initial_call=True,
    )
    def _on_rate(rate_pct, revision):
        state.set_withdrawal_rate((rate_pct or 0) / 100)
        return (revision or 0) + 1

    @app.callback(
        Output("summary-tiles", "children"),
        Output("category-chart", "figure"),
        Output("need-want-chart", "figure"),
        Output("goal-cards", "children"),
        Output("net-worth-tiles", "children"),
        Output("net-worth-chart", "figure"),
        Output("retirement-panel", "children"),
        Input("revision", "data"),
        Input("spend-view", "value"),
        Input("history-freq", "value"),
        Input("retirement-view", "value"),
    )
    def _render(_revision, spend_view, freq, retirement_view):
        summary = state.summary()
        return (
            summary_tiles(summary, spend_view),
            breakdown_figure(summary.by_category, "Spending by category"),
            breakdown_figure(summary.by_need_or_want, "Needs vs wants"),
            goal_cards(state.store.goals, summary.goals),
            net_worth_tiles(summary),
            net_worth_figure(history_frame(state.store.net_worth_history), freq),
            retirement_panel(summary, retirement_view),
        )


def create_server() -> Flask:
    server = Flask(__name__)

    @server.get("/api/health")
    def healthcheck():
        return jsonify({"status": "ok"})

    return server


def create_app(state: PlannerState | None = None, settings: PlannerSettings | None = None) -> dash.Dash:
    settings = settings or get_settings()
    state = state or PlannerState(settings=settings)
    models = build_table_models(settings)

    app = dash.Dash(
        __name__,
        server=create_server(),
        external_stylesheets=[dbc.themes.FLATLY],
        title="Ikigai",
    )
    app.layout = lambda: build_layout(state, models)
    register_callbacks(app, state, models)
    return app


def main() -> None:
    settings = get_settings()
    configure_logging(settings.log_level, settings.log_json)
    app = create_app(settings=settings)
    logger.info("app_starting", host=settings.host, port=settings.port)
    app.run(host=settings.host, port=settings.port, debug=settings.debug)


if __name__ == "__main__":
    main()
