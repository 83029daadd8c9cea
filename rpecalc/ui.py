from __future__ import annotations

from typing import Any, cast

from shiny import ui
from shinywidgets import output_widget

from .config import default_locale
from .i18n import LOCALES, get_dictionary, resolve_locale
from .utils import (
    DEFAULT_REPS,
    DEFAULT_RPE,
    DEFAULT_WEIGHT,
    FILTER_ALL,
    LIFT_TYPES,
    REP_CHOICES,
    RPE_MAX,
    RPE_MIN,
    RPE_STEP,
)

# Initial labels come from the default locale; the server relabels
# everything in place when the language changes.
_LOCALE = resolve_locale(default_locale())
_D = get_dictionary(_LOCALE)
_CALC = _D["calculator"]
_HIST = _D["history"]

_REP_CHOICES = {str(n): str(n) for n in REP_CHOICES}
_FILTER_CHOICES = {FILTER_ALL: _D["filterAll"], **{lt: lt for lt in LIFT_TYPES}}

app_ui = ui.page_navbar(
    ui.nav_panel(
        ui.span("🏋️ ", ui.output_text("nav_calculator", inline=True)),
        ui.tags.style(
            ".vb-center{ text-align:center; }\n"
            ".vb-center .value-box-title, .vb-center .value-box-value{ text-align:center; width:100%; }\n"
            ".vb-center .value-box-grid{ justify-content:center; }\n"
        ),
        ui.layout_columns(
            ui.card(
                ui.card_header(
                    ui.h4(ui.output_text("calc_title", inline=True), class_="mb-0"),
                    ui.output_text("calc_description"),
                    class_="bg-primary text-white"
                ),
                ui.input_select("lift_type", _CALC["liftType"], LIFT_TYPES, selected=LIFT_TYPES[0]),
                ui.input_numeric("weight", _CALC["weight"], DEFAULT_WEIGHT, min=1, step=2.5),
                ui.input_select("reps", _CALC["repetitions"], _REP_CHOICES, selected=str(DEFAULT_REPS)),
                ui.input_slider(
                    "rpe",
                    _CALC["rpe"],
                    min=RPE_MIN,
                    max=RPE_MAX,
                    value=DEFAULT_RPE,
                    step=RPE_STEP,
                    ticks=True,
                    width="100%"
                ),
                ui.value_box(
                    ui.output_text("estimate_label"),
                    ui.output_ui("estimate_value"),
                    showcase=ui.span("💪", style="font-size: 3rem;"),
                    theme="primary",
                    class_="vb-center"
                ),
                ui.input_action_button("btn_save", _CALC["saveToHistory"], class_="btn-primary w-100"),
            ),
            ui.card(
                ui.card_header(
                    ui.h4(ui.output_text("breakdown_title", inline=True), class_="mb-0"),
                    class_="bg-secondary text-white"
                ),
                output_widget("plot_breakdown"),
            ),
            col_widths=cast(Any, {"lg": [6, 6]}),
        ),
        ui.card(
            ui.card_header(
                ui.h4(ui.output_text("history_title", inline=True), class_="mb-0"),
                class_="bg-success text-white"
            ),
            ui.layout_columns(
                ui.input_select("history_filter", _HIST["liftType"], _FILTER_CHOICES, selected=FILTER_ALL),
                ui.input_selectize("history_pick", _HIST["selectEntry"], choices=[], width="100%"),
                ui.div(
                    ui.input_action_button("btn_delete", _HIST["deleteEntry"], class_="btn-danger"),
                    ui.input_action_button("btn_clear", _HIST["clear"], class_="btn-outline-secondary"),
                    class_="d-flex gap-2 align-items-end"
                ),
                col_widths=cast(Any, {"lg": [3, 5, 4]}),
            ),
            ui.output_ui("history_empty"),
            ui.output_data_frame("tbl_history"),
        ),
        value="calculator",
    ),
    ui.nav_spacer(),
    ui.nav_control(
        ui.input_select("lang", _D["language"], LOCALES, selected=_LOCALE, width="160px"),
    ),
    ui.nav_control(ui.input_dark_mode(id="theme")),
    title=ui.output_text("app_title", inline=True),
    window_title="RPE Calculator",
)
