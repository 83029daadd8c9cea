from __future__ import annotations

import sqlite3
from typing import Any, Callable, Dict, List, Tuple

import plotly.graph_objects as go
from shiny import Inputs, Outputs, Session, reactive, render, ui
from shinywidgets import render_plotly

from .config import app_config
from .estimator import EstimationMode, OneRepMaxEstimator
from .i18n import format_date, get_dictionary
from .logger import logger
from .models import HistoryEntry
from .repos import HistoryStore, storage_factory
from .utils import FILTER_ALL, LIFT_TYPES, normalize_decimal


def guarded_write(action: Callable[[], Any], failure_message: str) -> Tuple[bool, Any]:
    """Run a history write, turning storage errors into an error notification.

    Returns (True, result) on success and (False, None) when the storage
    rejected the write; the in-memory history is unchanged in that case.
    """
    try:
        return True, action()
    except sqlite3.Error as e:
        logger.error(f"History write failed: {e}", exc_info=True)
        ui.notification_show(f"{failure_message} ({e})", type="error")
        return False, None


def server(input: Inputs, output: Outputs, session: Session):
    cfg = app_config()
    estimator = OneRepMaxEstimator(EstimationMode.parse(cfg.estimation_mode))
    store = HistoryStore(storage_factory(), slot=cfg.history_slot)
    history = reactive.value(store.load())

    logger.info(
        "Session started: mode=%s slot=%s entries=%d",
        estimator.mode.value,
        store.slot,
        len(store),
    )

    def _refresh_history():
        history.set(store.entries)

    @reactive.calc
    def dictionary():
        return get_dictionary(input.lang())

    # Current inputs; reps arrive as strings from the select
    @reactive.calc
    def current_weight() -> float:
        return normalize_decimal(input.weight())

    @reactive.calc
    def current_reps() -> int:
        try:
            return int(input.reps())
        except (TypeError, ValueError):
            return 1

    @reactive.calc
    def one_rep_max() -> float:
        return estimator.estimate(current_weight(), current_reps(), float(input.rpe()))

    @reactive.calc
    def filtered_history() -> List[HistoryEntry]:
        history()
        return store.filter(input.history_filter() or FILTER_ALL)

    # Relabel inputs in place when the language changes; values are kept
    @reactive.effect
    def _apply_labels():
        d = dictionary()
        calc = d["calculator"]
        hist = d["history"]
        ui.update_select("lift_type", label=calc["liftType"])
        ui.update_numeric("weight", label=calc["weight"])
        ui.update_select("reps", label=calc["repetitions"])
        ui.update_slider("rpe", label=calc["rpe"])
        ui.update_action_button("btn_save", label=calc["saveToHistory"])
        ui.update_action_button("btn_delete", label=hist["deleteEntry"])
        ui.update_action_button("btn_clear", label=hist["clear"])
        ui.update_select("lang", label=d["language"])
        with reactive.isolate():
            selected = input.history_filter() or FILTER_ALL
        ui.update_select(
            "history_filter",
            label=hist["liftType"],
            choices={FILTER_ALL: d["filterAll"], **{lt: lt for lt in LIFT_TYPES}},
            selected=selected,
        )

    def _pick_choices(entries: List[HistoryEntry]) -> Dict[str, str]:
        lang = input.lang()
        out = {}
        for e in entries:
            label = " | ".join([
                format_date(e.date, lang),
                e.lift_type or "—",
                f"{e.weight:g} × {e.reps} @ {e.rpe:g}",
                f"{e.one_rep_max:.2f}",
            ])
            out[e.id] = label
        return out

    @reactive.effect
    def _refresh_pick():
        d = dictionary()
        ui.update_selectize(
            "history_pick",
            label=d["history"]["selectEntry"],
            choices=_pick_choices(filtered_history()),
        )

    # Actions
    @reactive.effect
    @reactive.event(input.btn_save)
    def _save():
        d = dictionary()
        entry = store.create_entry(
            weight=current_weight(),
            reps=current_reps(),
            rpe=float(input.rpe()),
            lift_type=input.lift_type(),
            one_rep_max=one_rep_max(),
        )
        ok, appended = guarded_write(lambda: store.append(entry), d["storageError"])
        if not ok:
            return
        if not appended:
            ui.notification_show(d["calculator"]["invalidInput"], type="warning")
            return
        _refresh_history()
        ui.notification_show(d["calculator"]["saved"])

    @reactive.effect
    @reactive.event(input.btn_delete)
    def _delete():
        d = dictionary()
        sel = input.history_pick()
        if isinstance(sel, (list, tuple)):
            sel = sel[0] if sel else None
        if not sel:
            ui.notification_show(d["history"]["pickEntry"], type="warning")
            return
        ok, _ = guarded_write(lambda: store.remove_by_id(str(sel)), d["storageError"])
        if not ok:
            return
        _refresh_history()
        ui.notification_show(d["history"]["deleted"])

    @reactive.effect
    @reactive.event(input.btn_clear)
    def _clear():
        d = dictionary()
        ok, _ = guarded_write(store.clear, d["storageError"])
        if not ok:
            return
        _refresh_history()
        ui.notification_show(d["history"]["cleared"])

    # Text outputs
    @render.text
    def app_title():
        return dictionary()["calculator"]["title"]

    @render.text
    def nav_calculator():
        return dictionary()["calculatorTab"]

    @render.text
    def calc_title():
        return dictionary()["calculator"]["title"]

    @render.text
    def calc_description():
        return dictionary()["calculator"]["description"]

    @render.text
    def estimate_label():
        return dictionary()["calculator"]["estimatedOneRepMax"]

    @render.ui
    def estimate_value():
        return ui.span(f"{one_rep_max():.2f}", style="font-size: 2.5rem; font-weight: 600;")

    @render.text
    def breakdown_title():
        return dictionary()["calculator"]["breakdown"]

    @render.text
    def history_title():
        return dictionary()["history"]["title"]

    # Charts & tables
    @render_plotly
    def plot_breakdown():
        values = estimator.breakdown(current_weight(), current_reps())
        fig = go.Figure()
        fig.add_trace(go.Bar(
            x=list(values.keys()),
            y=list(values.values()),
            marker=dict(color='#0d6efd'),
            hovertemplate='<b>%{x}</b><br>1RM: %{y:.2f}<extra></extra>'
        ))
        fig.add_hline(
            y=one_rep_max(),
            line=dict(color='#dc3545', dash='dash', width=2),
            annotation_text=f"{estimator.mode.value}: {one_rep_max():.2f}",
        )
        fig.update_layout(
            template='plotly_white',
            autosize=True,
            margin=dict(l=50, r=50, t=30, b=50),
            yaxis_title="1RM",
            showlegend=False,
        )
        return fig

    @render.ui
    def history_empty():
        if filtered_history():
            return ui.div()
        return ui.div(
            dictionary()["history"]["recordsFound"],
            class_="text-center text-muted py-3"
        )

    @render.data_frame
    def tbl_history():
        d = dictionary()
        hist = d["history"]
        lang = input.lang()
        headers = {
            "date": hist["date"],
            "liftType": hist["liftType"],
            "weight": hist["weight"],
            "reps": hist["reps"],
            "rpe": hist["rpe"],
            "oneRepMax": hist["oneRepMax"],
        }
        history()
        df = store.read_df(input.history_filter() or FILTER_ALL)
        if not df.empty:
            df["date"] = df["date"].apply(lambda v: format_date(v, lang))
        return df[list(headers.keys())].rename(columns=headers)
