"""Streamlit demo UI for pacing-engine."""

from __future__ import annotations

import tempfile
from datetime import date
from pathlib import Path
from typing import Any

from pacing_engine.adapters import csv_adapter, json_adapter
from pacing_engine.constants import DEFAULT_PLAN_END_HOUR, DEFAULT_PLAN_START_HOUR
from pacing_engine.metrics import heatmap_cells
from pacing_engine.report import build_plan_report

DEMO_TASKS = "examples/sample_tasks.csv"
DEMO_GOALS = "examples/sample_goals.json"
HOUR_HEIGHT_PX = 56
HEATMAP_COLORS = ("#f1f5f9", "#c7d2fe", "#818cf8", "#4f46e5")


def _adapter_for(file_path: str):
    suffix = Path(file_path).suffix.lower()
    if suffix == ".csv":
        return csv_adapter
    if suffix == ".json":
        return json_adapter
    raise ValueError("Unsupported file type. Please use .csv or .json")


def _save_uploaded(uploaded_file) -> str:
    suffix = Path(uploaded_file.name).suffix.lower()
    with tempfile.NamedTemporaryFile(delete=False, suffix=suffix) as handle:
        handle.write(uploaded_file.getbuffer())
        return handle.name


def _timeline_html(rows: list[dict[str, Any]]) -> str:
    top_hour = DEFAULT_PLAN_START_HOUR
    total_height = (DEFAULT_PLAN_END_HOUR - top_hour) * HOUR_HEIGHT_PX
    cards = []
    for row in rows:
        start = row["start_minutes"]
        end = row["end_minutes"]
        top = (start - top_hour * 60) * HOUR_HEIGHT_PX / 60
        height = max(18, (end - start) * HOUR_HEIGHT_PX / 60)
        color = "#e0e7ff" if row["type"] == "study" else "#fce7f3"
        cards.append(
            f'<div style="position:absolute;top:{top}px;height:{height}px;left:{row["left"]};'
            f'width:{row["width"]};z-index:{row["z_index"]};background:{color};border:1px solid #cbd5e1;'
            f'border-radius:8px;padding:4px;font-size:12px;overflow:hidden;box-sizing:border-box">'
            f'<b>{row["start"]}</b> {row["title"]}</div>'
        )
    return (
        f'<div style="position:relative;height:{total_height}px;border-left:2px solid #e2e8f0">'
        + "".join(cards)
        + "</div>"
    )


def run_engine(tasks_path: str, goals_path: str | None, day: date, today: date) -> dict[str, Any]:
    """Load inputs and return a UI-friendly result payload."""

    tasks = _adapter_for(tasks_path).parse_tasks(tasks_path)
    goals = _adapter_for(goals_path).parse_goals(goals_path) if goals_path else []
    report = build_plan_report(tasks, goals, day=day, today=today)
    report["heatmap"] = heatmap_cells(tasks, today)
    report["task_count"] = len(tasks)
    return report


def main() -> None:
    import streamlit as st

    st.set_page_config(page_title="Pacing Engine Demo", layout="wide")
    st.title("Pacing Engine — Streamlit Demo")

    with st.sidebar:
        st.header("Controls")
        uploaded_tasks = st.file_uploader("Upload tasks", type=["csv", "json"])
        uploaded_goals = st.file_uploader("Upload goals", type=["csv", "json"])
        use_demo = st.checkbox("Load demo dataset", value=True)
        day = st.date_input("Day to lay out", value=date(2025, 1, 6))
        today = st.date_input("Today", value=date(2025, 1, 6))
        run = st.button("Run engine", type="primary")

    if not run:
        st.info("Configure inputs in the sidebar and click **Run engine**.")
        return

    try:
        if use_demo:
            tasks_path, goals_path = DEMO_TASKS, DEMO_GOALS
        elif uploaded_tasks is not None:
            tasks_path = _save_uploaded(uploaded_tasks)
            goals_path = _save_uploaded(uploaded_goals) if uploaded_goals is not None else None
        else:
            st.error("Please upload a tasks file or enable 'Load demo dataset'.")
            return

        result = run_engine(tasks_path, goals_path, day, today)
        st.success(f"Loaded {result['task_count']} tasks.")

        st.subheader("A) Goal Pacing")
        pacing = result["pacing"]
        if pacing is None:
            st.write("No active goal. Create a goal to see the required pace.")
        else:
            c1, c2, c3 = st.columns(3)
            c1.metric("Days left", pacing["days_left"])
            c2.metric("Progress", f"{pacing['progress_percent']}%")
            c3.metric("Hours", f"{pacing['current_hours']:.1f} / {pacing['target_hours']:.0f}")
            if pacing["is_warning"]:
                st.warning(pacing["message"])
            else:
                st.write(pacing["message"])

        st.subheader(f"B) Timeline for {result['day']}")
        if result["timeline"]:
            st.markdown(_timeline_html(result["timeline"]), unsafe_allow_html=True)
            st.table(result["timeline"])
        else:
            st.write("No tasks scheduled on this day.")

        st.subheader("C) Study History")
        cells = "".join(
            f'<div title="{cell["date_key"]} / {cell["minutes"]:.0f} min" style="grid-column:{cell["column"]};'
            f'grid-row:{cell["row"]};width:16px;height:16px;border-radius:4px;'
            f'background:{HEATMAP_COLORS[cell["level"]]}"></div>'
            for cell in result["heatmap"]
        )
        st.markdown(
            f'<div style="display:grid;grid-template-rows:repeat(7,16px);grid-auto-columns:16px;gap:4px">{cells}</div>',
            unsafe_allow_html=True,
        )
        h1, h2 = st.columns(2)
        h1.metric("Total study hours", result["history"]["total_hours"])
        h2.metric("Current streak (days)", result["history"]["current_streak"])
        st.write(result["history"]["insight"])

    except ValueError as exc:
        st.error(f"Input error: {exc}")


if __name__ == "__main__":
    main()
