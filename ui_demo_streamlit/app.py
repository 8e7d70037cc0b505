"""Streamlit dashboard for alignment-engine."""

from __future__ import annotations

import tempfile
from datetime import date
from pathlib import Path
from typing import Any

from alignment_engine.adapters import csv_adapter, json_adapter
from alignment_engine.categorize import display_name
from alignment_engine.evaluator import compare_periods
from alignment_engine.lookup import range_lookup
from alignment_engine.report import build_stats_report, list_period_tasks
from alignment_engine.tasks import rescore_tasks

DEMO_DATASET = "examples/sample_tasks.csv"


def _parse_tasks_from_path(file_path: str) -> list:
    suffix = Path(file_path).suffix.lower()
    if suffix == ".csv":
        return csv_adapter.parse(file_path)
    if suffix == ".json":
        return json_adapter.parse(file_path)
    raise ValueError("Unsupported file type. Please use .csv or .json")


def _parse_uploaded(uploaded_file) -> list:
    suffix = Path(uploaded_file.name).suffix.lower()
    with tempfile.NamedTemporaryFile(delete=False, suffix=suffix) as handle:
        handle.write(uploaded_file.getbuffer())
        temp_path = handle.name
    return _parse_tasks_from_path(temp_path)


def _category_rows(summary) -> list[dict[str, Any]]:
    return [
        {
            "category": display_name(category),
            "total": stats.total,
            "completed": stats.completed,
            "points": stats.points,
        }
        for category, stats in sorted(summary.category_stats.items(), key=lambda item: item[0].value)
    ]


def run_engine(tasks: list, period: str, reference: date, rescore: bool = True) -> dict[str, Any]:
    """Run the report pipeline and return a UI-friendly result payload."""

    if rescore:
        tasks = rescore_tasks(tasks)
    lookup = range_lookup(tasks)
    report = build_stats_report(period, reference, lookup)
    period_tasks = list_period_tasks(period, reference, lookup)

    return {
        "report": report,
        "comparison": compare_periods(report.current, report.previous),
        "categories": _category_rows(report.current.summary),
        "tasks": [task.as_dict() for task in period_tasks],
        "trend": {
            "label": [bucket.label for bucket in report.historical],
            "points": [bucket.summary.total_points for bucket in report.historical],
            "alignment": [bucket.summary.average_alignment for bucket in report.historical],
            "success_rate": [bucket.summary.success_rate for bucket in report.historical],
        },
    }


def main() -> None:
    import streamlit as st

    st.set_page_config(page_title="Task Alignment Dashboard", layout="wide")
    st.title("Task Alignment Dashboard")

    with st.sidebar:
        st.header("Controls")
        uploaded = st.file_uploader("Upload tasks", type=["csv", "json"])
        use_demo = st.checkbox("Load demo dataset", value=True)
        period = st.selectbox("Period", options=["week", "month"], index=0)
        reference = st.date_input("Reference date", value=date(2025, 1, 8))
        rescore = st.checkbox("Recompute scores", value=True)
        run = st.button("Build report", type="primary")

    if not run:
        st.info("Configure inputs in the sidebar and click **Build report**.")
        return

    try:
        if use_demo:
            tasks = csv_adapter.parse(DEMO_DATASET)
            data_source = f"demo dataset ({DEMO_DATASET})"
        elif uploaded is not None:
            tasks = _parse_uploaded(uploaded)
            data_source = f"uploaded file ({uploaded.name})"
        else:
            st.error("Please upload a CSV/JSON file or enable 'Load demo dataset'.")
            return

        if not tasks:
            st.error("No tasks were found in the selected input.")
            return

        result = run_engine(tasks, period, reference, rescore=rescore)
        report = result["report"]
        current = report.current.summary
        comparison = result["comparison"]

        st.success(f"Loaded {len(tasks)} tasks from {data_source}.")

        st.subheader(f"A) This {period}")
        c1, c2, c3, c4 = st.columns(4)
        c1.metric("Total points", current.total_points, f"{comparison['points_change_pct']:.1f}%")
        c2.metric("Completed", f"{current.completed_tasks}/{current.total_tasks}", comparison["completed_change"])
        c3.metric("Success rate", f"{current.success_rate}%", comparison["success_rate_change"])
        c4.metric("Avg alignment", current.average_alignment, comparison["alignment_change"])

        st.subheader("B) Categories")
        if result["categories"]:
            st.table(result["categories"])
        else:
            st.write("No tasks scheduled in this period.")

        st.subheader("C) Trend")
        trend = result["trend"]
        st.line_chart(trend, x="label", y=["points", "alignment", "success_rate"])

        st.subheader("D) Tasks")
        st.dataframe(result["tasks"])

    except ValueError as exc:
        st.error(f"Input error: {exc}")
    except Exception:
        st.error("Something went wrong while building the report. Please verify the input format.")


if __name__ == "__main__":
    main()
