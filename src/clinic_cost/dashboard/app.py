"""Clinic Visit Cost Calculator — Streamlit dashboard.

Layout: sidebar inputs → KPI cards → cost chart → points table.
Every widget change reruns the script, which recomputes the whole result.

Run with:
    streamlit run src/clinic_cost/dashboard/app.py
"""

from __future__ import annotations

import streamlit as st

from clinic_cost.config import ChartConfig, FeeSchedule, Scenario, SweepParameters
from clinic_cost.config.sweep import MAX_BASE_MONTHS, MAX_INTERVAL_DAYS, MAX_STEP_DAYS, MAX_TOTAL_DAYS
from clinic_cost.engine import run_calculator
from clinic_cost.api.narrative import build_kpis
from clinic_cost.dashboard.chart import build_cost_chart, points_to_frame
from clinic_cost.settings import configure_logging

configure_logging()

# ---------------------------------------------------------------------------
# Default instances — single source of truth for sidebar defaults
# ---------------------------------------------------------------------------
_DEF_F = FeeSchedule()
_DEF_S = SweepParameters()
_DEF_C = ChartConfig()

st.set_page_config(page_title="Clinic Visit Cost Calculator", page_icon="🏥", layout="wide")

# ---------------------------------------------------------------------------
# SIDEBAR — Inputs
# ---------------------------------------------------------------------------
st.sidebar.header("Inputs")

with st.sidebar.expander("Sweep", expanded=True):
    c1, c2 = st.columns(2)
    s_total = c1.number_input("Total days", 1, MAX_TOTAL_DAYS, _DEF_S.total_days, 30)
    s_max = c2.number_input("Max interval (days)", 1, MAX_INTERVAL_DAYS, _DEF_S.max_interval, 10)
    c1, c2 = st.columns(2)
    s_step = c1.number_input("Step (days)", 1, MAX_STEP_DAYS, _DEF_S.step_days, 1)
    s_months = c2.number_input("Threshold months", 1, MAX_BASE_MONTHS, _DEF_S.base_months, 1,
                               help="Repeat-visit pricing applies below this many months "
                                    "(× 30 days). Example: 3 → 90 days.")

with st.sidebar.expander("Fees (¥)", expanded=True):
    f_first = st.number_input("First-visit fee", 0.0, 1_000_000.0, _DEF_F.first_visit_fee, 10.0)
    f_repeat = st.number_input("Repeat-visit fee", 0.0, 1_000_000.0, _DEF_F.repeat_visit_fee, 10.0)
    f_other = st.number_input("Other fees per visit", 0.0, 1_000_000.0, _DEF_F.other_fee, 10.0)

with st.sidebar.expander("Chart"):
    anchor_on = st.checkbox("Pin cost axis to an interval", value=_DEF_C.scale_anchor_interval_days is not None)
    anchor = st.number_input("Anchor interval (days)", 1, MAX_INTERVAL_DAYS, _DEF_C.scale_anchor_interval_days or 20, 1,
                             disabled=not anchor_on)

scenario = Scenario(
    fees=FeeSchedule(first_visit_fee=f_first, repeat_visit_fee=f_repeat, other_fee=f_other),
    sweep=SweepParameters(total_days=s_total, max_interval=s_max, step_days=s_step, base_months=s_months),
    chart=ChartConfig(scale_anchor_interval_days=anchor if anchor_on else None),
)
result = run_calculator(scenario)

# ---------------------------------------------------------------------------
# MAIN — KPIs, chart, table
# ---------------------------------------------------------------------------
st.title("Clinic Visit Cost Calculator")
st.caption(
    f"Visits closer than {result.threshold_days} days apart pay the repeat-visit fee; "
    f"longer gaps pay the first-visit fee. Cumulative cost over {scenario.sweep.total_days} days "
    f"is shown for each visit interval, with the break-even point marked."
)

for warning in result.warnings:
    st.warning(warning)

for col, kpi in zip(st.columns(3), build_kpis(result)):
    col.metric(kpi.label, kpi.value)
    col.caption(kpi.caption)

st.plotly_chart(build_cost_chart(result), use_container_width=True)
st.caption(
    f"Dashed line: threshold at {result.threshold_days} days ({scenario.sweep.base_months} months). "
    f"Marker: break-even point."
)

with st.expander("Swept points"):
    df = points_to_frame(result.points)
    st.dataframe(df, use_container_width=True, hide_index=True)
    st.download_button(
        "Download CSV",
        df.to_csv(index=False).encode("utf-8"),
        file_name="clinic_visit_costs.csv",
        mime="text/csv",
    )

st.caption(
    "This tool gives rough estimates only. Actual fees depend on current "
    "reimbursement rules and individual circumstances."
)
