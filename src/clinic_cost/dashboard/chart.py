"""Chart builder — CalculationResult → plotly figure.

Kept apart from the Streamlit script so the figure can be built (and tested)
without a running Streamlit session.
"""

from __future__ import annotations

from typing import Iterable

import pandas as pd
import plotly.graph_objects as go

from clinic_cost.models.results import CalculationResult, PricePoint

LINE_COLOR = "#6c5ce7"
MARKER_COLOR = "#e17055"
THRESHOLD_COLOR = "#636e72"


def points_to_frame(points: Iterable[PricePoint]) -> pd.DataFrame:
    """Swept points as a table: one row per interval."""
    return pd.DataFrame(
        [p.model_dump() for p in points],
        columns=["interval_days", "total_cost", "visit_count"],
    )


def build_cost_chart(result: CalculationResult) -> go.Figure:
    """Line of total cost vs. interval, threshold line, break-even marker.

    The cost axis is pinned to ``[0, scale_anchor_cost]`` when an anchor cost
    is available; otherwise plotly autoscales.
    """
    df = points_to_frame(result.points)

    fig = go.Figure()
    fig.add_trace(go.Scatter(
        x=df["interval_days"],
        y=df["total_cost"],
        mode="lines",
        name="Cumulative cost",
        line=dict(color=LINE_COLOR, width=2),
        customdata=df["visit_count"],
        hovertemplate="%{x} days<br>¥%{y:,.0f}<br>%{customdata} visits<extra></extra>",
    ))

    fig.add_vline(
        x=result.threshold_days,
        line_dash="dash",
        line_color=THRESHOLD_COLOR,
        annotation_text=f"Threshold {result.threshold_days} d",
        annotation_position="top right",
    )

    be = result.break_even
    if be is not None:
        fig.add_trace(go.Scatter(
            x=[be.interval_days],
            y=[be.total_cost],
            mode="markers",
            name="Break-even",
            marker=dict(color=MARKER_COLOR, size=10),
            hovertemplate="Break-even: %{x:.1f} days<br>¥%{y:,.0f}<extra></extra>",
        ))

    yaxis: dict = dict(title="Cumulative cost (¥)", tickformat=",.0f", nticks=6)
    if result.scale_anchor_cost:
        yaxis["range"] = [0, result.scale_anchor_cost]

    fig.update_layout(
        xaxis_title="Visit interval (days)",
        yaxis=yaxis,
        height=420,
        margin=dict(l=20, r=20, t=30, b=20),
        showlegend=False,
        plot_bgcolor='rgba(0,0,0,0)',
        paper_bgcolor='rgba(0,0,0,0)',
    )
    return fig
