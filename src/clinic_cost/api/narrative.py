"""KPI readouts and narrative — plain-text interpretation of a calculation.

``build_kpis`` produces the three headline cards (break-even interval, cost
at break-even, swept range).  ``generate_narrative`` expands them into a
structured text block for API consumers that prefer prose over raw points.
"""

from __future__ import annotations

from pydantic import BaseModel

from clinic_cost.models.results import CalculationResult


class KPI(BaseModel):
    """One headline metric card."""
    label: str
    value: str
    caption: str


def _fmt_yen(val: float) -> str:
    return f"¥{val:,.0f}"


def build_kpis(result: CalculationResult) -> list[KPI]:
    """Break-even interval, cost at break-even, and sweep range."""
    sweep = result.scenario.sweep
    be = result.break_even

    return [
        KPI(
            label="Break-even interval",
            value=f"every {be.interval_days:.1f} days" if be else "undefined",
            caption=f"Threshold: {result.threshold_days} days",
        ),
        KPI(
            label="Cumulative cost at break-even",
            value=_fmt_yen(be.total_cost) if be else "undefined",
            caption=f"Horizon: {sweep.total_days} days",
        ),
        KPI(
            label="Swept range",
            value=f"{sweep.step_days} – {sweep.max_interval} days",
            caption=f"Step: {sweep.step_days} days",
        ),
    ]


def generate_narrative(result: CalculationResult) -> str:
    """Generate a plain-text summary of a calculation.

    Covers:
      1. Inputs (fee regimes, threshold, horizon)
      2. Break-even
      3. Cheapest and most expensive swept interval
      4. Caveat
    """
    fees = result.scenario.fees
    sweep = result.scenario.sweep
    sections: list[str] = []

    # ── 1. Inputs ──
    sections.append("=" * 60)
    sections.append("CLINIC VISIT COST SUMMARY")
    sections.append("=" * 60)
    sections.append(
        f"Visits closer than {result.threshold_days} days ({sweep.base_months} months) apart "
        f"cost {_fmt_yen(fees.repeat_rate)} each (repeat-visit fee {_fmt_yen(fees.repeat_visit_fee)} "
        f"+ other {_fmt_yen(fees.other_fee)})."
    )
    sections.append(
        f"Visits {result.threshold_days} days or more apart cost {_fmt_yen(fees.first_rate)} each "
        f"(first-visit fee {_fmt_yen(fees.first_visit_fee)} + other {_fmt_yen(fees.other_fee)})."
    )
    sections.append(f"Horizon: {sweep.total_days} days.")
    sections.append("")

    # ── 2. Break-even ──
    sections.append("BREAK-EVEN")
    sections.append("-" * 60)
    be = result.break_even
    if be is None:
        sections.append("Undefined for this fee schedule (first-visit fee + other fee is 0).")
    else:
        sections.append(
            f"Visiting every {be.interval_days:.1f} days at the repeat rate costs the same "
            f"per day as visiting every {result.threshold_days} days at the first-visit rate."
        )
        sections.append(
            f"Cumulative cost at the break-even interval: {_fmt_yen(be.total_cost)}."
        )
    sections.append("")

    # ── 3. Swept extremes ──
    if result.points:
        cheapest = min(result.points, key=lambda p: (p.total_cost, -p.interval_days))
        priciest = max(result.points, key=lambda p: (p.total_cost, -p.interval_days))
        sections.append("SWEPT INTERVALS")
        sections.append("-" * 60)
        sections.append(
            f"{len(result.points)} intervals from {result.points[0].interval_days} "
            f"to {result.points[-1].interval_days} days."
        )
        sections.append(
            f"Lowest cost: {_fmt_yen(cheapest.total_cost)} at every {cheapest.interval_days} days "
            f"({cheapest.visit_count} visits)."
        )
        sections.append(
            f"Highest cost: {_fmt_yen(priciest.total_cost)} at every {priciest.interval_days} days "
            f"({priciest.visit_count} visits)."
        )
        sections.append("")

    # ── 4. Caveat ──
    sections.append(
        "This is a rough estimate. Actual fees depend on current reimbursement "
        "rules and individual circumstances."
    )
    return "\n".join(sections)
