"""Result types — the contract between engine, API, and dashboard."""

from __future__ import annotations

from pydantic import BaseModel, ConfigDict, Field

from clinic_cost.config.scenario import Scenario


class PricePoint(BaseModel):
    """Cumulative cost at one swept interval."""

    model_config = ConfigDict(frozen=True)

    interval_days: int
    """Days between visits."""

    total_cost: float
    """per-visit fee × visit_count over the horizon."""

    visit_count: int
    """floor(total_days / interval_days)."""


class BreakEvenPoint(BaseModel):
    """Where the two pricing regimes give the same effective daily rate."""

    model_config = ConfigDict(frozen=True)

    interval_days: float
    """(repeat + other) / (first + other) × threshold_days.  Usually fractional."""

    total_cost: float
    """Cumulative cost over the horizon when visiting at ``interval_days``."""


class CalculationResult(BaseModel):
    """Everything the presentation layer needs for one set of inputs."""

    scenario: Scenario

    threshold_days: int
    """base_months × 30 — drawn as the dashed reference line."""

    points: list[PricePoint] = Field(default_factory=list)
    """Strictly increasing by interval_days, one per step."""

    break_even: BreakEvenPoint | None = None
    """None when the fee schedule makes the break-even undefined."""

    scale_anchor_cost: float | None = None
    """Total cost at the chart's anchor interval; None → autoscale."""

    warnings: list[str] = Field(default_factory=list)
