"""Calculator entry point — one full recomputation per input change.

Entry point: ``run_calculator(scenario)``
  sweep → break-even point → scale-anchor lookup → CalculationResult

Nothing is cached; every call recomputes from the scenario alone.
"""

from __future__ import annotations

import logging

from clinic_cost.config.scenario import Scenario
from clinic_cost.engine.cost_model import compute_break_even_point
from clinic_cost.engine.errors import UndefinedBreakEvenError
from clinic_cost.engine.sweep import lookup_cost_at_interval, sweep_intervals
from clinic_cost.models.results import BreakEvenPoint, CalculationResult

logger = logging.getLogger(__name__)


def run_calculator(scenario: Scenario) -> CalculationResult:
    """Compute chart points, break-even marker, and axis anchor for ``scenario``.

    A fee schedule with a zero combined first-visit fee leaves
    ``break_even`` as None and records a warning; the sweep still renders.
    """
    fees = scenario.fees
    sweep = scenario.sweep

    points = sweep_intervals(sweep, fees)

    warnings: list[str] = []
    break_even: BreakEvenPoint | None
    try:
        break_even = compute_break_even_point(fees, sweep)
    except UndefinedBreakEvenError as exc:
        logger.warning("%s", exc)
        warnings.append(str(exc))
        break_even = None

    anchor = scenario.chart.scale_anchor_interval_days
    scale_anchor_cost = lookup_cost_at_interval(points, anchor)
    if anchor is not None and scale_anchor_cost is None:
        logger.debug(
            "Anchor interval %d days not in sweep (step=%d); cost axis will autoscale",
            anchor, sweep.step_days,
        )

    return CalculationResult(
        scenario=scenario,
        threshold_days=sweep.threshold_days,
        points=points,
        break_even=break_even,
        scale_anchor_cost=scale_anchor_cost,
        warnings=warnings,
    )
