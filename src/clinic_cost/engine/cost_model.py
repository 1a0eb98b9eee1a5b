"""Cost model — cumulative cost at one interval, and the break-even interval.

Per-visit cost is a step function of the interval between visits:

  interval <  threshold  →  repeat_visit_fee + other_fee
  interval >= threshold  →  first_visit_fee  + other_fee

  visits     = floor(total_days / interval)
  total_cost = per_visit × visits
"""

from __future__ import annotations

import math

from clinic_cost.config.fees import FeeSchedule
from clinic_cost.config.sweep import SweepParameters
from clinic_cost.engine.errors import UndefinedBreakEvenError
from clinic_cost.models.results import BreakEvenPoint


def per_visit_fee(fees: FeeSchedule, interval_days: float, threshold_days: float) -> float:
    """Per-visit cost for the pricing regime ``interval_days`` falls in (strict <)."""
    return fees.repeat_rate if interval_days < threshold_days else fees.first_rate


def compute_visit_cost_and_count(
    interval_days: float,
    total_days: int,
    fees: FeeSchedule,
    threshold_days: float,
) -> tuple[float, int]:
    """Return ``(total_cost, visit_count)`` for visits every ``interval_days``.

    ``interval_days`` may be fractional (the break-even interval usually is).
    The threshold comparison is strict, so an interval exactly equal to the
    threshold is billed at the first-visit rate.
    """
    if interval_days <= 0:
        raise ValueError(f"interval_days must be positive, got {interval_days}")

    visit_count = math.floor(total_days / interval_days)
    return per_visit_fee(fees, interval_days, threshold_days) * visit_count, visit_count


def compute_break_even_interval(fees: FeeSchedule, threshold_days: float) -> float:
    """Interval at which both regimes give the same effective daily rate.

    ``(repeat + other) / (first + other) × threshold_days``

    Visiting every ``threshold_days`` at the first-visit rate costs as much
    per day as visiting every break-even interval at the repeat rate.  This is
    an analytic ratio, not a crossing of the swept cost curve.

    Raises ``UndefinedBreakEvenError`` when ``first + other`` is zero.
    """
    denominator = fees.first_rate
    if denominator == 0:
        raise UndefinedBreakEvenError(
            "Break-even interval is undefined: first-visit fee + other fee is 0"
        )
    return (fees.repeat_rate / denominator) * threshold_days


def compute_break_even_point(fees: FeeSchedule, sweep: SweepParameters) -> BreakEvenPoint:
    """Break-even interval plus the cumulative cost of visiting at that interval."""
    interval = compute_break_even_interval(fees, sweep.threshold_days)
    if interval == 0:
        # repeat + other == 0: every repeat visit is free
        return BreakEvenPoint(interval_days=0.0, total_cost=0.0)
    total_cost, _ = compute_visit_cost_and_count(
        interval, sweep.total_days, fees, sweep.threshold_days,
    )
    return BreakEvenPoint(interval_days=interval, total_cost=total_cost)
