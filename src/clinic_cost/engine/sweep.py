"""Interval sweep — the chart's data series.

Intervals run ``step, 2·step, …`` up to and including ``max_interval``.
Zero is excluded (undefined visit count).  Output order is strictly
increasing; the chart and axis scaling rely on it.
"""

from __future__ import annotations

import logging
from typing import Iterable

from clinic_cost.config.fees import FeeSchedule
from clinic_cost.config.sweep import SweepParameters
from clinic_cost.engine.cost_model import compute_visit_cost_and_count
from clinic_cost.models.results import PricePoint

logger = logging.getLogger(__name__)


def sweep_intervals(sweep: SweepParameters, fees: FeeSchedule) -> list[PricePoint]:
    """One PricePoint per swept interval; ``max_interval // step_days`` points."""
    threshold_days = sweep.threshold_days
    points: list[PricePoint] = []
    for interval in range(sweep.step_days, sweep.max_interval + 1, sweep.step_days):
        total_cost, visit_count = compute_visit_cost_and_count(
            interval, sweep.total_days, fees, threshold_days,
        )
        points.append(PricePoint(
            interval_days=interval,
            total_cost=total_cost,
            visit_count=visit_count,
        ))

    logger.debug(
        "Swept %d intervals (step=%d, max=%d, threshold=%d days)",
        len(points), sweep.step_days, sweep.max_interval, threshold_days,
    )
    return points


def lookup_cost_at_interval(points: Iterable[PricePoint], interval_days: int | None) -> float | None:
    """Total cost at exactly ``interval_days``, or None if the sweep missed it."""
    if interval_days is None:
        return None
    for point in points:
        if point.interval_days == interval_days:
            return point.total_cost
    return None
