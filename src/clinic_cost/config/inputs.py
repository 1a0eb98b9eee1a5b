"""Raw form input → Scenario.

Form fields arrive as whatever the browser or caller sends: numbers, numeric
strings, empty strings, garbage.  Nothing here raises on bad numbers — a bad
fee becomes 0 and a bad sweep parameter falls back to its default, so the
calculator always has something to render.
"""

from __future__ import annotations

import logging
import math
from typing import Any, Mapping

from clinic_cost.config.chart import ChartConfig
from clinic_cost.config.fees import FeeSchedule
from clinic_cost.config.scenario import Scenario
from clinic_cost.config.sweep import (
    MAX_BASE_MONTHS,
    MAX_INTERVAL_DAYS,
    MAX_STEP_DAYS,
    MAX_TOTAL_DAYS,
    SweepParameters,
)

logger = logging.getLogger(__name__)

FEE_FIELDS = ("first_visit_fee", "repeat_visit_fee", "other_fee")
SWEEP_LIMITS = {
    "total_days": MAX_TOTAL_DAYS,
    "max_interval": MAX_INTERVAL_DAYS,
    "step_days": MAX_STEP_DAYS,
    "base_months": MAX_BASE_MONTHS,
}


def _to_float(raw: Any) -> float | None:
    if raw is None or isinstance(raw, bool):
        return None
    if isinstance(raw, str):
        raw = raw.strip().replace(",", "")
        if not raw:
            return None
    try:
        value = float(raw)
    except (TypeError, ValueError):
        return None
    return value if math.isfinite(value) else None


def coerce_fee(raw: Any) -> float:
    """Parse a fee; anything non-numeric or negative becomes 0."""
    value = _to_float(raw)
    if value is None or value < 0:
        return 0.0
    return value


def coerce_positive_int(raw: Any, default: int, maximum: int | None = None) -> int:
    """Parse a positive whole number, truncating any fractional part.

    Non-numeric, empty, < 1, or above ``maximum`` → ``default``.
    """
    value = _to_float(raw)
    if value is None:
        return default
    value = int(value)
    if value < 1 or (maximum is not None and value > maximum):
        return default
    return value


def parse_form(fields: Mapping[str, Any]) -> Scenario:
    """Build a Scenario from raw form values keyed by model field name.

    Missing keys use the model defaults.  Unknown keys are ignored.
    """
    fee_defaults = FeeSchedule()
    sweep_defaults = SweepParameters()

    fees: dict[str, float] = {}
    for name in FEE_FIELDS:
        if name not in fields:
            fees[name] = getattr(fee_defaults, name)
            continue
        fees[name] = coerce_fee(fields[name])
        if _to_float(fields[name]) != fees[name]:
            logger.debug("Fee %s=%r replaced with %s", name, fields[name], fees[name])

    sweep: dict[str, int] = {}
    for name, maximum in SWEEP_LIMITS.items():
        default = getattr(sweep_defaults, name)
        if name not in fields:
            sweep[name] = default
            continue
        sweep[name] = coerce_positive_int(fields[name], default, maximum)
        if _to_float(fields[name]) != sweep[name]:
            logger.debug("Sweep %s=%r replaced with %s", name, fields[name], sweep[name])

    return Scenario(
        fees=FeeSchedule(**fees),
        sweep=SweepParameters(**sweep),
        chart=ChartConfig(),
    )
