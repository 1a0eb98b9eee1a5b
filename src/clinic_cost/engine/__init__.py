"""Engine — cost model, interval sweep, and the calculator entry point."""

from clinic_cost.engine.errors import UndefinedBreakEvenError
from clinic_cost.engine.cost_model import (
    compute_break_even_interval,
    compute_break_even_point,
    compute_visit_cost_and_count,
    per_visit_fee,
)
from clinic_cost.engine.sweep import lookup_cost_at_interval, sweep_intervals
from clinic_cost.engine.orchestrator import run_calculator

__all__ = [
    "UndefinedBreakEvenError",
    "compute_visit_cost_and_count",
    "per_visit_fee",
    "compute_break_even_interval",
    "compute_break_even_point",
    "sweep_intervals",
    "lookup_cost_at_interval",
    "run_calculator",
]
