"""Configuration models — fee schedule, sweep, chart and scenario inputs."""

from clinic_cost.config.fees import FeeSchedule
from clinic_cost.config.sweep import DAYS_PER_MONTH, SweepParameters
from clinic_cost.config.chart import ChartConfig
from clinic_cost.config.scenario import Scenario
from clinic_cost.config.inputs import coerce_fee, coerce_positive_int, parse_form

__all__ = [
    "DAYS_PER_MONTH",
    "FeeSchedule",
    "SweepParameters",
    "ChartConfig",
    "Scenario",
    "coerce_fee",
    "coerce_positive_int",
    "parse_form",
]
