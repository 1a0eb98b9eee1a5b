"""Sweep parameters — horizon, interval range, and the pricing threshold."""

from pydantic import BaseModel, Field

DAYS_PER_MONTH = 30

# Upper bounds keep one sweep small enough to recompute on every input change
MAX_TOTAL_DAYS = 36_500
MAX_INTERVAL_DAYS = 3_650
MAX_STEP_DAYS = 365
MAX_BASE_MONTHS = 24


class SweepParameters(BaseModel):
    """Range of visit intervals to evaluate over a fixed horizon."""

    total_days: int = Field(default=365 * 6, gt=0, le=MAX_TOTAL_DAYS, description="Total horizon (days)")
    max_interval: int = Field(
        default=120, gt=0, le=MAX_INTERVAL_DAYS, description="Largest swept interval (days)",
    )
    step_days: int = Field(
        default=1, gt=0, le=MAX_STEP_DAYS, description="Increment between swept intervals (days)",
    )
    base_months: int = Field(
        default=3, gt=0, le=MAX_BASE_MONTHS,
        description="Month count separating repeat-visit from first-visit pricing. "
                    "Converted to days at 30 days per month (3 → 90 days).",
    )

    @property
    def threshold_days(self) -> int:
        return self.base_months * DAYS_PER_MONTH
