"""Chart presentation settings."""

from pydantic import BaseModel, Field


class ChartConfig(BaseModel):
    """Settings that affect how results are charted, not how they are computed."""

    scale_anchor_interval_days: int | None = Field(
        default=20, gt=0,
        description="Swept interval whose total cost fixes the top of the cost axis. "
                    "None = autoscale. "
                    "Falls back to autoscale when the sweep does not hit this interval.",
    )
