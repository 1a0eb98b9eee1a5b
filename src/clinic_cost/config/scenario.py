"""Top-level scenario — bundles all calculator inputs."""

from pydantic import BaseModel, Field

from clinic_cost.config.fees import FeeSchedule
from clinic_cost.config.sweep import SweepParameters
from clinic_cost.config.chart import ChartConfig


class Scenario(BaseModel):
    """Complete input bundle for one calculation."""

    fees: FeeSchedule = Field(default_factory=FeeSchedule)
    sweep: SweepParameters = Field(default_factory=SweepParameters)
    chart: ChartConfig = Field(default_factory=ChartConfig)
