"""Context manifest — makes the calculator API self-describing.

Two detail levels:
  - ``compact``: parameter schemas + descriptions
  - ``full``:    adds the cost model, formulas, and an interpretation guide
"""

from __future__ import annotations

from typing import Any, Literal

from pydantic import BaseModel, Field

from clinic_cost import __version__
from clinic_cost.config import ChartConfig, FeeSchedule, Scenario, SweepParameters


# ═══════════════════════════════════════════════════════════════════════════
# Public response models
# ═══════════════════════════════════════════════════════════════════════════

class ParameterInfo(BaseModel):
    """One configurable parameter, machine-readable."""
    name: str
    type: str
    default: Any
    description: str
    constraints: dict[str, Any] = Field(default_factory=dict)


class SectionSchema(BaseModel):
    """Schema for one configuration section (fees, sweep, chart)."""
    section: str
    description: str
    parameters: list[ParameterInfo]


class EndpointInfo(BaseModel):
    """Description of one API endpoint."""
    method: str
    path: str
    description: str


class CalculatorContext(BaseModel):
    """Full self-describing context."""
    name: str
    version: str
    description: str
    cost_model: str
    key_formulas: list[dict[str, str]]
    input_sections: list[SectionSchema]
    endpoints: list[EndpointInfo]
    interpretation_guide: str


# ═══════════════════════════════════════════════════════════════════════════
# Schema extraction from Pydantic models
# ═══════════════════════════════════════════════════════════════════════════

def _extract_params(model_cls: type[BaseModel]) -> list[ParameterInfo]:
    """Extract parameter info from a Pydantic model class."""
    params: list[ParameterInfo] = []
    for name, field_info in model_cls.model_fields.items():
        constraints: dict[str, Any] = {}
        for attr in ("ge", "gt", "le", "lt"):
            for m in field_info.metadata:
                if getattr(m, attr, None) is not None:
                    constraints[attr] = getattr(m, attr)

        type_str = str(field_info.annotation) if field_info.annotation else "Any"
        type_str = type_str.replace("typing.", "").replace("<class '", "").replace("'>", "")

        params.append(ParameterInfo(
            name=name,
            type=type_str,
            default=field_info.default,
            description=field_info.description or "",
            constraints=constraints,
        ))
    return params


# ═══════════════════════════════════════════════════════════════════════════
# Context builders
# ═══════════════════════════════════════════════════════════════════════════

_COST_MODEL = """
Clinic visit cost calculator

Clinics charge a cheaper repeat-visit fee when the previous visit was recent
(within base_months × 30 days) and the full first-visit fee otherwise. Other
charges (tests, prescriptions) apply to every visit. Visiting more often means
more visits but each is cheaper; visiting less often means fewer, pricier visits.

For each interval in the sweep the calculator counts visits over the horizon
and multiplies by the per-visit cost for that interval's pricing regime.
"""

_KEY_FORMULAS = [
    {"name": "threshold_days", "formula": "base_months × 30"},
    {"name": "visit_count", "formula": "floor(total_days / interval_days)"},
    {"name": "per_visit (interval < threshold)", "formula": "repeat_visit_fee + other_fee"},
    {"name": "per_visit (interval >= threshold)", "formula": "first_visit_fee + other_fee"},
    {"name": "total_cost", "formula": "per_visit × visit_count"},
    {
        "name": "break_even_interval",
        "formula": "(repeat_visit_fee + other_fee) / (first_visit_fee + other_fee) × threshold_days",
    },
]

_INTERPRETATION_GUIDE = """
- The cost curve jumps at threshold_days: intervals just below it use the
  repeat-visit fee, intervals at or above it use the first-visit fee.
- Between jumps the curve steps down as visit_count falls.
- The break-even interval is where the repeat regime costs the same per day as
  visiting exactly at the threshold under the first-visit regime. Visiting more
  often than that costs more per day than simply letting the threshold lapse.
- break_even is null when first_visit_fee + other_fee is 0; see warnings.
- scale_anchor_cost is the total at the chart anchor interval (default 20 days)
  and is null when the sweep step skips it.
"""

_ENDPOINTS = [
    EndpointInfo(method="GET", path="/context", description="This manifest"),
    EndpointInfo(method="GET", path="/schema", description="JSON Schema for Scenario"),
    EndpointInfo(method="GET", path="/scenario/defaults", description="Default Scenario as JSON"),
    EndpointInfo(method="POST", path="/calculate", description="Full calculation from a partial Scenario"),
    EndpointInfo(method="POST", path="/calculate/form", description="Full calculation from raw form values"),
    EndpointInfo(method="POST", path="/calculate/point", description="Cost and visit count at one interval"),
    EndpointInfo(method="POST", path="/calculate/narrative", description="Plain-text summary + headline metrics"),
]

_INPUT_SECTIONS: list[tuple[str, type[BaseModel], str]] = [
    ("fees", FeeSchedule, "Per-visit charges for the two pricing regimes"),
    ("sweep", SweepParameters, "Horizon, swept interval range, and pricing threshold"),
    ("chart", ChartConfig, "Chart presentation — cost axis anchor"),
]


# ═══════════════════════════════════════════════════════════════════════════
# Public API
# ═══════════════════════════════════════════════════════════════════════════

def build_context(detail_level: Literal["compact", "full"] = "full") -> CalculatorContext:
    """Build the self-describing context manifest."""
    full = detail_level == "full"
    return CalculatorContext(
        name="Clinic Visit Cost Calculator",
        version=__version__,
        description=(
            "Estimates cumulative clinic visit costs as a function of the interval "
            "between visits, with an analytic break-even interval."
        ),
        cost_model=_COST_MODEL.strip() if full else "",
        key_formulas=_KEY_FORMULAS if full else [],
        input_sections=[
            SectionSchema(section=name, description=desc, parameters=_extract_params(cls))
            for name, cls, desc in _INPUT_SECTIONS
        ],
        endpoints=_ENDPOINTS,
        interpretation_guide=_INTERPRETATION_GUIDE.strip() if full else "",
    )


def get_scenario_schema() -> dict:
    """Return the full JSON Schema for Scenario."""
    return Scenario.model_json_schema()


def get_default_scenario() -> dict:
    """Return default Scenario as a JSON-serializable dict."""
    return Scenario().model_dump()
