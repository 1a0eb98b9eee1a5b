"""FastAPI server — HTTP API for the clinic visit cost calculator.

Run with:
    uvicorn clinic_cost.api.server:app --reload --port 8000

Or:
    python -m clinic_cost.api.server

Endpoints:
    GET  /context              — self-describing manifest (cost model + schemas)
    GET  /schema               — full JSON Schema for Scenario inputs
    GET  /scenario/defaults    — complete default scenario as JSON
    POST /calculate            — full calculation (partial or full Scenario)
    POST /calculate/form       — full calculation from raw form values
    POST /calculate/point      — cost and visit count at a single interval
    POST /calculate/narrative  — plain-text summary + headline metrics
"""

from __future__ import annotations

import logging
from typing import Any, Literal

from fastapi import FastAPI, Query, Request
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse
from pydantic import BaseModel, Field, ValidationError

from clinic_cost import __version__
from clinic_cost.config import Scenario, parse_form
from clinic_cost.engine import compute_visit_cost_and_count, per_visit_fee, run_calculator
from clinic_cost.models.results import CalculationResult
from clinic_cost.api.context import build_context, get_scenario_schema, get_default_scenario
from clinic_cost.api.narrative import KPI, build_kpis, generate_narrative
from clinic_cost.settings import configure_logging, settings

logger = logging.getLogger(__name__)


# ═══════════════════════════════════════════════════════════════════════════
# App setup
# ═══════════════════════════════════════════════════════════════════════════

app = FastAPI(
    title="Clinic Visit Cost Calculator API",
    version=__version__,
    description=(
        "Cumulative clinic visit cost as a function of the interval between visits. "
        "Start by calling GET /context to see the cost model and inputs."
    ),
)

app.add_middleware(
    CORSMiddleware,
    allow_origins=["*"],
    allow_methods=["*"],
    allow_headers=["*"],
)


@app.exception_handler(ValidationError)
async def validation_error_handler(request: Request, exc: ValidationError) -> JSONResponse:
    """Out-of-range scenario values → 422 with pydantic's error list."""
    logger.info("Rejected scenario on %s: %d validation error(s)", request.url.path, exc.error_count())
    return JSONResponse(
        status_code=422,
        content={"detail": exc.errors(include_url=False, include_context=False)},
    )


# ═══════════════════════════════════════════════════════════════════════════
# Request / response models
# ═══════════════════════════════════════════════════════════════════════════

class CalculateRequest(BaseModel):
    """Request body for /calculate. All fields optional — defaults used for missing."""
    scenario: dict[str, Any] = Field(
        default_factory=dict,
        description="Partial or full Scenario JSON. Missing fields use defaults. "
                    "Example: {'fees': {'other_fee': 500}, 'sweep': {'max_interval': 180}}",
    )


class FormRequest(BaseModel):
    """Request body for /calculate/form — raw, unvalidated form values."""
    fields: dict[str, Any] = Field(
        default_factory=dict,
        description="Flat map of field name → raw value, e.g. {'total_days': '2190', 'other_fee': ''}. "
                    "Bad fees become 0; bad sweep values fall back to defaults.",
    )


class PointRequest(BaseModel):
    """Request body for /calculate/point."""
    interval_days: float = Field(gt=0, description="Days between visits (may be fractional)")
    scenario: dict[str, Any] = Field(default_factory=dict)


class CalculateResponse(BaseModel):
    """Response from /calculate and /calculate/form."""
    result: dict[str, Any]
    kpis: list[KPI]
    narrative: str = ""


class PointResponse(BaseModel):
    """Response from /calculate/point."""
    interval_days: float
    threshold_days: int
    per_visit_cost: float
    visit_count: int
    total_cost: float


# ═══════════════════════════════════════════════════════════════════════════
# Helpers
# ═══════════════════════════════════════════════════════════════════════════

def _build_scenario(overrides: dict[str, Any]) -> Scenario:
    """Build a Scenario from partial overrides merged onto defaults."""
    defaults = get_default_scenario()
    _deep_merge(defaults, overrides)
    return Scenario(**defaults)


def _deep_merge(base: dict, overrides: dict) -> dict:
    """Recursively merge overrides into base dict."""
    for key, val in overrides.items():
        if key in base and isinstance(base[key], dict) and isinstance(val, dict):
            _deep_merge(base[key], val)
        else:
            base[key] = val
    return base


def _respond(result: CalculationResult) -> CalculateResponse:
    return CalculateResponse(
        result=result.model_dump(),
        kpis=build_kpis(result),
        narrative=generate_narrative(result),
    )


# ═══════════════════════════════════════════════════════════════════════════
# Endpoints
# ═══════════════════════════════════════════════════════════════════════════

@app.get("/health")
def health_check():
    """Health check for deployment platforms."""
    return {"status": "ok"}


@app.get("/")
def root():
    """API root — returns a welcome message and pointer to /context."""
    return {
        "name": "Clinic Visit Cost Calculator API",
        "version": __version__,
        "start_here": "GET /context?detail_level=full",
        "docs": "GET /docs (interactive Swagger UI)",
    }


@app.get("/context")
def get_context(
    detail_level: Literal["compact", "full"] = Query(
        default="full",
        description="'compact' for schemas only, 'full' for cost model + formulas + guide",
    ),
):
    """Self-describing context manifest."""
    return build_context(detail_level)


@app.get("/schema")
def get_schema():
    """Full JSON Schema for Scenario — all input parameters with types, defaults, constraints."""
    return get_scenario_schema()


@app.get("/scenario/defaults")
def get_defaults():
    """Complete default Scenario as JSON. Use as a starting point for modifications."""
    return get_default_scenario()


@app.post("/calculate", response_model=CalculateResponse)
def calculate(req: CalculateRequest):
    """Run a full calculation.

    Send a partial Scenario (only the fields you want to change).
    Out-of-range values are rejected with 422.

    Example minimal request:
    ```json
    {"scenario": {"fees": {"first_visit_fee": 300}, "sweep": {"step_days": 5}}}
    ```
    """
    scenario = _build_scenario(req.scenario)
    return _respond(run_calculator(scenario))


@app.post("/calculate/form", response_model=CalculateResponse)
def calculate_form(req: FormRequest):
    """Run a full calculation from raw form values.

    Never rejects bad numbers: the form always renders something.
    """
    scenario = parse_form(req.fields)
    return _respond(run_calculator(scenario))


@app.post("/calculate/point", response_model=PointResponse)
def calculate_point(req: PointRequest):
    """Cost and visit count for visits every ``interval_days`` over the horizon."""
    scenario = _build_scenario(req.scenario)
    sweep = scenario.sweep
    total_cost, visit_count = compute_visit_cost_and_count(
        req.interval_days, sweep.total_days, scenario.fees, sweep.threshold_days,
    )
    return PointResponse(
        interval_days=req.interval_days,
        threshold_days=sweep.threshold_days,
        per_visit_cost=per_visit_fee(scenario.fees, req.interval_days, sweep.threshold_days),
        visit_count=visit_count,
        total_cost=total_cost,
    )


@app.post("/calculate/narrative")
def calculate_narrative(req: CalculateRequest):
    """Run a calculation and return only the narrative and headline metrics."""
    scenario = _build_scenario(req.scenario)
    result = run_calculator(scenario)
    be = result.break_even
    return {
        "narrative": generate_narrative(result),
        "headline_metrics": {
            "threshold_days": result.threshold_days,
            "break_even_interval_days": round(be.interval_days, 2) if be else None,
            "break_even_total_cost": round(be.total_cost, 2) if be else None,
            "points": len(result.points),
        },
        "warnings": result.warnings,
    }


# ═══════════════════════════════════════════════════════════════════════════
# CLI entry point
# ═══════════════════════════════════════════════════════════════════════════

def main():
    """Run the API server."""
    import uvicorn

    configure_logging()
    uvicorn.run(
        "clinic_cost.api.server:app",
        host=settings.api_host,
        port=settings.api_port,
        reload=settings.api_reload,
    )


if __name__ == "__main__":
    main()
