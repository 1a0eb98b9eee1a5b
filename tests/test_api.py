"""Tests for the HTTP API layer.

Covers:
  - Context manifest (compact + full)
  - Schema / defaults endpoints
  - Calculation endpoints (/calculate, /form, /point, /narrative)
  - Deep merge utility
  - Validation error handling
"""

from __future__ import annotations

import pytest
from fastapi.testclient import TestClient

from clinic_cost.api.server import app, _deep_merge, _build_scenario
from clinic_cost.api.context import (
    build_context,
    get_scenario_schema,
    get_default_scenario,
    _extract_params,
)
from clinic_cost.config import FeeSchedule, Scenario, SweepParameters


client = TestClient(app)


# ═══════════════════════════════════════════════════════════════════════════
# Context manifest tests
# ═══════════════════════════════════════════════════════════════════════════


class TestContext:

    def test_build_context_full(self):
        ctx = build_context("full")
        assert ctx.name == "Clinic Visit Cost Calculator"
        assert len(ctx.cost_model) > 100
        assert len(ctx.key_formulas) >= 5
        assert [s.section for s in ctx.input_sections] == ["fees", "sweep", "chart"]
        assert len(ctx.endpoints) >= 6
        assert "threshold" in ctx.interpretation_guide

    def test_build_context_compact(self):
        ctx = build_context("compact")
        assert ctx.cost_model == ""
        assert ctx.key_formulas == []
        assert ctx.interpretation_guide == ""
        assert len(ctx.input_sections) == 3

    def test_extract_params_constraints(self):
        params = {p.name: p for p in _extract_params(SweepParameters)}
        assert set(params) == {"total_days", "max_interval", "step_days", "base_months"}
        assert params["step_days"].constraints == {"gt": 0}
        assert params["total_days"].default == 2_190
        assert params["base_months"].description

    def test_extract_params_fee_constraints(self):
        params = {p.name: p for p in _extract_params(FeeSchedule)}
        assert params["other_fee"].constraints == {"ge": 0}
        assert params["other_fee"].default == 694

    def test_schema_has_sections(self):
        schema = get_scenario_schema()
        assert set(schema["properties"]) == {"fees", "sweep", "chart"}

    def test_default_scenario_round_trips(self):
        assert Scenario(**get_default_scenario()) == Scenario()


# ═══════════════════════════════════════════════════════════════════════════
# Helper tests
# ═══════════════════════════════════════════════════════════════════════════


class TestHelpers:

    def test_deep_merge_nested(self):
        base = {"fees": {"first_visit_fee": 292, "other_fee": 694}, "sweep": {"step_days": 1}}
        _deep_merge(base, {"fees": {"other_fee": 500}})
        assert base == {"fees": {"first_visit_fee": 292, "other_fee": 500}, "sweep": {"step_days": 1}}

    def test_deep_merge_replaces_non_dict(self):
        base = {"chart": {"scale_anchor_interval_days": 20}}
        _deep_merge(base, {"chart": {"scale_anchor_interval_days": None}})
        assert base["chart"]["scale_anchor_interval_days"] is None

    def test_build_scenario_partial(self):
        s = _build_scenario({"sweep": {"base_months": 6}})
        assert s.sweep.base_months == 6
        assert s.sweep.total_days == 2_190
        assert s.fees == FeeSchedule()


# ═══════════════════════════════════════════════════════════════════════════
# Endpoint tests
# ═══════════════════════════════════════════════════════════════════════════


class TestInfoEndpoints:

    def test_health(self):
        r = client.get("/health")
        assert r.status_code == 200
        assert r.json() == {"status": "ok"}

    def test_root(self):
        r = client.get("/")
        assert r.status_code == 200
        assert "start_here" in r.json()

    def test_context_compact(self):
        r = client.get("/context", params={"detail_level": "compact"})
        assert r.status_code == 200
        assert r.json()["cost_model"] == ""

    def test_context_bad_level(self):
        assert client.get("/context", params={"detail_level": "verbose"}).status_code == 422

    def test_schema(self):
        r = client.get("/schema")
        assert r.status_code == 200
        assert "properties" in r.json()

    def test_defaults(self):
        r = client.get("/scenario/defaults")
        assert r.status_code == 200
        assert r.json()["sweep"]["total_days"] == 2_190


class TestCalculate:

    def test_defaults(self):
        r = client.post("/calculate", json={})
        assert r.status_code == 200
        body = r.json()
        result = body["result"]
        assert result["threshold_days"] == 90
        assert len(result["points"]) == 120
        assert result["break_even"]["interval_days"] == pytest.approx(774 / 986 * 90)
        assert result["scale_anchor_cost"] == 774 * 109
        assert [k["label"] for k in body["kpis"]] == [
            "Break-even interval", "Cumulative cost at break-even", "Swept range",
        ]
        assert body["kpis"][0]["value"] == "every 70.6 days"
        assert "BREAK-EVEN" in body["narrative"]

    def test_partial_override(self):
        r = client.post("/calculate", json={"scenario": {"sweep": {"step_days": 10}}})
        assert r.status_code == 200
        result = r.json()["result"]
        assert [p["interval_days"] for p in result["points"]] == list(range(10, 121, 10))
        assert result["scale_anchor_cost"] == 774 * 109

    def test_out_of_range_rejected(self):
        r = client.post("/calculate", json={"scenario": {"sweep": {"step_days": 0}}})
        assert r.status_code == 422
        assert r.json()["detail"][0]["loc"][-1] == "step_days"

    def test_oversized_sweep_rejected(self):
        r = client.post("/calculate", json={"scenario": {"sweep": {"max_interval": 10**12}}})
        assert r.status_code == 422
        assert r.json()["detail"][0]["loc"][-1] == "max_interval"

    def test_oversized_point_horizon_rejected(self):
        r = client.post("/calculate/point", json={"interval_days": 30, "scenario": {"sweep": {"total_days": 36_501}}})
        assert r.status_code == 422

    def test_negative_fee_rejected(self):
        r = client.post("/calculate", json={"scenario": {"fees": {"other_fee": -1}}})
        assert r.status_code == 422

    def test_degenerate_fees(self):
        r = client.post("/calculate", json={"scenario": {"fees": {"first_visit_fee": 0, "other_fee": 0}}})
        assert r.status_code == 200
        body = r.json()
        assert body["result"]["break_even"] is None
        assert len(body["result"]["warnings"]) == 1
        assert body["kpis"][0]["value"] == "undefined"


class TestCalculateForm:

    def test_garbage_still_renders(self):
        r = client.post("/calculate/form", json={"fields": {
            "total_days": "", "step_days": "abc", "first_visit_fee": "-3", "other_fee": "n/a",
        }})
        assert r.status_code == 200
        scenario = r.json()["result"]["scenario"]
        assert scenario["sweep"]["total_days"] == 2_190
        assert scenario["sweep"]["step_days"] == 1
        assert scenario["fees"]["first_visit_fee"] == 0
        assert scenario["fees"]["other_fee"] == 0

    def test_zeroed_first_fee_gives_undefined_break_even(self):
        r = client.post("/calculate/form", json={"fields": {"first_visit_fee": "0", "other_fee": "0"}})
        assert r.status_code == 200
        assert r.json()["result"]["break_even"] is None

    def test_empty_fields(self):
        r = client.post("/calculate/form", json={})
        assert r.status_code == 200
        assert len(r.json()["result"]["points"]) == 120

    def test_oversized_sweep_uses_defaults(self):
        r = client.post("/calculate/form", json={"fields": {"max_interval": "1e12", "total_days": "1e9"}})
        assert r.status_code == 200
        result = r.json()["result"]
        assert result["scenario"]["sweep"]["max_interval"] == 120
        assert result["scenario"]["sweep"]["total_days"] == 2_190
        assert len(result["points"]) == 120


class TestCalculatePoint:

    def test_repeat_regime(self):
        r = client.post("/calculate/point", json={"interval_days": 30})
        assert r.status_code == 200
        assert r.json() == {
            "interval_days": 30,
            "threshold_days": 90,
            "per_visit_cost": 774,
            "visit_count": 73,
            "total_cost": 56_502,
        }

    def test_first_regime(self):
        r = client.post("/calculate/point", json={"interval_days": 120})
        body = r.json()
        assert body["per_visit_cost"] == 986
        assert body["visit_count"] == 18
        assert body["total_cost"] == 17_748

    def test_threshold_boundary(self):
        body = client.post("/calculate/point", json={"interval_days": 90}).json()
        assert body["per_visit_cost"] == 986

    def test_with_scenario(self):
        body = client.post("/calculate/point", json={
            "interval_days": 90, "scenario": {"sweep": {"base_months": 4}},
        }).json()
        assert body["threshold_days"] == 120
        assert body["per_visit_cost"] == 774

    def test_zero_interval_rejected(self):
        assert client.post("/calculate/point", json={"interval_days": 0}).status_code == 422


class TestCalculateNarrative:

    def test_headline_metrics(self):
        r = client.post("/calculate/narrative", json={})
        assert r.status_code == 200
        body = r.json()
        metrics = body["headline_metrics"]
        assert metrics["threshold_days"] == 90
        assert metrics["break_even_interval_days"] == pytest.approx(70.65)
        assert metrics["break_even_total_cost"] == 23_220
        assert metrics["points"] == 120
        assert body["warnings"] == []
        assert "CLINIC VISIT COST SUMMARY" in body["narrative"]
