"""Shared test fixtures — the default clinic fee schedule and sweep."""

from __future__ import annotations

import pytest

from clinic_cost.config import ChartConfig, FeeSchedule, Scenario, SweepParameters


@pytest.fixture
def fees() -> FeeSchedule:
    # repeat rate 80 + 694 = 774, first rate 292 + 694 = 986
    return FeeSchedule(first_visit_fee=292, repeat_visit_fee=80, other_fee=160 + 334 + 200)


@pytest.fixture
def sweep() -> SweepParameters:
    return SweepParameters(total_days=2_190, max_interval=120, step_days=1, base_months=3)


@pytest.fixture
def degenerate_fees() -> FeeSchedule:
    """first + other == 0 → break-even undefined."""
    return FeeSchedule(first_visit_fee=0, repeat_visit_fee=80, other_fee=0)


@pytest.fixture
def scenario(fees: FeeSchedule, sweep: SweepParameters) -> Scenario:
    return Scenario(fees=fees, sweep=sweep, chart=ChartConfig(scale_anchor_interval_days=20))
