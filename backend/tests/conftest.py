"""
conftest.py: Shared pytest fixtures for the workforce reports test suite.

No network or external service fixtures are defined here. Engine tests are
pure unit tests; service and route tests run against an InMemoryRecordStore.

Import-path bootstrapping:
    The ``backend/`` directory is inserted into sys.path so that all
    ``workforce_reports.*`` imports resolve without an editable install.
"""

import sys
import os
import random
from datetime import datetime, timezone

import pytest

_BACKEND_DIR = os.path.dirname(os.path.dirname(os.path.abspath(__file__)))
if _BACKEND_DIR not in sys.path:
    sys.path.insert(0, _BACKEND_DIR)


FIXED_NOW = datetime(2024, 3, 15, 9, 30, tzinfo=timezone.utc)


class PinnedRandom(random.Random):
    """
    Random source with fixed draws: random() always returns ``value`` and
    randint(a, b) always returns ``bonus`` clamped into [a, b].
    """

    def __init__(self, value: float = 0.5, bonus: int = 0):
        super().__init__(0)
        self.value = value
        self.bonus = bonus

    def random(self):
        return self.value

    def randint(self, a, b):
        return min(max(self.bonus, a), b)


def _fixed_clock():
    return FIXED_NOW


# ---------------------------------------------------------------------------
# ReportEngine fixtures
# ---------------------------------------------------------------------------

@pytest.fixture
def engine():
    """
    ReportEngine with pinned randomness and clock.

    random() = 0.5  -> every synthetic monthly budget is exactly 600,000
    randint  = low  -> client-satisfaction bonus is 0
    clock           -> 2024-03-15T09:30:00Z, period label "March 2024"
    """
    from workforce_reports.services.report_engine import ReportEngine
    return ReportEngine(rng=PinnedRandom(), clock=_fixed_clock, id_factory=lambda: "rpt-0001")


@pytest.fixture
def seeded_engine_factory():
    """Build independent engines sharing one seed (for determinism checks)."""
    from workforce_reports.services.report_engine import ReportEngine

    def _make(seed: int = 7):
        return ReportEngine(seed=seed, clock=_fixed_clock)
    return _make


# ---------------------------------------------------------------------------
# Sample records
# ---------------------------------------------------------------------------

@pytest.fixture
def summary_contractors():
    """
    Three contractors across Eng and Ops:
      Eng active  (rate 50,  cost 1000)
      Eng inactive
      Ops active  (rate 100, cost 2000)
    """
    from workforce_reports.models.report_models import Contractor
    return [
        Contractor(id=1, name="A", department="Eng", status="active", monthly_cost=1000, hourly_rate=50),
        Contractor(id=2, name="B", department="Eng", status="inactive"),
        Contractor(id=3, name="C", department="Ops", status="active", monthly_cost=2000, hourly_rate=100),
    ]


@pytest.fixture
def performance_contractors():
    """Four active contractors in three departments plus one inactive (Dan)."""
    from workforce_reports.models.report_models import Contractor
    return [
        Contractor(id=1, name="Alice", department="Technology", status="active"),
        Contractor(id=2, name="Bob", department="Technology", status="active"),
        Contractor(id=3, name="Cara", department="Operations", status="active"),
        Contractor(id=4, name="Dan", department="Operations", status="inactive"),
        Contractor(id=5, name="Eve", department="Finance", status="active"),
    ]


@pytest.fixture
def performance_timesheets():
    """
    Records for contractors 1-4; Eve (5) has none and gets the 150/5/75
    placeholder. Dan (4) is inactive so his record is ignored.
    """
    from workforce_reports.models.report_models import TimesheetEntry
    return [
        TimesheetEntry(contractor_id=1, hours_worked=160, projects_completed=7, efficiency=95),
        TimesheetEntry(contractor_id=2, hours_worked=150, projects_completed=6, efficiency=80),
        TimesheetEntry(contractor_id=3, hours_worked=170, projects_completed=4, efficiency=92),
        TimesheetEntry(contractor_id=4, hours_worked=100, projects_completed=2, efficiency=60),
    ]


@pytest.fixture
def budget_snapshot():
    """
    Snapshot with monthlySpend 650,000 against the 600,000 ceiling.

    Department usage:
      Operations       40,000 /  85,000 ->  47%  no alert
      Technology      230,000 / 220,000 -> 105%  critical
      Marketing        30,000 /  50,000 ->  60%  no alert (default ceiling)
      Risk Management  90,000 /  95,000 ->  95%  warning
    """
    from workforce_reports.models.report_models import BaselineSnapshot
    return BaselineSnapshot.model_validate({
        "totalContractors": 9,
        "activeDepartments": 4,
        "monthlySpend": 650000,
        "avgContractLength": 150,
        "departmentBreakdown": [
            {"department": "Operations", "spend": 40000, "contractors": 2},
            {"department": "Technology", "spend": 230000, "contractors": 4},
            {"department": "Marketing", "spend": 30000, "contractors": 1},
            {"department": "Risk Management", "spend": 90000, "contractors": 2},
        ],
        "monthlyTrends": [
            {"month": "Jan 2024", "spend": 700000},
            {"month": "Feb 2024", "spend": 500000},
            {"month": "Mar 2024", "spend": 600000},
        ],
    })


@pytest.fixture
def memory_store():
    """InMemoryRecordStore over the built-in demo dataset."""
    from workforce_reports.services.record_store import InMemoryRecordStore
    return InMemoryRecordStore.from_mock_data()


@pytest.fixture(autouse=True)
def _reset_tracker():
    from workforce_reports.services.perf_monitor import tracker
    tracker.reset()
    yield
    tracker.reset()
