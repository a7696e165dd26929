"""Shared fixtures for the test suite."""

import random
import textwrap

import pytest

from src.dashboard.dashboard_controller import DashboardController
from src.dashboard.dashboard_state import DashboardState
from src.data_pipeline.cleaning import DataCleaner
from src.scoring_engine.config import ASSET_SCORE_METRICS, WORKER_SCORE_METRICS
from src.scoring_engine.score_engine import ScoreEngine


# ------------------------------------------------------------------
# Lightweight factories – cheap to construct, no I/O
# ------------------------------------------------------------------

@pytest.fixture(scope="module")
def engine():
    """Engine that averages every metric an entity carries."""
    return ScoreEngine()


@pytest.fixture(scope="module")
def worker_engine():
    return ScoreEngine(metric_fields=WORKER_SCORE_METRICS)


@pytest.fixture(scope="module")
def asset_engine():
    return ScoreEngine(metric_fields=ASSET_SCORE_METRICS)


@pytest.fixture(scope="module")
def cleaner():
    return DataCleaner()


@pytest.fixture
def employees():
    """Six workers whose on-time rates are 88, 60, 95, 80, 50, 92."""
    return DashboardState.create_default().employees


@pytest.fixture
def machines():
    return DashboardState.create_default().machines


@pytest.fixture
def controller():
    """Controller over the demo snapshot with a seeded RNG."""
    return DashboardController(DashboardState.create_default(), rng=random.Random(42))


# ------------------------------------------------------------------
# CSV fixtures – written to a temp directory per test
# ------------------------------------------------------------------

EMPLOYEES_CSV = textwrap.dedent("""\
    Name,Role,completionRate,onTimeRate,budgetRate,Fatigue
    "Sarah J.",Engineer,92%,88,95,20
    Mike R.,Logistics,65,60,70,85
    Jessica T.,Sales,90,95,85,40
    David B.,Manager,78,80,75,55
    Priya K.,Analyst,55,50,62,30
    Tom W.,Operations,88,92,90,70
    ,,,,,
""")

MACHINES_CSV = textwrap.dedent("""\
    Machine,Type,Health
    Server Cluster A,IT,98
    Assembly Line 1,Factory,45
    Delivery Truck 4,Fleet,80
""")

SALES_CSV = textwrap.dedent("""\
    Month,Sales
    Jan,"12,000"
    Feb,"15,000"
    Mar,"11,000"
    Apr,"20,000"
    May,"23,000"
    Jun,"25,000"
""")


@pytest.fixture
def data_dir(tmp_path):
    """Raw data directory holding well-formed employee/machine/sales CSVs."""
    raw = tmp_path / "raw"
    raw.mkdir()
    (raw / "employees.csv").write_text(EMPLOYEES_CSV)
    (raw / "machines.csv").write_text(MACHINES_CSV)
    (raw / "sales.csv").write_text(SALES_CSV)
    return raw
