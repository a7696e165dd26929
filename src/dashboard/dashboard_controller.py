"""Dashboard controller - applies actions and periodic ticks to the state.

The controller is the only writer of :class:`DashboardState`. Scores,
rankings and alerts are computed by :meth:`DashboardController.summary`
against a snapshot, so a tick driver can call ``tick()`` and ``summary()``
on whatever schedule it likes. Stopping the refresh loop means no longer
calling ``tick()``.
"""

import logging
import random
from dataclasses import dataclass, field
from enum import Enum
from typing import List, Optional

from src.dashboard.config import (
    CLOUD_PROVIDERS,
    HEALTH_DECAY_PER_TICK,
    LOAD_SAMPLE_MAX,
    LOAD_SAMPLE_MIN,
    MAINTENANCE_SAVINGS,
    REST_SCORE_BOOST,
    TOP_PERFORMER_COUNT,
    TRAINING_SCORE_BOOST,
)
from src.dashboard.dashboard_state import DashboardState
from src.ranking.alerts import fatigue_alerts, health_alerts
from src.ranking.ranking_service import top_n
from src.scoring_engine.config import (
    ASSET_HEALTH_THRESHOLD,
    ASSET_SCORE_METRICS,
    FATIGUE_READINESS_THRESHOLD,
    METRIC_MAX,
    METRIC_MIN,
    WORKER_SCORE_METRICS,
)
from src.scoring_engine.errors import InvalidInputError
from src.scoring_engine.models import Entity, RiskLevel, ScoredEntity
from src.scoring_engine.score_engine import ScoreEngine

logger = logging.getLogger(__name__)


class AdvisorStatus(Enum):
    RISK_ALERT = "risk_alert"
    OPTIMIZATION = "optimization"


@dataclass
class DashboardSummary:
    """Plain values for one refresh cycle. No formatting or markup."""

    current_load: float
    savings: int
    cloud_provider: str
    alert_count: int
    advisor_status: AdvisorStatus
    next_load_forecast: Optional[int]
    sales_forecast: Optional[int]
    load_prediction: List[float] = field(default_factory=list)
    employee_actions: List[str] = field(default_factory=list)  # "rest" | "train" | "optimal", by index
    machine_actions: List[str] = field(default_factory=list)  # "fix" | "ok", by index
    top_performers: List[str] = field(default_factory=list)
    scored_employees: List[ScoredEntity] = field(default_factory=list)


def _clamp_metric(value: float) -> float:
    return max(METRIC_MIN, min(METRIC_MAX, value))


class DashboardController:
    """Main controller for the operations dashboard.

    Coordinates between DashboardState (state mutation) and the scoring
    engines / ranking service (read-only computation).
    """

    def __init__(
        self,
        state: Optional[DashboardState] = None,
        rng: Optional[random.Random] = None,
    ):
        self.state = state if state is not None else DashboardState.create_default()
        self.rng = rng or random.Random()
        self.worker_engine = ScoreEngine(metric_fields=WORKER_SCORE_METRICS)
        self.asset_engine = ScoreEngine(metric_fields=ASSET_SCORE_METRICS)

    # ------------------------------------------------------------------
    # Actions
    # ------------------------------------------------------------------

    def rest_employee(self, index: int) -> Entity:
        """Approve rest: fatigue drops to 0 and performance metrics rise by 10.

        Raises:
            IndexError: If *index* does not name an employee.
        """
        employee = self._employee(index)
        employee.metrics["fatigue"] = METRIC_MIN
        self._boost_performance(employee, REST_SCORE_BOOST)
        logger.info("Approved rest for %s; fatigue is now 0", employee.name)
        return employee

    def train_employee(self, index: int) -> Entity:
        """Send an employee to training: performance metrics rise by 15.

        Raises:
            IndexError: If *index* does not name an employee.
        """
        employee = self._employee(index)
        self._boost_performance(employee, TRAINING_SCORE_BOOST)
        logger.info("Sent %s to training", employee.name)
        return employee

    def fix_machine(self, index: int) -> Entity:
        """Dispatch maintenance: health resets to 100 and savings grow.

        Raises:
            IndexError: If *index* does not name a machine.
        """
        try:
            machine = self.state.get_machine(index)
        except IndexError:
            logger.warning("Rejected maintenance for unknown machine index %s", index)
            raise
        machine.metrics["health"] = METRIC_MAX
        self.state.savings += MAINTENANCE_SAVINGS
        logger.info(
            "Maintenance crew dispatched to %s; savings now %d",
            machine.name, self.state.savings,
        )
        return machine

    def toggle_cloud(self) -> str:
        """Switch to the other cloud warehouse provider and return its name."""
        current = self.state.cloud_provider
        if current in CLOUD_PROVIDERS:
            position = CLOUD_PROVIDERS.index(current)
            self.state.cloud_provider = CLOUD_PROVIDERS[(position + 1) % len(CLOUD_PROVIDERS)]
        else:
            self.state.cloud_provider = CLOUD_PROVIDERS[0]
        logger.info("Switched to %s", self.state.cloud_provider)
        return self.state.cloud_provider

    def tick(self) -> int:
        """Advance the simulation by one refresh interval.

        Appends a random load sample, drops the oldest so the window length
        is unchanged, and degrades every machine's health (never below 0).

        Returns:
            The new load sample.
        """
        load = self.rng.randint(LOAD_SAMPLE_MIN, LOAD_SAMPLE_MAX)
        self.state.load_history.append(load)
        if len(self.state.load_history) > 1:
            self.state.load_history.pop(0)

        for machine in self.state.machines:
            if "health" in machine.metrics:
                machine.metrics["health"] = _clamp_metric(
                    machine.metrics["health"] - HEALTH_DECAY_PER_TICK
                )

        self.state.tick_count += 1
        logger.debug("Tick %d: load=%d", self.state.tick_count, load)
        return load

    # ------------------------------------------------------------------
    # Read-only computation
    # ------------------------------------------------------------------

    def summary(self) -> DashboardSummary:
        """Compute KPIs, recommendations and forecasts from a snapshot.

        Employees that cannot be scored (e.g. missing metrics) are skipped
        with a warning rather than failing the whole refresh.
        """
        view = self.state.snapshot()

        scored: List[ScoredEntity] = []
        for employee in view.employees:
            try:
                scored.append(self.worker_engine.score_entity(employee))
            except InvalidInputError as e:
                logger.warning("Skipping employee in summary: %s", e)

        fatigued = fatigue_alerts(view.employees, FATIGUE_READINESS_THRESHOLD)
        failing = health_alerts(
            [m for m in view.machines if "health" in m.metrics],
            ASSET_HEALTH_THRESHOLD,
        )
        alert_count = len(fatigued) + len(failing)

        # Names are not unique, so match on the snapshot objects themselves.
        needs_rest = {id(e) for e, _ in fatigued}
        needs_training = {
            id(s.entity) for s in scored if s.risk_level is RiskLevel.AT_RISK
        }
        employee_actions = []
        for employee in view.employees:
            if id(employee) in needs_rest:
                employee_actions.append("rest")
            elif id(employee) in needs_training:
                employee_actions.append("train")
            else:
                employee_actions.append("optimal")

        needs_fix = {id(m) for m, _ in failing}
        machine_actions = [
            "fix" if id(m) in needs_fix else "ok" for m in view.machines
        ]

        top_performers = [
            s.name for s in top_n(scored, lambda s: s.composite_score, TOP_PERFORMER_COUNT)
        ]

        next_load = (
            self.worker_engine.linear_forecast(view.load_history)
            if view.load_history else None
        )
        sales_forecast = (
            self.worker_engine.linear_forecast(view.sales_history)
            if view.sales_history else None
        )

        return DashboardSummary(
            current_load=view.current_load,
            savings=view.savings,
            cloud_provider=view.cloud_provider,
            alert_count=alert_count,
            advisor_status=(
                AdvisorStatus.RISK_ALERT if alert_count > 0 else AdvisorStatus.OPTIMIZATION
            ),
            next_load_forecast=next_load,
            sales_forecast=sales_forecast,
            load_prediction=list(view.load_prediction),
            employee_actions=employee_actions,
            machine_actions=machine_actions,
            top_performers=top_performers,
            scored_employees=scored,
        )

    def machine_scores(self) -> List[ScoredEntity]:
        """Score every machine by health."""
        return self.asset_engine.score_all(self.state.snapshot().machines)

    # ------------------------------------------------------------------
    # Private helpers
    # ------------------------------------------------------------------

    def _employee(self, index: int) -> Entity:
        try:
            return self.state.get_employee(index)
        except IndexError:
            logger.warning("Rejected action for unknown employee index %s", index)
            raise

    @staticmethod
    def _boost_performance(employee: Entity, amount: float) -> None:
        for key in WORKER_SCORE_METRICS:
            if key in employee.metrics:
                employee.metrics[key] = _clamp_metric(employee.metrics[key] + amount)
