"""Dashboard state - single source of truth for the operations snapshot."""

import copy
from dataclasses import dataclass, field
from typing import List

from src.dashboard.config import (
    DEFAULT_CLOUD_PROVIDER,
    DEFAULT_EMPLOYEES,
    DEFAULT_LOAD_HISTORY,
    DEFAULT_LOAD_PREDICTION,
    DEFAULT_MACHINES,
    DEFAULT_SALES_HISTORY,
    DEFAULT_SAVINGS,
)
from src.scoring_engine.models import Entity


@dataclass
class DashboardState:
    """Complete dashboard state.

    Owned by :class:`DashboardController`; scoring code only ever sees a
    copy taken with :meth:`snapshot`.
    """

    employees: List[Entity]
    machines: List[Entity]
    load_history: List[float]
    load_prediction: List[float] = field(default_factory=list)
    sales_history: List[float] = field(default_factory=list)
    savings: int = 0
    cloud_provider: str = DEFAULT_CLOUD_PROVIDER
    tick_count: int = 0

    @classmethod
    def create_default(cls) -> "DashboardState":
        """Factory method for the demo snapshot."""
        employees = [
            Entity.from_record(
                name,
                role,
                {
                    "completion_rate": completion,
                    "on_time_rate": on_time,
                    "budget_rate": budget,
                    "fatigue": fatigue,
                },
            )
            for name, role, completion, on_time, budget, fatigue in DEFAULT_EMPLOYEES
        ]
        machines = [
            Entity.from_record(name, asset_type, {"health": health})
            for name, asset_type, health in DEFAULT_MACHINES
        ]
        return cls(
            employees=employees,
            machines=machines,
            load_history=list(DEFAULT_LOAD_HISTORY),
            load_prediction=list(DEFAULT_LOAD_PREDICTION),
            sales_history=list(DEFAULT_SALES_HISTORY),
            savings=DEFAULT_SAVINGS,
        )

    def snapshot(self) -> "DashboardState":
        """Deep copy for read-only computation."""
        return copy.deepcopy(self)

    @property
    def current_load(self) -> float:
        """Most recent load sample (0 when there is no history)."""
        return self.load_history[-1] if self.load_history else 0

    def get_employee(self, index: int) -> Entity:
        """Get an employee by position, rejecting negative indices."""
        if not 0 <= index < len(self.employees):
            raise IndexError(
                f"Employee index {index} out of range [0, {len(self.employees)})"
            )
        return self.employees[index]

    def get_machine(self, index: int) -> Entity:
        """Get a machine by position, rejecting negative indices."""
        if not 0 <= index < len(self.machines):
            raise IndexError(
                f"Machine index {index} out of range [0, {len(self.machines)})"
            )
        return self.machines[index]
