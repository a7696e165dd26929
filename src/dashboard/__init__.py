from src.dashboard.dashboard_controller import (
    AdvisorStatus,
    DashboardController,
    DashboardSummary,
)
from src.dashboard.dashboard_state import DashboardState

__all__ = [
    "AdvisorStatus",
    "DashboardController",
    "DashboardState",
    "DashboardSummary",
]
