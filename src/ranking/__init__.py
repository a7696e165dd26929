from src.ranking.alerts import fatigue_alerts, health_alerts, performance_alerts, readiness
from src.ranking.ranking_service import find_at_risk, metric_getter, top_n

__all__ = [
    "fatigue_alerts",
    "find_at_risk",
    "health_alerts",
    "metric_getter",
    "performance_alerts",
    "readiness",
    "top_n",
]
