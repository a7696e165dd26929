"""Dashboard alert rules expressed as threshold scans.

Every rule has the same shape: an entity is flagged when its score falls
below a threshold. Fatigue is turned into a readiness score
(``100 - fatigue``) so that high fatigue reads as a low score.
"""

from typing import List, Sequence, Tuple

from src.ranking.ranking_service import find_at_risk
from src.scoring_engine.config import (
    ASSET_HEALTH_THRESHOLD,
    DEFAULT_AT_RISK_BELOW,
    FATIGUE_READINESS_THRESHOLD,
    METRIC_MAX,
)
from src.scoring_engine.models import Entity, ScoredEntity


def readiness(entity: Entity) -> float:
    """Readiness score of a worker: ``100 - fatigue`` (100 when unknown)."""
    return METRIC_MAX - entity.metrics.get("fatigue", 0.0)


def health(entity: Entity) -> float:
    return entity.metric("health")


def fatigue_alerts(
    employees: Sequence[Entity],
    threshold: float = FATIGUE_READINESS_THRESHOLD,
) -> List[Tuple[Entity, float]]:
    """Workers who need rest (readiness below *threshold*)."""
    return find_at_risk(employees, readiness, threshold)


def health_alerts(
    machines: Sequence[Entity],
    threshold: float = ASSET_HEALTH_THRESHOLD,
) -> List[Tuple[Entity, float]]:
    """Assets that need maintenance (health below *threshold*)."""
    return find_at_risk(machines, health, threshold)


def performance_alerts(
    scored: Sequence[ScoredEntity],
    threshold: float = DEFAULT_AT_RISK_BELOW,
) -> List[Tuple[ScoredEntity, float]]:
    """Scored workers whose composite score is below *threshold*."""
    return find_at_risk(scored, lambda s: s.composite_score, threshold)
