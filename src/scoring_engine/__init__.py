from src.scoring_engine.errors import InvalidInputError, MetricRangeError, ScoringError
from src.scoring_engine.models import (
    Asset,
    Entity,
    RiskLevel,
    RiskPolicy,
    ScoredEntity,
    Worker,
)
from src.scoring_engine.score_engine import ScoreEngine, round_half_up

__all__ = [
    "Asset",
    "Entity",
    "InvalidInputError",
    "MetricRangeError",
    "RiskLevel",
    "RiskPolicy",
    "ScoreEngine",
    "ScoredEntity",
    "ScoringError",
    "Worker",
    "round_half_up",
]
