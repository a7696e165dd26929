"""Composite scoring, forecasting and risk classification.

Every function here is pure: inputs are read, never modified, and no state is
kept between calls.
"""

import logging
import math
from typing import Iterable, List, Optional, Sequence

from src.scoring_engine.config import (
    DEFAULT_GROWTH_RATE,
    FORECAST_CEILING,
    FORECAST_DECAY_MULTIPLIER,
    FORECAST_GROWTH_CUTOFF,
    FORECAST_GROWTH_MULTIPLIER,
)
from src.scoring_engine.errors import InvalidInputError
from src.scoring_engine.models import Entity, RiskLevel, RiskPolicy, ScoredEntity

logger = logging.getLogger(__name__)


def round_half_up(value: float) -> int:
    """Round to the nearest integer, .5 going up (2.5 -> 3, -2.5 -> -2)."""
    return int(math.floor(value + 0.5))


class ScoreEngine:
    """Score entities from a configured set of metrics.

    Args:
        metric_fields: Metric names averaged into the composite score.
            ``None`` averages every metric the entity carries.
        risk_policy: Cutoffs used by :meth:`classify_risk`.
    """

    def __init__(
        self,
        metric_fields: Optional[Sequence[str]] = None,
        risk_policy: Optional[RiskPolicy] = None,
    ):
        self.metric_fields = tuple(metric_fields) if metric_fields is not None else None
        self.risk_policy = risk_policy or RiskPolicy()

    # ------------------------------------------------------------------
    # Public API
    # ------------------------------------------------------------------

    def composite_score(self, entity: Entity) -> int:
        """Mean of the entity's configured metrics, rounded to an integer.

        Raises:
            InvalidInputError: If the metric set is empty or a configured
                metric is missing from the entity.
        """
        if self.metric_fields is None:
            values = list(entity.metrics.values())
        else:
            missing = [f for f in self.metric_fields if f not in entity.metrics]
            if missing:
                raise InvalidInputError(
                    f"{entity.name!r} is missing metrics: {', '.join(missing)}"
                )
            values = [entity.metrics[f] for f in self.metric_fields]

        if not values:
            raise InvalidInputError(f"{entity.name!r} has no metrics to score")

        score = round_half_up(sum(values) / len(values))
        logger.debug("Composite score for %s: %d (%d metrics)", entity.name, score, len(values))
        return score

    def forecast(self, current_score: float) -> int:
        """Project a score one step ahead.

        Formula::

            score > 80  ->  round(score * 1.05)
            otherwise   ->  round(score * 0.98)

        The result is capped at 100. There is no lower clamp.
        """
        if current_score > FORECAST_GROWTH_CUTOFF:
            projected = round_half_up(current_score * FORECAST_GROWTH_MULTIPLIER)
        else:
            projected = round_half_up(current_score * FORECAST_DECAY_MULTIPLIER)
        return min(projected, FORECAST_CEILING)

    def classify_risk(self, score: float, threshold: Optional[float] = None) -> RiskLevel:
        """Classify *score* against the risk policy.

        *threshold* overrides the policy's ``at_risk_below`` cutoff. The
        at-risk check runs first, so a threshold above the high-performer
        cutoff marks everything below it as at risk.
        """
        if threshold is None:
            threshold = self.risk_policy.at_risk_below
        if score < threshold:
            return RiskLevel.AT_RISK
        if score >= self.risk_policy.high_performer_from:
            return RiskLevel.HIGH_PERFORMER
        return RiskLevel.STABLE

    def linear_forecast(
        self,
        series: Sequence[float],
        growth_rate: float = DEFAULT_GROWTH_RATE,
    ) -> int:
        """Project the next value of *series* by applying *growth_rate* to its last value.

        Raises:
            InvalidInputError: If *series* is empty.
        """
        if len(series) == 0:
            raise InvalidInputError("Cannot forecast an empty series")
        return round_half_up(series[-1] * (1 + growth_rate))

    def score_entity(self, entity: Entity) -> ScoredEntity:
        """Composite score, forecast and risk level for one entity."""
        composite = self.composite_score(entity)
        return ScoredEntity(
            entity=entity,
            composite_score=composite,
            forecast_score=self.forecast(composite),
            risk_level=self.classify_risk(composite),
        )

    def score_all(self, entities: Iterable[Entity]) -> List[ScoredEntity]:
        """Score every entity, preserving input order."""
        return [self.score_entity(e) for e in entities]
