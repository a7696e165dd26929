"""Data models for the scoring engine."""

import math
import numbers
from dataclasses import dataclass, field
from enum import Enum
from typing import Dict, Mapping, Optional

from src.scoring_engine.config import (
    DEFAULT_AT_RISK_BELOW,
    DEFAULT_HIGH_PERFORMER_FROM,
    METRIC_MAX,
    METRIC_MIN,
)
from src.scoring_engine.errors import MetricRangeError


class RiskLevel(Enum):
    """Risk classification of a composite score."""

    STABLE = "stable"
    AT_RISK = "at_risk"
    HIGH_PERFORMER = "high_performer"


def validate_metric(name: str, value, entity_name: Optional[str] = None) -> float:
    """Return *value* as a float, raising if it is not a number in [0, 100]."""
    owner = f" for {entity_name!r}" if entity_name else ""
    if isinstance(value, bool) or not isinstance(value, numbers.Real):
        raise MetricRangeError(
            f"Metric {name!r}{owner} must be numeric, got {value!r}"
        )
    value = float(value)
    if math.isnan(value) or not METRIC_MIN <= value <= METRIC_MAX:
        raise MetricRangeError(
            f"Metric {name!r}{owner} out of range "
            f"[{METRIC_MIN:g}, {METRIC_MAX:g}]: {value!r}"
        )
    return value


@dataclass
class Entity:
    """A worker or an asset.

    Workers and assets share one shape: a display name, a role (job title for
    workers, asset type for machines) and a bag of percentage metrics.
    """

    name: str
    role: str
    metrics: Dict[str, float] = field(default_factory=dict)

    @classmethod
    def from_record(
        cls,
        name: str,
        role: str,
        metrics: Mapping[str, float],
    ) -> "Entity":
        """Factory that validates every metric before building the entity.

        Raises:
            MetricRangeError: If any metric is non-numeric or outside [0, 100].
        """
        validated = {
            key: validate_metric(key, value, entity_name=name)
            for key, value in metrics.items()
        }
        return cls(name=name, role=role, metrics=validated)

    def metric(self, key: str) -> float:
        """Get a metric value by name."""
        return self.metrics[key]

    def to_dict(self) -> Dict:
        return {"name": self.name, "role": self.role, "metrics": dict(self.metrics)}


# Workers and assets are structurally identical.
Worker = Entity
Asset = Entity


@dataclass
class ScoredEntity:
    """An entity plus its derived scores. Recomputed on demand, never stored."""

    entity: Entity
    composite_score: int
    forecast_score: int
    risk_level: RiskLevel

    @property
    def name(self) -> str:
        return self.entity.name

    def to_dict(self) -> Dict:
        data = self.entity.to_dict()
        data.update(
            {
                "composite_score": self.composite_score,
                "forecast_score": self.forecast_score,
                "risk_level": self.risk_level.value,
            }
        )
        return data


@dataclass
class RiskPolicy:
    """Named cutoffs for risk classification.

    * ``score < at_risk_below``          -> AT_RISK
    * ``score >= high_performer_from``   -> HIGH_PERFORMER
    * otherwise                          -> STABLE
    """

    at_risk_below: float = DEFAULT_AT_RISK_BELOW
    high_performer_from: float = DEFAULT_HIGH_PERFORMER_FROM

    def __post_init__(self):
        for label, cutoff in (
            ("at_risk_below", self.at_risk_below),
            ("high_performer_from", self.high_performer_from),
        ):
            if not METRIC_MIN <= cutoff <= METRIC_MAX:
                raise ValueError(
                    f"{label} must be in [{METRIC_MIN:g}, {METRIC_MAX:g}], "
                    f"got {cutoff!r}"
                )
