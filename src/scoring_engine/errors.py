"""Error taxonomy for scoring and ranking."""


class ScoringError(ValueError):
    """Base class for scoring and ranking errors."""


class InvalidInputError(ScoringError):
    """Raised for structurally unusable input.

    Examples: an empty metric set, an empty series, or ``n <= 0`` for top-N.
    """


class MetricRangeError(ScoringError):
    """Raised when a metric value falls outside [0, 100] at ingestion."""
