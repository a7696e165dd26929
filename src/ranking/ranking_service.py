"""Top-N ranking and risk scans over entity collections.

Both operations work on a copy of the input and never reorder or modify the
caller's collection.
"""

import logging
from typing import Callable, List, Sequence, Tuple, TypeVar, Union

from src.scoring_engine.errors import InvalidInputError

logger = logging.getLogger(__name__)

T = TypeVar("T")

MetricSelector = Union[str, Callable[[T], float]]


def metric_getter(name: str) -> Callable:
    """Build a selector that reads ``entity.metrics[name]``."""

    def _select(entity) -> float:
        return entity.metrics[name]

    _select.__name__ = f"metric_{name}"
    return _select


def top_n(entities: Sequence[T], metric_selector: MetricSelector, n: int) -> List[T]:
    """Return the *n* highest entities by *metric_selector*, best first.

    Ties keep their original relative order. When fewer than *n* entities
    exist the shorter list is returned.

    Args:
        entities: Collection to rank. Not modified.
        metric_selector: Callable returning the ranking value, or a metric
            name looked up in ``entity.metrics``.
        n: Number of entities to return (must be positive).

    Raises:
        InvalidInputError: If ``n <= 0``.
    """
    if n <= 0:
        raise InvalidInputError(f"n must be positive, got {n}")

    selector = metric_getter(metric_selector) if isinstance(metric_selector, str) else metric_selector

    # sorted() is stable even with reverse=True, so ties keep input order.
    ranked = sorted(list(entities), key=selector, reverse=True)
    if len(ranked) < n:
        logger.debug("Requested top %d but only %d entities available", n, len(ranked))
    return ranked[:n]


def find_at_risk(
    entities: Sequence[T],
    score_fn: Callable[[T], float],
    threshold: float,
) -> List[Tuple[T, float]]:
    """Return ``(entity, score)`` for every entity scoring below *threshold*.

    Input order is preserved. An empty result is a normal outcome.
    """
    flagged = []
    for entity in entities:
        score = score_fn(entity)
        if score < threshold:
            flagged.append((entity, score))

    if flagged:
        logger.debug("%d of %d entities below threshold %s", len(flagged), len(entities), threshold)
    return flagged
