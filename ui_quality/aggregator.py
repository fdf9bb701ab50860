"""
Score Aggregator

Reduces the samples of a run into category averages and minima, adjusts
the category weights for categories without samples, and combines both
into the average-based and minimum-based quality scores.
"""

import logging
from typing import Iterable

from pydantic import BaseModel, Field

from .accumulator import RunAccumulator
from .models import MetricCategory, ScoreCoefficients

logger = logging.getLogger(__name__)

DEFAULT_COEFFICIENTS = ScoreCoefficients()


class AggregateScores(BaseModel):
    """
    Aggregated scores of one run.

    Attributes:
        category_averages: Mean sample per category (1.0 when empty)
        category_minima: Lowest sample per category (1.0 when empty)
        coefficients: Weights after redistribution
        weighted_average_score: Σ average × weight
        weighted_minimum_score: Σ minimum × weight
    """

    category_averages: dict[MetricCategory, float]
    category_minima: dict[MetricCategory, float]
    coefficients: ScoreCoefficients
    weighted_average_score: float = Field(ge=0.0, le=1.0)
    weighted_minimum_score: float = Field(ge=0.0, le=1.0)


def redistribute_weights(
    defaults: ScoreCoefficients,
    empty: Iterable[MetricCategory]
) -> ScoreCoefficients:
    """
    Move the weight of empty categories onto the others.

    The combined weight of all empty categories is split equally over the
    categories that have samples; empty categories end up with weight 0.
    With a single empty category of weight w, each of the other four gains
    w / 4. When every category is empty the defaults are returned as-is.

    The result is always computed from the given defaults, never from a
    previous redistribution.

    Args:
        defaults: Starting weights
        empty: Categories without samples in this run

    Returns:
        New coefficients summing to 1.0

    Example:
        redistribute_weights(DEFAULT_COEFFICIENTS, {MetricCategory.TOUCH_AREA})
        # touch_area=0.0, element_spacing=0.275, edge_spacing=0.275,
        # content_description=0.225, hint_text=0.225
    """
    empty = set(empty)
    filled = [category for category in MetricCategory if category not in empty]

    if not empty or not filled:
        return defaults

    weights = defaults.as_dict()
    freed = sum(weights[category] for category in empty)
    share = freed / len(filled)

    for category in empty:
        weights[category] = 0.0
    for category in filled:
        weights[category] += share

    return ScoreCoefficients.from_weights(weights)


def _clamp(value: float) -> float:
    return min(1.0, max(0.0, value))


class ScoreAggregator:
    """
    Turns a run accumulator into category and weighted scores.

    The aggregator holds no per-run state; calling aggregate() twice on
    the same accumulator gives identical results.
    """

    def __init__(self, defaults: ScoreCoefficients = DEFAULT_COEFFICIENTS):
        self.defaults = defaults

    def aggregate(self, acc: RunAccumulator) -> AggregateScores:
        averages = {}
        minima = {}

        for category in MetricCategory:
            values = acc.values(category)
            logger.debug("%s samples: %s", category.value, ", ".join(f"{v:.3f}" for v in values))
            if values:
                averages[category] = sum(values) / len(values)
                minima[category] = min(values)
            else:
                averages[category] = 1.0
                minima[category] = 1.0

        empty = acc.empty_categories()
        coefficients = redistribute_weights(self.defaults, empty)
        if empty and coefficients is not self.defaults:
            logger.debug(
                "Redistributed weight of empty categories: %s",
                ", ".join(sorted(category.value for category in empty))
            )

        weighted_average = sum(
            averages[category] * coefficients.weight(category) for category in MetricCategory
        )
        weighted_minimum = sum(
            minima[category] * coefficients.weight(category) for category in MetricCategory
        )

        return AggregateScores(
            category_averages=averages,
            category_minima=minima,
            coefficients=coefficients,
            weighted_average_score=_clamp(weighted_average),
            weighted_minimum_score=_clamp(weighted_minimum),
        )
