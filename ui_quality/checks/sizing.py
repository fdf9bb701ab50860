"""
Touch Target Size Checker

Validates tappable elements against the 48×48 dp minimum touch target
recommended by the Android accessibility guidelines.
"""

import logging

from ..accumulator import RunAccumulator
from ..geometry import to_dp
from ..models import DisplayMetrics, MetricCategory, UiNode

logger = logging.getLogger(__name__)

MIN_TOUCH_TARGET_DP = 48


def check_touch_area(
    node: UiNode,
    display: DisplayMetrics,
    acc: RunAccumulator,
    min_size_dp: float = MIN_TOUCH_TARGET_DP
) -> float:
    """
    Score the touch target size of a node.

    Scoring:
    - 1.0 when both width and height reach the minimum
    - otherwise width × height / min_size², partial credit by area

    The area formula is deliberately asymmetric: a wide but short target
    can score above 1.0 while still failing the height requirement. The
    node keeps that raw score; the aggregated sample is capped at 1.0.

    Args:
        node: Button or ImageButton to score
        display: Display metrics of the run
        acc: Run accumulator receiving the sample and any issue
        min_size_dp: Minimum side length in dp (default: 48)

    Returns:
        Raw touch-area score of the node

    Example:
        # 24×24 dp button
        check_touch_area(node, display, acc)  # 0.25
    """
    width_dp = to_dp(node.bounds.width, display.density)
    height_dp = to_dp(node.bounds.height, display.density)

    if width_dp >= min_size_dp and height_dp >= min_size_dp:
        score = 1.0
    else:
        score = (width_dp * height_dp) / (min_size_dp * min_size_dp)

    acc.record_score(node, MetricCategory.TOUCH_AREA, score, sample_value=min(score, 1.0))
    logger.debug(
        "Touch area of %s: %.1f x %.1f dp, score %.3f",
        node.id, width_dp, height_dp, score
    )

    if width_dp < min_size_dp or height_dp < min_size_dp:
        acc.record_issue(
            node,
            f"Touch target is too small ({width_dp:.1f} x {height_dp:.1f} dp).",
            f"Increase the element size to at least {min_size_dp:g}x{min_size_dp:g} dp."
        )

    return score
