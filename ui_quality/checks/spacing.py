"""
Spacing Checkers

Clearance between an interactive element and its siblings, and between
the element and the four screen edges.
"""

import logging

from ..accumulator import RunAccumulator
from ..geometry import gap_between, to_dp
from ..models import DisplayMetrics, MetricCategory, UiNode

logger = logging.getLogger(__name__)

MIN_ELEMENT_SPACING_DP = 8
MIN_EDGE_SPACING_DP = 16


def check_element_spacing(
    node: UiNode,
    display: DisplayMetrics,
    acc: RunAccumulator,
    min_spacing_dp: float = MIN_ELEMENT_SPACING_DP
) -> float:
    """
    Score the clearance between a node and each of its siblings.

    Each sibling scores 1.0 when the gap reaches min_spacing_dp, otherwise
    gap / min_spacing_dp. The node's score is the worst sibling score, or
    1.0 when it has no siblings.

    Args:
        node: Node to score
        display: Display metrics of the run
        acc: Run accumulator receiving the sample and any issue
        min_spacing_dp: Required clearance in dp (default: 8)

    Returns:
        Element-spacing score of the node
    """
    score = 1.0
    closest_dp = None

    for sibling in node.siblings():
        spacing_dp = to_dp(gap_between(node.bounds, sibling.bounds), display.density)
        sibling_score = 1.0 if spacing_dp >= min_spacing_dp else spacing_dp / min_spacing_dp
        logger.debug("Sibling %s spacing: %.1f dp, score %.3f", sibling.id, spacing_dp, sibling_score)

        if closest_dp is None or spacing_dp < closest_dp:
            closest_dp = spacing_dp
        score = min(score, sibling_score)

    acc.record_score(node, MetricCategory.ELEMENT_SPACING, score)

    if score < 1.0:
        acc.record_issue(
            node,
            f"Insufficient spacing between elements ({closest_dp:.1f} dp).",
            f"Increase spacing to at least {min_spacing_dp:g} dp."
        )

    return score


def check_edge_spacing(
    node: UiNode,
    display: DisplayMetrics,
    acc: RunAccumulator,
    min_spacing_dp: float = MIN_EDGE_SPACING_DP
) -> float:
    """
    Score the distance between a node and the screen edges.

    Each edge scores 1.0 when the distance reaches min_spacing_dp,
    otherwise distance / min_spacing_dp. Distances of elements that stick
    out of the screen count as 0. The node's score is the worst edge.

    All violated edges are reported in a single issue, with their distances.

    Args:
        node: Node to score
        display: Display metrics of the run (screen size in pixels)
        acc: Run accumulator receiving the sample and any issue
        min_spacing_dp: Required edge distance in dp (default: 16)

    Returns:
        Edge-spacing score of the node
    """
    bounds = node.bounds
    distances = {
        "left": to_dp(bounds.left, display.density),
        "top": to_dp(bounds.top, display.density),
        "right": to_dp(display.width_px - bounds.right, display.density),
        "bottom": to_dp(display.height_px - bounds.bottom, display.density),
    }

    score = 1.0
    too_close = {}

    for edge, distance in distances.items():
        distance = max(0.0, distance)
        if distance >= min_spacing_dp:
            edge_score = 1.0
        else:
            edge_score = distance / max(min_spacing_dp, 1)
            too_close[edge] = distance
        logger.debug("Edge %s of %s: %.1f dp, score %.3f", edge, node.id, distance, edge_score)
        score = min(score, edge_score)

    acc.record_score(node, MetricCategory.EDGE_SPACING, score)

    if too_close:
        edges = ", ".join(too_close)
        noun = "edge" if len(too_close) == 1 else "edges"
        measured = ", ".join(f"{edge} {distance:.1f} dp" for edge, distance in too_close.items())
        acc.record_issue(
            node,
            f"Element is too close to the {edges} {noun} ({measured}).",
            f"Increase spacing from the {edges} {noun} to at least {min_spacing_dp:g} dp."
        )

    return score
