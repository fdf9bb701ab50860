"""
Text Metadata Checkers

Presence checks for content descriptions, input hints and TextView text.
These read only the node's own fields.
"""

from ..accumulator import RunAccumulator
from ..models import DisplayMetrics, MetricCategory, UiNode


def check_content_description(node: UiNode, display: DisplayMetrics, acc: RunAccumulator) -> float:
    """
    Score whether a non-text element has a content description.

    Returns:
        1.0 if a non-blank description exists, else 0.0
    """
    score = 1.0 if node.content_description.strip() else 0.0
    acc.record_score(node, MetricCategory.CONTENT_DESCRIPTION, score)

    if score == 0.0:
        acc.record_issue(
            node,
            "Missing content description.",
            "Add a content description for accessibility."
        )

    return score


def check_hint_text(node: UiNode, display: DisplayMetrics, acc: RunAccumulator) -> float:
    """
    Score whether an input field tells the user what to enter.

    Either text or a hint counts.

    Returns:
        1.0 if text or hint is non-empty, else 0.0
    """
    score = 1.0 if (node.text or node.hint) else 0.0
    acc.record_score(node, MetricCategory.HINT_TEXT, score)

    if score == 0.0:
        acc.record_issue(
            node,
            "EditText is missing a hint.",
            "Add a hint to the EditText to provide context to users."
        )

    return score


def check_text_presence(node: UiNode, display: DisplayMetrics, acc: RunAccumulator) -> None:
    # Qualitative only: no sample is recorded
    if not node.text:
        acc.record_issue(
            node,
            "TextView is empty.",
            "Add descriptive text to the TextView."
        )
