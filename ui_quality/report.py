"""
Report Formatter

Renders the findings of a run as a human-readable narrative and as a
semicolon-separated table with one row per element that has issues.
"""

from .accumulator import RunAccumulator
from .aggregator import AggregateScores
from .checks import METRICS_BY_KIND
from .models import MetricCategory, NodeFinding

SEPARATOR = ";"
ISSUE_JOINER = " | "

SCORE_DEFINITION = (
    "(calculated in 0-1 scale, where 0 is the lowest score and 1 is the highest)"
)
MINIMAL_SCORE_DEFINITION = (
    "(calculated from the lowest score of each category instead of the average, "
    "same 0-1 scale)"
)
NO_ROOT_MESSAGE = "No root node was provided, no elements were analyzed."
NO_ISSUES_MESSAGE = "No issues found."
TRUNCATED_MESSAGE = (
    "Warning: the tree exceeded the maximum depth, deeper elements were not analyzed."
)

EXPORT_HEADER = SEPARATOR.join([
    "Element Type",
    "ID",
    "Issue",
    "Suggestion",
    "",
    "",
    "TouchAreaScore",
    "ElementSpacingScore",
    "EdgeSpacingScore",
    "ContentDescriptionScore",
    "HintTextScore",
])

# Order of the score columns in the export
SCORE_COLUMNS = [
    MetricCategory.TOUCH_AREA,
    MetricCategory.ELEMENT_SPACING,
    MetricCategory.EDGE_SPACING,
    MetricCategory.CONTENT_DESCRIPTION,
    MetricCategory.HINT_TEXT,
]


def _fmt(value: float) -> str:
    return f"{value:.3f}"


def _field(text: str) -> str:
    """Make a value safe for a single export field"""
    return " ".join(text.replace(SEPARATOR, ",").split())


def render_narrative(acc: RunAccumulator, scores: AggregateScores) -> str:
    """
    Render the human-readable report.

    Layout:
        UI Quality Score: 0.812
        (definition)
        UI Quality Minimal Score: 0.430
        (definition)

        Elements analyzed: 12

        List of identified issues:
        Button found: ID=com.app:id/ok
         - Issue: Touch target is too small (24.0 x 24.0 dp).
         - Suggestion: Increase the element size to at least 48x48 dp.

    Args:
        acc: Accumulator of the run
        scores: Aggregated scores of the same run

    Returns:
        Narrative text
    """
    lines = [
        f"UI Quality Score: {_fmt(scores.weighted_average_score)}",
        SCORE_DEFINITION,
        f"UI Quality Minimal Score: {_fmt(scores.weighted_minimum_score)}",
        MINIMAL_SCORE_DEFINITION,
        "",
    ]

    if not acc.root_present:
        lines.append(NO_ROOT_MESSAGE)
        return "\n".join(lines) + "\n"

    lines.append(f"Elements analyzed: {acc.elements_visited}")
    if acc.truncated:
        lines.append(TRUNCATED_MESSAGE)
    lines.append("")

    findings = acc.findings_with_issues
    if not findings:
        lines.append(NO_ISSUES_MESSAGE)
        return "\n".join(lines) + "\n"

    lines.append("List of identified issues:")
    for finding in findings:
        lines.append(f"{finding.element_kind.value} found: ID={finding.element_id}")
        for issue in finding.issues:
            lines.append(f" - Issue: {issue.message}")
            lines.append(f" - Suggestion: {issue.suggestion}")

    return "\n".join(lines) + "\n"


def _export_row(finding: NodeFinding) -> str:
    applicable = METRICS_BY_KIND[finding.element_kind]
    score_fields = []
    for category in SCORE_COLUMNS:
        if category in applicable and category in finding.scores:
            score_fields.append(_fmt(finding.scores[category]))
        else:
            score_fields.append("")

    fields = [
        finding.element_kind.value,
        _field(finding.element_id),
        _field(ISSUE_JOINER.join(issue.message for issue in finding.issues)),
        _field(ISSUE_JOINER.join(issue.suggestion for issue in finding.issues)),
        "",
        "",
    ] + score_fields
    return SEPARATOR.join(fields)


def render_export(acc: RunAccumulator, scores: AggregateScores) -> str:
    """
    Render the semicolon-separated export.

    One header row, one row per element with issues, then a fixed
    five-line trailer: a blank row, average scores, coefficients used,
    UI quality score and UI quality minimal score. Numbers use three
    decimals. Several issues of one element share its row, joined by " | ".

    Args:
        acc: Accumulator of the run
        scores: Aggregated scores of the same run

    Returns:
        Export text, newline terminated
    """
    rows = [EXPORT_HEADER]
    rows.extend(_export_row(finding) for finding in acc.findings_with_issues)

    averages = [_fmt(scores.category_averages[category]) for category in SCORE_COLUMNS]
    weights = [_fmt(scores.coefficients.weight(category)) for category in SCORE_COLUMNS]

    rows.append("")
    rows.append(SEPARATOR * 5 + SEPARATOR.join(["Average scores:"] + averages))
    rows.append(SEPARATOR * 5 + SEPARATOR.join(["Coefficients:"] + weights))
    rows.append(SEPARATOR * 5 + f"UI Quality Score:;{_fmt(scores.weighted_average_score)}")
    rows.append(SEPARATOR * 5 + f"UI Quality Minimal Score:;{_fmt(scores.weighted_minimum_score)}")

    return "\n".join(rows) + "\n"
