"""
Metric Calculators

One calculator per scored dimension. Every calculator takes
(node, display, acc), reads the node and appends samples and issues to
the run accumulator.
"""

from ..models import ElementKind, MetricCategory
from .content import check_content_description, check_hint_text, check_text_presence
from .sizing import MIN_TOUCH_TARGET_DP, check_touch_area
from .spacing import MIN_EDGE_SPACING_DP, MIN_ELEMENT_SPACING_DP, check_edge_spacing, check_element_spacing

# Calculators applied to each kind, in order
CHECKS_BY_KIND = {
    ElementKind.TEXT_VIEW: (check_text_presence,),
    ElementKind.EDIT_TEXT: (check_hint_text,),
    ElementKind.BUTTON: (check_touch_area, check_element_spacing, check_edge_spacing),
    ElementKind.IMAGE_VIEW: (check_content_description,),
    ElementKind.IMAGE_BUTTON: (
        check_touch_area,
        check_content_description,
        check_element_spacing,
        check_edge_spacing,
    ),
    ElementKind.CHECK_BOX: (check_content_description, check_element_spacing, check_edge_spacing),
    ElementKind.OTHER: (),
}

# Scored categories per kind, used for export column population
METRICS_BY_KIND = {
    ElementKind.TEXT_VIEW: frozenset(),
    ElementKind.EDIT_TEXT: frozenset({MetricCategory.HINT_TEXT}),
    ElementKind.BUTTON: frozenset({
        MetricCategory.TOUCH_AREA,
        MetricCategory.ELEMENT_SPACING,
        MetricCategory.EDGE_SPACING,
    }),
    ElementKind.IMAGE_VIEW: frozenset({MetricCategory.CONTENT_DESCRIPTION}),
    ElementKind.IMAGE_BUTTON: frozenset({
        MetricCategory.TOUCH_AREA,
        MetricCategory.CONTENT_DESCRIPTION,
        MetricCategory.ELEMENT_SPACING,
        MetricCategory.EDGE_SPACING,
    }),
    ElementKind.CHECK_BOX: frozenset({
        MetricCategory.CONTENT_DESCRIPTION,
        MetricCategory.ELEMENT_SPACING,
        MetricCategory.EDGE_SPACING,
    }),
    ElementKind.OTHER: frozenset(),
}

__all__ = [
    "CHECKS_BY_KIND",
    "METRICS_BY_KIND",
    "MIN_TOUCH_TARGET_DP",
    "MIN_ELEMENT_SPACING_DP",
    "MIN_EDGE_SPACING_DP",
    "check_touch_area",
    "check_element_spacing",
    "check_edge_spacing",
    "check_content_description",
    "check_hint_text",
    "check_text_presence",
]
