"""
UI Quality Analyzer - Accessibility Tree Scoring

Scores a snapshot of a rendered UI's accessibility tree and lists
concrete issues:
- Touch target size
- Spacing between elements and from screen edges
- Missing content descriptions
- Missing input hints
"""

from .errors import AnalysisInProgressError, SnapshotError, TraversalError, UIQualityError
from .models import (
    Bounds,
    DisplayMetrics,
    ElementKind,
    IssueRecord,
    MetricCategory,
    ScoreCoefficients,
    ScoreReport,
    UiNode,
)
from .scorer import UIScorer
from .snapshot import Snapshot, load_snapshot

__version__ = "0.1.0"
__all__ = [
    "AnalysisInProgressError",
    "Bounds",
    "DisplayMetrics",
    "ElementKind",
    "IssueRecord",
    "MetricCategory",
    "ScoreCoefficients",
    "ScoreReport",
    "Snapshot",
    "SnapshotError",
    "TraversalError",
    "UIQualityError",
    "UIScorer",
    "UiNode",
    "load_snapshot",
]
