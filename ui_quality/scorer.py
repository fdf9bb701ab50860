"""
UI Scorer Orchestrator

Main orchestration module that walks the UI tree, aggregates the
collected samples and renders the report of one analysis run.
"""

import logging
from typing import Optional

from .aggregator import ScoreAggregator
from .models import Config, DisplayMetrics, ScoreReport, UiNode
from .report import render_export, render_narrative
from .snapshot import Snapshot, resolve_display
from .walker import TreeWalker

logger = logging.getLogger(__name__)


class UIScorer:
    """
    Orchestrates a complete UI quality analysis run.

    Coordinates:
    1. Tree walk (per-node metrics and issues)
    2. Score aggregation (category scores, weight redistribution)
    3. Report rendering (narrative and tabular export)

    Example:
        config = load_config()
        scorer = UIScorer(config)

        snapshot = load_snapshot(Path("window_dump.xml"))
        report = scorer.analyze_snapshot(snapshot)

        print(f"Score: {report.weighted_average_score:.3f}")
    """

    def __init__(self, config: Optional[Config] = None):
        """
        Initialize UI scorer.

        Args:
            config: Configuration with display defaults and traversal limits
        """
        self.config = config or Config()
        self.walker = TreeWalker(
            max_depth=self.config.max_depth,
            depth_policy=self.config.depth_policy
        )
        self.aggregator = ScoreAggregator()

    def analyze(
        self,
        root: Optional[UiNode],
        display: Optional[DisplayMetrics] = None
    ) -> ScoreReport:
        """
        Analyze a UI tree and build its score report.

        Args:
            root: Root node of the tree, or None when there is no window
            display: Display metrics for this run. Defaults to the
                     metrics configured in Config

        Returns:
            ScoreReport with scores, issues, narrative and export

        Raises:
            TraversalError: If the tree is cyclic, or too deep under the
                            "fail" depth policy
            AnalysisInProgressError: If another run is in progress
        """
        display = display or self.config.display_metrics()

        acc = self.walker.walk(root, display)
        scores = self.aggregator.aggregate(acc)

        for category, average in scores.category_averages.items():
            logger.debug(
                "%s: average %.3f, minimum %.3f, weight %.3f",
                category.value,
                average,
                scores.category_minima[category],
                scores.coefficients.weight(category)
            )
        logger.info(
            "UI Quality Score: %.3f (minimal %.3f) over %d elements",
            scores.weighted_average_score,
            scores.weighted_minimum_score,
            acc.elements_visited
        )

        return ScoreReport(
            category_averages=scores.category_averages,
            category_minima=scores.category_minima,
            coefficients=scores.coefficients,
            weighted_average_score=scores.weighted_average_score,
            weighted_minimum_score=scores.weighted_minimum_score,
            issues=acc.issues,
            findings=acc.findings_with_issues,
            elements_analyzed=acc.elements_visited,
            truncated=acc.truncated,
            narrative=render_narrative(acc, scores),
            export=render_export(acc, scores),
        )

    def analyze_snapshot(
        self,
        snapshot: Snapshot,
        display: Optional[DisplayMetrics] = None
    ) -> ScoreReport:
        """
        Analyze a loaded snapshot.

        Display metrics are taken from the display argument, then from the
        snapshot, then from the root bounds and configured density.
        """
        return self.analyze(snapshot.root, display or resolve_display(snapshot, self.config))
