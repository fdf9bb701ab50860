"""
Run Accumulator

Mutable state of a single analysis run: metric samples per category and
the per-node findings. A new accumulator is created for every walk and
threaded through the calculators explicitly.
"""

from dataclasses import dataclass, field
from typing import Optional

from .models import IssueRecord, MetricCategory, MetricSample, NodeFinding, UiNode


def _empty_samples() -> dict:
    return {category: [] for category in MetricCategory}


@dataclass
class RunAccumulator:
    """
    Samples and findings collected during one walk.

    Attributes:
        samples: Append-only sample list per category
        findings: Per-node records in traversal order
        elements_visited: Number of nodes the walker visited
        truncated: Set when the depth cap skipped part of the tree
        root_present: False when the walk was started without a root
    """

    samples: dict[MetricCategory, list[MetricSample]] = field(default_factory=_empty_samples)
    findings: list[NodeFinding] = field(default_factory=list)
    elements_visited: int = 0
    truncated: bool = False
    root_present: bool = True
    _index: dict[int, NodeFinding] = field(default_factory=dict, repr=False)

    def finding_for(self, node: UiNode) -> NodeFinding:
        """Get the finding of a node, creating it on first use"""
        finding = self._index.get(id(node))
        if finding is None:
            finding = NodeFinding(element_kind=node.kind, element_id=node.id)
            self._index[id(node)] = finding
            self.findings.append(finding)
        return finding

    def record_score(
        self,
        node: UiNode,
        category: MetricCategory,
        node_score: float,
        sample_value: Optional[float] = None
    ) -> MetricSample:
        """
        Record a node's score for a category and append its sample.

        Args:
            node: Node the score belongs to
            category: Metric category
            node_score: Score shown for the node in reports
            sample_value: Value fed to aggregation, defaults to node_score

        Returns:
            The appended sample
        """
        sample = MetricSample(
            category=category,
            value=node_score if sample_value is None else sample_value
        )
        self.samples[category].append(sample)
        self.finding_for(node).scores[category] = node_score
        return sample

    def record_issue(self, node: UiNode, message: str, suggestion: str) -> IssueRecord:
        issue = IssueRecord(
            element_kind=node.kind,
            element_id=node.id,
            message=message,
            suggestion=suggestion
        )
        self.finding_for(node).issues.append(issue)
        return issue

    def values(self, category: MetricCategory) -> list[float]:
        return [sample.value for sample in self.samples[category]]

    @property
    def issues(self) -> list[IssueRecord]:
        """All issues in the order they were detected"""
        return [issue for finding in self.findings for issue in finding.issues]

    @property
    def findings_with_issues(self) -> list[NodeFinding]:
        return [finding for finding in self.findings if finding.has_issues]

    def empty_categories(self) -> set[MetricCategory]:
        return {category for category, samples in self.samples.items() if not samples}
