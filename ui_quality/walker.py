"""
Tree Walker

Pre-order traversal of the UI tree. Each node is dispatched to the
calculators for its kind, then its children are visited in order.
"""

import logging
import threading
from enum import Enum
from typing import Literal, Optional

from .accumulator import RunAccumulator
from .checks import CHECKS_BY_KIND
from .errors import AnalysisInProgressError, TraversalError
from .models import DisplayMetrics, UiNode

logger = logging.getLogger(__name__)


class WalkerState(str, Enum):
    IDLE = "idle"
    WALKING = "walking"


class TreeWalker:
    """
    Walks one UI tree at a time and collects samples and issues.

    Every walk starts from a fresh RunAccumulator, so nothing recorded by
    an earlier walk can leak into the next one. A second walk requested
    while one is running is rejected with AnalysisInProgressError.

    Example:
        walker = TreeWalker(max_depth=200)
        acc = walker.walk(root, DisplayMetrics(density=2.0, width_px=1080, height_px=1920))
        print(acc.elements_visited, len(acc.issues))
    """

    def __init__(
        self,
        max_depth: int = 200,
        depth_policy: Literal["truncate", "fail"] = "truncate"
    ):
        """
        Initialize tree walker.

        Args:
            max_depth: Deepest level visited, the root being level 0
            depth_policy: "truncate" skips deeper subtrees with a warning,
                          "fail" raises TraversalError
        """
        if max_depth < 0:
            raise ValueError(f"max_depth must not be negative, got {max_depth}")
        self.max_depth = max_depth
        self.depth_policy = depth_policy
        self.state = WalkerState.IDLE
        self._lock = threading.Lock()

    def walk(self, root: Optional[UiNode], display: DisplayMetrics) -> RunAccumulator:
        """
        Walk the tree below root and return what the calculators recorded.

        Args:
            root: Root node, or None when the host has no tree
            display: Display metrics for this run

        Returns:
            RunAccumulator of this walk

        Raises:
            AnalysisInProgressError: If another walk is running
            TraversalError: If a node is reached twice, or the depth cap is
                            hit under the "fail" policy
        """
        if not self._lock.acquire(blocking=False):
            raise AnalysisInProgressError("An analysis run is already in progress")

        try:
            self.state = WalkerState.WALKING
            acc = RunAccumulator()

            if root is None:
                acc.root_present = False
                logger.info("No root node provided, nothing to analyze")
                return acc

            self._visit(root, display, acc, depth=0, seen=set())
            logger.debug("Visited %d elements", acc.elements_visited)
            return acc

        finally:
            self.state = WalkerState.IDLE
            self._lock.release()

    def _visit(
        self,
        root: UiNode,
        display: DisplayMetrics,
        acc: RunAccumulator,
        depth: int,
        seen: set
    ) -> None:
        # Explicit stack, children pushed in reverse to keep pre-order
        stack = [(root, depth)]

        while stack:
            node, depth = stack.pop()

            if depth > self.max_depth:
                if self.depth_policy == "fail":
                    raise TraversalError(
                        f"Tree deeper than {self.max_depth} levels at element {node.id}",
                        node_id=node.id,
                        depth=depth
                    )
                if not acc.truncated:
                    logger.warning(
                        "Tree deeper than %d levels, skipping subtrees below that depth",
                        self.max_depth
                    )
                acc.truncated = True
                continue

            if id(node) in seen:
                raise TraversalError(
                    f"Element {node.id} reached twice: the tree contains a cycle or a shared node",
                    node_id=node.id,
                    depth=depth
                )
            seen.add(id(node))

            acc.elements_visited += 1
            for check in CHECKS_BY_KIND[node.kind]:
                check(node, display, acc)

            stack.extend((child, depth + 1) for child in reversed(node.children))
