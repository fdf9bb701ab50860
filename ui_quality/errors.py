"""
Error Types

Exceptions raised by the analysis engine and the snapshot adapter.
Absent roots, empty categories and missing node fields are not errors.
"""


class UIQualityError(Exception):
    """Base class for all analyzer errors."""


class TraversalError(UIQualityError):
    """
    The UI tree could not be walked safely.

    Raised when a node is reached twice during one walk (a cyclic or shared
    parent/child relationship) or when the depth cap is exceeded under the
    "fail" depth policy.
    """

    def __init__(self, message: str, node_id: str = "N/A", depth: int = 0):
        super().__init__(message)
        self.node_id = node_id
        self.depth = depth


class AnalysisInProgressError(UIQualityError):
    """A walk was requested while another one is still running."""


class SnapshotError(UIQualityError):
    """The accessibility-tree snapshot is unreadable or malformed."""
