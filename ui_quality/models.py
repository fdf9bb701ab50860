"""
Data Models for UI Quality Analysis

Type-safe Pydantic models for the accessibility-tree snapshot, the
per-node findings and the final score report.
"""

import re
from datetime import datetime
from enum import Enum
from typing import Iterator, Literal, Optional

from pydantic import BaseModel, ConfigDict, Field, PrivateAttr, field_validator, model_validator

from .errors import SnapshotError


BOUNDS_RE = re.compile(r"^\s*\[(-?\d+),(-?\d+)\]\[(-?\d+),(-?\d+)\]\s*$")


class ElementKind(str, Enum):
    """Closed set of element categories the analyzer distinguishes."""

    TEXT_VIEW = "TextView"
    EDIT_TEXT = "EditText"
    BUTTON = "Button"
    IMAGE_VIEW = "ImageView"
    IMAGE_BUTTON = "ImageButton"
    CHECK_BOX = "CheckBox"
    OTHER = "Other"

    @classmethod
    def from_class_name(cls, class_name: Optional[str]) -> "ElementKind":
        """
        Map a widget class name to an element kind.

        Accepts fully qualified names ("android.widget.Button") as well as
        simple names ("Button"). Anything unrecognised is OTHER.
        """
        if not class_name:
            return cls.OTHER
        simple_name = class_name.strip().rsplit(".", 1)[-1]
        for kind in cls:
            if kind.value == simple_name:
                return kind
        return cls.OTHER


class MetricCategory(str, Enum):
    """The five scored defect dimensions."""

    TOUCH_AREA = "TouchArea"
    ELEMENT_SPACING = "ElementSpacing"
    EDGE_SPACING = "EdgeSpacing"
    CONTENT_DESCRIPTION = "ContentDescription"
    HINT_TEXT = "HintText"

    @property
    def key(self) -> str:
        """Field name of this category on ScoreCoefficients"""
        return _CATEGORY_KEYS[self]


_CATEGORY_KEYS = {
    MetricCategory.TOUCH_AREA: "touch_area",
    MetricCategory.ELEMENT_SPACING: "element_spacing",
    MetricCategory.EDGE_SPACING: "edge_spacing",
    MetricCategory.CONTENT_DESCRIPTION: "content_description",
    MetricCategory.HINT_TEXT: "hint_text",
}


class Bounds(BaseModel):
    """
    Screen-space rectangle in raw pixels.

    Attributes:
        left: Left edge x coordinate
        top: Top edge y coordinate
        right: Right edge x coordinate
        bottom: Bottom edge y coordinate
    """

    left: int = 0
    top: int = 0
    right: int = 0
    bottom: int = 0

    @property
    def width(self) -> int:
        return max(0, self.right - self.left)

    @property
    def height(self) -> int:
        return max(0, self.bottom - self.top)

    @classmethod
    def parse(cls, raw: str) -> "Bounds":
        """
        Parse the uiautomator bounds format "[left,top][right,bottom]".

        Raises:
            SnapshotError: If the string is not in that format
        """
        match = BOUNDS_RE.match(raw or "")
        if not match:
            raise SnapshotError(f"Invalid bounds format: {raw!r}")
        left, top, right, bottom = (int(value) for value in match.groups())
        return cls(left=left, top=top, right=right, bottom=bottom)

    def __str__(self) -> str:
        return f"[{self.left},{self.top}][{self.right},{self.bottom}]"


class UiNode(BaseModel):
    """
    One element of the accessibility-tree snapshot.

    The tree is owned by the host. The analyzer only reads it; the parent
    back-reference exists for sibling lookups and is linked when a node is
    constructed with its children.

    Attributes:
        kind: Element category (class-name strings are accepted and mapped)
        id: Resource identifier, "N/A" when absent
        bounds: Screen rectangle in raw pixels
        text: Visible text, empty when absent
        hint: Input hint, empty when absent
        content_description: Assistive description, empty when absent
        children: Ordered child nodes
    """

    model_config = ConfigDict(populate_by_name=True)

    kind: ElementKind = ElementKind.OTHER
    id: str = "N/A"
    bounds: Bounds = Field(default_factory=Bounds)
    text: str = ""
    hint: str = ""
    content_description: str = Field(default="", alias="contentDescription")
    children: list["UiNode"] = Field(default_factory=list)

    _parent: Optional["UiNode"] = PrivateAttr(default=None)

    @field_validator("kind", mode="before")
    @classmethod
    def coerce_kind(cls, v):
        """Accept raw widget class names as well as ElementKind values"""
        if isinstance(v, ElementKind):
            return v
        if v is None:
            return ElementKind.OTHER
        try:
            return ElementKind(v)
        except ValueError:
            return ElementKind.from_class_name(str(v))

    @field_validator("id", mode="before")
    @classmethod
    def default_id(cls, v) -> str:
        if v is None or str(v).strip() == "":
            return "N/A"
        return str(v)

    @field_validator("text", "hint", "content_description", mode="before")
    @classmethod
    def default_text(cls, v) -> str:
        return "" if v is None else str(v)

    def model_post_init(self, __context) -> None:
        for child in self.children:
            child._parent = self

    @property
    def parent(self) -> Optional["UiNode"]:
        return self._parent

    def add_child(self, child: "UiNode") -> None:
        """Append a child and link its parent back-reference"""
        self.children.append(child)
        child._parent = self

    def siblings(self) -> Iterator["UiNode"]:
        """Yield the parent's other children, in order"""
        if self._parent is None:
            return
        for child in self._parent.children:
            if child is not self:
                yield child


class DisplayMetrics(BaseModel):
    """
    Display properties supplied by the host once per run.

    Attributes:
        density: Pixels per density-independent unit
        width_px: Screen width in raw pixels
        height_px: Screen height in raw pixels
    """

    density: float = Field(gt=0, description="Pixels per dp")
    width_px: int = Field(gt=0)
    height_px: int = Field(gt=0)


class MetricSample(BaseModel):
    """A single normalized measurement, 1.0 meaning fully compliant."""

    category: MetricCategory
    value: float = Field(ge=0.0, le=1.0)


class IssueRecord(BaseModel):
    """
    A concrete defect found on one element.

    Attributes:
        element_kind: Kind of the offending element
        element_id: Identifier of the offending element
        message: What is wrong
        suggestion: How to fix it
    """

    element_kind: ElementKind
    element_id: str
    message: str
    suggestion: str

    def __str__(self) -> str:
        return f"[{self.element_kind.value} {self.element_id}] {self.message}"


class NodeFinding(BaseModel):
    """
    Everything the calculators recorded for one visited node.

    Attributes:
        element_kind: Kind of the node
        element_id: Identifier of the node
        scores: Per-category node score (touch area may exceed 1.0)
        issues: Issues in the order they were detected
    """

    element_kind: ElementKind
    element_id: str
    scores: dict[MetricCategory, float] = Field(default_factory=dict)
    issues: list[IssueRecord] = Field(default_factory=list)

    @property
    def has_issues(self) -> bool:
        return len(self.issues) > 0


class ScoreCoefficients(BaseModel):
    """
    Category weights used for the weighted scores.

    Weights are non-negative and always sum to 1.0. Instances are
    immutable; redistribution builds a new instance.
    """

    model_config = ConfigDict(frozen=True)

    touch_area: float = Field(default=0.3, ge=0.0, le=1.0)
    element_spacing: float = Field(default=0.2, ge=0.0, le=1.0)
    edge_spacing: float = Field(default=0.2, ge=0.0, le=1.0)
    content_description: float = Field(default=0.15, ge=0.0, le=1.0)
    hint_text: float = Field(default=0.15, ge=0.0, le=1.0)

    @model_validator(mode="after")
    def check_total(self) -> "ScoreCoefficients":
        total = sum(self.as_dict().values())
        if abs(total - 1.0) > 1e-6:
            raise ValueError(f"Coefficients must sum to 1.0, got {total:.6f}")
        return self

    def weight(self, category: MetricCategory) -> float:
        return getattr(self, category.key)

    def as_dict(self) -> dict[MetricCategory, float]:
        return {category: self.weight(category) for category in MetricCategory}

    @classmethod
    def from_weights(cls, weights: dict[MetricCategory, float]) -> "ScoreCoefficients":
        return cls(**{category.key: value for category, value in weights.items()})


class ScoreReport(BaseModel):
    """
    Complete result of one analysis run.

    This is the output the host displays and persists.

    Attributes:
        category_averages: Mean sample per category (1.0 when empty)
        category_minima: Lowest sample per category (1.0 when empty)
        coefficients: Weights actually used, after redistribution
        weighted_average_score: Weighted sum of the averages
        weighted_minimum_score: Weighted sum of the minima
        issues: All issues in traversal order
        findings: Per-node records in traversal order
        elements_analyzed: Number of nodes visited
        truncated: Whether part of the tree was skipped by the depth cap
        narrative: Human-readable report
        export: Semicolon-separated tabular export
        timestamp: When this report was generated
    """

    category_averages: dict[MetricCategory, float]
    category_minima: dict[MetricCategory, float]
    coefficients: ScoreCoefficients
    weighted_average_score: float = Field(ge=0.0, le=1.0)
    weighted_minimum_score: float = Field(ge=0.0, le=1.0)
    issues: list[IssueRecord] = Field(default_factory=list)
    findings: list[NodeFinding] = Field(default_factory=list)
    elements_analyzed: int = 0
    truncated: bool = False
    narrative: str = ""
    export: str = ""
    timestamp: str = Field(default_factory=lambda: datetime.now().isoformat())

    def get_grade(self) -> str:
        """Get letter grade for the weighted average score"""
        if self.weighted_average_score >= 0.9:
            return "A"
        elif self.weighted_average_score >= 0.75:
            return "B"
        elif self.weighted_average_score >= 0.6:
            return "C"
        elif self.weighted_average_score >= 0.4:
            return "D"
        else:
            return "F"

    def summary(self) -> str:
        """Generate a short human-readable summary"""
        summary = f"Grade: {self.get_grade()} ({self.weighted_average_score:.3f})\n"
        summary += f"Minimal score: {self.weighted_minimum_score:.3f}\n"
        summary += f"Elements analyzed: {self.elements_analyzed}\n"
        summary += f"Issues: {len(self.issues)}\n"
        return summary


class Config(BaseModel):
    """
    Configuration for the analyzer.

    Loaded from .env file and environment variables.

    Attributes:
        density: Default pixels per dp when the snapshot carries none
        screen_width_px: Default screen width in pixels
        screen_height_px: Default screen height in pixels
        max_depth: Deepest tree level the walker descends into
        depth_policy: "truncate" skips deeper subtrees, "fail" raises
        export_path: Where the CLI writes the tabular export (optional)
        log_level: Logging level name for the package logger
    """

    density: float = Field(default=1.0, gt=0)
    screen_width_px: int = Field(default=1080, gt=0)
    screen_height_px: int = Field(default=1920, gt=0)
    max_depth: int = Field(default=200, ge=1, le=800)
    depth_policy: Literal["truncate", "fail"] = "truncate"
    export_path: Optional[str] = None
    log_level: Literal["DEBUG", "INFO", "WARNING", "ERROR"] = "WARNING"

    @field_validator("log_level", mode="before")
    @classmethod
    def upper_level(cls, v):
        return v.upper() if isinstance(v, str) else v

    def display_metrics(self) -> DisplayMetrics:
        """Display metrics built from the configured defaults"""
        return DisplayMetrics(
            density=self.density,
            width_px=self.screen_width_px,
            height_px=self.screen_height_px,
        )
