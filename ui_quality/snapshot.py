"""
Snapshot Loading

Adapts accessibility-tree snapshots into UiNode trees:
- Android `uiautomator dump` XML files
- JSON snapshots: {"display": {...}, "root": {...}}

Widget class names are mapped to ElementKind once, here.
"""

import json
import logging
from pathlib import Path
from typing import Callable, Optional, Union

from lxml import etree
from pydantic import BaseModel, ValidationError

from .errors import SnapshotError
from .models import Bounds, Config, DisplayMetrics, UiNode

logger = logging.getLogger(__name__)


class Snapshot(BaseModel):
    """
    A loaded accessibility-tree snapshot.

    Attributes:
        root: Root of the tree, None when the snapshot holds no window
        display: Display metrics recorded with the snapshot (optional)
    """

    root: Optional[UiNode] = None
    display: Optional[DisplayMetrics] = None


def _build_tree(top, make_node: Callable, child_items: Callable) -> UiNode:
    """
    Build a UiNode tree from raw snapshot items without recursion.

    Each item becomes a childless node, then its children are attached in
    document order. Tree depth is only limited by memory here; the depth
    cap is applied when the tree is walked.

    Args:
        top: Raw item of the root (lxml element or dict)
        make_node: Turns one raw item into a childless UiNode
        child_items: Returns the raw child items of a raw item

    Returns:
        Root node with parent back-references linked
    """
    root = make_node(top)
    stack = [(root, top)]

    while stack:
        parent, item = stack.pop()
        for child_item in child_items(item):
            child = make_node(child_item)
            parent.add_child(child)
            stack.append((child, child_item))

    return root


def _node_from_element(element) -> UiNode:
    raw_bounds = element.get("bounds")
    try:
        bounds = Bounds.parse(raw_bounds) if raw_bounds else Bounds()
    except SnapshotError as e:
        raise SnapshotError(
            f"Line {element.sourceline}: {e}"
        ) from e

    return UiNode(
        kind=element.get("class"),
        id=element.get("resource-id"),
        bounds=bounds,
        text=element.get("text"),
        hint=element.get("hint"),
        content_description=element.get("content-desc"),
    )


def _element_children(element) -> list:
    return list(element.iterchildren("node"))


def _node_from_dict(item) -> UiNode:
    if not isinstance(item, dict):
        raise SnapshotError(f"Snapshot node must be an object, got {type(item).__name__}")
    return UiNode.model_validate({key: value for key, value in item.items() if key != "children"})


def _dict_children(item: dict) -> list:
    children = item.get("children") or []
    if not isinstance(children, list):
        raise SnapshotError(f"Children of element {item.get('id', 'N/A')} must be a list")
    return children


def parse_uiautomator_xml(source: Union[str, bytes]) -> Snapshot:
    """
    Parse a `uiautomator dump` document.

    Every <node> element becomes a UiNode. When the hierarchy holds more
    than one top-level node they are wrapped in a synthetic root of kind
    Other spanning all of them.

    Args:
        source: XML document text

    Returns:
        Snapshot without display metrics

    Raises:
        SnapshotError: If the XML is malformed or has invalid bounds
    """
    if isinstance(source, str):
        source = source.encode("utf-8")

    # huge_tree lifts libxml2's default nesting limit of 256 levels
    parser = etree.XMLParser(huge_tree=True)
    try:
        document = etree.fromstring(source, parser)
    except etree.XMLSyntaxError as e:
        raise SnapshotError(f"Invalid XML snapshot: {e}") from e

    if document.tag == "node":
        top_level = [document]
    else:
        top_level = list(document.iterchildren("node"))

    if not top_level:
        logger.info("Snapshot contains no nodes")
        return Snapshot()

    nodes = [
        _build_tree(element, _node_from_element, _element_children)
        for element in top_level
    ]
    if len(nodes) == 1:
        return Snapshot(root=nodes[0])

    spanning = Bounds(
        left=min(node.bounds.left for node in nodes),
        top=min(node.bounds.top for node in nodes),
        right=max(node.bounds.right for node in nodes),
        bottom=max(node.bounds.bottom for node in nodes),
    )
    return Snapshot(root=UiNode(id="hierarchy", bounds=spanning, children=nodes))


def parse_json_snapshot(data: Union[str, bytes, dict]) -> Snapshot:
    """
    Parse a JSON snapshot.

    Accepts either {"display": {...}, "root": {...}} (both keys optional)
    or a bare root node object.

    Raises:
        SnapshotError: If the JSON is malformed, nested deeper than the
                       decoder can handle, or fails validation
    """
    if isinstance(data, (str, bytes)):
        try:
            data = json.loads(data)
        except json.JSONDecodeError as e:
            raise SnapshotError(f"Invalid JSON snapshot: {e}") from e
        except RecursionError as e:
            raise SnapshotError("JSON snapshot is nested too deeply to decode") from e

    if not isinstance(data, dict):
        raise SnapshotError("JSON snapshot must be an object")

    if "root" in data or "display" in data:
        raw_root = data.get("root")
        raw_display = data.get("display")
    else:
        raw_root = data
        raw_display = None

    try:
        display = DisplayMetrics.model_validate(raw_display) if raw_display is not None else None
        root = None
        if raw_root is not None:
            root = _build_tree(raw_root, _node_from_dict, _dict_children)
    except ValidationError as e:
        raise SnapshotError(f"Invalid snapshot content: {e}") from e

    return Snapshot(root=root, display=display)


def load_snapshot(path: Path) -> Snapshot:
    """
    Load a snapshot file, choosing the parser from the file suffix.

    Files that are neither .xml nor .json are sniffed: a leading "<"
    means XML, anything else is parsed as JSON.

    Raises:
        SnapshotError: If the file cannot be read or parsed
    """
    try:
        content = path.read_text(encoding="utf-8")
    except (OSError, UnicodeDecodeError) as e:
        raise SnapshotError(f"Cannot read snapshot {path}: {e}") from e

    suffix = path.suffix.lower()
    if suffix == ".xml" or (suffix != ".json" and content.lstrip().startswith("<")):
        snapshot = parse_uiautomator_xml(content)
    else:
        snapshot = parse_json_snapshot(content)

    logger.debug("Loaded snapshot %s", path)
    return snapshot


def resolve_display(snapshot: Snapshot, config: Config) -> DisplayMetrics:
    """
    Pick the display metrics for a snapshot.

    Order of preference:
    1. Metrics recorded in the snapshot
    2. Screen size from the root bounds, density from the config
    3. The configured defaults
    """
    if snapshot.display is not None:
        return snapshot.display

    root = snapshot.root
    if root is not None and root.bounds.right > 0 and root.bounds.bottom > 0:
        return DisplayMetrics(
            density=config.density,
            width_px=root.bounds.right,
            height_px=root.bounds.bottom,
        )

    return config.display_metrics()
