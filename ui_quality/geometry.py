"""
Geometry & Unit Utilities

Pixel to density-independent unit conversion, rectangle clearance math
and WCAG relative-luminance / contrast-ratio math.
"""

from typing import Union

from .models import Bounds

Color = Union[str, tuple]


def to_dp(px: float, density: float) -> float:
    """
    Convert raw pixels to density-independent units.

    Args:
        px: Length in raw pixels
        density: Pixels per dp, as reported by the host display

    Returns:
        Length in dp

    Raises:
        ValueError: If density is not positive
    """
    if density <= 0:
        raise ValueError(f"Display density must be positive, got {density}")
    return px / density


def gap_between(a: Bounds, b: Bounds) -> int:
    """
    Clearance between two rectangles along the axis that separates them.

    Takes the larger of the horizontal and vertical gaps, each clamped at
    zero. Overlapping rectangles have a gap of 0. This is not the Euclidean
    distance: two rectangles offset diagonally report only their dominant
    axis clearance.

    Example:
        gap_between(Bounds(right=10, bottom=10), Bounds(left=30, right=40, bottom=10))
        # 20
    """
    horizontal = max(0, b.left - a.right, a.left - b.right)
    vertical = max(0, b.top - a.bottom, a.top - b.bottom)
    return max(horizontal, vertical)


def _to_rgb(color: Color) -> tuple:
    """Convert "#RRGGBB", "#RGB" or an (r, g, b) tuple to an RGB tuple"""
    if isinstance(color, str):
        hex_color = color.strip().lstrip("#")
        if len(hex_color) == 3:
            hex_color = "".join(c * 2 for c in hex_color)
        if len(hex_color) != 6:
            raise ValueError(f"Invalid hex color: {color!r}")
        try:
            return tuple(int(hex_color[i:i + 2], 16) for i in (0, 2, 4))
        except ValueError as e:
            raise ValueError(f"Invalid hex color: {color!r}") from e

    rgb = tuple(color)
    if len(rgb) != 3 or any(not 0 <= channel <= 255 for channel in rgb):
        raise ValueError(f"Invalid RGB color: {color!r}")
    return rgb


def relative_luminance(color: Color) -> float:
    """Calculate WCAG relative luminance of a color"""
    channels = []
    for value in _to_rgb(color):
        c = value / 255.0
        # Gamma correction
        c = c / 12.92 if c <= 0.03928 else ((c + 0.055) / 1.055) ** 2.4
        channels.append(c)

    r, g, b = channels
    return 0.2126 * r + 0.7152 * g + 0.0722 * b


def contrast_ratio(color_a: Color, color_b: Color) -> float:
    """
    Calculate WCAG contrast ratio between two colors.

    Formula: (L1 + 0.05) / (L2 + 0.05)
    where L1 is the lighter relative luminance.

    Args:
        color_a: First color (hex string or RGB tuple)
        color_b: Second color (hex string or RGB tuple)

    Returns:
        Contrast ratio (1-21, where 21 is maximum contrast)

    Raises:
        ValueError: If either color is malformed

    Example:
        ratio = contrast_ratio("#000000", "#FFFFFF")
        assert ratio == 21.0  # Black on white = maximum contrast
    """
    l1 = relative_luminance(color_a)
    l2 = relative_luminance(color_b)

    lighter, darker = max(l1, l2), min(l1, l2)
    return round((lighter + 0.05) / (darker + 0.05), 2)
