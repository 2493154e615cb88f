# ============================================================================
# src/prescription_ocr/core/bbox_utils.py
# ============================================================================
"""
Bounding box utilities for OCR frame handling.

This module provides:
- Frame coercion from heterogeneous provider shapes
- Coordinate sanitising (missing / NaN / negative -> 0)
- Name -> rectangle lookup over OCR blocks

Coordinate System:
- Frames are (x, y, width, height) in provider pixels
- (0, 0) is top-left
- A (0, 0, 0, 0) frame means "no usable box"
"""

from typing import Any, Optional, Sequence
import math

from .context.ocr_document import BoundingBox, TextBlock


def read_field(source: Any, *names: str) -> Any:
    """First present attribute or key among names."""
    if source is None:
        return None
    for name in names:
        if isinstance(source, dict):
            if name in source and source[name] is not None:
                return source[name]
        else:
            value = getattr(source, name, None)
            if value is not None:
                return value
    return None


def sanitize_coordinate(value: Any) -> float:
    """
    Coerce a provider coordinate to a non-negative finite float.

    Anything that cannot be read as a number becomes 0.0.
    """
    if isinstance(value, bool):
        return 0.0
    try:
        number = float(value)
    except (TypeError, ValueError):
        return 0.0
    if math.isnan(number) or math.isinf(number) or number < 0:
        return 0.0
    return number


def normalize_frame(frame: Any) -> BoundingBox:
    """
    Map a provider frame to a BoundingBox.

    Accepted shapes:
    - {"x", "y", "width", "height"}
    - {"left", "top", "width", "height"} or {"left", "top", "right", "bottom"}
    - {"origin": {"x", "y"}, "size": {"width", "height"}}
    - (x, y, width, height) sequence
    - attribute objects with any of the above names

    Malformed frames yield BoundingBox(0, 0, 0, 0).
    """
    if frame is None:
        return BoundingBox()

    if isinstance(frame, BoundingBox):
        return BoundingBox(
            x=sanitize_coordinate(frame.x),
            y=sanitize_coordinate(frame.y),
            width=sanitize_coordinate(frame.width),
            height=sanitize_coordinate(frame.height),
        )

    if isinstance(frame, (list, tuple)):
        if len(frame) != 4:
            return BoundingBox()
        x, y, width, height = (sanitize_coordinate(v) for v in frame)
        return BoundingBox(x=x, y=y, width=width, height=height)

    origin = read_field(frame, "origin")
    size = read_field(frame, "size")

    x = read_field(frame, "x", "left")
    if x is None:
        x = read_field(origin, "x")
    y = read_field(frame, "y", "top")
    if y is None:
        y = read_field(origin, "y")

    width = read_field(frame, "width")
    if width is None:
        width = read_field(size, "width")
    if width is None:
        right = read_field(frame, "right")
        if right is not None:
            width = sanitize_coordinate(right) - sanitize_coordinate(x)

    height = read_field(frame, "height")
    if height is None:
        height = read_field(size, "height")
    if height is None:
        bottom = read_field(frame, "bottom")
        if bottom is not None:
            height = sanitize_coordinate(bottom) - sanitize_coordinate(y)

    return BoundingBox(
        x=sanitize_coordinate(x),
        y=sanitize_coordinate(y),
        width=sanitize_coordinate(width),
        height=sanitize_coordinate(height),
    )


def find_bounding_box(name: str, blocks: Sequence[TextBlock]) -> Optional[BoundingBox]:
    """
    Locate a medicine name in the OCR blocks.

    Blocks are scanned in order. In the first block whose text contains the
    name (case-insensitive) the first containing line with a usable frame
    wins, then the block's own frame. A block with neither usable frame
    does not stop the scan.

    Args:
        name: Name as it appeared in the text
        blocks: OCR blocks, possibly empty

    Returns:
        Usable BoundingBox, or None
    """
    needle = (name or "").strip().lower()
    if not needle:
        return None

    for block in blocks:
        if needle not in (block.text or "").lower():
            continue

        for line in block.lines:
            if needle in (line.text or "").lower() and line.frame.is_usable:
                return line.frame

        if block.frame.is_usable:
            return block.frame

    return None
