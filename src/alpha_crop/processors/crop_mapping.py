"""Conversion of a found rectangle into a document crop region."""

from typing import Optional

from ..geometry import CropRegion, Rectangle

DEFAULT_INSET = 1


def _clamp(value: int, low: int, high: int) -> int:
    return min(high, max(low, value))


def to_crop_region(
    rect: Rectangle,
    offset_x: int,
    offset_y: int,
    inset: int,
    doc_width: int,
    doc_height: int,
) -> Optional[CropRegion]:
    """Translate ``rect`` into document space, shrink it by ``inset`` and clamp.

    Args:
        rect: Rectangle in local grid coordinates
        offset_x: Document x of the grid's left edge
        offset_y: Document y of the grid's top edge
        inset: Pixels removed from every side
        doc_width: Document width in pixels
        doc_height: Document height in pixels

    Returns:
        The crop region, or None when the inset or clamping leaves nothing.
    """
    region = CropRegion(
        left=_clamp(offset_x + rect.left + inset, 0, doc_width),
        top=_clamp(offset_y + rect.top + inset, 0, doc_height),
        right=_clamp(offset_x + rect.right - inset, 0, doc_width),
        bottom=_clamp(offset_y + rect.bottom - inset, 0, doc_height),
    )
    if not region.is_valid():
        return None
    return region
