"""
The "Crop Max Rectangle" command.

Glues the host document to the crop engine: acquire the pixels, pick the
alpha threshold for their depth, find the largest opaque rectangle, map it
into document coordinates and crop. Every failure along the way is a
logged decline, never an exception reaching the caller.
"""

import logging
from dataclasses import dataclass
from enum import Enum
from typing import Any, Dict, Optional

from .exceptions import AlphaCropError
from .geometry import Bounds, CropRegion, Rectangle
from .host import ImageDocument, PixelData, acquire_pixels
from .processors.crop_mapping import DEFAULT_INSET, to_crop_region
from .processors.max_rectangle import alpha_channel, find_max_rectangle
from .processors.threshold import AlphaThreshold, alpha_threshold

logger = logging.getLogger(__name__)

COMMAND_NAME = "Crop Max Rectangle"


class CropOutcome(str, Enum):
    """How a crop invocation ended."""
    CROPPED = "cropped"
    NO_DOCUMENT = "no_document"
    MISSING_ALPHA = "missing_alpha"
    EMPTY_PIXEL_DATA = "empty_pixel_data"
    NO_OPAQUE_REGION = "no_opaque_region"
    DEGENERATE_AFTER_INSET = "degenerate_after_inset"


@dataclass
class CropResult:
    """Outcome of one crop invocation."""

    outcome: CropOutcome
    threshold: Optional[AlphaThreshold] = None
    source_bounds: Optional[Bounds] = None
    rectangle: Optional[Rectangle] = None
    region: Optional[CropRegion] = None

    @property
    def applied(self) -> bool:
        return self.outcome is CropOutcome.CROPPED

    def to_dict(self) -> Dict[str, Any]:
        return {
            "outcome": self.outcome.value,
            "threshold": self.threshold,
            "source_bounds": self.source_bounds.to_dict() if self.source_bounds else None,
            "rectangle": self.rectangle.to_dict() if self.rectangle else None,
            "region": self.region.to_dict() if self.region else None,
        }


def find_crop_region(
    pixels: PixelData, inset: int, doc_width: int, doc_height: int
) -> CropResult:
    """Compute the crop region for acquired pixels without touching the document."""
    bounds = pixels.source_bounds
    if pixels.components != 4:
        return CropResult(CropOutcome.MISSING_ALPHA, source_bounds=bounds)

    if pixels.data is None or len(pixels.data) == 0:
        return CropResult(CropOutcome.EMPTY_PIXEL_DATA, source_bounds=bounds)

    threshold = alpha_threshold(pixels.component_size)
    alpha = alpha_channel(pixels.data, pixels.width, pixels.height)
    rect = find_max_rectangle(alpha, pixels.width, pixels.height, threshold)
    if rect is None:
        return CropResult(CropOutcome.NO_OPAQUE_REGION, threshold, bounds)

    region = to_crop_region(rect, bounds.left, bounds.top, inset, doc_width, doc_height)
    if region is None:
        return CropResult(CropOutcome.DEGENERATE_AFTER_INSET, threshold, bounds, rect)

    return CropResult(CropOutcome.CROPPED, threshold, bounds, rect, region)


def crop_max_rectangle(
    document: Optional[ImageDocument],
    inset: int = DEFAULT_INSET,
    source_bounds: Optional[Bounds] = None,
) -> CropResult:
    """Crop ``document`` to its largest fully-opaque rectangle.

    Args:
        document: Document to crop; None or an empty document is a no-op
        inset: Pixels shaved off each side of the found rectangle
        source_bounds: Document region to scan (defaults to the whole document)

    Returns:
        A CropResult describing what happened. The document is modified only
        when ``result.applied`` is true.
    """
    if document is None or not document.is_open:
        logger.info("No active document, nothing to crop")
        return CropResult(CropOutcome.NO_DOCUMENT)

    try:
        with acquire_pixels(document, source_bounds) as pixels:
            if pixels is None:
                result = CropResult(CropOutcome.EMPTY_PIXEL_DATA)
            else:
                result = find_crop_region(pixels, inset, document.width, document.height)
    except AlphaCropError as e:
        logger.warning(f"Could not read pixels from {document.name}: {e}")
        return CropResult(CropOutcome.EMPTY_PIXEL_DATA)

    if not result.applied:
        logger.info(f"{COMMAND_NAME}: {document.name} left unchanged ({result.outcome.value})")
        return result

    document.crop(result.region)
    logger.info(
        f"{COMMAND_NAME}: cropped {document.name} to "
        f"({result.region.left}, {result.region.top})-({result.region.right}, {result.region.bottom})"
    )
    return result
