"""Max-rectangle crop processor for in-memory images."""

from pathlib import Path
from typing import Any, Callable, Dict, List, Optional, Tuple, Union

import cv2
import numpy as np

from .commands import CropResult, crop_max_rectangle
from .config import CropConfig
from .geometry import Bounds
from .host import ImageDocument
from .processors.crop_mapping import DEFAULT_INSET
from .processors.image_io import save_image

CropCommand = Callable[..., CropResult]
DebugImages = Dict[str, np.ndarray]


class AlphaCropProcessor:
    """Crops images per a ``CropConfig`` and keeps the debug views of the last run."""

    def __init__(self, config: Optional[CropConfig] = None):
        self.config = config or CropConfig()
        self.debug_images: DebugImages = {}

    def process(
        self,
        image: np.ndarray,
        **kwargs
    ) -> Union[np.ndarray, Tuple[np.ndarray, Dict[str, Any]]]:
        """Crop an image to its largest fully-opaque rectangle.

        Args:
            image: Input image (BGRA for anything to happen)
            **kwargs: Parameters for crop_to_opaque; ``inset`` and
                ``source_bounds`` default to the processor config

        Returns:
            Cropped image or (cropped_image, analysis) if return_analysis=True
        """
        if not isinstance(image, np.ndarray) or image.size == 0:
            raise ValueError("Image must be a non-empty numpy array")

        self.debug_images = {}
        kwargs.setdefault('inset', self.config.inset)
        if 'source_bounds' not in kwargs:
            bounds = self.config.source_bounds
            kwargs['source_bounds'] = bounds.to_bounds() if bounds is not None else None
        if self.config.save_debug_images:
            kwargs['debug_images'] = self.debug_images

        return crop_to_opaque(image, **kwargs)

    def save_debug_images(self, debug_dir: Path, prefix: str) -> List[Path]:
        """Write the views of the last run as ``<prefix>_<name>.<format>``."""
        fmt = self.config.debug_image_format
        written = []
        for name, view in self.debug_images.items():
            if fmt != 'png' and view.ndim == 3 and view.shape[2] == 4:
                view = cv2.cvtColor(view, cv2.COLOR_BGRA2BGR)
            path = Path(debug_dir) / f"{prefix}_{name}.{fmt}"
            save_image(view, path)
            written.append(path)
        return written


def _to_uint8(image: np.ndarray) -> np.ndarray:
    """Scale an image of any supported depth to 8 bits for visualisation."""
    if image.dtype == np.uint8:
        return image
    if image.dtype == np.uint16:
        return (image >> 8).astype(np.uint8)
    return (np.clip(image, 0.0, 1.0) * 255).astype(np.uint8)


def _collect_debug_views(
    views: DebugImages,
    image: np.ndarray,
    cropped: np.ndarray,
    result: CropResult,
) -> None:
    views['00_input_image'] = _to_uint8(image)

    if result.threshold is None or image.ndim != 3 or image.shape[2] != 4:
        return

    mask = np.where(image[:, :, 3] >= result.threshold, 255, 0).astype(np.uint8)
    views['01_opaque_mask'] = mask

    vis = cv2.cvtColor(mask, cv2.COLOR_GRAY2BGR)
    bounds = result.source_bounds
    if bounds is not None:
        cv2.rectangle(vis, (bounds.left, bounds.top),
                      (bounds.right - 1, bounds.bottom - 1), (255, 0, 0), 1)
    if result.rectangle is not None and bounds is not None:
        rect = result.rectangle
        cv2.rectangle(vis, (bounds.left + rect.left, bounds.top + rect.top),
                      (bounds.left + rect.right - 1, bounds.top + rect.bottom - 1),
                      (0, 255, 0), 2)
    if result.region is not None:
        region = result.region
        cv2.rectangle(vis, (region.left, region.top),
                      (region.right - 1, region.bottom - 1), (0, 0, 255), 1)
    views['02_rectangle_on_mask'] = vis

    if result.applied:
        views['03_cropped_result'] = _to_uint8(cropped)


def crop_to_opaque(
    image: np.ndarray,
    inset: int = DEFAULT_INSET,
    source_bounds: Optional[Bounds] = None,
    return_analysis: bool = False,
    command: Optional[CropCommand] = None,
    debug_images: Optional[DebugImages] = None,
) -> Union[np.ndarray, Tuple[np.ndarray, Dict[str, Any]]]:
    """Crop away transparent borders using the largest opaque rectangle.

    This method:
    1. Reads the alpha channel at the image's native depth
    2. Thresholds it for that depth
    3. Finds the largest axis-aligned rectangle that is opaque everywhere
    4. Shrinks it by ``inset`` and crops

    Images without alpha, or without any opaque pixel, come back unchanged.

    Args:
        image: Input image
        inset: Pixels removed from every side of the found rectangle (default 1)
        source_bounds: Region of the image to scan (default: whole image)
        return_analysis: If True, returns additional analysis information
        command: Callable running the crop on a document; defaults to
            crop_max_rectangle
        debug_images: Dict that receives uint8 visualisations when given

    Returns:
        Cropped image or tuple with analysis if return_analysis=True
    """
    command = command or crop_max_rectangle

    document = ImageDocument(image)
    result = command(document, inset=inset, source_bounds=source_bounds)
    cropped = document.image

    if debug_images is not None:
        _collect_debug_views(debug_images, image, cropped, result)

    if not return_analysis:
        return cropped

    original_area = image.shape[0] * image.shape[1]
    cropped_area = cropped.shape[0] * cropped.shape[1]

    analysis = {
        "method": "max_opaque_rectangle",
        "success": result.applied,
        "original_shape": image.shape,
        "cropped_shape": cropped.shape,
        "area_retention": cropped_area / original_area if original_area > 0 else 0,
        "parameters": {
            "inset": inset,
            "source_bounds": source_bounds.to_dict() if source_bounds else None,
        },
        **result.to_dict(),
    }
    return cropped, analysis
