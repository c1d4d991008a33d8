"""Crop images to their largest fully-opaque rectangle."""

__version__ = "1.0.0"
__author__ = "alpha-crop developers"

from .commands import COMMAND_NAME, CropOutcome, CropResult, crop_max_rectangle
from .cropper import AlphaCropProcessor, crop_to_opaque
from .geometry import Bounds, CropRegion, Rectangle
from .pipeline import AlphaCropPipeline
from .processors import alpha_threshold, find_max_rectangle, to_crop_region

__all__ = [
    "COMMAND_NAME",
    "CropOutcome",
    "CropResult",
    "crop_max_rectangle",
    "AlphaCropProcessor",
    "crop_to_opaque",
    "Bounds",
    "CropRegion",
    "Rectangle",
    "AlphaCropPipeline",
    "alpha_threshold",
    "find_max_rectangle",
    "to_crop_region",
]
