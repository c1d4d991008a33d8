"""alpha-crop processors module.

Pure crop-engine building blocks (threshold policy, maximal rectangle search,
coordinate mapping) plus image I/O.
"""

# Image I/O
from .image_io import (
    load_image,
    save_image,
    get_image_files,
    component_size_for,
    channel_count,
)

# Alpha threshold policy
from .threshold import (
    AlphaThreshold,
    alpha_threshold,
)

# Maximal opaque rectangle
from .max_rectangle import (
    alpha_channel,
    find_max_rectangle,
)

# Coordinate mapping
from .crop_mapping import (
    DEFAULT_INSET,
    to_crop_region,
)

__all__ = [
    # Image I/O
    "load_image",
    "save_image",
    "get_image_files",
    "component_size_for",
    "channel_count",

    # Threshold
    "AlphaThreshold",
    "alpha_threshold",

    # Rectangle search
    "alpha_channel",
    "find_max_rectangle",

    # Coordinate mapping
    "DEFAULT_INSET",
    "to_crop_region",
]
