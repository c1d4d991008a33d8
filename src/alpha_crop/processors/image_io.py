"""Image I/O utilities for loading and saving images with their alpha channel."""

import logging
from pathlib import Path
from typing import List, Optional, Union

import cv2
import numpy as np

from ..exceptions import ImageLoadError, ImageSaveError, ValidationError

logger = logging.getLogger(__name__)

PathLike = Union[str, Path]

IMAGE_EXTENSIONS = [".png", ".tif", ".tiff", ".webp", ".exr", ".jpg", ".jpeg", ".bmp"]

_COMPONENT_SIZES = {
    np.dtype(np.uint8): 8,
    np.dtype(np.uint16): 16,
    np.dtype(np.float32): 32,
}


def load_image(image_path: PathLike) -> np.ndarray:
    """Load image from file at its native depth, keeping any alpha channel.

    Args:
        image_path: Path to the image file

    Returns:
        numpy array containing the image (BGRA when the file has alpha)

    Raises:
        ImageLoadError: If image cannot be loaded
    """
    path = Path(image_path)
    if not path.exists():
        raise ImageLoadError(f"Image file not found: {path}", image_path=str(path))

    # np.fromfile + imdecode copes with non-ASCII paths on Windows
    stream = np.fromfile(str(path), dtype=np.uint8)
    image = cv2.imdecode(stream, cv2.IMREAD_UNCHANGED)
    if image is None:
        raise ImageLoadError(f"Could not load image: {path}", image_path=str(path))

    logger.debug(f"Loaded image: {path} ({image.shape}, dtype={image.dtype})")
    return image


def save_image(image: np.ndarray, output_path: PathLike) -> None:
    """Save image to file, creating parent directories.

    Args:
        image: Image array to save
        output_path: Path where to save the image

    Raises:
        ImageSaveError: If image is None, empty or cannot be encoded
    """
    path = Path(output_path)
    if image is None:
        raise ImageSaveError(f"Cannot save None as image to {path}", image_path=str(path))

    if image.size == 0:
        raise ImageSaveError(f"Cannot save empty image to {path}", image_path=str(path))

    path.parent.mkdir(parents=True, exist_ok=True)

    params = []
    ext = path.suffix.lower()
    if ext in [".jpg", ".jpeg"]:
        params = [cv2.IMWRITE_JPEG_QUALITY, 100]
    elif ext == ".png":
        params = [cv2.IMWRITE_PNG_COMPRESSION, 3]

    ok, encoded = cv2.imencode(ext, image, params)
    if not ok:
        raise ImageSaveError(f"Failed to encode image for saving: {path}", image_path=str(path))
    encoded.tofile(str(path))
    logger.debug(f"Saved image: {path}")


def get_image_files(directory: Path, extensions: Optional[List[str]] = None) -> List[Path]:
    """Get all image files from directory.

    Args:
        directory: Directory to search for images
        extensions: File extensions to include (defaults to alpha-capable formats and common ones)

    Returns:
        List of paths to image files, sorted
    """
    extensions = extensions or IMAGE_EXTENSIONS
    image_files = set()  # Use set to avoid duplicates on case-insensitive filesystems

    for ext in extensions:
        image_files.update(directory.glob(f"*{ext}"))
        image_files.update(directory.glob(f"*{ext.upper()}"))

    return sorted(image_files)


def component_size_for(image: np.ndarray) -> int:
    """Return bits per sample for an image array.

    Raises:
        ValidationError: If the dtype has no supported sample depth
    """
    try:
        return _COMPONENT_SIZES[image.dtype]
    except KeyError:
        raise ValidationError(f"Unsupported sample type: {image.dtype}")


def channel_count(image: np.ndarray) -> int:
    """Return the number of components per pixel."""
    return 1 if image.ndim == 2 else image.shape[2]
