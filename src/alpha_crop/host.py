"""
File-backed image document acting as the host for the crop command.

The document owns an image array (as decoded by OpenCV) and exposes the
three host operations the crop command needs: pixel acquisition for a source
region, destructive cropping, and disposal of acquired pixel buffers.
"""

import logging
from contextlib import contextmanager
from dataclasses import dataclass, field
from pathlib import Path
from typing import Generator, List, Optional, Union

import numpy as np

from .exceptions import ProcessingError, ValidationError
from .geometry import Bounds, CropRegion
from .processors.image_io import channel_count, component_size_for, load_image, save_image

logger = logging.getLogger(__name__)

PathLike = Union[str, Path]


@dataclass
class PixelData:
    """Pixels acquired from a document region.

    ``data`` is a flat, row-major buffer of interleaved samples. It belongs to
    this object until :meth:`dispose` is called.
    """

    components: int
    component_size: int
    data: Optional[np.ndarray]
    source_bounds: Bounds
    dispose_count: int = field(default=0, repr=False)

    @property
    def width(self) -> int:
        return self.source_bounds.width

    @property
    def height(self) -> int:
        return self.source_bounds.height

    @property
    def disposed(self) -> bool:
        return self.dispose_count > 0

    def dispose(self) -> None:
        """Release the sample buffer. Later calls are ignored."""
        if self.disposed:
            return
        self.data = None
        self.dispose_count += 1


class ImageDocument:
    """An image opened for editing."""

    def __init__(self, image: Optional[np.ndarray], path: Optional[PathLike] = None):
        self.image = image
        self.path = Path(path) if path is not None else None
        self.crop_history: List[CropRegion] = []

    @classmethod
    def open(cls, path: PathLike) -> "ImageDocument":
        """Load a document from an image file."""
        return cls(load_image(path), path)

    @property
    def name(self) -> str:
        return self.path.name if self.path else "<memory>"

    @property
    def width(self) -> int:
        return 0 if self.image is None else int(self.image.shape[1])

    @property
    def height(self) -> int:
        return 0 if self.image is None else int(self.image.shape[0])

    @property
    def is_open(self) -> bool:
        return self.image is not None and self.image.size > 0

    def bounds(self) -> Bounds:
        return Bounds(left=0, top=0, right=self.width, bottom=self.height)

    def get_pixels(self, source_bounds: Optional[Bounds] = None) -> Optional[PixelData]:
        """Read the pixels of a document region at native bit depth.

        Args:
            source_bounds: Region to read, clipped to the document. Defaults to
                the whole document.

        Returns:
            The acquired pixels, or None when the clipped region is empty.

        Raises:
            ProcessingError: If the samples have an unsupported depth
        """
        if not self.is_open:
            return None

        bounds = (source_bounds or self.bounds()).clip(self.width, self.height)
        if not bounds.is_valid():
            return None

        try:
            component_size = component_size_for(self.image)
        except ValidationError as e:
            raise ProcessingError(str(e), processor="get_pixels", image_path=self.name)

        region = self.image[bounds.top:bounds.bottom, bounds.left:bounds.right]
        data = np.ascontiguousarray(region).reshape(-1)
        return PixelData(
            components=channel_count(self.image),
            component_size=component_size,
            data=data,
            source_bounds=bounds,
        )

    def crop(self, region: CropRegion) -> None:
        """Crop the document to ``region`` in place."""
        self.image = self.image[region.top:region.bottom, region.left:region.right].copy()
        self.crop_history.append(region)
        logger.debug(f"Cropped {self.name} to {region}")

    def save(self, output_path: PathLike) -> None:
        save_image(self.image, output_path)


@contextmanager
def acquire_pixels(
    document: ImageDocument, source_bounds: Optional[Bounds] = None
) -> Generator[Optional[PixelData], None, None]:
    """Acquire a document region and dispose of it on every exit path."""
    pixels = document.get_pixels(source_bounds)
    try:
        yield pixels
    finally:
        if pixels is not None:
            pixels.dispose()
