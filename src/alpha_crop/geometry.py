"""Rectangle types shared by the crop engine and the host adapter."""

from dataclasses import dataclass, asdict
from typing import Dict


@dataclass(frozen=True)
class Rectangle:
    """Axis-aligned rectangle with inclusive left/top and exclusive right/bottom."""

    left: int
    top: int
    right: int
    bottom: int

    @property
    def width(self) -> int:
        return self.right - self.left

    @property
    def height(self) -> int:
        return self.bottom - self.top

    @property
    def area(self) -> int:
        return self.width * self.height

    def is_valid(self) -> bool:
        return self.left < self.right and self.top < self.bottom

    def to_dict(self) -> Dict[str, int]:
        return asdict(self)


class CropRegion(Rectangle):
    """Rectangle in document pixel coordinates, ready to hand to ``crop``."""


class Bounds(Rectangle):
    """Source bounds of an acquired pixel region in document coordinates."""

    def clip(self, width: int, height: int) -> "Bounds":
        """Clip the bounds to a ``width`` x ``height`` document."""
        return Bounds(
            left=min(max(self.left, 0), width),
            top=min(max(self.top, 0), height),
            right=min(max(self.right, 0), width),
            bottom=min(max(self.bottom, 0), height),
        )
