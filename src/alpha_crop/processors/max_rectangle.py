"""Largest all-opaque axis-aligned rectangle search."""

from typing import Any, Optional, Sequence

import numpy as np

from ..geometry import Rectangle
from .threshold import AlphaThreshold


def alpha_channel(
    data: Sequence[Any], width: int, height: int, components: int = 4
) -> np.ndarray:
    """Return the alpha plane of a flat, row-major interleaved buffer.

    Args:
        data: Interleaved samples, at least ``width * height * components`` long
        width: Pixels per row
        height: Number of rows
        components: Samples per pixel; alpha is the last one

    Returns:
        Array of shape ``(height, width)`` indexed ``[y][x]``. The result is a
        read-only view whenever ``data`` is already a numpy array.
    """
    samples = np.asarray(data)
    count = width * height * components
    if samples.size < count:
        raise ValueError(
            f"Pixel buffer too short: {samples.size} samples for "
            f"{width}x{height}x{components}"
        )
    plane = samples.reshape(-1)[:count].reshape(height, width, components)[:, :, components - 1]
    plane.flags.writeable = False
    return plane


def find_max_rectangle(
    alpha: Any, width: int, height: int, threshold: AlphaThreshold
) -> Optional[Rectangle]:
    """Return the largest rectangle whose every sample is ``>= threshold``.

    Each row turns the mask into a histogram of consecutive opaque rows per
    column, and the largest rectangle under that histogram is found with a
    monotonic stack of column indices. The whole scan is O(width * height).

    Args:
        alpha: Opacity samples indexed ``[y][x]`` (2-D array or nested sequences)
        width: Number of columns to scan
        height: Number of rows to scan
        threshold: Minimum sample value counted as opaque

    Returns:
        The best rectangle in grid coordinates (right/bottom exclusive), or
        None when no sample reaches the threshold. Ties keep the first
        rectangle found, scanning rows top to bottom.
    """
    if width <= 0 or height <= 0:
        return None

    grid = np.asarray(alpha)
    heights = np.zeros(width, dtype=np.int64)
    best_area = 0
    best: Optional[Rectangle] = None

    for y in range(height):
        opaque = grid[y, :width] >= threshold
        heights = np.where(opaque, heights + 1, 0)
        hist = heights.tolist()

        stack = []
        for i in range(width + 1):
            curr_h = hist[i] if i < width else 0
            while stack and hist[stack[-1]] > curr_h:
                top = stack.pop()
                rect_h = hist[top]
                left = stack[-1] + 1 if stack else 0
                area = rect_h * (i - left)
                if area > best_area:
                    best_area = area
                    best = Rectangle(left=left, top=y + 1 - rect_h, right=i, bottom=y + 1)
            stack.append(i)

    return best
