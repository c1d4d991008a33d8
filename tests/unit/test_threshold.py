"""Tests for the alpha threshold policy."""

import numpy as np
import pytest

from alpha_crop.processors import alpha_threshold, find_max_rectangle


@pytest.mark.parametrize("component_size, expected", [
    (8, 2),
    (16, 256),
    (32, 0.002),
    (1, 2),
    (24, 2),
    (-1, 2),
])
def test_alpha_threshold_by_depth(component_size, expected):
    assert alpha_threshold(component_size) == expected


@pytest.mark.parametrize("component_size, dtype", [
    (8, np.uint8),
    (16, np.uint16),
])
def test_sample_equal_to_threshold_is_opaque(component_size, dtype):
    threshold = alpha_threshold(component_size)
    grid = np.full((3, 3), threshold, dtype=dtype)

    rect = find_max_rectangle(grid, 3, 3, threshold)

    assert rect is not None
    assert rect.area == 9


@pytest.mark.parametrize("component_size, dtype", [
    (8, np.uint8),
    (16, np.uint16),
])
def test_sample_below_threshold_is_transparent(component_size, dtype):
    threshold = alpha_threshold(component_size)
    grid = np.full((3, 3), threshold - 1, dtype=dtype)

    assert find_max_rectangle(grid, 3, 3, threshold) is None


def test_float_threshold_boundary():
    threshold = alpha_threshold(32)
    grid = np.array([[threshold, threshold * 0.5]], dtype=np.float64)

    rect = find_max_rectangle(grid, 2, 1, threshold)

    assert (rect.left, rect.right) == (0, 1)
