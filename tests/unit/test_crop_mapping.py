"""Tests for mapping found rectangles to document crop regions."""

from alpha_crop.geometry import CropRegion, Rectangle
from alpha_crop.processors import to_crop_region


def test_inset_shrinks_every_side():
    rect = Rectangle(left=2, top=1, right=8, bottom=5)

    region = to_crop_region(rect, 0, 0, 1, 10, 10)

    assert region == CropRegion(left=3, top=2, right=7, bottom=4)


def test_width_not_larger_than_twice_inset_collapses():
    rect = Rectangle(left=2, top=1, right=4, bottom=5)

    assert to_crop_region(rect, 0, 0, 1, 10, 10) is None


def test_height_not_larger_than_twice_inset_collapses():
    rect = Rectangle(left=0, top=3, right=10, bottom=5)

    assert to_crop_region(rect, 0, 0, 1, 10, 10) is None


def test_offset_is_added():
    rect = Rectangle(left=0, top=0, right=4, bottom=4)

    region = to_crop_region(rect, 10, 20, 1, 100, 100)

    assert region == CropRegion(left=11, top=21, right=13, bottom=23)


def test_zero_inset_keeps_rectangle():
    rect = Rectangle(left=2, top=2, right=8, bottom=8)

    assert to_crop_region(rect, 0, 0, 0, 10, 10) == CropRegion(left=2, top=2, right=8, bottom=8)


def test_region_is_clamped_to_document():
    rect = Rectangle(left=0, top=0, right=20, bottom=20)

    region = to_crop_region(rect, -5, -5, 1, 12, 8)

    assert region == CropRegion(left=0, top=0, right=12, bottom=8)


def test_region_outside_document_collapses():
    rect = Rectangle(left=0, top=0, right=5, bottom=5)

    assert to_crop_region(rect, 50, 0, 0, 10, 10) is None
