"""Tests for the crop command and its decline outcomes."""

import numpy as np
import pytest

from alpha_crop.commands import CropOutcome, crop_max_rectangle, find_crop_region
from alpha_crop.geometry import Bounds, CropRegion, Rectangle
from alpha_crop.host import ImageDocument, PixelData


class TestCropMaxRectangle:
    """Test crop_max_rectangle end to end on in-memory documents."""

    def test_bordered_image(self, bordered_image):
        document = ImageDocument(bordered_image)

        result = crop_max_rectangle(document)

        assert result.outcome is CropOutcome.CROPPED
        assert result.applied
        assert result.threshold == 2
        assert result.rectangle == Rectangle(left=2, top=2, right=8, bottom=8)
        assert result.region == CropRegion(left=3, top=3, right=7, bottom=7)
        assert document.image.shape == (4, 4, 4)
        assert (document.image[:, :, 3] == 255).all()

    def test_sixteen_bit_image(self, bordered_image_factory):
        image = bordered_image_factory(20, 16, border=3, dtype=np.uint16, opaque_value=65535)
        image[0, 0, 3] = 255  # near-transparent 16-bit fringe
        document = ImageDocument(image)

        result = crop_max_rectangle(document, inset=0)

        assert result.threshold == 256
        assert result.region == CropRegion(left=3, top=3, right=17, bottom=13)

    def test_float_image(self, bordered_image_factory):
        image = bordered_image_factory(12, 12, border=1, dtype=np.float32, opaque_value=1.0)
        document = ImageDocument(image)

        result = crop_max_rectangle(document)

        assert result.threshold == pytest.approx(0.002)
        assert result.region == CropRegion(left=2, top=2, right=10, bottom=10)

    def test_source_bounds_offset(self, bordered_image_factory):
        document = ImageDocument(bordered_image_factory(30, 30, border=0))

        result = crop_max_rectangle(document, inset=1, source_bounds=Bounds(left=10, top=5, right=20, bottom=25))

        assert result.rectangle == Rectangle(left=0, top=0, right=10, bottom=20)
        assert result.region == CropRegion(left=11, top=6, right=19, bottom=24)
        assert document.image.shape[:2] == (18, 8)

    def test_no_document(self):
        assert crop_max_rectangle(None).outcome is CropOutcome.NO_DOCUMENT
        assert crop_max_rectangle(ImageDocument(None)).outcome is CropOutcome.NO_DOCUMENT

    def test_missing_alpha(self):
        image = np.full((8, 8, 3), 255, dtype=np.uint8)
        document = ImageDocument(image)

        result = crop_max_rectangle(document)

        assert result.outcome is CropOutcome.MISSING_ALPHA
        assert document.image is image

    def test_no_opaque_region(self):
        document = ImageDocument(np.ones((8, 8, 4), dtype=np.uint8))

        result = crop_max_rectangle(document)

        assert result.outcome is CropOutcome.NO_OPAQUE_REGION
        assert result.rectangle is None
        assert document.image.shape == (8, 8, 4)

    def test_degenerate_after_inset(self, bordered_image_factory):
        document = ImageDocument(bordered_image_factory(6, 6, border=2))

        result = crop_max_rectangle(document, inset=1)

        assert result.outcome is CropOutcome.DEGENERATE_AFTER_INSET
        assert result.rectangle == Rectangle(left=2, top=2, right=4, bottom=4)
        assert result.region is None
        assert document.crop_history == []

    def test_empty_source_region(self, bordered_image):
        result = crop_max_rectangle(ImageDocument(bordered_image), source_bounds=Bounds(left=10, top=0, right=20, bottom=5))

        assert result.outcome is CropOutcome.EMPTY_PIXEL_DATA

    def test_unreadable_pixels(self):
        document = ImageDocument(np.zeros((4, 4, 4), dtype=np.int32))

        assert crop_max_rectangle(document).outcome is CropOutcome.EMPTY_PIXEL_DATA

    def test_rotated_image_crop_is_fully_opaque(self, rotated_image):
        document = ImageDocument(rotated_image)

        result = crop_max_rectangle(document)

        assert result.applied
        assert (document.image[:, :, 3] >= 2).all()


def test_find_crop_region_with_empty_data():
    pixels = PixelData(
        components=4,
        component_size=8,
        data=np.zeros(0, dtype=np.uint8),
        source_bounds=Bounds(left=0, top=0, right=1, bottom=1),
    )

    assert find_crop_region(pixels, 1, 1, 1).outcome is CropOutcome.EMPTY_PIXEL_DATA


def test_result_to_dict(bordered_image):
    result = crop_max_rectangle(ImageDocument(bordered_image))

    data = result.to_dict()

    assert data["outcome"] == "cropped"
    assert data["rectangle"] == {"left": 2, "top": 2, "right": 8, "bottom": 8}
    assert data["region"] == {"left": 3, "top": 3, "right": 7, "bottom": 7}
