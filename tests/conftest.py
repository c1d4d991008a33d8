"""
Pytest configuration and shared fixtures for alpha-crop tests.

Provides synthetic RGBA images, temporary directories and configuration
shared by all test modules.
"""

import pytest
import tempfile
import shutil
from pathlib import Path
from typing import Generator
import numpy as np
import cv2

from alpha_crop.config import Config
from alpha_crop.utils.logging_utils import setup_logging


@pytest.fixture
def temp_dir() -> Generator[Path, None, None]:
    """Create a temporary directory for test files."""
    temp_path = Path(tempfile.mkdtemp())
    try:
        yield temp_path
    finally:
        shutil.rmtree(temp_path, ignore_errors=True)


def make_bordered_image(
    width: int = 10,
    height: int = 10,
    border: int = 2,
    dtype=np.uint8,
    opaque_value=255,
) -> np.ndarray:
    """Create a BGRA image, opaque except for a transparent border."""
    image = np.zeros((height, width, 4), dtype=dtype)
    image[:, :, :3] = opaque_value // 2 if dtype != np.float32 else 0.5
    image[border:height - border, border:width - border, 3] = opaque_value
    return image


def make_rotated_image(width: int = 200, height: int = 150, angle: float = 12.0) -> np.ndarray:
    """Create a BGRA image that looks like a rotated photo on a transparent canvas."""
    image = np.zeros((height, width, 4), dtype=np.uint8)
    center = (width / 2, height / 2)
    box = cv2.boxPoints((center, (width * 0.6, height * 0.6), angle)).astype(np.int32)
    cv2.fillPoly(image, [box], (90, 120, 150, 255))
    return image


@pytest.fixture
def bordered_image_factory():
    """Factory for bordered BGRA images of any size and depth."""
    return make_bordered_image


@pytest.fixture
def bordered_image() -> np.ndarray:
    """10x10 8-bit image with a 2 pixel transparent border."""
    return make_bordered_image()


@pytest.fixture
def rotated_image() -> np.ndarray:
    """Rotated opaque quad on a transparent background."""
    return make_rotated_image()


@pytest.fixture
def sample_config(temp_dir: Path) -> Config:
    """Create a sample configuration for testing."""
    config = Config()

    config.directories.input_dir = str(temp_dir / "input")
    config.directories.output_dir = str(temp_dir / "output")
    config.directories.debug_dir = str(temp_dir / "debug")
    config.logging.level = "DEBUG"
    config.logging.use_rich = False  # Disable rich for cleaner test output

    return config


@pytest.fixture
def input_dir(temp_dir: Path) -> Path:
    """Input directory with one bordered, one rotated and one alpha-less image."""
    directory = temp_dir / "input"
    directory.mkdir()

    cv2.imwrite(str(directory / "bordered.png"), make_bordered_image(40, 30, border=5))
    cv2.imwrite(str(directory / "rotated.png"), make_rotated_image())
    cv2.imwrite(str(directory / "flat.png"), np.full((20, 20, 3), 200, dtype=np.uint8))

    return directory


@pytest.fixture(autouse=True)
def setup_test_logging():
    """Setup logging for tests."""
    setup_logging(
        level="WARNING",  # Only show warnings and errors in tests
        use_rich=False,   # Disable rich formatting for cleaner test output
        format_style="minimal"
    )


def pytest_configure(config):
    """Configure pytest with custom markers."""
    config.addinivalue_line(
        "markers", "unit: marks tests as unit tests (deselect with '-m \"not unit\"')"
    )
    config.addinivalue_line(
        "markers", "integration: marks tests as integration tests"
    )
    config.addinivalue_line(
        "markers", "slow: marks tests as slow (deselect with '-m \"not slow\"')"
    )


def pytest_collection_modifyitems(config, items):
    """Add markers based on test location."""
    for item in items:
        if "unit" in str(item.fspath):
            item.add_marker(pytest.mark.unit)

        if "integration" in str(item.fspath):
            item.add_marker(pytest.mark.integration)

        if "slow" in item.name.lower():
            item.add_marker(pytest.mark.slow)
