"""Shared pytest fixtures and configuration."""

from collections.abc import Iterator

import numpy as np
import pytest

from rasterops.config import Settings
from rasterops.raster import PixelLayout, Raster
from rasterops.utils.logging import clear_correlation_context, configure_logging


@pytest.fixture(autouse=True)
def reset_logging_context() -> Iterator[None]:
    """Reset correlation context between tests."""
    clear_correlation_context()
    yield
    clear_correlation_context()


@pytest.fixture
def test_settings() -> Settings:
    """Create a Settings instance with test-safe defaults."""
    return Settings(
        _env_file=None,  # type: ignore[call-arg]
        LOG_LEVEL="DEBUG",
        LOG_FORMAT="console",
    )


@pytest.fixture
def configure_test_logging() -> Iterator[None]:
    """Configure logging for tests with console output."""
    configure_logging(level="DEBUG", log_format="console")
    yield


@pytest.fixture
def rgb_raster() -> Raster:
    """An 8x6 RGB raster where every pixel is distinct.

    Pixel (x, y) = (x * 30, y * 40, 200 - x * 10).
    """
    ys, xs = np.mgrid[0:6, 0:8]
    data = np.stack([xs * 30, ys * 40, 200 - xs * 10], axis=2).astype(np.uint8)
    return Raster(data, PixelLayout.RGB)


@pytest.fixture
def rgba_raster() -> Raster:
    """A 4x3 RGBA raster with a column of each alpha level."""
    data = np.zeros((3, 4, 4), dtype=np.uint8)
    data[..., 0] = 200
    data[..., 1] = 100
    data[..., 2] = 50
    data[..., 3] = np.array([255, 128, 0, 255], dtype=np.uint8)
    return Raster(data, PixelLayout.RGBA)


@pytest.fixture
def custom_raster() -> Raster:
    """A 5x4 16-bit single-channel CUSTOM raster."""
    data = np.arange(20, dtype=np.uint16).reshape(4, 5) * 3000
    return Raster(data, PixelLayout.CUSTOM)
