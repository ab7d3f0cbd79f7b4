"""Normalization of CUSTOM rasters into standard RGB.

This is the only path that interprets an opaque buffer, and it touches
every sample, so it is expensive; callers should skip it when the decoder
can produce a standard layout directly.

Interpretation:
    Channels: 1 = gray, 2 = gray + alpha, 3 = RGB, 4+ = RGBA (extras dropped).
    Depth: unsigned integers span their full range, signed integers their
    non-negative range, floats 0.0 - 1.0, booleans 0/1. Out-of-range and
    NaN samples are clipped.
"""

from __future__ import annotations

import logging
import time

import numpy as np
from PIL import Image

from rasterops.core.alpha import flatten_alpha
from rasterops.core.guards import allocation_guard
from rasterops.raster.types import PixelLayout, Raster
from rasterops.utils.logging import log_operation

logger = logging.getLogger(__name__)


def to_uint8(samples: np.ndarray) -> np.ndarray:
    """Rescale samples of any supported dtype to uint8."""
    dtype = samples.dtype
    if dtype == np.uint8:
        return samples
    if dtype == np.bool_:
        return samples.astype(np.uint8) * 255
    if np.issubdtype(dtype, np.floating):
        unit = np.clip(np.nan_to_num(samples, nan=0.0), 0.0, 1.0)
        return np.round(unit * 255).astype(np.uint8)

    top = float(np.iinfo(dtype).max)
    positive = np.clip(samples, 0, None).astype(np.float64)
    return np.round(positive * (255.0 / top)).astype(np.uint8)


def _to_rgb_array(samples: np.ndarray) -> np.ndarray:
    """Interpret uint8 samples of 1-4+ channels as an RGB array."""
    if samples.ndim == 2:
        samples = samples[..., np.newaxis]
    channels = samples.shape[2]

    if channels == 1:
        return np.repeat(samples, 3, axis=2)
    if channels == 3:
        return samples

    if channels == 2:
        gray, alpha = samples[..., :1], samples[..., 1:2]
        rgba = np.concatenate([gray, gray, gray, alpha], axis=2)
    else:
        rgba = np.ascontiguousarray(samples[..., :4])
    return np.asarray(flatten_alpha(Image.fromarray(rgba)))


def convert_custom_to_rgb(raster: Raster) -> Raster:
    """Copy a CUSTOM raster into a new RGB raster of the same size.

    Args:
        raster: Raster in any layout.

    Returns:
        A new RGB raster for CUSTOM input; any other raster unchanged.
    """
    if raster.layout is not PixelLayout.CUSTOM:
        return raster

    start = time.perf_counter()
    with allocation_guard("convert_custom_to_rgb", raster.size):
        if raster.is_empty:
            converted = Raster.blank(raster.width, raster.height, PixelLayout.RGB)
        else:
            rgb = _to_rgb_array(to_uint8(raster.data))
            converted = Raster(
                np.array(rgb, dtype=np.uint8, order="C", copy=True), PixelLayout.RGB
            )

    log_operation(
        logger,
        "convert_custom_to_rgb",
        raster.size,
        converted.size,
        start,
        "converted %s raster with %d channel(s)",
        raster.data.dtype,
        raster.channels,
    )
    return converted
