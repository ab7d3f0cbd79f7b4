"""Gray and bitonal filters.

Luma uses the ITU-R 601-2 transform Pillow applies in convert("L"):
L = R * 299/1000 + G * 587/1000 + B * 114/1000. Alpha-bearing inputs are
flattened over the alpha background first. Bitonal output thresholds luma
at settings.BITONAL_THRESHOLD without dithering, so results are
reproducible pixel for pixel.
"""

from __future__ import annotations

import logging
import time

import numpy as np
from PIL import Image

from rasterops.config import settings
from rasterops.core.alpha import flatten_alpha
from rasterops.core.guards import allocation_guard
from rasterops.operations.specs import Filter
from rasterops.raster.convert import image_to_raster, raster_to_image
from rasterops.raster.exceptions import UnsupportedLayoutError
from rasterops.raster.types import PixelLayout, Raster
from rasterops.utils.logging import log_operation

logger = logging.getLogger(__name__)


def _luma_image(raster: Raster) -> Image.Image:
    """Render a non-empty standard raster as a mode "L" image."""
    image = raster_to_image(raster)
    if raster.layout.has_alpha:
        image = flatten_alpha(image)
    if image.mode != "L":
        image = image.convert("L")
    return image


def filter_raster(raster: Raster, spec: Filter) -> Raster:
    """Apply a colorimetric filter.

    Args:
        raster: Raster in any standard layout.
        spec: NONE, GRAY or BITONAL.

    Returns:
        The input raster for NONE; a new GRAY8 raster for GRAY; a new
        BITONAL raster for BITONAL. Dimensions are unchanged.

    Raises:
        UnsupportedLayoutError: If the raster is CUSTOM.
    """
    if spec.is_no_op:
        return raster
    if not raster.layout.is_standard:
        raise UnsupportedLayoutError(raster.layout, "filter")

    start = time.perf_counter()
    target = PixelLayout.GRAY8 if spec is Filter.GRAY else PixelLayout.BITONAL
    with allocation_guard("filter", raster.size):
        if raster.is_empty:
            filtered = Raster.blank(raster.width, raster.height, target)
        elif spec is Filter.GRAY:
            filtered = image_to_raster(_luma_image(raster), PixelLayout.GRAY8)
        else:
            luma = np.asarray(_luma_image(raster))
            filtered = Raster(luma >= settings.BITONAL_THRESHOLD, PixelLayout.BITONAL)

    log_operation(
        logger,
        "filter",
        raster.size,
        filtered.size,
        start,
        "%s filtered %dx%d image",
        spec.name.lower(),
        raster.width,
        raster.height,
    )
    return filtered
