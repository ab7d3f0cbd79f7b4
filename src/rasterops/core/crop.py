"""Crop operator.

The crop region is expressed against the full-size image while the raster
in hand may already be reduced; CropSpec.region_in() resolves the region
in the raster's own coordinates and clamps it to the right/bottom edges.
The result owns a copy of the sub-array, so it shares nothing writable
with the input.
"""

from __future__ import annotations

import logging
import time

import numpy as np

from rasterops.core.guards import allocation_guard
from rasterops.geometry.primitives import Size
from rasterops.geometry.reduction import ReductionFactor
from rasterops.operations.specs import CropSpec
from rasterops.raster.types import Raster
from rasterops.utils.logging import log_operation

logger = logging.getLogger(__name__)


def crop(
    raster: Raster,
    spec: CropSpec,
    reduction_factor: ReductionFactor | None = None,
) -> Raster:
    """Crop a raster to a region given relative to the full-size image.

    Works for every layout, CUSTOM included, since pixels are only moved.

    Args:
        raster: Raster to crop.
        spec: Requested region.
        reduction_factor: Halvings already applied to raster (default none).

    Returns:
        The input raster if the crop covers it entirely, otherwise a new
        raster of the clamped region. A zero-width or zero-height region
        yields an empty raster.

    Raises:
        InvalidGeometryError: If the region's origin lies past the raster
            edge.
    """
    if spec.is_no_op:
        logger.debug("crop(): no-op crop of %dx%d raster", raster.width, raster.height)
        return raster

    region = spec.region_in(raster.size, reduction_factor)
    if region.covers(Size.from_tuple(raster.size)):
        logger.debug(
            "crop(): region %s covers %dx%d raster",
            region.to_tuple(),
            raster.width,
            raster.height,
        )
        return raster

    start = time.perf_counter()
    with allocation_guard("crop", (region.width, region.height)):
        data = np.array(
            raster.data[region.y : region.bottom, region.x : region.right],
            copy=True,
        )
    cropped = Raster(data, raster.layout)

    log_operation(
        logger,
        "crop",
        raster.size,
        cropped.size,
        start,
        "cropped %dx%d image to %s",
        raster.width,
        raster.height,
        region.to_tuple(),
    )
    return cropped
