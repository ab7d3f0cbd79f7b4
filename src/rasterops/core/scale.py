"""Scale operator.

Target dimensions come from ScaleSpec.target_size(); resampling is done by
Pillow. The default path is a single bilinear resize, which is fast but
aliases visibly at strong downscales. The high-quality path first
box-reduces the image (area averaging) to within a small multiple of the
target and finishes with a Lanczos filter.

Layout is preserved: BGR/ARGB/ABGR rasters are reordered for Pillow and
reordered back. BITONAL rasters are resampled nearest-neighbour, which is
the only resampler Pillow applies to mode "1" and keeps them bitonal.
"""

from __future__ import annotations

import logging
import time

from PIL import Image

from rasterops.config import settings
from rasterops.core.guards import allocation_guard
from rasterops.geometry.reduction import ReductionFactor
from rasterops.operations.specs import ScaleSpec
from rasterops.raster.convert import image_to_raster, raster_to_image
from rasterops.raster.exceptions import InvalidGeometryError, UnsupportedLayoutError
from rasterops.raster.types import Raster
from rasterops.utils.logging import log_operation

logger = logging.getLogger(__name__)


def scale(
    raster: Raster,
    spec: ScaleSpec,
    reduction_factor: ReductionFactor | None = None,
    high_quality: bool = False,
) -> Raster:
    """Resize a raster according to a scale request.

    Args:
        raster: Raster to scale.
        spec: Requested size, relative to the full-size image for PERCENT.
        reduction_factor: Halvings already applied to raster (default none).
        high_quality: Use area-averaging + Lanczos instead of bilinear.

    Returns:
        The input raster if the target size equals its size, otherwise a
        new raster of the target size in the same layout.

    Raises:
        InvalidGeometryError: If the target size is non-positive or the
            raster is empty.
        UnsupportedLayoutError: If the raster is CUSTOM.
        AllocationError: If the output exceeds the pixel limit or memory.
    """
    width, height = spec.target_size(raster.size, reduction_factor)
    if (width, height) == raster.size:
        logger.debug(
            "scale(): %dx%d raster already at target size", raster.width, raster.height
        )
        return raster

    if not raster.layout.is_standard:
        raise UnsupportedLayoutError(raster.layout, "scale")
    if raster.is_empty:
        raise InvalidGeometryError(
            "Cannot resample an empty raster", "scale", size=raster.size
        )

    start = time.perf_counter()
    with allocation_guard("scale", (width, height)):
        image = raster_to_image(raster)
        if high_quality:
            resized = image.resize(
                (width, height),
                resample=Image.Resampling.LANCZOS,
                reducing_gap=settings.HIGH_QUALITY_REDUCING_GAP,
            )
        else:
            resized = image.resize((width, height), resample=Image.Resampling.BILINEAR)
        scaled = image_to_raster(resized, raster.layout)

    log_operation(
        logger,
        "scale",
        raster.size,
        scaled.size,
        start,
        "scaled %dx%d image to %dx%d",
        raster.width,
        raster.height,
        width,
        height,
    )
    return scaled
