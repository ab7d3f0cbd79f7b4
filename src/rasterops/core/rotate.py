"""Rotate operator.

The source rotates clockwise about its own center and lands centered on
the smallest canvas that contains it. Corners exposed by the rotation are
transparent, so the output always carries an alpha channel.
"""

from __future__ import annotations

import logging
import math
import time

from PIL import Image

from rasterops.core.guards import allocation_guard
from rasterops.geometry.transforms import (
    affine_coefficients,
    rotated_canvas_size,
    rotation_transform,
)
from rasterops.operations.specs import RotateSpec
from rasterops.raster.convert import image_to_raster, raster_to_image
from rasterops.raster.exceptions import UnsupportedLayoutError
from rasterops.raster.types import PixelLayout, Raster
from rasterops.utils.logging import log_operation

logger = logging.getLogger(__name__)

_TRANSPARENT = (0, 0, 0, 0)


def rotate(raster: Raster, spec: RotateSpec) -> Raster:
    """Rotate a raster onto an enlarged transparent canvas.

    Args:
        raster: Raster to rotate.
        spec: Clockwise rotation in degrees.

    Returns:
        The input raster for a multiple of 360 degrees, otherwise a new
        RGBA raster of size rotated_canvas_size(width, height, degrees),
        rendered with bilinear interpolation.

    Raises:
        UnsupportedLayoutError: If the raster is CUSTOM.
        AllocationError: If the canvas exceeds the pixel limit or memory.
    """
    if spec.is_no_op:
        logger.debug("rotate(): no-op rotation of %.1f degrees", spec.degrees)
        return raster
    if not raster.layout.is_standard:
        raise UnsupportedLayoutError(raster.layout, "rotate")

    start = time.perf_counter()
    radians = math.radians(spec.degrees)
    canvas_size = rotated_canvas_size(raster.width, raster.height, spec.degrees)

    with allocation_guard("rotate", canvas_size):
        if raster.is_empty or 0 in canvas_size:
            rotated = Raster.blank(canvas_size[0], canvas_size[1], PixelLayout.RGBA)
        else:
            # note: operations happen right to left, see rotation_transform()
            forward = rotation_transform(raster.size, canvas_size, radians)
            image = raster_to_image(raster).convert("RGBA")
            rendered = image.transform(
                canvas_size,
                Image.Transform.AFFINE,
                affine_coefficients(forward),
                resample=Image.Resampling.BILINEAR,
                fillcolor=_TRANSPARENT,
            )
            rotated = image_to_raster(rendered, PixelLayout.RGBA)

    log_operation(
        logger,
        "rotate",
        raster.size,
        rotated.size,
        start,
        "rotated %dx%d image by %.1f degrees onto %dx%d canvas",
        raster.width,
        raster.height,
        spec.degrees,
        canvas_size[0],
        canvas_size[1],
    )
    return rotated
