"""Alpha removal.

Alpha-bearing rasters are composited over an opaque background and
returned without an alpha channel. The background is black: the result is
what drawing the source onto a freshly allocated (zero-filled) opaque
buffer produces, i.e. each channel becomes round(c * a / 255).
"""

from __future__ import annotations

import logging
import time

from PIL import Image

from rasterops.core.guards import allocation_guard
from rasterops.raster.convert import image_to_raster, raster_to_image
from rasterops.raster.exceptions import UnsupportedLayoutError
from rasterops.raster.types import PixelLayout, Raster
from rasterops.utils.logging import log_operation

logger = logging.getLogger(__name__)

ALPHA_BACKGROUND: tuple[int, int, int] = (0, 0, 0)


def flatten_alpha(image: Image.Image) -> Image.Image:
    """Composite an RGBA image over ALPHA_BACKGROUND.

    Args:
        image: Image in mode "RGBA".

    Returns:
        Opaque image in mode "RGB".
    """
    background = Image.new("RGBA", image.size, (*ALPHA_BACKGROUND, 255))
    return Image.alpha_composite(background, image).convert("RGB")


def opaque_layout_for(layout: PixelLayout) -> PixelLayout:
    """Opaque layout an alpha-bearing layout collapses to.

    ABGR keeps its blue-green-red order; every other alpha layout becomes RGB.
    """
    if layout is PixelLayout.ABGR:
        return PixelLayout.BGR
    return PixelLayout.RGB


def remove_alpha(raster: Raster) -> Raster:
    """Drop a raster's alpha channel by compositing over black.

    Args:
        raster: Raster in any standard layout.

    Returns:
        The input raster if it has no alpha channel, otherwise a new BGR
        (for ABGR input) or RGB raster.

    Raises:
        UnsupportedLayoutError: If the raster is CUSTOM, whose alpha
            cannot be identified.
    """
    if not raster.layout.is_standard:
        raise UnsupportedLayoutError(raster.layout, "remove_alpha")
    if not raster.layout.has_alpha:
        return raster

    start = time.perf_counter()
    target = opaque_layout_for(raster.layout)
    with allocation_guard("remove_alpha", raster.size):
        if raster.is_empty:
            opaque = Raster.blank(raster.width, raster.height, target)
        else:
            flattened = flatten_alpha(raster_to_image(raster))
            opaque = image_to_raster(flattened, target)

    log_operation(
        logger,
        "remove_alpha",
        raster.size,
        opaque.size,
        start,
        "converted %s to %s",
        raster.layout.name,
        target.name,
    )
    return opaque
