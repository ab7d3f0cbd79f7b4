"""Transpose (mirror) operator.

A mirror maps every pixel center exactly onto another pixel center, so a
bilinear reflection samples with zero fractional weight and equals an
index reversal. numpy.flip gives that result exactly for every layout,
which also makes a double transpose bit-identical to the input.
"""

from __future__ import annotations

import logging
import time

import numpy as np

from rasterops.core.guards import allocation_guard
from rasterops.operations.specs import Transpose
from rasterops.raster.types import Raster
from rasterops.utils.logging import log_operation

logger = logging.getLogger(__name__)

_AXIS: dict[Transpose, int] = {
    Transpose.HORIZONTAL: 1,  # reverse columns
    Transpose.VERTICAL: 0,  # reverse rows
}


def transpose(raster: Raster, spec: Transpose) -> Raster:
    """Mirror a raster.

    Args:
        raster: Raster to mirror; any layout.
        spec: HORIZONTAL reflects about the vertical axis, VERTICAL about
            the horizontal axis.

    Returns:
        A new raster with identical dimensions and layout.
    """
    start = time.perf_counter()
    with allocation_guard("transpose", raster.size):
        data = np.flip(raster.data, axis=_AXIS[spec]).copy()
    mirrored = Raster(data, raster.layout)

    log_operation(
        logger,
        "transpose",
        raster.size,
        mirrored.size,
        start,
        "%s transposed %dx%d image",
        spec.name.lower(),
        raster.width,
        raster.height,
    )
    return mirrored
