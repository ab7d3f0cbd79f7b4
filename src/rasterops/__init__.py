"""rasterops: stateless raster transforms for image derivative generation.

Operators take a decoded Raster and an operation descriptor and return a
Raster. Which operators run, and in what order, is up to the caller.
"""

from rasterops.core import (
    ALPHA_BACKGROUND,
    convert_custom_to_rgb,
    crop,
    filter_raster,
    remove_alpha,
    rotate,
    scale,
    transpose,
)
from rasterops.geometry import ReductionFactor, rotated_canvas_size
from rasterops.operations import (
    CropSpec,
    CropUnit,
    Filter,
    RotateSpec,
    ScaleMode,
    ScaleSpec,
    Transpose,
)
from rasterops.raster import (
    AllocationError,
    InvalidGeometryError,
    PixelLayout,
    Raster,
    RasterError,
    UnsupportedLayoutError,
    raster_from_image,
    raster_to_image,
)

__all__ = [
    "ALPHA_BACKGROUND",
    "AllocationError",
    "CropSpec",
    "CropUnit",
    "Filter",
    "InvalidGeometryError",
    "PixelLayout",
    "Raster",
    "RasterError",
    "ReductionFactor",
    "RotateSpec",
    "ScaleMode",
    "ScaleSpec",
    "Transpose",
    "UnsupportedLayoutError",
    "convert_custom_to_rgb",
    "crop",
    "filter_raster",
    "raster_from_image",
    "raster_to_image",
    "remove_alpha",
    "rotate",
    "rotated_canvas_size",
    "scale",
    "transpose",
]
