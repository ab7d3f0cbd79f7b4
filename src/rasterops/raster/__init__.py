"""Raster data layer for rasterops.

This package defines the in-memory pixel buffer the operators consume and
produce, the closed set of pixel layouts they understand, the error
taxonomy, and the bridge to Pillow images used by decoders and encoders.

Key Components:
    - Raster: Immutable numpy pixel buffer tagged with a PixelLayout
    - PixelLayout: RGB, BGR, RGBA, ARGB, ABGR, GRAY8, BITONAL, CUSTOM
    - raster_from_image / raster_to_image: Pillow interop
    - RasterError and subclasses: failures reported to callers

Example:
    from PIL import Image
    from rasterops.raster import raster_from_image

    raster = raster_from_image(Image.open("page.png"))
    print(f"{raster.width}x{raster.height} {raster.layout.name}")
"""

from rasterops.raster.convert import (
    canonical_array,
    image_to_raster,
    raster_from_canonical,
    raster_from_image,
    raster_to_image,
)
from rasterops.raster.exceptions import (
    AllocationError,
    InvalidGeometryError,
    RasterError,
    UnsupportedLayoutError,
)
from rasterops.raster.types import PixelLayout, Raster

__all__ = [
    "AllocationError",
    "InvalidGeometryError",
    "PixelLayout",
    "Raster",
    "RasterError",
    "UnsupportedLayoutError",
    "canonical_array",
    "image_to_raster",
    "raster_from_canonical",
    "raster_from_image",
    "raster_to_image",
]
