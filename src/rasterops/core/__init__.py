"""Raster operators for rasterops.

Each operator is a pure function: it reads one raster, never writes to
it, and either returns that same raster (when the request is a no-op) or
a new one. Operators hold no state and may run concurrently.

Public API:
    - crop: Keep a region given relative to the full-size image.
    - scale: Resize by width, height, fit or percent.
    - rotate: Rotate clockwise onto a transparent canvas.
    - transpose: Mirror horizontally or vertically.
    - filter_raster: Convert to gray or bitonal.
    - remove_alpha: Composite over black and drop alpha.
    - convert_custom_to_rgb: Interpret a CUSTOM buffer as RGB.
"""

from rasterops.core.alpha import ALPHA_BACKGROUND, remove_alpha
from rasterops.core.crop import crop
from rasterops.core.filters import filter_raster
from rasterops.core.normalize import convert_custom_to_rgb
from rasterops.core.rotate import rotate
from rasterops.core.scale import scale
from rasterops.core.transpose import transpose

__all__ = [
    "ALPHA_BACKGROUND",
    "convert_custom_to_rgb",
    "crop",
    "filter_raster",
    "remove_alpha",
    "rotate",
    "scale",
    "transpose",
]
