"""Geometry module for rasterops.

This package provides the coordinate primitives, the reduction factor
value type, and the numeric helpers (rounding, rotated canvas size,
affine matrices) that the geometry operators share.

Key Components:
    - Primitives: Size and Region models in raster pixel coordinates
    - ReductionFactor: Halvings already applied to a raster
    - Transforms: round_half_away, rotated_canvas_size, rotation_transform

Example:
    from rasterops.geometry import ReductionFactor, rotated_canvas_size

    rf = ReductionFactor.for_scale(0.3)  # factor=1, scale=0.5
    canvas = rotated_canvas_size(800, 600, 30)
"""

from rasterops.geometry.primitives import Region, Size
from rasterops.geometry.reduction import ReductionFactor
from rasterops.geometry.transforms import (
    affine_coefficients,
    rotated_canvas_size,
    rotation_transform,
    round_half_away,
)

__all__ = [
    "ReductionFactor",
    "Region",
    "Size",
    "affine_coefficients",
    "rotated_canvas_size",
    "rotation_transform",
    "round_half_away",
]
