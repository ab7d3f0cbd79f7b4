"""Operation descriptors for rasterops.

Immutable values describing what an operator should do. They are built by
the request-parsing layer and read by the operators in rasterops.core.

Public API:
    - CropSpec, CropUnit: Region to keep, in pixels or fractions.
    - ScaleSpec, ScaleMode: Target size and how to derive it.
    - RotateSpec: Clockwise rotation in degrees.
    - Filter: NONE, GRAY or BITONAL.
    - Transpose: HORIZONTAL or VERTICAL mirror.
"""

from rasterops.operations.specs import (
    CropSpec,
    CropUnit,
    Filter,
    RotateSpec,
    ScaleMode,
    ScaleSpec,
    Transpose,
)

__all__ = [
    "CropSpec",
    "CropUnit",
    "Filter",
    "RotateSpec",
    "ScaleMode",
    "ScaleSpec",
    "Transpose",
]
