"""Numeric helpers shared by the geometry operators.

Coordinate Systems:
    - Continuous pixel space: pixel (i, j) covers [i, i+1) x [j, j+1),
      y increases downward. Pillow's affine transform uses the same
      convention, so matrices built here can be handed to it directly.

Rotation Convention:
    Positive angles rotate clockwise on screen (with y pointing down this
    is the ordinary counter-clockwise matrix in math coordinates).
"""

from __future__ import annotations

import math

import numpy as np

__all__ = [
    "affine_coefficients",
    "round_half_away",
    "rotated_canvas_size",
    "rotation_transform",
]


def round_half_away(value: float) -> int:
    """Round to the nearest integer, halves away from zero.

    Python's round() rounds halves to even, which would make 0.5 -> 0 and
    2.5 -> 2; dimension arithmetic wants 1 and 3.

    Example:
        >>> round_half_away(2.5), round_half_away(-2.5), round_half_away(2.4)
        (3, -3, 2)
    """
    return int(math.copysign(math.floor(abs(value) + 0.5), value))


def rotated_canvas_size(width: int, height: int, degrees: float) -> tuple[int, int]:
    """Size of the smallest canvas holding a rectangle rotated by degrees.

    Args:
        width: Source width in pixels.
        height: Source height in pixels.
        degrees: Rotation angle; any real value.

    Returns:
        (canvas_width, canvas_height), each rounded half away from zero.

    Example:
        >>> rotated_canvas_size(100, 100, 45)
        (141, 141)
    """
    radians = math.radians(degrees % 360)
    cos = abs(math.cos(radians))
    sin = abs(math.sin(radians))
    canvas_width = round_half_away(width * cos + height * sin)
    canvas_height = round_half_away(height * cos + width * sin)
    return canvas_width, canvas_height


def _translation(dx: float, dy: float) -> np.ndarray:
    return np.array([[1.0, 0.0, dx], [0.0, 1.0, dy], [0.0, 0.0, 1.0]])


def rotation_transform(
    source_size: tuple[int, int],
    canvas_size: tuple[int, int],
    radians: float,
) -> np.ndarray:
    """Build the forward source-to-canvas matrix for a centered rotation.

    The composite is applied right to left:
    1. translate the source center to the origin
    2. rotate by radians
    3. translate the origin to the canvas center

    Args:
        source_size: (width, height) of the source raster.
        canvas_size: (width, height) of the destination canvas.
        radians: Rotation angle.

    Returns:
        3x3 homogeneous matrix mapping source points to canvas points.
    """
    source_width, source_height = source_size
    canvas_width, canvas_height = canvas_size
    cos = math.cos(radians)
    sin = math.sin(radians)
    rotation = np.array([[cos, -sin, 0.0], [sin, cos, 0.0], [0.0, 0.0, 1.0]])
    return (
        _translation(canvas_width / 2, canvas_height / 2)
        @ rotation
        @ _translation(-source_width / 2, -source_height / 2)
    )


def affine_coefficients(forward: np.ndarray) -> tuple[float, ...]:
    """Convert a forward 3x3 matrix into Pillow's AFFINE data tuple.

    Pillow samples the source at inverse(forward) applied to each
    destination pixel, so the tuple is the first two rows of the inverse.

    Returns:
        (a, b, c, d, e, f) such that source = (a*x + b*y + c, d*x + e*y + f).
    """
    inverse = np.linalg.inv(forward)
    return tuple(float(v) for v in inverse[:2].ravel())
