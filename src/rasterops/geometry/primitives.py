"""Geometry primitives for rasterops.

Immutable Pydantic models for sizes and rectangular regions in raster
pixel coordinates, where (0, 0) is the top-left corner. Zero extents are
allowed: an empty region is a legal crop result.
"""

from __future__ import annotations

from typing import Self

from pydantic import BaseModel, Field


class Size(BaseModel, frozen=True):
    """A 2D size representing width and height.

    Attributes:
        width: Horizontal extent in pixels.
        height: Vertical extent in pixels.
    """

    width: int = Field(..., ge=0, description="Width in pixels")
    height: int = Field(..., ge=0, description="Height in pixels")

    @property
    def area(self) -> int:
        """Calculate the area in square pixels."""
        return self.width * self.height

    @property
    def is_empty(self) -> bool:
        return self.width == 0 or self.height == 0

    def to_tuple(self) -> tuple[int, int]:
        """Convert to (width, height) tuple."""
        return (self.width, self.height)

    @classmethod
    def from_tuple(cls, size: tuple[int, int]) -> Self:
        """Create Size from (width, height) tuple."""
        return cls(width=size[0], height=size[1])


class Region(BaseModel, frozen=True):
    """A rectangular region in raster pixel coordinates.

    The region is defined as:
    - Top-left: (x, y)
    - Bottom-right: (x + width, y + height) [exclusive]

    Attributes:
        x: Left edge X coordinate (>= 0).
        y: Top edge Y coordinate (>= 0).
        width: Horizontal extent in pixels (>= 0).
        height: Vertical extent in pixels (>= 0).
    """

    x: int = Field(..., ge=0, description="Left edge X coordinate")
    y: int = Field(..., ge=0, description="Top edge Y coordinate")
    width: int = Field(..., ge=0, description="Width in pixels")
    height: int = Field(..., ge=0, description="Height in pixels")

    @property
    def right(self) -> int:
        """Return the X coordinate of the right edge (exclusive)."""
        return self.x + self.width

    @property
    def bottom(self) -> int:
        """Return the Y coordinate of the bottom edge (exclusive)."""
        return self.y + self.height

    @property
    def size(self) -> Size:
        """Return the dimensions as a Size."""
        return Size(width=self.width, height=self.height)

    def to_tuple(self) -> tuple[int, int, int, int]:
        """Convert to (x, y, width, height) tuple."""
        return (self.x, self.y, self.width, self.height)

    @classmethod
    def from_tuple(cls, bbox: tuple[int, int, int, int]) -> Self:
        """Create Region from (x, y, width, height) tuple."""
        return cls(x=bbox[0], y=bbox[1], width=bbox[2], height=bbox[3])

    def covers(self, bounds: Size) -> bool:
        """Check whether this region is exactly the full extent of bounds."""
        return (
            self.x == 0
            and self.y == 0
            and self.width == bounds.width
            and self.height == bounds.height
        )

    def is_within(self, bounds: Size) -> bool:
        """Check whether this region lies entirely inside bounds."""
        return self.right <= bounds.width and self.bottom <= bounds.height
