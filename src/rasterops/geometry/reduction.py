"""Reduction factor value type.

Decoders for pyramidal or DCT-scalable formats often hand over a raster
that is already 1/2, 1/4, ... of the full-size image. Crop regions and
scale percentages are expressed against the full-size image, so operators
need to know how many halvings were applied.
"""

from __future__ import annotations

from typing import Self

from pydantic import BaseModel, Field


class ReductionFactor(BaseModel, frozen=True):
    """Number of times a raster's dimensions have already been halved.

    Attributes:
        factor: Halving count n; the raster is 1/2**n of the full size.

    Example:
        >>> ReductionFactor(factor=2).scale
        0.25
    """

    factor: int = Field(default=0, ge=0, description="Number of halvings")

    @property
    def scale(self) -> float:
        """Linear scale of the reduced raster relative to the full size."""
        return 1.0 / (2**self.factor)

    @classmethod
    def for_scale(cls, scale: float, max_factor: int | None = None) -> Self:
        """Pick the largest reduction that does not undershoot a scale.

        A decoder asked for a 0.3x derivative can cheaply deliver a 0.5x
        raster (factor 1) and leave the remaining downscale to the scale
        operator; delivering 0.25x would lose detail.

        Args:
            scale: Requested output scale relative to the full size (> 0).
            max_factor: Highest factor the source can provide, or None
                for no limit.

        Returns:
            ReductionFactor whose scale is >= the requested scale.

        Raises:
            ValueError: If scale is not positive or max_factor is negative.
        """
        if scale <= 0:
            raise ValueError(f"scale must be positive, got {scale}")
        if max_factor is not None and max_factor < 0:
            raise ValueError(f"max_factor must be non-negative, got {max_factor}")

        factor = 0
        next_scale = 0.5
        while scale <= next_scale and (max_factor is None or factor < max_factor):
            next_scale /= 2.0
            factor += 1
        return cls(factor=factor)
