"""Operation descriptors consumed by the operators.

Descriptors are immutable values built by the request-parsing layer.
Pydantic rejects malformed values at construction; the geometry that
depends on an actual raster (clamping, target sizes) is resolved here
too, so the operators and callers that only need sizes share one
implementation.

Crop regions and scale percentages are relative to the full-size image.
A ReductionFactor tells these methods how much smaller the raster in hand
already is.
"""

from __future__ import annotations

import math
from enum import Enum
from typing import Self

from pydantic import BaseModel, Field, model_validator

from rasterops.geometry.primitives import Region, Size
from rasterops.geometry.reduction import ReductionFactor
from rasterops.geometry.transforms import round_half_away
from rasterops.raster.exceptions import InvalidGeometryError


class CropUnit(Enum):
    """Unit of a crop region's coordinates."""

    PIXELS = "pixels"
    PERCENT = "percent"  # fractions of the full size, 0.0 - 1.0


class CropSpec(BaseModel, frozen=True):
    """A requested crop region relative to the full-size image.

    Attributes:
        unit: PIXELS for absolute coordinates, PERCENT for fractions.
        x: Left edge.
        y: Top edge.
        width: Requested width.
        height: Requested height.
        full: Request the whole image regardless of the other fields.

    Example:
        >>> spec = CropSpec(unit=CropUnit.PIXELS, x=100, y=50, width=200, height=100)
        >>> spec.region_in((400, 300), ReductionFactor(factor=1)).to_tuple()
        (50, 25, 100, 50)
    """

    unit: CropUnit = CropUnit.PIXELS
    x: float = Field(default=0.0, ge=0)
    y: float = Field(default=0.0, ge=0)
    width: float = Field(default=0.0, ge=0)
    height: float = Field(default=0.0, ge=0)
    full: bool = False

    @model_validator(mode="after")
    def _validate_fractions(self) -> Self:
        if self.unit is CropUnit.PERCENT:
            for name in ("x", "y", "width", "height"):
                if getattr(self, name) > 1.0:
                    raise ValueError(
                        f"PERCENT crop {name} must be a fraction <= 1.0, "
                        f"got {getattr(self, name)}"
                    )
        return self

    @property
    def is_no_op(self) -> bool:
        """True when the crop covers the whole image by construction."""
        if self.full:
            return True
        return self.unit is CropUnit.PERCENT and (
            self.x == 0 and self.y == 0 and self.width == 1 and self.height == 1
        )

    def region_in(
        self,
        size: tuple[int, int],
        reduction_factor: ReductionFactor | None = None,
    ) -> Region:
        """Resolve the crop against a (possibly reduced) raster.

        PIXELS coordinates are scaled by the reduction factor. PERCENT
        fractions of the full size are the same fractions of the reduced
        raster, so they are applied to the raster's own dimensions. The
        result is clamped to the raster's right and bottom edges.

        Args:
            size: (width, height) of the raster being cropped.
            reduction_factor: Halvings already applied to that raster.

        Returns:
            Region in the raster's pixel coordinates, possibly empty.

        Raises:
            InvalidGeometryError: If the origin lies past the raster edge.
        """
        width, height = size
        if self.full:
            return Region(x=0, y=0, width=width, height=height)

        if self.unit is CropUnit.PERCENT:
            x = round_half_away(self.x * width)
            y = round_half_away(self.y * height)
            requested_width = round_half_away(self.width * width)
            requested_height = round_half_away(self.height * height)
        else:
            rf_scale = (reduction_factor or ReductionFactor()).scale
            x = round_half_away(self.x * rf_scale)
            y = round_half_away(self.y * rf_scale)
            requested_width = round_half_away(self.width * rf_scale)
            requested_height = round_half_away(self.height * rf_scale)

        cropped_width = width - x if x + requested_width > width else requested_width
        cropped_height = (
            height - y if y + requested_height > height else requested_height
        )
        if cropped_width < 0 or cropped_height < 0:
            raise InvalidGeometryError(
                f"Crop origin ({x}, {y}) lies outside {width}x{height} raster",
                "crop",
                size=(cropped_width, cropped_height),
            )
        return Region(x=x, y=y, width=cropped_width, height=cropped_height)

    def resulting_size(
        self,
        size: tuple[int, int],
        reduction_factor: ReductionFactor | None = None,
    ) -> Size:
        """Return the size a crop of a raster of the given size would have."""
        return self.region_in(size, reduction_factor).size


class ScaleMode(Enum):
    """How a scale request's target fields are interpreted."""

    ASPECT_FIT_WIDTH = "aspect_fit_width"
    ASPECT_FIT_HEIGHT = "aspect_fit_height"
    NON_ASPECT_FILL = "non_aspect_fill"
    ASPECT_FIT_INSIDE = "aspect_fit_inside"
    PERCENT = "percent"


_REQUIRED_FIELDS: dict[ScaleMode, tuple[str, ...]] = {
    ScaleMode.ASPECT_FIT_WIDTH: ("width",),
    ScaleMode.ASPECT_FIT_HEIGHT: ("height",),
    ScaleMode.NON_ASPECT_FILL: ("width", "height"),
    ScaleMode.ASPECT_FIT_INSIDE: ("width", "height"),
    ScaleMode.PERCENT: ("percent",),
}


class ScaleSpec(BaseModel, frozen=True):
    """A requested output size.

    Attributes:
        mode: Interpretation of the target fields.
        width: Target width in pixels (FIT_WIDTH, FILL, FIT_INSIDE).
        height: Target height in pixels (FIT_HEIGHT, FILL, FIT_INSIDE).
        percent: Scale relative to the full-size image, 1.0 = 100% (PERCENT).

    Example:
        >>> spec = ScaleSpec(mode=ScaleMode.ASPECT_FIT_WIDTH, width=400)
        >>> spec.target_size((800, 600))
        (400, 300)
    """

    mode: ScaleMode
    width: int | None = Field(default=None, gt=0)
    height: int | None = Field(default=None, gt=0)
    percent: float | None = Field(default=None, gt=0)

    @model_validator(mode="after")
    def _validate_mode_fields(self) -> Self:
        missing = [
            name for name in _REQUIRED_FIELDS[self.mode] if getattr(self, name) is None
        ]
        if missing:
            raise ValueError(
                f"{self.mode.name} scale requires {', '.join(missing)}"
            )
        if self.percent is not None and not math.isfinite(self.percent):
            raise ValueError(f"percent must be finite, got {self.percent}")
        return self

    def _required(self, name: str) -> float:
        """Return a target field the mode needs, or raise if it is unset."""
        value = getattr(self, name)
        if value is None:
            raise ValueError(f"{self.mode.name} scale requires {name}")
        return value

    def target_size(
        self,
        size: tuple[int, int],
        reduction_factor: ReductionFactor | None = None,
    ) -> tuple[int, int]:
        """Compute the output dimensions for a raster of the given size.

        Each derived dimension is rounded once, half away from zero.

        Args:
            size: (width, height) of the raster being scaled.
            reduction_factor: Halvings already applied to that raster;
                only PERCENT depends on it.

        Returns:
            (width, height) of the scaled raster.

        Raises:
            InvalidGeometryError: If an aspect-preserving mode is applied to
                a zero-size raster, or the result has a non-positive side.
            ValueError: If a field the mode needs is unset, which only an
                unvalidated (model_construct) spec allows.
        """
        source_width, source_height = size
        rf = reduction_factor or ReductionFactor()

        if self.mode is not ScaleMode.NON_ASPECT_FILL and (
            source_width == 0 or source_height == 0
        ):
            raise InvalidGeometryError(
                f"Cannot scale a {source_width}x{source_height} raster by aspect",
                "scale",
                size=(source_width, source_height),
            )

        match self.mode:
            case ScaleMode.ASPECT_FIT_WIDTH:
                width = int(self._required("width"))
                height = round_half_away(source_height * width / source_width)
            case ScaleMode.ASPECT_FIT_HEIGHT:
                height = int(self._required("height"))
                width = round_half_away(source_width * height / source_height)
            case ScaleMode.NON_ASPECT_FILL:
                width = int(self._required("width"))
                height = int(self._required("height"))
            case ScaleMode.ASPECT_FIT_INSIDE:
                factor = min(
                    self._required("width") / source_width,
                    self._required("height") / source_height,
                )
                width = round_half_away(source_width * factor)
                height = round_half_away(source_height * factor)
            case ScaleMode.PERCENT:
                pct = self._required("percent") / rf.scale
                width = round_half_away(source_width * pct)
                height = round_half_away(source_height * pct)

        if width <= 0 or height <= 0:
            raise InvalidGeometryError(
                f"Scale of {source_width}x{source_height} raster resolves to "
                "a non-positive size",
                "scale",
                size=(width, height),
            )
        return width, height

    def resulting_size(
        self,
        size: tuple[int, int],
        reduction_factor: ReductionFactor | None = None,
    ) -> Size:
        """Return target_size() as a Size."""
        return Size.from_tuple(self.target_size(size, reduction_factor))

    def is_no_op_for(
        self,
        size: tuple[int, int],
        reduction_factor: ReductionFactor | None = None,
    ) -> bool:
        """True when scaling a raster of this size would not change it."""
        return self.target_size(size, reduction_factor) == tuple(size)


class RotateSpec(BaseModel, frozen=True):
    """A clockwise rotation in degrees.

    Attributes:
        degrees: Any finite real; reduced modulo 360 where it matters.
    """

    degrees: float = 0.0

    @model_validator(mode="after")
    def _validate_finite(self) -> Self:
        if not math.isfinite(self.degrees):
            raise ValueError(f"degrees must be finite, got {self.degrees}")
        return self

    @property
    def normalized_degrees(self) -> float:
        """Degrees reduced into [0, 360)."""
        normalized = self.degrees % 360
        # Tiny negative angles wrap to exactly 360.0 in floating point
        return 0.0 if normalized == 360 else normalized

    @property
    def is_no_op(self) -> bool:
        return self.normalized_degrees == 0


class Filter(Enum):
    """Colorimetric filter."""

    NONE = "none"
    GRAY = "gray"
    BITONAL = "bitonal"

    @property
    def is_no_op(self) -> bool:
        return self is Filter.NONE


class Transpose(Enum):
    """Mirror axis. HORIZONTAL flips left-right, VERTICAL flips top-bottom."""

    HORIZONTAL = "horizontal"
    VERTICAL = "vertical"
