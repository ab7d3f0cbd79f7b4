"""Type definitions for the raster data layer.

A Raster is a numpy pixel buffer tagged with a PixelLayout from a small
closed set. Arrays are indexed [row, column(, channel)], so the shape of a
W x H raster is (H, W) or (H, W, C).
"""

from __future__ import annotations

from dataclasses import dataclass
from enum import Enum

import numpy as np


class PixelLayout(Enum):
    """Channel composition and memory arrangement of a raster's pixels.

    Multi-channel layouts are interleaved uint8 in the order their name
    spells out. Alpha is straight (not premultiplied). GRAY8 is a 2-D uint8
    array and BITONAL a 2-D bool array where True is white. CUSTOM is any
    other numeric buffer; most operators refuse it.
    """

    RGB = "rgb"
    BGR = "bgr"
    RGBA = "rgba"
    ARGB = "argb"
    ABGR = "abgr"
    GRAY8 = "gray8"
    BITONAL = "bitonal"
    CUSTOM = "custom"

    @property
    def channels(self) -> int | None:
        """Channel count, or None for CUSTOM."""
        return _CHANNELS.get(self)

    @property
    def dtype(self) -> np.dtype | None:
        """Element dtype of the buffer, or None for CUSTOM."""
        if self is PixelLayout.CUSTOM:
            return None
        if self is PixelLayout.BITONAL:
            return np.dtype(np.bool_)
        return np.dtype(np.uint8)

    @property
    def bytes_per_pixel(self) -> int | None:
        """Buffer bytes per pixel, or None for CUSTOM."""
        channels = self.channels
        dtype = self.dtype
        if channels is None or dtype is None:
            return None
        return channels * dtype.itemsize

    @property
    def has_alpha(self) -> bool:
        return self in _ALPHA_LAYOUTS

    @property
    def is_standard(self) -> bool:
        """True for every layout the operators can interpret."""
        return self is not PixelLayout.CUSTOM

    @property
    def to_canonical(self) -> tuple[int, ...] | None:
        """Channel indices that reorder this layout into RGB or RGBA.

        None for single-channel layouts and CUSTOM.
        """
        return _TO_CANONICAL.get(self)

    @property
    def from_canonical(self) -> tuple[int, ...] | None:
        """Channel indices that reorder RGB or RGBA into this layout."""
        return _FROM_CANONICAL.get(self)


_CHANNELS: dict[PixelLayout, int] = {
    PixelLayout.RGB: 3,
    PixelLayout.BGR: 3,
    PixelLayout.RGBA: 4,
    PixelLayout.ARGB: 4,
    PixelLayout.ABGR: 4,
    PixelLayout.GRAY8: 1,
    PixelLayout.BITONAL: 1,
}

_ALPHA_LAYOUTS = frozenset({PixelLayout.RGBA, PixelLayout.ARGB, PixelLayout.ABGR})

_TO_CANONICAL: dict[PixelLayout, tuple[int, ...]] = {
    PixelLayout.RGB: (0, 1, 2),
    PixelLayout.BGR: (2, 1, 0),
    PixelLayout.RGBA: (0, 1, 2, 3),
    PixelLayout.ARGB: (1, 2, 3, 0),
    PixelLayout.ABGR: (3, 2, 1, 0),
}

_FROM_CANONICAL: dict[PixelLayout, tuple[int, ...]] = {
    PixelLayout.RGB: (0, 1, 2),
    PixelLayout.BGR: (2, 1, 0),
    PixelLayout.RGBA: (0, 1, 2, 3),
    PixelLayout.ARGB: (3, 0, 1, 2),
    PixelLayout.ABGR: (3, 2, 1, 0),
}


def _check_layout(data: np.ndarray, layout: PixelLayout) -> None:
    """Raise ValueError if data's shape or dtype disagrees with layout."""
    if layout is PixelLayout.CUSTOM:
        if data.ndim not in (2, 3):
            raise ValueError(
                f"CUSTOM raster must be 2-D or 3-D, got {data.ndim}-D array"
            )
        if data.ndim == 3 and data.shape[2] == 0:
            raise ValueError("CUSTOM raster must have at least one channel")
        if data.dtype.kind not in "buif":
            raise ValueError(
                "CUSTOM raster must hold bool, integer or float samples, "
                f"got dtype {data.dtype}"
            )
        return

    if data.dtype != layout.dtype:
        raise ValueError(
            f"{layout.name} raster requires dtype {layout.dtype}, got {data.dtype}"
        )

    channels = layout.channels
    if channels == 1:
        if data.ndim != 2:
            raise ValueError(
                f"{layout.name} raster must be 2-D, got shape {data.shape}"
            )
    elif data.ndim != 3 or data.shape[2] != channels:
        raise ValueError(
            f"{layout.name} raster must have shape (height, width, {channels}), "
            f"got {data.shape}"
        )


@dataclass(frozen=True, eq=False)
class Raster:
    """Immutable rectangular pixel buffer with a known layout.

    The stored array is always a read-only view, so neither operators nor
    callers can write through a Raster. Operators that change pixels build a
    new array; operators asked for a no-op return the same Raster object.

    Attributes:
        data: Pixel buffer, shape (height, width) or (height, width, channels).
        layout: How to interpret the buffer.

    Example:
        >>> raster = Raster(np.zeros((600, 800, 3), dtype=np.uint8), PixelLayout.RGB)
        >>> raster.size
        (800, 600)
    """

    data: np.ndarray
    layout: PixelLayout

    def __post_init__(self) -> None:
        if not isinstance(self.data, np.ndarray):
            raise TypeError(
                f"Raster data must be a numpy array, got {type(self.data).__name__}"
            )
        _check_layout(self.data, self.layout)
        if self.data.flags.writeable:
            view = self.data.view()
            view.flags.writeable = False
            object.__setattr__(self, "data", view)

    @classmethod
    def blank(
        cls,
        width: int,
        height: int,
        layout: PixelLayout,
    ) -> Raster:
        """Create a zero-filled raster (black, transparent where alpha exists).

        Raises:
            ValueError: If layout is CUSTOM or a dimension is negative.
        """
        if layout is PixelLayout.CUSTOM:
            raise ValueError("Cannot create a blank CUSTOM raster")
        if width < 0 or height < 0:
            raise ValueError(f"Dimensions must be non-negative, got {width}x{height}")
        shape: tuple[int, ...] = (height, width)
        if layout.channels != 1:
            shape = (height, width, layout.channels or 0)
        return cls(np.zeros(shape, dtype=layout.dtype), layout)

    @property
    def width(self) -> int:
        return int(self.data.shape[1])

    @property
    def height(self) -> int:
        return int(self.data.shape[0])

    @property
    def size(self) -> tuple[int, int]:
        """Return (width, height)."""
        return (self.width, self.height)

    @property
    def channels(self) -> int:
        return 1 if self.data.ndim == 2 else int(self.data.shape[2])

    @property
    def is_empty(self) -> bool:
        return self.width == 0 or self.height == 0

    def pixels_equal(self, other: Raster) -> bool:
        """Check for identical layout, dimensions and pixel values."""
        return (
            self.layout is other.layout
            and self.data.shape == other.data.shape
            and self.data.dtype == other.data.dtype
            and bool(np.array_equal(self.data, other.data))
        )

    def __repr__(self) -> str:
        return f"Raster({self.width}x{self.height}, layout={self.layout.name})"
