"""Bridge between Raster and Pillow images.

Pillow does the resampling and color math for the operators, but it only
knows canonical channel orders. These helpers reorder BGR/ARGB/ABGR
buffers into RGB/RGBA on the way in and back again on the way out.
"""

from __future__ import annotations

import numpy as np
from PIL import Image

from rasterops.raster.exceptions import UnsupportedLayoutError
from rasterops.raster.types import PixelLayout, Raster

# Pillow mode used to process each standard layout
PILLOW_MODES: dict[PixelLayout, str] = {
    PixelLayout.RGB: "RGB",
    PixelLayout.BGR: "RGB",
    PixelLayout.RGBA: "RGBA",
    PixelLayout.ARGB: "RGBA",
    PixelLayout.ABGR: "RGBA",
    PixelLayout.GRAY8: "L",
    PixelLayout.BITONAL: "1",
}

_LAYOUT_FOR_MODE: dict[str, PixelLayout] = {
    "RGB": PixelLayout.RGB,
    "RGBA": PixelLayout.RGBA,
    "L": PixelLayout.GRAY8,
    "1": PixelLayout.BITONAL,
}

# Modes whose color semantics Pillow can resolve to RGB(A) itself
_RESOLVABLE_MODES = frozenset({"P", "PA", "CMYK", "YCbCr", "LAB", "HSV"})

# Fourth byte is padding, not alpha
_PADDED_MODES = frozenset({"RGBX"})

_UINT16_MAX = np.iinfo(np.uint16).max


def _is_identity(order: tuple[int, ...]) -> bool:
    return order == tuple(range(len(order)))


def _fits_uint16(data: np.ndarray) -> bool:
    return data.size == 0 or bool(data.min() >= 0 and data.max() <= _UINT16_MAX)


def canonical_array(raster: Raster) -> np.ndarray:
    """Return the raster's pixels in RGB/RGBA order.

    Single-channel layouts are returned as-is. The result may be the
    raster's own read-only buffer.
    """
    order = raster.layout.to_canonical
    if order is None or _is_identity(order):
        return raster.data
    return raster.data[..., list(order)]


def raster_from_canonical(array: np.ndarray, layout: PixelLayout) -> Raster:
    """Wrap an RGB/RGBA (or single-channel) array as a raster of layout."""
    order = layout.from_canonical
    if order is not None and not _is_identity(order):
        array = array[..., list(order)]
    return Raster(np.ascontiguousarray(array), layout)


def raster_to_image(raster: Raster) -> Image.Image:
    """Render a raster as a Pillow image in canonical channel order.

    Args:
        raster: Raster in any standard layout.

    Returns:
        Image in mode "RGB", "RGBA", "L" or "1".

    Raises:
        UnsupportedLayoutError: If the raster is CUSTOM.
    """
    if not raster.layout.is_standard:
        raise UnsupportedLayoutError(raster.layout, "raster_to_image")
    mode = PILLOW_MODES[raster.layout]
    if raster.is_empty:
        return Image.new(mode, raster.size)
    return Image.fromarray(np.ascontiguousarray(canonical_array(raster)))


def image_to_raster(image: Image.Image, layout: PixelLayout) -> Raster:
    """Convert a Pillow image into a raster of the given standard layout.

    The image is converted to the layout's Pillow mode first if needed,
    then reordered into the layout's channel order.
    """
    mode = PILLOW_MODES[layout]
    if image.mode != mode:
        image = image.convert(mode)
    return raster_from_canonical(np.asarray(image), layout)


def raster_from_image(image: Image.Image) -> Raster:
    """Adopt a decoded Pillow image as a raster.

    "RGB", "RGBA", "L" and "1" map to their standard layouts. Palette and
    other color spaces Pillow understands are resolved to RGB(A), and
    "RGBX" drops its padding byte. Anything else (16-bit, float, "LA", ...)
    becomes a CUSTOM raster holding the raw samples.

    Decoders commonly widen 16-bit samples into 32-bit mode "I"; such data
    is narrowed to uint16 when every sample fits, so normalization scales it
    over the 16-bit range rather than the 32-bit one.

    Args:
        image: Decoded image.

    Returns:
        Raster owning a copy of the image's pixels.
    """
    if image.mode in _RESOLVABLE_MODES:
        has_alpha = image.mode == "PA" or "transparency" in image.info
        image = image.convert("RGBA" if has_alpha else "RGB")
    elif image.mode in _PADDED_MODES:
        image = image.convert("RGB")

    data = np.array(image)
    if image.mode == "I" and _fits_uint16(data):
        data = data.astype(np.uint16)

    layout = _LAYOUT_FOR_MODE.get(image.mode, PixelLayout.CUSTOM)
    return Raster(data, layout)
