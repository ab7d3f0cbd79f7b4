"""Output-size guard for operators that allocate new rasters.

A pathological scale or rotate request can ask for an arbitrarily large
buffer. Callers are expected to bound output sizes before invoking an
operator; this guard is the backstop, turning an oversized or failed
allocation into an AllocationError instead of an opaque MemoryError.
"""

from __future__ import annotations

from collections.abc import Iterator
from contextlib import contextmanager

from rasterops.config import settings
from rasterops.raster.exceptions import AllocationError


def ensure_allocatable(
    width: int,
    height: int,
    operation: str,
    limit: int | None = None,
) -> None:
    """Reject output dimensions above the configured pixel limit.

    Args:
        width: Output width in pixels.
        height: Output height in pixels.
        operation: Operator name for the error context.
        limit: Maximum pixel count. Defaults to settings.MAX_OUTPUT_PIXELS;
            0 (or negative) disables the check.

    Raises:
        AllocationError: If width * height exceeds the limit.
        ConfigError: If settings.REQUIRE_OUTPUT_LIMIT is set but no limit
            is configured.
    """
    if limit is not None:
        effective_limit = limit
    elif settings.REQUIRE_OUTPUT_LIMIT:
        effective_limit = settings.require_output_limit()
    else:
        effective_limit = settings.MAX_OUTPUT_PIXELS
    if effective_limit > 0 and width * height > effective_limit:
        raise AllocationError(
            f"Output of {width * height} pixels exceeds limit",
            operation,
            size=(width, height),
            limit=effective_limit,
        )


@contextmanager
def allocation_guard(operation: str, size: tuple[int, int]) -> Iterator[None]:
    """Check the pixel limit, then translate MemoryError into AllocationError.

    Example:
        >>> with allocation_guard("scale", (400, 300)):
        ...     buffer = bytearray(400 * 300 * 3)
    """
    ensure_allocatable(size[0], size[1], operation)
    try:
        yield
    except MemoryError as e:
        raise AllocationError(
            "Out of memory allocating output raster", operation, size=size
        ) from e
