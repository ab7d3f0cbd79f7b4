"""Custom exceptions for raster operations.

Every operator failure is raised to the caller with enough context to
explain which operation failed and on what input. Nothing is retried:
operators are deterministic.
"""

from __future__ import annotations

from typing import TYPE_CHECKING

if TYPE_CHECKING:
    from rasterops.raster.types import PixelLayout


class RasterError(Exception):
    """Base exception for all raster operation errors."""

    def __init__(self, message: str, operation: str | None = None) -> None:
        """Initialize raster error with optional operation context.

        Args:
            message: Human-readable error description.
            operation: Name of the operator that failed (e.g. "crop").
        """
        self.operation = operation
        self.message = message
        super().__init__(self._format_message())

    def _format_message(self) -> str:
        """Format error message with operation context if available."""
        if self.operation:
            return f"{self.message} (operation: {self.operation})"
        return self.message


class InvalidGeometryError(RasterError):
    """Raised when a crop or scale resolves to an unusable region or size.

    This error is raised when:
    - A crop origin lies past the raster edge (negative clamped extent)
    - A scale computes a non-positive target width or height
    - An aspect-preserving scale is asked of a zero-size raster
    """

    def __init__(
        self,
        message: str,
        operation: str | None = None,
        *,
        size: tuple[int, int] | None = None,
    ) -> None:
        """Initialize geometry error.

        Args:
            message: Human-readable error description.
            operation: Name of the operator that failed.
            size: (width, height) that was rejected.
        """
        self.size = size
        super().__init__(message, operation)

    def _format_message(self) -> str:
        parts = [self.message]
        if self.operation:
            parts.append(f"operation={self.operation}")
        if self.size is not None:
            parts.append(f"size={self.size}")

        if len(parts) == 1:
            return parts[0]
        return f"{parts[0]} ({', '.join(parts[1:])})"


class UnsupportedLayoutError(RasterError):
    """Raised when an operator cannot interpret a raster's pixel layout.

    The usual cause is a CUSTOM raster reaching a colorimetric or
    resampling operator. Run convert_custom_to_rgb() first.
    """

    def __init__(
        self,
        layout: PixelLayout,
        operation: str | None = None,
    ) -> None:
        """Initialize layout error.

        Args:
            layout: The layout that was rejected.
            operation: Name of the operator that rejected it.
        """
        self.layout = layout
        message = f"Unsupported pixel layout {layout.name}"
        if layout.name == "CUSTOM":
            message += "; normalize it with convert_custom_to_rgb() first"
        super().__init__(message, operation)


class AllocationError(RasterError):
    """Raised when an output raster cannot be allocated.

    Either the requested dimensions exceed the configured pixel limit, or
    the allocation itself ran out of memory. Never downgraded to a
    smaller output.
    """

    def __init__(
        self,
        message: str,
        operation: str | None = None,
        *,
        size: tuple[int, int] | None = None,
        limit: int | None = None,
    ) -> None:
        """Initialize allocation error.

        Args:
            message: Human-readable error description.
            operation: Name of the operator that failed.
            size: (width, height) of the requested output.
            limit: Configured maximum pixel count, if one applied.
        """
        self.size = size
        self.limit = limit
        super().__init__(message, operation)

    def _format_message(self) -> str:
        parts = [self.message]
        if self.operation:
            parts.append(f"operation={self.operation}")
        if self.size is not None:
            parts.append(f"size={self.size}")
        if self.limit is not None:
            parts.append(f"limit={self.limit}")

        if len(parts) == 1:
            return parts[0]
        return f"{parts[0]} ({', '.join(parts[1:])})"
