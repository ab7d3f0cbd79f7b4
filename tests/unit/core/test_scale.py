"""Unit tests for the scale operator."""

from __future__ import annotations

import numpy as np
import pytest
from hypothesis import given, settings
from hypothesis import strategies as st

from rasterops.core import scale
from rasterops.geometry import ReductionFactor, round_half_away
from rasterops.operations import ScaleMode, ScaleSpec
from rasterops.raster import (
    InvalidGeometryError,
    PixelLayout,
    Raster,
    UnsupportedLayoutError,
)


def _solid(width: int, height: int, layout: PixelLayout, value: tuple[int, ...]) -> Raster:
    data = np.empty((height, width, len(value)), dtype=np.uint8)
    data[...] = value
    return Raster(data, layout)


class TestScaleNoOp:
    """Scales whose target equals the input size return the input."""

    def test_percent_one_returns_input(self, rgb_raster: Raster) -> None:
        spec = ScaleSpec(mode=ScaleMode.PERCENT, percent=1.0)
        assert scale(rgb_raster, spec) is rgb_raster

    def test_fill_to_current_size_returns_input(self, rgb_raster: Raster) -> None:
        spec = ScaleSpec(mode=ScaleMode.NON_ASPECT_FILL, width=8, height=6)
        assert scale(rgb_raster, spec) is rgb_raster

    def test_percent_matching_reduction_returns_input(self, rgb_raster: Raster) -> None:
        """50% of the full size is exactly what a factor-1 raster already is."""
        spec = ScaleSpec(mode=ScaleMode.PERCENT, percent=0.5)
        assert scale(rgb_raster, spec, ReductionFactor(factor=1)) is rgb_raster

    def test_no_op_on_custom_layout_returns_input(self, custom_raster: Raster) -> None:
        spec = ScaleSpec(mode=ScaleMode.PERCENT, percent=1.0)
        assert scale(custom_raster, spec) is custom_raster


class TestScaleDimensions:
    """Output dimensions per mode."""

    def test_aspect_fit_width(self) -> None:
        raster = Raster.blank(800, 600, PixelLayout.RGB)
        scaled = scale(raster, ScaleSpec(mode=ScaleMode.ASPECT_FIT_WIDTH, width=400))
        assert scaled.size == (400, 300)

    def test_aspect_fit_height(self) -> None:
        raster = Raster.blank(800, 600, PixelLayout.RGB)
        scaled = scale(raster, ScaleSpec(mode=ScaleMode.ASPECT_FIT_HEIGHT, height=150))
        assert scaled.size == (200, 150)

    def test_non_aspect_fill(self, rgb_raster: Raster) -> None:
        spec = ScaleSpec(mode=ScaleMode.NON_ASPECT_FILL, width=3, height=11)
        assert scale(rgb_raster, spec).size == (3, 11)

    def test_aspect_fit_inside(self, rgb_raster: Raster) -> None:
        spec = ScaleSpec(mode=ScaleMode.ASPECT_FIT_INSIDE, width=4, height=100)
        assert scale(rgb_raster, spec).size == (4, 3)

    def test_upscale(self, rgb_raster: Raster) -> None:
        spec = ScaleSpec(mode=ScaleMode.PERCENT, percent=2.5)
        assert scale(rgb_raster, spec).size == (20, 15)

    def test_percent_with_reduction_factor(self) -> None:
        raster = Raster.blank(400, 300, PixelLayout.GRAY8)
        spec = ScaleSpec(mode=ScaleMode.PERCENT, percent=0.1)
        scaled = scale(raster, spec, ReductionFactor(factor=1))
        assert scaled.size == (80, 60)


class TestScalePixels:
    """Resampled content and layout handling."""

    @pytest.mark.parametrize("high_quality", [False, True])
    def test_solid_color_is_preserved(self, high_quality: bool) -> None:
        raster = _solid(64, 48, PixelLayout.RGB, (10, 120, 230))
        spec = ScaleSpec(mode=ScaleMode.PERCENT, percent=0.3)
        scaled = scale(raster, spec, high_quality=high_quality)
        assert scaled.size == (19, 14)
        assert np.all(scaled.data == np.array([10, 120, 230], dtype=np.uint8))

    @pytest.mark.parametrize(
        "layout", [PixelLayout.BGR, PixelLayout.ARGB, PixelLayout.ABGR, PixelLayout.RGBA]
    )
    def test_layout_and_channel_order_are_preserved(self, layout: PixelLayout) -> None:
        value = (255, 10, 20, 30) if layout.channels == 4 else (10, 20, 30)
        if layout is PixelLayout.RGBA:
            value = (10, 20, 30, 255)
        raster = _solid(10, 10, layout, value)
        scaled = scale(raster, ScaleSpec(mode=ScaleMode.PERCENT, percent=0.5))
        assert scaled.layout is layout
        assert scaled.data[2, 2].tolist() == list(value)

    def test_gray_layout_is_preserved(self) -> None:
        raster = Raster(np.full((10, 10), 77, dtype=np.uint8), PixelLayout.GRAY8)
        scaled = scale(raster, ScaleSpec(mode=ScaleMode.PERCENT, percent=0.5))
        assert scaled.layout is PixelLayout.GRAY8
        assert np.all(scaled.data == 77)

    def test_bitonal_stays_bitonal(self) -> None:
        data = np.zeros((8, 8), dtype=np.bool_)
        data[:, 4:] = True
        raster = Raster(data, PixelLayout.BITONAL)
        scaled = scale(raster, ScaleSpec(mode=ScaleMode.PERCENT, percent=0.5))
        assert scaled.layout is PixelLayout.BITONAL
        assert scaled.data.dtype == np.bool_
        assert scaled.data[:, :2].sum() == 0
        assert scaled.data[:, 2:].all()

    def test_high_quality_reduces_aliasing(self) -> None:
        """A one-pixel checkerboard averages to mid-gray with area averaging."""
        checker = (np.indices((64, 64)).sum(axis=0) % 2 * 255).astype(np.uint8)
        raster = Raster(checker, PixelLayout.GRAY8)
        spec = ScaleSpec(mode=ScaleMode.NON_ASPECT_FILL, width=8, height=8)
        smooth = scale(raster, spec, high_quality=True)
        assert np.abs(smooth.data.astype(int) - 128).max() <= 8

    def test_input_is_untouched(self, rgb_raster: Raster) -> None:
        before = rgb_raster.data.copy()
        scale(rgb_raster, ScaleSpec(mode=ScaleMode.PERCENT, percent=0.5))
        np.testing.assert_array_equal(rgb_raster.data, before)


class TestScaleErrors:
    """Failure modes."""

    def test_custom_layout_is_rejected(self, custom_raster: Raster) -> None:
        with pytest.raises(UnsupportedLayoutError):
            scale(custom_raster, ScaleSpec(mode=ScaleMode.PERCENT, percent=0.5))

    def test_zero_target_is_invalid(self) -> None:
        raster = Raster.blank(1000, 1, PixelLayout.RGB)
        with pytest.raises(InvalidGeometryError):
            scale(raster, ScaleSpec(mode=ScaleMode.ASPECT_FIT_WIDTH, width=1))

    def test_empty_raster_cannot_be_filled(self) -> None:
        raster = Raster.blank(0, 5, PixelLayout.RGB)
        spec = ScaleSpec(mode=ScaleMode.NON_ASPECT_FILL, width=4, height=4)
        with pytest.raises(InvalidGeometryError, match="empty"):
            scale(raster, spec)


class TestScaleProperties:
    """Property-based tests for scale()."""

    @settings(max_examples=40, deadline=None)
    @given(
        width=st.integers(min_value=8, max_value=200),
        height=st.integers(min_value=8, max_value=200),
        factor=st.integers(min_value=0, max_value=3),
        percent=st.floats(min_value=0.05, max_value=1.0),
    )
    def test_reduction_factor_consistency(
        self, width: int, height: int, factor: int, percent: float
    ) -> None:
        """Scaling a reduced raster matches scaling the full-size one.

        A full-size raster scaled by percent has round(W * percent) columns.
        The same request on the raster reduced by 2**factor lands within
        one pixel of that per dimension.
        """
        rf = ReductionFactor(factor=factor)
        reduced_width = max(1, round_half_away(width * rf.scale))
        reduced_height = max(1, round_half_away(height * rf.scale))
        raster = Raster.blank(reduced_width, reduced_height, PixelLayout.GRAY8)
        spec = ScaleSpec(mode=ScaleMode.PERCENT, percent=percent)

        expected = (round_half_away(width * percent), round_half_away(height * percent))
        if 0 in expected:
            return
        try:
            scaled = scale(raster, spec, rf)
        except InvalidGeometryError:
            return

        tolerance = 2**factor * percent + 1
        assert abs(scaled.width - expected[0]) <= tolerance
        assert abs(scaled.height - expected[1]) <= tolerance
