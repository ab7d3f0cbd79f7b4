"""Unit tests for the transpose operator."""

from __future__ import annotations

import numpy as np
import pytest
from hypothesis import given, settings
from hypothesis import strategies as st
from hypothesis.extra.numpy import arrays

from rasterops.core import transpose
from rasterops.operations import Transpose
from rasterops.raster import PixelLayout, Raster


class TestTranspose:
    """Tests for transpose()."""

    def test_horizontal_mirrors_columns(self, rgb_raster: Raster) -> None:
        mirrored = transpose(rgb_raster, Transpose.HORIZONTAL)
        np.testing.assert_array_equal(mirrored.data, rgb_raster.data[:, ::-1])

    def test_vertical_mirrors_rows(self, rgb_raster: Raster) -> None:
        mirrored = transpose(rgb_raster, Transpose.VERTICAL)
        np.testing.assert_array_equal(mirrored.data, rgb_raster.data[::-1])

    @pytest.mark.parametrize("spec", list(Transpose))
    def test_always_returns_new_raster(self, rgb_raster: Raster, spec: Transpose) -> None:
        mirrored = transpose(rgb_raster, spec)
        assert mirrored is not rgb_raster
        assert mirrored.size == rgb_raster.size
        assert mirrored.layout is rgb_raster.layout
        assert not np.shares_memory(mirrored.data, rgb_raster.data)

    def test_single_column_is_copied(self) -> None:
        raster = Raster(np.arange(5, dtype=np.uint8).reshape(5, 1), PixelLayout.GRAY8)
        mirrored = transpose(raster, Transpose.HORIZONTAL)
        assert mirrored.pixels_equal(raster)
        assert not np.shares_memory(mirrored.data, raster.data)

    def test_custom_layout_is_supported(self, custom_raster: Raster) -> None:
        mirrored = transpose(custom_raster, Transpose.VERTICAL)
        assert mirrored.layout is PixelLayout.CUSTOM
        np.testing.assert_array_equal(mirrored.data, custom_raster.data[::-1])

    def test_bitonal_layout_is_supported(self) -> None:
        raster = Raster(np.array([[True, False, False]]), PixelLayout.BITONAL)
        mirrored = transpose(raster, Transpose.HORIZONTAL)
        assert mirrored.data.tolist() == [[False, False, True]]

    def test_argb_channel_order_is_untouched(self) -> None:
        data = np.array([[[1, 2, 3, 4], [5, 6, 7, 8]]], dtype=np.uint8)
        mirrored = transpose(Raster(data, PixelLayout.ARGB), Transpose.HORIZONTAL)
        assert mirrored.data.tolist() == [[[5, 6, 7, 8], [1, 2, 3, 4]]]


class TestTransposeProperties:
    """Property-based tests for transpose()."""

    @settings(max_examples=50)
    @given(
        data=arrays(
            dtype=np.uint8,
            shape=st.tuples(
                st.integers(min_value=0, max_value=12),
                st.integers(min_value=0, max_value=12),
                st.just(3),
            ),
        ),
        spec=st.sampled_from(list(Transpose)),
    )
    def test_transpose_is_an_involution(self, data: np.ndarray, spec: Transpose) -> None:
        raster = Raster(data, PixelLayout.RGB)
        twice = transpose(transpose(raster, spec), spec)
        assert twice.pixels_equal(raster)
