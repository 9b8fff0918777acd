"""
Tests for the UV preview rasterizer.
"""

import time

import numpy as np
import pytest

from uv_channel_transfer.core.rasterizer import (
    RasterStyle,
    render,
    render_mesh_preview,
)
from uv_channel_transfer.utils.error_handler import ValidationError
from uv_channel_transfer.utils.math_utils import bresenham_line, clipped_line, uv_to_pixel

from conftest import make_mesh


BACKGROUND = (0.2, 0.2, 0.2)
WHITE = (1.0, 1.0, 1.0)
RED = (1.0, 0.0, 0.0)


def assert_color(image, x, y, color):
    assert image.get_pixel(x, y) == pytest.approx(color)


class TestBlankImage:

    @pytest.mark.parametrize("resolution", [1, 7, 64, 512])
    def test_empty_uvs_give_background(self, resolution):
        image = render([], [0, 1, 2], resolution)

        assert image.pixels.shape == (resolution, resolution, 3)
        assert np.allclose(image.pixels, BACKGROUND)

    def test_default_resolution(self):
        assert render([], []).resolution == 512

    @pytest.mark.parametrize("resolution", [0, -5])
    def test_non_positive_resolution_rejected(self, resolution):
        with pytest.raises(ValidationError) as exc_info:
            render([(0.5, 0.5)], [], resolution)
        assert exc_info.value.error_code == 2011

    def test_image_is_read_only(self):
        image = render([(0.5, 0.5)], [])

        assert not image.pixels.flags.writeable
        with pytest.raises(ValueError):
            image.pixels[0, 0] = (0.0, 0.0, 0.0)


class TestPoints:

    def test_vertices_are_marked_red(self):
        uvs = [(0.1, 0.1), (0.9, 0.2), (0.5, 0.8)]
        image = render(uvs, [0, 1, 2], 512)

        for uv in uvs:
            x, y = uv_to_pixel(uv, 512)
            assert_color(image, x, y, RED)

    def test_marker_is_three_by_three(self):
        image = render([(0.5, 0.5)], [], 512)

        red = np.all(np.isclose(image.pixels, RED), axis=-1)
        ys, xs = np.nonzero(red)
        assert red.sum() == 9
        assert (xs.min(), xs.max(), ys.min(), ys.max()) == (255, 257, 255, 257)

    def test_marker_clipped_at_corner(self):
        image = render([(0.0, 0.0)], [], 16)

        red = np.all(np.isclose(image.pixels, RED), axis=-1)
        assert red.sum() == 4
        assert red[0:2, 0:2].all()

    def test_point_centre_outside_image_is_not_drawn(self):
        # (1, 1) maps to pixel 512, one past the last row and column.
        image = render([(1.0, 1.0)], [], 512)

        assert np.allclose(image.pixels, BACKGROUND)

    def test_rounding_is_half_to_even(self):
        assert uv_to_pixel((0.5 / 8, 1.5 / 8), 8) == (0, 2)

    def test_points_drawn_over_edges(self):
        uvs = [(0.25, 0.25), (0.75, 0.25), (0.25, 0.75)]
        image = render(uvs, [0, 1, 2], 64)

        # pixel right next to a vertex, on its outgoing edge
        assert_color(image, 17, 16, RED)
        assert_color(image, 20, 16, WHITE)


class TestEdges:

    def test_diagonal_is_unbroken(self):
        image = render([(0.0, 0.0), (1.0, 1.0)], [0, 1, 1], 512)

        for i in range(2, 512):
            assert_color(image, i, i, WHITE)
        assert_color(image, 0, 0, RED)
        assert_color(image, 1, 1, RED)
        assert_color(image, 10, 11, BACKGROUND)

    def test_bresenham_diagonal_endpoints(self):
        assert list(bresenham_line(0, 0, 512, 512)) == [(i, i) for i in range(513)]

    @pytest.mark.parametrize("end", [(7, 3), (-5, 9), (0, -4), (6, 0), (-3, -3)])
    def test_bresenham_is_eight_connected(self, end):
        points = list(bresenham_line(0, 0, *end))

        assert points[0] == (0, 0)
        assert points[-1] == end
        assert len(points) == max(abs(end[0]), abs(end[1])) + 1
        for (x0, y0), (x1, y1) in zip(points, points[1:]):
            assert max(abs(x1 - x0), abs(y1 - y0)) == 1

    def test_edges_outside_image_are_dropped(self):
        uvs = [(-0.5, 0.5), (1.5, 0.5), (0.5, 2.0)]
        image = render(uvs, [0, 1, 2], 32)

        row = image.pixels[16]
        assert np.allclose(row, WHITE)
        assert np.allclose(image.pixels[0], BACKGROUND)

    @pytest.mark.parametrize("line", [
        (0, 0, 40, 17),
        (-300, 12, 90, -45),
        (-700, 900, 400, -650),
        (63, -20, 5, 120),
        (1500, 30, -20, 31),
        (10, 10, 10, 10),
        (-5, -5, -5, -5),
    ])
    def test_clipped_line_matches_bresenham(self, line):
        expected = [(x, y) for x, y in bresenham_line(*line) if 0 <= x < 64 and 0 <= y < 48]

        assert sorted(clipped_line(*line, 64, 48)) == sorted(expected)

    def test_far_away_uv_renders_quickly(self):
        start = time.perf_counter()
        image = render([(0.0, 0.0), (1e6, 0.0), (0.0, 0.5)], [0, 1, 2], 512)
        elapsed = time.perf_counter() - start

        assert elapsed < 2.0
        for x in range(2, 512):
            assert_color(image, x, 0, WHITE)
        for y in range(2, 255):
            assert_color(image, 0, y, WHITE)
        assert_color(image, 0, 256, RED)


class TestMalformedInput:

    uvs = [(0.1, 0.1), (0.9, 0.1), (0.5, 0.9)]

    @pytest.mark.parametrize("bad_triangle", [[0, 1, 3], [0, 1, 99], [-1, 1, 2]])
    def test_out_of_range_triangle_changes_nothing(self, bad_triangle):
        reference = render(self.uvs, [], 128)
        image = render(self.uvs, bad_triangle, 128)

        assert np.array_equal(image.pixels, reference.pixels)

    def test_later_triangles_still_render(self):
        reference = render(self.uvs, [0, 1, 2], 128)
        image = render(self.uvs, [0, 1, 7, 0, 1, 2], 128)

        assert np.array_equal(image.pixels, reference.pixels)

    def test_trailing_partial_triplet_ignored(self):
        reference = render(self.uvs, [0, 1, 2], 128)
        image = render(self.uvs, [0, 1, 2, 0], 128)

        assert np.array_equal(image.pixels, reference.pixels)

    def test_triangle_array_may_be_two_dimensional(self):
        reference = render(self.uvs, [0, 1, 2], 128)
        image = render(self.uvs, np.array([[0, 1, 2]]), 128)

        assert np.array_equal(image.pixels, reference.pixels)

    def test_non_finite_uvs_are_skipped(self):
        uvs = self.uvs + [(float('nan'), 0.5), (float('inf'), 0.5)]
        reference = render(self.uvs, [0, 1, 2], 128)
        image = render(uvs, [0, 1, 2, 0, 3, 4], 128)

        assert np.array_equal(image.pixels, reference.pixels)


class TestDeterminismAndStyle:

    def test_repeated_renders_match(self):
        uvs = np.random.default_rng(7).random((40, 2))
        triangles = np.arange(39)

        first = render(uvs, triangles, 256)
        second = render(uvs, triangles, 256)

        assert np.array_equal(first.pixels, second.pixels)

    def test_custom_style(self):
        style = RasterStyle(
            background_color=(0.0, 0.0, 0.0),
            line_color=(0.0, 1.0, 0.0),
            point_color=(0.0, 0.0, 1.0),
        )
        image = render([(0.0, 0.0), (1.0, 1.0)], [0, 1, 1], 64, style=style)

        assert_color(image, 63, 0, (0.0, 0.0, 0.0))
        assert_color(image, 30, 30, (0.0, 1.0, 0.0))
        assert_color(image, 0, 0, (0.0, 0.0, 1.0))

    def test_to_uint8_flips_rows(self):
        image = render([(0.0, 0.0)], [], 8)
        data = image.to_uint8()

        assert data.dtype == np.uint8
        assert tuple(data[7, 0]) == (255, 0, 0)
        assert tuple(data[0, 7]) == (51, 51, 51)


class TestMeshPreview:

    def test_selected_channel_is_rendered(self):
        mesh = make_mesh(uv_channels=[[], [(0.2, 0.2), (0.8, 0.2), (0.2, 0.8)]])

        image = render_mesh_preview(mesh, 1, 64)
        reference = render(mesh.uv2, mesh.triangles, 64)

        assert np.array_equal(image.pixels, reference.pixels)

    @pytest.mark.parametrize("channel", [4, -1, 17])
    def test_unsupported_channel_falls_back_to_zero(self, channel):
        mesh = make_mesh(uv_channels=[[(0.2, 0.2), (0.8, 0.2), (0.2, 0.8)]])

        image = render_mesh_preview(mesh, channel, 64)
        reference = render(mesh.uv, mesh.triangles, 64)

        assert np.array_equal(image.pixels, reference.pixels)

    def test_empty_channel_gives_blank_preview(self):
        mesh = make_mesh(uv_channels=[[(0.2, 0.2), (0.8, 0.2), (0.2, 0.8)]])

        image = render_mesh_preview(mesh, 3, 32)

        assert np.allclose(image.pixels, BACKGROUND)
