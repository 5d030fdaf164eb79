from collections import Counter

import pytest

from string_art.raster import rasterize_line, round_half_up


def _assert_connected(pixels):
    for (x0, y0), (x1, y1) in zip(pixels, pixels[1:]):
        dx, dy = abs(x1 - x0), abs(y1 - y0)
        assert dx <= 1 and dy <= 1
        assert dx + dy > 0


class TestRoundHalfUp:
    @pytest.mark.parametrize(
        "value,expected",
        [(0.0, 0), (0.49, 0), (0.5, 1), (2.5, 3), (-0.5, 0), (-1.6, -2), (399.9, 400)],
    )
    def test_values(self, value, expected):
        assert round_half_up(value) == expected


class TestRasterizeLine:
    def test_horizontal(self):
        pixels = rasterize_line((0, 0), (10, 0))
        assert pixels == [(x, 0) for x in range(11)]

    def test_vertical(self):
        pixels = rasterize_line((0, 0), (0, 10))
        assert pixels == [(0, y) for y in range(11)]

    def test_diagonal(self):
        pixels = rasterize_line((0, 0), (10, 10))
        assert pixels == [(i, i) for i in range(11)]

    def test_includes_endpoints(self):
        pixels = rasterize_line((5, 5), (15, 20))
        assert pixels[0] == (5, 5)
        assert pixels[-1] == (15, 20)

    def test_endpoints_are_rounded(self):
        pixels = rasterize_line((0.4, 1.5), (9.6, 3.2))
        assert pixels[0] == (0, 2)
        assert pixels[-1] == (10, 3)

    def test_single_point(self):
        assert rasterize_line((5, 5), (5, 5)) == [(5, 5)]

    def test_single_point_after_rounding(self):
        assert rasterize_line((4.6, 5.2), (5.4, 4.9)) == [(5, 5)]

    @pytest.mark.parametrize(
        "p0,p1",
        [((0, 0), (100, 50)), ((3, 90), (71, 2)), ((50, 0), (0, 7)), ((0, 0), (1, 40))],
    )
    def test_eight_connected(self, p0, p1):
        _assert_connected(rasterize_line(p0, p1))

    @pytest.mark.parametrize(
        "p0,p1",
        [((0, 0), (100, 50)), ((3, 90), (71, 2)), ((0, 0), (2, 1)), ((12.5, 0), (400, 333.3))],
    )
    def test_reverse_has_same_length(self, p0, p1):
        forward = rasterize_line(p0, p1)
        backward = rasterize_line(p1, p0)
        assert len(forward) == len(backward)
        assert forward[0] == backward[-1]
        assert forward[-1] == backward[0]

    @pytest.mark.parametrize(
        "p0,p1",
        [((0, 0), (10, 10)), ((0, 7), (30, 7)), ((4, 0), (4, 25)), ((20, 0), (0, 20))],
    )
    def test_reverse_visits_same_pixels_on_symmetric_lines(self, p0, p1):
        forward = rasterize_line(p0, p1)
        backward = rasterize_line(p1, p0)
        assert Counter(forward) == Counter(backward)
        assert forward == backward[::-1]

    @pytest.mark.parametrize(
        "p0,p1", [((0, 0), (100, 50)), ((0, 0), (7, 31)), ((90, 10), (0, 0))]
    )
    def test_length_is_major_axis_plus_one(self, p0, p1):
        pixels = rasterize_line(p0, p1)
        dx, dy = abs(p1[0] - p0[0]), abs(p1[1] - p0[1])
        assert len(pixels) == max(dx, dy) + 1

    def test_long_line(self):
        pixels = rasterize_line((0, 0), (1000, 1000))
        assert len(pixels) == 1001
