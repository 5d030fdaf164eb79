import pytest

from string_art.errors import InvalidConfigurationError
from string_art.frame import FrameSpec, spacing_quality


class TestFrameSpec:
    def test_forty_cm_square(self):
        frame = FrameSpec(40, 40)
        assert frame.width_mm == 400.0
        assert frame.perimeter_mm == 1600.0
        assert frame.pin_count == 160
        assert frame.actual_spacing_mm == pytest.approx(10.0)

    def test_inches(self):
        frame = FrameSpec(10, 10, unit="in")
        assert frame.width_mm == pytest.approx(254.0)
        assert frame.pin_count == 101

    def test_pin_count_rounds_down(self):
        frame = FrameSpec(40, 30, pin_spacing_mm=15)
        # 1400 mm / 15 mm = 93.3
        assert frame.pin_count == 93
        assert frame.actual_spacing_mm == pytest.approx(1400 / 93)

    def test_pin_count_range_and_recommendation(self):
        frame = FrameSpec(40, 40)
        assert frame.pin_count_range == (53, 320)
        assert frame.recommended_pin_count == 160

    def test_pins_per_edge(self):
        assert FrameSpec(40, 20).pins_per_edge == (40, 20)

    @pytest.mark.parametrize(
        "width,height,expected",
        [(40, 40, (400, 400)), (40, 20, (400, 200)), (30, 40, (400, 533))],
    )
    def test_canvas_size_keeps_aspect(self, width, height, expected):
        assert FrameSpec(width, height).canvas_size() == expected

    def test_describe(self):
        assert FrameSpec(40, 30).describe() == "40cm x 30cm"
        assert FrameSpec(16, 20, unit="in").describe() == '16" x 20"'

    def test_quality_follows_spacing(self):
        assert FrameSpec(40, 40, pin_spacing_mm=10).quality.label == "Optimal"

    @pytest.mark.parametrize(
        "kwargs",
        [
            {"width": 0, "height": 40},
            {"width": 40, "height": -1},
            {"width": 40, "height": 40, "unit": "ft"},
            {"width": 40, "height": 40, "pin_spacing_mm": 4},
            {"width": 40, "height": 40, "pin_spacing_mm": 31},
            {"width": 0.1, "height": 0.1, "pin_spacing_mm": 30},
        ],
    )
    def test_invalid(self, kwargs):
        with pytest.raises(InvalidConfigurationError):
            FrameSpec(**kwargs)


class TestSpacingQuality:
    @pytest.mark.parametrize(
        "spacing,label",
        [
            (5, "Very Tight"),
            (5.9, "Very Tight"),
            (6, "Tight"),
            (7.9, "Tight"),
            (8, "Optimal"),
            (12, "Optimal"),
            (12.5, "Relaxed"),
            (18, "Relaxed"),
            (18.1, "Sparse"),
            (30, "Sparse"),
        ],
    )
    def test_labels(self, spacing, label):
        assert spacing_quality(spacing).label == label
