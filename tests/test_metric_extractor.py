import math

from helpers import make_box, make_page_boxes

from fontprint.config import Settings
from fontprint.core.metric_extractor import (
    cluster_lines,
    diffs,
    extract_raw_metrics,
    finite_or_zero,
    half_points_to_points,
    median,
    points_to_mm,
    pt_to_px,
    px_to_mm,
    sample_glyph_signatures,
    twips_to_points,
    usable_boxes,
)
from fontprint.core.models import Surface


def test_median_of_empty_list_is_zero():
    assert median([]) == 0


def test_median_odd_and_even_lengths():
    assert median([1, 3, 2]) == 2
    assert median([1, 2, 3, 4]) == 2.5


def test_cluster_lines_absorbs_noise_into_first_position():
    assert cluster_lines([10, 12, 13, 50]) == [10, 50]


def test_cluster_lines_sorts_and_respects_threshold():
    assert cluster_lines([50, 10, 14, 15]) == [10, 15, 50]
    assert cluster_lines([10, 14, 50], threshold=5) == [10, 50]
    assert cluster_lines([]) == []


def test_diffs():
    assert diffs([100, 140, 180]) == [40, 40]
    assert diffs([5]) == []


def test_font_size_ignores_heading_outlier():
    boxes = [make_box(0, i * 40, 20, h) for i, h in enumerate([14, 14, 15, 14, 30])]
    metrics = extract_raw_metrics(boxes, Surface(400, 400))

    assert metrics.font_size_px == 14


def test_extract_raw_metrics_from_page():
    metrics = extract_raw_metrics(make_page_boxes(), Surface(200, 300))

    assert metrics.font_size_px == 14
    assert metrics.line_gap_px == 40
    assert metrics.left_margin_px == 20
    assert metrics.right_margin_px == 30
    assert metrics.top_margin_px == 30
    assert metrics.bottom_margin_px == 176
    assert math.isclose(metrics.aspect, (60 / 15 + 80 / 15) / 2)


def test_line_gap_drops_gaps_of_one_pixel_or_less():
    # Centers 10, 11, 50, 90; the 1px gap survives clustering but not the gap filter.
    boxes = [make_box(0, 0, 10, 20), make_box(0, 1, 10, 20), make_box(0, 40, 10, 20), make_box(0, 80, 10, 20)]
    metrics = extract_raw_metrics(boxes, Surface(100, 200), Settings(line_merge_threshold_px=0.5))

    assert metrics.line_gap_px == 39.5


def test_single_line_has_zero_line_gap():
    boxes = [make_box(0, 10, 30, 12), make_box(40, 11, 30, 12)]
    metrics = extract_raw_metrics(boxes, Surface(100, 100))

    assert metrics.line_gap_px == 0


def test_empty_input_returns_no_layout_data():
    metrics = extract_raw_metrics([], Surface(100, 100))

    assert metrics.is_empty
    assert metrics.font_size_px is None
    assert metrics.left_margin_px is None
    assert metrics.aspect is None


def test_zero_height_boxes_do_not_divide_by_zero():
    boxes = [make_box(0, 10, 10, 0), make_box(20, 10, 10, 0)]
    metrics = extract_raw_metrics(boxes, Surface(100, 100))

    assert metrics.aspect == 10
    assert metrics.font_size_px == 0


def test_finite_or_zero():
    assert finite_or_zero(float("nan")) == 0
    assert finite_or_zero(float("inf")) == 0
    assert finite_or_zero(3.5) == 3.5


def test_usable_boxes_filters_blank_text_and_low_confidence():
    boxes = [
        make_box(0, 0, 10, 10, text="  "),
        make_box(0, 0, 10, 10, text="low", confidence=0.2),
        make_box(0, 0, 10, 10, text="high", confidence=0.9),
        make_box(0, 0, 10, 10, text="unscored"),
    ]
    kept = usable_boxes(boxes, Settings(ocr_confidence_threshold=0.5))

    assert [b.text for b in kept] == ["high", "unscored"]


def test_sample_glyph_signatures_picks_revealing_words():
    boxes = [make_box(5, 6, 30, 10, text="apple"), make_box(0, 0, 10, 10, text="xyz")]
    signatures = sample_glyph_signatures(boxes)

    assert len(signatures) == 1
    assert signatures[0].to_dict() == {"glyph": "a", "box": [5, 6, 30, 10]}


def test_sample_glyph_signatures_limits():
    many = [make_box(0, 0, 10, 10, text="a") for _ in range(40)]
    assert len(sample_glyph_signatures(many)) == 25

    late = [make_box(0, 0, 10, 10, text="x") for _ in range(120)]
    late += [make_box(0, 0, 10, 10, text="a") for _ in range(10)]
    assert sample_glyph_signatures(late) == []


def test_sample_glyph_signatures_skips_degenerate_boxes():
    boxes = [make_box(0, 0, 0, 10, text="a"), make_box(0, 0, 10, 10, text="e")]

    assert [s.glyph for s in sample_glyph_signatures(boxes)] == ["e"]


def test_unit_conversions():
    assert twips_to_points(1440) == 72
    assert points_to_mm(72) == 25.4
    assert half_points_to_points(21) == 10.5
    assert pt_to_px(72) == 96
    assert px_to_mm(96) == 25.4


def test_boxes_past_the_surface_leave_zero_margins():
    boxes = [make_box(0, 0, 900, 14), make_box(0, 900, 900, 14)]
    metrics = extract_raw_metrics(boxes, Surface(10, 10))

    assert metrics.right_margin_px == 0
    assert metrics.bottom_margin_px == 0
    assert metrics.left_margin_px == 0
    assert metrics.top_margin_px == 0
