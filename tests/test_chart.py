"""Tests for mapping a mood series onto chart coordinates."""

from __future__ import annotations

import pytest

from moodkeeper.chart import MOOD_LINE_COLORS, ChartLayout, map_series, point_color, to_svg, x_for, y_for, y_ticks
from moodkeeper.models import NO_DATA
from moodkeeper.stats import SeriesPoint

LAYOUT = ChartLayout()  # 800x300, padding 20/20/40/40


def _series(values) -> list[SeriesPoint]:
    return [SeriesPoint(label=f"d{i}", value=v, start="", end="") for i, v in enumerate(values)]


# ---- axes ----


def test_value_domain_is_inverted():
    assert y_for(10, LAYOUT) == pytest.approx(20)
    assert y_for(1, LAYOUT) == pytest.approx(260)
    assert y_for(10, LAYOUT) < y_for(5, LAYOUT) < y_for(1, LAYOUT)


def test_values_are_clamped_into_domain():
    assert y_for(12, LAYOUT) == y_for(10, LAYOUT)
    assert y_for(0, LAYOUT) == y_for(1, LAYOUT)


def test_slots_span_plot_width():
    assert x_for(0, 7, LAYOUT) == pytest.approx(40)
    assert x_for(6, 7, LAYOUT) == pytest.approx(780)


def test_single_slot_is_centered():
    assert x_for(0, 1, LAYOUT) == pytest.approx(410)


def test_y_ticks():
    ticks = y_ticks(LAYOUT)
    assert [t for t, _ in ticks] == [2, 4, 6, 8, 10]
    assert ticks[-1][1] == pytest.approx(20)


# ---- gaps ----


def test_gap_splits_line_into_two_segments():
    geo = map_series(_series([5, 6, 7, NO_DATA, 8, 7, 6]), LAYOUT)

    assert [p.index for p in geo.points] == [0, 1, 2, 4, 5, 6]
    assert [[p.index for p in seg] for seg in geo.segments] == [[0, 1, 2], [4, 5, 6]]
    assert geo.line_path.count("M") == 2
    assert geo.area_path.count("Z") == 2

    # the slot for the missing day still exists
    assert len(geo.slots) == 7
    assert geo.slots[3].is_gap
    assert geo.slots[3].x == pytest.approx(x_for(3, 7, LAYOUT))


def test_line_never_bridges_a_gap():
    geo = map_series(_series([5, 6, 7, NO_DATA, 8, 7, 6]), LAYOUT)
    first, second = [s.strip() for s in geo.line_path.split("M") if s.strip()]
    assert first.count("L") == 2
    assert second.count("L") == 2


def test_isolated_points_are_dots():
    geo = map_series(_series([5, NO_DATA, 6, NO_DATA, 7]), LAYOUT)
    assert len(geo.segments) == 3
    assert geo.line_path.count("M") == 3
    assert "L" not in geo.line_path
    assert geo.area_path == ""


# ---- degenerate cases ----


def test_all_missing_is_empty_chart():
    geo = map_series(_series([NO_DATA] * 7), LAYOUT)
    assert geo.empty
    assert geo.points == []
    assert geo.segments == []
    assert geo.line_path == ""
    assert geo.area_path == ""
    assert geo.color is None
    assert len(geo.slots) == 7


def test_empty_series():
    geo = map_series([], LAYOUT)
    assert geo.empty
    assert geo.slots == []


def test_single_point_is_a_dot_without_area():
    geo = map_series(_series([NO_DATA, NO_DATA, 8]), LAYOUT)
    assert not geo.empty
    assert len(geo.points) == 1
    assert geo.line_path.startswith("M ")
    assert "L" not in geo.line_path
    assert geo.area_path == ""


def test_area_closes_on_baseline():
    geo = map_series(_series([4, 6]), LAYOUT)
    assert geo.area_path.endswith("L 40 260 Z")


# ---- colours ----


@pytest.mark.parametrize("value, band", [(1, "low"), (4, "low"), (4.5, "mid"), (7, "mid"), (7.1, "high"), (10, "high")])
def test_point_color_bands(value, band):
    assert point_color(value) == MOOD_LINE_COLORS[band]


def test_series_color_follows_mean():
    geo = map_series(_series([3, 4, 5]), LAYOUT)
    assert geo.color == MOOD_LINE_COLORS["low"]
    assert [p.color for p in geo.points] == [MOOD_LINE_COLORS["low"]] * 2 + [MOOD_LINE_COLORS["mid"]]


# ---- svg ----


def test_svg_for_empty_chart():
    svg = to_svg(map_series(_series([NO_DATA] * 3), LAYOUT), LAYOUT)
    assert svg.startswith("<svg")
    assert "No mood data" in svg
    assert "<path" not in svg


def test_svg_draws_points_and_labels():
    geo = map_series(_series([5, NO_DATA, 7]), LAYOUT)
    svg = to_svg(geo, LAYOUT)
    assert svg.count("<circle") == 2
    assert svg.count(">d1<") == 1
    assert svg.rstrip().endswith("</svg>")
