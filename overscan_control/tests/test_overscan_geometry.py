from __future__ import annotations

import pytest

from overscan_control.display_modes import DEFAULT_BOUND, MODE_BOUNDS
from overscan_control.overscan_geometry import (
    Bound,
    Rectangle,
    apply_percent,
    clamp_percent,
    clamp_to_bound,
    derive_initial_percent,
    format_axis,
)

ALL_BOUNDS = sorted({bound for _fragment, bound in MODE_BOUNDS} | {DEFAULT_BOUND}, key=lambda b: (b.max_right, b.max_bottom))


@pytest.mark.parametrize("bound", ALL_BOUNDS, ids=lambda b: f"{b.width}x{b.height}")
def test_every_percent_stays_inside_canvas(bound):
    for percent in range(80, 101):
        rect = apply_percent(percent, bound)
        assert 0 <= rect.left <= rect.right <= bound.max_right
        assert 0 <= rect.top <= rect.bottom <= bound.max_bottom
        assert rect.width == rect.right - rect.left + 1 >= 1
        assert rect.height == rect.bottom - rect.top + 1 >= 1
        assert rect.right == bound.max_right - rect.left
        assert rect.bottom == bound.max_bottom - rect.top


@pytest.mark.parametrize("bound", ALL_BOUNDS, ids=lambda b: f"{b.width}x{b.height}")
def test_full_percent_is_full_canvas(bound):
    assert apply_percent(100, bound) == bound.full_rectangle()


def test_apply_percent_1080_values():
    bound = Bound(1919, 1079)
    assert apply_percent(99, bound) == Rectangle(left=4, top=2, right=1915, bottom=1077, width=1912, height=1076)
    assert apply_percent(80, bound) == Rectangle(left=95, top=53, right=1824, bottom=1026, width=1730, height=974)


def test_step_divides_the_inset():
    bound = Bound(1919, 1079)
    assert apply_percent(90, bound, step=2).left == 47
    assert apply_percent(90, bound, step=1).left == 95


@pytest.mark.parametrize(("left", "expected"), [(0, 100), (4, 99), (47, 90), (95, 80)])
def test_derive_initial_percent_recovers_rate(left, expected):
    assert derive_initial_percent(left, Bound(1919, 1079)) == expected


def test_derive_initial_percent_is_not_clamped():
    assert derive_initial_percent(400, Bound(1919, 1079)) == 100 - 83 - 1


def test_clamp_percent():
    assert clamp_percent(101) == 100
    assert clamp_percent(79) == 80
    assert clamp_percent(91) == 91
    assert clamp_percent(50, 10, 60) == 50


def test_clamp_to_bound_pulls_edges_inside():
    bound = Bound(1279, 719)
    assert clamp_to_bound(-3, -1, 1400, 800, bound) == (0, 0, 1279, 719)
    assert clamp_to_bound(10, 20, 100, 200, bound) == (10, 20, 100, 200)


def test_format_axis():
    assert format_axis(10, 20, 109, 69) == "10 20 109 69"


def test_bound_helpers():
    bound = Bound(719, 575)
    assert (bound.width, bound.height) == (720, 576)
    assert bound.full_position() == (0, 0, 720, 576)
    assert bound.full_rectangle().axis() == (0, 0, 719, 575)
