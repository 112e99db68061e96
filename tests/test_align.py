"""Tests for aligning nodes against containers."""

import logging

import pytest

from layout2d import (
    AlignX,
    AlignY,
    Canvas,
    Entity,
    InvalidAlignmentTarget,
    InvalidValueError,
    Measure,
    Rectangle,
    TextNode,
    align,
    align_x,
    align_y,
)
from layout2d.core.align import container_extent


def make_box(**kwargs) -> Rectangle:
    return Rectangle(width=100, height=50, **kwargs)


@pytest.mark.parametrize(
    "direction,expected_x",
    [("left", 0), ("center", 40), ("right", 80), (AlignX.CENTER, 40), ("centerX", 40)],
)
def test_align_x_in_shape(direction, expected_x):
    container = make_box()
    child = Rectangle(margin_x=13, width=20, height=10)

    assert align_x(direction, child, container) is None
    assert child.x == expected_x


def test_align_right_matches_container_edge():
    container = make_box(margin_x=30)
    child = Rectangle(margin_x=-7, width=20, height=10)

    align_x("right", child, container)

    assert child.right == container.right


@pytest.mark.parametrize(
    "direction,expected_y",
    [("top", 20), ("center", 40), ("bottom", 60), (AlignY.BOTTOM, 60), ("centerY", 40)],
)
def test_align_y_in_shape(direction, expected_y):
    container = make_box(margin_y=20)
    child = Rectangle(margin_y=500, width=20, height=10)

    align_y(direction, child, container)

    assert child.y == expected_y


def test_align_uses_move_and_keeps_measure_offsets():
    scale = Measure(10)
    container = make_box()
    child = Rectangle(scale, margin_measure_x=2, width=20, height=10)

    align_x("center", child, container)

    assert child.margin_measure_x == 2
    assert child.margin_x == 20
    assert child.x == 40


def test_align_is_idempotent():
    container = make_box(margin_x=5)
    child = Rectangle(width=20, height=10)
    align_x("center", child, container)
    first = child.x
    align_x("center", child, container)
    assert child.x == first


def test_align_against_canvas(surface):
    canvas = Canvas(surface)
    child = Rectangle(margin_x=3, margin_y=3, width=40, height=20)

    align_x("right", child, canvas)
    align_y("bottom", child, canvas)

    assert (child.right, child.bottom) == (surface.width, surface.height)


def test_align_against_surface(surface):
    child = Rectangle(width=40, height=20)
    align_x("center", child, surface)
    assert child.x == (surface.width - 40) / 2


def test_align_against_entity():
    point = Entity(margin_x=50, margin_y=60)
    child = Rectangle(width=20, height=10)

    align_x("center", child, point)
    align_y("bottom", child, point)

    assert child.x == 40
    assert child.bottom == 60


def test_text_gets_font_size_bias(metrics):
    container = make_box(margin_y=100)
    text = TextNode(text="Hi", font_size=16, metrics=metrics)

    align_y("top", text, container)

    assert text.y == 116


def test_invalid_container_is_reported(caplog):
    child = Rectangle(margin_x=5, width=10, height=10)
    with caplog.at_level(logging.WARNING):
        result = align_x("left", child, "not a container")

    assert isinstance(result, InvalidAlignmentTarget)
    assert child.x == 5
    assert "str isn't a valid container" in caplog.text


def test_invalid_direction_is_reported():
    child = Rectangle(margin_x=5, width=10, height=10)
    result = align_x("top", child, make_box())

    assert isinstance(result, InvalidValueError)
    assert child.x == 5


def test_none_direction_is_inert():
    child = Rectangle(margin_x=5, margin_y=6, width=10, height=10)
    assert align_x(None, child, make_box()) is None
    assert align_y(None, child, make_box()) is None
    assert (child.x, child.y) == (5, 6)


@pytest.mark.parametrize(
    "direction,attribute,expected",
    [("left", "x", 0), ("right", "right", 100), ("top", "y", 0), ("bottom", "bottom", 50),
     ("centerX", "x", 45), ("centerY", "y", 20)],
)
def test_align_picks_axis_from_direction(direction, attribute, expected):
    child = Rectangle(margin_x=1, margin_y=1, width=10, height=10)
    align(direction, child, make_box())
    assert getattr(child, attribute) == expected


def test_align_rejects_ambiguous_direction():
    child = Rectangle(width=10, height=10)
    assert isinstance(align("center", child, make_box()), InvalidValueError)


def test_shape_align_method():
    child = Rectangle(width=10, height=10)
    child.align("right", make_box())
    assert child.right == 100


def test_container_extent():
    assert container_extent(make_box(margin_x=1, margin_y=2)) == (1, 2, 100, 50)
    assert container_extent(Entity(margin_x=4)) == (4, 0, 0, 0)
    with pytest.raises(InvalidAlignmentTarget):
        container_extent(42)
