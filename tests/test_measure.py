"""Tests for Measure, the shared reactive scale."""

import logging

import pytest

from layout2d import ContainerNode, InvalidValueError, Measure, Rectangle


def test_default_is_unit_scale():
    assert Measure().value == 1


@pytest.mark.parametrize("value", [0, 7, -3, 2.5, 1e9])
def test_set_value_accepts_numbers(value):
    measure = Measure(1)
    assert measure.set_value(value) is None
    assert measure.value == value


@pytest.mark.parametrize("value", ["10", None, [1], True, object()])
def test_set_value_rejects_non_numbers(value, caplog):
    measure = Measure(4)
    with caplog.at_level(logging.WARNING):
        result = measure.set_value(value)

    assert isinstance(result, InvalidValueError)
    assert measure.value == 4
    assert "must be a number" in caplog.text


def test_property_setter_rejects_without_raising():
    measure = Measure(4)
    measure.value = "wide"
    assert measure.value == 4


def test_constructor_fails_fast():
    with pytest.raises(InvalidValueError):
        Measure("1")


def test_subscribers_receive_old_and_new_in_order():
    measure = Measure(1)
    calls = []
    measure.subscribe(lambda old, new: calls.append(("first", old, new)))
    measure.subscribe(lambda old, new: calls.append(("second", old, new)))

    measure.value = 5

    assert calls == [("first", 1, 5), ("second", 1, 5)]


def test_subscribe_does_not_deduplicate():
    measure = Measure(1)
    calls = []

    def callback(old, new):
        calls.append(new)

    measure.subscribe(callback)
    measure.subscribe(callback)
    measure.value = 2
    measure.value = 3

    assert calls == [2, 2, 3, 3]


def test_rejected_value_does_not_notify():
    measure = Measure(1)
    calls = []
    measure.subscribe(lambda old, new: calls.append(new))

    measure.value = "nope"

    assert calls == []


def test_add_dependent_is_idempotent():
    measure = Measure(1)
    rect = Rectangle(width=1, height=1)
    measure.add_dependent(rect)
    measure.add_dependent(rect)

    assert measure.dependents == [rect]


def test_relayout_runs_once_per_owner():
    scale = Measure(10)
    container = ContainerNode(width=100, height=100, align_x="center")
    children = [Rectangle(width=10, height=10).depends_on(scale) for _ in range(3)]
    container.insert_children(children)

    calls = []
    relayout = container.relayout_children
    container.relayout_children = lambda: (calls.append(1), relayout())

    scale.value = 20

    assert calls == [1]


def test_relayout_reaches_every_distinct_owner():
    scale = Measure(1)
    owners = [ContainerNode(width=50, height=50, align_y="center") for _ in range(2)]
    calls = []
    for index, owner in enumerate(owners):
        owner.insert_children([Rectangle(width=5, height=5).depends_on(scale)])
        owner.relayout_children = lambda index=index: calls.append(index)

    scale.value = 3

    assert calls == [0, 1]


def test_unattached_dependents_are_skipped():
    scale = Measure(1)
    Rectangle(width=5, height=5).depends_on(scale)
    assert scale.set_value(2) is None


def test_subscribers_run_before_relayout():
    scale = Measure(1)
    container = ContainerNode(width=50, height=50, align_x="left")
    container.insert_children([Rectangle(width=5, height=5).depends_on(scale)])
    order = []
    scale.subscribe(lambda old, new: order.append("subscriber"))
    container.relayout_children = lambda: order.append("relayout")

    scale.value = 2

    assert order == ["subscriber", "relayout"]


def test_derive_from_follows_base():
    base = Measure(10)
    half = Measure.derive_from(base, lambda m: m / 2)

    assert half.value == 5
    base.value = 30
    assert half.value == 15


def test_derived_measure_chains_notifications():
    base = Measure(2)
    double = Measure.derive_from(base, lambda m: m * 2)
    quad = Measure.derive_from(double, lambda m: m * 2)
    seen = []
    quad.subscribe(lambda old, new: seen.append((old, new)))

    base.value = 3

    assert quad.value == 12
    assert seen == [(8, 12)]


def test_measure_reads_as_number():
    measure = Measure(4)
    assert float(measure) == 4.0
    assert measure * 2 == 8
    assert 2 * measure == 8
    assert measure + 1 == 5
    assert 10 - measure == 6
    assert measure / 2 == 2
