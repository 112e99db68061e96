"""Tests for the YAML layout loader."""

import pytest
from PIL import Image

from layout2d import (
    ContainerNode,
    EstimatedTextMetrics,
    ImageNode,
    InteractiveNode,
    LayoutLoader,
    Measure,
    Rectangle,
    TextNode,
)

DEMO = """
name: demo
size: [200, 100]
background: white

scales:
  unit: 10
  double:
    derive: unit
    factor: 2

layers:
  main:
    - kind: container
      name: panel
      scale: unit
      at: [1, 1, 0, 0]
      size: [100, 40]
      align: {x: center}
      children:
        - kind: rect
          name: dot
          scale: unit
          size: [double, 4]
          background: red
    - kind: rect
      name: badge
      size: [20, 10]
      place: {x: right, y: bottom}
  front:
    - kind: text
      name: label
      text: Hi
      font: {size: 10}
"""


@pytest.fixture
def loader():
    return LayoutLoader(metrics=EstimatedTextMetrics(advance=0.5))


@pytest.fixture
def layout(loader):
    return loader.load_string(DEMO)


def test_canvas_and_names(layout):
    assert layout.name == "demo"
    assert (layout.canvas.width, layout.canvas.height) == (200, 100)
    assert set(layout.nodes) == {"panel", "dot", "badge", "label"}
    assert layout.canvas.front_layer == [layout.node("label")]


def test_scales(layout):
    assert layout.scale("unit").value == 10
    assert layout.scale("double").value == 20

    layout.scale("unit").value = 3
    assert layout.scale("double").value == 6


def test_node_types(layout):
    assert isinstance(layout.node("panel"), ContainerNode)
    assert isinstance(layout.node("dot"), Rectangle)
    assert isinstance(layout.node("label"), TextNode)


def test_children_are_inserted_and_aligned(layout):
    panel = layout.node("panel")
    dot = layout.node("dot")

    assert panel.children == [dot]
    assert dot.owner is panel
    assert panel.x == 10
    assert dot.width == 20
    assert dot.x == 50


def test_scale_change_relayouts_dependents(layout):
    panel = layout.node("panel")
    dot = layout.node("dot")

    layout.scale("unit").value = 20

    assert panel.x == 20
    assert dot.width == 40
    assert dot.x == 50


def test_place_against_canvas(layout):
    badge = layout.node("badge")
    assert (badge.x, badge.y) == (180, 90)


def test_text_uses_loader_metrics(layout):
    label = layout.node("label")
    assert label.width == 10
    # baseline corrected by one line of 10px plus padding
    assert label.margin_y == 12


def test_default_scale():
    layout = LayoutLoader().load_string("""
scale: unit
scales:
  unit: 5
layers:
  main:
    - kind: entity
      name: anchor
      at: [2, 3, 1, 1]
""")
    anchor = layout.node("anchor")
    assert anchor.measure is layout.scale("unit")
    assert (anchor.x, anchor.y) == (11, 16)


def test_defaults_without_scales():
    layout = LayoutLoader().load_string("layers: {main: [{kind: rect, name: r}]}")
    assert (layout.canvas.width, layout.canvas.height) == (640, 480)
    assert isinstance(layout.node("r").measure, Measure)


def test_interactive_kind(loader):
    layout = loader.load_string("""
layers:
  main:
    - kind: interactive
      name: button
      size: [40, 20]
      z_index: 3
""")
    button = layout.node("button")
    assert isinstance(button, InteractiveNode)
    assert button.z_index == 3


def test_load_file_with_image(tmp_path, loader):
    Image.new("RGB", (6, 3), (0, 0, 255)).save(tmp_path / "tile.png")
    path = tmp_path / "scene.yaml"
    path.write_text("""
layers:
  main:
    - kind: image
      name: tile
      src: tile.png
""")

    layout = loader.load(path)

    tile = layout.node("tile")
    assert isinstance(tile, ImageNode)
    assert (tile.width, tile.height) == (6, 3)


def test_missing_file(loader, tmp_path):
    with pytest.raises(FileNotFoundError):
        loader.load(tmp_path / "missing.yaml")


@pytest.mark.parametrize(
    "document,message",
    [
        ("- 1", "must be a mapping"),
        ("layers: {main: [{kind: circle}]}", "Unknown node kind"),
        ("layers: {main: [{kind: rect, scale: nope}]}", "not defined"),
        ("scales: {a: {derive: a}}", "derived from itself"),
        ("scales: {a: {derive: b}, b: {derive: a}}", "derived from itself"),
        ("scales: {a: {derive: missing}}", "not defined"),
        ("scales: {a: [1]}", "must be a number"),
        ("layers: {main: [{kind: rect, at: [1, 2]}]}", "'at'"),
        ("layers: {main: [{kind: rect, size: [1]}]}", "'size'"),
        ("layers: {main: [{kind: rect, name: a}, {kind: rect, name: a}]}", "Duplicate"),
        ("layers: {main: [{kind: rect, children: [{kind: rect}]}]}", "cannot have children"),
        ("layers: {middle: [{kind: rect}]}", "Unknown layer"),
        ("layers: {main: [{kind: image}]}", "no 'src'"),
        ("layers: {main: [{kind: container, align: {x: middle}}]}", "horizontal alignment"),
    ],
)
def test_invalid_documents(loader, document, message):
    with pytest.raises(ValueError, match=message):
        loader.load_string(document)


def test_colour_lists_become_tuples(loader):
    layout = loader.load_string("""
background: [255, 255, 255]
layers:
  main:
    - kind: rect
      name: swatch
      background: [255, 0, 0, 255]
""")
    assert layout.node("swatch").background == (255, 0, 0, 255)
