"""YAML loader for layout documents."""

from __future__ import annotations

from dataclasses import dataclass, field
from pathlib import Path
from typing import Any

import yaml

from ..core.container import ContainerNode, InteractiveNode
from ..core.align import align_x, align_y
from ..core.measure import Measure, is_number
from ..core.node import Entity, Positionable, ShapeNode
from ..core.shapes import ImageNode, Rectangle, TextNode
from ..render.canvas import LAYERS, Canvas
from ..render.metrics import PillowTextMetrics, TextMetrics
from ..render.surface import PillowSurface

NODE_KINDS = ("rect", "image", "text", "entity", "container", "interactive")

# Keys shared by every shape kind, passed straight to the constructor.
SHAPE_KEYS = ("fill", "hidden", "background", "line_width", "z_index")


@dataclass
class Layout:
    """Result of loading a layout document."""

    name: str
    canvas: Canvas
    scales: dict[str, Measure] = field(default_factory=dict)
    nodes: dict[str, Positionable] = field(default_factory=dict)

    def node(self, name: str) -> Positionable:
        return self.nodes[name]

    def scale(self, name: str) -> Measure:
        return self.scales[name]


class LayoutLoader:
    """Builds a canvas and its node tree from a YAML document.

    YAML format:
        name: menu
        size: [640, 480]            # canvas size in pixels
        background: white           # optional canvas colour
        scale: unit                 # default scale for nodes (optional)

        scales:
          unit: 10
          half:
            derive: unit            # follows 'unit'
            factor: 0.5
            offset: 0

        layers:
          main:
            - kind: container       # rect|image|text|entity|container|interactive
              name: panel
              scale: unit
              at: [2, 3, 5, 5]      # measure x, measure y, pixel x, pixel y
              size: [200, half]     # numbers, or scale names (node follows the scale)
              align: {x: center}    # directives applied to the children
              place: {x: center}    # align this node against the canvas
              fill: true
              background: "#eeeeee"
              children:
                - kind: text
                  text: Hello
                  font: {size: 18, weight: bold, family: sans-serif}
                  color: black
    """

    def __init__(self, metrics: TextMetrics | None = None) -> None:
        """Initialize the loader.

        Args:
            metrics: Text metrics given to text nodes. Defaults to Pillow fonts.
        """
        self.metrics = metrics or PillowTextMetrics()
        self._base_dir = Path.cwd()

    def load(self, path: str | Path) -> Layout:
        """Load a layout document from a YAML file.

        Image sources are resolved relative to the file's directory.
        """
        path = Path(path)
        if not path.exists():
            raise FileNotFoundError(f"Layout file not found: {path}")
        with open(path) as f:
            data = yaml.safe_load(f)
        self._base_dir = path.parent
        return self._build_layout(data)

    def load_string(self, yaml_string: str) -> Layout:
        """Load a layout document from a YAML string."""
        data = yaml.safe_load(yaml_string)
        self._base_dir = Path.cwd()
        return self._build_layout(data)

    def _build_layout(self, data: Any) -> Layout:
        if not isinstance(data, dict):
            raise ValueError("Layout document must be a mapping")

        name = data.get("name", "layout")
        width, height = self._pair(data.get("size", [640, 480]), "size")
        background = _color(data.get("background", (0, 0, 0, 0)))
        surface = PillowSurface(width, height, background=background)
        layout = Layout(name=name, canvas=Canvas(surface))

        layout.scales = self._parse_scales(data.get("scales") or {})
        default_scale = data.get("scale")
        if default_scale is None:
            self._default_measure = Measure(1)
        else:
            self._default_measure = self._lookup_scale(layout, default_scale)

        layers = data.get("layers") or {}
        for layer_name, node_defs in layers.items():
            if layer_name not in LAYERS:
                raise ValueError(f"Unknown layer '{layer_name}', expected one of {LAYERS}")
            for node_def in node_defs or []:
                node = self._build_node(node_def, layout)
                layout.canvas.add(node, layer_name)
                self._place(node, node_def, layout.canvas)

        return layout

    def _parse_scales(self, scales_data: dict[str, Any]) -> dict[str, Measure]:
        """Create measures, resolving derived ones after their bases."""
        scales: dict[str, Measure] = {}
        resolving: set[str] = set()

        def resolve_scale(scale_name: str) -> Measure:
            if scale_name in scales:
                return scales[scale_name]
            if scale_name not in scales_data:
                raise ValueError(f"Scale '{scale_name}' not defined")
            if scale_name in resolving:
                raise ValueError(f"Scale '{scale_name}' is derived from itself")

            scale_def = scales_data[scale_name]
            if is_number(scale_def):
                measure = Measure(scale_def)
            elif isinstance(scale_def, dict) and "derive" in scale_def:
                resolving.add(scale_name)
                base = resolve_scale(scale_def["derive"])
                resolving.discard(scale_name)
                factor = scale_def.get("factor", 1.0)
                offset = scale_def.get("offset", 0.0)
                if not is_number(factor) or not is_number(offset):
                    raise ValueError(f"Scale '{scale_name}': factor and offset must be numbers")
                measure = Measure.derive_from(base, lambda m, f=factor, o=offset: m * f + o)
            else:
                raise ValueError(
                    f"Scale '{scale_name}' must be a number or a mapping with 'derive'"
                )
            scales[scale_name] = measure
            return measure

        for scale_name in scales_data:
            resolve_scale(scale_name)
        return scales

    def _build_node(self, node_def: dict[str, Any], layout: Layout) -> Positionable:
        if not isinstance(node_def, dict):
            raise ValueError(f"Node definition must be a mapping, got {node_def!r}")
        kind = node_def.get("kind", "rect")
        if kind not in NODE_KINDS:
            raise ValueError(f"Unknown node kind: {kind}")

        name = node_def.get("name")
        if name is not None and name in layout.nodes:
            raise ValueError(f"Duplicate node name: {name}")

        if "scale" in node_def:
            measure = self._lookup_scale(layout, node_def["scale"])
        else:
            measure = self._default_measure

        at = node_def.get("at", [0, 0, 0, 0])
        if not isinstance(at, list) or len(at) != 4 or not all(is_number(v) for v in at):
            raise ValueError(f"'at' must be [measure_x, measure_y, pixel_x, pixel_y], got {at!r}")

        size_scales: list[Measure] = []
        width, height = None, None
        if "size" in node_def:
            raw_width, raw_height = self._pair(node_def["size"], "size", numeric=False)
            width = self._size_value(raw_width, layout, size_scales)
            height = self._size_value(raw_height, layout, size_scales)

        shape_kwargs = {key: node_def[key] for key in SHAPE_KEYS if key in node_def}
        if "background" in shape_kwargs:
            shape_kwargs["background"] = _color(shape_kwargs["background"])

        if kind == "entity":
            node = Entity(measure, *at, name=name)
        elif kind == "rect":
            node = Rectangle(
                measure, *at, width=width or 0, height=height or 0,
                radius=node_def.get("radius", 0), name=name, **shape_kwargs,
            )
        elif kind == "image":
            if "src" not in node_def:
                raise ValueError(f"Image node '{name}' has no 'src'")
            node = ImageNode(
                self._base_dir / node_def["src"], measure, *at,
                width=width, height=height, name=name, **shape_kwargs,
            )
        elif kind == "text":
            font = node_def.get("font") or {}
            node = TextNode(
                measure, *at,
                max_width=width or node_def.get("width"),
                text=str(node_def.get("text", "")),
                color=_color(node_def.get("color", "black")),
                font_size=font.get("size", 16),
                font_weight=font.get("weight", "normal"),
                font_family=font.get("family", "sans-serif"),
                metrics=self.metrics,
                name=name,
                **shape_kwargs,
            )
        else:
            align = node_def.get("align") or {}
            node_class = InteractiveNode if kind == "interactive" else ContainerNode
            node = node_class(
                measure, *at, width=width or 0, height=height or 0,
                align_x=align.get("x"), align_y=align.get("y"),
                show_bounds_only=node_def.get("show_bounds_only", False),
                radius=node_def.get("radius", 0), name=name, **shape_kwargs,
            )

        layout.nodes[node.name] = node

        if isinstance(node, ShapeNode):
            for scale in size_scales:
                node.depends_on(scale)

        if isinstance(node, ContainerNode):
            child_defs = node_def.get("children") or []
            children = [self._build_node(child_def, layout) for child_def in child_defs]
            node.insert_children(children)
            for child, child_def in zip(children, child_defs):
                self._place(child, child_def, layout.canvas)
        elif node_def.get("children"):
            raise ValueError(f"Node '{node.name}' of kind '{kind}' cannot have children")

        return node

    def _place(self, node: Positionable, node_def: dict[str, Any], canvas: Canvas) -> None:
        """Align a node against the canvas if it asks for it."""
        place = node_def.get("place") or {}
        align_x(place.get("x"), node, canvas)
        align_y(place.get("y"), node, canvas)

    def _lookup_scale(self, layout: Layout, scale_name: str) -> Measure:
        if scale_name not in layout.scales:
            raise ValueError(f"Scale '{scale_name}' not defined")
        return layout.scales[scale_name]

    def _size_value(self, value: Any, layout: Layout, size_scales: list[Measure]):
        if is_number(value):
            return value
        if isinstance(value, str):
            measure = self._lookup_scale(layout, value)
            size_scales.append(measure)
            return measure
        raise ValueError(f"Size must be a number or a scale name, got {value!r}")

    @staticmethod
    def _pair(value: Any, key: str, numeric: bool = True) -> tuple[Any, Any]:
        if not isinstance(value, list) or len(value) != 2:
            raise ValueError(f"'{key}' must be a list of two values, got {value!r}")
        if numeric and not all(is_number(v) for v in value):
            raise ValueError(f"'{key}' must contain numbers, got {value!r}")
        return value[0], value[1]


def _color(value: Any) -> Any:
    """YAML has no tuples; RGB(A) lists become the tuples Pillow expects."""
    return tuple(value) if isinstance(value, list) else value
