"""Main entry point for layout2d."""

import argparse
import logging
from pathlib import Path

from .core.container import ContainerNode
from .core.node import ShapeNode
from .layout import Layout, LayoutLoader


def parse_scale(value: str) -> tuple[str, float]:
    """Parse a NAME=VALUE scale override."""
    name, sep, number = value.partition("=")
    if not sep or not name:
        raise argparse.ArgumentTypeError(f"Expected NAME=VALUE, got '{value}'")
    try:
        return name, float(number)
    except ValueError:
        raise argparse.ArgumentTypeError(f"Scale value must be a number, got '{number}'") from None


def parse_args(argv: list[str] | None = None) -> argparse.Namespace:
    """Parse command line arguments."""
    parser = argparse.ArgumentParser(
        description="layout2d - render a YAML layout document",
        formatter_class=argparse.RawDescriptionHelpFormatter,
    )
    parser.add_argument("layout", metavar="LAYOUT", help="Layout YAML file")
    parser.add_argument(
        "-o", "--output",
        metavar="PATH",
        help="Render the canvas to an image file",
    )
    parser.add_argument(
        "-s", "--scale",
        metavar="NAME=VALUE",
        type=parse_scale,
        action="append",
        default=[],
        help="Change a scale after loading (repeatable); dependent containers re-layout",
    )
    parser.add_argument(
        "-v", "--verbose",
        action="store_true",
        help="Enable debug logging",
    )
    return parser.parse_args(argv)


def describe(layout: Layout) -> None:
    """Print the node tree of a layout."""
    print(f"Layout '{layout.name}' ({layout.canvas.width}x{layout.canvas.height})")
    print("=" * 40)
    for layer_name, nodes in zip(("back", "main", "front"), layout.canvas.layers()):
        if not nodes:
            continue
        print(f"[{layer_name}]")
        for root in nodes:
            for node in root.iter_nodes():
                indent = "  " * (_depth(node) + 1)
                size = f" {node.width:g}x{node.height:g}" if isinstance(node, ShapeNode) else ""
                print(f"{indent}- {node.name} @ ({node.x:g}, {node.y:g}){size}")


def _depth(node) -> int:
    owner = getattr(node, "owner", None)
    if owner is None:
        return 0
    return owner.depth + 1 if isinstance(owner, ContainerNode) else 0


def main(argv: list[str] | None = None) -> None:
    """Load, optionally rescale, and render a layout."""
    args = parse_args(argv)
    logging.basicConfig(
        level=logging.DEBUG if args.verbose else logging.WARNING,
        format="%(levelname)s %(name)s: %(message)s",
    )

    layout = LayoutLoader().load(args.layout)

    for name, value in args.scale:
        if name not in layout.scales:
            raise SystemExit(f"Unknown scale '{name}', defined: {', '.join(layout.scales)}")
        layout.scales[name].value = value

    describe(layout)

    if args.output:
        output_path = Path(args.output)
        layout.canvas.refresh()
        layout.canvas.surface.save(output_path)
        print(f"\nSaved render to {output_path}")


if __name__ == "__main__":
    main()
