"""
1) Load a snapshot of people and relationships (the API's JSON shape).
2) Normalize it into person and relationship records.
3) Validate the records for cycles, impossible ages, and dangling ids.
4) Build the family forest (graph, clusters, roots).
5) Compute the selected layout.
6) Plot the geometry (matplotlib image or Graphviz DOT).
"""

import argparse
import json
import logging
from pathlib import Path

from layout import compute_layout
from navigation import family_contexts
from options import DisplayOptions, LayoutMode, Viewport
from parsing import normalize_data
from plotting import plot_geometry, write_dot
from roots import build_forest
from stats import forest_stats
from tracing import logging_tracer
from validation import validate_family


# ============================================================================
# 1) Load Snapshot
# ============================================================================


def load_snapshot(path: Path) -> tuple[list[dict], list[dict]]:
    """Read {"people": [...], "relationships": [...]} from a JSON file."""
    with open(path, "r", encoding="utf-8") as f:
        data = json.load(f)
    # The complete-tree endpoint wraps everything in "data"
    if "data" in data and isinstance(data["data"], dict):
        data = data["data"]
    return data.get("people", []), data.get("relationships", [])


# ============================================================================
# Command Line
# ============================================================================


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(description="Lay out a family tree snapshot")
    parser.add_argument("input", type=Path, help="JSON snapshot with people and relationships")
    parser.add_argument("-o", "--output", type=Path, default=Path("family_tree.png"), help="Output image or .dot path")
    parser.add_argument("--mode", choices=[m.value for m in LayoutMode], default=LayoutMode.HIERARCHY.value)
    parser.add_argument("--width", type=float, default=1200)
    parser.add_argument("--height", type=float, default=800)
    parser.add_argument("--max-generations", type=int, default=5)
    parser.add_argument("--focus", help="Person id to centre the view on")
    parser.add_argument("--radius", type=int, default=5, help="Family hops kept around --focus")
    parser.add_argument("--collapse", action="append", default=[], help="Person id whose descendants are hidden")
    parser.add_argument("--no-spouses", action="store_true")
    parser.add_argument("--no-details", action="store_true")
    parser.add_argument("--dot", action="store_true", help="Write Graphviz output instead of a matplotlib image")
    parser.add_argument("-v", "--verbose", action="store_true", help="Log engine trace events")
    return parser


def main(argv: list[str] | None = None) -> int:
    args = build_parser().parse_args(argv)
    logging.basicConfig(level=logging.DEBUG if args.verbose else logging.WARNING, format="%(name)s: %(message)s")
    tracer = logging_tracer if args.verbose else None

    print(f"Loading snapshot: {args.input}")
    raw_people, raw_relationships = load_snapshot(args.input)

    print("Normalizing data...")
    people, relationships = normalize_data(raw_people, raw_relationships)
    print(f"  Found {len(people)} persons and {len(relationships)} spousal relationships")

    print("Validating records...")
    warnings = validate_family(people, relationships)
    if warnings:
        print(f"  Found {len(warnings)} validation warnings:")
        for w in warnings[:10]:  # Show first 10 warnings
            print(f"    - {w}")
        if len(warnings) > 10:
            print(f"    ... and {len(warnings) - 10} more")
    else:
        print("  No validation issues found")

    print("Building family forest...")
    forest = build_forest(people, relationships, tracer=tracer)
    stats = forest_stats(forest)
    print(f"  {stats.tree_count} tree(s) spanning {stats.generations_span} generation(s)")
    for context in family_contexts(forest):
        print(f"    - {context.label} ({context.family_size} people)")

    options = DisplayOptions(
        mode=LayoutMode(args.mode),
        max_generations=args.max_generations,
        show_spouses=not args.no_spouses,
        show_details=not args.no_details,
        focus_person_id=args.focus,
        focus_radius=args.radius,
        collapsed=frozenset(args.collapse),
    )
    viewport = Viewport(args.width, args.height)

    print(f"Computing {options.mode.value} layout...")
    geometry = compute_layout(forest, viewport, options, tracer=tracer)
    print(f"  Placed {len(geometry.nodes)} people and {len(geometry.edges)} edges")

    print(f"Plotting graph to: {args.output}")
    if args.dot:
        write_dot(geometry, args.output)
    else:
        plot_geometry(geometry, args.output)

    print("Done!")
    return 0


if __name__ == "__main__":
    raise SystemExit(main())
