"""Top-down tree layout, one horizontal band per root."""

from models import Forest
from geometry import (
    Band,
    EdgeKind,
    EdgePlacement,
    Geometry,
    NodePlacement,
    Role,
    node_labels,
)
from options import DisplayOptions, LayoutMode, Viewport
from tracing import Tracer, emit
from view import PlacementTree, View, build_view, spouse_links, tree_links


def separation(a: PlacementTree, b: PlacementTree) -> int:
    """Sibling gap in node_spacing units; doubled next to spouse slots."""
    return 2 if (a.spouses or b.spouses) else 1


def layout_tree(root: PlacementTree, options: DisplayOptions) -> tuple[dict[str, tuple[float, float]], float, float]:
    """
    Place one tree with its root at x=0.

    Each subtree is a block spanning its nodes and spouse slots; sibling blocks
    sit left to right with `separation` gaps and a parent is centred over its
    first and last child. Returns (positions, left extent, right extent).
    """
    order = list(root.walk())
    offset: dict[int, float] = {}
    left: dict[int, float] = {}
    right: dict[int, float] = {}

    # Children before parents
    for tree in reversed(order):
        key = id(tree)
        own_right = len(tree.spouses) * options.spouse_spacing
        if not tree.children:
            left[key], right[key] = 0.0, own_right
            continue

        xs: list[float] = []
        cursor = 0.0
        prev = None
        for child in tree.children:
            ck = id(child)
            if prev is None:
                cx = 0.0
            else:
                gap = options.node_spacing * separation(prev, child)
                cx = cursor + gap - left[ck]
            xs.append(cx)
            cursor = cx + right[ck]
            prev = child

        mid = (xs[0] + xs[-1]) / 2
        for child, cx in zip(tree.children, xs):
            offset[id(child)] = cx - mid

        left[key] = min(0.0, min(offset[id(c)] + left[id(c)] for c in tree.children))
        right[key] = max(own_right, max(offset[id(c)] + right[id(c)] for c in tree.children))

    positions: dict[str, tuple[float, float]] = {}
    absolute: dict[int, float] = {id(root): 0.0}
    for tree in order:
        x = absolute[id(tree)]
        y = tree.depth * options.generation_spacing
        positions[tree.id] = (x, y)
        for i, spouse in enumerate(tree.spouses):
            positions[spouse.id] = (x + (i + 1) * options.spouse_spacing, y)
        for child in tree.children:
            absolute[id(child)] = x + offset[id(child)]

    return positions, left[id(root)], right[id(root)]


def hierarchy_layout(
    forest: Forest,
    viewport: Viewport,
    options: DisplayOptions,
    tracer: Tracer | None = None,
) -> Geometry:
    """
    Hierarchical layout of the forest.

    A single root uses the whole canvas, centred. Several roots get side-by-side
    bands, each at least an equal share of the viewport width and wide enough
    for its tree. Spouse slots sit `spouse_spacing` apart to the right of their
    partner and are joined to it by spouse (dashed) edges.
    """
    view = build_view(forest, options, tracer=tracer)
    geometry = Geometry(mode=LayoutMode.HIERARCHY, width=viewport.width, height=viewport.height)
    if not view.trees:
        return geometry

    laid_out = [layout_tree(tree, options) for tree in view.trees]
    forest_mode = len(view.trees) > 1
    share = viewport.width / len(view.trees)

    max_depth = max(t.depth for root in view.trees for t in root.walk())
    content_height = max_depth * options.generation_spacing + 2 * options.margin
    band_height = max(viewport.height, content_height)

    positions: dict[str, tuple[float, float]] = {}
    band_x = 0.0
    for index, (tree, (local, lo, hi)) in enumerate(zip(view.trees, laid_out)):
        content_width = hi - lo
        band_width = max(share if forest_mode else viewport.width, content_width + 2 * options.margin)
        shift = band_x + (band_width - content_width) / 2 - lo
        for pid, (x, y) in local.items():
            positions[pid] = (x + shift, y + options.margin)
        if forest_mode:
            geometry.bands.append(
                Band(
                    key=tree.id,
                    x=band_x,
                    y=0.0,
                    width=band_width,
                    height=band_height,
                    label=tree.node.person.full_name,
                    shade=index % 2,
                )
            )
        band_x += band_width

    geometry.width = max(viewport.width, band_x)
    geometry.height = band_height

    _place_nodes(geometry, view, positions, options)
    _place_edges(geometry, view, positions)

    emit(tracer, "layout.hierarchy", roots=len(view.trees), nodes=len(geometry.nodes))
    return geometry


def _place_nodes(
    geometry: Geometry,
    view: View,
    positions: dict[str, tuple[float, float]],
    options: DisplayOptions,
) -> None:
    for node, is_spouse, tree in view.flatten():
        x, y = positions[node.id]
        label, detail = node_labels(node.person, options.show_details)
        geometry.nodes.append(
            NodePlacement(
                person=node.person,
                x=x,
                y=y,
                role=Role.SPOUSE if is_spouse else Role.PRIMARY,
                root_id=tree.root_id,
                generation=tree.depth,
                radius=options.node_radius,
                label=label,
                detail=detail,
            )
        )


def _place_edges(geometry: Geometry, view: View, positions: dict[str, tuple[float, float]]) -> None:
    for kind, links in (
        (EdgeKind.PARENT_CHILD, tree_links(view)),
        (EdgeKind.SPOUSE, spouse_links(view, set(positions))),
    ):
        for source, target in links:
            x1, y1 = positions[source]
            x2, y2 = positions[target]
            geometry.edges.append(
                EdgePlacement(source_id=source, target_id=target, x1=x1, y1=y1, x2=x2, y2=y2, kind=kind)
            )
