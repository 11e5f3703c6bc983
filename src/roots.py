"""Root selection: turn each family cluster into one or more rooted trees."""

from typing import Sequence

from graph import build_family_graph, connected_components
from models import (
    FamilyGraph,
    Forest,
    Gender,
    LayoutNode,
    PersonRecord,
    RelationshipRecord,
)
from tracing import Tracer, emit


def order_component(graph: FamilyGraph, component: Sequence[str]) -> list[LayoutNode]:
    """
    Order a component's people for stable root choice.

    Parents (of someone in the component) first, then male before non-male,
    then identifier string. The key only makes results reproducible.
    """
    members = set(component)

    def sort_key(node: LayoutNode) -> tuple[bool, bool, str]:
        is_parent = any(child.id in members for child in node.children)
        return (not is_parent, node.person.gender is not Gender.MALE, node.id)

    return sorted((graph[pid] for pid in component), key=sort_key)


def has_parent_in(graph: FamilyGraph, node: LayoutNode, members: set[str]) -> bool:
    return any(parent.id in members for parent in graph.parents_of(node.id))


def mark_covered(root: LayoutNode, covered: set[str], members: set[str] | None = None) -> list[str]:
    """
    Mark everything a root visually owns and return the newly covered ids.

    Walks spouse edges transitively and child edges transitively, so a root
    owns its spouses, their children, and every descendant with that
    descendant's spouses and their children. Already covered people stop the
    walk.
    """
    newly: list[str] = []
    stack = [root]
    while stack:
        node = stack.pop()
        if node.id in covered or (members is not None and node.id not in members):
            continue
        covered.add(node.id)
        newly.append(node.id)
        # Reverse so the walk pops in collection order
        stack.extend(reversed(node.children))
        stack.extend(reversed(node.spouses))
    return newly


def select_roots(
    graph: FamilyGraph,
    component: Sequence[str],
    coverage: dict[str, str] | None = None,
    tracer: Tracer | None = None,
) -> tuple[list[LayoutNode], bool]:
    """
    Pick the roots for one connected component.

    Returns the roots in order and whether the cyclic fallback was used.
    `coverage` (person id -> root id) is filled in when given.
    """
    if not component:
        return [], False

    members = set(component)
    ordered = order_component(graph, component)
    candidates = [n for n in ordered if not has_parent_in(graph, n, members)]

    degraded = False
    if not candidates:
        # Closed ancestry loop with no entry point
        candidates = [ordered[0]]
        degraded = True
        emit(tracer, "roots.degraded", root_id=ordered[0].id, size=len(component))

    covered: set[str] = set()
    roots: list[LayoutNode] = []

    def accept(node: LayoutNode) -> None:
        roots.append(node)
        for pid in mark_covered(node, covered, members):
            if coverage is not None:
                coverage[pid] = node.id

    for node in candidates:
        if node.id not in covered:
            accept(node)

    # People hanging below a parent loop are unreachable from the candidates
    for node in ordered:
        if node.id not in covered:
            emit(tracer, "roots.promoted", root_id=node.id)
            accept(node)

    return roots, degraded


def build_forest(
    people: Sequence[PersonRecord],
    relationships: Sequence[RelationshipRecord],
    tracer: Tracer | None = None,
) -> Forest:
    """Build the family graph, partition it and select roots for every cluster."""
    graph = build_family_graph(people, relationships, tracer=tracer)
    forest = Forest(graph=graph)

    for index, component in enumerate(connected_components(graph)):
        roots, degraded = select_roots(graph, component, forest.coverage, tracer=tracer)
        forest.components.append(component)
        forest.roots.extend(roots)
        if degraded:
            forest.degraded_components.append(index)

    emit(
        tracer,
        "forest.built",
        roots=len(forest.roots),
        components=len(forest.components),
        degraded=len(forest.degraded_components),
    )
    return forest


def root_of(forest: Forest, person_id: str) -> LayoutNode | None:
    """The root whose subtree owns a person, or None for unknown ids."""
    root_id = forest.coverage.get(person_id)
    if root_id is None:
        return None
    return forest.graph[root_id]
