"""
Display filtering shared by the layout strategies.

A forest is turned into one PlacementTree per root. The walk uses an explicit
stack and one visited set for the whole forest, so every person is placed at
most once and loops in the data cannot recurse forever.
"""

from collections import deque
from dataclasses import dataclass, field
from typing import Iterator

from graph import get_ego_subgraph, restrict
from models import FamilyGraph, Forest, LayoutNode
from options import DisplayOptions
from roots import build_forest
from tracing import Tracer, emit


@dataclass(eq=False)
class PlacementTree:
    node: LayoutNode
    depth: int
    root_id: str
    children: list["PlacementTree"] = field(default_factory=list)
    spouses: list[LayoutNode] = field(default_factory=list)

    @property
    def id(self) -> str:
        return self.node.id

    def walk(self) -> Iterator["PlacementTree"]:
        """Pre-order traversal."""
        stack = [self]
        while stack:
            tree = stack.pop()
            yield tree
            stack.extend(reversed(tree.children))


@dataclass
class View:
    forest: Forest
    trees: list[PlacementTree] = field(default_factory=list)

    @property
    def graph(self) -> FamilyGraph:
        return self.forest.graph

    def flatten(self) -> list[tuple[LayoutNode, bool, PlacementTree]]:
        """
        Every placed person once: (node, is_spouse_slot, owning tree), with spouse
        slots right after their partner.
        """
        flat = []
        for root in self.trees:
            for tree in root.walk():
                flat.append((tree.node, False, tree))
                for spouse in tree.spouses:
                    flat.append((spouse, True, tree))
        return flat

    def placed_ids(self) -> set[str]:
        return {node.id for node, _, _ in self.flatten()}


def focus_forest(forest: Forest, options: DisplayOptions, tracer: Tracer | None = None) -> Forest:
    """Rebuild the forest around the focus person's neighbourhood, if one is set."""
    focus_id = options.focus_person_id
    if not focus_id:
        return forest
    if focus_id not in forest.graph:
        emit(tracer, "view.unknown_focus", person_id=focus_id)
        return forest

    keep = get_ego_subgraph(forest.graph, focus_id, radius=options.focus_radius)
    people = [node.person for node in forest.graph]
    people, relationships = restrict(people, forest.graph.relationships, keep)
    emit(tracer, "view.focus", person_id=focus_id, kept=len(people))
    return build_forest(people, relationships, tracer=tracer)


def spouse_group(node: LayoutNode, visited: set[str]) -> list[LayoutNode]:
    """Unplaced spouses of `node`, transitively through newly placed spouses."""
    group: list[LayoutNode] = []
    queue = deque(node.spouses)
    while queue:
        spouse = queue.popleft()
        if spouse.id in visited:
            continue
        visited.add(spouse.id)
        group.append(spouse)
        queue.extend(spouse.spouses)
    return group


def collapsed_descendants(graph: FamilyGraph, collapsed: frozenset[str]) -> set[str]:
    """Everyone descending from a collapsed person, through any parent."""
    hidden: set[str] = set()
    stack = [graph[pid] for pid in collapsed if pid in graph]
    while stack:
        node = stack.pop()
        for child in node.children:
            if child.id not in hidden:
                hidden.add(child.id)
                stack.append(child)
    # In a parent loop the collapsed person is its own descendant
    return hidden - collapsed


def build_placement_trees(
    forest: Forest, options: DisplayOptions, tracer: Tracer | None = None
) -> list[PlacementTree]:
    """
    Build one PlacementTree per root.

    A node's tree children are its own children followed by the other children
    of its spouse slots. Nodes at depth >= max_generations are dropped, and
    collapsed people keep their place but lose their descendants.
    """
    # Hidden descendants count as already placed
    visited = collapsed_descendants(forest.graph, options.collapsed)
    hidden = len(visited)
    trees: list[PlacementTree] = []

    for root in forest.roots:
        if root.id in visited:
            continue
        visited.add(root.id)
        top = PlacementTree(node=root, depth=0, root_id=root.id)
        trees.append(top)

        stack = [top]
        while stack:
            tree = stack.pop()
            family = [tree.node]
            if options.show_spouses:
                tree.spouses = spouse_group(tree.node, visited)
                family.extend(tree.spouses)

            if tree.depth + 1 >= options.max_generations:
                continue

            for member in family:
                for child in member.children:
                    if child.id in visited:
                        continue
                    visited.add(child.id)
                    tree.children.append(
                        PlacementTree(node=child, depth=tree.depth + 1, root_id=top.id)
                    )
            stack.extend(reversed(tree.children))

    emit(tracer, "view.placed", trees=len(trees), people=len(visited) - hidden, hidden=hidden)
    return trees


def build_view(forest: Forest, options: DisplayOptions, tracer: Tracer | None = None) -> View:
    forest = focus_forest(forest, options, tracer=tracer)
    return View(forest=forest, trees=build_placement_trees(forest, options, tracer=tracer))


def spouse_links(view: View, placed: set[str] | None = None) -> list[tuple[str, str]]:
    """Spouse pairs whose partners are both placed, one entry per pair."""
    if placed is None:
        placed = view.placed_ids()
    seen: set[frozenset[str]] = set()
    links: list[tuple[str, str]] = []
    for node, _, _ in view.flatten():
        for spouse in node.spouses:
            pair = frozenset((node.id, spouse.id))
            if spouse.id in placed and pair not in seen:
                seen.add(pair)
                links.append((node.id, spouse.id))
    return links


def tree_parent(tree: PlacementTree, child: PlacementTree) -> str:
    """The family member a tree child actually descends from."""
    parents = (child.node.person.father_id, child.node.person.mother_id)
    if tree.id in parents:
        return tree.id
    for spouse in tree.spouses:
        if spouse.id in parents:
            return spouse.id
    return tree.id


def tree_links(view: View) -> list[tuple[str, str]]:
    """Parent -> child pairs along the placement trees, one per placed child."""
    links: list[tuple[str, str]] = []
    for root in view.trees:
        for tree in root.walk():
            for child in tree.children:
                links.append((tree_parent(tree, child), child.id))
    return links


def parent_links(view: View, placed: set[str] | None = None) -> list[tuple[str, str]]:
    """Every parent -> child pair whose people are both placed."""
    if placed is None:
        placed = view.placed_ids()
    links: list[tuple[str, str]] = []
    for node, _, _ in view.flatten():
        for child in node.children:
            if child.id in placed:
                links.append((node.id, child.id))
    return links
