"""Family graph building, component partitioning and NetworkX views."""

from collections import deque
from typing import Iterable, Sequence

import networkx as nx

from models import FamilyGraph, LayoutNode, PersonRecord, RelationshipRecord
from tracing import Tracer, emit


def build_family_graph(
    people: Sequence[PersonRecord],
    relationships: Sequence[RelationshipRecord],
    tracer: Tracer | None = None,
) -> FamilyGraph:
    """
    Wrap person records into LayoutNodes and attach spouse and child edges.

    Relationship records whose endpoints are not in `people` are skipped, never
    raised; they are kept on `FamilyGraph.skipped_relationships` for callers
    that want to report them. Duplicate person ids keep the first record.
    """
    graph = FamilyGraph()

    for person in people:
        if person.id in graph.nodes:
            emit(tracer, "graph.duplicate_person", person_id=person.id)
            continue
        graph.nodes[person.id] = LayoutNode(person=person)

    # Spouse edges are symmetric; one slot per partner even if recorded twice
    for rel in relationships:
        a = graph.nodes.get(rel.person1_id)
        b = graph.nodes.get(rel.person2_id)
        if a is None or b is None or a is b:
            graph.skipped_relationships.append(rel)
            emit(tracer, "graph.skip_relationship", relationship_id=rel.id)
            continue
        graph.relationships.append(rel)
        if b in a.spouses:
            continue
        a.spouses.append(b)
        a.spouse_kinds.append(rel.relationship_type)
        b.spouses.append(a)
        b.spouse_kinds.append(rel.relationship_type)

    # Children in input order
    for node in graph.nodes.values():
        person = node.person
        for parent_id in dict.fromkeys((person.father_id, person.mother_id)):
            if not parent_id or parent_id == person.id:
                continue
            parent = graph.nodes.get(parent_id)
            if parent is not None:
                parent.children.append(node)

    emit(
        tracer,
        "graph.built",
        people=len(graph.nodes),
        relationships=len(graph.relationships),
        skipped=len(graph.skipped_relationships),
    )
    return graph


def connected_components(graph: FamilyGraph) -> list[list[str]]:
    """
    Partition people into family clusters.

    Breadth-first search from each unvisited person (input order) over parent,
    child and spouse edges. Components list ids in discovery order.
    """
    visited: set[str] = set()
    components: list[list[str]] = []

    for start in graph.nodes:
        if start in visited:
            continue
        visited.add(start)
        component = [start]
        queue = deque([start])
        while queue:
            current = queue.popleft()
            for neighbour in graph.neighbours(current):
                if neighbour.id not in visited:
                    visited.add(neighbour.id)
                    component.append(neighbour.id)
                    queue.append(neighbour.id)
        components.append(component)

    return components


def to_networkx(graph: FamilyGraph) -> nx.DiGraph:
    """
    Build a NetworkX directed graph from the family graph.

    PARENT_OF edges go parent -> child. SPOUSE_OF edges are stored once per
    pair, from the first-listed partner.
    """
    G = nx.DiGraph()

    # Note: use 'person_name' instead of 'name' to avoid conflict with pydot
    for node in graph.nodes.values():
        person = node.person
        G.add_node(
            person.id,
            person_name=person.full_name,
            sex=person.gender.value,
            birth_date=person.birth_date,
            death_date=person.death_date,
        )

    for node in graph.nodes.values():
        for child in node.children:
            G.add_edge(node.id, child.id, relationship_type="PARENT_OF")
        for spouse, kind in zip(node.spouses, node.spouse_kinds):
            if not G.has_edge(spouse.id, node.id):
                G.add_edge(node.id, spouse.id, relationship_type="SPOUSE_OF", kind=kind.value)

    return G


def get_ego_subgraph(graph: FamilyGraph, center_id: str, radius: int = 2) -> list[str]:
    """
    Person ids within a given number of family edges of a center person.

    Args:
        graph: The full family graph
        center_id: The person ID to center on
        radius: Maximum distance from center (default 2)

    Returns:
        Ids within `radius` parent/child/spouse hops of `center_id`, in input order
    """
    if center_id not in graph:
        raise ValueError(f"Person ID {center_id} not found in graph")

    # Undirected view so parents, children and spouses all count as one hop
    undirected = to_networkx(graph).to_undirected()
    ego = nx.ego_graph(undirected, center_id, radius=radius)
    return [pid for pid in graph.nodes if pid in ego]


def restrict(
    people: Sequence[PersonRecord],
    relationships: Sequence[RelationshipRecord],
    keep_ids: Iterable[str],
) -> tuple[list[PersonRecord], list[RelationshipRecord]]:
    """Narrow the input lists to `keep_ids`, preserving order."""
    keep = set(keep_ids)
    kept_people = [p for p in people if p.id in keep]
    kept_relationships = [
        r for r in relationships if r.person1_id in keep and r.person2_id in keep
    ]
    return kept_people, kept_relationships
