"""Data checks for family records. Nothing here blocks a layout."""

from datetime import date
from typing import Sequence

import networkx as nx

from graph import build_family_graph, to_networkx
from models import PersonRecord, RelationshipRecord


def validate_family(
    people: Sequence[PersonRecord], relationships: Sequence[RelationshipRecord]
) -> list[str]:
    """
    Validate family records for:
    - Cycles in parent-child relationships
    - Impossible ages (child born before parent)
    - Date ordering issues
    - Parent or relationship ids that point at nobody

    Returns a list of warning messages.
    """
    warnings: list[str] = []
    graph = build_family_graph(people, relationships)
    G = to_networkx(graph)

    # Create a subgraph with only PARENT_OF edges for cycle detection
    parent_edges = [
        (u, v) for u, v, d in G.edges(data=True) if d.get("relationship_type") == "PARENT_OF"
    ]
    parent_graph = nx.DiGraph(parent_edges)

    try:
        cycle = nx.find_cycle(parent_graph, orientation="original")
        cycle_nodes = [edge[0] for edge in cycle]
        warnings.append(f"Cycle detected in parent-child relationships: {cycle_nodes}")
    except nx.NetworkXNoCycle:
        pass

    # birth_date is ISO format (YYYY-MM-DD) which can be compared as strings
    for parent, child in parent_edges:
        parent_data = G.nodes[parent]
        child_data = G.nodes[child]

        parent_birth = parent_data.get("birth_date")
        child_birth = child_data.get("birth_date")

        if parent_birth and child_birth:
            if child_birth < parent_birth:
                warnings.append(
                    f"Impossible: {child_data.get('person_name')} born before parent "
                    f"{parent_data.get('person_name')}"
                )
            else:
                try:
                    gap = date.fromisoformat(child_birth) - date.fromisoformat(parent_birth)
                    if gap.days < 12 * 365:
                        warnings.append(
                            f"Suspicious: {parent_data.get('person_name')} was less than 12 years "
                            f"old when {child_data.get('person_name')} was born"
                        )
                except (ValueError, IndexError):
                    pass

    for _, data in G.nodes(data=True):
        birth = data.get("birth_date")
        death = data.get("death_date")

        if birth and death and death < birth:
            warnings.append(f"Impossible: {data.get('person_name')} died before being born")

    for node in graph:
        person = node.person
        for role, parent_id in (("father", person.father_id), ("mother", person.mother_id)):
            if parent_id == person.id:
                warnings.append(f"Impossible: {person.full_name} is their own {role}")
            elif parent_id and parent_id not in graph:
                warnings.append(f"Missing: {role} {parent_id} of {person.full_name} not found")

    for rel in graph.skipped_relationships:
        if rel.person1_id == rel.person2_id:
            warnings.append(f"Impossible: relationship {rel.id} links {rel.person1_id} to themself")
        else:
            warnings.append(
                f"Missing: relationship {rel.id} refers to unknown person "
                f"{rel.person1_id if rel.person1_id not in graph else rel.person2_id}"
            )

    return warnings
