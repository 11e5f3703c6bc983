"""Family-switcher entries computed from a forest."""

from dataclasses import dataclass

from models import FamilyGraph, Forest, LayoutNode


@dataclass(frozen=True)
class FamilyContext:
    person_id: str
    root_id: str
    label: str
    family_size: int
    is_spouse_line: bool = False


def family_size(node: LayoutNode) -> int:
    """
    1 for the person, plus their spouses, plus every descendant and each
    descendant's spouses. Everyone is counted once.
    """
    counted = {node.id}
    expanded: set[str] = set()
    stack = [node]
    while stack:
        current = stack.pop()
        if current.id in expanded:
            continue
        expanded.add(current.id)
        counted.update(s.id for s in current.spouses)
        for child in current.children:
            counted.add(child.id)
            stack.append(child)
    return len(counted)


def lineage_anchor(graph: FamilyGraph, person_id: str) -> str:
    """
    The topmost in-data ancestor reached by following parents (father first).
    Loops stop at the first repeated person.
    """
    visited = {person_id}
    current = person_id
    while True:
        parents = [p for p in graph.parents_of(current) if p.id not in visited]
        if not parents:
            return current
        current = parents[0].id
        visited.add(current)


def family_contexts(forest: Forest) -> list[FamilyContext]:
    """
    One entry per root for its own family, followed by one entry per spouse
    whose ancestry leads to a different root. Entries are unique by person
    id; the first occurrence wins.
    """
    root_ids = set(forest.root_ids)
    contexts: list[FamilyContext] = []
    seen: set[str] = set()

    def add(entry: FamilyContext) -> None:
        if entry.person_id not in seen:
            seen.add(entry.person_id)
            contexts.append(entry)

    for root in forest.roots:
        add(
            FamilyContext(
                person_id=root.id,
                root_id=root.id,
                label=f"{root.person.full_name} family",
                family_size=family_size(root),
            )
        )
        for spouse in root.spouses:
            # A root covers its spouses, so a spouse is never a root itself
            anchor = lineage_anchor(forest.graph, spouse.id)
            other_root = forest.coverage.get(anchor, anchor)
            if anchor == spouse.id or other_root == root.id or other_root not in root_ids:
                continue
            add(
                FamilyContext(
                    person_id=spouse.id,
                    root_id=other_root,
                    label=f"{spouse.person.full_name} family",
                    family_size=family_size(spouse),
                    is_spouse_line=True,
                )
            )

    return contexts
