"""Summary statistics for a forest."""

from collections import Counter
from dataclasses import dataclass, field

from models import Forest
from options import DisplayOptions
from view import build_placement_trees


@dataclass
class ForestStats:
    total_people: int = 0
    total_relationships: int = 0
    tree_count: int = 0
    min_generation: int = 0
    max_generation: int = 0
    generation_counts: dict[int, int] = field(default_factory=dict)
    degraded_trees: int = 0

    @property
    def generations_span(self) -> int:
        if not self.generation_counts:
            return 0
        return self.max_generation - self.min_generation + 1


def forest_stats(forest: Forest, options: DisplayOptions | None = None) -> ForestStats:
    """
    Count people per generation as they would be placed.

    Generation is depth below the owning root; spouse slots share their
    partner's generation. Without options, no generation limit applies.
    """
    if options is None:
        options = DisplayOptions(max_generations=max(len(forest.graph), 1))

    counts: Counter[int] = Counter()
    for root in build_placement_trees(forest, options):
        for tree in root.walk():
            counts[tree.depth] += 1 + len(tree.spouses)

    return ForestStats(
        total_people=len(forest.graph),
        total_relationships=len(forest.graph.relationships),
        tree_count=len(forest.roots),
        min_generation=min(counts, default=0),
        max_generation=max(counts, default=0),
        generation_counts=dict(sorted(counts.items())),
        degraded_trees=len(forest.degraded_components),
    )
