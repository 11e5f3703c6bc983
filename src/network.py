"""Force-directed network layout."""

import networkx as nx
import numpy as np

from geometry import EdgeKind, EdgePlacement, Geometry, NodePlacement, Role, node_labels
from models import Forest, LayoutNode
from options import DisplayOptions, LayoutMode, Viewport
from tracing import Tracer, emit
from view import PlacementTree, build_view, parent_links, spouse_links


class ForceSimulation:
    """
    Spring-electrical simulation over the flattened forest.

    Positions live in a normalised space centred on 0 and are mapped to the
    viewport by `geometry()`. Each tick runs NetworkX's Fruchterman-Reingold
    model (repulsion between all nodes, attraction along edges) from the
    current positions, moves nodes part of the way there according to `alpha`,
    recentres, and pushes overlapping circles apart. Pinned nodes do not move.
    """

    def __init__(
        self,
        entries: list[tuple[LayoutNode, bool, PlacementTree]],
        links: list[tuple[EdgeKind, str, str]],
        viewport: Viewport,
        options: DisplayOptions,
        seed: int = 42,
        alpha_min: float = 0.001,
        alpha_decay: float = 0.05,
        iterations_per_tick: int = 5,
    ):
        self.entries = entries
        self.links = links
        self.viewport = viewport
        self.options = options
        self.seed = seed
        self.alpha = 1.0
        self.alpha_target = 0.0
        self.alpha_min = alpha_min
        self.alpha_decay = alpha_decay
        self.iterations_per_tick = iterations_per_tick
        self.ticks = 0

        self.G = nx.Graph()
        for node, _, _ in entries:
            self.G.add_node(node.id)
        for _, source, target in links:
            self.G.add_edge(source, target)

        self.scale = max(min(viewport.width, viewport.height) / 2 - options.margin, 1.0)
        # Collision distance in normalised units
        self.min_distance = 2 * options.node_radius / self.scale

        initial = nx.random_layout(self.G, seed=seed)
        self.positions: dict[str, np.ndarray] = {
            n: 2 * np.asarray(p, dtype=float) - 1 for n, p in initial.items()
        }
        self.pinned: dict[str, np.ndarray] = {}

    @property
    def settled(self) -> bool:
        return self.alpha < self.alpha_min or len(self.G) == 0

    def tick(self) -> None:
        """Advance the simulation one step."""
        self.alpha += (self.alpha_target - self.alpha) * self.alpha_decay
        self.ticks += 1
        if len(self.G) < 2:
            for n in self.G:
                self.positions[n] = self.pinned.get(n, np.zeros(2))
            return

        for n, p in self.pinned.items():
            self.positions[n] = p.copy()

        target = nx.spring_layout(
            self.G,
            pos={n: tuple(p) for n, p in self.positions.items()},
            fixed=list(self.pinned) or None,
            iterations=self.iterations_per_tick,
            seed=self.seed,
        )

        for n in self.G:
            if n in self.pinned:
                continue
            current = self.positions[n]
            self.positions[n] = current + self.alpha * (np.asarray(target[n]) - current)

        if not self.pinned:
            mean = np.mean(list(self.positions.values()), axis=0)
            for n in self.positions:
                self.positions[n] = self.positions[n] - mean

        self._separate()

    def _separate(self, passes: int = 3) -> None:
        ids = list(self.G)
        movable = np.array([n not in self.pinned for n in ids])
        coords = np.array([self.positions[n] for n in ids])
        rng = np.random.default_rng(self.seed)

        for _ in range(passes):
            delta = coords[:, None, :] - coords[None, :, :]
            dist = np.linalg.norm(delta, axis=-1)
            np.fill_diagonal(dist, np.inf)
            overlap = dist < self.min_distance
            if not overlap.any():
                break
            # Coincident points get a random direction
            zero = dist == 0
            if zero.any():
                jitter = rng.normal(scale=1e-6, size=delta.shape)
                delta = np.where(zero[..., None], jitter, delta)
                dist = np.where(zero, np.linalg.norm(delta, axis=-1), dist)
            push = np.where(overlap, (self.min_distance - dist) / 2, 0.0)
            step = (delta / dist[..., None]) * push[..., None]
            move = step.sum(axis=1)
            coords = coords + move * movable[:, None]

        for n, p in zip(ids, coords):
            self.positions[n] = p

    def run(self, max_ticks: int = 500) -> "ForceSimulation":
        """Tick until the simulation settles or `max_ticks` is reached."""
        while not self.settled and self.ticks < max_ticks:
            self.tick()
        return self

    def restart(self, alpha: float = 1.0) -> None:
        self.alpha = alpha

    # Dragging pins a node until it is released

    def drag_start(self, person_id: str) -> None:
        if person_id not in self.positions:
            raise KeyError(person_id)
        self.pinned[person_id] = self.positions[person_id].copy()
        self.alpha_target = 0.3
        if self.alpha < self.alpha_target:
            self.alpha = self.alpha_target

    def drag_to(self, person_id: str, x: float, y: float) -> None:
        if person_id not in self.pinned:
            raise KeyError(person_id)
        point = self.to_normalised(x, y)
        self.pinned[person_id] = point
        self.positions[person_id] = point.copy()

    def drag_end(self, person_id: str) -> None:
        if person_id not in self.pinned:
            raise KeyError(person_id)
        del self.pinned[person_id]
        self.alpha_target = 0.0

    def to_pixels(self, point: np.ndarray) -> tuple[float, float]:
        return (
            float(self.viewport.width / 2 + point[0] * self.scale),
            float(self.viewport.height / 2 + point[1] * self.scale),
        )

    def to_normalised(self, x: float, y: float) -> np.ndarray:
        return np.array(
            [(x - self.viewport.width / 2) / self.scale, (y - self.viewport.height / 2) / self.scale]
        )

    def geometry(self) -> Geometry:
        """Snapshot of the current positions."""
        geometry = Geometry(mode=LayoutMode.NETWORK, width=self.viewport.width, height=self.viewport.height)
        pixels = {n: self.to_pixels(p) for n, p in self.positions.items()}

        for node, is_spouse, tree in self.entries:
            x, y = pixels[node.id]
            label, detail = node_labels(node.person, self.options.show_details)
            geometry.nodes.append(
                NodePlacement(
                    person=node.person,
                    x=x,
                    y=y,
                    role=Role.SPOUSE if is_spouse else Role.PRIMARY,
                    root_id=tree.root_id,
                    generation=tree.depth,
                    radius=self.options.node_radius,
                    label=label,
                    detail=detail,
                )
            )

        for kind, source, target in self.links:
            x1, y1 = pixels[source]
            x2, y2 = pixels[target]
            geometry.edges.append(
                EdgePlacement(source_id=source, target_id=target, x1=x1, y1=y1, x2=x2, y2=y2, kind=kind)
            )
        return geometry


def network_layout(
    forest: Forest,
    viewport: Viewport,
    options: DisplayOptions,
    tracer: Tracer | None = None,
    seed: int = 42,
) -> ForceSimulation:
    """
    Flatten the forest into nodes and relationship edges and set up the
    simulation. The caller ticks it (or calls `run()`) and reads `geometry()`.
    """
    view = build_view(forest, options, tracer=tracer)
    entries = view.flatten()
    placed = {node.id for node, _, _ in entries}

    links: list[tuple[EdgeKind, str, str]] = [
        (EdgeKind.PARENT_CHILD, parent, child) for parent, child in parent_links(view, placed)
    ]
    links.extend((EdgeKind.SPOUSE, a, b) for a, b in spouse_links(view, placed))

    emit(tracer, "layout.network", nodes=len(entries), edges=len(links))
    return ForceSimulation(entries, links, viewport, options, seed=seed)
