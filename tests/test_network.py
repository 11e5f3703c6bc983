import pytest

from conftest import person
from geometry import EdgeKind
from layout import compute_layout
from network import ForceSimulation, network_layout
from options import DisplayOptions, LayoutMode, Viewport
from roots import build_forest

VIEWPORT = Viewport(800, 600)


def test_flattens_all_nodes_and_edges(two_families) -> None:
    people, relationships = two_families
    sim = network_layout(build_forest(people, relationships), VIEWPORT, DisplayOptions())

    assert sorted(node.id for node, _, _ in sim.entries) == sorted(p.id for p in people)
    kinds = [kind for kind, _, _ in sim.links]
    assert kinds.count(EdgeKind.PARENT_CHILD) == 6
    assert kinds.count(EdgeKind.SPOUSE) == 3


def test_simulation_settles(two_families) -> None:
    people, relationships = two_families
    sim = network_layout(build_forest(people, relationships), VIEWPORT, DisplayOptions()).run()

    assert sim.settled
    geometry = sim.geometry()
    assert geometry.mode is LayoutMode.NETWORK
    assert sorted(geometry.person_ids) == sorted(p.id for p in people)
    assert len(geometry.edges) == 9


def test_same_seed_same_positions(small_family) -> None:
    people, relationships = small_family
    forest = build_forest(people, relationships)

    first = network_layout(forest, VIEWPORT, DisplayOptions(), seed=3).run().geometry()
    second = network_layout(forest, VIEWPORT, DisplayOptions(), seed=3).run().geometry()

    for a, b in zip(first.nodes, second.nodes):
        assert a.x == pytest.approx(b.x)
        assert a.y == pytest.approx(b.y)


def test_edges_follow_node_positions(small_family) -> None:
    people, relationships = small_family
    geometry = compute_layout(
        build_forest(people, relationships), VIEWPORT, DisplayOptions(mode=LayoutMode.NETWORK)
    )

    for edge in geometry.edges:
        source, target = geometry.node(edge.source_id), geometry.node(edge.target_id)
        assert (edge.x1, edge.y1) == pytest.approx((source.x, source.y))
        assert (edge.x2, edge.y2) == pytest.approx((target.x, target.y))


def test_drag_pins_node(small_family) -> None:
    people, relationships = small_family
    sim = network_layout(build_forest(people, relationships), VIEWPORT, DisplayOptions()).run()

    sim.drag_start("p3")
    assert sim.alpha >= 0.3
    sim.drag_to("p3", 100, 120)
    for _ in range(10):
        sim.tick()
    x, y = sim.to_pixels(sim.positions["p3"])
    assert (x, y) == pytest.approx((100, 120))

    sim.drag_end("p3")
    assert "p3" not in sim.pinned
    assert sim.alpha_target == 0


def test_drag_unknown_person(small_family) -> None:
    people, relationships = small_family
    sim = network_layout(build_forest(people, relationships), VIEWPORT, DisplayOptions())

    with pytest.raises(KeyError):
        sim.drag_start("ghost")
    with pytest.raises(KeyError):
        sim.drag_to("p1", 0, 0)
    with pytest.raises(KeyError):
        sim.drag_end("p1")


def test_pixel_mapping_round_trip() -> None:
    sim = ForceSimulation([], [], VIEWPORT, DisplayOptions())

    point = sim.to_normalised(250, 400)
    assert sim.to_pixels(point) == pytest.approx((250, 400))
    assert sim.to_pixels(sim.to_normalised(400, 300)) == pytest.approx((400, 300))


def test_empty_and_single_node() -> None:
    empty = network_layout(build_forest([], []), VIEWPORT, DisplayOptions()).run()
    assert empty.settled
    assert empty.geometry().nodes == []

    single = network_layout(build_forest([person("solo")], []), VIEWPORT, DisplayOptions()).run()
    (node,) = single.geometry().nodes
    assert (node.x, node.y) == pytest.approx((400, 300))


def test_collision_keeps_nodes_apart(two_families) -> None:
    people, relationships = two_families
    options = DisplayOptions(node_radius=10)
    sim = network_layout(build_forest(people, relationships), VIEWPORT, options).run()
    geometry = sim.geometry()

    closest = min(
        ((a.x - b.x) ** 2 + (a.y - b.y) ** 2) ** 0.5
        for i, a in enumerate(geometry.nodes)
        for b in geometry.nodes[i + 1 :]
    )
    assert closest > options.node_radius
