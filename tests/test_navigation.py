from conftest import person, spouse
from models import Gender
from navigation import family_contexts, family_size, lineage_anchor
from roots import build_forest


def test_one_entry_per_root(two_families) -> None:
    people, relationships = two_families
    contexts = family_contexts(build_forest(people, relationships))

    assert [(c.person_id, c.root_id) for c in contexts] == [("a", "a"), ("d", "d"), ("h", "h")]
    assert contexts[0].label == "Arthur Smith family"
    assert not any(c.is_spouse_line for c in contexts)


def test_family_size_counts_spouses_and_descendants(two_families) -> None:
    people, relationships = two_families
    forest = build_forest(people, relationships)

    # a, b, c, c's wife f, g
    assert family_size(forest.graph["a"]) == 5
    # d, e, f, f's husband c, g
    assert family_size(forest.graph["d"]) == 5
    assert family_size(forest.graph["h"]) == 1


def test_family_size_terminates_on_cycles() -> None:
    people = [person("A", father_id="B"), person("B", father_id="A")]
    forest = build_forest(people, [])

    assert family_size(forest.graph["A"]) == 2


def test_spouse_with_own_lineage_gets_entry() -> None:
    people = [
        person("pf", "George", Gender.MALE),
        person("pm", "Grace", Gender.FEMALE),
        person("w", "Wendy", Gender.FEMALE, father_id="pf", mother_id="pm"),
        person("h", "Henry", Gender.MALE),
        person("k", "Kim", father_id="h", mother_id="w"),
    ]
    relationships = [spouse("r1", "pf", "pm"), spouse("r2", "h", "w")]
    forest = build_forest(people, relationships)

    # Henry sorts first and owns Wendy; her parents start their own tree
    assert forest.root_ids == ["h", "pf"]
    contexts = family_contexts(forest)
    by_person = {c.person_id: c for c in contexts}

    wendy = by_person["w"]
    assert wendy.is_spouse_line
    assert wendy.root_id == "pf"
    assert wendy.label == "Wendy family"
    assert wendy.family_size == 3


def test_entries_are_unique_by_person() -> None:
    people = [
        person("gf", "George", Gender.MALE),
        person("w", "Wendy", Gender.FEMALE, father_id="gf"),
        person("h1", "Henry", Gender.MALE),
        person("h2", "Hugo", Gender.MALE),
        person("k", father_id="h1", mother_id="w"),
        person("j", father_id="h2", mother_id="w"),
    ]
    relationships = [spouse("r1", "h1", "w"), spouse("r2", "h2", "w")]
    contexts = family_contexts(build_forest(people, relationships))

    ids = [c.person_id for c in contexts]
    assert len(ids) == len(set(ids))


def test_lineage_anchor_follows_father_first() -> None:
    people = [
        person("ggf", gender=Gender.MALE),
        person("gf", gender=Gender.MALE, father_id="ggf"),
        person("gm", gender=Gender.FEMALE),
        person("x", father_id="gf", mother_id="gm"),
    ]
    forest = build_forest(people, [])

    assert lineage_anchor(forest.graph, "x") == "ggf"
    assert lineage_anchor(forest.graph, "gm") == "gm"


def test_lineage_anchor_stops_on_loops() -> None:
    forest = build_forest([person("A", father_id="B"), person("B", father_id="A")], [])

    assert lineage_anchor(forest.graph, "A") == "B"


def test_empty_forest() -> None:
    assert family_contexts(build_forest([], [])) == []


def test_spouse_without_own_lineage_has_no_entry(small_family) -> None:
    people, relationships = small_family
    forest = build_forest(people, relationships)

    assert "p2" not in forest.root_ids
    assert [c.person_id for c in family_contexts(forest)] == ["p1"]
