import pytest

from options import DisplayOptions, LayoutMode, Viewport


def test_defaults() -> None:
    options = DisplayOptions()

    assert options.mode is LayoutMode.HIERARCHY
    assert options.max_generations == 5
    assert options.show_spouses
    assert options.show_details
    assert options.focus_person_id is None
    assert options.collapsed == frozenset()


def test_from_dict_accepts_ui_keys() -> None:
    options = DisplayOptions.from_dict(
        {
            "mode": "timeline",
            "maxGenerations": 3,
            "showSpouses": False,
            "focusPersonId": "p1",
            "collapsedNodes": ["p2", "p3"],
            "unrelated": True,
        }
    )

    assert options.mode is LayoutMode.TIMELINE
    assert options.max_generations == 3
    assert not options.show_spouses
    assert options.focus_person_id == "p1"
    assert options.collapsed == frozenset({"p2", "p3"})


@pytest.mark.parametrize(
    "kwargs",
    [
        {"max_generations": 0},
        {"focus_radius": -1},
        {"node_radius": 0},
        {"mode": "spiral"},
    ],
)
def test_invalid_options_raise(kwargs) -> None:
    with pytest.raises(ValueError):
        DisplayOptions(**kwargs)


def test_viewport_must_be_positive() -> None:
    with pytest.raises(ValueError):
        Viewport(0, 600)
    with pytest.raises(ValueError):
        Viewport(800, -1)
