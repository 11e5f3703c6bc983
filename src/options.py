"""Display configuration consumed by the layout strategies."""

from dataclasses import dataclass, field, fields
from enum import Enum
from typing import Any


class LayoutMode(Enum):
    HIERARCHY = "hierarchy"
    NETWORK = "network"
    TIMELINE = "timeline"


@dataclass(frozen=True)
class Viewport:
    width: float = 1200
    height: float = 800

    def __post_init__(self):
        if self.width <= 0 or self.height <= 0:
            raise ValueError(f"Viewport must be positive, got {self.width}x{self.height}")


@dataclass(frozen=True)
class DisplayOptions:
    """
    Host UI control state.

    `max_generations` limits hierarchy depth (1 shows only the root generation).
    `focus_radius` is the number of family hops kept around `focus_person_id`.
    Spacing values are in pixels.
    """

    mode: LayoutMode = LayoutMode.HIERARCHY
    max_generations: int = 5
    show_spouses: bool = True
    show_details: bool = True
    focus_person_id: str | None = None
    focus_radius: int = 5
    collapsed: frozenset[str] = field(default_factory=frozenset)

    node_radius: float = 20
    node_spacing: float = 120
    spouse_spacing: float = 120
    generation_spacing: float = 120
    margin: float = 50

    def __post_init__(self):
        if self.max_generations < 1:
            raise ValueError(f"max_generations must be at least 1, got {self.max_generations}")
        if self.focus_radius < 0:
            raise ValueError(f"focus_radius must not be negative, got {self.focus_radius}")
        if self.node_radius <= 0:
            raise ValueError(f"node_radius must be positive, got {self.node_radius}")
        # Accept any iterable of ids from callers
        if not isinstance(self.collapsed, frozenset):
            object.__setattr__(self, "collapsed", frozenset(self.collapsed))
        if not isinstance(self.mode, LayoutMode):
            object.__setattr__(self, "mode", LayoutMode(self.mode))

    @classmethod
    def from_dict(cls, data: dict[str, Any]) -> "DisplayOptions":
        """
        Build options from a control-state dict.

        Accepts the UI's camelCase keys (focusPersonId, maxGenerations,
        showSpouses, showDetails, collapsedNodes) as well as field names.
        Unknown keys are ignored.
        """
        aliases = {
            "focusPersonId": "focus_person_id",
            "maxGenerations": "max_generations",
            "showSpouses": "show_spouses",
            "showDetails": "show_details",
            "collapsedNodes": "collapsed",
            "focusRadius": "focus_radius",
        }
        names = {f.name for f in fields(cls)}
        kwargs = {}
        for key, value in data.items():
            name = aliases.get(key, key)
            if name in names:
                kwargs[name] = value
        return cls(**kwargs)
