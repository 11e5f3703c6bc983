"""Geometry handed to the rendering layer."""

from dataclasses import dataclass, field
from enum import Enum

from models import PersonRecord
from options import LayoutMode


class EdgeKind(Enum):
    PARENT_CHILD = "parent-child"
    SPOUSE = "spouse"


class Role(Enum):
    PRIMARY = "primary"
    SPOUSE = "spouse"


@dataclass
class NodePlacement:
    person: PersonRecord
    x: float
    y: float
    role: Role = Role.PRIMARY
    root_id: str | None = None
    generation: int = 0
    radius: float = 20
    label: str = ""
    detail: str = ""

    @property
    def id(self) -> str:
        return self.person.id


@dataclass
class EdgePlacement:
    source_id: str
    target_id: str
    x1: float
    y1: float
    x2: float
    y2: float
    kind: EdgeKind = EdgeKind.PARENT_CHILD

    @property
    def dashed(self) -> bool:
        return self.kind is EdgeKind.SPOUSE


@dataclass
class Band:
    """Background region: one per forest root, or one per timeline decade."""

    key: str
    x: float
    y: float
    width: float
    height: float
    label: str = ""
    shade: int = 0


@dataclass
class AxisTick:
    value: int
    x: float
    label: str = ""


@dataclass
class Geometry:
    mode: LayoutMode
    width: float
    height: float
    nodes: list[NodePlacement] = field(default_factory=list)
    edges: list[EdgePlacement] = field(default_factory=list)
    bands: list[Band] = field(default_factory=list)
    ticks: list[AxisTick] = field(default_factory=list)

    def node(self, person_id: str) -> NodePlacement | None:
        for placement in self.nodes:
            if placement.id == person_id:
                return placement
        return None

    @property
    def person_ids(self) -> list[str]:
        return [n.id for n in self.nodes]

    def bounds(self) -> tuple[float, float, float, float]:
        """(min_x, min_y, max_x, max_y) over node circles, or the canvas when empty."""
        if not self.nodes:
            return (0.0, 0.0, self.width, self.height)
        return (
            min(n.x - n.radius for n in self.nodes),
            min(n.y - n.radius for n in self.nodes),
            max(n.x + n.radius for n in self.nodes),
            max(n.y + n.radius for n in self.nodes),
        )


def node_labels(person: PersonRecord, show_details: bool) -> tuple[str, str]:
    """Name label plus "(year)" detail line when details are shown."""
    detail = ""
    if show_details and person.birth_year is not None:
        detail = f"({person.birth_year})"
    return person.full_name, detail
