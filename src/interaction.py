"""Zoom/pan transform and click dispatch over computed geometry."""

from dataclasses import dataclass, field, replace
from typing import Any, Callable

from geometry import Geometry, NodePlacement
from models import PersonRecord
from options import LayoutMode

# Zoom limits per view, matching the interactive views
SCALE_EXTENTS = {
    LayoutMode.HIERARCHY: (0.3, 3.0),
    LayoutMode.NETWORK: (0.3, 3.0),
    LayoutMode.TIMELINE: (0.5, 5.0),
}


@dataclass(frozen=True)
class ZoomTransform:
    """
    Uniform scale-then-translate applied to the whole rendered group.

    Screen point = (x * scale + tx, y * scale + ty). Transforms are immutable;
    the geometry they are applied to is never modified.
    """

    scale: float = 1.0
    tx: float = 0.0
    ty: float = 0.0
    scale_extent: tuple[float, float] = (0.3, 3.0)

    @classmethod
    def for_mode(cls, mode: LayoutMode) -> "ZoomTransform":
        return cls(scale_extent=SCALE_EXTENTS[mode])

    def apply(self, x: float, y: float) -> tuple[float, float]:
        return x * self.scale + self.tx, y * self.scale + self.ty

    def invert(self, x: float, y: float) -> tuple[float, float]:
        return (x - self.tx) / self.scale, (y - self.ty) / self.scale

    def zoom_at(self, factor: float, x: float, y: float) -> "ZoomTransform":
        """Scale by `factor` keeping the screen point (x, y) fixed."""
        low, high = self.scale_extent
        scale = min(max(self.scale * factor, low), high)
        gx, gy = self.invert(x, y)
        return replace(self, scale=scale, tx=x - gx * scale, ty=y - gy * scale)

    def pan(self, dx: float, dy: float) -> "ZoomTransform":
        return replace(self, tx=self.tx + dx, ty=self.ty + dy)

    def reset(self) -> "ZoomTransform":
        return replace(self, scale=1.0, tx=0.0, ty=0.0)

    def svg(self) -> str:
        return f"translate({self.tx},{self.ty}) scale({self.scale})"


@dataclass
class PointerEvent:
    """A pointer activation in screen coordinates, passed through untouched."""

    x: float
    y: float
    button: int = 0
    modifiers: frozenset[str] = field(default_factory=frozenset)
    source: Any = None


ClickCallback = Callable[[PersonRecord, PointerEvent], Any]


def hit_test(
    geometry: Geometry, x: float, y: float, transform: ZoomTransform | None = None
) -> NodePlacement | None:
    """The placement under a screen point; later (topmost) placements win."""
    if transform is not None:
        x, y = transform.invert(x, y)
    for placement in reversed(geometry.nodes):
        dx = x - placement.x
        dy = y - placement.y
        if dx * dx + dy * dy <= placement.radius * placement.radius:
            return placement
    return None


def dispatch_click(
    geometry: Geometry,
    event: PointerEvent,
    callback: ClickCallback | None,
    transform: ZoomTransform | None = None,
) -> bool:
    """
    Report a click on a person to the host.

    The callback receives the person record and the original event; what the
    click means is up to the host. Returns whether a person was hit.
    """
    placement = hit_test(geometry, event.x, event.y, transform)
    if placement is None:
        return False
    if callback is not None:
        callback(placement.person, event)
    return True
