"""Layout strategy selection."""

from geometry import Geometry
from hierarchy import hierarchy_layout
from models import Forest
from network import network_layout
from options import DisplayOptions, LayoutMode, Viewport
from timeline import timeline_layout
from tracing import Tracer


def compute_layout(
    forest: Forest,
    viewport: Viewport,
    options: DisplayOptions | None = None,
    tracer: Tracer | None = None,
) -> Geometry:
    """
    Compute the geometry for the selected layout mode.

    Network mode runs the force simulation until it settles; callers that want
    to animate or drag should use `network.network_layout` directly.
    """
    options = options or DisplayOptions()

    if options.mode is LayoutMode.HIERARCHY:
        return hierarchy_layout(forest, viewport, options, tracer=tracer)
    if options.mode is LayoutMode.NETWORK:
        return network_layout(forest, viewport, options, tracer=tracer).run().geometry()
    if options.mode is LayoutMode.TIMELINE:
        return timeline_layout(forest, viewport, options, tracer=tracer)
    raise ValueError(f"Unknown layout mode: {options.mode}")
