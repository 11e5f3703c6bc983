"""Chronological layout by birth date."""

from datetime import date

from geometry import AxisTick, Band, Geometry, NodePlacement, Role, node_labels
from models import Forest, PersonRecord
from options import DisplayOptions, LayoutMode, Viewport
from tracing import Tracer, emit
from view import build_view


def decade_of(birth: date) -> int:
    return birth.year // 10 * 10


def birth_of(person: PersonRecord) -> date | None:
    """Birth date as a date, or None when missing or not a real calendar day."""
    if not person.birth_date:
        return None
    try:
        return date.fromisoformat(person.birth_date)
    except ValueError:
        return None


def timeline_layout(
    forest: Forest,
    viewport: Viewport,
    options: DisplayOptions,
    tracer: Tracer | None = None,
) -> Geometry:
    """
    Place people on a birth-date axis, one horizontal band per birth decade.

    People without a usable birth date are left out of this view. The time
    scale maps the earliest birth to `margin * 2` and the latest to `width - margin * 2`;
    a single distinct date sits in the middle.
    """
    view = build_view(forest, options, tracer=tracer)
    geometry = Geometry(mode=LayoutMode.TIMELINE, width=viewport.width, height=viewport.height)

    dated = []
    omitted = 0
    for node, is_spouse, tree in view.flatten():
        born = birth_of(node.person)
        if born is None:
            omitted += 1
            continue
        dated.append((born, node, is_spouse, tree))
    if not dated:
        emit(tracer, "layout.timeline", nodes=0, omitted=omitted)
        return geometry

    # Stable sort keeps forest order among equal dates
    dated.sort(key=lambda item: item[0])
    earliest, latest = dated[0][0], dated[-1][0]
    span = (latest - earliest).days

    x0 = 2 * options.margin
    x1 = max(viewport.width - 2 * options.margin, x0)

    def scale(when: date) -> float:
        if span == 0:
            return (x0 + x1) / 2
        return x0 + (when - earliest).days / span * (x1 - x0)

    decades = sorted({decade_of(when) for when, *_ in dated})
    usable = max(viewport.height - 2 * options.margin, 2 * options.node_radius)
    band_height = usable / len(decades)
    band_index = {decade: i for i, decade in enumerate(decades)}

    for i, decade in enumerate(decades):
        geometry.bands.append(
            Band(
                key=str(decade),
                x=0.0,
                y=options.margin + i * band_height,
                width=viewport.width,
                height=band_height,
                label=f"{decade}s",
                shade=i % 2,
            )
        )
        tick_date = max(date(max(decade, 1), 1, 1), earliest)
        geometry.ticks.append(AxisTick(value=decade, x=scale(tick_date), label=str(decade)))

    for when, node, is_spouse, tree in dated:
        label, detail = node_labels(node.person, options.show_details)
        band = geometry.bands[band_index[decade_of(when)]]
        geometry.nodes.append(
            NodePlacement(
                person=node.person,
                x=scale(when),
                y=band.y + band.height / 2,
                role=Role.SPOUSE if is_spouse else Role.PRIMARY,
                root_id=tree.root_id,
                generation=tree.depth,
                radius=options.node_radius,
                label=label,
                detail=detail,
            )
        )

    emit(tracer, "layout.timeline", nodes=len(geometry.nodes), omitted=omitted)
    return geometry
