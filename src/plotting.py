"""Visualization functions for computed layout geometry."""

from pathlib import Path

import matplotlib.pyplot as plt
import pydot
from matplotlib.patches import Circle, Rectangle

from geometry import EdgeKind, Geometry, NodePlacement, Role
from models import Gender

BAND_SHADES = ("#eef2ff", "#f8fafc")


def node_color(placement: NodePlacement) -> str:
    """Color by sex."""
    gender = placement.person.gender
    if gender is Gender.MALE:
        return "lightblue"
    if gender is Gender.FEMALE:
        return "lightpink"
    return "lightgray"


def plot_geometry(geometry: Geometry, output_path: Path | None = None, title: str | None = None):
    """
    Draw a geometry with matplotlib.

    Bands become shaded rectangles, parent-child edges solid grey lines,
    spouse edges dashed, people circles colored by sex with their name and
    detail line underneath. Screen coordinates grow downwards, so the y axis
    is inverted.

    Args:
        geometry: Output of one of the layout strategies
        output_path: Path to save the image. If None, returns the figure.
        title: Optional figure title
    """
    width_in = max(geometry.width / 100, 4)
    height_in = max(geometry.height / 100, 3)
    fig, ax = plt.subplots(figsize=(width_in, height_in))

    for band in geometry.bands:
        ax.add_patch(
            Rectangle(
                (band.x, band.y),
                band.width,
                band.height,
                facecolor=BAND_SHADES[band.shade % len(BAND_SHADES)],
                edgecolor="none",
                zorder=0,
            )
        )
        if band.label:
            ax.text(band.x + 8, band.y + 16, band.label, fontsize=8, color="#64748b", zorder=1)

    for edge in geometry.edges:
        if edge.kind is EdgeKind.SPOUSE:
            ax.plot([edge.x1, edge.x2], [edge.y1, edge.y2], color="#e11d48", linestyle="--", linewidth=1.5, zorder=2)
        else:
            ax.plot([edge.x1, edge.x2], [edge.y1, edge.y2], color="darkgray", linewidth=1.2, zorder=2)

    for placement in geometry.nodes:
        ax.add_patch(
            Circle(
                (placement.x, placement.y),
                placement.radius,
                facecolor=node_color(placement),
                edgecolor="#e11d48" if placement.role is Role.SPOUSE else "white",
                linewidth=1.5,
                zorder=3,
            )
        )
        label = placement.label
        if placement.detail:
            label = f"{label}\n{placement.detail}"
        ax.text(
            placement.x,
            placement.y + placement.radius + 4,
            label,
            ha="center",
            va="top",
            fontsize=7,
            zorder=4,
        )

    for tick in geometry.ticks:
        ax.axvline(tick.x, color="#cbd5e1", linewidth=0.5, zorder=1)
        ax.text(tick.x, geometry.height - 8, tick.label, ha="center", fontsize=7, color="#475569")

    ax.set_xlim(0, geometry.width)
    ax.set_ylim(geometry.height, 0)
    ax.set_aspect("equal")
    ax.axis("off")
    ax.set_title(title or f"Family Tree ({len(geometry.nodes)} people, {geometry.mode.value} view)")
    fig.tight_layout()

    if output_path:
        fig.savefig(output_path, dpi=150, bbox_inches="tight")
        plt.close(fig)
        print(f"Graph saved to {output_path}")
        return None
    return fig


def geometry_to_dot(geometry: Geometry) -> pydot.Dot:
    """
    Convert a geometry to a pydot graph with pinned positions.

    Positions are written as Graphviz `pos` attributes in points (y flipped),
    so `neato -n` reproduces the computed layout.
    """
    P = pydot.Dot(graph_type="graph")
    P.set("splines", "line")
    P.set("outputorder", "edgesfirst")

    for placement in geometry.nodes:
        P.add_node(
            pydot.Node(
                placement.id,
                label=f"{placement.label} {placement.detail}".strip(),
                shape="circle",
                style="filled",
                fillcolor=node_color(placement),
                pos=f"{placement.x:.1f},{geometry.height - placement.y:.1f}!",
                fontsize="10",
            )
        )

    for edge in geometry.edges:
        if edge.kind is EdgeKind.SPOUSE:
            P.add_edge(pydot.Edge(edge.source_id, edge.target_id, style="dashed", color="crimson"))
        else:
            P.add_edge(pydot.Edge(edge.source_id, edge.target_id, color="darkgray"))

    return P


def write_dot(geometry: Geometry, output_path: Path) -> None:
    """Write the geometry as DOT source, or render it when the extension is an image format."""
    P = geometry_to_dot(geometry)
    ext = output_path.suffix.lower().lstrip(".")
    if ext in ("png", "svg", "pdf"):
        P.write(str(output_path), prog=["neato", "-n"], format=ext)
    else:
        P.write(str(output_path), format="raw")
    print(f"Graph saved to {output_path}")
