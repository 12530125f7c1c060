"""Static PNG / SVG rendering of the measurement plot with matplotlib."""
from __future__ import annotations

import io
import logging
from pathlib import Path
from typing import BinaryIO, Optional, Union

from matplotlib.figure import Figure

from ..constants import (
    ACCENT_COLOR,
    LINE_WIDTH,
    PLOT_TITLE,
    POINT_SIZE,
    VECTOR_UNITS_PER_INCH,
)
from ..core.data_model import PlotFormat, PlotSpec
from .layout import plot_layout

logger = logging.getLogger(__name__)

Output = Union[str, Path, BinaryIO]


def format_for_path(path: Union[str, Path]) -> PlotFormat:
    if Path(path).suffix.lower() == ".svg":
        return PlotFormat.VECTOR
    return PlotFormat.RASTER


def build_figure(spec: PlotSpec) -> Figure:
    """Draw the plot described by ``spec`` on a fresh figure."""
    layout = plot_layout(spec.data, spec.slope, spec.intercept)
    fig = Figure(
        figsize=(spec.width / VECTOR_UNITS_PER_INCH, spec.height / VECTOR_UNITS_PER_INCH),
        dpi=VECTOR_UNITS_PER_INCH,
    )
    ax = fig.add_subplot()
    handles = []
    for name in layout.names:
        pts = layout.points[layout.points["Name"] == name]
        handles.append(
            ax.scatter(
                pts["Diameter"],
                pts["Circumference"],
                color=layout.colors[name],
                s=POINT_SIZE,
                label=name,
            )
        )
    ax.set_xlim(*layout.x_range)
    ax.set_ylim(*layout.y_range)
    ax.set_xlabel("Diameter")
    ax.set_ylabel("Circumference")
    ax.set_title(PLOT_TITLE)

    if layout.line is not None:
        xs, ys = layout.line
        ax.plot(xs, ys, color=ACCENT_COLOR, linewidth=LINE_WIDTH)
        ax.text(
            0.02,
            0.97,
            layout.label,
            transform=ax.transAxes,
            color=ACCENT_COLOR,
            ha="left",
            va="top",
        )
    if layout.show_legend:
        ax.legend(handles=handles, labels=layout.names, loc="lower right", frameon=False)
    return fig


def render_plot(spec: PlotSpec, out: Optional[Output] = None) -> bytes:
    """Render to PNG or SVG bytes, optionally also writing them to ``out``."""
    fig = build_figure(spec)
    buf = io.BytesIO()
    fig.savefig(buf, format=spec.format.extension, dpi=VECTOR_UNITS_PER_INCH)
    data = buf.getvalue()
    logger.debug(
        "Rendered %s plot %dx%d (%d bytes)",
        spec.format.extension, spec.width, spec.height, len(data),
    )
    if out is not None:
        if isinstance(out, (str, Path)):
            Path(out).write_bytes(data)
        else:
            out.write(data)
    return data


def save_plot(data, path: Union[str, Path], slope=None, intercept=None, width=None, height=None) -> Path:
    """Render to ``path``; the extension picks PNG or SVG."""
    spec = PlotSpec(data, slope, intercept, format=format_for_path(path))
    if width:
        spec.width = width
    if height:
        spec.height = height
    render_plot(spec, path)
    return Path(path)
