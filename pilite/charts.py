from typing import Optional

import plotly.express as px
import plotly.graph_objs as go

from .constants import ACCENT_COLOR, PLOT_TITLE
from .viz.layout import plot_layout


def make_pi_chart(
    data,
    slope: Optional[float] = None,
    intercept: Optional[float] = None,
    height: int = 400,
):
    """Interactive scatter of the measurements with the fitted line."""
    layout = plot_layout(data, slope, intercept)
    fig = px.scatter(
        layout.points,
        x="Diameter",
        y="Circumference",
        color="Name",
        color_discrete_map=layout.colors,
        category_orders={"Name": layout.names},
    )
    fig.update_traces(marker=dict(size=11, opacity=0.8))
    if layout.line is not None:
        xs, ys = layout.line
        fig.add_trace(
            go.Scatter(
                x=list(xs),
                y=list(ys),
                mode="lines",
                line=dict(color=ACCENT_COLOR, width=3),
                name=layout.label,
                showlegend=False,
            )
        )
    title = PLOT_TITLE
    if layout.label:
        title = f"{PLOT_TITLE}<br><sup>Estimated {layout.label}</sup>"
    fig.update_layout(
        title=title,
        height=height,
        showlegend=layout.show_legend,
        xaxis=dict(range=list(layout.x_range), title="Diameter"),
        yaxis=dict(range=list(layout.y_range), title="Circumference"),
    )
    return fig
