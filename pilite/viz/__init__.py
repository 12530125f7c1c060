from .layout import PlotLayout, hue_palette, plot_layout  # noqa: F401
from .render import build_figure, format_for_path, render_plot, save_plot  # noqa: F401
