"""Logical plot content shared by the static renderer and the plotly chart."""
from __future__ import annotations

import colorsys
import math
import numbers
from dataclasses import dataclass
from typing import Dict, List, Optional, Tuple

import pandas as pd

from ..constants import AXIS_HEADROOM, NUMERIC_COLUMNS
from ..core.data_model import as_frame

Range = Tuple[float, float]


@dataclass(frozen=True)
class PlotLayout:
    points: pd.DataFrame
    names: List[str]
    colors: Dict[str, str]
    x_range: Range
    y_range: Range
    show_legend: bool
    line: Optional[Tuple[Range, Range]] = None
    label: Optional[str] = None


def hue_palette(n: int) -> List[str]:
    """``n`` evenly spaced fully saturated hues, starting at red."""
    colors = []
    for i in range(n):
        r, g, b = colorsys.hsv_to_rgb(i / n, 1.0, 1.0)
        colors.append("#{:02x}{:02x}{:02x}".format(*(int(round(c * 255)) for c in (r, g, b))))
    return colors


def axis_range(values: pd.Series) -> Range:
    top = values.max() if len(values) else float("nan")
    if not (isinstance(top, numbers.Real) and math.isfinite(top) and top > 0):
        return (0.0, 1.0)
    return (0.0, float(top) * AXIS_HEADROOM)


def pi_label(slope: float) -> str:
    return f"π ≈ {round(slope, 4)}"


def _is_number(value) -> bool:
    return isinstance(value, numbers.Real) and math.isfinite(value)


def plot_layout(data, slope: Optional[float] = None, intercept: Optional[float] = None) -> PlotLayout:
    df = as_frame(data)
    for col in NUMERIC_COLUMNS:
        df[col] = pd.to_numeric(df[col], errors="coerce")
    df = df.dropna(subset=NUMERIC_COLUMNS)
    df["Name"] = df["Name"].astype(str)

    names = sorted(df["Name"].unique())
    colors = dict(zip(names, hue_palette(len(names))))
    x_range = axis_range(df["Diameter"])
    y_range = axis_range(df["Circumference"])

    line = None
    label = None
    if _is_number(slope) and _is_number(intercept):
        x0, x1 = x_range
        line = ((x0, x1), (intercept + slope * x0, intercept + slope * x1))
        label = pi_label(slope)
    return PlotLayout(
        points=df.reset_index(drop=True),
        names=names,
        colors=colors,
        x_range=x_range,
        y_range=y_range,
        show_legend=len(names) > 1,
        line=line,
        label=label,
    )
