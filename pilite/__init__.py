"""PiLite package root.

Exposes high-level API surface for convenience.
"""
from .analysis.fits import FitReport, fit_pi_model, run_fit  # noqa: F401
from .core import (  # noqa: F401
    Capabilities,
    FitRequest,
    Measurement,
    MeasurementTable,
    ModelResult,
    ModelTier,
    PlotFormat,
    PlotSpec,
)
from .viz import build_figure, render_plot  # noqa: F401
from .wire import decode_result, encode_result  # noqa: F401

__version__ = "0.1.0"
