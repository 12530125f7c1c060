from .capabilities import Capabilities, MixedEffectsEngine, default_capabilities  # noqa: F401
from .data_model import (  # noqa: F401
    FitRequest,
    Measurement,
    MeasurementTable,
    ModelResult,
    ModelTier,
    PlotFormat,
    PlotSpec,
    as_frame,
    coerce_numeric,
)
