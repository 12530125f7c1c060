"""Central constants & enumerations."""

MODEL_TIERS = {
    1: "Fixed effects only (OLS)",
    2: "Random intercept (mixed effects)",
    3: "Random intercept + slope (mixed effects)",
}

COLUMNS = ["Name", "Diameter", "Circumference"]
NUMERIC_COLUMNS = ["Diameter", "Circumference"]
MIN_OBSERVATIONS = 2

# Result wire format
FIELD_SEPARATOR = "|"
SEPARATOR_REPLACEMENT = "/"
ABSENT_MARKER = "NA"
TRUE_TOKEN = "TRUE"
FALSE_TOKEN = "FALSE"

# Messages surfaced to the user verbatim
MSG_INSUFFICIENT = "Need at least 2 observations"
MSG_OLS_OK = "linear model fitted"
MSG_OLS_FAILED = "linear model failed: {reason}"
MSG_MIXED_OK = "mixed-effects model fitted"
MSG_MIXED_FAILED = "mixed-effects model failed: {reason}"
MSG_MIXED_UNAVAILABLE = "mixed-effects model not available in this environment"
MSG_TRANSPORT_FAILED = "Cannot compute model: {reason}"

# Plotting
AXIS_HEADROOM = 1.15
ACCENT_COLOR = "#b22222"  # firebrick
POINT_SIZE = 60
LINE_WIDTH = 2
PLOT_TITLE = "Circumference vs Diameter"
DEFAULT_WIDTH = 800
DEFAULT_HEIGHT = 600
BRIDGE_WIDTH = 700
BRIDGE_HEIGHT = 500
VECTOR_UNITS_PER_INCH = 100

# Files
DATA_FILENAME = "pi_measurements.csv"
PLOT_BASENAME = "pi_plot"
SCRATCH_PLOT = "plot"

DISABLE_MIXED_ENV = "PILITE_DISABLE_MIXED"

__all__ = [
    "MODEL_TIERS",
    "COLUMNS",
    "NUMERIC_COLUMNS",
    "MIN_OBSERVATIONS",
    "FIELD_SEPARATOR",
    "SEPARATOR_REPLACEMENT",
    "ABSENT_MARKER",
    "TRUE_TOKEN",
    "FALSE_TOKEN",
    "AXIS_HEADROOM",
    "ACCENT_COLOR",
    "DEFAULT_WIDTH",
    "DEFAULT_HEIGHT",
]
