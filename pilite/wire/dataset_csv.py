"""Dataset wire format: ``Name,Diameter,Circumference`` CSV text.

Names are always quoted with embedded quotes doubled; missing or
non-numeric values are written as empty fields.
"""
from __future__ import annotations

import io
import math

import pandas as pd

from ..constants import COLUMNS
from ..core.data_model import as_frame
from ..errors import DecodingError

HEADER = ",".join(COLUMNS)


def _quote(name) -> str:
    text = "" if name is None or (isinstance(name, float) and math.isnan(name)) else str(name)
    return '"' + text.replace('"', '""') + '"'


def _number(value) -> str:
    try:
        number = float(value)
    except (TypeError, ValueError):
        return ""
    return repr(number) if math.isfinite(number) else ""


def dataset_to_csv(data) -> str:
    df = as_frame(data)
    lines = [HEADER]
    for name, diameter, circumference in df.itertuples(index=False):
        lines.append(f"{_quote(name)},{_number(diameter)},{_number(circumference)}")
    return "\n".join(lines)


def dataset_from_csv(text: str) -> pd.DataFrame:
    """Parse CSV text; numeric columns are left as read so bad values
    surface when the data is fitted."""
    try:
        df = pd.read_csv(
            io.StringIO(text),
            dtype={"Name": str},
            keep_default_na=False,
            na_values={"Diameter": [""], "Circumference": [""]},
        )
    except (pd.errors.EmptyDataError, pd.errors.ParserError) as exc:
        raise DecodingError(f"cannot parse dataset: {exc}") from exc
    missing = [c for c in COLUMNS if c not in df.columns]
    if missing:
        raise DecodingError(f"dataset is missing columns: {', '.join(missing)}")
    return df.loc[:, COLUMNS]


__all__ = ["HEADER", "dataset_to_csv", "dataset_from_csv"]
