"""Core data model.

Measurements live in a pandas DataFrame with the columns
``Name, Diameter, Circumference``. ``MeasurementTable`` wraps that frame with
an operation log (row additions, removals, clears) the same way the UI
accumulates rows. Fit requests, results and plot specifications are small
value objects passed between the fitter, the wire codecs and the renderer.
"""
from __future__ import annotations

import enum
import logging
import math
from dataclasses import dataclass, field
from datetime import datetime, timezone
from typing import Any, Dict, Iterable, List, Mapping, Optional, Union

import numpy as np
import pandas as pd

from ..constants import COLUMNS, DEFAULT_HEIGHT, DEFAULT_WIDTH, NUMERIC_COLUMNS
from ..errors import NumericCoercionError

logger = logging.getLogger(__name__)

OperationRecord = Dict[str, Any]


@dataclass(frozen=True)
class Measurement:
    name: str
    diameter: float
    circumference: float


class ModelTier(enum.IntEnum):
    FIXED_ONLY = 1
    RANDOM_INTERCEPT = 2
    RANDOM_SLOPE_INTERCEPT = 3

    @property
    def is_mixed(self) -> bool:
        return self is not ModelTier.FIXED_ONLY


@dataclass(frozen=True)
class FitRequest:
    tier: ModelTier = ModelTier.FIXED_ONLY
    allow_mixed_effects: bool = True

    @property
    def effective_tier(self) -> ModelTier:
        """Tier actually honoured: mixed tiers collapse when not allowed."""
        if not self.allow_mixed_effects:
            return ModelTier.FIXED_ONLY
        return self.tier

    @classmethod
    def from_ui(cls, tier: Union[int, str], allow_mixed_effects: bool = True) -> "FitRequest":
        try:
            tier_value = ModelTier(int(tier))
        except (TypeError, ValueError) as exc:
            raise ValueError(f"Unknown model tier: {tier!r}") from exc
        return cls(tier_value, bool(allow_mixed_effects))


@dataclass(frozen=True)
class ModelResult:
    ok: bool
    message: str
    slope: Optional[float] = None
    intercept: Optional[float] = None

    def __post_init__(self):
        if self.ok:
            for label, value in (("slope", self.slope), ("intercept", self.intercept)):
                if value is None or not math.isfinite(value):
                    raise ValueError(f"Successful result needs a finite {label}, got {value!r}")
        elif self.slope is not None or self.intercept is not None:
            raise ValueError("Failed result must not carry coefficients")

    @classmethod
    def success(cls, message: str, slope: float, intercept: float) -> "ModelResult":
        return cls(True, message, float(slope), float(intercept))

    @classmethod
    def failure(cls, message: str) -> "ModelResult":
        return cls(False, message)

    @property
    def pi_estimate(self) -> Optional[float]:
        return self.slope


class PlotFormat(enum.Enum):
    RASTER = "png"
    VECTOR = "svg"

    @property
    def extension(self) -> str:
        return self.value


@dataclass
class PlotSpec:
    data: Any
    slope: Optional[float] = None
    intercept: Optional[float] = None
    format: PlotFormat = PlotFormat.RASTER
    width: int = DEFAULT_WIDTH
    height: int = DEFAULT_HEIGHT


def _row_from(item) -> Dict[str, Any]:
    if isinstance(item, Measurement):
        return {"Name": item.name, "Diameter": item.diameter, "Circumference": item.circumference}
    if isinstance(item, Mapping):
        return {c: item.get(c) for c in COLUMNS}
    name, diameter, circumference = item
    return {"Name": name, "Diameter": diameter, "Circumference": circumference}


def as_frame(data) -> pd.DataFrame:
    """Return a fresh DataFrame with the measurement columns.

    Accepts a DataFrame, a ``MeasurementTable`` or an iterable of
    ``Measurement`` objects, ``(name, diameter, circumference)`` tuples or
    mappings. The input is never modified.
    """
    if isinstance(data, MeasurementTable):
        data = data.df
    if isinstance(data, pd.DataFrame):
        missing = [c for c in COLUMNS if c not in data.columns]
        if missing:
            raise ValueError(f"Dataset is missing columns: {', '.join(missing)}")
        df = data.loc[:, COLUMNS].copy()
    elif data is None:
        df = pd.DataFrame(columns=COLUMNS)
    else:
        df = pd.DataFrame([_row_from(item) for item in data], columns=COLUMNS)
    return df.reset_index(drop=True)


def coerce_numeric(df: pd.DataFrame) -> pd.DataFrame:
    """Coerce Diameter/Circumference to floats, rejecting anything non-finite."""
    out = df.copy()
    bad_rows: List[int] = []
    for col in NUMERIC_COLUMNS:
        values = pd.to_numeric(out[col], errors="coerce").astype(float)
        bad = ~np.isfinite(values.to_numpy())
        bad_rows.extend(int(i) for i in np.flatnonzero(bad))
        out[col] = values
    if bad_rows:
        rows = sorted(set(bad_rows))
        logger.warning("Rejected non-numeric measurements in rows %s", rows)
        raise NumericCoercionError(
            "non-numeric Diameter/Circumference in row(s) "
            + ", ".join(str(r + 1) for r in rows)
        )
    return out


@dataclass
class MeasurementTable:
    df: pd.DataFrame = field(default_factory=lambda: pd.DataFrame(columns=COLUMNS))
    operations: List[OperationRecord] = field(default_factory=list)

    def log(self, op: str, **params):
        rec: OperationRecord = {
            "op": op,
            "params": params,
            "timestamp": datetime.now(timezone.utc).isoformat(),
            "rows": int(len(self.df)),
        }
        self.operations.append(rec)

    def __len__(self) -> int:
        return len(self.df)

    def add_row(self, name: str, diameter, circumference):
        name = (name or "").strip()
        if not name:
            raise ValueError("Name must not be empty")
        row = coerce_numeric(
            pd.DataFrame([[name, diameter, circumference]], columns=COLUMNS)
        )
        if len(self.df):
            self.df = pd.concat([self.df, row], ignore_index=True)
        else:
            self.df = row
        self.log("add_row", name=name)
        return self

    def remove_row(self, index: int):
        if not 0 <= index < len(self.df):
            raise IndexError(f"No row at position {index}")
        self.df = self.df.drop(self.df.index[index]).reset_index(drop=True)
        self.log("remove_row", index=index)
        return self

    def clear(self):
        self.df = pd.DataFrame(columns=COLUMNS)
        self.log("clear")
        return self

    def measurements(self) -> List[Measurement]:
        return [
            Measurement(str(r.Name), float(r.Diameter), float(r.Circumference))
            for r in self.df.itertuples(index=False)
        ]

    def to_csv(self) -> str:
        from ..wire.dataset_csv import dataset_to_csv

        return dataset_to_csv(self.df)

    @classmethod
    def from_measurements(cls, rows: Iterable) -> "MeasurementTable":
        table = cls(as_frame(rows))
        table.log("load", rows=len(table.df))
        return table
