"""Fitting routines for the π estimate.

The ordinary least-squares line of Circumference on Diameter is always
computed and is the result returned. When a mixed-effects tier is requested
and allowed, the mixed model is attempted first and its outcome is recorded
on the ``FitReport`` (and logged), but the ordinary fit overwrites it.
"""
from __future__ import annotations

import logging
from dataclasses import dataclass
from typing import Optional, Tuple

import numpy as np
import pandas as pd

from ..constants import (
    MIN_OBSERVATIONS,
    MSG_INSUFFICIENT,
    MSG_MIXED_FAILED,
    MSG_MIXED_OK,
    MSG_MIXED_UNAVAILABLE,
    MSG_OLS_FAILED,
    MSG_OLS_OK,
)
from ..core.capabilities import Capabilities, default_capabilities
from ..core.data_model import FitRequest, ModelResult, ModelTier, as_frame, coerce_numeric
from ..errors import (
    MixedEffectsUnavailableError,
    NumericCoercionError,
    OrdinaryFitError,
)

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class FitReport:
    result: ModelResult
    mixed: Optional[ModelResult] = None
    n_obs: int = 0


def fit_ols(x, y) -> Tuple[float, float]:
    """Least-squares ``(slope, intercept)`` of y on x."""
    x = np.asarray(x, dtype=float)
    y = np.asarray(y, dtype=float)
    if x.shape != y.shape:
        raise OrdinaryFitError("Diameter and Circumference lengths differ")
    if x.size < MIN_OBSERVATIONS:
        raise OrdinaryFitError(f"need at least {MIN_OBSERVATIONS} usable points, got {x.size}")
    if not (np.isfinite(x).all() and np.isfinite(y).all()):
        raise OrdinaryFitError("non-finite values in data")
    scale = max(float(np.abs(x).max()), 1.0)
    if np.ptp(x) <= np.finfo(float).eps * scale:
        raise OrdinaryFitError("Diameter has zero variance")
    try:
        coeffs = np.polyfit(x, y, deg=1)
    except (np.linalg.LinAlgError, ValueError) as exc:
        raise OrdinaryFitError(str(exc)) from exc
    slope = float(coeffs[0])
    intercept = float(coeffs[1])
    if not (np.isfinite(slope) and np.isfinite(intercept)):
        raise OrdinaryFitError("non-finite coefficients")
    return slope, intercept


def fit_fixed_effects(df: pd.DataFrame) -> ModelResult:
    try:
        numeric = coerce_numeric(df)
        slope, intercept = fit_ols(numeric["Diameter"], numeric["Circumference"])
    except (NumericCoercionError, OrdinaryFitError) as exc:
        logger.warning("Ordinary least-squares fit failed: %s", exc)
        return ModelResult.failure(MSG_OLS_FAILED.format(reason=exc))
    return ModelResult.success(MSG_OLS_OK, slope, intercept)


def fit_mixed_effects(df: pd.DataFrame, tier: ModelTier, capabilities: Capabilities) -> ModelResult:
    try:
        if not capabilities.mixed_effects_available:
            raise MixedEffectsUnavailableError(MSG_MIXED_UNAVAILABLE)
        slope, intercept = capabilities.mixed_effects.fit(df, tier)
        return ModelResult.success(MSG_MIXED_OK, slope, intercept)
    except MixedEffectsUnavailableError:
        return ModelResult.failure(MSG_MIXED_UNAVAILABLE)
    except Exception as exc:
        logger.warning("Mixed-effects engine raised %s: %s", type(exc).__name__, exc)
        return ModelResult.failure(MSG_MIXED_FAILED.format(reason=str(exc) or type(exc).__name__))


def run_fit(
    data,
    request: Optional[FitRequest] = None,
    capabilities: Optional[Capabilities] = None,
) -> FitReport:
    """Fit the circumference/diameter line and report every attempted model."""
    request = request or FitRequest()
    try:
        df = as_frame(data)
    except ValueError as exc:
        return FitReport(ModelResult.failure(MSG_OLS_FAILED.format(reason=exc)))
    if len(df) < MIN_OBSERVATIONS:
        return FitReport(ModelResult.failure(MSG_INSUFFICIENT), n_obs=len(df))

    mixed = None
    tier = request.effective_tier
    if tier.is_mixed:
        caps = capabilities if capabilities is not None else default_capabilities()
        mixed = fit_mixed_effects(df, tier, caps)
        logger.info("Mixed-effects attempt (tier %d): %s", int(tier), mixed.message)

    # The ordinary fit is authoritative whenever it succeeds.
    result = fit_fixed_effects(df)
    if result.ok:
        logger.info("π estimate %.6f from %d observations", result.slope, len(df))
    return FitReport(result, mixed, n_obs=len(df))


def fit_pi_model(
    data,
    request: Optional[FitRequest] = None,
    capabilities: Optional[Capabilities] = None,
) -> ModelResult:
    return run_fit(data, request, capabilities).result


__all__ = [
    "FitReport",
    "fit_ols",
    "fit_fixed_effects",
    "fit_mixed_effects",
    "run_fit",
    "fit_pi_model",
]
