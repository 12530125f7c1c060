"""Mixed-effects fitting backed by statsmodels ``MixedLM``.

statsmodels is an optional dependency (``pip install pilite[mixed]``); the
engine reports itself unavailable when it cannot be imported.
"""
from __future__ import annotations

import importlib.util
import logging
import warnings
from typing import Tuple

import numpy as np
import pandas as pd

from ..core.data_model import ModelTier, coerce_numeric
from ..errors import MixedEffectsFitError

logger = logging.getLogger(__name__)

FORMULA = "Circumference ~ Diameter"
RE_FORMULAS = {
    ModelTier.RANDOM_INTERCEPT: "~1",
    ModelTier.RANDOM_SLOPE_INTERCEPT: "~Diameter",
}
SINGULAR_MARKERS = ("boundary", "singular")


def _is_singular(message: str) -> bool:
    message = message.lower()
    return any(marker in message for marker in SINGULAR_MARKERS)


class StatsmodelsMixedEngine:
    name = "statsmodels"

    def available(self) -> bool:
        return importlib.util.find_spec("statsmodels") is not None

    def fit(self, frame: pd.DataFrame, tier) -> Tuple[float, float]:
        tier = ModelTier(tier)
        if tier not in RE_FORMULAS:
            raise MixedEffectsFitError(f"tier {int(tier)} has no random effects")
        import statsmodels.formula.api as smf
        from statsmodels.tools.sm_exceptions import ConvergenceWarning

        df = coerce_numeric(frame)
        df["Name"] = df["Name"].astype(str)
        try:
            with warnings.catch_warnings(record=True) as caught:
                # MixedLM warns before retrying with another optimizer, so
                # only the final state of the fit is judged.
                warnings.simplefilter("always", ConvergenceWarning)
                model = smf.mixedlm(
                    FORMULA, df, groups=df["Name"], re_formula=RE_FORMULAS[tier]
                )
                fitted = model.fit(reml=True)
        except Exception as exc:
            raise MixedEffectsFitError(str(exc) or type(exc).__name__) from exc
        if not getattr(fitted, "converged", True):
            raise MixedEffectsFitError("optimizer did not converge")
        for w in caught:
            text = str(w.message)
            if issubclass(w.category, ConvergenceWarning) and _is_singular(text):
                raise MixedEffectsFitError(text)
        slope = float(fitted.fe_params["Diameter"])
        intercept = float(fitted.fe_params["Intercept"])
        if not (np.isfinite(slope) and np.isfinite(intercept)):
            raise MixedEffectsFitError("non-finite fixed effects")
        logger.debug("MixedLM (%s) slope=%s intercept=%s", RE_FORMULAS[tier], slope, intercept)
        return slope, intercept
