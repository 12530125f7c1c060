"""Environment capabilities.

The mixed-effects engine is optional: a sandboxed deployment may not carry
statsmodels at all. The capability is detected once and passed around as a
``Capabilities`` value instead of being looked up at fit time.
"""
from __future__ import annotations

import functools
import logging
import os
from dataclasses import dataclass
from typing import Optional, Protocol, Tuple

import pandas as pd

from ..constants import DISABLE_MIXED_ENV

logger = logging.getLogger(__name__)


class MixedEffectsEngine(Protocol):
    name: str

    def available(self) -> bool:
        ...

    def fit(self, frame: pd.DataFrame, tier) -> Tuple[float, float]:
        """Return the fixed-effect ``(slope, intercept)``."""
        ...


@dataclass(frozen=True)
class Capabilities:
    mixed_effects: Optional[MixedEffectsEngine] = None

    @property
    def mixed_effects_available(self) -> bool:
        return self.mixed_effects is not None and self.mixed_effects.available()

    @classmethod
    def restricted(cls) -> "Capabilities":
        """Capabilities of a sandbox without the mixed-effects library."""
        return cls(None)

    @classmethod
    def detect(cls) -> "Capabilities":
        if os.environ.get(DISABLE_MIXED_ENV, "").strip() in ("1", "true", "yes"):
            logger.info("Mixed-effects fitting disabled via %s", DISABLE_MIXED_ENV)
            return cls.restricted()
        from ..analysis.mixed import StatsmodelsMixedEngine

        engine = StatsmodelsMixedEngine()
        if engine.available():
            logger.info("Mixed-effects engine available (%s)", engine.name)
            return cls(engine)
        logger.info("Mixed-effects engine not installed; fixed effects only")
        return cls.restricted()


@functools.lru_cache(maxsize=1)
def default_capabilities() -> Capabilities:
    """Process-wide capabilities, detected on first use."""
    return Capabilities.detect()
