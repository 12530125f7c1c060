"""Error kinds raised inside the estimator.

All of them are recoverable: public operations turn them into a failed
``ModelResult`` carrying the message.
"""
from __future__ import annotations


class PiLiteError(Exception):
    """Base class for estimator errors."""


class InsufficientDataError(PiLiteError):
    pass


class NumericCoercionError(PiLiteError, ValueError):
    pass


class OrdinaryFitError(PiLiteError):
    pass


class MixedEffectsUnavailableError(PiLiteError):
    pass


class MixedEffectsFitError(PiLiteError):
    pass


class EncodingError(PiLiteError, ValueError):
    pass


class DecodingError(PiLiteError, ValueError):
    pass


class SessionBusyError(PiLiteError, RuntimeError):
    """A request was submitted while the previous one is still running."""


__all__ = [
    "PiLiteError",
    "InsufficientDataError",
    "NumericCoercionError",
    "OrdinaryFitError",
    "MixedEffectsUnavailableError",
    "MixedEffectsFitError",
    "EncodingError",
    "DecodingError",
    "SessionBusyError",
]
