"""Result wire format.

A ``ModelResult`` crosses the engine boundary as one text line::

    TRUE|linear model fitted|3.14159|0.0

Fields are ok flag, message, slope, intercept. ``|`` inside the message is
replaced by ``/`` before encoding, so that part of the round trip is lossy.
Absent coefficients are written as ``NA``.
"""
from __future__ import annotations

import logging
import math
from typing import Any, Mapping, Optional

import numpy as np

from ..constants import (
    ABSENT_MARKER,
    FALSE_TOKEN,
    FIELD_SEPARATOR,
    SEPARATOR_REPLACEMENT,
    TRUE_TOKEN,
)
from ..core.data_model import ModelResult
from ..errors import DecodingError, EncodingError

logger = logging.getLogger(__name__)

N_FIELDS = 4


def escape_message(message: str) -> str:
    return message.replace(FIELD_SEPARATOR, SEPARATOR_REPLACEMENT)


def _format_number(value: Optional[float]) -> str:
    if value is None:
        return ABSENT_MARKER
    value = float(value)
    if not math.isfinite(value):
        return ABSENT_MARKER
    return repr(value)


def encode_result(result: ModelResult) -> str:
    if not isinstance(result, ModelResult):
        raise EncodingError(f"expected ModelResult, got {type(result).__name__}")
    if not isinstance(result.message, str):
        raise EncodingError("message must be a string")
    try:
        fields = [
            TRUE_TOKEN if result.ok else FALSE_TOKEN,
            escape_message(result.message),
            _format_number(result.slope),
            _format_number(result.intercept),
        ]
    except (TypeError, ValueError) as exc:
        raise EncodingError(str(exc)) from exc
    return FIELD_SEPARATOR.join(fields)


def unwrap_payload(payload: Any) -> str:
    """Reduce a transport payload to the encoded line.

    Bridges hand back the line as bytes, as a one-element list / array, or
    as a mapping with a ``values`` list.
    """
    if isinstance(payload, str):
        return payload
    if isinstance(payload, (bytes, bytearray)):
        try:
            return bytes(payload).decode("utf-8")
        except UnicodeDecodeError as exc:
            raise DecodingError(f"payload is not UTF-8: {exc}") from exc
    if isinstance(payload, Mapping):
        if "values" not in payload:
            raise DecodingError("payload mapping has no 'values'")
        return unwrap_payload(payload["values"])
    if isinstance(payload, np.ndarray):
        payload = payload.tolist()
    if isinstance(payload, (list, tuple)):
        if len(payload) != 1:
            raise DecodingError(f"expected a single encoded line, got {len(payload)} items")
        return unwrap_payload(payload[0])
    raise DecodingError(f"unsupported payload type {type(payload).__name__}")


def _parse_number(text: str) -> Optional[float]:
    text = text.strip()
    if not text or text == ABSENT_MARKER:
        return None
    try:
        value = float(text)
    except ValueError:
        logger.debug("Unparseable numeric field %r treated as absent", text)
        return None
    return value if math.isfinite(value) else None


def decode_result(payload: Any) -> ModelResult:
    line = unwrap_payload(payload).strip("\r\n")
    fields = line.split(FIELD_SEPARATOR)
    if len(fields) != N_FIELDS:
        raise DecodingError(f"expected {N_FIELDS} fields, got {len(fields)}")
    ok_text, message, slope_text, intercept_text = fields
    slope = _parse_number(slope_text)
    intercept = _parse_number(intercept_text)
    if ok_text == TRUE_TOKEN:
        if slope is None or intercept is None:
            raise DecodingError("successful result without slope and intercept")
        return ModelResult.success(message, slope, intercept)
    if slope is not None or intercept is not None:
        logger.debug("Dropping coefficients from failed result %r", message)
    return ModelResult.failure(message)


__all__ = ["encode_result", "decode_result", "unwrap_payload", "escape_message"]
