"""Engine boundary.

In the browser deployment the numeric engine runs in a sandbox that only
exchanges text and bytes with the host. ``engine_fit`` / ``engine_render``
are the engine-side entry points (primitive arguments in, encoded text or
image bytes out); ``EngineSession`` is the host side, which serialises the
dataset, awaits the engine in a worker thread and decodes the reply.

A session handles one request at a time. There is no retry and no
cancellation; a failed exchange comes back as a failed ``ModelResult``.
"""
from __future__ import annotations

import asyncio
import logging
from dataclasses import dataclass
from pathlib import Path
from typing import Optional, Union

from .analysis.fits import fit_pi_model
from .constants import (
    BRIDGE_HEIGHT,
    BRIDGE_WIDTH,
    MSG_OLS_FAILED,
    MSG_TRANSPORT_FAILED,
    SCRATCH_PLOT,
)
from .core.capabilities import Capabilities, default_capabilities
from .core.data_model import FitRequest, ModelResult, ModelTier, PlotFormat, PlotSpec
from .errors import DecodingError, PiLiteError, SessionBusyError
from .viz.render import render_plot
from .wire.codec import decode_result, encode_result
from .wire.dataset_csv import dataset_from_csv, dataset_to_csv

logger = logging.getLogger(__name__)


def engine_fit(
    csv_text: str,
    tier: int,
    allow_mixed_effects: bool = False,
    capabilities: Optional[Capabilities] = None,
) -> str:
    """Fit a CSV-encoded dataset and return the encoded result line."""
    try:
        df = dataset_from_csv(csv_text)
        request = FitRequest.from_ui(tier, allow_mixed_effects)
    except (DecodingError, ValueError) as exc:
        return encode_result(ModelResult.failure(MSG_OLS_FAILED.format(reason=exc)))
    return encode_result(fit_pi_model(df, request, capabilities))


def engine_render(
    csv_text: str,
    slope: Optional[float],
    intercept: Optional[float],
    fmt: Union[str, PlotFormat] = PlotFormat.RASTER,
    width: int = BRIDGE_WIDTH,
    height: int = BRIDGE_HEIGHT,
    scratch_dir: Union[str, Path] = ".",
) -> bytes:
    """Render into the session scratch file and hand back its bytes."""
    fmt = PlotFormat(fmt)
    path = Path(scratch_dir) / f"{SCRATCH_PLOT}.{fmt.extension}"
    spec = PlotSpec(dataset_from_csv(csv_text), slope, intercept, fmt, width, height)
    render_plot(spec, path)
    return path.read_bytes()


@dataclass(frozen=True)
class SessionReply:
    result: ModelResult
    image: Optional[bytes] = None
    format: PlotFormat = PlotFormat.RASTER


class EngineSession:
    def __init__(
        self,
        scratch_dir: Union[str, Path],
        capabilities: Optional[Capabilities] = None,
        allow_mixed_effects: Optional[bool] = None,
        width: int = BRIDGE_WIDTH,
        height: int = BRIDGE_HEIGHT,
    ):
        self.scratch_dir = Path(scratch_dir)
        self.scratch_dir.mkdir(parents=True, exist_ok=True)
        self.capabilities = capabilities if capabilities is not None else default_capabilities()
        if allow_mixed_effects is None:
            allow_mixed_effects = self.capabilities.mixed_effects_available
        self.allow_mixed_effects = allow_mixed_effects
        self.width = width
        self.height = height
        self._busy = False

    @property
    def busy(self) -> bool:
        return self._busy

    async def submit(
        self,
        data,
        tier: Union[int, ModelTier] = ModelTier.FIXED_ONLY,
        fmt: Union[str, PlotFormat] = PlotFormat.RASTER,
    ) -> SessionReply:
        if self._busy:
            raise SessionBusyError("a request is already in progress for this session")
        self._busy = True
        try:
            fmt = PlotFormat(fmt)
            try:
                csv_text = dataset_to_csv(data)
                payload = await asyncio.to_thread(
                    engine_fit, csv_text, int(tier), self.allow_mixed_effects, self.capabilities
                )
                result = decode_result(payload)
            except (PiLiteError, OSError, ValueError) as exc:
                logger.error("Engine fit exchange failed: %s", exc)
                return SessionReply(ModelResult.failure(MSG_TRANSPORT_FAILED.format(reason=exc)), None, fmt)
            if not result.ok:
                return SessionReply(result, None, fmt)

            image = None
            try:
                image = await asyncio.to_thread(
                    engine_render,
                    csv_text,
                    result.slope,
                    result.intercept,
                    fmt,
                    self.width,
                    self.height,
                    self.scratch_dir,
                )
            except (PiLiteError, OSError) as exc:
                logger.error("Plot failed to render: %s", exc)
            return SessionReply(result, image, fmt)
        finally:
            self._busy = False
