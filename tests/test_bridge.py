import asyncio
import threading

import pytest

import pilite.bridge as bridge
from pilite.bridge import EngineSession, engine_fit, engine_render
from pilite.core.capabilities import Capabilities
from pilite.core.data_model import PlotFormat
from pilite.errors import SessionBusyError
from pilite.wire.dataset_csv import dataset_to_csv

PNG_MAGIC = b'\x89PNG\r\n\x1a\n'


def test_engine_fit_returns_encoded_line(example_df):
    line = engine_fit(dataset_to_csv(example_df), 1)
    assert line.startswith('TRUE|linear model fitted|')
    slope = float(line.split('|')[2])
    assert abs(slope - 3.14) < 1e-6


def test_engine_fit_reports_bad_input():
    assert engine_fit('', 1).startswith('FALSE|')
    assert engine_fit('Name,Diameter,Circumference\n"a",1,3', 9).startswith('FALSE|linear model failed')
    assert engine_fit('Name,Diameter,Circumference\n"a",1,3', 1) == 'FALSE|Need at least 2 observations|NA|NA'


def test_engine_render_overwrites_scratch_file(tmp_path, example_df):
    csv_text = dataset_to_csv(example_df)
    first = engine_render(csv_text, 3.14, 0.0, 'png', scratch_dir=tmp_path)
    second = engine_render(csv_text, 3.0, 1.0, 'png', scratch_dir=tmp_path)
    assert first.startswith(PNG_MAGIC)
    assert (tmp_path / 'plot.png').read_bytes() == second
    assert sorted(p.name for p in tmp_path.iterdir()) == ['plot.png']


def test_session_fit_and_render(tmp_path, example_df):
    session = EngineSession(tmp_path, Capabilities.restricted())
    reply = asyncio.run(session.submit(example_df, 1, 'svg'))
    assert reply.result.ok
    assert abs(reply.result.slope - 3.14) < 1e-6
    assert reply.format is PlotFormat.VECTOR
    assert b'<svg' in reply.image
    assert not session.busy


def test_session_failed_fit_has_no_image(tmp_path):
    session = EngineSession(tmp_path, Capabilities.restricted())
    reply = asyncio.run(session.submit([('A', 1, 3.1)], 2))
    assert reply.result.message == 'Need at least 2 observations'
    assert reply.image is None


def test_session_reports_transport_failure(tmp_path, example_df, monkeypatch):
    monkeypatch.setattr(bridge, 'engine_fit', lambda *args: ['TRUE|broken'])
    session = EngineSession(tmp_path, Capabilities.restricted())
    reply = asyncio.run(session.submit(example_df))
    assert not reply.result.ok
    assert reply.result.message.startswith('Cannot compute model: ')
    assert not session.busy


def test_second_request_while_busy_is_refused(tmp_path, example_df):
    gate = threading.Event()

    class SlowEngine:
        name = 'slow'

        def available(self):
            return True

        def fit(self, frame, tier):
            gate.wait(5)
            return 3.0, 0.0

    session = EngineSession(tmp_path, Capabilities(SlowEngine()))
    assert session.allow_mixed_effects

    async def scenario():
        first = asyncio.create_task(session.submit(example_df, 2))
        await asyncio.sleep(0)
        assert session.busy
        with pytest.raises(SessionBusyError):
            await session.submit(example_df, 2)
        gate.set()
        return await first

    reply = asyncio.run(scenario())
    assert reply.result.ok
    assert reply.result.message == 'linear model fitted'
    assert not session.busy
