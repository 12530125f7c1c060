import numpy as np
import pytest

from pilite.core.data_model import ModelResult
from pilite.errors import DecodingError, EncodingError
from pilite.wire.codec import decode_result, encode_result


def test_success_roundtrip_is_exact():
    r = ModelResult.success('linear model fitted', 3.141592653589793, -1e-12)
    line = encode_result(r)
    assert line == 'TRUE|linear model fitted|3.141592653589793|-1e-12'
    assert decode_result(line) == r


def test_failure_uses_absent_marker():
    r = ModelResult.failure('Need at least 2 observations')
    assert encode_result(r) == 'FALSE|Need at least 2 observations|NA|NA'
    assert decode_result(encode_result(r)) == r


def test_pipe_in_message_is_replaced():
    r = ModelResult.failure('mixed-effects model failed: a|b')
    decoded = decode_result(encode_result(r))
    assert decoded.message == 'mixed-effects model failed: a/b'


@pytest.mark.parametrize('payload', [
    ['TRUE|ok|3.14|0.0'],
    ('TRUE|ok|3.14|0.0',),
    np.array(['TRUE|ok|3.14|0.0']),
    {'type': 'character', 'values': ['TRUE|ok|3.14|0.0']},
    b'TRUE|ok|3.14|0.0',
    'TRUE|ok|3.14|0.0\n',
])
def test_decode_unwraps_transport_containers(payload):
    assert decode_result(payload) == ModelResult.success('ok', 3.14, 0.0)


def test_ok_flag_is_exact_match():
    assert not decode_result('true|msg|NA|NA').ok
    assert not decode_result('FALSE|lm failed|3.1|0.2').ok


def test_unparseable_numbers_become_absent():
    r = decode_result('FALSE|boom|abc|')
    assert r.slope is None and r.intercept is None


@pytest.mark.parametrize('line', [
    'TRUE|too|few',
    'TRUE|a|b|1|2',
    '',
    'TRUE|no numbers|NA|NA',
    'TRUE|nan slope|nan|1.0',
])
def test_malformed_lines_raise(line):
    with pytest.raises(DecodingError):
        decode_result(line)


@pytest.mark.parametrize('payload', [[], ['a', 'b'], 42, {'x': 1}])
def test_bad_containers_raise(payload):
    with pytest.raises(DecodingError):
        decode_result(payload)


def test_encode_rejects_non_results():
    with pytest.raises(EncodingError):
        encode_result({'ok': True})
