import numpy as np
import pandas as pd
import pytest

from pilite.analysis.fits import run_fit
from pilite.analysis.mixed import StatsmodelsMixedEngine
from pilite.core.capabilities import Capabilities, default_capabilities
from pilite.core.data_model import FitRequest, ModelTier
from pilite.errors import MixedEffectsFitError


def grouped_data():
    rng = np.random.default_rng(0)
    rows = []
    offsets = {'ann': -0.8, 'bob': 0.4, 'cat': 1.1, 'dan': -0.3, 'eve': 0.7, 'fay': -1.0}
    for name, offset in offsets.items():
        for d in np.linspace(1, 12, 8):
            rows.append((name, d, offset + np.pi * d + rng.normal(0, 0.05)))
    return pd.DataFrame(rows, columns=['Name', 'Diameter', 'Circumference'])


def test_detect_respects_disable_env(monkeypatch):
    monkeypatch.setenv('PILITE_DISABLE_MIXED', '1')
    caps = Capabilities.detect()
    assert not caps.mixed_effects_available


def test_default_capabilities_cached():
    assert default_capabilities() is default_capabilities()


def test_random_intercept_fixed_effects():
    pytest.importorskip('statsmodels')
    slope, intercept = StatsmodelsMixedEngine().fit(grouped_data(), ModelTier.RANDOM_INTERCEPT)
    assert abs(slope - np.pi) < 0.05
    assert abs(intercept) < 1.0


def test_mixed_attempt_reported_with_statsmodels():
    pytest.importorskip('statsmodels')
    engine = StatsmodelsMixedEngine()
    report = run_fit(grouped_data(), FitRequest(ModelTier.RANDOM_INTERCEPT), Capabilities(engine))
    assert report.mixed is not None
    assert report.result.ok
    assert report.result.message == 'linear model fitted'


def test_fixed_only_tier_is_rejected_by_engine():
    with pytest.raises(MixedEffectsFitError):
        StatsmodelsMixedEngine().fit(grouped_data(), ModelTier.FIXED_ONLY)


def test_random_slope_intercept_converges_after_retry():
    pytest.importorskip('statsmodels')
    engine = StatsmodelsMixedEngine()
    report = run_fit(grouped_data(), FitRequest(ModelTier.RANDOM_SLOPE_INTERCEPT), Capabilities(engine))
    assert report.mixed.ok, report.mixed.message
    assert report.mixed.message == 'mixed-effects model fitted'
    assert abs(report.mixed.slope - np.pi) < 0.05
    assert report.result.ok


@pytest.mark.parametrize('message, singular', [
    ('The MLE may be on the boundary of the parameter space.', True),
    ('Random effects covariance is singular', True),
    ('Maximum Likelihood optimization failed to converge. Check mle_retvals', False),
    ('Retrying MixedLM optimization with lbfgs', False),
    ('The Hessian matrix at the estimated parameter values is not positive definite.', False),
])
def test_only_boundary_warnings_reject_a_fit(message, singular):
    from pilite.analysis.mixed import _is_singular

    assert _is_singular(message) is singular
