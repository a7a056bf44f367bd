import math

import numpy as np
import pytest

import curvefitter.fitting.sampling as sampling
import curvefitter.fitting.selection as selection
from curvefitter.fitting import sample_curve, sample_fit
from curvefitter.models import FitParameters, FitResult, ModelFamily


def test_sample_curve_spans_input_range(collinear_samples):
    curve = sample_curve(collinear_samples, ModelFamily.LINEAR)
    assert len(curve) == 101
    xs = np.array([p.x for p in curve])
    assert xs[0] == 0.0
    assert xs[-1] == pytest.approx(3.0)
    assert np.allclose(np.diff(xs), 3.0 / 100)
    assert all(p.y == pytest.approx(p.x) for p in curve)


def test_sample_curve_ignores_input_order():
    samples = [(4.0, 9.0), (-2.0, -3.0), (1.0, 3.0)]
    curve = sample_curve(samples, ModelFamily.LINEAR, n_steps=12)
    assert len(curve) == 13
    assert curve[0].x == -2.0
    assert curve[-1].x == pytest.approx(4.0)


def test_identical_x_gives_empty_curve():
    assert sample_curve([(5.0, 1.0), (5.0, 2.0)], ModelFamily.LINEAR) == []


def test_fewer_than_two_samples_gives_empty_curve():
    assert sample_curve([(1.0, 1.0)], ModelFamily.AUTO) == []
    assert sample_curve([], ModelFamily.LINEAR) == []


def test_non_finite_points_are_dropped():
    samples = [(-2.0, 1.0), (1.0, 0.0), (2.0, math.log(2.0)), (4.0, math.log(4.0))]
    curve = sample_curve(samples, ModelFamily.LOGARITHMIC, n_steps=60)
    xs = [p.x for p in curve]
    assert 0 < len(curve) < 61
    assert all(x > 0 for x in xs)
    assert xs == sorted(xs)
    assert all(math.isfinite(p.y) for p in curve)


def test_auto_is_resolved_and_estimated_once(monkeypatch, collinear_samples):
    calls = {"select": 0, "estimate": 0}
    real_estimate = sampling.estimate

    def _select(samples):
        calls["select"] += 1
        return ModelFamily.LINEAR

    def _estimate(samples, family):
        calls["estimate"] += 1
        return real_estimate(samples, family)

    monkeypatch.setattr(selection, "select_best", _select)
    monkeypatch.setattr(sampling, "estimate", _estimate)

    curve = sample_curve(collinear_samples, ModelFamily.AUTO)
    assert len(curve) == 101
    assert calls == {"select": 1, "estimate": 1}


@pytest.mark.parametrize("n_steps", [0, -3, 2.5, True, None, "ten", float("nan")])
def test_invalid_step_count_raises(collinear_samples, n_steps):
    with pytest.raises(ValueError):
        sample_curve(collinear_samples, ModelFamily.LINEAR, n_steps=n_steps)


def test_sample_fit_reuses_given_parameters(collinear_samples):
    fit = FitResult(ModelFamily.LINEAR, FitParameters(a=0.0, b=5.0), r2=0.0)
    curve = sample_fit(collinear_samples, fit, n_steps=4)
    assert [p.x for p in curve] == pytest.approx([0.0, 0.75, 1.5, 2.25, 3.0])
    assert all(p.y == 5.0 for p in curve)
