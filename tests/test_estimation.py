import math

import numpy as np
import pytest

from curvefitter.fitting.estimation import (
    HAVE_SCIPY,
    estimate,
    estimate_saturation_least_squares,
    sequential_sum,
)
from curvefitter.fitting.evaluation import score
from curvefitter.models import (
    CONCRETE_FAMILIES,
    DEFAULT_PARAMETERS,
    FitParameters,
    ModelFamily,
)


def test_linear_recovers_collinear_points(collinear_samples):
    params = estimate(collinear_samples, ModelFamily.LINEAR)
    assert params.a == pytest.approx(1.0)
    assert params.b == pytest.approx(0.0, abs=1e-12)
    assert score(collinear_samples, params, ModelFamily.LINEAR) == pytest.approx(1.0)


def test_linear_identical_x_is_non_finite():
    params = estimate([(5.0, 1.0), (5.0, 2.0)], ModelFamily.LINEAR)
    assert not math.isfinite(params.a)
    assert not math.isfinite(params.b)


def test_linear_accepts_numpy_array():
    arr = np.array([[0.0, 1.0], [1.0, 3.0], [2.0, 5.0]])
    params = estimate(arr, ModelFamily.LINEAR)
    assert params.a == pytest.approx(2.0)
    assert params.b == pytest.approx(1.0)


def test_exponential_recovers_generator(exponential_samples):
    params = estimate(exponential_samples, ModelFamily.EXPONENTIAL)
    assert abs(params.a - 2.0) < 1e-6
    assert abs(params.b - 0.5) < 1e-6
    r2 = score(exponential_samples, params, ModelFamily.EXPONENTIAL)
    assert r2 == pytest.approx(1.0)


def test_exponential_ignores_non_positive_y():
    samples = [(0.0, -1.0), (3.0, 0.0), (1.0, 2.0 * math.exp(0.5)), (2.0, 2.0 * math.exp(1.0))]
    params = estimate(samples, ModelFamily.EXPONENTIAL)
    assert params.a == pytest.approx(2.0)
    assert params.b == pytest.approx(0.5)


def test_logarithmic_keeps_slope_and_intercept_roles():
    x = np.arange(1, 7, dtype=float)
    samples = list(zip(x, 3.0 * np.log(x) + 1.0))
    params = estimate(samples, ModelFamily.LOGARITHMIC)
    assert params.a == pytest.approx(3.0)
    assert params.b == pytest.approx(1.0)


def test_logarithmic_ignores_non_positive_x():
    samples = [(-1.0, 10.0), (0.0, 10.0), (1.0, 1.0), (math.e, 3.0)]
    params = estimate(samples, ModelFamily.LOGARITHMIC)
    assert params.a == pytest.approx(2.0)
    assert params.b == pytest.approx(1.0)


@pytest.mark.parametrize(
    "samples, family",
    [
        ([], ModelFamily.LINEAR),
        ([(1.0, 2.0)], ModelFamily.SATURATION),
        ([(0.0, 1.0), (1.0, -2.0), (2.0, 0.0)], ModelFamily.EXPONENTIAL),
        ([(-1.0, 1.0), (0.0, 2.0), (3.0, 4.0)], ModelFamily.LOGARITHMIC),
    ],
)
def test_insufficient_input_returns_default(samples, family):
    assert estimate(samples, family) == DEFAULT_PARAMETERS


def test_auto_must_be_resolved_first(collinear_samples):
    with pytest.raises(ValueError, match="resolved"):
        estimate(collinear_samples, ModelFamily.AUTO)


def test_family_names_are_accepted(collinear_samples):
    assert estimate(collinear_samples, "linear") == estimate(
        collinear_samples, ModelFamily.LINEAR
    )


def test_saturation_holds_amplitude_fixed(saturation_samples):
    params = estimate(saturation_samples, ModelFamily.SATURATION)
    max_y = max(y for _, y in saturation_samples)
    assert params.a == max_y * 1.1


def test_saturation_fit_quality(saturation_samples):
    params = estimate(saturation_samples, ModelFamily.SATURATION)
    assert 0.2 < params.b < 0.4
    assert score(saturation_samples, params, ModelFamily.SATURATION) > 0.9


@pytest.mark.parametrize("family", CONCRETE_FAMILIES)
def test_estimate_is_deterministic(saturation_samples, family):
    first = estimate(saturation_samples, family)
    second = estimate(saturation_samples, family)
    assert first == second


def test_saturation_does_not_warn_on_overflow():
    samples = [(-800.0, 1.0), (0.0, 2.0), (800.0, 3.0)]
    with np.errstate(all="raise"):
        params = estimate(samples, ModelFamily.SATURATION)
    assert isinstance(params, FitParameters)


@pytest.mark.skipif(not HAVE_SCIPY, reason="scipy not installed")
def test_least_squares_saturation_refines_amplitude(saturation_samples):
    params = estimate_saturation_least_squares(saturation_samples)
    assert params.a == pytest.approx(10.0, rel=1e-4)
    assert params.b == pytest.approx(0.3, rel=1e-4)


def test_least_squares_saturation_falls_back_to_fixed_estimate():
    samples = [(1.0, 2.0)]
    assert estimate_saturation_least_squares(samples) == DEFAULT_PARAMETERS


def test_sums_accumulate_left_to_right():
    values = np.random.default_rng(7).normal(scale=1e6, size=257)
    running = 0.0
    for v in values:
        running += float(v)

    assert sequential_sum(values) == running
    assert sequential_sum(np.array([1e16, 1.0, -1e16])) == 0.0
    assert sequential_sum(np.empty(0)) == 0.0


def test_linear_fit_matches_running_sums():
    x = np.linspace(0.1, 9.7, 33)
    y = 0.3 * x ** 2 - x + 0.7
    sx = sy = sxy = sx2 = 0.0
    for xv, yv in zip(x.tolist(), y.tolist()):
        sx += xv
        sy += yv
        sxy += xv * yv
        sx2 += xv * xv
    n = len(x)
    a = (n * sxy - sx * sy) / (n * sx2 - sx * sx)
    b = (sy - a * sx) / n

    params = estimate(list(zip(x, y)), ModelFamily.LINEAR)
    assert (params.a, params.b) == (a, b)
