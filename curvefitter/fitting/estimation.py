"""Estimate two-parameter fits for each concrete model family.

Linear fits use the closed-form least-squares solution. Exponential and
logarithmic fits are linearised (``ln y`` against ``x``, ``y`` against
``ln x``) and reuse the linear solution. Saturation has no closed form and uses
a fixed, damped iteration that refines the rate only.

Degrade-gracefully policy:
    Too few usable samples never raise; the default parameter set
    ``a = 1, b = 0`` is returned instead. A zero linear denominator (all x
    identical) is not special-cased and yields non-finite parameters that the
    evaluator and sampler filter out downstream.
"""

from __future__ import annotations

import importlib.util
import warnings
from typing import Sequence, Tuple

import numpy as np

from ..models import DEFAULT_PARAMETERS, FitParameters, ModelFamily
from .constants import (
    MIN_SAMPLES,
    SATURATION_A_SCALE,
    SATURATION_B_INIT,
    SATURATION_DAMPING,
    SATURATION_ITERATIONS,
)

HAVE_SCIPY = importlib.util.find_spec("scipy") is not None
if HAVE_SCIPY:
    from scipy.optimize import OptimizeWarning, curve_fit


def as_xy(samples: Sequence) -> Tuple[np.ndarray, np.ndarray]:
    """Split a sequence of (x, y) pairs into two float arrays.

    Args:
        samples: Sequence of pairs, ``Sample`` tuples, or an ``(n, 2)`` array.

    Returns:
        tuple[numpy.ndarray, numpy.ndarray]: ``x`` and ``y`` arrays of equal
        length (both empty when ``samples`` is empty).
    """
    arr = np.asarray(samples, dtype=float)
    if arr.size == 0:
        return np.empty(0, dtype=float), np.empty(0, dtype=float)
    arr = arr.reshape(-1, 2)
    return arr[:, 0], arr[:, 1]


def sequential_sum(values: np.ndarray) -> np.float64:
    """Sum ``values`` strictly left to right.

    ``np.sum`` uses pairwise summation, whose rounding depends on array length.
    A running ``cumsum`` accumulates in input order instead. The result stays
    a numpy scalar so later division follows ``np.errstate``.
    """
    values = np.asarray(values, dtype=float)
    if values.size == 0:
        return np.float64(0.0)
    return np.cumsum(values)[-1]


def _fit_linear(x: np.ndarray, y: np.ndarray) -> FitParameters:
    n = len(x)
    sum_x = sequential_sum(x)
    sum_y = sequential_sum(y)
    sum_xy = sequential_sum(x * y)
    sum_x2 = sequential_sum(x * x)
    with np.errstate(divide="ignore", invalid="ignore", over="ignore"):
        a = (n * sum_xy - sum_x * sum_y) / (n * sum_x2 - sum_x * sum_x)
        b = (sum_y - a * sum_x) / n
    return FitParameters(a=float(a), b=float(b))


def _fit_exponential(x: np.ndarray, y: np.ndarray) -> FitParameters:
    positive = y > 0
    if np.count_nonzero(positive) < MIN_SAMPLES:
        return DEFAULT_PARAMETERS
    line = _fit_linear(x[positive], np.log(y[positive]))
    with np.errstate(over="ignore", invalid="ignore"):
        a = np.exp(line.b)
    return FitParameters(a=float(a), b=line.a)


def _fit_logarithmic(x: np.ndarray, y: np.ndarray) -> FitParameters:
    positive = x > 0
    if np.count_nonzero(positive) < MIN_SAMPLES:
        return DEFAULT_PARAMETERS
    line = _fit_linear(np.log(x[positive]), y[positive])
    # Slope and intercept keep their roles here, unlike the exponential case.
    return FitParameters(a=line.a, b=line.b)


def _fit_saturation(x: np.ndarray, y: np.ndarray) -> FitParameters:
    a = float(np.max(y)) * SATURATION_A_SCALE
    b = SATURATION_B_INIT
    with np.errstate(all="ignore"):
        # Fixed iteration count and a held constant: output must not depend on
        # a convergence criterion.
        for _ in range(SATURATION_ITERATIONS):
            decay = np.exp(-b * x)
            pred = a * (1.0 - decay)
            num = sequential_sum(x * (y - pred) * decay)
            den = sequential_sum(x * x * decay * decay)
            if den != 0:
                b = float(b + num / den * SATURATION_DAMPING)
    return FitParameters(a=a, b=float(b))


_ESTIMATORS = {
    ModelFamily.LINEAR: _fit_linear,
    ModelFamily.EXPONENTIAL: _fit_exponential,
    ModelFamily.LOGARITHMIC: _fit_logarithmic,
    ModelFamily.SATURATION: _fit_saturation,
}


def estimate(samples: Sequence, family: ModelFamily) -> FitParameters:
    """Estimate best-fit parameters of one concrete family.

    Args:
        samples: Sequence of (x, y) pairs with finite values.
        family: Concrete model family. ``ModelFamily.AUTO`` must be resolved
            first.

    Returns:
        FitParameters: Best-fit ``a`` and ``b``. The default ``(1, 0)`` is
        returned when fewer than two samples are usable for ``family``.

    Raises:
        ValueError: If ``family`` is ``ModelFamily.AUTO``.

    Note:
        The result is a pure function of ``samples`` and ``family``; repeated
        calls return identical values.
    """
    family = ModelFamily.parse(family)
    if not family.is_concrete:
        raise ValueError("ModelFamily.AUTO must be resolved before estimation.")
    x, y = as_xy(samples)
    if len(x) < MIN_SAMPLES:
        return DEFAULT_PARAMETERS
    return _ESTIMATORS[family](x, y)


def _saturation_curve(x, a, b):
    return a * (1.0 - np.exp(-b * x))


def estimate_saturation_least_squares(samples: Sequence) -> FitParameters:
    """Refine both saturation parameters with nonlinear least squares.

    This is an opt-in alternative to the fixed-iteration estimator, which
    never updates ``a``. It starts from the fixed-iteration estimate and hands
    it to ``scipy.optimize.curve_fit``.

    Args:
        samples: Sequence of (x, y) pairs with finite values.

    Returns:
        FitParameters: Refined ``a`` and ``b``. The fixed-iteration estimate is
        returned unchanged when SciPy is unavailable, the seed is non-finite,
        or the solver does not converge.
    """
    seed = estimate(samples, ModelFamily.SATURATION)
    x, y = as_xy(samples)
    if not HAVE_SCIPY or len(x) < MIN_SAMPLES:
        return seed
    if not (np.isfinite(seed.a) and np.isfinite(seed.b)):
        return seed

    try:
        with warnings.catch_warnings():
            warnings.simplefilter("ignore", OptimizeWarning)
            with np.errstate(all="ignore"):
                popt, _ = curve_fit(
                    _saturation_curve, x, y, p0=[seed.a, seed.b], maxfev=5000
                )
    except (RuntimeError, ValueError):
        return seed

    a, b = float(popt[0]), float(popt[1])
    if not (np.isfinite(a) and np.isfinite(b)):
        return seed
    return FitParameters(a=a, b=b)
