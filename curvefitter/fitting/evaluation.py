"""Evaluate fitted curves and score them against observed samples."""

from __future__ import annotations

from typing import Sequence, Union

import numpy as np

from ..models import FitParameters, ModelFamily
from .constants import MIN_SAMPLES
from .estimation import as_xy, sequential_sum

ArrayLike = Union[float, Sequence[float], np.ndarray]


def predict(
    x: ArrayLike, params: FitParameters, family: ModelFamily
) -> Union[float, np.ndarray]:
    """Evaluate a concrete family at ``x``.

    Args:
        x: Scalar or array of x positions.
        params: Parameters estimated for ``family``.
        family: Concrete model family.

    Returns:
        float | numpy.ndarray: Predicted y with the same shape as ``x``.
        Values outside a family's domain (``x <= 0`` for logarithmic) come back
        as ``nan``/``-inf`` and overflow comes back as ``inf``; nothing is
        raised.

    Raises:
        ValueError: If ``family`` is ``ModelFamily.AUTO``.
    """
    family = ModelFamily.parse(family)
    x_arr = np.asarray(x, dtype=float)
    a, b = params.a, params.b

    with np.errstate(all="ignore"):
        if family is ModelFamily.LINEAR:
            y = a * x_arr + b
        elif family is ModelFamily.EXPONENTIAL:
            y = a * np.exp(b * x_arr)
        elif family is ModelFamily.LOGARITHMIC:
            y = a * np.log(x_arr) + b
        elif family is ModelFamily.SATURATION:
            y = a * (1.0 - np.exp(-b * x_arr))
        else:
            raise ValueError("ModelFamily.AUTO must be resolved before prediction.")

    if np.ndim(y) == 0:
        return float(y)
    return y


def score(samples: Sequence, params: FitParameters, family: ModelFamily) -> float:
    """Return the coefficient of determination (R^2) of a fit.

    Samples whose prediction is non-finite are left out of both the residual
    and the total sum of squares; the mean is still taken over all samples.

    Args:
        samples: Sequence of (x, y) pairs.
        params: Parameters estimated for ``family``.
        family: Concrete model family.

    Returns:
        float: ``1 - ss_res / ss_tot``, or ``0.0`` when ``ss_tot`` is zero or
        fewer than two samples are given. Not clamped, so worse-than-mean fits
        score below zero.
    """
    x, y = as_xy(samples)
    if len(x) < MIN_SAMPLES:
        return 0.0

    y_mean = sequential_sum(y) / len(y)
    y_pred = predict(x, params, family)
    finite = np.isfinite(y_pred)

    with np.errstate(all="ignore"):
        ss_res = sequential_sum((y[finite] - y_pred[finite]) ** 2)
        ss_tot = sequential_sum((y[finite] - y_mean) ** 2)
        if ss_tot > 0:
            return float(1.0 - ss_res / ss_tot)
    return 0.0
