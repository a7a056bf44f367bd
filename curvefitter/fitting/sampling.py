"""Produce dense, evenly spaced point sequences for drawing fitted curves."""

from __future__ import annotations

from typing import List, Sequence

import numpy as np

from ..models import FitParameters, FitResult, ModelFamily, Sample
from .constants import DEFAULT_N_STEPS, MIN_SAMPLES
from .estimation import as_xy, estimate
from .evaluation import predict
from .selection import resolve_family


def _check_steps(n_steps: int) -> int:
    message = f"n_steps must be a positive integer, got {n_steps!r}"
    if isinstance(n_steps, bool):
        raise ValueError(message)
    try:
        as_int = int(n_steps)
    except (TypeError, ValueError, OverflowError):
        raise ValueError(message) from None
    if as_int != n_steps or as_int < 1:
        raise ValueError(message)
    return as_int


def _sample_between(
    x_min: float,
    x_max: float,
    params: FitParameters,
    family: ModelFamily,
    n_steps: int,
) -> List[Sample]:
    step = (x_max - x_min) / n_steps
    xs = x_min + np.arange(n_steps + 1) * step
    ys = predict(xs, params, family)
    keep = np.isfinite(ys)
    return [Sample(float(xv), float(yv)) for xv, yv in zip(xs[keep], ys[keep])]


def sample_curve(
    samples: Sequence,
    family: ModelFamily | str,
    n_steps: int = DEFAULT_N_STEPS,
) -> List[Sample]:
    """Sample the fitted curve of ``family`` across the input x-range.

    ``AUTO`` is resolved once and the parameters are estimated once per call;
    every sampled point reuses them.

    Args:
        samples: Sequence of (x, y) pairs.
        family: Model family, possibly ``ModelFamily.AUTO``.
        n_steps: Number of equal intervals between ``min(x)`` and ``max(x)``;
            up to ``n_steps + 1`` points are produced.

    Returns:
        list[Sample]: Points ordered by x, starting at ``min(x)``. Points with a
        non-finite prediction are dropped. Empty when fewer than two samples
        are given.

    Raises:
        ValueError: If ``n_steps`` is not a positive integer.
    """
    n_steps = _check_steps(n_steps)
    x, _ = as_xy(samples)
    if len(x) < MIN_SAMPLES:
        return []

    resolved = resolve_family(samples, family)
    params = estimate(samples, resolved)
    return _sample_between(
        float(np.min(x)), float(np.max(x)), params, resolved, n_steps
    )


def sample_fit(
    samples: Sequence, fit: FitResult, n_steps: int = DEFAULT_N_STEPS
) -> List[Sample]:
    """Sample an existing fit across the x-range of ``samples``.

    Same grid as ``sample_curve`` but nothing is re-estimated, so the curve
    matches the parameters the caller already displays.
    """
    n_steps = _check_steps(n_steps)
    x, _ = as_xy(samples)
    if len(x) < MIN_SAMPLES:
        return []
    return _sample_between(
        float(np.min(x)), float(np.max(x)), fit.params, fit.family, n_steps
    )
