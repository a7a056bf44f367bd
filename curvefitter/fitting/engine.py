"""Single entry point that turns a sample set into a complete fit result."""

from __future__ import annotations

from typing import Optional, Sequence

from ..models import FitResult, ModelFamily
from .constants import MIN_SAMPLES, SATURATION_SOLVERS
from .estimation import as_xy, estimate, estimate_saturation_least_squares
from .evaluation import score
from .selection import resolve_family


def fit_samples(
    samples: Sequence,
    family: ModelFamily | str = ModelFamily.AUTO,
    saturation_solver: str = "fixed",
) -> Optional[FitResult]:
    """Resolve, estimate, and score one sample set.

    Args:
        samples: Sequence of (x, y) pairs.
        family: Requested family; ``AUTO`` is resolved exactly once here.
        saturation_solver: ``"fixed"`` for the fixed-iteration estimator or
            ``"least_squares"`` for the opt-in SciPy refinement. Only applies
            when the resolved family is ``SATURATION``; auto-selection always
            scores the fixed-iteration estimate.

    Returns:
        FitResult | None: Resolved family, parameters, and R^2, or ``None``
        when fewer than two samples are given.

    Raises:
        ValueError: If ``saturation_solver`` is not recognised.
    """
    if saturation_solver not in SATURATION_SOLVERS:
        raise ValueError(
            f"Unknown saturation solver {saturation_solver!r}. "
            f"Expected one of {SATURATION_SOLVERS}."
        )
    x, _ = as_xy(samples)
    if len(x) < MIN_SAMPLES:
        return None

    resolved = resolve_family(samples, family)
    if resolved is ModelFamily.SATURATION and saturation_solver == "least_squares":
        params = estimate_saturation_least_squares(samples)
    else:
        params = estimate(samples, resolved)
    return FitResult(family=resolved, params=params, r2=score(samples, params, resolved))
