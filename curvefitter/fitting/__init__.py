"""
Curve-fitting engine.

This subpackage turns a sequence of (x, y) samples into fitted two-parameter
curves. All functions are pure: they take explicit sample sequences, keep no
state between calls, and perform no I/O.

Modules:
    estimation:
        Closed-form least squares for linear, exponential and logarithmic
        families; fixed-iteration rate refinement for saturation. Includes an
        opt-in SciPy least-squares saturation solver.

    evaluation:
        Prediction for any concrete family and the R^2 goodness-of-fit score.

    selection:
        Auto-selection of the best-scoring family and ``AUTO`` resolution.

    sampling:
        Dense, evenly spaced curve samples for plotting.

    engine:
        ``fit_samples``, which resolves, estimates and scores in one call.

Design Principle:
    Bad input never raises here. Too few usable points give the default
    parameters ``(1, 0)`` and arithmetic edge cases flow downstream as
    non-finite values, which the evaluator and sampler filter out.
"""

from .constants import DEFAULT_N_STEPS
from .engine import fit_samples
from .estimation import estimate, estimate_saturation_least_squares
from .evaluation import predict, score
from .sampling import sample_curve, sample_fit
from .selection import resolve_family, select_best

__all__ = [
    "DEFAULT_N_STEPS",
    "fit_samples",
    "estimate",
    "estimate_saturation_least_squares",
    "predict",
    "score",
    "sample_curve",
    "sample_fit",
    "resolve_family",
    "select_best",
]
