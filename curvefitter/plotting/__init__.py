"""
Figure rendering for fitted datasets.

All plotting functions accept precomputed analysis payloads and do not perform
any fitting.

Modules:
    fit_plots:
        Overlay of every visible dataset with its fitted curve, and a
        per-dataset two-panel figure (fit and residuals).

    style:
        Shared rcParams, typography, axis cleanup, and the PNG/PDF/SVG
        bundle writer.
"""

from .fit_plots import plot_dataset_fits, plot_fitted_curves
from .style import apply_rcparams as setup_plot_style

__all__ = ["plot_fitted_curves", "plot_dataset_fits", "setup_plot_style"]
