"""
A Python package for fitting simple curves to 2D data points.

Fits linear, exponential, logarithmic, and saturation curves, or picks the
best of them by R^2, and renders the fitted curves over the data.

Modules:
    - models: Model families, parameter sets, and fit results.
    - fitting: The curve-fitting engine (estimation, scoring, selection, sampling).
    - datasets: The editable session of datasets and points.
    - data_processing: Loads datasets from CSV files.
    - analysis: Fits datasets and builds result tables.
    - equations: Formats equations and R^2 for display.
    - plotting: Renders fitted curves with matplotlib.
    - output: Writes CSV tables and standalone HTML pages.
"""

__version__ = "1.0.0"

from .analysis import (
    analyze_dataset,
    analyze_session,
    calculate_auto_scale,
    create_results_dataframe,
)
from .data_processing import build_session, extract_datasets, load_points_csv
from .datasets import Dataset, DatasetSession
from .equations import describe_fit, format_equation
from .fitting import (
    estimate,
    fit_samples,
    predict,
    sample_curve,
    score,
    select_best,
)
from .models import FitParameters, FitResult, ModelFamily, Sample
from .output import export_standalone_html, save_results_to_csv

__all__ = [
    # Model
    "FitParameters",
    "FitResult",
    "ModelFamily",
    "Sample",
    # Engine
    "estimate",
    "fit_samples",
    "predict",
    "sample_curve",
    "score",
    "select_best",
    # Session and data loading
    "Dataset",
    "DatasetSession",
    "build_session",
    "extract_datasets",
    "load_points_csv",
    # Analysis and output
    "analyze_dataset",
    "analyze_session",
    "calculate_auto_scale",
    "create_results_dataframe",
    "describe_fit",
    "format_equation",
    "export_standalone_html",
    "save_results_to_csv",
]
