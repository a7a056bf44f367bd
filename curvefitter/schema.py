"""Define standardized column names for result DataFrames."""

from __future__ import annotations

from dataclasses import dataclass


@dataclass(frozen=True)
class ResultColumns:
    """Container for standardized column labels.

    These column names are used in the result table built by
    ``curvefitter.analysis.create_results_dataframe`` and in the exported CSV.

    Attributes:
        dataset: Display name of the dataset.
        requested: Family chosen by the user; ``Optimal (Auto)`` when the
            selector decides.
        family: Concrete family actually fitted.
        a: First fitted parameter (slope, amplitude or plateau height).
        b: Second fitted parameter (intercept or rate).
        r2: Coefficient of determination of the fit. Can be negative.
        equation: Equation rendered to three decimals.
        n_points: Number of samples in the dataset.
        color: Hex color assigned to the dataset.
    """

    dataset: str = "Dataset"
    requested: str = "Fit Method"
    family: str = "Fitted Family"
    a: str = "a"
    b: str = "b"
    r2: str = "R2"
    equation: str = "Equation"
    n_points: str = "Data Points"
    color: str = "Color"


COLUMNS = ResultColumns()
