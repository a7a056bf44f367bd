"""
Dataset-level curve-fitting analysis.

This module connects the host-side session to the fitting engine:
- Each dataset is fitted with its requested family (``AUTO`` resolved by R^2).
- The fitted curve is sampled at evenly spaced x positions for plotting.
- Residuals are computed once here so plotting code only renders values.
- Results are collected into a tidy table for reporting and export.

Datasets with fewer than two points are reported with placeholder equation and
R^2 text and an empty fitted curve instead of being dropped.
"""

from __future__ import annotations

import logging
from typing import Dict, Iterable, List, Optional

import numpy as np
import pandas as pd

from .datasets import Dataset, DatasetSession
from .equations import describe_fit, family_label
from .fitting import DEFAULT_N_STEPS, fit_samples, predict, sample_fit
from .fitting.estimation import as_xy
from .models import Sample
from .schema import COLUMNS
from .units import PAGE_ORIENTATIONS, units_per_cm

logger = logging.getLogger(__name__)


def _points_frame(samples: List[Sample], fit) -> pd.DataFrame:
    x, y = as_xy(samples)
    if fit is None:
        residuals = np.full_like(y, np.nan)
    else:
        y_pred = np.asarray(predict(x, fit.params, fit.family), dtype=float)
        with np.errstate(all="ignore"):
            residuals = y - y_pred
        residuals[~np.isfinite(residuals)] = np.nan
    return pd.DataFrame({"x": x, "y": y, "residual": residuals})


def analyze_dataset(
    dataset: Dataset,
    n_steps: int = DEFAULT_N_STEPS,
    saturation_solver: str = "fixed",
) -> Dict:
    """Fit one dataset and assemble its plotting/reporting payload.

    Args:
        dataset (Dataset): Dataset to fit.
        n_steps (int, optional): Sampling intervals for the fitted curve.
            Defaults to ``100``.
        saturation_solver (str, optional): ``"fixed"`` or ``"least_squares"``.

    Returns:
        dict: Payload with keys ``name``, ``color``, ``visible``,
        ``requested_family``, ``family`` (``None`` when unfitted), ``fit``,
        ``a``, ``b``, ``r2``, ``equation``, ``r2_text``, ``n_points``, ``data``
        (``x``, ``y``, ``residual``) and ``fitted_curve`` (``x``, ``y``).
    """
    samples = list(dataset.samples)
    fit = fit_samples(samples, dataset.fit_family, saturation_solver=saturation_solver)
    equation, r2_text = describe_fit(fit)

    if fit is None:
        logger.info(
            "%s has %d point(s); at least 2 are needed for a fit",
            dataset.name,
            len(samples),
        )
        curve = pd.DataFrame(columns=["x", "y"], dtype=float)
    else:
        curve_points = sample_fit(samples, fit, n_steps=n_steps)
        curve = pd.DataFrame(curve_points, columns=["x", "y"], dtype=float)
        if curve.empty:
            logger.warning(
                "%s: %s fit produced no finite curve points",
                dataset.name,
                fit.family.value,
            )

    return {
        "dataset_id": dataset.id,
        "name": dataset.name,
        "color": dataset.color,
        "visible": dataset.visible,
        "requested_family": dataset.fit_family,
        "family": fit.family if fit is not None else None,
        "fit": fit,
        "a": fit.params.a if fit is not None else np.nan,
        "b": fit.params.b if fit is not None else np.nan,
        "r2": fit.r2 if fit is not None else np.nan,
        "equation": equation,
        "r2_text": r2_text,
        "n_points": len(samples),
        "data": _points_frame(samples, fit),
        "fitted_curve": curve,
    }


def analyze_session(
    session: DatasetSession,
    n_steps: int = DEFAULT_N_STEPS,
    saturation_solver: str = "fixed",
) -> List[Dict]:
    """Analyze every dataset of a session, in session order."""
    return [
        analyze_dataset(ds, n_steps=n_steps, saturation_solver=saturation_solver)
        for ds in session
    ]


def create_results_dataframe(results: Iterable[Dict]) -> pd.DataFrame:
    rows = []
    for res in results:
        family = res.get("family")
        rows.append(
            {
                COLUMNS.dataset: res.get("name"),
                COLUMNS.requested: family_label(res["requested_family"])
                if res.get("requested_family") is not None
                else "",
                COLUMNS.family: family_label(family) if family is not None else "",
                COLUMNS.a: res.get("a", np.nan),
                COLUMNS.b: res.get("b", np.nan),
                COLUMNS.r2: res.get("r2", np.nan),
                COLUMNS.equation: res.get("equation", ""),
                COLUMNS.n_points: int(res.get("n_points", 0)),
                COLUMNS.color: res.get("color", ""),
            }
        )
    return pd.DataFrame(
        rows,
        columns=[
            COLUMNS.dataset,
            COLUMNS.requested,
            COLUMNS.family,
            COLUMNS.a,
            COLUMNS.b,
            COLUMNS.r2,
            COLUMNS.equation,
            COLUMNS.n_points,
            COLUMNS.color,
        ],
    )


def calculate_auto_scale(samples: Iterable[Sample]) -> Optional[Dict[str, tuple]]:
    """Suggest data units per cm for drawing every sample on A4 paper.

    Args:
        samples: All samples of all datasets, visible or not.

    Returns:
        dict[str, tuple[float, float]] | None: ``(x_units_per_cm,
        y_units_per_cm)`` for ``"landscape"`` and ``"portrait"``, or ``None``
        when there are no samples.
    """
    x, y = as_xy(list(samples))
    if len(x) == 0:
        return None
    x_range = float(np.max(x) - np.min(x))
    y_range = float(np.max(y) - np.min(y))
    return {
        orientation: (units_per_cm(x_range, width), units_per_cm(y_range, height))
        for orientation, (width, height) in PAGE_ORIENTATIONS.items()
    }


def format_scale(scale: Optional[tuple]) -> str:
    if scale is None:
        return "--"
    return f"X: {scale[0]:.2f} units/cm | Y: {scale[1]:.2f} units/cm"


def print_fit_summary(results_df: pd.DataFrame):
    print("\nFit summary by dataset:")
    if results_df.empty:
        print("  (no data)")
        return

    for _, row in results_df.iterrows():
        family = row[COLUMNS.family] or "no fit"
        print(
            f" - {row[COLUMNS.dataset]} ({row[COLUMNS.n_points]} points, "
            f"{row[COLUMNS.requested]} -> {family}): {row[COLUMNS.equation]}"
        )
        if pd.notna(row[COLUMNS.r2]):
            print(f"     R2 = {row[COLUMNS.r2]:.3f}")
