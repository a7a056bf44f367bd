"""
Handles CSV parsing and dataset extraction.
"""

# Two layouts are accepted: a long table with plain ``x``/``y`` columns (one
# dataset) and a wide table with ``<Name>: x`` / ``<Name>: y`` column pairs
# (one dataset per prefix, in column order).

import logging

import numpy as np
import pandas as pd

from .datasets import DatasetSession
from .models import ModelFamily, Sample

logger = logging.getLogger(__name__)

DEFAULT_DATASET_NAME = "Dataset 1"


def _clean_xy(frame, x_col, y_col):
    """Coerce two columns to numeric and drop incomplete or non-finite rows."""

    x = pd.to_numeric(frame[x_col], errors="coerce")
    y = pd.to_numeric(frame[y_col], errors="coerce")
    clean = pd.DataFrame({"x": x, "y": y})
    finite = np.isfinite(clean["x"]) & np.isfinite(clean["y"])
    return clean[finite].reset_index(drop=True)


def extract_datasets(df, default_name=DEFAULT_DATASET_NAME):
    """Extract individual datasets from a loaded points table.

    Args:
        df: :class:`pandas.DataFrame` loaded from the CSV.
        default_name: Name used for the single dataset of a long-layout table.

    Returns:
        dict[str, pandas.DataFrame]: Mapping of dataset name to a tidy frame
        with float ``x`` and ``y`` columns, in the order the datasets appear.

    Raises:
        ValueError: If the table holds neither layout.
    """

    lower = {str(col).strip().lower(): col for col in df.columns}
    if "x" in lower and "y" in lower:
        frame = _clean_xy(df, lower["x"], lower["y"])
        dropped = len(df) - len(frame)
        if dropped:
            logger.warning(
                "Dropped %d incomplete row(s) from %s", dropped, default_name
            )
        return {default_name: frame}

    prefixes = []
    for col in df.columns:
        if ":" not in str(col):
            continue
        prefix = str(col).split(":", 1)[0].strip()
        if prefix not in prefixes:
            prefixes.append(prefix)

    datasets = {}
    for prefix in prefixes:
        cols = {
            str(col).split(":", 1)[1].strip().lower(): col
            for col in df.columns
            if ":" in str(col) and str(col).split(":", 1)[0].strip() == prefix
        }
        if "x" not in cols:
            logger.warning("%s has no x column; skipping", prefix)
            continue
        if "y" not in cols or pd.to_numeric(df[cols["y"]], errors="coerce").isna().all():
            logger.warning(
                "%s contains an x axis but no paired y values; skipping", prefix
            )
            continue

        frame = _clean_xy(df, cols["x"], cols["y"])
        if frame.empty:
            logger.warning("%s has no complete (x, y) rows; skipping", prefix)
            continue
        datasets[prefix] = frame

    if not datasets:
        raise ValueError(
            "No datasets found: expected 'x'/'y' columns or '<Name>: x'/'<Name>: y' pairs."
        )
    return datasets


def frame_to_samples(frame):
    """Convert a tidy ``x``/``y`` frame into a list of samples."""

    return [
        Sample(float(x), float(y))
        for x, y in zip(frame["x"].to_numpy(), frame["y"].to_numpy())
    ]


def build_session(frames, fit_family=ModelFamily.AUTO):
    """Create a session with one dataset per extracted frame.

    Args:
        frames: Mapping of dataset name to tidy ``x``/``y`` frame, as returned
            by :func:`extract_datasets`.
        fit_family: Fit family assigned to every dataset.

    Returns:
        DatasetSession: Session whose current dataset is the first one loaded.
    """

    session = DatasetSession()
    for name, frame in frames.items():
        dataset = session.create_dataset(name=name, fit_family=fit_family)
        dataset.samples.extend(frame_to_samples(frame))
        logger.info("Loaded %s with %d point(s)", name, len(dataset.samples))
    if session.datasets:
        session.select(session.datasets[0].id)
    return session


def load_points_csv(filepath):
    """
    Load data points from a CSV file.

    Args:
        filepath (str): Path to the CSV file.

    Returns:
        pd.DataFrame: Loaded DataFrame.
    """
    return pd.read_csv(filepath)
