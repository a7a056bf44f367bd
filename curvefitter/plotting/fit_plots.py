"""Render scatter plots of each dataset with its fitted curve overlaid.

Plotting receives finished analysis payloads from
``curvefitter.analysis.analyze_dataset`` and only draws them; no fitting or
residual computation happens here.
"""

from __future__ import annotations

import os
from typing import Dict, List

import matplotlib.pyplot as plt
import pandas as pd

from .style import (
    LINE_WIDTHS,
    MARKER_SIZES,
    FONT_SIZES,
    STYLE,
    apply_rcparams,
    clean_axis,
    color_or_fallback,
    sanitize_filename,
    save_figure_bundle,
    set_axis_labels,
)

REQUIRED_KEYS = {"name", "data", "fitted_curve"}


def _validate_results(results: List[Dict]) -> None:
    if not results:
        raise ValueError("results list is empty; nothing to plot")
    for idx, result in enumerate(results):
        missing = REQUIRED_KEYS - set(result.keys())
        if missing:
            raise KeyError(
                f"Result entry {idx} missing required keys: {missing}. "
                f"Expected keys: {REQUIRED_KEYS}"
            )


def _draw_dataset(ax, res: Dict, *, label_equation: bool) -> None:
    color = color_or_fallback(res.get("color"))
    data: pd.DataFrame = res["data"]
    curve: pd.DataFrame = res["fitted_curve"]

    if not data.empty:
        ax.scatter(
            data["x"],
            data["y"],
            s=MARKER_SIZES["points"],
            color=color,
            zorder=3,
            label=f"{res['name']} (points)",
        )
    if not curve.empty:
        label = f"{res['name']} (fit)"
        if label_equation and res.get("equation"):
            label = f"{label}: {res['equation']}"
        ax.plot(
            curve["x"],
            curve["y"],
            color=color,
            linewidth=LINE_WIDTHS["fit"],
            zorder=2,
            label=label,
        )


def plot_fitted_curves(
    results: List[Dict],
    output_dir: str = "output",
    filename: str = "fitted_curves.png",
    show_equations: bool = True,
) -> str:
    """Overlay every visible dataset and its fitted curve in one figure.

    Args:
        results (list[dict]): Payloads from ``analyze_dataset``.
        output_dir (str, optional): Directory for the figure bundle. Defaults
            to ``"output"``.
        filename (str, optional): PNG file name; PDF and SVG share its stem.
        show_equations (bool, optional): Append each equation to its legend
            entry. Defaults to ``True``.

    Returns:
        str: Path to the saved PNG file.

    Raises:
        ValueError: If ``results`` is empty.
        KeyError: If a payload misses ``name``, ``data`` or ``fitted_curve``.
    """
    _validate_results(results)
    apply_rcparams()
    os.makedirs(output_dir, exist_ok=True)

    fig, ax = plt.subplots(figsize=STYLE.FIGSIZE_SINGLE)
    drawn = 0
    for res in results:
        if not res.get("visible", True):
            continue
        _draw_dataset(ax, res, label_equation=show_equations)
        drawn += 1

    if drawn == 0:
        ax.text(
            0.5,
            0.5,
            "No visible datasets",
            ha="center",
            va="center",
            transform=ax.transAxes,
            fontsize=FONT_SIZES["annotation"],
        )
    set_axis_labels(ax, x="x", y="y")
    clean_axis(ax)
    if ax.get_legend_handles_labels()[0]:
        ax.legend(loc="best", fontsize=FONT_SIZES["legend"])

    out_path = save_figure_bundle(fig, os.path.join(output_dir, filename))
    plt.close(fig)
    return out_path


def plot_dataset_fits(results: List[Dict], output_dir: str = "output") -> List[str]:
    """Render a two-panel figure (fit, residuals) per dataset.

    Args:
        results (list[dict]): Payloads from ``analyze_dataset``. Hidden
            datasets are rendered too.
        output_dir (str, optional): Directory for figure bundles.

    Returns:
        list[str]: PNG paths, one per dataset.

    Raises:
        ValueError: If ``results`` is empty.
        KeyError: If required payload keys are missing in any entry.
    """
    _validate_results(results)
    apply_rcparams()
    os.makedirs(output_dir, exist_ok=True)

    out_paths: List[str] = []
    for i, res in enumerate(results):
        name = str(res.get("name", f"Dataset {i + 1}"))
        color = color_or_fallback(res.get("color"))
        data: pd.DataFrame = res["data"]

        fig, (ax_fit, ax_res) = plt.subplots(1, 2, figsize=STYLE.FIGSIZE_WIDE)

        _draw_dataset(ax_fit, res, label_equation=False)
        ax_fit.set_title(
            f"{name}: {res.get('equation', '')}", fontsize=FONT_SIZES["title"]
        )
        ax_fit.text(
            0.02,
            0.96,
            f"$R^2$ = {res.get('r2_text', '')}",
            transform=ax_fit.transAxes,
            ha="left",
            va="top",
            fontsize=FONT_SIZES["annotation"],
        )
        set_axis_labels(ax_fit, x="x", y="y")
        clean_axis(ax_fit)

        if "residual" in data.columns and data["residual"].notna().any():
            ax_res.scatter(
                data["x"], data["residual"], s=MARKER_SIZES["residual"], color=color
            )
        ax_res.axhline(0.0, color="black", linewidth=LINE_WIDTHS["guide"], linestyle="--")
        ax_res.set_title("Residuals", fontsize=FONT_SIZES["title"])
        set_axis_labels(ax_res, x="x", y=r"$y - \hat{y}$")
        clean_axis(ax_res, grid_axis="y")

        png_path = os.path.join(output_dir, f"{sanitize_filename(name)}_fit.png")
        out_paths.append(save_figure_bundle(fig, png_path))
        plt.close(fig)

    return out_paths
