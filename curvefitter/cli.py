"""Command-line pipeline: load points, fit every dataset, write outputs."""

from __future__ import annotations

import argparse
import logging
import os
import sys
import time

from .analysis import (
    analyze_session,
    calculate_auto_scale,
    create_results_dataframe,
    format_scale,
    print_fit_summary,
)
from .data_processing import build_session, extract_datasets, load_points_csv
from .fitting.constants import DEFAULT_N_STEPS, SATURATION_SOLVERS
from .models import ModelFamily
from .output import export_standalone_html, save_results_to_csv
from .plotting import plot_dataset_fits, plot_fitted_curves

DEFAULT_OUTPUT_DIR = "output"
LOG_FORMAT = "%(asctime)s - %(levelname)s - %(message)s"


def configure_logging(log_file: str | None = None, level: int = logging.INFO) -> None:
    """Send log records to stdout and, optionally, to ``log_file``."""
    handlers: list[logging.Handler] = [logging.StreamHandler(sys.stdout)]
    if log_file:
        handlers.append(logging.FileHandler(log_file, mode="w"))
    logging.basicConfig(level=level, format=LOG_FORMAT, handlers=handlers, force=True)


def _positive_int(value: str) -> int:
    try:
        steps = int(value)
    except ValueError:
        raise argparse.ArgumentTypeError(f"invalid int value: {value!r}") from None
    if steps < 1:
        raise argparse.ArgumentTypeError(f"must be at least 1, got {steps}")
    return steps


def _build_arg_parser() -> argparse.ArgumentParser:
    """Build command-line parser for module execution."""
    parser = argparse.ArgumentParser(
        description="Fit curves to 2D data points and export plots and tables."
    )
    parser.add_argument("--input", required=True, help="Path to input CSV file.")
    parser.add_argument(
        "--fit",
        default=ModelFamily.AUTO.value,
        choices=[member.value for member in ModelFamily],
        help="Fit family for every dataset (default: auto).",
    )
    parser.add_argument(
        "--outdir",
        default=DEFAULT_OUTPUT_DIR,
        help=f"Output directory (default: {DEFAULT_OUTPUT_DIR}).",
    )
    parser.add_argument(
        "--steps",
        type=_positive_int,
        default=DEFAULT_N_STEPS,
        help=f"Sampling intervals for fitted curves (default: {DEFAULT_N_STEPS}).",
    )
    parser.add_argument(
        "--saturation-solver",
        default="fixed",
        choices=list(SATURATION_SOLVERS),
        help="Saturation estimator: fixed iterations or SciPy least squares.",
    )
    parser.add_argument(
        "--html",
        action=argparse.BooleanOptionalAction,
        default=True,
        help="Write a standalone interactive HTML page (default: on).",
    )
    parser.add_argument(
        "--log-file",
        default=None,
        help="Optional log file, overwritten on each run.",
    )
    return parser


def main(argv: list[str] | None = None) -> int:
    """CLI entrypoint for running the curve-fitting pipeline."""
    parser = _build_arg_parser()
    args = parser.parse_args(argv)
    configure_logging(args.log_file)

    start_time = time.time()
    logging.info("Loading points from %s", args.input)
    try:
        frames = extract_datasets(
            load_points_csv(args.input),
            default_name=os.path.splitext(os.path.basename(args.input))[0],
        )
    except (OSError, ValueError) as exc:
        logging.error("Could not load datasets from %s: %s", args.input, exc)
        return 1

    session = build_session(frames, fit_family=args.fit)
    logging.info("Loaded %d dataset(s)", len(session))

    results = analyze_session(
        session, n_steps=args.steps, saturation_solver=args.saturation_solver
    )
    results_df = create_results_dataframe(results)
    print_fit_summary(results_df)

    scale = calculate_auto_scale(session.all_samples())
    if scale is not None:
        for orientation, value in scale.items():
            logging.info("A4 %s scale: %s", orientation, format_scale(value))

    os.makedirs(args.outdir, exist_ok=True)
    results_csv = save_results_to_csv(results_df, args.outdir)
    overview_path = plot_fitted_curves(results, args.outdir)
    dataset_paths = plot_dataset_fits(results, args.outdir)

    logging.info("Generated output files:")
    logging.info("  - Fit results CSV: %s", results_csv)
    logging.info("  - Overview figure: %s", overview_path)
    for path in dataset_paths:
        logging.info("  - Dataset figure: %s", path)
    if args.html:
        html_path = export_standalone_html(
            results, output_dir=args.outdir, current_id=session.current_id
        )
        logging.info("  - Standalone HTML: %s", html_path)

    logging.info("Total execution time: %.2f seconds", time.time() - start_time)
    return 0


if __name__ == "__main__":
    raise SystemExit(main())
