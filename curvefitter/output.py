"""Write fit results to CSV and to a self-contained interactive HTML page.

This module is the output boundary between in-memory analysis payloads and
files a user can share. The HTML page loads Chart.js from a CDN and embeds
the points and pre-sampled fitted curves as JSON, so it renders without this
package installed.
"""

from __future__ import annotations

import json
import logging
import os
from datetime import datetime
from string import Template
from typing import Dict, List, Optional

import pandas as pd

from .equations import family_label

logger = logging.getLogger(__name__)

CHART_JS_URL = "https://cdn.jsdelivr.net/npm/chart.js"

_HTML_TEMPLATE = Template(
    """<!DOCTYPE html>
<html lang="en">
<head>
    <meta charset="UTF-8">
    <meta name="viewport" content="width=device-width, initial-scale=1.0">
    <title>Curve Fitter - Exported Graph</title>
    <script src="$chart_js"></script>
    <style>
        body { font-family: sans-serif; background: #0f0f1e; color: #e0e0e0; margin: 0; padding: 20px; }
        h1 { color: #4A90E2; text-align: center; }
        .chart-container { background: rgba(255, 255, 255, 0.05); border-radius: 15px; padding: 20px; height: 70vh; }
        .info { margin-top: 20px; display: grid; grid-template-columns: repeat(auto-fit, minmax(300px, 1fr)); gap: 15px; }
        .dataset-info { padding: 15px; background: rgba(255, 255, 255, 0.03); border-radius: 8px; border-left: 4px solid; }
        .dataset-info p { margin: 5px 0; color: #b0b0b0; }
        .stat { color: #4A90E2; font-weight: 600; }
    </style>
</head>
<body>
    <h1>Curve Fitter - Interactive Graph</h1>
    <p style="text-align: center">Exported on $exported_on</p>
    <div class="chart-container"><canvas id="chart"></canvas></div>
    <div class="info" id="info"></div>
    <script>
        const state = $state;
        const chartDatasets = [];
        state.datasets.forEach(ds => {
            if (!ds.visible) return;
            if (ds.data.length > 0) {
                chartDatasets.push({
                    label: ds.name + ' (points)', data: ds.data,
                    backgroundColor: ds.color, borderColor: ds.color,
                    pointRadius: 6, pointHoverRadius: 8, showLine: false
                });
            }
            if (ds.fittedCurve && ds.fittedCurve.length > 0) {
                chartDatasets.push({
                    label: ds.name + ' (fit)', data: ds.fittedCurve,
                    borderColor: ds.color, backgroundColor: 'transparent',
                    borderWidth: 2, pointRadius: 0, tension: 0.4, showLine: true
                });
            }
        });
        new Chart(document.getElementById('chart').getContext('2d'), {
            type: 'scatter',
            data: { datasets: chartDatasets },
            options: {
                responsive: true, maintainAspectRatio: false,
                plugins: { legend: { display: true, position: 'top', labels: { color: '#e0e0e0', usePointStyle: true } } },
                scales: {
                    x: { type: 'linear', grid: { color: 'rgba(255, 255, 255, 0.1)' }, ticks: { color: '#a0a0a0' } },
                    y: { grid: { color: 'rgba(255, 255, 255, 0.1)' }, ticks: { color: '#a0a0a0' } }
                }
            }
        });
        const info = document.getElementById('info');
        state.datasets.forEach(ds => {
            if (!ds.visible) return;
            const div = document.createElement('div');
            div.className = 'dataset-info';
            div.style.borderLeftColor = ds.color;
            const rows = [
                ['Data Points', ds.data.length],
                ['Fitting Method', ds.fitLabel],
                ['Equation', ds.equation],
                ['R²', ds.r2],
                ['Color', ds.color]
            ];
            const title = document.createElement('h3');
            title.textContent = ds.name;
            div.appendChild(title);
            rows.forEach(([label, value]) => {
                const p = document.createElement('p');
                const span = document.createElement('span');
                span.className = 'stat';
                span.textContent = value;
                p.append(label + ': ', span);
                div.appendChild(p);
            });
            info.appendChild(div);
        });
    </script>
</body>
</html>
"""
)


def _frame_records(frame: pd.DataFrame) -> List[Dict[str, float]]:
    if frame is None or frame.empty:
        return []
    return [
        {"x": float(x), "y": float(y)}
        for x, y in zip(frame["x"].to_numpy(), frame["y"].to_numpy())
    ]


def build_export_state(results: List[Dict], current_id: Optional[int] = None) -> Dict:
    """Build the JSON-serialisable page state from analysis payloads.

    Args:
        results (list[dict]): Payloads from ``analyze_dataset``.
        current_id (int | None): Id of the selected dataset, if any.

    Returns:
        dict: ``{"datasets": [...], "currentDatasetId": current_id}``. Each
        dataset entry carries its points, color, visibility, fit label,
        equation, R^2 text and fitted curve (``None`` below two points).
    """
    datasets = []
    for res in results:
        requested = res.get("requested_family")
        curve = _frame_records(res.get("fitted_curve"))
        datasets.append(
            {
                "id": res.get("dataset_id"),
                "name": res["name"],
                "data": _frame_records(res["data"]),
                "color": res.get("color", ""),
                "fitType": requested.value if requested is not None else "",
                "fitLabel": family_label(requested) if requested is not None else "",
                "visible": bool(res.get("visible", True)),
                "equation": res.get("equation", ""),
                "r2": res.get("r2_text", ""),
                "fittedCurve": curve if res.get("fit") is not None else None,
            }
        )
    return {"datasets": datasets, "currentDatasetId": current_id}


def render_standalone_html(
    results: List[Dict],
    current_id: Optional[int] = None,
    exported_on: Optional[datetime] = None,
) -> str:
    """Render the standalone page as a string."""
    exported_on = exported_on or datetime.now()
    state = json.dumps(build_export_state(results, current_id))
    # Keep embedded names from closing the script element.
    state = state.replace("</", "<\\/")
    return _HTML_TEMPLATE.substitute(
        chart_js=CHART_JS_URL,
        exported_on=exported_on.strftime("%Y-%m-%d %H:%M:%S"),
        state=state,
    )


def export_standalone_html(
    results: List[Dict],
    output_path: Optional[str] = None,
    output_dir: str = "output",
    current_id: Optional[int] = None,
) -> str:
    """Write the standalone interactive page.

    Args:
        results (list[dict]): Payloads from ``analyze_dataset``.
        output_path (str | None): Target file. Defaults to
            ``<output_dir>/curve-fitter-<timestamp>.html`` with a millisecond
            timestamp.
        output_dir (str): Directory used when ``output_path`` is omitted.
        current_id (int | None): Id of the selected dataset, embedded as-is.

    Returns:
        str: Path of the written HTML file.
    """
    now = datetime.now()
    if output_path is None:
        os.makedirs(output_dir, exist_ok=True)
        stamp = int(now.timestamp() * 1000)
        output_path = os.path.join(output_dir, f"curve-fitter-{stamp}.html")
    else:
        parent = os.path.dirname(output_path)
        if parent:
            os.makedirs(parent, exist_ok=True)

    html = render_standalone_html(results, current_id=current_id, exported_on=now)
    with open(output_path, "w", encoding="utf-8") as fh:
        fh.write(html)
    logger.info("Saved standalone HTML export to %s", output_path)
    return output_path


def save_results_to_csv(results_df: pd.DataFrame, output_dir: str = "output") -> str:
    """Save the per-dataset fit table to ``fit_results.csv``.

    Args:
        results_df (pandas.DataFrame): Output from
            ``create_results_dataframe``.
        output_dir (str): Directory where the CSV is written.

    Returns:
        str: Path to ``fit_results.csv``.
    """
    os.makedirs(output_dir, exist_ok=True)
    results_path = os.path.join(output_dir, "fit_results.csv")
    results_df.to_csv(results_path, index=False)
    logger.info("Saved fit results to %s", results_path)
    return results_path
