import json
import re
from datetime import datetime
from pathlib import Path

import pandas as pd

from curvefitter.analysis import analyze_session, create_results_dataframe
from curvefitter.output import (
    CHART_JS_URL,
    build_export_state,
    export_standalone_html,
    render_standalone_html,
    save_results_to_csv,
)
from curvefitter.schema import COLUMNS


def test_save_results_to_csv(session, tmp_path):
    results_df = create_results_dataframe(analyze_session(session))

    path = save_results_to_csv(results_df, output_dir=str(tmp_path))

    assert Path(path).name == "fit_results.csv"
    loaded = pd.read_csv(path)
    assert list(loaded.columns) == list(results_df.columns)
    assert loaded[COLUMNS.equation].tolist()[0] == "y = 2.000x + 1.000"


def test_export_state_mirrors_session(session):
    hidden = session.datasets[1]
    session.toggle_visibility(hidden.id)

    state = build_export_state(analyze_session(session), session.current_id)
    line, growth, empty = state["datasets"]

    assert state["currentDatasetId"] == session.current_id
    assert line["fitType"] == "auto"
    assert line["fitLabel"] == "Optimal (Auto)"
    assert line["data"][0] == {"x": 0.0, "y": 1.0}
    assert len(line["fittedCurve"]) == 101
    assert growth["visible"] is False
    assert growth["fitType"] == "exponential"
    assert empty["fittedCurve"] is None
    assert empty["equation"] == "y = ..."
    json.dumps(state)


def test_rendered_page_embeds_state(session):
    session.rename(session.datasets[0].id, "</script><b>")

    html = render_standalone_html(
        analyze_session(session), exported_on=datetime(2024, 1, 2, 3, 4, 5)
    )

    assert CHART_JS_URL in html
    assert "Exported on 2024-01-02 03:04:05" in html
    assert "<\\/script><b>" in html
    assert html.count("</script>") == 2
    assert "Growth" in html


def test_export_uses_timestamped_name(session, tmp_path):
    path = export_standalone_html(analyze_session(session), output_dir=str(tmp_path))

    assert re.fullmatch(r"curve-fitter-\d+\.html", Path(path).name)
    assert "<canvas id=\"chart\">" in Path(path).read_text(encoding="utf-8")


def test_export_to_explicit_path(session, tmp_path):
    target = tmp_path / "nested" / "graph.html"

    path = export_standalone_html(analyze_session(session), output_path=str(target))

    assert path == str(target)
    assert target.exists()
