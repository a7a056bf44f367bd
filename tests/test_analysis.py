import math

import numpy as np
import pytest

from curvefitter.analysis import (
    analyze_dataset,
    analyze_session,
    calculate_auto_scale,
    create_results_dataframe,
    format_scale,
    print_fit_summary,
)
from curvefitter.models import ModelFamily
from curvefitter.schema import COLUMNS


def test_linear_dataset_payload(session):
    res = analyze_dataset(session.datasets[0])

    assert res["family"] is ModelFamily.LINEAR
    assert res["requested_family"] is ModelFamily.AUTO
    assert res["equation"] == "y = 2.000x + 1.000"
    assert res["r2_text"] == "1.000"
    assert res["n_points"] == 5
    assert len(res["fitted_curve"]) == 101
    assert np.allclose(res["data"]["residual"], 0.0, atol=1e-9)


def test_requested_family_is_honoured(session):
    res = analyze_dataset(session.datasets[1], n_steps=20)

    assert res["family"] is ModelFamily.EXPONENTIAL
    assert res["a"] == pytest.approx(3.0)
    assert res["b"] == pytest.approx(0.4)
    assert len(res["fitted_curve"]) == 21


def test_empty_dataset_gets_placeholders(session):
    res = analyze_dataset(session.datasets[2])

    assert res["fit"] is None
    assert res["family"] is None
    assert res["equation"] == "y = ..."
    assert res["r2_text"] == "0.000"
    assert math.isnan(res["r2"])
    assert res["fitted_curve"].empty
    assert res["data"].empty


def test_results_dataframe_columns(session):
    df = create_results_dataframe(analyze_session(session))

    assert list(df[COLUMNS.dataset]) == ["Line", "Growth", "Empty"]
    assert list(df[COLUMNS.requested]) == ["Optimal (Auto)", "Exponential", "Optimal (Auto)"]
    assert list(df[COLUMNS.family]) == ["Linear", "Exponential", ""]
    assert df[COLUMNS.n_points].tolist() == [5, 5, 0]
    assert df[COLUMNS.r2].isna().tolist() == [False, False, True]


def test_print_fit_summary(session, capsys):
    print_fit_summary(create_results_dataframe(analyze_session(session)))
    out = capsys.readouterr().out
    assert "Line (5 points, Optimal (Auto) -> Linear): y = 2.000x + 1.000" in out
    assert "Empty (0 points, Optimal (Auto) -> no fit): y = ..." in out


def test_auto_scale_for_both_orientations():
    scale = calculate_auto_scale([(0.0, 0.0), (26.0, 16.0), (13.0, 4.0)])

    assert scale["landscape"] == pytest.approx((1.0, 1.0))
    assert scale["portrait"] == pytest.approx((26.0 / 16.0, 16.0 / 26.0))
    assert format_scale(scale["landscape"]) == "X: 1.00 units/cm | Y: 1.00 units/cm"


def test_auto_scale_without_samples():
    assert calculate_auto_scale([]) is None
    assert format_scale(None) == "--"
