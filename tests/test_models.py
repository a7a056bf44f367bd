import dataclasses

import pytest

from curvefitter.models import (
    CONCRETE_FAMILIES,
    DEFAULT_PARAMETERS,
    FitParameters,
    ModelFamily,
)


def test_concrete_families_order():
    assert CONCRETE_FAMILIES == (
        ModelFamily.LINEAR,
        ModelFamily.EXPONENTIAL,
        ModelFamily.LOGARITHMIC,
        ModelFamily.SATURATION,
    )
    assert ModelFamily.AUTO not in CONCRETE_FAMILIES
    assert not ModelFamily.AUTO.is_concrete


@pytest.mark.parametrize(
    "name, expected",
    [
        ("Linear", ModelFamily.LINEAR),
        (" saturation ", ModelFamily.SATURATION),
        ("optimal", ModelFamily.AUTO),
        ("AUTO", ModelFamily.AUTO),
        (ModelFamily.LOGARITHMIC, ModelFamily.LOGARITHMIC),
    ],
)
def test_parse_family_names(name, expected):
    assert ModelFamily.parse(name) is expected


def test_parse_unknown_family_raises():
    with pytest.raises(ValueError, match="Unknown model family"):
        ModelFamily.parse("quadratic")


def test_parameters_are_immutable():
    assert DEFAULT_PARAMETERS == FitParameters(a=1.0, b=0.0)
    with pytest.raises(dataclasses.FrozenInstanceError):
        DEFAULT_PARAMETERS.a = 2.0
