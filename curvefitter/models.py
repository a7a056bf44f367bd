"""Define the model families, parameter sets, and fit results used by the engine.

Every concrete family is a two-parameter curve:

- ``LINEAR``:       ``y = a * x + b``
- ``EXPONENTIAL``:  ``y = a * exp(b * x)``
- ``LOGARITHMIC``:  ``y = a * ln(x) + b``
- ``SATURATION``:   ``y = a * (1 - exp(-b * x))``

``AUTO`` is a meta-family. It is resolved to one of the concrete families by
``curvefitter.fitting.selection.resolve_family`` before any estimation.
"""

from __future__ import annotations

from dataclasses import dataclass
from enum import Enum
from typing import NamedTuple, Tuple


class Sample(NamedTuple):
    """One (x, y) observation."""

    x: float
    y: float


class ModelFamily(Enum):
    LINEAR = "linear"
    EXPONENTIAL = "exponential"
    LOGARITHMIC = "logarithmic"
    SATURATION = "saturation"
    AUTO = "auto"

    @property
    def is_concrete(self) -> bool:
        return self is not ModelFamily.AUTO

    @classmethod
    def parse(cls, value: "ModelFamily | str") -> "ModelFamily":
        """Return the family named by ``value``.

        Names are case-insensitive and ``"optimal"`` is accepted as an alias
        for ``AUTO``.

        Raises:
            ValueError: If ``value`` names no family.
        """
        if isinstance(value, cls):
            return value
        key = str(value).strip().lower()
        if key == "optimal":
            return cls.AUTO
        for member in cls:
            if member.value == key:
                return member
        raise ValueError(
            f"Unknown model family {value!r}. "
            f"Expected one of {[m.value for m in cls]}."
        )


# Order matters: auto-selection keeps the earliest family on ties.
CONCRETE_FAMILIES: Tuple[ModelFamily, ...] = (
    ModelFamily.LINEAR,
    ModelFamily.EXPONENTIAL,
    ModelFamily.LOGARITHMIC,
    ModelFamily.SATURATION,
)


@dataclass(frozen=True)
class FitParameters:
    """Two scalars instantiating a model family.

    Attributes:
        a: Slope (linear, logarithmic), amplitude (exponential) or plateau
            height (saturation).
        b: Intercept (linear, logarithmic) or rate (exponential, saturation).
    """

    a: float
    b: float


DEFAULT_PARAMETERS = FitParameters(a=1.0, b=0.0)


@dataclass(frozen=True)
class FitResult:
    """Resolved family, its best-fit parameters, and their R^2 score."""

    family: ModelFamily
    params: FitParameters
    r2: float
