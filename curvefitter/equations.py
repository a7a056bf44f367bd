"""Render fitted parameters as human-readable equations and scores."""

from __future__ import annotations

from typing import Optional, Tuple

from .models import FitParameters, FitResult, ModelFamily

EQUATION_PLACEHOLDER = "y = ..."
R2_PLACEHOLDER = "0.000"
DEFAULT_PRECISION = 3

_TEMPLATES = {
    ModelFamily.LINEAR: "y = {a}x + {b}",
    ModelFamily.EXPONENTIAL: "y = {a}e^({b}x)",
    ModelFamily.LOGARITHMIC: "y = {a}ln(x) + {b}",
    ModelFamily.SATURATION: "y = {a}(1 - e^(-{b}x))",
}


def format_equation(
    family: ModelFamily, params: FitParameters, precision: int = DEFAULT_PRECISION
) -> str:
    """Format ``params`` into the equation template of ``family``.

    Args:
        family: Concrete model family.
        params: Parameters estimated for ``family``.
        precision: Decimal places for ``a`` and ``b``.

    Returns:
        str: For example ``"y = 2.000x + 0.500"``. Non-finite parameters render
        as ``nan``/``inf``.

    Raises:
        ValueError: If ``family`` is ``ModelFamily.AUTO``.
    """
    family = ModelFamily.parse(family)
    if not family.is_concrete:
        raise ValueError("Only concrete families have an equation template.")
    return _TEMPLATES[family].format(
        a=f"{params.a:.{precision}f}", b=f"{params.b:.{precision}f}"
    )


def format_r2(r2: float, precision: int = DEFAULT_PRECISION) -> str:
    return f"{r2:.{precision}f}"


def describe_fit(fit: Optional[FitResult]) -> Tuple[str, str]:
    """Return ``(equation, r2)`` display strings, or placeholders when unfitted."""
    if fit is None:
        return EQUATION_PLACEHOLDER, R2_PLACEHOLDER
    return format_equation(fit.family, fit.params), format_r2(fit.r2)


def family_label(family: ModelFamily | str) -> str:
    """Return the display label of a family, e.g. ``"Optimal (Auto)"``."""
    family = ModelFamily.parse(family)
    if family is ModelFamily.AUTO:
        return "Optimal (Auto)"
    return family.value.capitalize()
