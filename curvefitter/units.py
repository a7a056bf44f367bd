"""Page dimensions used to suggest hand-drawn graph scales."""

from __future__ import annotations

from typing import Dict, Tuple

# Usable drawing area of an A4 sheet, (width, height) in cm.
A4_LANDSCAPE_CM: Tuple[float, float] = (26.0, 16.0)
A4_PORTRAIT_CM: Tuple[float, float] = (16.0, 26.0)

PAGE_ORIENTATIONS: Dict[str, Tuple[float, float]] = {
    "landscape": A4_LANDSCAPE_CM,
    "portrait": A4_PORTRAIT_CM,
}


def units_per_cm(data_range: float, length_cm: float) -> float:
    """Convert a data range into data units per centimetre of paper.

    Args:
        data_range (float): ``max - min`` of one axis, in data units.
        length_cm (float): Length of that axis on paper, in cm.

    Returns:
        float: Data units represented by one centimetre.
    """
    return float(data_range) / float(length_cm)
