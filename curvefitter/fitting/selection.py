"""Choose the best-scoring model family for a sample set."""

from __future__ import annotations

import logging
from typing import Sequence

import numpy as np

from ..models import CONCRETE_FAMILIES, ModelFamily
from .estimation import estimate
from .evaluation import score

logger = logging.getLogger(__name__)


def select_best(samples: Sequence) -> ModelFamily:
    """Return the concrete family with the highest R^2 on ``samples``.

    Each family is scored with its own best-fit parameters. Families are
    compared in ``CONCRETE_FAMILIES`` order with a strict ``>``, so ``LINEAR``
    wins by default and ties go to the earlier family.

    Args:
        samples: Sequence of at least two (x, y) pairs. Callers must not pass
            fewer.

    Returns:
        ModelFamily: The winning concrete family.
    """
    best_family = ModelFamily.LINEAR
    best_r2 = -np.inf
    for family in CONCRETE_FAMILIES:
        r2 = score(samples, estimate(samples, family), family)
        logger.debug("Candidate %s scored R2=%.6g", family.value, r2)
        if r2 > best_r2:
            best_r2 = r2
            best_family = family
    logger.debug("Auto-selected %s (R2=%.6g)", best_family.value, best_r2)
    return best_family


def resolve_family(samples: Sequence, family: ModelFamily | str) -> ModelFamily:
    """Resolve ``AUTO`` to a concrete family; pass concrete families through."""
    family = ModelFamily.parse(family)
    if family.is_concrete:
        return family
    return select_best(samples)
