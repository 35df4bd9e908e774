"""Normalization of unnormalized distributions."""
from collections.abc import Hashable, Mapping

import numpy as np

from .errors import NormalizationError


def normalize(weights: Mapping[Hashable, float], reason: str = "contradictory evidence") -> dict[Hashable, float]:
    """Rescales weights so they sum to one, keeping the key order.

    Args:
      weights: a { value : unnormalized weight } mapping.
      reason: what a zero total means to the caller, used in the error message.
    Returns:
      a { value : probability } dictionary.
    Raises:
      NormalizationError: if the weights sum to zero (or to a non-finite value).
    """
    total = float(np.sum(list(weights.values())))
    if total <= 0 or not np.isfinite(total):
        raise NormalizationError(f"Cannot normalize {dict(weights)} ({reason}).")
    return {value: float(w) / total for value, w in weights.items()}
