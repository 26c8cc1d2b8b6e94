"""
Numeric helpers shared by the flagging policies.

Both helpers accept any sequence of numbers and return plain floats so the
results can be stored directly on pydantic records. Constant inputs are
special-cased in both so that the mean of identical scores is that score
exactly and their spread is exactly zero.
"""

from collections.abc import Sequence

import numpy as np
from numpy.typing import NDArray


def _constant_value(arr: NDArray[np.float64]) -> float | None:
    """The shared value if every element of ``arr`` is equal, else None."""
    if arr.shape[0] > 0 and np.all(arr == arr[0]):
        return float(arr[0])
    return None


def mean(values: Sequence[float]) -> float:
    """
    Arithmetic mean of a sequence.

    Args:
        values: Numbers to average.

    Returns:
        The mean, or 0.0 when the sequence is empty. Identical values
        return that value without rounding error.
    """
    if len(values) == 0:
        return 0.0
    arr = np.asarray(values, dtype=np.float64)
    constant = _constant_value(arr)
    if constant is not None:
        return constant
    return float(np.mean(arr))


def population_std(
    values: Sequence[float], center: float | None = None
) -> float:
    """
    Population standard deviation (squared deviations divided by N).

    Args:
        values: Numbers to measure.
        center: Precomputed mean of ``values``. Computed when omitted.

    Returns:
        The standard deviation. Empty and constant inputs (including a
        single value) give 0.0.
    """
    if len(values) <= 1:
        return 0.0
    arr = np.asarray(values, dtype=np.float64)
    if _constant_value(arr) is not None:
        return 0.0
    if center is None:
        center = mean(values)
    variance = np.sum((arr - center) ** 2) / arr.shape[0]
    return float(np.sqrt(variance))
