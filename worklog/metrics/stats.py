"""
Shared numeric helpers: rounding, dispersion, clamping and safe division.
"""
import numpy as np
import pandas as pd
from typing import Sequence, Union

Number = Union[int, float]


def round_half_up(values, decimals: int = 1):
    """
    Round halves away from -inf (2.25 -> 2.3, 3.75 -> 3.8).

    Python's round() is banker's rounding; report totals must round the way
    users expect. Accepts scalars, arrays and Series; scalars come back as float.
    """
    factor = 10 ** decimals
    if isinstance(values, pd.Series):
        return np.floor(values.astype(float) * factor + 0.5) / factor
    result = np.floor(np.asarray(values, dtype=float) * factor + 0.5) / factor
    if np.ndim(result) == 0:
        return float(result)
    return result


def population_std(values: Sequence[Number]) -> float:
    """Population standard deviation; 0 for an empty sequence."""
    arr = np.asarray(values, dtype=float)
    if arr.size == 0:
        return 0.0
    return float(np.std(arr, ddof=0))


def clamp(value: Number, lower: Number = 0.0, upper: Number = 1.0) -> float:
    """Clamp value into [lower, upper]."""
    return float(min(upper, max(lower, value)))


def safe_divide(numerator: Number, denominator: Number, default: float = 0.0) -> float:
    """Divide, returning default when the denominator is zero."""
    if denominator == 0:
        return default
    return numerator / denominator


def largest_remainder_round(parts: pd.DataFrame, totals: pd.Series, decimals: int = 1) -> pd.DataFrame:
    """
    Round each row of parts so the row sums to the matching total.

    Every part is floored to `decimals`; the leftover units go to the parts
    with the largest remainders, leftmost first on ties. totals must already
    be rounded to `decimals`.
    """
    factor = 10 ** decimals
    # Strip float noise so 0.3 * 10 floors to 3, not 2
    scaled = np.round(parts.to_numpy(dtype=float) * factor, 9)
    floors = np.floor(scaled)
    remainders = scaled - floors

    units = np.rint(totals.to_numpy(dtype=float) * factor) - floors.sum(axis=1)
    units = np.clip(units, 0, parts.shape[1])

    order = np.argsort(-remainders, axis=1, kind="stable")
    ranks = np.argsort(order, axis=1, kind="stable")
    rounded = (floors + (ranks < units[:, None])) / factor

    return pd.DataFrame(rounded, index=parts.index, columns=parts.columns)
