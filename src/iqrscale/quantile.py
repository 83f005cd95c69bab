"""
Order-statistic quantiles with linear interpolation.

For n sorted values and a quantile q in [0, 1] the fractional rank is
  r = q * (n - 1),  lo = floor(r),  hi = ceil(r),  frac = r - lo
and the estimate is
  values[lo] + frac * (values[hi] - values[lo])
which is the default ("linear") method of numpy.quantile / numpy.percentile
and therefore what sklearn.preprocessing.RobustScaler stores in center_ and
scale_. Parameters fit elsewhere only line up with ours if this rule is kept.
"""

from __future__ import annotations

import math
from collections.abc import Sequence
from typing import Any
from typing import Union

import numpy as np

from .errors import EmptyInputError
from .errors import NonFiniteInputError


ArrayLike1D = Union[Sequence[float], np.ndarray[Any, Any]]


def _check_q(q: float) -> float:
    q = float(q)
    if not (0.0 <= q <= 1.0):
        raise ValueError("q must be in [0, 1]")
    return q


def _rank(q: float, n: int) -> tuple[int, int, float]:
    r = q * (n - 1)
    lo = int(math.floor(r))
    hi = int(math.ceil(r))
    return lo, hi, r - lo


def _sorted_column(values: ArrayLike1D) -> np.ndarray[Any, Any]:
    arr = np.asarray(values, dtype=np.float64)
    if arr.ndim != 1:
        raise ValueError("values must be one-dimensional")
    if arr.size == 0:
        raise EmptyInputError("quantile of an empty sequence is undefined")
    if np.isnan(arr).any():
        raise NonFiniteInputError("values must not contain NaN")
    # np.sort returns a copy; the caller's buffer is left as-is
    return np.sort(arr)


def quantile(values: ArrayLike1D, q: float) -> float:
    q = _check_q(q)
    s = _sorted_column(values)
    lo, hi, frac = _rank(q, s.shape[0])
    if lo == hi:
        return float(s[lo])
    return float(s[lo] + frac * (s[hi] - s[lo]))


def median(values: ArrayLike1D) -> float:
    return quantile(values, 0.5)


def iqr(values: ArrayLike1D) -> float:
    s = _sorted_column(values)
    return quantile(s, 0.75) - quantile(s, 0.25)


def column_quantiles(
    matrix: np.ndarray[Any, Any], qs: Sequence[float]
) -> np.ndarray[Any, Any]:
    """
    Quantiles of every column of a 2D array in one sort.

    Returns an array of shape (len(qs), n_columns); row i holds quantile
    qs[i] for each column and matches quantile(matrix[:, j], qs[i]) exactly.
    """
    X = np.asarray(matrix, dtype=np.float64)
    if X.ndim != 2:
        raise ValueError("matrix must be two-dimensional")
    n_rows, n_cols = X.shape
    if n_rows == 0:
        raise EmptyInputError("quantile of an empty column is undefined")
    if np.isnan(X).any():
        raise NonFiniteInputError("values must not contain NaN")

    S = np.sort(X, axis=0)
    out = np.empty((len(qs), n_cols), dtype=np.float64)
    for i, q in enumerate(qs):
        lo, hi, frac = _rank(_check_q(q), n_rows)
        if lo == hi:
            out[i] = S[lo]
        else:
            out[i] = S[lo] + frac * (S[hi] - S[lo])
    return out
