from __future__ import annotations

import logging
from collections.abc import Mapping
from collections.abc import Sequence
from typing import Any
from typing import Union

import numpy as np

from .config import ScalerConfig
from .errors import DimensionMismatchError
from .errors import EmptyDatasetError
from .errors import NonFiniteInputError
from .errors import NotFittedError
from .io import load_params
from .io import save_params
from .params import MIN_SCALE
from .params import RobustScalerParams
from .quantile import column_quantiles


MatrixLike = Union[Sequence[Sequence[float]], np.ndarray[Any, Any]]
VectorLike = Union[Sequence[float], np.ndarray[Any, Any]]

_log = logging.getLogger("iqrscale.model")


def _stack_rows(data: MatrixLike) -> np.ndarray[Any, Any]:
    rows = [np.asarray(row, dtype=np.float64) for row in data]
    if any(r.ndim != 1 for r in rows):
        raise DimensionMismatchError("expected a 2D matrix (a sequence of rows)")
    widths = sorted({r.shape[0] for r in rows})
    if len(widths) > 1:
        raise DimensionMismatchError(f"rows have differing lengths: {widths}")
    return np.vstack(rows)


def _as_matrix(data: MatrixLike, width: int = 0) -> np.ndarray[Any, Any]:
    # Anything numpy can convert (ndarrays, DataFrames, nested lists) goes
    # through asarray; only ragged row sequences need the per-row path.
    try:
        X = np.asarray(data, dtype=np.float64)
    except ValueError:
        if isinstance(data, np.ndarray):
            raise
        X = _stack_rows(data)
    if X.ndim == 1 and X.size == 0:
        return X.reshape(0, width)
    if X.ndim != 2:
        raise DimensionMismatchError(f"expected a 2D matrix, got {X.ndim}D input")
    return X


def _as_vector(sample: VectorLike) -> np.ndarray[Any, Any]:
    x = np.asarray(sample, dtype=np.float64)
    if x.ndim != 1:
        raise DimensionMismatchError(f"expected a 1D sample, got {x.ndim}D input")
    return x


class RobustScalerModel:
    """
    Median/IQR feature scaler.

    Fitting computes, per column, the median as center and the spread between
    the configured quantiles (the interquartile range by default) as scale,
    using the linear interpolation rule of iqrscale.quantile so that values
    agree with sklearn.preprocessing.RobustScaler.

    The fitted state is a single read-only RobustScalerParams object. fit
    builds a new one and swaps it in only after every column succeeded, so a
    failed fit leaves an earlier fit untouched. Readers may share a fitted
    model across threads; refits on a shared model should replace the model
    instance instead.
    """

    def __init__(
        self,
        config: ScalerConfig | None = None,
        *,
        params: RobustScalerParams | None = None,
    ):
        self.config = config or ScalerConfig()
        self._params = params

    @classmethod
    def from_params(
        cls,
        center: VectorLike,
        scale: VectorLike,
        feature_count: int,
        *,
        config: ScalerConfig | None = None,
    ) -> RobustScalerModel:
        params = RobustScalerParams(
            center=center, scale=scale, feature_count=feature_count
        )
        return cls(config, params=params)

    @classmethod
    def from_record(
        cls, record: Mapping[str, Any], *, config: ScalerConfig | None = None
    ) -> RobustScalerModel:
        return cls(config, params=RobustScalerParams.from_record(record))

    @property
    def params(self) -> RobustScalerParams | None:
        return self._params

    @property
    def is_fitted(self) -> bool:
        return self._params is not None

    @property
    def feature_count(self) -> int:
        return 0 if self._params is None else self._params.feature_count

    @property
    def n_features(self) -> int:
        return self.feature_count

    @property
    def center(self) -> np.ndarray[Any, Any]:
        if self._params is None:
            return np.empty((0,), dtype=np.float64)
        return self._params.center

    @property
    def scale(self) -> np.ndarray[Any, Any]:
        if self._params is None:
            return np.empty((0,), dtype=np.float64)
        return self._params.scale

    def fit(self, data: MatrixLike) -> RobustScalerModel:
        X = _as_matrix(data)
        n_samples, n_features = X.shape
        if n_samples == 0 or n_features == 0:
            raise EmptyDatasetError(
                f"cannot fit on a {n_samples}x{n_features} matrix"
            )
        if not np.isfinite(X).all():
            raise NonFiniteInputError("fit data must contain only finite values")

        cfg = self.config
        center, low, high = column_quantiles(X, (0.5, cfg.q_low, cfg.q_high))
        spread = high - low

        # Constant features have no spread to divide by; they are only centered
        degenerate = (spread <= cfg.degenerate_tol) | (spread < MIN_SCALE)
        scale = np.where(degenerate, 1.0, spread)
        if degenerate.any():
            _log.debug(
                "features %s have degenerate spread; scale set to 1.0",
                np.flatnonzero(degenerate).tolist(),
            )

        params = RobustScalerParams(
            center=center, scale=scale, feature_count=n_features
        )
        self._params = params
        _log.debug("fitted %d features on %d samples", n_features, n_samples)
        return self

    def fit_transform(self, data: MatrixLike) -> np.ndarray[Any, Any]:
        return self.fit(data).transform(data)

    def _require_params(self) -> RobustScalerParams:
        if self._params is None:
            raise NotFittedError(
                "This RobustScalerModel has no parameters yet. "
                "Call 'fit' or load parameters before transforming."
            )
        return self._params

    @staticmethod
    def _check_width(width: int, params: RobustScalerParams) -> None:
        if width != params.feature_count:
            raise DimensionMismatchError(
                f"input has {width} features, "
                f"scaler expects {params.feature_count}"
            )

    def transform_1d(self, sample: VectorLike) -> np.ndarray[Any, Any]:
        params = self._require_params()
        x = _as_vector(sample)
        self._check_width(x.shape[0], params)
        return (x - params.center) / params.scale

    def inverse_transform_1d(self, sample: VectorLike) -> np.ndarray[Any, Any]:
        params = self._require_params()
        x = _as_vector(sample)
        self._check_width(x.shape[0], params)
        return x * params.scale + params.center

    def transform(self, data: MatrixLike) -> np.ndarray[Any, Any]:
        params = self._require_params()
        X = _as_matrix(data, width=params.feature_count)
        self._check_width(X.shape[1], params)
        return (X - params.center) / params.scale

    def inverse_transform(self, data: MatrixLike) -> np.ndarray[Any, Any]:
        params = self._require_params()
        X = _as_matrix(data, width=params.feature_count)
        self._check_width(X.shape[1], params)
        return X * params.scale + params.center

    # Convenience persistence
    def save(self, path: str) -> dict[str, str]:
        return save_params(self._require_params(), path)

    @classmethod
    def load(
        cls, path: str, *, config: ScalerConfig | None = None
    ) -> RobustScalerModel:
        return cls(config, params=load_params(path))
