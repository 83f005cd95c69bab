from __future__ import annotations

import logging
from collections.abc import Mapping
from dataclasses import dataclass
from typing import Any

import numpy as np

from .errors import InvalidParametersError


_log = logging.getLogger("iqrscale.params")

# Field names as exported from a fitted sklearn.preprocessing.RobustScaler
_SKLEARN_KEYS = ("center_", "scale_", "n_features_in_")
_NATIVE_KEYS = ("center", "scale", "feature_count")

# Smaller scales count as zero (sklearn _handle_zeros_in_scale uses the same
# floor); dividing by them overflows to inf.
MIN_SCALE = 10.0 * np.finfo(np.float64).eps


def _vector(name: str, values: Any) -> np.ndarray[Any, Any]:
    try:
        arr = np.array(values, dtype=np.float64, copy=True)
    except (TypeError, ValueError) as e:
        raise InvalidParametersError(f"'{name}' must be a sequence of floats") from e
    if arr.ndim != 1:
        raise InvalidParametersError(f"'{name}' must be one-dimensional")
    return arr


@dataclass(frozen=True, eq=False)
class RobustScalerParams:
    """
    Per-feature center and scale of a robust scaler.

    Construction validates the record: center and scale must both have
    feature_count entries, feature_count must be a positive integer, centers
    must be finite and scales finite and non-negative. A zero scale (or one
    below MIN_SCALE) would make transform divide by zero or overflow, so such
    entries are stored as 1.0 (the feature is only centered), the same rule
    fitting applies to constant features. The arrays are read-only so an instance can be shared freely.
    """

    center: np.ndarray[Any, Any]
    scale: np.ndarray[Any, Any]
    feature_count: int

    def __post_init__(self) -> None:
        n = self.feature_count
        if isinstance(n, bool) or not isinstance(n, (int, np.integer)):
            raise InvalidParametersError("'feature_count' must be an integer")
        n = int(n)
        if n <= 0:
            raise InvalidParametersError("'feature_count' must be > 0")

        center = _vector("center", self.center)
        scale = _vector("scale", self.scale)
        if center.shape[0] != n:
            raise InvalidParametersError(
                f"length of 'center' ({center.shape[0]}) does not match "
                f"feature_count ({n})"
            )
        if scale.shape[0] != n:
            raise InvalidParametersError(
                f"length of 'scale' ({scale.shape[0]}) does not match "
                f"feature_count ({n})"
            )
        if not np.isfinite(center).all():
            raise InvalidParametersError("'center' must contain only finite values")
        if not np.isfinite(scale).all():
            raise InvalidParametersError("'scale' must contain only finite values")
        if (scale < 0.0).any():
            raise InvalidParametersError("'scale' must be non-negative")

        zero = scale < MIN_SCALE
        if zero.any():
            _log.warning(
                "scale is zero (below %g) for features %s; using 1.0",
                MIN_SCALE,
                np.flatnonzero(zero).tolist(),
            )
            scale[zero] = 1.0

        center.setflags(write=False)
        scale.setflags(write=False)
        object.__setattr__(self, "center", center)
        object.__setattr__(self, "scale", scale)
        object.__setattr__(self, "feature_count", n)

    @classmethod
    def from_record(cls, record: Mapping[str, Any]) -> RobustScalerParams:
        """
        Build params from a deserialized record.

        Accepts {"center", "scale", "feature_count"} or the sklearn attribute
        names {"center_", "scale_", "n_features_in_"}.
        """
        if not isinstance(record, Mapping):
            raise InvalidParametersError("parameter record must be a mapping")
        for keys in (_NATIVE_KEYS, _SKLEARN_KEYS):
            if all(k in record for k in keys):
                center_key, scale_key, count_key = keys
                return cls(
                    center=record[center_key],
                    scale=record[scale_key],
                    feature_count=record[count_key],
                )
        raise InvalidParametersError(
            "parameter record needs keys "
            f"{list(_NATIVE_KEYS)} or {list(_SKLEARN_KEYS)}, got {sorted(record)}"
        )

    def to_record(self) -> dict[str, Any]:
        return {
            "center": [float(c) for c in self.center],
            "scale": [float(s) for s in self.scale],
            "feature_count": self.feature_count,
        }

    def equals(self, other: RobustScalerParams) -> bool:
        return (
            self.feature_count == other.feature_count
            and np.array_equal(self.center, other.center)
            and np.array_equal(self.scale, other.scale)
        )
