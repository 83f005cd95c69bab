from __future__ import annotations

import logging
from typing import Any

import numpy as np
import pytest

from iqrscale import InvalidParametersError
from iqrscale import RobustScalerModel
from iqrscale import RobustScalerParams
from iqrscale.params import MIN_SCALE


def test_valid_params() -> None:
    p = RobustScalerParams(center=[1, 2], scale=[0.5, 3.0], feature_count=2)
    assert p.feature_count == 2
    assert p.center.dtype == np.float64
    np.testing.assert_array_equal(p.scale, [0.5, 3.0])


def test_params_copy_caller_arrays() -> None:
    center = np.array([1.0, 2.0])
    p = RobustScalerParams(center=center, scale=[1.0, 1.0], feature_count=2)
    center[0] = 99.0
    assert p.center[0] == 1.0


@pytest.mark.parametrize(
    "center, scale, feature_count",
    [
        ([1.0, 2.0], [1.0], 2),
        ([1.0], [1.0, 2.0], 2),
        ([1.0, 2.0], [1.0, 2.0], 3),
        ([], [], 0),
        ([1.0], [1.0], -1),
        ([1.0], [1.0], True),
        ([1.0], [1.0], 1.0),
        ([1.0], [-1.0], 1),
        ([1.0], [float("inf")], 1),
        ([1.0], [float("nan")], 1),
        ([float("nan")], [1.0], 1),
        ([[1.0]], [1.0], 1),
        (["a"], [1.0], 1),
    ],
)
def test_invalid_params_raise(center: Any, scale: Any, feature_count: Any) -> None:
    with pytest.raises(InvalidParametersError):
        RobustScalerParams(center=center, scale=scale, feature_count=feature_count)


def test_zero_scale_is_replaced(caplog: pytest.LogCaptureFixture) -> None:
    with caplog.at_level(logging.WARNING, logger="iqrscale.params"):
        p = RobustScalerParams(center=[1.0, 2.0], scale=[0.0, 2.0], feature_count=2)
    np.testing.assert_array_equal(p.scale, [1.0, 2.0])
    assert any("scale is zero" in r.getMessage() for r in caplog.records)


def test_numpy_integer_feature_count() -> None:
    p = RobustScalerParams(center=[0.0], scale=[1.0], feature_count=np.int64(1))
    assert p.feature_count == 1
    assert type(p.feature_count) is int


def test_record_round_trip() -> None:
    p = RobustScalerParams(center=[3.0, 4.0], scale=[2.0, 2.0], feature_count=2)
    record = p.to_record()
    assert record == {"center": [3.0, 4.0], "scale": [2.0, 2.0], "feature_count": 2}
    assert RobustScalerParams.from_record(record).equals(p)


def test_record_with_sklearn_names() -> None:
    p = RobustScalerParams.from_record(
        {"center_": [3.0], "scale_": [2.0], "n_features_in_": 1}
    )
    assert p.feature_count == 1


@pytest.mark.parametrize(
    "record",
    [
        {"center": [1.0], "scale": [1.0]},
        {"center_": [1.0], "scale": [1.0], "feature_count": 1},
        [[1.0], [1.0], 1],
    ],
)
def test_malformed_record_raises(record: Any) -> None:
    with pytest.raises(InvalidParametersError):
        RobustScalerParams.from_record(record)


@pytest.mark.parametrize("tiny", [1e-320, 5e-324, 1e-15])
def test_tiny_scale_counts_as_zero(tiny: float) -> None:
    p = RobustScalerParams(center=[0.0], scale=[tiny], feature_count=1)
    np.testing.assert_array_equal(p.scale, [1.0])
    model = RobustScalerModel(params=p)
    out = model.transform_1d([1.0])
    assert np.isfinite(out).all()
    np.testing.assert_array_equal(out, [1.0])


def test_small_but_usable_scale_is_kept() -> None:
    p = RobustScalerParams(center=[0.0], scale=[1e-12], feature_count=1)
    assert p.scale[0] == 1e-12
    assert MIN_SCALE < 1e-12
