from __future__ import annotations

import numpy as np
import pytest

from iqrscale import RobustScalerModel
from iqrscale import ScalerConfig


preprocessing = pytest.importorskip("sklearn.preprocessing")


def _heavy_tailed(seed: int, n: int, d: int) -> np.ndarray:
    rng = np.random.default_rng(seed)
    X = rng.standard_t(df=2, size=(n, d)) * (10.0 ** rng.integers(-2, 4, size=d))
    X[:, 0] = 3.0  # constant feature
    return X


@pytest.mark.parametrize("seed", range(5))
def test_fitted_params_match_sklearn(seed: int) -> None:
    X = _heavy_tailed(seed, n=97 + 2 * seed, d=6)
    sk = preprocessing.RobustScaler().fit(X)
    ours = RobustScalerModel().fit(X)

    np.testing.assert_allclose(ours.center, sk.center_, rtol=1e-12, atol=1e-12)
    np.testing.assert_allclose(ours.scale, sk.scale_, rtol=1e-12, atol=1e-12)
    np.testing.assert_allclose(
        ours.transform(X), sk.transform(X), rtol=1e-9, atol=1e-9
    )


def test_custom_quantile_range_matches_sklearn() -> None:
    X = _heavy_tailed(11, n=50, d=4)
    sk = preprocessing.RobustScaler(quantile_range=(10.0, 90.0)).fit(X)
    ours = RobustScalerModel(ScalerConfig(quantile_range=(10.0, 90.0))).fit(X)
    np.testing.assert_allclose(ours.scale, sk.scale_, rtol=1e-12, atol=1e-12)


def test_sklearn_exported_params_transform_identically() -> None:
    X = _heavy_tailed(3, n=40, d=3)
    sk = preprocessing.RobustScaler().fit(X)
    record = {
        "center_": sk.center_.tolist(),
        "scale_": sk.scale_.tolist(),
        "n_features_in_": int(sk.n_features_in_),
    }
    model = RobustScalerModel.from_record(record)

    X_new = np.random.default_rng(9).standard_normal((15, 3)) * 50.0
    np.testing.assert_allclose(
        model.transform(X_new), sk.transform(X_new), rtol=1e-12, atol=1e-12
    )
    np.testing.assert_allclose(
        model.inverse_transform(model.transform(X_new)), X_new, rtol=0.0, atol=1e-9
    )
