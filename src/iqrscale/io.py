from __future__ import annotations

import hashlib
import json
import logging
import os
from typing import Any

from .errors import InvalidParametersError
from .params import RobustScalerParams


SCHEMA_VERSION = "1"

_log = logging.getLogger("iqrscale.io")


def _stable_json_dumps(obj: dict[str, Any]) -> str:
    return json.dumps(obj, sort_keys=True, separators=(",", ":"))


def save_params(params: RobustScalerParams, path: str) -> dict[str, str]:
    """
    Save params to path as a stable JSON document.
    Returns dict with the path and a deterministic sha256 over the document.
    """
    os.makedirs(os.path.dirname(path) or ".", exist_ok=True)
    doc: dict[str, Any] = {"schema_version": SCHEMA_VERSION, **params.to_record()}
    text = _stable_json_dumps(doc)
    sha256 = hashlib.sha256(text.encode("utf-8")).hexdigest()

    with open(path, "w", encoding="utf-8") as f:
        f.write(text)

    _log.debug("saved %d-feature params to %s", params.feature_count, path)
    return {"json_path": path, "sha256": sha256}


def load_params(path: str) -> RobustScalerParams:
    """
    Load params from a JSON file written by save_params or exported from
    scikit-learn (center_, scale_, n_features_in_).
    """
    with open(path, encoding="utf-8") as f:
        try:
            record = json.load(f)
        except json.JSONDecodeError as e:
            raise InvalidParametersError(f"{path}: not valid JSON ({e})") from e

    params = RobustScalerParams.from_record(record)
    _log.debug("loaded %d-feature params from %s", params.feature_count, path)
    return params
