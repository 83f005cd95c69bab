__version__ = "0.1.0"

from .config import ScalerConfig
from .errors import DimensionMismatchError
from .errors import EmptyDatasetError
from .errors import EmptyInputError
from .errors import InvalidParametersError
from .errors import IqrScaleError
from .errors import NonFiniteInputError
from .errors import NotFittedError
from .io import load_params
from .io import save_params
from .model import RobustScalerModel
from .params import RobustScalerParams
from .quantile import iqr
from .quantile import median
from .quantile import quantile


__all__ = [
    "RobustScalerModel",
    "RobustScalerParams",
    "ScalerConfig",
    "quantile",
    "median",
    "iqr",
    "load_params",
    "save_params",
    "IqrScaleError",
    "EmptyInputError",
    "EmptyDatasetError",
    "NotFittedError",
    "DimensionMismatchError",
    "InvalidParametersError",
    "NonFiniteInputError",
]
