from __future__ import annotations


class IqrScaleError(Exception):
    """Base error for iqrscale."""


class EmptyInputError(IqrScaleError, ValueError):
    pass


class EmptyDatasetError(IqrScaleError, ValueError):
    pass


class NotFittedError(IqrScaleError, RuntimeError):
    pass


class DimensionMismatchError(IqrScaleError, ValueError):
    pass


class InvalidParametersError(IqrScaleError, ValueError):
    pass


class NonFiniteInputError(IqrScaleError, ValueError):
    pass
