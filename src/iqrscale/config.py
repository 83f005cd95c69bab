from __future__ import annotations

from dataclasses import dataclass


@dataclass(frozen=True)
class ScalerConfig:
    # Percentiles, as in sklearn.preprocessing.RobustScaler(quantile_range=...)
    quantile_range: tuple[float, float] = (25.0, 75.0)
    # Spreads at or below this are treated as degenerate and scaled by 1.0
    degenerate_tol: float = 0.0

    def __post_init__(self) -> None:
        lo, hi = self.quantile_range
        if not (0.0 <= lo < hi <= 100.0):
            raise ValueError("quantile_range must satisfy 0 <= low < high <= 100")
        if not (self.degenerate_tol >= 0.0):
            raise ValueError("degenerate_tol must be >= 0")

    @property
    def q_low(self) -> float:
        return self.quantile_range[0] / 100.0

    @property
    def q_high(self) -> float:
        return self.quantile_range[1] / 100.0
