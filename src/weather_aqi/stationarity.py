"""
Step 6: Stationarity checks (Augmented Dickey-Fuller)

Each column is tested independently, in row order, with a constant + linear
trend and a fixed lag order of trunc((n - 1) ** (1/3)).
H0: unit root (non-stationary). p < alpha => stationary.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass
from typing import Dict, Iterable, Optional

import numpy as np
import pandas as pd
from statsmodels.tsa.stattools import adfuller

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class AdfResult:
    """Augmented Dickey-Fuller statistic, p-value and critical values for one column"""
    column: str
    statistic: float
    p_value: float
    lag_order: int
    n_obs: int
    critical_values: Dict[str, float]
    alpha: float = 0.05

    @property
    def is_stationary(self) -> bool:
        return bool(self.p_value < self.alpha)


def default_lag_order(n: int) -> int:
    return int(np.trunc((n - 1) ** (1.0 / 3.0)))


def adf_test(
    series: pd.Series,
    column: Optional[str] = None,
    lag_order: Optional[int] = None,
    alpha: float = 0.05,
) -> AdfResult:
    """
    Augmented Dickey-Fuller test on one numeric series.

    Args:
        series: Values in time order (no missing values)
        column: Name used in logs and the result (defaults to series.name)
        lag_order: Lagged differences in the test regression
        alpha: Significance level for is_stationary

    Returns:
        AdfResult
    """
    column = column or str(series.name)
    values = pd.to_numeric(series, errors="raise").to_numpy(dtype=float)

    if np.isnan(values).any():
        raise ValueError(f"ADF input '{column}' contains {int(np.isnan(values).sum())} missing values")

    k = default_lag_order(len(values)) if lag_order is None else lag_order

    stat, p_value, used_lag, n_obs, critical_values = adfuller(
        values,
        maxlag=k,
        regression="ct",
        autolag=None,
        result_object=False,
    )

    result = AdfResult(
        column=column,
        statistic=float(stat),
        p_value=float(p_value),
        lag_order=int(used_lag),
        n_obs=int(n_obs),
        critical_values={key: float(v) for key, v in critical_values.items()},
        alpha=alpha,
    )
    logger.info(
        "[adf] %s: stat=%.4f lag=%d p=%.4g stationary=%s",
        column,
        result.statistic,
        result.lag_order,
        result.p_value,
        result.is_stationary,
    )
    return result


def check_stationarity(
    df: pd.DataFrame,
    columns: Iterable[str] = ("temperature_celsius", "humidity"),
    alpha: float = 0.05,
) -> Dict[str, AdfResult]:
    """Run adf_test on each column; no differencing is applied to failures."""
    return {col: adf_test(df[col], column=col, alpha=alpha) for col in columns}


def print_stationarity_report(results: Dict[str, AdfResult]) -> None:
    """Print a human-readable ADF report"""
    print("\n=== Augmented Dickey-Fuller Test ===")
    for col, res in results.items():
        verdict = "stationary" if res.is_stationary else "non-stationary"
        print(f"{col}: Dickey-Fuller = {res.statistic:.4f}, Lag order = {res.lag_order}, "
              f"p-value = {res.p_value:.4g} ({verdict})")
