"""
Step 5: Hypothesis tests (temperature vs air quality)

H0: temperature and air quality are not correlated.
H1: temperature and air quality are correlated.

Two tests, same decision rule (reject H0 when p < alpha):
1. Pearson correlation on the raw numeric pairs
2. Chi-Square test of independence on equal-width Low/Medium/High bands
"""

from __future__ import annotations

import logging
from dataclasses import dataclass
from typing import Sequence, Tuple

import numpy as np
import pandas as pd
from scipy import stats

logger = logging.getLogger(__name__)

DEFAULT_LABELS: Tuple[str, ...] = ("Low", "Medium", "High")


@dataclass(frozen=True)
class PearsonResult:
    """Pearson product-moment correlation with a two-tailed p-value"""
    x: str
    y: str
    coefficient: float
    statistic: float
    p_value: float
    dof: int
    ci_low: float
    ci_high: float
    n: int
    alpha: float = 0.05

    @property
    def is_significant(self) -> bool:
        return bool(self.p_value < self.alpha)

    @property
    def conclusion(self) -> str:
        if self.is_significant:
            return (
                f"As there exists a statistical significance between {self.x} and {self.y}, "
                "these variables are correlated."
            )
        return (
            f"As there is no statistical significance between {self.x} and {self.y}, "
            "these variables are not correlated."
        )


@dataclass(frozen=True)
class BinningResult:
    """Ordinal bands plus the bin edges that produced them"""
    categories: pd.Series
    edges: np.ndarray

    @property
    def intervals(self) -> pd.IntervalIndex:
        return pd.IntervalIndex.from_breaks(self.edges, closed="right")


@dataclass(frozen=True)
class ChiSquareResult:
    """Chi-Square test of independence on a contingency table"""
    statistic: float
    p_value: float
    dof: int
    contingency: pd.DataFrame
    expected: np.ndarray
    alpha: float = 0.05

    @property
    def n(self) -> int:
        return int(self.contingency.to_numpy().sum())

    @property
    def is_significant(self) -> bool:
        return bool(self.p_value < self.alpha)

    @property
    def conclusion(self) -> str:
        if self.is_significant:
            return (
                "As there exists a statistical significance between the categories, "
                "these variables are dependent (i.e., correlated)."
            )
        return (
            "As there is no statistical significance between the categories, "
            "these variables are independent (i.e., not-correlated)."
        )


def _complete_pairs(df: pd.DataFrame, x: str, y: str) -> pd.DataFrame:
    pairs = df[[x, y]].apply(pd.to_numeric, errors="raise")
    return pairs.dropna()


def pearson_test(
    df: pd.DataFrame,
    x: str = "temperature_celsius",
    y: str = "air_quality_us.epa.index",
    alpha: float = 0.05,
    confidence_level: float = 0.95,
) -> PearsonResult:
    """
    Pearson correlation between two numeric columns.

    Incomplete pairs are dropped. At least 3 complete pairs are required.

    Returns:
        PearsonResult with coefficient in [-1, 1], t statistic, p-value and CI
    """
    pairs = _complete_pairs(df, x, y)
    n = len(pairs)
    if n < 3:
        raise ValueError(f"Pearson test needs at least 3 complete pairs, got {n}")

    constant = [col for col in (x, y) if pairs[col].nunique() < 2]
    if constant:
        raise ValueError(f"Pearson test undefined: zero variance in {constant}")

    res = stats.pearsonr(pairs[x].to_numpy(), pairs[y].to_numpy())
    r = float(np.clip(res.statistic, -1.0, 1.0))
    dof = n - 2

    with np.errstate(divide="ignore", invalid="ignore"):
        t_stat = float(r * np.sqrt(dof / (1.0 - r**2)))

    ci = res.confidence_interval(confidence_level=confidence_level)

    result = PearsonResult(
        x=x,
        y=y,
        coefficient=r,
        statistic=t_stat,
        p_value=float(res.pvalue),
        dof=dof,
        ci_low=float(ci.low),
        ci_high=float(ci.high),
        n=n,
        alpha=alpha,
    )
    logger.info("[pearson] r=%.4f t=%.4f p=%.4g n=%d", r, t_stat, result.p_value, n)
    return result


def bin_equal_width(
    values: pd.Series,
    n_bins: int = 3,
    labels: Sequence[str] = DEFAULT_LABELS,
) -> BinningResult:
    """
    Bucket values into n_bins equal-width, right-closed intervals.

    The lowest edge sits 0.1% of the range below the minimum so the minimum
    falls inside the first bin. Missing values stay missing.
    """
    if len(labels) != n_bins:
        raise ValueError(f"Expected {n_bins} labels, got {len(labels)}")

    numeric = pd.to_numeric(values, errors="raise")
    categories, edges = pd.cut(numeric, bins=n_bins, labels=list(labels), retbins=True)
    return BinningResult(categories=categories, edges=np.asarray(edges))


def build_contingency_table(
    df: pd.DataFrame,
    x: str = "temperature_celsius",
    y: str = "air_quality_us.epa.index",
    n_bins: int = 3,
    labels: Sequence[str] = DEFAULT_LABELS,
) -> pd.DataFrame:
    """
    Cross-tabulate the binned x (rows) against the binned y (columns).

    Every label appears on both axes, zero-filled. The grand total equals
    the number of complete (x, y) pairs.
    """
    pairs = _complete_pairs(df, x, y)
    x_bins = bin_equal_width(pairs[x], n_bins=n_bins, labels=labels).categories
    y_bins = bin_equal_width(pairs[y], n_bins=n_bins, labels=labels).categories

    table = pd.crosstab(x_bins.astype(str), y_bins.astype(str))
    table = table.reindex(index=list(labels), columns=list(labels), fill_value=0)
    table.index.name = f"{x}_category"
    table.columns.name = f"{y}_category"
    return table.astype(int)


def chi_square_test(
    df: pd.DataFrame,
    x: str = "temperature_celsius",
    y: str = "air_quality_us.epa.index",
    n_bins: int = 3,
    labels: Sequence[str] = DEFAULT_LABELS,
    alpha: float = 0.05,
) -> ChiSquareResult:
    """
    Chi-Square test of independence on equal-width bands of x and y.

    Rows/columns with a zero total carry no information and are left out of
    the statistic; the returned contingency table keeps them.
    """
    table = build_contingency_table(df, x=x, y=y, n_bins=n_bins, labels=labels)

    observed = table.loc[table.sum(axis=1) > 0, table.sum(axis=0) > 0]
    if observed.shape[0] < 2 or observed.shape[1] < 2:
        raise ValueError(
            f"Chi-square test needs at least a 2x2 table with non-zero margins, "
            f"got {observed.shape[0]}x{observed.shape[1]}"
        )

    statistic, p_value, dof, expected = stats.chi2_contingency(observed.to_numpy())
    if (expected < 5).any():
        logger.warning("[chi2] expected counts below 5; the approximation may be incorrect")

    result = ChiSquareResult(
        statistic=float(statistic),
        p_value=float(p_value),
        dof=int(dof),
        contingency=table,
        expected=np.asarray(expected),
        alpha=alpha,
    )
    logger.info("[chi2] X2=%.4f dof=%d p=%.4g n=%d", result.statistic, result.dof, result.p_value, result.n)
    return result


def print_pearson_report(result: PearsonResult) -> None:
    """Print a human-readable Pearson report"""
    print(f"\n=== Pearson Correlation: {result.x} vs {result.y} ===")
    print(f"Pearson Correlation Coefficient: {result.coefficient:.4f}")
    print(f"t = {result.statistic:.4f}, df = {result.dof}")
    print(f"95% CI: [{result.ci_low:.4f}, {result.ci_high:.4f}]")
    print(f"p-value: {result.p_value:.4g}")
    print(result.conclusion)


def print_chi_square_report(result: ChiSquareResult) -> None:
    """Print a human-readable Chi-Square report"""
    print("\n=== Chi-Square Test of Independence ===")
    print(result.contingency.to_string())
    print(f"Chi-Square Test Statistic: {result.statistic:.4f} (df = {result.dof})")
    print(f"p-value: {result.p_value:.4g}")
    print(result.conclusion)
