"""
Step 2: Clean the observation table

Steps:
1. Coerce numeric fields (humidity, temperature) so bad values become missing
2. Drop rows with any missing field
3. Drop exact-duplicate rows
4. Parse the last_updated timestamp (separate step, raises on bad values)
"""

from __future__ import annotations

import logging
from typing import Iterable, Optional, Tuple

import pandas as pd

from .validate import CleaningReport

logger = logging.getLogger(__name__)


def coerce_numeric(df: pd.DataFrame, columns: Iterable[str]) -> Tuple[pd.DataFrame, int]:
    """
    Convert columns to numeric; unparseable values become NaN.

    Returns:
        (DataFrame copy, number of non-missing values that failed to parse)
    """
    df = df.copy()
    n_coerced = 0

    for col in columns:
        before = df[col].notna()
        df[col] = pd.to_numeric(df[col], errors="coerce")
        n_coerced += int((before & df[col].isna()).sum())

    return df, n_coerced


def clean_observations(
    df: pd.DataFrame,
    numeric_columns: Iterable[str] = ("humidity", "temperature_celsius"),
) -> Tuple[pd.DataFrame, CleaningReport]:
    """
    Remove missing and duplicate rows.

    Args:
        df: Raw observation table
        numeric_columns: Columns forced to numeric before dropping missing rows

    Returns:
        (clean DataFrame with a fresh RangeIndex, CleaningReport)
    """
    raw_rows = len(df)
    work, n_coerced = coerce_numeric(df, numeric_columns)

    n_missing_values = int(work.isna().sum().sum())
    rows_with_missing = int(work.isna().any(axis=1).sum())
    logger.info("[clean] missing values: %d (%d rows)", n_missing_values, rows_with_missing)
    if n_coerced:
        logger.info("[clean] %d values could not be parsed as numbers", n_coerced)

    work = work.dropna()

    duplicated = work.duplicated()
    n_duplicates = int(duplicated.sum())
    if n_duplicates:
        logger.info("[clean] duplicate rows:\n%s", work[duplicated].head(10).to_string())
    work = work[~duplicated].reset_index(drop=True)

    report = CleaningReport(
        raw_rows=raw_rows,
        n_missing_values=n_missing_values,
        rows_with_missing=rows_with_missing,
        n_duplicates=n_duplicates,
        n_coerced=n_coerced,
        clean_rows=len(work),
    )
    logger.info("[clean] %d -> %d rows", raw_rows, len(work))
    return work, report


def parse_timestamps(
    df: pd.DataFrame,
    column: str = "last_updated",
    fmt: Optional[str] = None,
) -> pd.DataFrame:
    """
    Parse a timestamp column to UTC datetimes.

    Row order is left untouched: the forecaster treats rows as the time axis.
    Unparseable values raise instead of becoming NaT.
    """
    df = df.copy()
    df[column] = pd.to_datetime(df[column], format=fmt, utc=True, errors="raise")

    logger.info("[clean] %s: %s to %s", column, df[column].min(), df[column].max())
    return df


def summarize_columns(df: pd.DataFrame, columns: Iterable[str]) -> pd.DataFrame:
    """
    Min / quartiles / median / mean / max per column.

    Returns:
        DataFrame indexed by column name
    """
    columns = list(columns)
    numeric = df[columns].apply(pd.to_numeric, errors="raise")

    summary = pd.DataFrame({
        "min": numeric.min(),
        "q1": numeric.quantile(0.25),
        "median": numeric.median(),
        "mean": numeric.mean(),
        "q3": numeric.quantile(0.75),
        "max": numeric.max(),
    })
    summary.index.name = "column"
    return summary
