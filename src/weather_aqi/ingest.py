"""
Step 1: Load the observation table

Reads the weather/air-quality CSV into a DataFrame:
- Canonical column names (`air_quality_us-epa-index` -> `air_quality_us.epa.index`)
- Hard gate on required columns before any analysis runs
"""

from __future__ import annotations

import logging
from pathlib import Path
from typing import Any, Dict, Iterable, Union

import pandas as pd

logger = logging.getLogger(__name__)


def canonicalize_columns(df: pd.DataFrame) -> pd.DataFrame:
    """Replace '-' with '.' in column names so both header spellings resolve."""
    renamed = {c: c.strip().replace("-", ".") for c in df.columns}
    return df.rename(columns=renamed)


def load_observations(path: Union[str, Path]) -> pd.DataFrame:
    """
    Load the observation CSV.

    Args:
        path: Local CSV path

    Returns:
        DataFrame with canonical column names, rows in file order
    """
    path = Path(path)
    df = pd.read_csv(path)
    df = canonicalize_columns(df)

    logger.info("[load] %s: %d rows x %d cols", path, len(df), df.shape[1])
    return df


def check_required_columns(df: pd.DataFrame, columns: Iterable[str]) -> None:
    """Raise ValueError naming every required column the table lacks."""
    missing = sorted(set(columns) - set(df.columns))
    if missing:
        raise ValueError(f"Missing required columns: {missing}")


def profile_observations(df: pd.DataFrame) -> Dict[str, Any]:
    """
    Quick structural preview of the raw table.

    Returns:
        Dict with rows, columns, dtypes and total missing values
    """
    profile = {
        "rows": int(len(df)),
        "columns": int(df.shape[1]),
        "dtypes": {col: str(dtype) for col, dtype in df.dtypes.items()},
        "missing_values": int(df.isna().sum().sum()),
    }

    logger.info("[load] preview:\n%s", df.head().to_string())
    logger.info(
        "[load] rows=%d cols=%d missing_values=%d",
        profile["rows"],
        profile["columns"],
        profile["missing_values"],
    )
    return profile
