"""
Step 3: Validate the cleaned table

Hard gates after cleaning:
- No missing values in any column
- No exact-duplicate rows
"""

from dataclasses import dataclass
from typing import List

import pandas as pd


@dataclass(frozen=True)
class CleaningReport:
    """Counts observed while cleaning the raw table"""
    raw_rows: int
    n_missing_values: int
    rows_with_missing: int
    n_duplicates: int
    n_coerced: int
    clean_rows: int

    @property
    def rows_removed(self) -> int:
        return self.raw_rows - self.clean_rows


@dataclass(frozen=True)
class IntegrityResult:
    """Results of the post-clean integrity check"""
    is_valid: bool
    n_rows: int
    n_nulls: int
    n_duplicates: int
    null_columns: List[str]


def validate_clean(df: pd.DataFrame) -> IntegrityResult:
    """
    Check the cleaning invariants.

    Args:
        df: Cleaned observation table

    Returns:
        IntegrityResult with detailed findings
    """
    null_counts = df.isna().sum()
    n_nulls = int(null_counts.sum())
    null_columns = sorted(null_counts[null_counts > 0].index.tolist())
    n_duplicates = int(df.duplicated().sum())

    return IntegrityResult(
        is_valid=(n_nulls == 0) and (n_duplicates == 0),
        n_rows=len(df),
        n_nulls=n_nulls,
        n_duplicates=n_duplicates,
        null_columns=null_columns,
    )


def print_cleaning_report(report: CleaningReport) -> None:
    """Print a human-readable cleaning report"""
    print("\n=== Cleaning Report ===")
    print(f"Raw rows: {report.raw_rows}")
    print(f"Missing values: {report.n_missing_values} (in {report.rows_with_missing} rows)")
    print(f"Values coerced to missing: {report.n_coerced}")
    print(f"Duplicate rows: {report.n_duplicates}")
    print(f"Clean rows: {report.clean_rows} ({report.rows_removed} removed)")


def print_integrity_report(result: IntegrityResult) -> None:
    """Print a human-readable integrity report"""
    status = "PASS" if result.is_valid else "FAIL"
    print(f"\n=== Integrity Report: {status} ===")
    print(f"Rows: {result.n_rows}")
    print(f"Null values: {result.n_nulls}")
    if result.null_columns:
        print(f"  Columns with nulls: {result.null_columns[:5]}")
    print(f"Duplicates: {result.n_duplicates}")
