from __future__ import annotations

import logging
from typing import Dict

import pandas as pd

from .config import AnalysisConfig
from .forecasting import ForecastResult, build_series_frame, forecast_series, plot_forecast
from .hypothesis import (
    ChiSquareResult,
    PearsonResult,
    chi_square_test,
    pearson_test,
    print_chi_square_report,
    print_pearson_report,
)
from .ingest import check_required_columns, load_observations, profile_observations
from .prepare import clean_observations, parse_timestamps, summarize_columns
from .stationarity import AdfResult, check_stationarity, print_stationarity_report
from .validate import print_cleaning_report, validate_clean
from .visualize import generate_charts

logger = logging.getLogger(__name__)


def load_and_clean(config: AnalysisConfig) -> pd.DataFrame:
    df_raw = load_observations(config.csv_path)
    check_required_columns(df_raw, config.required_columns())
    profile_observations(df_raw)

    df_clean, report = clean_observations(df_raw, numeric_columns=config.numeric_columns)
    print_cleaning_report(report)

    integrity = validate_clean(df_clean)
    if not integrity.is_valid:
        raise ValueError(
            f"Cleaned table failed integrity: {integrity.n_nulls} nulls; "
            f"{integrity.n_duplicates} duplicates"
        )
    if df_clean.empty:
        raise ValueError("No rows left after cleaning")

    summary = summarize_columns(df_clean, config.summary_columns)
    logger.info("[clean] summary statistics:\n%s", summary.to_string())
    return df_clean


def run_hypothesis_tests(df: pd.DataFrame, config: AnalysisConfig) -> Dict:
    pearson: PearsonResult = pearson_test(
        df,
        x=config.temperature_column,
        y=config.aqi_column,
        alpha=config.alpha,
    )
    print_pearson_report(pearson)

    chi2: ChiSquareResult = chi_square_test(
        df,
        x=config.temperature_column,
        y=config.aqi_column,
        n_bins=config.n_bins,
        labels=config.bin_labels,
        alpha=config.alpha,
    )
    print_chi_square_report(chi2)

    return {"pearson": pearson, "chi_square": chi2}


def run_stationarity(df: pd.DataFrame, config: AnalysisConfig) -> Dict[str, AdfResult]:
    results = check_stationarity(df, columns=config.stationarity_columns, alpha=config.alpha)
    print_stationarity_report(results)
    return results


def run_forecast(df: pd.DataFrame, config: AnalysisConfig, run_id: str) -> ForecastResult:
    df = parse_timestamps(df, column=config.timestamp_column, fmt=config.timestamp_format)
    series_df = build_series_frame(df, column=config.temperature_column, unique_id=config.series_id())

    result = forecast_series(
        series_df,
        horizon=config.horizon,
        season_length=config.season_length,
        levels=config.confidence_levels,
    )
    plot_forecast(result, config.report_path(run_id))
    return result


def run_full_pipeline(config: AnalysisConfig) -> Dict:
    run_id = config.run_id()
    report_dir = config.report_path(run_id)
    logger.info("[pipeline] run_id=%s csv=%s", run_id, config.csv_path)

    df = load_and_clean(config)
    charts = generate_charts(df, config, report_dir)
    tests = run_hypothesis_tests(df, config)
    adf = run_stationarity(df, config)
    forecast = run_forecast(df, config, run_id)

    pearson: PearsonResult = tests["pearson"]
    chi2: ChiSquareResult = tests["chi_square"]

    results = {
        "run_id": run_id,
        "report_dir": str(report_dir),
        "clean_rows": len(df),
        "pearson_r": round(pearson.coefficient, 4),
        "pearson_p_value": pearson.p_value,
        "pearson_correlated": pearson.is_significant,
        "chi2_statistic": round(chi2.statistic, 4),
        "chi2_p_value": chi2.p_value,
        "chi2_dependent": chi2.is_significant,
    }
    for col, res in adf.items():
        results[f"adf_{col}_p_value"] = res.p_value
        results[f"adf_{col}_stationary"] = res.is_stationary
    results["forecast_model"] = forecast.model_spec
    results["forecast_horizon"] = len(forecast.forecast)
    results["charts"] = len(charts) + 1

    return results
