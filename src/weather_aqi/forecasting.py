"""
Step 7: Temperature forecast (AutoARIMA)

The temperature column is read in row order as one evenly spaced series
with integer steps 1..n. StatsForecast selects the ARIMA order and returns
point forecasts plus prediction intervals for every requested level.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass
from pathlib import Path
from typing import Tuple

import matplotlib.pyplot as plt
import numpy as np
import pandas as pd

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class ForecastResult:
    history: pd.DataFrame
    forecast: pd.DataFrame
    model_name: str
    model_spec: str
    horizon: int
    levels: Tuple[int, ...]


def build_series_frame(
    df: pd.DataFrame,
    column: str = "temperature_celsius",
    unique_id: str = "temperature_celsius",
) -> pd.DataFrame:
    """
    Reshape one column into StatsForecast's [unique_id, ds, y] format.

    ds is an integer step (1..n); rows keep their table order.
    """
    y = pd.to_numeric(df[column], errors="raise").to_numpy(dtype=float)
    if np.isnan(y).any():
        raise ValueError(f"Series '{column}' contains missing values")

    return pd.DataFrame({
        "unique_id": unique_id,
        "ds": np.arange(1, len(y) + 1, dtype=int),
        "y": y,
    })


def _standardize_forecast_columns(
    fc: pd.DataFrame,
    model_name: str,
    levels: Tuple[int, ...],
) -> pd.DataFrame:
    """Rename model-specific columns to yhat / yhat_lo_<L> / yhat_hi_<L>."""
    if "unique_id" not in fc.columns:
        fc = fc.reset_index()

    result = fc[["unique_id", "ds"]].copy()
    result["yhat"] = fc[model_name].to_numpy()
    for level in levels:
        result[f"yhat_lo_{level}"] = fc[f"{model_name}-lo-{level}"].to_numpy()
        result[f"yhat_hi_{level}"] = fc[f"{model_name}-hi-{level}"].to_numpy()

    return result.reset_index(drop=True)


def forecast_series(
    series_df: pd.DataFrame,
    horizon: int = 365,
    season_length: int = 1,
    levels: Tuple[int, ...] = (80, 95),
) -> ForecastResult:
    """
    Fit AutoARIMA on the whole series and forecast `horizon` steps ahead.

    Args:
        series_df: [unique_id, ds, y] with integer ds
        horizon: Number of future steps (output always has exactly this many rows)
        season_length: 1 for a non-seasonal model
        levels: Prediction-interval levels in percent

    Returns:
        ForecastResult with history and standardized forecast frames
    """
    from statsforecast import StatsForecast
    from statsforecast.arima import arima_string
    from statsforecast.models import AutoARIMA

    if horizon < 1:
        raise ValueError(f"horizon must be positive, got {horizon}")

    levels = tuple(sorted(levels))
    model = AutoARIMA(season_length=season_length)
    model_name = "AutoARIMA"

    sf = StatsForecast(models=[model], freq=1, n_jobs=1)
    sf.fit(df=series_df)
    raw = sf.predict(h=horizon, level=list(levels))

    fitted_model = sf.fitted_[0, 0]
    model_spec = arima_string(fitted_model.model_)

    forecast = _standardize_forecast_columns(raw, model_name, levels)
    logger.info(
        "[forecast] %s fitted on %d obs, %d-step forecast",
        model_spec,
        len(series_df),
        len(forecast),
    )

    return ForecastResult(
        history=series_df.reset_index(drop=True),
        forecast=forecast,
        model_name=model_name,
        model_spec=model_spec,
        horizon=horizon,
        levels=levels,
    )


def plot_forecast(
    result: ForecastResult,
    output_dir: Path,
    title: str = "Temperature Forecast",
    ylabel: str = "Temperature (°C)",
) -> Path:
    """History, point forecast and shaded prediction intervals."""
    output_dir.mkdir(parents=True, exist_ok=True)

    fig, ax = plt.subplots(figsize=(12, 6))
    ax.plot(result.history["ds"], result.history["y"], color="black", linewidth=0.8, label="Observed")

    fc = result.forecast
    # Widest band first so narrower bands draw on top
    for level, alpha in zip(sorted(result.levels, reverse=True), (0.25, 0.45, 0.65)):
        ax.fill_between(
            fc["ds"],
            fc[f"yhat_lo_{level}"],
            fc[f"yhat_hi_{level}"],
            color="steelblue",
            alpha=alpha,
            label=f"{level}% interval",
        )
    ax.plot(fc["ds"], fc["yhat"], color="blue", linewidth=1.2, label="Forecast")

    ax.set_title(f"{title} - {result.model_spec}", fontsize=10)
    ax.set_xlabel("Time step")
    ax.set_ylabel(ylabel)
    ax.legend(loc="upper left")
    ax.grid(True, alpha=0.3)

    path = output_dir / "temperature_forecast.png"
    plt.tight_layout()
    plt.savefig(path, dpi=150, bbox_inches="tight")
    plt.close()

    logger.info("[plot] %s", path)
    return path
