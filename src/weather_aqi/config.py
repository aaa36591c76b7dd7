from __future__ import annotations

import os
from dataclasses import dataclass, replace
from datetime import datetime, timezone
from pathlib import Path
from typing import Optional, Tuple

from dotenv import load_dotenv

CSV_PATH_ENV = "WEATHER_AQI_CSV"
OUTPUT_DIR_ENV = "WEATHER_AQI_OUTPUT_DIR"


@dataclass(frozen=True)
class AnalysisConfig:
    # IO
    csv_path: str = "data/GlobalWeatherRepository.csv"
    output_dir: str = "reports/weather_aqi"
    timestamp_format: Optional[str] = None  # e.g. "%m/%d/%Y %H:%M"; None lets pandas infer

    # Columns
    temperature_column: str = "temperature_celsius"
    temperature_f_column: str = "temperature_fahrenheit"
    humidity_column: str = "humidity"
    aqi_column: str = "air_quality_us.epa.index"
    country_column: str = "country"
    timestamp_column: str = "last_updated"
    numeric_columns: Tuple[str, ...] = ("humidity", "temperature_celsius")
    weather_columns: Tuple[str, ...] = (
        "temperature_celsius",
        "humidity",
        "wind_mph",
        "pressure_mb",
        "visibility_km",
    )
    pollutant_columns: Tuple[str, ...] = (
        "air_quality_Carbon_Monoxide",
        "air_quality_Ozone",
        "air_quality_Nitrogen_dioxide",
        "air_quality_Sulphur_dioxide",
        "air_quality_PM2.5",
        "air_quality_us.epa.index",
    )
    summary_columns: Tuple[str, ...] = (
        "temperature_celsius",
        "humidity",
        "wind_mph",
        "visibility_km",
    )

    # Hypothesis tests
    alpha: float = 0.05
    n_bins: int = 3
    bin_labels: Tuple[str, ...] = ("Low", "Medium", "High")

    # Stationarity
    stationarity_columns: Tuple[str, ...] = ("temperature_celsius", "humidity")

    # Forecasting
    horizon: int = 365
    season_length: int = 1
    confidence_levels: Tuple[int, ...] = (80, 95)

    # Plots
    histogram_binwidth: float = 2.0

    def run_id(self) -> str:
        return datetime.now(timezone.utc).strftime("%Y%m%d_%H%M%S")

    def series_id(self) -> str:
        return self.temperature_column

    def output_path(self) -> Path:
        return Path(self.output_dir)

    def report_path(self, run_id: str) -> Path:
        return self.output_path() / run_id

    def required_columns(self) -> list[str]:
        """Every column some stage of the pipeline reads."""
        cols = [
            self.temperature_column,
            self.temperature_f_column,
            self.humidity_column,
            self.aqi_column,
            self.country_column,
            self.timestamp_column,
            *self.weather_columns,
            *self.pollutant_columns,
            *self.summary_columns,
            *self.stationarity_columns,
        ]
        return list(dict.fromkeys(cols))


def load_config(**overrides) -> AnalysisConfig:
    """
    Build the analysis config.

    Reads WEATHER_AQI_CSV / WEATHER_AQI_OUTPUT_DIR from .env or the
    environment; explicit keyword overrides win over both.
    """
    load_dotenv()

    cfg = AnalysisConfig()
    env_values = {}
    csv_path = os.getenv(CSV_PATH_ENV)
    if csv_path:
        env_values["csv_path"] = csv_path
    output_dir = os.getenv(OUTPUT_DIR_ENV)
    if output_dir:
        env_values["output_dir"] = output_dir

    env_values.update({k: v for k, v in overrides.items() if v is not None})
    return replace(cfg, **env_values)
