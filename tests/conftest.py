"""Shared synthetic observation tables (no real CSV, no network)."""

import matplotlib

matplotlib.use("Agg")

import numpy as np
import pandas as pd
import pytest

COUNTRIES = ["India", "Brazil", "Norway", "Kenya"]


def make_observations(n: int = 120, seed: int = 0) -> pd.DataFrame:
    """Weather/air-quality table shaped like the Global Weather Repository CSV."""
    rng = np.random.default_rng(seed)

    temp_c = rng.normal(20, 8, n).round(1)
    scaled = (temp_c - temp_c.min()) / (temp_c.max() - temp_c.min())
    epa = np.clip(np.round(1 + 4 * scaled + rng.normal(0, 0.7, n)), 1, 6).astype(int)

    return pd.DataFrame({
        "country": rng.choice(COUNTRIES, n),
        "last_updated": pd.date_range("2024-05-16 13:15", periods=n, freq="h").strftime("%Y-%m-%d %H:%M"),
        "temperature_celsius": temp_c,
        "temperature_fahrenheit": (temp_c * 9 / 5 + 32).round(1),
        "humidity": rng.integers(20, 96, n),
        "wind_mph": rng.gamma(2.0, 3.0, n).round(1),
        "pressure_mb": rng.normal(1013, 6, n).round(0),
        "visibility_km": rng.choice([5.0, 8.0, 10.0], n),
        "air_quality_Carbon_Monoxide": rng.gamma(4.0, 80.0, n).round(1),
        "air_quality_Ozone": rng.gamma(5.0, 12.0, n).round(1),
        "air_quality_Nitrogen_dioxide": rng.gamma(2.0, 6.0, n).round(1),
        "air_quality_Sulphur_dioxide": rng.gamma(1.5, 3.0, n).round(1),
        "air_quality_PM2.5": (5 + 8 * epa + rng.normal(0, 3, n)).clip(0.5).round(1),
        "air_quality_us.epa.index": epa,
    })


def make_raw_observations(n: int = 120, seed: int = 0) -> pd.DataFrame:
    """Synthetic table plus 2 rows with missing values, 1 bad humidity, 3 duplicates."""
    df = make_observations(n, seed).astype({"humidity": object})
    df.loc[3, "wind_mph"] = np.nan
    df.loc[7, "air_quality_Ozone"] = np.nan
    df.loc[11, "humidity"] = "n/a"
    dups = df.iloc[[20, 21, 22]]
    return pd.concat([df, dups], ignore_index=True)


@pytest.fixture
def observations() -> pd.DataFrame:
    return make_observations()


@pytest.fixture
def raw_observations() -> pd.DataFrame:
    return make_raw_observations()


@pytest.fixture
def raw_csv(tmp_path):
    """Raw table written with the published header spelling of the EPA index."""
    df = make_raw_observations().rename(
        columns={"air_quality_us.epa.index": "air_quality_us-epa-index"}
    )
    path = tmp_path / "GlobalWeatherRepository.csv"
    df.to_csv(path, index=False)
    return path
