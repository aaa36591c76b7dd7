"""AutoARIMA temperature forecast."""

import numpy as np
import pandas as pd
import pytest

from src.weather_aqi.forecasting import build_series_frame, forecast_series, plot_forecast


def _temperature_frame(n: int, seed: int = 0) -> pd.DataFrame:
    rng = np.random.default_rng(seed)
    y = 20 + np.zeros(n)
    for t in range(1, n):
        y[t] = 20 + 0.6 * (y[t - 1] - 20) + rng.normal(0, 1.5)
    return pd.DataFrame({"temperature_celsius": y.round(2)})


class TestBuildSeriesFrame:
    """Long-format [unique_id, ds, y] frame for statsforecast"""

    def test_integer_steps_in_row_order(self):
        """ds is 1..n in row order, y copied unchanged"""
        df = pd.DataFrame({"temperature_celsius": [21.0, 19.5, 23.1]})

        series_df = build_series_frame(df)

        assert list(series_df.columns) == ["unique_id", "ds", "y"]
        assert list(series_df["ds"]) == [1, 2, 3]
        assert list(series_df["y"]) == [21.0, 19.5, 23.1]
        assert (series_df["unique_id"] == "temperature_celsius").all()

    @pytest.mark.fail_loud
    def test_missing_values_raise(self):
        """NaN in the target column should raise ValueError"""
        df = pd.DataFrame({"temperature_celsius": [21.0, np.nan, 23.1]})
        with pytest.raises(ValueError):
            build_series_frame(df)


@pytest.mark.slow
class TestForecastSeries:
    """AutoARIMA fit and h-step forecast with intervals"""

    @pytest.mark.parametrize("n", [40, 150, 500])
    def test_horizon_length_independent_of_series_length(self, n):
        """Always exactly horizon rows, continuing after the last step"""
        series_df = build_series_frame(_temperature_frame(n))

        result = forecast_series(series_df, horizon=365)

        assert len(result.forecast) == 365
        assert result.horizon == 365
        assert list(result.forecast["ds"]) == list(range(n + 1, n + 366))

    def test_intervals_nested(self):
        """95% band contains the 80% band, which contains the point forecast"""
        series_df = build_series_frame(_temperature_frame(120))

        fc = forecast_series(series_df, horizon=30, levels=(95, 80)).forecast

        assert fc[["yhat", "yhat_lo_80", "yhat_hi_80", "yhat_lo_95", "yhat_hi_95"]].notna().all().all()
        assert (fc["yhat_lo_95"] <= fc["yhat_lo_80"] + 1e-9).all()
        assert (fc["yhat_lo_80"] <= fc["yhat"] + 1e-9).all()
        assert (fc["yhat"] <= fc["yhat_hi_80"] + 1e-9).all()
        assert (fc["yhat_hi_80"] <= fc["yhat_hi_95"] + 1e-9).all()

    def test_model_spec_reported(self):
        """Fitted ARIMA order and interval levels are reported"""
        result = forecast_series(build_series_frame(_temperature_frame(100)), horizon=10)

        assert result.model_name == "AutoARIMA"
        assert "ARIMA(" in result.model_spec
        assert result.levels == (80, 95)

    def test_history_kept(self):
        """Training frame is returned unchanged"""
        series_df = build_series_frame(_temperature_frame(60))

        result = forecast_series(series_df, horizon=5)

        pd.testing.assert_frame_equal(result.history, series_df)

    def test_non_positive_horizon_raises(self):
        """horizon <= 0 should raise ValueError"""
        with pytest.raises(ValueError):
            forecast_series(build_series_frame(_temperature_frame(30)), horizon=0)

    def test_plot_written(self, tmp_path):
        """Forecast chart is saved as PNG"""
        result = forecast_series(build_series_frame(_temperature_frame(80)), horizon=20)

        path = plot_forecast(result, tmp_path / "charts")

        assert path.exists()
        assert path.name == "temperature_forecast.png"
