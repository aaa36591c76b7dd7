"""ADF stationarity checks."""

import warnings

import numpy as np
import pandas as pd
import pytest

from src.weather_aqi.stationarity import adf_test, check_stationarity, default_lag_order


class TestLagOrder:
    """Default lag order trunc((n - 1) ** (1/3))"""

    @pytest.mark.parametrize("n,expected", [(2, 1), (20, 2), (100, 4), (300, 6), (1000, 9)])
    def test_cube_root_rule(self, n, expected):
        """Lag order follows the cube-root rule"""
        assert default_lag_order(n) == expected


class TestAdf:
    """Augmented Dickey-Fuller test on one series"""

    def test_white_noise_is_stationary(self):
        """White noise rejects the unit root at 5%"""
        series = pd.Series(np.random.default_rng(0).normal(size=300), name="noise")

        res = adf_test(series)

        assert res.column == "noise"
        assert res.lag_order == 6
        assert res.n_obs == 300 - 6 - 1
        assert res.p_value < 0.05
        assert res.is_stationary
        assert set(res.critical_values) == {"1%", "5%", "10%"}
        assert res.statistic < res.critical_values["5%"]

    def test_explicit_lag_order(self):
        """An explicit lag order overrides the default"""
        series = pd.Series(np.random.default_rng(1).normal(size=200))

        res = adf_test(series, column="x", lag_order=2)

        assert res.lag_order == 2
        assert res.column == "x"

    def test_alpha_controls_verdict(self):
        """alpha = 0 never calls a series stationary"""
        series = pd.Series(np.random.default_rng(2).normal(size=150))

        res = adf_test(series, alpha=0.0)
        assert not res.is_stationary

    def test_no_future_warning(self):
        """The test regression is run without statsmodels deprecation noise"""
        series = pd.Series(np.random.default_rng(4).normal(size=120))

        with warnings.catch_warnings():
            warnings.simplefilter("error", FutureWarning)
            res = adf_test(series, column="x")

        assert isinstance(res.statistic, float)
        assert isinstance(res.critical_values["5%"], float)

    @pytest.mark.fail_loud
    def test_missing_values_raise(self):
        """NaN in the series should raise ValueError"""
        series = pd.Series([1.0, 2.0, np.nan, 1.5] * 20)
        with pytest.raises(ValueError):
            adf_test(series, column="humidity")


class TestCheckStationarity:
    """ADF over several columns of the cleaned table"""

    def test_each_column_tested(self, observations):
        """One result per requested column, in order"""
        results = check_stationarity(observations)

        assert list(results) == ["temperature_celsius", "humidity"]
        for col, res in results.items():
            assert res.column == col
            assert 0.0 <= res.p_value <= 1.0
            assert res.n_obs > 0
