"""
Weather / air-quality statistical analysis (temperature vs US EPA index).

Modules:
- config: analysis configuration and paths
- ingest: CSV loading + required-column gate
- prepare: numeric coercion, missing/duplicate removal, summaries
- validate: cleaning report + post-clean integrity check
- visualize: histograms, boxplot, scatter, pair plot, clustered heatmap
- hypothesis: Pearson correlation + Chi-Square test of independence
- stationarity: Augmented Dickey-Fuller tests
- forecasting: AutoARIMA temperature forecast
- tasks: sequential pipeline
"""

from .config import AnalysisConfig, load_config
from .hypothesis import bin_equal_width, build_contingency_table, chi_square_test, pearson_test
from .ingest import check_required_columns, load_observations
from .prepare import clean_observations, parse_timestamps, summarize_columns
from .stationarity import adf_test, check_stationarity
from .forecasting import build_series_frame, forecast_series

__all__ = [
    "AnalysisConfig",
    "load_config",
    "load_observations",
    "check_required_columns",
    "clean_observations",
    "parse_timestamps",
    "summarize_columns",
    "pearson_test",
    "bin_equal_width",
    "build_contingency_table",
    "chi_square_test",
    "adf_test",
    "check_stationarity",
    "build_series_frame",
    "forecast_series",
]
