"""
Weather / Air Quality Test Suite

Tests organized by pipeline step:
- test_config.py: configuration defaults and env overrides
- test_ingest.py: CSV loading + required-column gate
- test_prepare.py: cleaning, timestamps, summaries, integrity
- test_hypothesis.py: Pearson, binning, contingency table, Chi-Square
- test_stationarity.py: ADF tests
- test_forecasting.py: AutoARIMA horizon + intervals
- test_visualize.py: chart files
- test_smoke.py: full pipeline + CLI on synthetic data
"""
