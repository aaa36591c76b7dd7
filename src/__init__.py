"""
Weather & Air Quality Analysis

Modules:
- weather_aqi: temperature vs air-quality statistics (cleaning, charts,
  Pearson / Chi-Square tests, ADF stationarity, AutoARIMA forecast)
"""
