"""
Step 4: Distribution and relationship charts

Charts for a first look at the cleaned table:
1. Temperature histograms (Celsius, Fahrenheit)
2. Temperature by country (boxplot)
3. Temperature vs humidity, temperature vs EPA index (scatter)
4. Pair plot of the core weather variables
5. Clustered correlation heatmap of the air-quality parameters

Every chart is saved as PNG in the run's report directory; nothing downstream
consumes them.
"""

from __future__ import annotations

import logging
import warnings
from pathlib import Path
from typing import Dict, Iterable, Optional, Tuple

import matplotlib.pyplot as plt
import numpy as np
import pandas as pd
from pandas.plotting import scatter_matrix
from scipy.cluster.hierarchy import leaves_list, linkage

from .config import AnalysisConfig

logger = logging.getLogger(__name__)

# Suppress matplotlib warnings for cleaner output
warnings.filterwarnings('ignore', category=UserWarning, module='matplotlib')

plt.rcParams['figure.figsize'] = (12, 6)
plt.rcParams['figure.dpi'] = 100


def _save(path: Path) -> Path:
    plt.tight_layout()
    plt.savefig(path, dpi=150, bbox_inches='tight')
    plt.close()
    logger.info("[plot] %s", path)
    return path


def histogram_edges(values: pd.Series, binwidth: float) -> np.ndarray:
    """Bin edges on multiples of binwidth that cover min..max."""
    lo, hi = float(values.min()), float(values.max())
    start = np.floor(lo / binwidth) * binwidth
    n_bins = max(1, int(np.ceil((hi - start) / binwidth)))
    if start + n_bins * binwidth < hi:
        n_bins += 1
    return start + binwidth * np.arange(n_bins + 1)


def plot_histogram(
    df: pd.DataFrame,
    column: str,
    output_dir: Path,
    binwidth: float = 2.0,
    title: Optional[str] = None,
    xlabel: Optional[str] = None,
) -> Path:
    output_dir.mkdir(parents=True, exist_ok=True)
    values = df[column].dropna()

    fig, ax = plt.subplots(figsize=(10, 6))
    ax.hist(values, bins=histogram_edges(values, binwidth), color='blue', edgecolor='black')
    ax.set_title(title or f'{column} Distribution')
    ax.set_xlabel(xlabel or column)
    ax.set_ylabel('Frequency')

    return _save(output_dir / f'hist_{column}.png')


def plot_boxplot_by_group(
    df: pd.DataFrame,
    value: str,
    group: str,
    output_dir: Path,
    title: Optional[str] = None,
    ylabel: Optional[str] = None,
) -> Path:
    """One box per group value, groups in sorted order."""
    output_dir.mkdir(parents=True, exist_ok=True)

    grouped = df.groupby(group)[value]
    names = sorted(grouped.groups.keys())
    data = [grouped.get_group(name).to_numpy() for name in names]

    fig, ax = plt.subplots(figsize=(max(10, 0.3 * len(names)), 6))
    ax.boxplot(data)
    ax.set_xticks(range(1, len(names) + 1))
    ax.set_xticklabels([str(n) for n in names], rotation=45, ha='right')
    ax.set_title(title or f'{value} by {group}')
    ax.set_xlabel(group)
    ax.set_ylabel(ylabel or value)
    ax.grid(True, alpha=0.3, axis='y')

    return _save(output_dir / f'box_{value}_by_{group}.png')


def plot_scatter(
    df: pd.DataFrame,
    x: str,
    y: str,
    output_dir: Path,
    title: Optional[str] = None,
    xlabel: Optional[str] = None,
    ylabel: Optional[str] = None,
    color: str = 'red',
) -> Path:
    output_dir.mkdir(parents=True, exist_ok=True)

    fig, ax = plt.subplots(figsize=(10, 6))
    ax.scatter(df[x], df[y], color=color, alpha=0.5, s=10)
    ax.set_title(title or f'{y} vs {x}')
    ax.set_xlabel(xlabel or x)
    ax.set_ylabel(ylabel or y)
    ax.grid(True, alpha=0.3)

    return _save(output_dir / f'scatter_{y}_vs_{x}.png')


def plot_pair_grid(
    df: pd.DataFrame,
    columns: Iterable[str],
    output_dir: Path,
) -> Path:
    """Scatter matrix with histograms on the diagonal and r in the upper triangle."""
    output_dir.mkdir(parents=True, exist_ok=True)
    columns = list(columns)
    frame = df[columns].apply(pd.to_numeric, errors='raise')
    corr = frame.corr()

    n = len(columns)
    axes = scatter_matrix(frame, figsize=(3 * n, 3 * n), diagonal='hist', alpha=0.3, s=8)

    for i in range(n):
        for j in range(i + 1, n):
            ax = axes[i, j]
            ax.cla()
            ax.set_xticks([])
            ax.set_yticks([])
            ax.text(
                0.5, 0.5, f'Corr:\n{corr.iloc[i, j]:.3f}',
                ha='center', va='center', fontsize=11, transform=ax.transAxes,
            )

    plt.suptitle('Weather Variables Pair Plot')
    return _save(output_dir / 'pair_plot_weather.png')


def cluster_order(corr: pd.DataFrame) -> list:
    """Leaf order of a complete-linkage, Euclidean clustering of the rows."""
    if len(corr) < 2:
        return list(corr.index)
    z = linkage(np.nan_to_num(corr.to_numpy()), method='complete', metric='euclidean')
    return [corr.index[i] for i in leaves_list(z)]


def plot_correlation_heatmap(
    df: pd.DataFrame,
    columns: Iterable[str],
    output_dir: Path,
    title: str = 'Air Quality Correlation Heatmap',
) -> Tuple[Path, pd.DataFrame]:
    """
    Pearson correlation heatmap with rows/columns reordered by clustering.

    Returns:
        (PNG path, clustered correlation matrix)
    """
    output_dir.mkdir(parents=True, exist_ok=True)
    columns = list(columns)

    corr = df[columns].apply(pd.to_numeric, errors='raise').dropna().corr()
    order = cluster_order(corr)
    corr = corr.loc[order, order]

    n = len(order)
    fig, ax = plt.subplots(figsize=(max(8, 1.4 * n), max(6, 1.2 * n)))
    im = ax.imshow(corr.to_numpy(), cmap='RdBu_r', vmin=-1, vmax=1)
    ax.set_xticks(range(n))
    ax.set_yticks(range(n))
    ax.set_xticklabels(order, rotation=45, ha='right')
    ax.set_yticklabels(order)
    for i in range(n):
        for j in range(n):
            ax.text(j, i, f'{corr.iat[i, j]:.2f}', ha='center', va='center', fontsize=9)
    fig.colorbar(im, ax=ax, label='Pearson r')
    ax.set_title(title)

    return _save(output_dir / 'air_quality_correlation_heatmap.png'), corr


def generate_charts(
    df: pd.DataFrame,
    config: AnalysisConfig,
    output_dir: Path,
) -> Dict[str, Path]:
    """Render every exploratory chart for the cleaned table."""
    temp = config.temperature_column
    charts: Dict[str, Path] = {}

    charts['hist_celsius'] = plot_histogram(
        df, temp, output_dir, binwidth=config.histogram_binwidth,
        title='Temperature Distribution (Celsius)', xlabel='Temperature (°C)',
    )
    charts['hist_fahrenheit'] = plot_histogram(
        df, config.temperature_f_column, output_dir, binwidth=config.histogram_binwidth,
        title='Temperature Distribution (Fahrenheit)', xlabel='Temperature (°F)',
    )
    charts['box_by_country'] = plot_boxplot_by_group(
        df, temp, config.country_column, output_dir,
        title='Temperature by Country', ylabel='Temperature (°C)',
    )
    charts['scatter_humidity'] = plot_scatter(
        df, config.humidity_column, temp, output_dir,
        title='Temperature vs. Humidity', xlabel='Humidity (%)', ylabel='Temperature (°C)',
    )
    charts['scatter_aqi'] = plot_scatter(
        df, temp, config.aqi_column, output_dir,
        title=f'Scatter Plot of Temperature vs {config.aqi_column}',
        xlabel='Temperature (°C)', ylabel=config.aqi_column, color='black',
    )
    charts['pair_plot'] = plot_pair_grid(df, config.weather_columns, output_dir)
    charts['heatmap'], _ = plot_correlation_heatmap(df, config.pollutant_columns, output_dir)

    return charts
