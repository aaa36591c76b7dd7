from __future__ import annotations

import logging
import sys
from typing import Optional

import typer
from rich.console import Console
from rich.table import Table

from .config import load_config
from .tasks import run_full_pipeline

logging.basicConfig(level=logging.INFO, format="%(asctime)s | %(levelname)s | %(message)s")
app = typer.Typer(add_completion=False)
console = Console()


def _strip_ipykernel_args(argv: list[str]) -> list[str]:
    """Jupyter/ipykernel injects `-f <connection_file>` into sys.argv."""
    out = [argv[0]]
    i = 1
    while i < len(argv):
        a = argv[i]
        if a in ("-f", "--f"):
            i += 2
            continue
        if a.startswith("--f="):
            i += 1
            continue
        out.append(a)
        i += 1
    return out


@app.command()
def run(
    csv_path: Optional[str] = None,
    output_dir: Optional[str] = None,
    horizon: int = 365,
    alpha: float = 0.05,
    season_length: int = 1,
):
    cfg = load_config(
        csv_path=csv_path,
        output_dir=output_dir,
        horizon=horizon,
        alpha=alpha,
        season_length=season_length,
    )

    results = run_full_pipeline(cfg)

    table = Table(title="Weather / Air Quality Analysis")
    table.add_column("Key", style="cyan")
    table.add_column("Value", style="green")

    for k, v in results.items():
        table.add_row(str(k), str(v))

    console.print(table)


if __name__ == "__main__":
    sys.argv = _strip_ipykernel_args(sys.argv)
    app(standalone_mode=False)
