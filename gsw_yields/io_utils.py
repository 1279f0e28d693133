from __future__ import annotations

from pathlib import Path
from typing import Iterable

import pandas as pd

from gsw_yields.config import Settings, settings
from gsw_yields.datasets.gsw_file import read_gsw_csv

TOY_PANEL_FILENAME = "toy_gsw_parameters.csv"
GSW_FILENAME = "feds200628.csv"


def ensure_dirs_exist(paths: Iterable[Path]) -> None:
    """
    Create directories if they do not exist.
    Safe to run multiple times.
    """
    for p in paths:
        p.mkdir(parents=True, exist_ok=True)


def toy_panel_path(cfg: Settings = settings) -> Path:
    return cfg.processed_dir / TOY_PANEL_FILENAME


def gsw_file_path(cfg: Settings = settings) -> Path:
    """Where a downloaded copy of the Federal Reserve file is expected."""
    return cfg.raw_dir / GSW_FILENAME


def load_toy_panel(date_range=None) -> pd.DataFrame:
    """
    Load the synthetic panel written by build_toy_data.
    """
    path = toy_panel_path()
    if not path.exists():
        raise FileNotFoundError(f"{path} not found; run `python -m gsw_yields.build_toy_data` first")
    return read_gsw_csv(path, date_range=date_range)
