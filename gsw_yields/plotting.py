from __future__ import annotations

import os
import tempfile
from pathlib import Path
from typing import Sequence

import numpy as np
import pandas as pd


def get_pyplot(disable_plots: bool = False):
    """
    Return matplotlib.pyplot with a safe backend/config for local or headless runs.
    """
    if "MPLCONFIGDIR" not in os.environ:
        mpl_dir = Path(tempfile.gettempdir()) / "gsw_yields_mpl"
        mpl_dir.mkdir(parents=True, exist_ok=True)
        os.environ["MPLCONFIGDIR"] = str(mpl_dir)

    import matplotlib

    if disable_plots and "MPLBACKEND" not in os.environ:
        matplotlib.use("Agg", force=True)
    elif "DISPLAY" not in os.environ and "MPLBACKEND" not in os.environ:
        matplotlib.use("Agg", force=True)

    import matplotlib.pyplot as plt

    return plt


def plot_series(
    plt,
    df: pd.DataFrame,
    x: str,
    ys: Sequence[str],
    title: str,
    ylabel: str,
    out_path: Path,
) -> Path:
    """
    Line plot of one or more columns against `x`, saved to out_path.
    Missing cells are left as gaps.
    """
    fig, ax = plt.subplots()
    for col in ys:
        ax.plot(df[x], df[col].to_numpy(dtype=float, na_value=np.nan), label=col)
    ax.set_title(title)
    ax.set_xlabel(x)
    ax.set_ylabel(ylabel)
    if len(ys) > 1:
        ax.legend()
    fig.savefig(out_path, dpi=150, bbox_inches="tight")
    plt.close(fig)
    return out_path
