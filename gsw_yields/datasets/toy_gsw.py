from __future__ import annotations

from typing import Optional

import numpy as np
import pandas as pd

from gsw_yields.config import columns, settings


def generate_toy_gsw_panel(
    start: str = settings.start_date,
    end: str = settings.end_date,
    seed: int = 123,
    svensson_from: Optional[str] = "1983-01-01",
    missing_prob: float = 0.002,
) -> pd.DataFrame:
    """
    Generate a synthetic daily (business-day) GSW parameter panel with:
    - slowly mean-reverting level, slope and curvature factors
    - a 3-factor Nelson-Siegel era (BETA3/TAU2 missing) before `svensson_from`
    - occasional rows with a missing core parameter

    Output columns:
    date, BETA0, BETA1, BETA2, BETA3, TAU1, TAU2 (nullable Float64)
    """
    rng = np.random.default_rng(seed)
    dates = pd.bdate_range(start=start, end=end)
    n = len(dates)

    def ar1(x0: float, mean: float, phi: float, sigma: float) -> np.ndarray:
        x = np.empty(n, dtype=float)
        x[0] = x0
        eps = rng.normal(0.0, sigma, size=n)
        for t in range(1, n):
            x[t] = mean + phi * (x[t - 1] - mean) + eps[t]
        return x

    beta0 = ar1(9.0, 8.0, 0.999, 0.04)
    beta1 = ar1(-2.0, -1.5, 0.998, 0.06)
    beta2 = ar1(-1.0, 0.0, 0.997, 0.10)
    beta3 = ar1(1.5, 1.0, 0.997, 0.10)
    # Decay parameters are kept positive by working in logs.
    tau1 = np.exp(ar1(np.log(1.5), np.log(1.5), 0.995, 0.02))
    tau2 = np.exp(ar1(np.log(9.0), np.log(9.0), 0.995, 0.02))

    df = pd.DataFrame(
        {
            columns.date: dates,
            columns.beta0: pd.array(beta0, dtype="Float64"),
            columns.beta1: pd.array(beta1, dtype="Float64"),
            columns.beta2: pd.array(beta2, dtype="Float64"),
            columns.beta3: pd.array(beta3, dtype="Float64"),
            columns.tau1: pd.array(tau1, dtype="Float64"),
            columns.tau2: pd.array(tau2, dtype="Float64"),
        }
    )

    if svensson_from is not None:
        early = df[columns.date] < pd.Timestamp(svensson_from)
        df.loc[early, [columns.beta3, columns.tau2]] = pd.NA

    if missing_prob > 0.0:
        holes = rng.random(n) < missing_prob
        df.loc[holes, columns.beta0] = pd.NA

    return df
