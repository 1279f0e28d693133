from __future__ import annotations

import numpy as np
import pandas as pd


def lagged_positions(sorted_dates: np.ndarray, lag: pd.Timedelta) -> np.ndarray:
    """
    For each date d, the position of the last observation dated at or before
    d - lag, or -1 when there is none.

    `sorted_dates` must be datetime64 values in ascending order. Spacing may be
    irregular (weekends, holidays, missing months); the lookup is a binary
    search, not a fixed row offset.
    """
    dates = np.asarray(sorted_dates, dtype="datetime64[ns]")
    targets = dates - np.timedelta64(pd.Timedelta(lag).value, "ns")
    return np.searchsorted(dates, targets, side="right") - 1
