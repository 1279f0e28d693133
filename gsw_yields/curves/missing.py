from __future__ import annotations

import math
from typing import Any, Optional

import pandas as pd

MaybeFloat = Optional[float]


def is_missing(value: Any) -> bool:
    """
    True for None, pd.NA, pd.NaT and float NaN.

    NaN is accepted because pandas nullable columns hand NA back as NaN once
    they pass through numpy; upstream data never uses NaN as a real value.
    """
    if value is None or value is pd.NA or value is pd.NaT:
        return True
    if isinstance(value, float):
        return math.isnan(value)
    try:
        return bool(pd.isna(value))
    except (TypeError, ValueError):
        return False


def any_missing(*values: Any) -> bool:
    return any(is_missing(v) for v in values)


def to_float(value: Any) -> MaybeFloat:
    """Coerce to a 64-bit float, mapping every missing marker to None."""
    if is_missing(value):
        return None
    return float(value)
