from __future__ import annotations

from typing import Any, Optional, Sequence

import pandas as pd

from gsw_yields.config import settings
from gsw_yields.curves.evaluator import gsw_price_curve, gsw_yield_curve
from gsw_yields.curves.parameters import ParameterSet, make_parameters


def curve_snapshot(
    params: Optional[ParameterSet],
    maturities: Sequence[float] = settings.snapshot_maturities,
    face_value: float = 1.0,
) -> pd.DataFrame:
    """
    Yield and price curve for a single date.

    Output columns:
    maturity, yield, price
    """
    maturities = list(maturities)
    return pd.DataFrame(
        {
            "maturity": maturities,
            "yield": gsw_yield_curve(maturities, params),
            "price": gsw_price_curve(maturities, params, face_value=face_value),
        }
    )


def curve_snapshot_from_values(
    beta0: Any,
    beta1: Any,
    beta2: Any,
    beta3: Any,
    tau1: Any,
    tau2: Any,
    maturities: Sequence[float] = settings.snapshot_maturities,
    face_value: float = 1.0,
) -> pd.DataFrame:
    params = make_parameters(beta0, beta1, beta2, beta3, tau1, tau2)
    return curve_snapshot(params, maturities=maturities, face_value=face_value)
