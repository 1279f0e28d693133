from __future__ import annotations

from typing import Any, Iterable, Optional

import numpy as np
import pandas as pd

from gsw_yields.config import settings
from gsw_yields.curves.missing import MaybeFloat
from gsw_yields.curves.parameters import ParameterSet, make_parameters
from gsw_yields.errors import DomainError


def _loadings(t, tau):
    """
    Nelson-Siegel slope and curvature loadings at maturity t for decay tau.

    Works elementwise on numpy arrays.
    """
    x = t / tau
    decay = np.exp(-x)
    slope = (1.0 - decay) / x
    curvature = slope - decay
    return slope, curvature


def nss_yield(t, beta0: float, beta1: float, beta2: float, beta3: float, tau1: float, tau2: float):
    """
    Svensson yield in percent for effective parameters.

    The fourth term is dropped unless |beta3| > 1e-10 and tau2 > 0, so a
    3-factor set whose beta3 was forced to a tiny value upstream stays 3-factor.
    """
    slope, curvature = _loadings(t, tau1)
    y = beta0 + beta1 * slope + beta2 * curvature
    if abs(beta3) > settings.four_factor_epsilon and tau2 > 0.0:
        _, curvature2 = _loadings(t, tau2)
        y = y + beta3 * curvature2
    return y


def _check_maturity(maturity: float) -> float:
    maturity = float(maturity)
    if not maturity > 0.0:
        raise DomainError(f"maturity must be > 0, got {maturity}")
    return maturity


def _check_face_value(face_value: float) -> float:
    face_value = float(face_value)
    if not face_value > 0.0:
        raise DomainError(f"face_value must be > 0, got {face_value}")
    return face_value


def _check_forward_maturities(maturity1: float, maturity2: float) -> tuple[float, float]:
    t1 = float(maturity1)
    t2 = float(maturity2)
    if not (0.0 < t1 < t2):
        raise DomainError(f"need 0 < maturity1 < maturity2, got maturity1={t1}, maturity2={t2}")
    return t1, t2


def _check_maturities(maturities: Iterable[float]) -> np.ndarray:
    t = np.asarray(list(maturities), dtype=float)
    if t.ndim != 1:
        raise DomainError("maturities must be a one-dimensional sequence")
    if t.size and not np.all(t > 0.0):
        raise DomainError(f"all maturities must be > 0, got {t[~(t > 0.0)].tolist()}")
    return t


def _price_from_yield(yield_percent, maturity, face_value: float):
    # Yield is an annually compounded percent; convert to a continuous rate.
    rate = np.log1p(yield_percent / 100.0)
    return face_value * np.exp(-rate * maturity)


def gsw_yield(maturity: float, params: Optional[ParameterSet]) -> MaybeFloat:
    """
    Zero-coupon yield in percent (5.0 means 5%) at `maturity` years.

    Returns None when params is None.
    """
    maturity = _check_maturity(maturity)
    if params is None:
        return None
    return float(nss_yield(maturity, *params.effective()))


def gsw_price(
    maturity: float,
    params: Optional[ParameterSet],
    face_value: float = 1.0,
) -> MaybeFloat:
    """
    Zero-coupon bond price, discounting with rate = ln(1 + y/100) continuously.
    """
    maturity = _check_maturity(maturity)
    face_value = _check_face_value(face_value)
    if params is None:
        return None
    y = nss_yield(maturity, *params.effective())
    return float(_price_from_yield(y, maturity, face_value))


def gsw_forward_rate(
    maturity1: float,
    maturity2: float,
    params: Optional[ParameterSet],
) -> MaybeFloat:
    """
    Forward rate (decimal) between maturity1 and maturity2:
      f = -ln(P(t2) / P(t1)) / (t2 - t1)
    """
    t1, t2 = _check_forward_maturities(maturity1, maturity2)
    p1 = gsw_price(t1, params)
    p2 = gsw_price(t2, params)
    if p1 is None or p2 is None:
        return None
    return float(-np.log(p2 / p1) / (t2 - t1))


def gsw_yield_curve(maturities: Iterable[float], params: Optional[ParameterSet]) -> pd.arrays.FloatingArray:
    """
    Yields for several maturities on one curve, in input order.
    """
    t = _check_maturities(maturities)
    if params is None:
        return pd.array([None] * t.size, dtype="Float64")
    return pd.array(nss_yield(t, *params.effective()), dtype="Float64")


def gsw_price_curve(
    maturities: Iterable[float],
    params: Optional[ParameterSet],
    face_value: float = 1.0,
) -> pd.arrays.FloatingArray:
    t = _check_maturities(maturities)
    face_value = _check_face_value(face_value)
    if params is None:
        return pd.array([None] * t.size, dtype="Float64")
    y = nss_yield(t, *params.effective())
    return pd.array(_price_from_yield(y, t, face_value), dtype="Float64")


# Flat-argument adapters. They build a ParameterSet and call the functions
# above, so both call forms share a single formula.

def gsw_yield_from_values(
    maturity: float,
    beta0: Any,
    beta1: Any,
    beta2: Any,
    beta3: Any,
    tau1: Any,
    tau2: Any,
) -> MaybeFloat:
    _check_maturity(maturity)
    return gsw_yield(maturity, make_parameters(beta0, beta1, beta2, beta3, tau1, tau2))


def gsw_price_from_values(
    maturity: float,
    beta0: Any,
    beta1: Any,
    beta2: Any,
    beta3: Any,
    tau1: Any,
    tau2: Any,
    face_value: float = 1.0,
) -> MaybeFloat:
    _check_maturity(maturity)
    _check_face_value(face_value)
    params = make_parameters(beta0, beta1, beta2, beta3, tau1, tau2)
    return gsw_price(maturity, params, face_value=face_value)


def gsw_forward_rate_from_values(
    maturity1: float,
    maturity2: float,
    beta0: Any,
    beta1: Any,
    beta2: Any,
    beta3: Any,
    tau1: Any,
    tau2: Any,
) -> MaybeFloat:
    _check_forward_maturities(maturity1, maturity2)
    params = make_parameters(beta0, beta1, beta2, beta3, tau1, tau2)
    return gsw_forward_rate(maturity1, maturity2, params)


def gsw_yield_curve_from_values(maturities: Iterable[float], *values: Any) -> pd.arrays.FloatingArray:
    return gsw_yield_curve(maturities, make_parameters(*values))


def gsw_price_curve_from_values(
    maturities: Iterable[float],
    *values: Any,
    face_value: float = 1.0,
) -> pd.arrays.FloatingArray:
    return gsw_price_curve(maturities, make_parameters(*values), face_value=face_value)
