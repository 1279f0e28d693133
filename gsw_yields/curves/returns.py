from __future__ import annotations

from enum import Enum
from typing import Any, Optional, Sequence, Type, TypeVar, Union

import numpy as np
import pandas as pd

from gsw_yields.config import settings
from gsw_yields.curves.evaluator import _check_maturity, gsw_price
from gsw_yields.curves.missing import MaybeFloat
from gsw_yields.curves.parameters import ParameterSet, make_parameters
from gsw_yields.errors import ArgumentError

E = TypeVar("E", bound=Enum)


class Frequency(str, Enum):
    """Holding period of a return. All conventions use a 360-day year."""
    DAILY = "daily"
    MONTHLY = "monthly"
    ANNUAL = "annual"

    @property
    def year_fraction(self) -> float:
        return {
            Frequency.DAILY: 1.0 / 360.0,
            Frequency.MONTHLY: 1.0 / 12.0,
            Frequency.ANNUAL: 1.0,
        }[self]

    @property
    def calendar_lag(self) -> pd.Timedelta:
        """Approximate calendar distance to the previous observation."""
        return {
            Frequency.DAILY: pd.Timedelta(days=1),
            Frequency.MONTHLY: pd.Timedelta(days=30),
            Frequency.ANNUAL: pd.Timedelta(days=360),
        }[self]


class ReturnKind(str, Enum):
    LOG = "log"
    ARITHMETIC = "arithmetic"


def coerce_option(enum_cls: Type[E], value: Union[str, E]) -> E:
    """Map a string or enum member onto `enum_cls`, raising ArgumentError otherwise."""
    if isinstance(value, enum_cls):
        return value
    try:
        return enum_cls(str(value).lower())
    except ValueError:
        allowed = [m.value for m in enum_cls]
        raise ArgumentError(
            f"{enum_cls.__name__} must be one of {allowed}, got {value!r}"
        ) from None


def _period_return(price_today: float, price_previous: float, kind: ReturnKind) -> float:
    if kind is ReturnKind.LOG:
        return float(np.log(price_today / price_previous))
    return float((price_today - price_previous) / price_previous)


def gsw_return(
    maturity: float,
    params_now: Optional[ParameterSet],
    params_prev: Optional[ParameterSet],
    frequency: Union[str, Frequency] = Frequency.DAILY,
    kind: Union[str, ReturnKind] = ReturnKind.LOG,
) -> MaybeFloat:
    """
    Holding-period return of a zero-coupon bond with original maturity `maturity`.

    The bond bought at the previous date (priced with params_prev at `maturity`)
    is worth, today, the price of a bond with maturity shortened by one period
    (priced with params_now at max(maturity - dt, 0.001)).

    Returns None if either parameter set is None.
    """
    maturity = _check_maturity(maturity)
    frequency = coerce_option(Frequency, frequency)
    kind = coerce_option(ReturnKind, kind)

    if params_now is None or params_prev is None:
        return None

    aged_maturity = max(maturity - frequency.year_fraction, settings.min_aged_maturity)
    price_today = gsw_price(aged_maturity, params_now)
    price_previous = gsw_price(maturity, params_prev)
    if price_today is None or price_previous is None:
        return None

    return _period_return(price_today, price_previous, kind)


def gsw_excess_return(
    maturity: float,
    params_now: Optional[ParameterSet],
    params_prev: Optional[ParameterSet],
    risk_free_maturity: float = settings.risk_free_maturity,
    frequency: Union[str, Frequency] = Frequency.DAILY,
    kind: Union[str, ReturnKind] = ReturnKind.LOG,
) -> MaybeFloat:
    """
    Bond return minus the return on the `risk_free_maturity` bond over the same period.
    """
    _check_maturity(risk_free_maturity)
    bond_ret = gsw_return(maturity, params_now, params_prev, frequency=frequency, kind=kind)
    rf_ret = gsw_return(risk_free_maturity, params_now, params_prev, frequency=frequency, kind=kind)
    if bond_ret is None or rf_ret is None:
        return None
    return float(bond_ret - rf_ret)


def gsw_return_from_values(
    maturity: float,
    values_now: Sequence[Any],
    values_prev: Sequence[Any],
    frequency: Union[str, Frequency] = Frequency.DAILY,
    kind: Union[str, ReturnKind] = ReturnKind.LOG,
) -> MaybeFloat:
    """
    gsw_return with each curve given as six raw values
    (beta0, beta1, beta2, beta3, tau1, tau2).
    """
    _check_maturity(maturity)
    coerce_option(Frequency, frequency)
    coerce_option(ReturnKind, kind)
    return gsw_return(
        maturity,
        make_parameters(*values_now),
        make_parameters(*values_prev),
        frequency=frequency,
        kind=kind,
    )


def gsw_excess_return_from_values(
    maturity: float,
    values_now: Sequence[Any],
    values_prev: Sequence[Any],
    risk_free_maturity: float = settings.risk_free_maturity,
    frequency: Union[str, Frequency] = Frequency.DAILY,
    kind: Union[str, ReturnKind] = ReturnKind.LOG,
) -> MaybeFloat:
    _check_maturity(maturity)
    _check_maturity(risk_free_maturity)
    coerce_option(Frequency, frequency)
    coerce_option(ReturnKind, kind)
    return gsw_excess_return(
        maturity,
        make_parameters(*values_now),
        make_parameters(*values_prev),
        risk_free_maturity=risk_free_maturity,
        frequency=frequency,
        kind=kind,
    )
