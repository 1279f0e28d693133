from __future__ import annotations

import logging
import math
from datetime import date
from typing import Any, Optional

import numpy as np

from gsw_yields.bonds.daycount import coupon_schedule, get_day_count, to_date
from gsw_yields.bonds.rootfinding import solve_bracketed
from gsw_yields.config import settings
from gsw_yields.errors import ArgumentError, DomainError

logger = logging.getLogger(__name__)

EXCEL_FREQUENCIES = (1, 2, 4)


def bond_price(
    yield_rate: float,
    face_value: float,
    coupon_rate: float,
    n_periods: int,
    periods_per_year: int,
    first_period_fraction: float = 1.0,
    coupon_base: Optional[float] = None,
) -> float:
    """
    Clean price of a fixed-coupon bond at periodic-compounded yield `yield_rate`.

    Coupons accrue on `coupon_base` (defaults to face_value); face_value is the
    principal repaid at maturity.

    Cashflows fall at (k - 1 + first_period_fraction) periods, k = 1..n.
    With first_period_fraction < 1 settlement sits inside a coupon period and
    the accrued coupon c * (1 - fraction) is subtracted from the dirty price.

    P = sum_k c / (1 + y/f)^(k-1+w) + F / (1 + y/f)^(n-1+w) - c * (1 - w)
    where c = coupon_rate * coupon_base / f.
    """
    if coupon_base is None:
        coupon_base = face_value
    coupon = coupon_rate * coupon_base / periods_per_year
    base = 1.0 + yield_rate / periods_per_year
    exponents = np.arange(n_periods, dtype=float) + first_period_fraction
    discount = base ** (-exponents)
    dirty = coupon * float(np.sum(discount)) + face_value * float(discount[-1])
    accrued = coupon * (1.0 - first_period_fraction)
    return float(dirty - accrued)


def _period_count(years_to_maturity: float, periods_per_year: int, fractional_periods: bool) -> tuple[int, float]:
    exact = years_to_maturity * periods_per_year
    if fractional_periods:
        n = max(int(math.ceil(exact - 1e-9)), 1)
        fraction = min(max(exact - (n - 1), 0.0), 1.0)
        return n, fraction
    return max(int(round(exact)), 1), 1.0


def bond_yield(
    price: float,
    face_value: float,
    coupon_rate: float,
    years_to_maturity: float,
    periods_per_year: int,
    *,
    fractional_periods: bool = False,
    coupon_base: Optional[float] = None,
) -> float:
    """
    Yield to maturity (annualised, compounded `periods_per_year` times a year).

    By default the horizon is rounded to a whole number of coupon periods.
    With fractional_periods=True the first period is shortened to the leftover
    fraction and `price` is treated as a clean price (Excel YIELD convention).
    Coupons accrue on `coupon_base` when given, otherwise on face_value.

    Raises ConvergenceError if no root can be bracketed.
    """
    price = float(price)
    face_value = float(face_value)
    coupon_rate = float(coupon_rate)
    years_to_maturity = float(years_to_maturity)

    if not price > 0.0:
        raise DomainError(f"price must be > 0, got {price}")
    if not face_value > 0.0:
        raise DomainError(f"face_value must be > 0, got {face_value}")
    if coupon_base is not None:
        coupon_base = float(coupon_base)
        if not coupon_base > 0.0:
            raise DomainError(f"coupon_base must be > 0, got {coupon_base}")
    if not years_to_maturity > 0.0:
        raise DomainError(f"years_to_maturity must be > 0, got {years_to_maturity}")
    if int(periods_per_year) != periods_per_year or periods_per_year < 1:
        raise DomainError(f"periods_per_year must be a positive integer, got {periods_per_year}")
    periods_per_year = int(periods_per_year)

    n, fraction = _period_count(years_to_maturity, periods_per_year, fractional_periods)

    def pricing_error(y: float) -> float:
        return bond_price(y, face_value, coupon_rate, n, periods_per_year, fraction, coupon_base) - price

    lower, upper = settings.ytm_bracket
    result = solve_bracketed(
        pricing_error,
        lower,
        upper,
        expansion=settings.ytm_bracket_expansion,
        max_attempts=settings.ytm_max_bracket_attempts,
        # Keep 1 + y/f well above zero so the discount factors stay finite.
        floor=-0.9 * periods_per_year,
        xtol=settings.ytm_xtol,
        max_iter=settings.ytm_max_iter,
    )
    logger.debug(
        "bond_yield price=%s face=%s coupon=%s n=%s fraction=%.6f -> %s",
        price, face_value, coupon_rate, n, fraction, result.root,
    )
    return result.root


def bond_yield_excel(
    settlement: Any,
    maturity: Any,
    coupon_rate: float,
    price: float,
    redemption: float = 100.0,
    frequency: int = 2,
    basis: int = 0,
) -> float:
    """
    Yield comparable to Excel's YIELD(settlement, maturity, rate, pr, redemption, frequency, basis).

    The coupon schedule is rolled back from maturity, the accrued part of the
    current period is measured under `basis`, and the resulting fractional
    horizon is passed to bond_yield. Coupons are paid per 100 of par
    and `redemption` is the principal repaid at maturity. Agreement with Excel is within a few
    basis points; Excel uses simple interest in the final period.
    """
    if frequency not in EXCEL_FREQUENCIES:
        raise ArgumentError(f"frequency must be one of {EXCEL_FREQUENCIES}, got {frequency!r}")
    day_count = get_day_count(basis)

    settle_d: date = to_date(settlement)
    maturity_d: date = to_date(maturity)
    if not settle_d < maturity_d:
        raise DomainError(f"settlement must be before maturity, got {settle_d} >= {maturity_d}")

    schedule = coupon_schedule(settle_d, maturity_d, frequency)
    e = day_count.coupon_period_days(schedule.previous_coupon, schedule.next_coupon, frequency)
    dsc = day_count.days_to_next_coupon(settle_d, schedule.previous_coupon, schedule.next_coupon, frequency)
    years = (schedule.n_remaining - 1 + dsc / e) / frequency
    logger.debug(
        "bond_yield_excel %s -> %s basis=%s: n=%s E=%s DSC=%s years=%.6f",
        settle_d, maturity_d, day_count.name, schedule.n_remaining, e, dsc, years,
    )

    return bond_yield(
        price, redemption, coupon_rate, years, frequency, fractional_periods=True, coupon_base=100.0
    )
