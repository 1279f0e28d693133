"""Excel-style day-count bases and coupon schedules for YTM calculations."""

from __future__ import annotations

import calendar
import logging
from dataclasses import dataclass
from datetime import date
from typing import Any, Callable, Dict

import pandas as pd

from gsw_yields.errors import ArgumentError

logger = logging.getLogger(__name__)

DayCountFunc = Callable[[date, date], float]


def _is_last_day_of_feb(d: date) -> bool:
    return d.month == 2 and d.day == calendar.monthrange(d.year, 2)[1]


def _days_30_360_us(start: date, end: date) -> float:
    """US (NASD) 30/360 day count, as used by Excel basis 0."""
    d1, d2 = start.day, end.day
    if _is_last_day_of_feb(start) and _is_last_day_of_feb(end):
        d2 = 30
    if _is_last_day_of_feb(start):
        d1 = 30
    if d2 == 31 and d1 >= 30:
        d2 = 30
    if d1 == 31:
        d1 = 30
    return float(360 * (end.year - start.year) + 30 * (end.month - start.month) + (d2 - d1))


def _days_30_360_eu(start: date, end: date) -> float:
    """European 30/360 day count, Excel basis 4."""
    d1 = min(start.day, 30)
    d2 = min(end.day, 30)
    return float(360 * (end.year - start.year) + 30 * (end.month - start.month) + (d2 - d1))


def _days_actual(start: date, end: date) -> float:
    return float((end - start).days)


@dataclass(frozen=True)
class DayCountBasis:
    """
    One Excel `basis` convention.

    days(start, end): day count between two dates
    year_days: nominal days per year, or None for actual/actual
    """
    code: int
    name: str
    days: DayCountFunc
    year_days: float | None

    def coupon_period_days(self, previous_coupon: date, next_coupon: date, frequency: int) -> float:
        """Length E of the coupon period containing settlement."""
        if self.year_days is None:
            return _days_actual(previous_coupon, next_coupon)
        return self.year_days / float(frequency)

    def days_to_next_coupon(self, settlement: date, previous_coupon: date, next_coupon: date, frequency: int) -> float:
        """DSC: days from settlement to the next coupon date."""
        if self.code == 0:
            e = self.coupon_period_days(previous_coupon, next_coupon, frequency)
            return e - self.days(previous_coupon, settlement)
        return self.days(settlement, next_coupon)


_REGISTRY: Dict[int, DayCountBasis] = {
    0: DayCountBasis(0, "30/360 US", _days_30_360_us, 360.0),
    1: DayCountBasis(1, "ACT/ACT", _days_actual, None),
    2: DayCountBasis(2, "ACT/360", _days_actual, 360.0),
    3: DayCountBasis(3, "ACT/365", _days_actual, 365.0),
    4: DayCountBasis(4, "30/360 EU", _days_30_360_eu, 360.0),
}


def get_day_count(basis: int) -> DayCountBasis:
    """Return the day-count convention for an Excel basis code (0-4)."""
    try:
        return _REGISTRY[int(basis)]
    except (KeyError, TypeError, ValueError) as exc:
        raise ArgumentError(f"Unsupported day count basis: {basis!r}; expected one of {sorted(_REGISTRY)}") from exc


def to_date(value: Any) -> date:
    """Accept date, datetime, pandas Timestamp or ISO string."""
    return pd.Timestamp(value).date()


def _shift_months(anchor: date, months: int) -> date:
    shifted = pd.Timestamp(anchor) + pd.DateOffset(months=months)
    if pd.Timestamp(anchor).is_month_end:
        shifted = shifted + pd.offsets.MonthEnd(0)
    return shifted.date()


@dataclass(frozen=True)
class CouponSchedule:
    previous_coupon: date
    next_coupon: date
    n_remaining: int


def coupon_schedule(settlement: date, maturity: date, frequency: int) -> CouponSchedule:
    """
    Coupon dates bracketing settlement, generated backwards from maturity
    (end-of-month maturities keep month-end coupon dates).
    """
    months = 12 // frequency
    k = 0
    while True:
        candidate = _shift_months(maturity, -months * (k + 1))
        if candidate <= settlement:
            next_coupon = _shift_months(maturity, -months * k)
            schedule = CouponSchedule(candidate, next_coupon, k + 1)
            logger.debug("Coupon schedule for %s -> %s: %s", settlement, maturity, schedule)
            return schedule
        k += 1
