from datetime import date

import numpy as np
import pytest

from gsw_yields.bonds.daycount import coupon_schedule, get_day_count, to_date
from gsw_yields.bonds.rootfinding import find_bracket, solve_bracketed
from gsw_yields.bonds.ytm import bond_price, bond_yield, bond_yield_excel
from gsw_yields.errors import ArgumentError, ConvergenceError, DomainError


def test_par_bond_yields_coupon():
    assert bond_yield(1000, 1000, 0.06, 5.0, 2) == pytest.approx(0.06, abs=1e-10)
    assert bond_yield(100, 100, 0.05, 10.0, 1) == pytest.approx(0.05, abs=1e-10)


def test_discount_bond():
    ytm = bond_yield(950, 1000, 0.05, 3.5, 2)
    assert ytm == pytest.approx(0.0663, abs=1e-3)
    assert bond_price(ytm, 1000, 0.05, 7, 2) == pytest.approx(950.0, abs=1e-8)


def test_premium_bond():
    assert bond_yield(1050, 1000, 0.05, 10.0, 2) < 0.05


def test_other_frequencies():
    assert bond_yield(980, 1000, 0.04, 2.0, 4) > 0.04
    assert bond_yield(1020, 1000, 0.03, 5.0, 1) < 0.03


def test_zero_coupon_negative_yield_needs_wider_bracket():
    ytm = bond_yield(1100, 1000, 0.0, 2.0, 1)
    assert ytm == pytest.approx((1000.0 / 1100.0) ** 0.5 - 1.0, abs=1e-10)


def test_bond_yield_domain_errors():
    with pytest.raises(DomainError, match="price"):
        bond_yield(0.0, 1000, 0.05, 5.0, 2)
    with pytest.raises(DomainError, match="face_value"):
        bond_yield(950, -1000, 0.05, 5.0, 2)
    with pytest.raises(DomainError, match="years_to_maturity"):
        bond_yield(950, 1000, 0.05, 0.0, 2)
    with pytest.raises(DomainError, match="periods_per_year"):
        bond_yield(950, 1000, 0.05, 5.0, 0)


def test_fractional_first_period_prices_clean():
    # Half a period left: one dirty cashflow discounted half a period, less accrued.
    price = bond_price(0.06, 100.0, 0.06, 1, 2, first_period_fraction=0.5)
    expected = 103.0 / 1.03 ** 0.5 - 3.0 * 0.5
    assert price == pytest.approx(expected, rel=1e-14)


def test_excel_documentation_example():
    ytm = bond_yield_excel(date(2008, 2, 15), date(2016, 11, 15), 0.0575, 95.04287, 100.0, frequency=2, basis=0)
    assert ytm == pytest.approx(0.065, abs=1e-4)
    direct = bond_yield(95.04287, 100.0, 0.0575, 8.75, 2)
    assert ytm == pytest.approx(direct, abs=1e-2)


def _excel_yield_price(y, rate, redemption, n, dsc_over_e, frequency=2):
    # Excel YIELD price: coupons of 100 * rate / frequency, principal `redemption`.
    coupon = 100.0 * rate / frequency
    base = 1.0 + y / frequency
    pv = redemption / base ** (n - 1 + dsc_over_e)
    pv += sum(coupon / base ** (k - 1 + dsc_over_e) for k in range(1, n + 1))
    return pv - coupon * (1.0 - dsc_over_e)


def test_excel_redemption_differs_from_coupon_base():
    # 2008-02-15 -> 2016-11-15 semiannual: 18 coupons left, 90 of 180 days to the next one.
    ytm = bond_yield_excel("2008-02-15", "2016-11-15", 0.0575, 95.04287, 105.0, frequency=2, basis=0)
    assert _excel_yield_price(ytm, 0.0575, 105.0, 18, 0.5) == pytest.approx(95.04287, abs=1e-8)
    assert ytm == pytest.approx(0.069384, abs=5e-5)


def test_coupon_base_separate_from_principal():
    price = bond_price(0.05, 105.0, 0.06, 2, 1, coupon_base=100.0)
    assert price == pytest.approx(6.0 / 1.05 + (6.0 + 105.0) / 1.05 ** 2, rel=1e-14)
    with pytest.raises(DomainError, match="coupon_base"):
        bond_yield(95.0, 105.0, 0.06, 2.0, 1, coupon_base=0.0)


@pytest.mark.parametrize(
    "settlement, maturity, coupon, price, expected",
    [
        ("2014-04-24", "2015-12-01", 0.04, 105.46, 0.0057),
        ("2013-10-08", "2020-09-01", 0.05, 116.76, 0.0235),
        ("2014-07-31", "2032-05-15", 0.05, 114.083, 0.0389),
    ],
)
def test_excel_fractional_horizons(settlement, maturity, coupon, price, expected):
    assert bond_yield_excel(settlement, maturity, coupon, price, 100.0, frequency=2) == pytest.approx(
        expected, abs=5e-4
    )


def test_excel_argument_errors():
    with pytest.raises(ArgumentError, match="frequency"):
        bond_yield_excel("2008-02-15", "2016-11-15", 0.0575, 95.04287, frequency=3)
    with pytest.raises(ArgumentError, match="day count basis"):
        bond_yield_excel("2008-02-15", "2016-11-15", 0.0575, 95.04287, basis=7)
    with pytest.raises(DomainError, match="settlement"):
        bond_yield_excel("2016-11-15", "2008-02-15", 0.0575, 95.04287)
    with pytest.raises(DomainError, match="settlement"):
        bond_yield_excel("2016-11-15", "2016-11-15", 0.0575, 95.04287)


@pytest.mark.parametrize("basis", [0, 1, 2, 3, 4])
def test_excel_all_bases_close(basis):
    ytm = bond_yield_excel("2008-02-15", "2016-11-15", 0.0575, 95.04287, basis=basis)
    assert ytm == pytest.approx(0.065, abs=2e-3)


def test_days_30_360_us():
    days = get_day_count(0).days
    assert days(date(2013, 12, 1), date(2014, 4, 24)) == 143
    assert days(date(2014, 1, 31), date(2014, 3, 31)) == 60
    assert days(date(2014, 2, 28), date(2014, 3, 31)) == 30


def test_actual_bases():
    assert get_day_count(1).days(date(2014, 1, 1), date(2015, 1, 1)) == 365
    assert get_day_count(1).coupon_period_days(date(2013, 12, 1), date(2014, 6, 1), 2) == 182
    assert get_day_count(2).coupon_period_days(date(2013, 12, 1), date(2014, 6, 1), 2) == 180
    assert get_day_count(3).coupon_period_days(date(2013, 12, 1), date(2014, 6, 1), 2) == 182.5


def test_coupon_schedule_rolls_back_from_maturity():
    schedule = coupon_schedule(date(2014, 4, 24), date(2015, 12, 1), 2)
    assert schedule.previous_coupon == date(2013, 12, 1)
    assert schedule.next_coupon == date(2014, 6, 1)
    assert schedule.n_remaining == 4


def test_coupon_schedule_month_end_maturity():
    schedule = coupon_schedule(date(2016, 3, 15), date(2016, 11, 30), 2)
    assert schedule.previous_coupon == date(2015, 11, 30)
    assert schedule.next_coupon == date(2016, 5, 31)
    assert schedule.n_remaining == 2


def test_to_date_accepts_strings_and_timestamps():
    assert to_date("2014-04-24") == date(2014, 4, 24)
    assert to_date(np.datetime64("2014-04-24")) == date(2014, 4, 24)


def test_find_bracket_expands():
    a, b = find_bracket(lambda x: x + 5.0, 0.0, 1.0)
    assert a < -5.0 < b


def test_find_bracket_respects_floor():
    with pytest.raises(ConvergenceError, match="Failed to bracket"):
        find_bracket(lambda x: x + 5.0, 0.0, 1.0, max_attempts=10, floor=-2.0)


def test_solver_without_sign_change_raises():
    with pytest.raises(ConvergenceError):
        solve_bracketed(lambda y: 1.0, 0.0, 0.25, max_attempts=3)


def test_solver_result():
    result = solve_bracketed(lambda x: x * x - 2.0, 0.0, 1.0)
    assert result.iterations > 0
    assert result.root == pytest.approx(np.sqrt(2.0), abs=1e-10)
    assert result.bracket[0] <= result.root <= result.bracket[1]


def test_convergence_error_is_runtime_error():
    with pytest.raises(RuntimeError):
        solve_bracketed(lambda y: 1.0, 0.0, 0.25, max_attempts=2)


def test_solver_root_on_bracket_edge():
    result = solve_bracketed(lambda x: x, 0.0, 1.0)
    assert result.root == 0.0
    assert result.iterations == 0
    assert result.bracket == (0.0, 0.0)
