import numpy as np
import pandas as pd
import pytest

from gsw_yields.curves.evaluator import gsw_price, gsw_yield
from gsw_yields.curves.parameters import make_parameters
from gsw_yields.curves.returns import gsw_return
from gsw_yields.errors import ArgumentError, DomainError, ValidationError
from gsw_yields.panel.columns import format_maturity, maturity_column_name, return_column_name
from gsw_yields.panel.lag import lagged_positions
from gsw_yields.panel.operators import add_excess_returns, add_prices, add_returns, add_yields

PARAM_COLS = ["BETA0", "BETA1", "BETA2", "BETA3", "TAU1", "TAU2"]


def _panel() -> pd.DataFrame:
    # Thursday, Friday, Monday, Tuesday; row 2 is a 3-factor day.
    return pd.DataFrame(
        {
            "date": pd.to_datetime(["2020-01-02", "2020-01-03", "2020-01-06", "2020-01-07"]),
            "BETA0": [5.0, 5.1, 5.05, 5.2],
            "BETA1": [-2.0, -2.1, -2.0, -1.9],
            "BETA2": [1.5, 1.4, 1.45, 1.5],
            "BETA3": pd.array([0.8, None, 0.7, 0.9], dtype="Float64"),
            "TAU1": [2.5, 2.4, 2.45, 2.5],
            "TAU2": pd.array([0.5, None, 0.6, 0.55], dtype="Float64"),
            "source": ["a", "b", "c", "d"],
        }
    )


def _row_params(df: pd.DataFrame, i: int):
    row = df.iloc[i]
    return make_parameters(*(row[c] for c in PARAM_COLS))


def test_column_names():
    assert format_maturity(1.0) == "1"
    assert format_maturity(10) == "10"
    assert format_maturity(0.5) == "0.5"
    assert format_maturity(0.250) == "0.25"
    assert maturity_column_name("yield", 0.5) == "yield_0.5y"
    assert maturity_column_name("price", 30) == "price_30y"
    assert return_column_name("ret", 2.0, "daily") == "ret_2y_daily"
    assert return_column_name("excess_ret", 10, "monthly") == "excess_ret_10y_monthly"


def test_lagged_positions_irregular_spacing():
    dates = pd.to_datetime(["2020-01-02", "2020-01-03", "2020-01-06", "2020-01-07"]).to_numpy()
    pos = lagged_positions(dates, pd.Timedelta(days=1))
    assert pos.tolist() == [-1, 0, 1, 2]


def test_add_yields_single_maturity():
    df = _panel()
    out = add_yields(df, 10.0)
    assert out is df
    assert "yield_10y" in df.columns
    assert df["yield_10y"].dtype == "Float64"
    assert df["yield_10y"].notna().all()
    for i in range(len(df)):
        assert df["yield_10y"].iloc[i] == pytest.approx(gsw_yield(10.0, _row_params(df, i)), rel=1e-14)


def test_add_yields_mixed_model_periods():
    df = pd.DataFrame(
        {
            "date": pd.to_datetime(["2020-01-01", "2020-01-02"]),
            "BETA0": [5.0, 5.1],
            "BETA1": [-2.0, -2.1],
            "BETA2": [1.5, 1.4],
            "BETA3": pd.array([0.8, None], dtype="Float64"),
            "TAU1": [2.5, 2.4],
            "TAU2": pd.array([0.5, None], dtype="Float64"),
        }
    )
    add_yields(df, 10.0)
    assert not pd.isna(df["yield_10y"].iloc[0])
    assert not pd.isna(df["yield_10y"].iloc[1])


def test_add_yields_multiple_maturities_and_duplicates():
    df = _panel()
    add_yields(df, [0.5, 1, 2, 5, 10, 1.0])
    expected = ["yield_0.5y", "yield_1y", "yield_2y", "yield_5y", "yield_10y"]
    assert [c for c in df.columns if c.startswith("yield_")] == expected


def test_add_yields_leaves_other_columns_alone():
    df = _panel()
    before = df.copy()
    add_yields(df, [1, 2])
    pd.testing.assert_frame_equal(df[before.columns], before)


def test_missing_core_parameter_writes_missing_cell():
    df = _panel()
    df["BETA0"] = pd.array([5.0, None, 5.05, 5.2], dtype="Float64")
    add_yields(df, 1)
    add_prices(df, 1)
    assert pd.isna(df["yield_1y"].iloc[1])
    assert pd.isna(df["price_1y"].iloc[1])
    assert df["yield_1y"].drop(index=1).notna().all()


def test_add_prices_face_value():
    df = _panel()
    add_prices(df, [1, 5, 10], face_value=100.0)
    for col in ["price_1y", "price_5y", "price_10y"]:
        assert (df[col] < 100.0).all()
    assert df["price_5y"].iloc[0] == pytest.approx(gsw_price(5.0, _row_params(df, 0), face_value=100.0), rel=1e-14)


def test_panel_level_errors():
    with pytest.raises(ValidationError, match="missing required parameter columns"):
        add_yields(_panel().drop(columns=["TAU2"]), 1)
    with pytest.raises(ValidationError, match="empty"):
        add_yields(_panel().iloc[0:0], 1)
    with pytest.raises(DomainError):
        add_yields(_panel(), [1, -2])
    with pytest.raises(DomainError):
        add_prices(_panel(), 1, face_value=0.0)


def test_invalid_decay_in_a_row_raises():
    df = _panel()
    df["TAU1"] = [2.5, -1.0, 2.45, 2.5]
    with pytest.raises(ValidationError, match="tau1"):
        add_yields(df, 1)


def test_add_returns_first_row_missing_and_column_position():
    df = _panel()
    add_returns(df, 2.0, frequency="daily", kind="log")
    assert list(df.columns) == ["date", "ret_2y_daily"] + PARAM_COLS + ["source"]
    assert pd.isna(df["ret_2y_daily"].iloc[0])
    assert df["ret_2y_daily"].iloc[1:].notna().all()


def test_add_returns_uses_calendar_lag():
    df = _panel()
    add_returns(df, 2.0)
    # Friday vs Thursday
    assert df["ret_2y_daily"].iloc[1] == pytest.approx(
        gsw_return(2.0, _row_params(df, 1), _row_params(df, 0)), rel=1e-14
    )
    # Monday looks back to Sunday and finds Friday
    assert df["ret_2y_daily"].iloc[2] == pytest.approx(
        gsw_return(2.0, _row_params(df, 2), _row_params(df, 1)), rel=1e-14
    )


def test_add_returns_monthly_lag():
    df = pd.DataFrame(
        {
            "date": pd.to_datetime(["2020-01-01", "2020-02-01", "2020-03-03"]),
            "BETA0": [5.0, 5.2, 5.1],
            "BETA1": [-2.0, -2.1, -2.2],
            "BETA2": [1.5, 1.4, 1.3],
            "BETA3": [0.8, 0.9, 1.0],
            "TAU1": [2.5, 2.4, 2.3],
            "TAU2": [0.5, 0.6, 0.7],
        }
    )
    add_returns(df, 5, frequency="monthly", kind="arithmetic")
    col = "ret_5y_monthly"
    assert pd.isna(df[col].iloc[0])
    assert df[col].iloc[2] == pytest.approx(
        gsw_return(5.0, _row_params(df, 2), _row_params(df, 1), frequency="monthly", kind="arithmetic"),
        rel=1e-14,
    )


def test_add_returns_with_no_prior_within_lag_is_missing():
    df = _panel()
    add_returns(df, 2.0, frequency="monthly")
    assert df["ret_2y_monthly"].isna().all()


def test_add_returns_sorts_in_place():
    df = _panel().iloc[[2, 0, 3, 1]].copy()
    add_returns(df, 2.0)
    assert df["date"].is_monotonic_increasing
    assert pd.isna(df["ret_2y_daily"].iloc[0])


def test_missing_row_propagates_to_next_return():
    df = _panel()
    df["BETA1"] = pd.array([-2.0, None, -2.0, -1.9], dtype="Float64")
    add_returns(df, 2.0)
    assert pd.isna(df["ret_2y_daily"].iloc[1])
    assert pd.isna(df["ret_2y_daily"].iloc[2])
    assert not pd.isna(df["ret_2y_daily"].iloc[3])


def test_add_returns_panel_errors_raise_before_mutation():
    df = _panel()
    before = df.copy()
    with pytest.raises(ArgumentError):
        add_returns(df, 2.0, frequency="weekly")
    with pytest.raises(ArgumentError):
        add_returns(df, 2.0, kind="simple")
    pd.testing.assert_frame_equal(df, before)

    with pytest.raises(ValidationError, match="date"):
        add_returns(_panel().drop(columns=["date"]), 2.0)
    with pytest.raises(ValidationError, match="empty"):
        add_returns(_panel().iloc[0:0], 2.0)


def test_add_returns_twice_replaces_column():
    df = _panel()
    add_returns(df, 2.0)
    add_returns(df, 2.0, kind="arithmetic")
    assert list(df.columns).count("ret_2y_daily") == 1


def test_add_excess_returns():
    df = _panel()
    add_excess_returns(df, 10, risk_free_maturity=0.25)
    assert "excess_ret_10y_daily" in df.columns
    assert "ret_10y_daily" not in df.columns
    assert "ret_0.25y_daily" not in df.columns

    ref = _panel()
    add_returns(ref, 10)
    add_returns(ref, 0.25)
    expected = (ref["ret_10y_daily"] - ref["ret_0.25y_daily"]).to_numpy(dtype=float, na_value=np.nan)
    got = df["excess_ret_10y_daily"].to_numpy(dtype=float, na_value=np.nan)
    assert np.allclose(got, expected, equal_nan=True, rtol=1e-14)
    assert pd.isna(df["excess_ret_10y_daily"].iloc[0])


def test_add_excess_returns_keeps_caller_row_order():
    df = _panel().iloc[[3, 1, 0, 2]].copy()
    order_before = df.index.tolist()
    add_excess_returns(df, 10)
    assert df.index.tolist() == order_before
    # index label 0 is the earliest date
    assert pd.isna(df.loc[0, "excess_ret_10y_daily"])
    assert df.drop(index=0)["excess_ret_10y_daily"].notna().all()
