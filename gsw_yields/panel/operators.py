"""
Derived-column operators over a date-indexed GSW parameter panel.

Every operator writes nullable Float64 columns in place and returns the same
DataFrame. A row whose core parameters are missing gets pd.NA; panel-level
problems (missing columns, empty panel, bad options) raise before any row is
touched.

Callers running several operators in parallel should work on separate
DataFrames and merge; a single panel is not safe for concurrent writers.
"""
from __future__ import annotations

import logging
from typing import Iterable, Optional, Union

import numpy as np
import pandas as pd

from gsw_yields.config import ParameterColumns, columns as default_columns, settings
from gsw_yields.curves.evaluator import _check_face_value, _check_maturity, gsw_price, gsw_yield
from gsw_yields.curves.parameters import ParameterSet, make_parameters
from gsw_yields.curves.returns import Frequency, ReturnKind, coerce_option, gsw_return
from gsw_yields.errors import ValidationError
from gsw_yields.panel.columns import as_maturity_list, maturity_column_name, return_column_name
from gsw_yields.panel.lag import lagged_positions

logger = logging.getLogger(__name__)


def validate_panel(
    panel: pd.DataFrame,
    columns: ParameterColumns = default_columns,
    check_date: bool = False,
) -> None:
    missing_cols = [c for c in columns.parameters if c not in panel.columns]
    if missing_cols:
        raise ValidationError(f"panel is missing required parameter columns: {missing_cols}")
    if check_date and columns.date not in panel.columns:
        raise ValidationError(f"panel must contain a '{columns.date}' column for return calculations")
    if len(panel) == 0:
        raise ValidationError("panel is empty")
    if check_date and panel[columns.date].isna().any():
        raise ValidationError(f"'{columns.date}' column contains missing dates")


def row_parameters(
    panel: pd.DataFrame,
    columns: ParameterColumns = default_columns,
) -> list[Optional[ParameterSet]]:
    """One ParameterSet (or None) per row, in row order."""
    frame = panel.loc[:, list(columns.parameters)].astype(object)
    return [make_parameters(*values) for values in frame.itertuples(index=False, name=None)]


def _to_column(values: list, index: pd.Index) -> pd.Series:
    return pd.Series(pd.array(values, dtype="Float64"), index=index)


def _log_written(name: str, series: pd.Series) -> None:
    logger.debug("Wrote %s: %d rows, %d missing", name, len(series), int(series.isna().sum()))


def add_yields(
    panel: pd.DataFrame,
    maturities: Union[float, Iterable[float]],
    columns: ParameterColumns = default_columns,
) -> pd.DataFrame:
    """
    Add yield_<m>y columns (percent) for each maturity.

    Columns: yield_1y, yield_0.5y, ...
    """
    validate_panel(panel, columns)
    mats = as_maturity_list(maturities)

    params = row_parameters(panel, columns)
    for m in mats:
        name = maturity_column_name("yield", m)
        panel[name] = _to_column([gsw_yield(m, p) for p in params], panel.index)
        _log_written(name, panel[name])
    return panel


def add_prices(
    panel: pd.DataFrame,
    maturities: Union[float, Iterable[float]],
    face_value: float = settings.panel_face_value,
    columns: ParameterColumns = default_columns,
) -> pd.DataFrame:
    """
    Add price_<m>y columns: zero-coupon prices for the given face value.
    """
    validate_panel(panel, columns)
    face_value = _check_face_value(face_value)
    mats = as_maturity_list(maturities)

    params = row_parameters(panel, columns)
    for m in mats:
        name = maturity_column_name("price", m)
        panel[name] = _to_column([gsw_price(m, p, face_value=face_value) for p in params], panel.index)
        _log_written(name, panel[name])
    return panel


def _return_values(
    panel: pd.DataFrame,
    maturity: float,
    frequency: Frequency,
    kind: ReturnKind,
    columns: ParameterColumns,
) -> pd.Series:
    """
    Returns for every row, pairing each row with the last row dated at or
    before date - frequency.calendar_lag. Works in any row order; the result
    is aligned to the panel's rows.
    """
    dates = pd.to_datetime(panel[columns.date]).to_numpy(dtype="datetime64[ns]")
    order = np.argsort(dates, kind="stable")
    prev = lagged_positions(dates[order], frequency.calendar_lag)
    params = row_parameters(panel, columns)

    values: list = [None] * len(panel)
    for k, j in enumerate(prev):
        if j < 0:
            continue
        i = order[k]
        values[i] = gsw_return(maturity, params[i], params[order[j]], frequency=frequency, kind=kind)
    return _to_column(values, panel.index)


def add_returns(
    panel: pd.DataFrame,
    maturity: float,
    frequency: Union[str, Frequency] = Frequency.DAILY,
    kind: Union[str, ReturnKind] = ReturnKind.LOG,
    columns: ParameterColumns = default_columns,
) -> pd.DataFrame:
    """
    Add a ret_<m>y_<frequency> column of holding-period bond returns.

    The panel is sorted by date in place first. Rows with no observation at or
    before date - lag (at least the first row) get pd.NA. The new column is
    placed right after the date column.
    """
    validate_panel(panel, columns, check_date=True)
    maturity = _check_maturity(maturity)
    frequency = coerce_option(Frequency, frequency)
    kind = coerce_option(ReturnKind, kind)

    panel.sort_values(columns.date, inplace=True, kind="mergesort")

    name = return_column_name("ret", maturity, frequency.value)
    series = _return_values(panel, maturity, frequency, kind, columns)
    if name in panel.columns:
        del panel[name]
    panel.insert(panel.columns.get_loc(columns.date) + 1, name, series)
    _log_written(name, series)
    return panel


def add_excess_returns(
    panel: pd.DataFrame,
    maturity: float,
    risk_free_maturity: float = settings.risk_free_maturity,
    frequency: Union[str, Frequency] = Frequency.DAILY,
    kind: Union[str, ReturnKind] = ReturnKind.LOG,
    columns: ParameterColumns = default_columns,
) -> pd.DataFrame:
    """
    Add an excess_ret_<m>y_<frequency> column: bond return minus the return on
    the risk_free_maturity bond.

    Only the excess column is written; the intermediate return series are
    never attached to the panel and the row order is left alone.
    """
    validate_panel(panel, columns, check_date=True)
    maturity = _check_maturity(maturity)
    risk_free_maturity = _check_maturity(risk_free_maturity)
    frequency = coerce_option(Frequency, frequency)
    kind = coerce_option(ReturnKind, kind)

    bond_ret = _return_values(panel, maturity, frequency, kind, columns)
    rf_ret = _return_values(panel, risk_free_maturity, frequency, kind, columns)

    name = return_column_name("excess_ret", maturity, frequency.value)
    panel[name] = bond_ret - rf_ret
    _log_written(name, panel[name])
    return panel
