"""
Cleaning helpers for the Federal Reserve GSW parameter file (feds200628.csv).

The file has nine lines of notes, then a header row with `Date`, the
parameters BETA0..TAU2 and many derived series (SVENYxx, SVENFxx, ...).
Missing values are flagged as -999.99 or left blank.
"""
from __future__ import annotations

import logging
from pathlib import Path
from typing import Any, Iterable, Optional, Tuple

import pandas as pd

from gsw_yields.config import ParameterColumns, columns as default_columns, settings
from gsw_yields.curves.missing import MaybeFloat, is_missing
from gsw_yields.errors import ValidationError

logger = logging.getLogger(__name__)

DateLike = Any


def safe_parse_float(value: Any) -> MaybeFloat:
    """
    Parse a cell to float; blanks, unparseable text and the -999.99 flag become None.
    """
    if is_missing(value):
        return None
    if isinstance(value, str):
        value = value.strip()
        if not value:
            return None
        try:
            value = float(value)
        except ValueError:
            return None
    try:
        number = float(value)
    except (TypeError, ValueError):
        return None
    if number == settings.missing_flag:
        return None
    return number


def clean_gsw_parameters(
    df_raw: pd.DataFrame,
    date_range: Optional[Tuple[DateLike, DateLike]] = None,
    additional_variables: Iterable[str] = (),
    columns: ParameterColumns = default_columns,
) -> pd.DataFrame:
    """
    Standardise a raw GSW frame.

    Output columns:
    date, BETA0, BETA1, BETA2, BETA3, TAU1, TAU2, [additional_variables present in the input]

    Parameter columns are nullable Float64 with pd.NA for missing cells. Rows
    are sorted by date.
    """
    df = df_raw.rename(columns={"Date": columns.date}).copy()
    if columns.date not in df.columns:
        raise ValidationError(f"raw GSW data has no '{columns.date}' or 'Date' column")
    df[columns.date] = pd.to_datetime(df[columns.date])

    if date_range is not None:
        start, end = (pd.Timestamp(d) for d in date_range)
        if start > end:
            logger.warning("starting date posterior to end date ... shuffling them around")
            start, end = end, start
        df = df[(df[columns.date] >= start) & (df[columns.date] <= end)]

    missing_cols = [c for c in columns.parameters if c not in df.columns]
    if missing_cols:
        raise ValidationError(f"raw GSW data is missing required columns: {missing_cols}")

    value_cols = list(columns.parameters)
    for name in additional_variables:
        if name in df.columns and name not in value_cols:
            value_cols.append(name)

    out = df.loc[:, [columns.date] + value_cols].copy()
    for col in value_cols:
        out[col] = pd.array([safe_parse_float(v) for v in out[col]], dtype="Float64")

    return out.sort_values(columns.date, kind="mergesort").reset_index(drop=True)


def validate_gsw_parameters(
    df: pd.DataFrame,
    columns: ParameterColumns = default_columns,
) -> None:
    """
    Raise on structural problems; warn on data-quality issues.
    """
    if len(df) == 0:
        raise ValidationError("No data found for the specified date range")

    required = [columns.date] + list(columns.parameters)
    missing_cols = [c for c in required if c not in df.columns]
    if missing_cols:
        raise ValidationError(f"Missing required columns: {missing_cols}")

    for col in columns.parameters:
        if df[col].isna().all():
            logger.warning("Column %s contains only missing values", col)

    if len(df) > 1:
        gaps = pd.to_datetime(df[columns.date]).diff().dropna()
        n_large = int((gaps > pd.Timedelta(days=settings.max_gap_days)).sum())
        if n_large:
            logger.warning("Found %d gaps larger than %d days in the data", n_large, settings.max_gap_days)


def read_gsw_csv(
    path: Path,
    date_range: Optional[Tuple[DateLike, DateLike]] = None,
    additional_variables: Iterable[str] = (),
    validate: bool = True,
) -> pd.DataFrame:
    """
    Load a local copy of feds200628.csv (or a file in the same layout).
    """
    raw = pd.read_csv(path, skiprows=settings.gsw_header_line, dtype=str, keep_default_na=False)
    df = clean_gsw_parameters(raw, date_range=date_range, additional_variables=additional_variables)
    if validate:
        validate_gsw_parameters(df)
    logger.info("Loaded %d rows of GSW parameters from %s", len(df), path)
    return df


def write_gsw_csv(df: pd.DataFrame, path: Path, columns: ParameterColumns = default_columns) -> Path:
    """
    Write a panel in the feds200628.csv layout: note lines, then `Date` and the
    parameters, with missing cells flagged as -999.99.
    """
    notes = [f"Synthetic GSW parameter file, line {i + 1}" for i in range(settings.gsw_header_line)]
    out = df.rename(columns={columns.date: "Date"}).copy()
    out["Date"] = pd.to_datetime(out["Date"]).dt.strftime("%Y-%m-%d")
    with open(path, "w", newline="") as fh:
        fh.write("\n".join(notes) + "\n")
        out.to_csv(fh, index=False, na_rep=f"{settings.missing_flag:.2f}")
    return path
