from __future__ import annotations

import numbers
from typing import Iterable, Union

from gsw_yields.errors import DomainError


def format_maturity(maturity: float) -> str:
    """
    1.0 -> "1", 10 -> "10", 0.5 -> "0.5", 0.250 -> "0.25".
    """
    m = float(maturity)
    if m.is_integer():
        return str(int(m))
    text = repr(m)
    if "." in text and "e" not in text:
        text = text.rstrip("0").rstrip(".")
    return text


def maturity_column_name(prefix: str, maturity: float) -> str:
    return f"{prefix}_{format_maturity(maturity)}y"


def return_column_name(prefix: str, maturity: float, frequency: str) -> str:
    """e.g. ret_10y_daily, excess_ret_0.5y_monthly"""
    return f"{maturity_column_name(prefix, maturity)}_{frequency}"


def as_maturity_list(maturities: Union[float, Iterable[float]]) -> list[float]:
    """
    Normalise a scalar or sequence of maturities to a list of floats.

    Duplicates are dropped (first occurrence wins) so that one call never
    writes the same column twice.
    """
    if isinstance(maturities, numbers.Real):
        raw = [maturities]
    else:
        raw = list(maturities)

    out: list[float] = []
    for m in raw:
        m = float(m)
        if not m > 0.0:
            raise DomainError(f"all maturities must be > 0, got {m}")
        if m not in out:
            out.append(m)
    return out
