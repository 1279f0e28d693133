from gsw_yields.curves.evaluator import (
    gsw_forward_rate,
    gsw_forward_rate_from_values,
    gsw_price,
    gsw_price_curve,
    gsw_price_curve_from_values,
    gsw_price_from_values,
    gsw_yield,
    gsw_yield_curve,
    gsw_yield_curve_from_values,
    gsw_yield_from_values,
)
from gsw_yields.curves.parameters import (
    ParameterSet,
    extract_effective_params,
    is_three_factor,
    make_parameters,
    parameters_from_row,
)
from gsw_yields.curves.returns import (
    Frequency,
    ReturnKind,
    gsw_excess_return,
    gsw_excess_return_from_values,
    gsw_return,
    gsw_return_from_values,
)
from gsw_yields.curves.snapshot import curve_snapshot, curve_snapshot_from_values

__all__ = [
    "ParameterSet",
    "make_parameters",
    "parameters_from_row",
    "is_three_factor",
    "extract_effective_params",
    "gsw_yield",
    "gsw_price",
    "gsw_forward_rate",
    "gsw_yield_curve",
    "gsw_price_curve",
    "gsw_yield_from_values",
    "gsw_price_from_values",
    "gsw_forward_rate_from_values",
    "gsw_yield_curve_from_values",
    "gsw_price_curve_from_values",
    "Frequency",
    "ReturnKind",
    "gsw_return",
    "gsw_excess_return",
    "gsw_return_from_values",
    "gsw_excess_return_from_values",
    "curve_snapshot",
    "curve_snapshot_from_values",
]
