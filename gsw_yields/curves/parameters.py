from __future__ import annotations

from dataclasses import dataclass
from typing import Any, Mapping, Optional

from gsw_yields.config import ParameterColumns, columns as default_columns
from gsw_yields.curves.missing import MaybeFloat, any_missing, to_float
from gsw_yields.errors import ValidationError


@dataclass(frozen=True)
class ParameterSet:
    """
    One date's Gurkaynak-Sack-Wright (Nelson-Siegel-Svensson) parameters.

    y(t) = beta0
         + beta1 * L1(t, tau1)
         + beta2 * L2(t, tau1)
         + beta3 * L2(t, tau2)

    L1(t, tau) = (1 - exp(-t/tau)) / (t/tau)
    L2(t, tau) = L1(t, tau) - exp(-t/tau)

    beta3 and tau2 may be None, in which case the set is the 3-factor
    Nelson-Siegel model.
    """
    beta0: float
    beta1: float
    beta2: float
    beta3: MaybeFloat
    tau1: float
    tau2: MaybeFloat

    def __post_init__(self) -> None:
        for name in ("beta0", "beta1", "beta2", "beta3", "tau1", "tau2"):
            object.__setattr__(self, name, to_float(getattr(self, name)))

        if any_missing(self.beta0, self.beta1, self.beta2, self.tau1):
            raise ValidationError(
                "beta0, beta1, beta2 and tau1 are required; use make_parameters() "
                "to get None for incomplete rows"
            )
        if self.tau1 <= 0.0:
            raise ValidationError(f"tau1 must be > 0, got {self.tau1}")
        if self.tau2 is not None and self.tau2 <= 0.0:
            raise ValidationError(f"tau2 must be > 0 when present, got {self.tau2}")

    @property
    def three_factor(self) -> bool:
        return self.beta3 is None or self.tau2 is None

    def effective(self) -> tuple[float, float, float, float, float, float]:
        """
        (beta0, beta1, beta2, beta3, tau1, tau2) with the 3-factor degeneration
        applied: beta3 -> 0.0 and tau2 -> tau1, so the fourth loading vanishes.
        """
        if self.three_factor:
            tau2 = self.tau1 if self.tau2 is None else self.tau2
            return (self.beta0, self.beta1, self.beta2, 0.0, self.tau1, tau2)
        return (self.beta0, self.beta1, self.beta2, self.beta3, self.tau1, self.tau2)

    @classmethod
    def from_row(
        cls,
        row: Any,
        columns: ParameterColumns = default_columns,
    ) -> Optional["ParameterSet"]:
        return parameters_from_row(row, columns=columns)


def make_parameters(
    beta0: Any,
    beta1: Any,
    beta2: Any,
    beta3: Any,
    tau1: Any,
    tau2: Any,
) -> Optional[ParameterSet]:
    """
    Build a ParameterSet, or return None when a core parameter is missing.

    Missing beta3/tau2 is not absence: it selects the 3-factor model.
    Non-positive decay parameters raise ValidationError.
    """
    if any_missing(beta0, beta1, beta2, tau1):
        return None
    return ParameterSet(beta0, beta1, beta2, beta3, tau1, tau2)


def _field(row: Any, name: str) -> Any:
    if isinstance(row, Mapping):
        return row.get(name)
    if hasattr(row, "get") and not isinstance(row, tuple):
        # pandas Series
        return row.get(name)
    return getattr(row, name, None)


def parameters_from_row(
    row: Any,
    columns: ParameterColumns = default_columns,
) -> Optional[ParameterSet]:
    """
    Build a ParameterSet from a panel row.

    Accepts a pandas Series, a mapping, or a namedtuple (e.g. from
    DataFrame.itertuples). Absent columns count as missing values.
    """
    values = [_field(row, name) for name in columns.parameters]
    return make_parameters(*values)


def is_three_factor(params: ParameterSet) -> bool:
    """True iff beta3 or tau2 is absent (Nelson-Siegel rather than Svensson)."""
    return params.three_factor


def extract_effective_params(params: ParameterSet) -> tuple[float, float, float, float, float, float]:
    return params.effective()
