from __future__ import annotations


class GSWError(Exception):
    """Base class for errors raised by gsw_yields."""


class ValidationError(GSWError, ValueError):
    """Structurally invalid input: bad decay parameter, missing column, empty panel."""


class DomainError(GSWError, ValueError):
    """Argument outside the domain of a formula (non-positive maturity, bad ordering)."""


class ArgumentError(GSWError, ValueError):
    """Unrecognised enumerated option such as a return frequency or kind."""


class ConvergenceError(GSWError, RuntimeError):
    """Raised when root-finding cannot bracket or converge to a yield."""
