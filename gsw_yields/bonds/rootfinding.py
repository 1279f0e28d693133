"""Bracketed root-finding (Brent) with automatic bracket expansion."""

from __future__ import annotations

import logging
from dataclasses import dataclass
from typing import Callable, Optional, Tuple

import numpy as np
from scipy.optimize import brentq

from gsw_yields.errors import ConvergenceError

logger = logging.getLogger(__name__)

Func = Callable[[float], float]


@dataclass
class RootResult:
    root: float
    iterations: int
    bracket: Tuple[float, float]


def _sign_change(fa: float, fb: float) -> bool:
    return bool(np.isfinite(fa) and np.isfinite(fb) and fa * fb < 0.0)


def find_bracket(
    func: Func,
    lower: float,
    upper: float,
    expansion: float = 2.0,
    max_attempts: int = 25,
    floor: Optional[float] = None,
) -> Tuple[float, float]:
    """
    Widen [lower, upper] geometrically about its midpoint until func changes sign.

    Each failed attempt multiplies the half-width by `expansion`. The lower
    edge never goes below `floor`. Raises ConvergenceError after `max_attempts`.
    """
    if not lower < upper:
        raise ValueError(f"lower must be < upper, got [{lower}, {upper}]")
    if expansion <= 1.0:
        raise ValueError("expansion must be > 1")

    mid = 0.5 * (lower + upper)
    half = 0.5 * (upper - lower)
    a, b = lower, upper
    for attempt in range(1, max_attempts + 1):
        fa = func(a)
        fb = func(b)
        logger.debug("Bracket attempt %s: [%s, %s] f=(%s, %s)", attempt, a, b, fa, fb)
        if fa == 0.0:
            return a, a
        if fb == 0.0:
            return b, b
        if _sign_change(fa, fb):
            return a, b
        half *= expansion
        a = mid - half
        b = mid + half
        if floor is not None:
            a = max(a, floor)
    raise ConvergenceError(
        f"Failed to bracket a root after {max_attempts} attempts (last bracket [{a}, {b}])"
    )


def solve_bracketed(
    func: Func,
    lower: float,
    upper: float,
    *,
    expansion: float = 2.0,
    max_attempts: int = 25,
    floor: Optional[float] = None,
    xtol: float = 1e-12,
    max_iter: int = 200,
) -> RootResult:
    """
    Brent's method on a bracket found by find_bracket.
    """
    a, b = find_bracket(func, lower, upper, expansion=expansion, max_attempts=max_attempts, floor=floor)
    if a == b:
        return RootResult(a, 0, (a, b))

    root, info = brentq(func, a, b, xtol=xtol, maxiter=max_iter, full_output=True, disp=False)
    if not info.converged:
        raise ConvergenceError(
            f"Brent's method did not converge in {max_iter} iterations on [{a}, {b}]: {info.flag}"
        )
    logger.debug("Root %s found in %s iterations on [%s, %s]", root, info.iterations, a, b)
    return RootResult(float(root), int(info.iterations), (a, b))
