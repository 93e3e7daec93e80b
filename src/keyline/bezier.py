"""CSS-style cubic bezier timing curves.

The curve runs from (0, 0) to (1, 1) with two free control points
``p1 = (p1x, p1y)`` and ``p2 = (p2x, p2y)``.  Each axis is the cubic

    B(t) = 3(1-t)^2 t P1 + 3(1-t) t^2 P2 + t^3

written here in power-basis form ``((a t + b) t + c) t`` so that both the
value and the derivative cost a handful of multiplications.
"""

from __future__ import annotations

DEFAULT_EPSILON = 1e-6

_NEWTON_ITERATIONS = 8
_BISECTION_ITERATIONS = 64
_MIN_SLOPE = 1e-6


def _coefficients(p1: float, p2: float) -> tuple[float, float, float]:
    c = 3.0 * p1
    b = 3.0 * (p2 - p1) - c
    a = 1.0 - c - b
    return a, b, c


def sample_curve(t: float, p1: float, p2: float) -> float:
    """Evaluate one axis of the curve at parameter *t*."""
    a, b, c = _coefficients(p1, p2)
    return ((a * t + b) * t + c) * t


def curve_derivative(t: float, p1: float, p2: float) -> float:
    """First derivative of one axis of the curve at parameter *t*."""
    a, b, c = _coefficients(p1, p2)
    return (3.0 * a * t + 2.0 * b) * t + c


def _solve_t(x: float, p1x: float, p2x: float, epsilon: float) -> float:
    # Newton-Raphson from the linear guess; usually done in 2-3 steps.
    t = x
    for _ in range(_NEWTON_ITERATIONS):
        error = sample_curve(t, p1x, p2x) - x
        if abs(error) < epsilon:
            return t
        slope = curve_derivative(t, p1x, p2x)
        if abs(slope) < _MIN_SLOPE:
            break
        t -= error / slope
        if not 0.0 <= t <= 1.0:
            break

    # X(t) is non-decreasing for control x in [0, 1], so bisection always converges.
    lo, hi = 0.0, 1.0
    t = x
    for _ in range(_BISECTION_ITERATIONS):
        current = sample_curve(t, p1x, p2x)
        if abs(current - x) < epsilon:
            break
        if current < x:
            lo = t
        else:
            hi = t
        t = (lo + hi) / 2.0
    return t


def solve_for_y(
    x: float,
    p1x: float,
    p1y: float,
    p2x: float,
    p2y: float,
    epsilon: float = DEFAULT_EPSILON,
) -> float:
    """Return the eased output for progress *x* on the given timing curve.

    >>> solve_for_y(0.5, 0.0, 0.0, 1.0, 1.0)
    0.5
    >>> solve_for_y(1.5, 0.42, 0.0, 0.58, 1.0)
    1.0
    """
    if x <= 0.0:
        return 0.0
    if x >= 1.0:
        return 1.0
    t = _solve_t(x, p1x, p2x, epsilon)
    return sample_curve(t, p1y, p2y)
