"""
Significant-Digit Rounding

Bounds are displayed, and compared for the inferior/optimal node colors,
after rounding to a fixed number of significant digits. Rounding is half
away from zero, both for the significand and for the final decimal places.
"""

from __future__ import annotations

from decimal import ROUND_HALF_UP, Decimal, localcontext

import numpy as np

from .constants import (
    DEFAULT_SIG_DIGITS,
    NICE_MAX_LENGTH,
    UNBOUNDED_LABEL,
    UNBOUNDED_THRESHOLD,
)

# Enough precision to quantize 1e99 sentinels to 8 decimal places
_DECIMAL_PRECISION = 400


def _round_half_away(value: float, digits: int = 0) -> float:
    with localcontext() as ctx:
        ctx.prec = _DECIMAL_PRECISION
        quantum = Decimal(1).scaleb(-digits)
        return float(Decimal(repr(float(value))).quantize(quantum, rounding=ROUND_HALF_UP))


def is_unbounded(value: float) -> bool:
    """True if |value| is too large to be a meaningful bound."""
    return abs(value) > UNBOUNDED_THRESHOLD


def order_of_magnitude(value: float) -> float:
    """Signed power of ten of the leading digit; 1.0 for zero."""
    if value == 0:
        return 1.0
    sign = 1.0 if value > 0 else -1.0
    return sign * 10.0 ** float(np.floor(np.log10(abs(value))))


def sig_round(value: float, digits: int = DEFAULT_SIG_DIGITS) -> float:
    """Round ``value`` to ``digits`` significant digits."""
    value = float(value)
    if not np.isfinite(value):
        return value
    if digits == 0:
        return _round_half_away(value)
    magnitude = order_of_magnitude(value)
    scale = 10.0 ** digits
    significand = _round_half_away(value / magnitude * scale) / scale
    return _round_half_away(significand * magnitude, digits)


def nice(value: float) -> str:
    """Render a bound for display, in scientific notation when it is long."""
    value = float(value)
    if is_unbounded(value):
        return UNBOUNDED_LABEL
    text = repr(value)
    if len(text) > NICE_MAX_LENGTH:
        return "%.3e" % value
    return text


def sig_round_nice(value: float, digits: int = DEFAULT_SIG_DIGITS) -> str:
    return nice(sig_round(value, digits))
