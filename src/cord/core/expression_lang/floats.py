"""
IEEE-754 arithmetic helpers for the evaluator.

Python's ``math`` module raises where IEEE-754 returns a non-finite value
(``1 / 0``, ``math.log(0)``, ``math.pow(0, -1)``). The expression language
surfaces those cases as ``inf``/``nan`` results instead, so every operation
the evaluator performs goes through one of these functions. Results are
rounded to single precision to match 32-bit arithmetic.
"""

from __future__ import annotations

import math
import struct
from decimal import Decimal

_SINGLE = struct.Struct("<f")


def to_single(x: float) -> float:
    """Round a double to the nearest single-precision value."""
    try:
        return _SINGLE.unpack(_SINGLE.pack(x))[0]
    except OverflowError:
        return math.copysign(math.inf, x)


def format_single(x: float) -> str:
    """Shortest decimal text that reads back as the same single-precision value.

    Always positional, never exponent notation: ``1e20`` prints as
    ``100000000000000000000`` and ``1.5e-7`` as ``0.00000015``. Integral
    values drop the fraction, ``-0.0`` keeps its sign, and non-finite values
    print as ``inf``, ``-inf`` and ``NaN``.
    """
    if math.isnan(x):
        return "NaN"
    if math.isinf(x):
        return "inf" if x > 0 else "-inf"
    shortest = x
    for digits in range(1, 10):
        candidate = float(f"{x:.{digits}g}")
        if to_single(candidate) == x:
            shortest = candidate
            break
    text = format(Decimal(repr(shortest)), "f")
    if "." in text:
        text = text.rstrip("0").rstrip(".")
    return text


def divide(left: float, right: float) -> float:
    if right == 0.0:
        if left == 0.0 or math.isnan(left):
            return math.nan
        return math.copysign(math.inf, left) * math.copysign(1.0, right)
    return left / right


def power(base: float, exponent: float) -> float:
    """Real-exponent power with IEEE-754 ``pow`` edge cases."""
    try:
        return math.pow(base, exponent)
    except ValueError:
        # 0 ** negative is a pole; negative ** fractional has no real value
        if base == 0.0:
            return _pole(base, exponent)
        return math.nan
    except OverflowError:
        if base < 0 and _is_odd_integer(exponent):
            return -math.inf
        return math.inf


def _pole(base: float, exponent: float) -> float:
    if math.copysign(1.0, base) < 0 and _is_odd_integer(exponent):
        return -math.inf
    return math.inf


def _is_odd_integer(x: float) -> bool:
    return math.isfinite(x) and x.is_integer() and int(x) % 2 == 1


def ln(x: float) -> float:
    return _logarithm(math.log, x)


def log10(x: float) -> float:
    return _logarithm(math.log10, x)


def _logarithm(func, x: float) -> float:
    if x == 0.0:
        return -math.inf
    if x < 0.0:
        return math.nan
    return func(x)


def sin(x: float) -> float:
    return _periodic(math.sin, x)


def cos(x: float) -> float:
    return _periodic(math.cos, x)


def tan(x: float) -> float:
    return _periodic(math.tan, x)


def _periodic(func, x: float) -> float:
    if math.isinf(x):
        return math.nan
    return func(x)
