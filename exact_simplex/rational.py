from __future__ import annotations

from decimal import Decimal
from fractions import Fraction
from typing import Union

# --- Exact rational helpers ---
Num = Union[int, float, Fraction, Decimal, str]


def F(x: Num) -> Fraction:
    """Convert a number to Fraction exactly when possible.
    - Fraction -> as is
    - Decimal -> exact rational
    - int -> exact
    - float -> best rational approx (limit large denominator)
    - str -> parsed by Fraction ("3/4", "0.25")
    """
    if isinstance(x, Fraction):
        return x
    if isinstance(x, bool):
        raise TypeError("booleans are not numbers here")
    if isinstance(x, Decimal):
        return Fraction(x)
    if isinstance(x, int):
        return Fraction(x)
    if isinstance(x, float):
        # from_float keeps the binary value, limit_denominator drops float noise
        return Fraction.from_float(x).limit_denominator(10**12)
    return Fraction(str(x))


def fmt_out(x: Num) -> str:
    """Pretty-print numbers as integers or reduced fractions."""
    fr = F(x)
    if fr.denominator == 1:
        return str(fr.numerator)
    sign = '-' if fr < 0 else ''
    return f"{sign}{abs(fr.numerator)}/{fr.denominator}"
