"""
Numeric input normalization and rounding primitives.

Values from the Python stdlib and third-party libraries are normalized to a
plain float before formatting, then rounded either to a fixed decimal magnitude
or to a count of significant digits. Rounding is always round-half-to-even.
"""

# Standard library -----------------------------------------------------------------------------------------------------
import math
from decimal import Decimal
from fractions import Fraction
from typing import Protocol, runtime_checkable

# Local ----------------------------------------------------------------------------------------------------------------
from .utils import fmt_type


@runtime_checkable
class SupportsFloat(Protocol):
    """Protocol for duck-typed numeric conversion."""

    def __float__(self) -> float: ...


# Methods --------------------------------------------------------------------------------------------------------------

def std_float(value) -> float:
    """
    Convert a numeric value from Python stdlib or a third-party library to float.

    Parameters
    ----------
    value : various
        Python int/float, Decimal, Fraction, array scalars exposing .item()
        (NumPy, PyTorch, JAX) or any object implementing __float__.

    Returns
    -------
    float
        The value as a Python float. Special IEEE 754 values (inf, -inf, nan)
        pass through unchanged. Integers beyond float range become ±inf.

    Raises
    ------
    TypeError
        For bool, None, str, bytes and other non-numeric types.

    Examples
    --------
    >>> std_float(42)
    42.0
    >>> std_float(Decimal("0.25"))
    0.25
    >>> std_float(10**400)
    inf
    >>> std_float(True)
    Traceback (most recent call last):
        ...
    TypeError: boolean values not supported, got True
    """
    # bool is a subclass of int, reject it before the int fast path
    if isinstance(value, bool):
        raise TypeError(f"boolean values not supported, got {value}")

    if isinstance(value, float):
        return value

    if isinstance(value, int):
        try:
            return float(value)
        except OverflowError:
            return math.inf if value > 0 else -math.inf

    if isinstance(value, (Decimal, Fraction)):
        return float(value)

    if isinstance(value, (str, bytes, bytearray)) or value is None:
        raise TypeError(f"unsupported numeric type: {fmt_type(value)}")

    # Array scalars: numpy.float32(1.5).item() -> 1.5
    item = getattr(value, "item", None)
    if callable(item):
        try:
            return std_float(item())
        except (TypeError, ValueError):
            pass

    if isinstance(value, SupportsFloat):
        return float(value)

    raise TypeError(f"unsupported numeric type: {fmt_type(value)}")


def round_to_magnitude(x: float, magnitude: int) -> float:
    """
    Round x to the digit at 10^magnitude, ties to even.

    Magnitude 0 rounds to whole numbers, 1 rounds to tens, -1 rounds to tenths.

    Args:
        x: The number to round.
        magnitude: Decimal position of the last kept digit.

    Returns:
        The rounded number as float. Zero input always maps to 0.0, nonzero
        values rounding to zero keep their sign (-0.4 gives -0.0). Non-finite
        input is returned unchanged.

    Raises:
        TypeError: If magnitude is not an int.

    Examples:
        >>> round_to_magnitude(42.069, -2)
        42.07
        >>> round_to_magnitude(42.069, 0)
        42.0
        >>> round_to_magnitude(42.069, 1)
        40.0
        >>> round_to_magnitude(42.069, 2)
        0.0
        >>> round_to_magnitude(0.5, 0)
        0.0
        >>> round_to_magnitude(1.5, 0)
        2.0
    """
    if isinstance(magnitude, bool) or not isinstance(magnitude, int):
        raise TypeError(f"magnitude must be int, but got {fmt_type(magnitude)}")

    if x == 0:
        return 0.0
    if not math.isfinite(x):
        return x

    # Powers of ten are exact up to 10^22, so multiply/divide by the positive power
    try:
        scale = 10.0 ** abs(magnitude)
    except OverflowError:
        # Finer than any float resolution: nothing to round.
        # Coarser than any float: every finite value rounds to a zero of its own sign.
        return x if magnitude < 0 else math.copysign(0.0, x)

    scaled = x * scale if magnitude < 0 else x / scale
    if not math.isfinite(scaled):
        return x

    units = round(scaled)
    if units == 0:
        return math.copysign(0.0, x)

    try:
        return units / scale if magnitude < 0 else units * scale
    except OverflowError:
        return x


def round_to_significant_digits(x: float, digits: int) -> float:
    """
    Round x to a count of significant digits, ties to even.

    Args:
        x: The number to round.
        digits: Number of significant digits to keep, 0 always yields 0.0.

    Returns:
        The rounded number as float.

    Raises:
        TypeError: If digits is not an int.
        ValueError: If digits is negative.

    Examples:
        >>> round_to_significant_digits(123.45, 0)
        0.0
        >>> round_to_significant_digits(123.45, 1)
        100.0
        >>> round_to_significant_digits(123.45, 2)
        120.0
        >>> round_to_significant_digits(123.45, 4)
        123.4
        >>> round_to_significant_digits(0.789, 2)
        0.79
        >>> round_to_significant_digits(999.97, 4)
        1000.0
    """
    if isinstance(digits, bool) or not isinstance(digits, int):
        raise TypeError(f"digits must be int, but got {fmt_type(digits)}")
    if digits < 0:
        raise ValueError(f"digits must be >= 0, got {digits}")

    if x == 0 or digits == 0:
        return 0.0
    if not math.isfinite(x):
        return x

    magnitude = math.floor(math.log10(abs(x)))
    return round_to_magnitude(x, magnitude - digits + 1)
