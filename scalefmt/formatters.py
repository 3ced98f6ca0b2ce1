"""
Human-readable number formatting with rounding, unit prefix scaling, sign and separators.

The pipeline for a single value:

    special values → rounding → magnitude → decimal places → render → sign → separators

Rounding happens before the magnitude is resolved, since rounding may cross a
prefix boundary: 999.97 rounded to 4 significant digits is "1,000 k", not "1000".
"""

# ## Scope
#
# Formatting is one-way (number → string). Parsing formatted strings back to
# numbers is not supported; store the numeric value instead.

# Standard library -----------------------------------------------------------------------------------------------------
import math
from typing import Any, Iterable

# Local ----------------------------------------------------------------------------------------------------------------
from .numeric import round_to_magnitude, round_to_significant_digits, std_float
from .options import (
    Binary,
    Decimal,
    FormatterConfig,
    Magnitude,
    NoScaling,
    Rounding,
    Scaling,
    Scientific,
    Sign,
    SignificantDigits,
)
from .units import PrefixBucket, find_bucket, value_magnitude
from .utils import fmt_type

# Internal rendering markers, replaced by the configured separators as the last step
DECIMAL_MARK = "."
GROUP_MARK = "\x1d"  # ASCII group separator
SCI_MARK = " * "

POS_INFINITY = "∞"
NEG_INFINITY = "-∞"
NAN = "NaN"

_DIGITS = "0123456789"


# Methods --------------------------------------------------------------------------------------------------------------

def fmt_number(value: Any, config: FormatterConfig | None = None, **overrides) -> str:
    """
    Format a number as a human-readable string.

    Args:
        value: Number to format. Accepts int, float, Decimal, Fraction, NumPy
            scalars and anything implementing __float__.
        config: Formatting policy, FormatterConfig() if None.
        **overrides: FormatterConfig.merge() arguments applied on top of config.

    Returns:
        The formatted number.

    Raises:
        TypeError: If value is not numeric.

    Examples:
        >>> fmt_number(456789)
        '456,8 k'
        >>> fmt_number(0.1)
        '100,0 m'
        >>> fmt_number(1024, scaling=Binary())
        '1,000 Ki'
        >>> fmt_number(1e33)
        '1,000 * 10^(33)'
        >>> fmt_number(123.456, FormatterConfig.general())
        '120'
        >>> fmt_number(-1, sign="always")
        '-1,000'
        >>> fmt_number(float("inf"), sign="always")
        '+∞'
    """
    config = FormatterConfig() if config is None else config
    if not isinstance(config, FormatterConfig):
        raise TypeError(f"config must be FormatterConfig, but got {fmt_type(config)}")
    if overrides:
        config = config.merge(**overrides)

    x = std_float(value)

    # Special values skip rounding, scaling and separators
    if math.isnan(x):
        return NAN
    if math.isinf(x):
        if x < 0:
            return NEG_INFINITY
        return apply_sign(POS_INFINITY, x, config.sign)

    x = round_value(x, config.rounding)
    magnitude = value_magnitude(x, config.scaling)
    places = decimal_places(x, magnitude, config.scaling, config.rounding)
    text = render(x, magnitude, places, config.scaling, trailing_zeros=config.trailing_zeros)
    text = apply_sign(text, x, config.sign)
    return inject_separators(text, config.group_separator, config.decimal_separator)


def round_value(x: float, rounding: Rounding) -> float:
    """Round x according to the rounding mode."""
    if isinstance(rounding, Magnitude):
        return round_to_magnitude(x, rounding.exponent)
    if isinstance(rounding, SignificantDigits):
        return round_to_significant_digits(x, rounding.count)
    raise TypeError(f"rounding must be Magnitude | SignificantDigits, but got {fmt_type(rounding)}")


def decimal_places(x: float, magnitude: float, scaling: Scaling, rounding: Rounding) -> int:
    """
    Number of fractional digits to render for an already rounded value.

    Args:
        x: The rounded value.
        magnitude: Real-valued magnitude of x on the scaling base, see value_magnitude().
        scaling: Scaling mode.
        rounding: Rounding mode.

    Returns:
        Fractional digit count, never negative.

    Examples:
        >>> decimal_places(100.0, 2.0, NoScaling(), SignificantDigits(4))
        1
        >>> decimal_places(1000.0, 3.0, Decimal(), SignificantDigits(4))
        3
        >>> decimal_places(123.0, 2.09, NoScaling(), Magnitude(2))
        0
    """
    if isinstance(rounding, Magnitude):
        precision = rounding.exponent
    elif isinstance(rounding, SignificantDigits):
        precision = rounding.count
    else:
        raise TypeError(f"rounding must be Magnitude | SignificantDigits, but got {fmt_type(rounding)}")
    by_magnitude = isinstance(rounding, Magnitude)

    if isinstance(scaling, (Binary, Decimal)):
        bucket = find_bucket(magnitude, scaling)
        if bucket is None:
            # Scientific notation fallback
            places = math.floor(magnitude) if by_magnitude else precision - 1
        elif isinstance(scaling, Binary):
            if by_magnitude:
                places = math.floor(math.log10(2.0 ** bucket.lower)) - precision - 1
            else:
                # Decimal digits of the scaled value x / 2^lower
                places = -_decimal_exponent(abs(x) / 2.0 ** bucket.lower) + precision - 1
        else:
            if by_magnitude:
                places = bucket.lower - precision
            else:
                places = -(math.floor(magnitude) - bucket.lower) + precision - 1

    elif isinstance(scaling, NoScaling):
        places = -precision if by_magnitude else -math.floor(magnitude) + precision - 1

    elif isinstance(scaling, Scientific):
        places = math.floor(magnitude) if by_magnitude else precision - 1

    else:
        raise TypeError(f"scaling must be Binary | Decimal | NoScaling | Scientific, but got {fmt_type(scaling)}")

    return max(places, 0)


def render(x: float,
           magnitude: float,
           places: int,
           scaling: Scaling,
           *,
           trailing_zeros: bool = True) -> str:
    """
    Render a rounded value with unit prefix or scientific notation.

    Output uses DECIMAL_MARK as decimal separator and no digit grouping,
    see inject_separators() for the final separator substitution.

    Args:
        x: The rounded value.
        magnitude: Real-valued magnitude of x on the scaling base.
        places: Fractional digit count.
        scaling: Scaling mode.
        trailing_zeros: Keep trailing fractional zeros.

    Examples:
        >>> render(1536.0, 10.58, 3, Binary())
        '1.500 Ki'
        >>> render(1536.0, 10.58, 3, Binary(spaced=False), trailing_zeros=False)
        '1.5Ki'
        >>> render(0.1, -3.32, 3, Binary())
        '1.600 * 2^(-4)'
    """
    if isinstance(scaling, NoScaling):
        return _fixed(x, places, trailing_zeros)

    if isinstance(scaling, (Binary, Decimal)):
        bucket = find_bucket(magnitude, scaling)
        if bucket is not None:
            return _prefixed(x, bucket, places, scaling, trailing_zeros)
        return _scientific(x, magnitude, places, scaling.base, trailing_zeros)

    if isinstance(scaling, Scientific):
        return _scientific(x, magnitude, places, scaling.base, trailing_zeros)

    raise TypeError(f"scaling must be Binary | Decimal | NoScaling | Scientific, but got {fmt_type(scaling)}")


def apply_sign(text: str, x: float, sign: Sign) -> str:
    """
    Prefix '+' to non-negative values when the sign policy is ALWAYS.

    Negative values already carry '-' from rendering. Positive zero counts as
    non-negative.

    Examples:
        >>> apply_sign("0.000", 0.0, Sign.ALWAYS)
        '+0.000'
        >>> apply_sign("1.000", 1.0, Sign.ONLY_MINUS)
        '1.000'
    """
    sign = Sign(sign)
    if sign == Sign.ALWAYS and math.copysign(1.0, x) > 0 and not math.isnan(x):
        return f"+{text}"
    return text


def inject_separators(text: str, group_separator: str, decimal_separator: str) -> str:
    """
    Group integer digits by 3 and substitute the configured separators.

    Groups are counted leftwards from the decimal mark, or from the scientific
    multiplier if there is no decimal mark, or from the last digit otherwise.
    No group separator is put before the first digit. An empty group separator
    disables grouping.

    Raises:
        AssertionError: If text contains no digits, which is a rendering bug.

    Examples:
        >>> inject_separators("1234567.891", ".", ",")
        '1.234.567,891'
        >>> inject_separators("-12345 k", ",", ".")
        '-12,345 k'
        >>> inject_separators("12345 * 10^(42)", ".", ",")
        '12.345 * 10^(42)'
        >>> inject_separators("1234.5", "", ",")
        '1234,5'
    """
    if group_separator:
        digits = [i for i, c in enumerate(text) if c in _DIGITS]
        assert digits, f"no digits found in rendered number {text!r}"

        earliest = digits[0] + 1
        position = text.find(DECIMAL_MARK)
        if position < 0:
            position = text.find(SCI_MARK)
        if position < 0:
            position = digits[-1] + 1

        while earliest + 3 <= position:
            position -= 3
            text = text[:position] + GROUP_MARK + text[position:]

    # Decimal mark first, a user group separator may contain it
    text = text.replace(DECIMAL_MARK, decimal_separator)
    return text.replace(GROUP_MARK, group_separator)


# Private Methods ------------------------------------------------------------------------------------------------------

def _decimal_exponent(x: float) -> int:
    """floor(log10(x)) for positive x, 0 for zero."""
    if x == 0:
        return 0
    return math.floor(math.log10(x))


def _shift(x: float, base: int, exponent: int) -> float:
    """
    Return x / base^exponent.

    Exact powers are used where possible; huge exponents are split in halves
    so the intermediate power does not overflow.
    """
    try:
        if exponent < 0:
            return x * float(base) ** -exponent
        return x / float(base) ** exponent
    except OverflowError:
        half = exponent // 2
        return _shift(_shift(x, base, half), base, exponent - half)


def _fixed(x: float, places: int, trailing_zeros: bool) -> str:
    """Fixed-point rendering, optionally trims trailing zeros and a bare decimal mark."""
    text = f"{x:.{places}f}"
    if not trailing_zeros and DECIMAL_MARK in text:
        text = text.rstrip("0").rstrip(DECIMAL_MARK)
    return text


def _prefixed(x: float, bucket: PrefixBucket, places: int, scaling: Binary | Decimal, trailing_zeros: bool) -> str:
    """Render x / base^lower with the bucket's unit prefix."""
    text = _fixed(_shift(x, scaling.base, bucket.lower), places, trailing_zeros)
    if scaling.spaced:
        text += " "
    text += bucket.symbol
    return text.rstrip()


def _scientific(x: float, magnitude: float, places: int, base: int, trailing_zeros: bool) -> str:
    """Render as "<mantissa> * <base>^(<exponent>)"."""
    exponent = math.floor(magnitude)
    mantissa = _fixed(_shift(x, base, exponent), places, trailing_zeros)
    return f"{mantissa}{SCI_MARK}{base}^({exponent})"


# Classes --------------------------------------------------------------------------------------------------------------

class Formatter:
    """
    Reusable number formatter bound to a FormatterConfig.

    Instances are immutable and stateless between calls, so a single formatter
    can be shared across threads.

    Examples:
        >>> f = Formatter()
        >>> f(456789)
        '456,8 k'
        >>> f.merge(scaling=Binary()).format(1023)
        '1.023'
        >>> Formatter(FormatterConfig.absolute()).format_many([0.1, 1, 1000])
        ['0', '1', '1.000']
    """
    __slots__ = ("_config",)

    def __init__(self, config: FormatterConfig | None = None, **overrides):
        config = FormatterConfig() if config is None else config
        if not isinstance(config, FormatterConfig):
            raise TypeError(f"config must be FormatterConfig, but got {fmt_type(config)}")
        if overrides:
            config = config.merge(**overrides)
        self._config = config

    def __call__(self, value: Any) -> str:
        return self.format(value)

    def __repr__(self) -> str:
        return f"Formatter({self._config!r})"

    def __eq__(self, other: Any) -> bool:
        if isinstance(other, Formatter):
            return self._config == other._config
        return NotImplemented

    def __hash__(self) -> int:
        return hash(self._config)

    @property
    def config(self) -> FormatterConfig:
        return self._config

    def format(self, value: Any) -> str:
        """Format a number, see fmt_number()."""
        return fmt_number(value, self._config)

    def format_many(self, values: Iterable[Any]) -> list[str]:
        """Format each number of an iterable."""
        return [fmt_number(v, self._config) for v in values]

    def merge(self, **overrides) -> "Formatter":
        """New Formatter with FormatterConfig.merge() overrides applied."""
        return Formatter(self._config.merge(**overrides))
