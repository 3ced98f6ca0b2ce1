#
# Scalefmt Unit Prefixes and Magnitudes
#

# Standard library -----------------------------------------------------------------------------------------------------
import math
from dataclasses import dataclass, field
from typing import Iterator

# Third-party ----------------------------------------------------------------------------------------------------------
from frozendict import frozendict

# Local ----------------------------------------------------------------------------------------------------------------
from .options import Binary, Decimal, Scaling
from .utils import fmt_type


# Classes --------------------------------------------------------------------------------------------------------------

@dataclass(frozen=True)
class PrefixBucket:
    """
    Half-open magnitude interval [lower, upper) mapped to a unit prefix symbol.

    Example:
        PrefixBucket(3, 6, "k") covers 10^3 <= |value| < 10^6 on a decimal scale.
    """
    lower: int
    upper: int
    symbol: str

    def __contains__(self, magnitude: float) -> bool:
        return self.lower <= magnitude < self.upper


@dataclass(frozen=True)
class PrefixTable:
    """
    Ordered, contiguous collection of prefix buckets of one scale.

    Attributes:
        base: Scale base, 2 for binary or 10 for decimal prefixes.
        buckets: Buckets sorted by lower bound.

    Examples:
        >>> DECIMAL_PREFIXES.find(4.2).symbol
        'k'
        >>> DECIMAL_PREFIXES.find(33.0) is None
        True
        >>> BINARY_PREFIXES.get_bucket("Ki")
        PrefixBucket(lower=10, upper=20, symbol='Ki')
    """
    base: int
    buckets: tuple[PrefixBucket, ...]

    _by_symbol: frozendict = field(init=False, repr=False, compare=False)

    def __post_init__(self):
        object.__setattr__(self, "buckets", tuple(self.buckets))
        object.__setattr__(self, "_by_symbol", frozendict({b.symbol: b for b in self.buckets}))

    def __iter__(self) -> Iterator[PrefixBucket]:
        return iter(self.buckets)

    def __len__(self) -> int:
        return len(self.buckets)

    @property
    def lower(self) -> int:
        """Lowest magnitude covered by the table."""
        return self.buckets[0].lower

    @property
    def upper(self) -> int:
        """First magnitude above the table range."""
        return self.buckets[-1].upper

    @property
    def symbols(self) -> tuple[str, ...]:
        return tuple(b.symbol for b in self.buckets)

    def find(self, magnitude: float) -> PrefixBucket | None:
        """
        Find the bucket containing magnitude.

        Returns:
            The matching bucket, or None if magnitude is out of range.
        """
        if math.isnan(magnitude):
            return None
        for bucket in self.buckets:
            if magnitude in bucket:
                return bucket
        return None

    def get_bucket(self, symbol: str) -> PrefixBucket:
        """
        Lookup bucket by prefix symbol.

        Raises:
            KeyError: If no bucket carries the symbol.
        """
        return self._by_symbol[symbol]

    def is_contiguous(self) -> bool:
        """True if buckets are non-empty and each upper bound is the next lower bound."""
        if not self.buckets or any(b.lower >= b.upper for b in self.buckets):
            return False
        return all(a.upper == b.lower for a, b in zip(self.buckets, self.buckets[1:]))


# @formatter:off

# IEC binary prefixes, magnitude as power of 2
BINARY_PREFIXES = PrefixTable(base=2, buckets=(
    PrefixBucket(0, 10, ""),     # 2⁰ = 1
    PrefixBucket(10, 20, "Ki"),  # kibi = 2¹⁰ = 1,024
    PrefixBucket(20, 30, "Mi"),  # mebi = 2²⁰
    PrefixBucket(30, 40, "Gi"),  # gibi = 2³⁰
    PrefixBucket(40, 50, "Ti"),  # tebi = 2⁴⁰
    PrefixBucket(50, 60, "Pi"),  # pebi = 2⁵⁰
    PrefixBucket(60, 70, "Ei"),  # exbi = 2⁶⁰
    PrefixBucket(70, 80, "Zi"),  # zebi = 2⁷⁰
    PrefixBucket(80, 90, "Yi"),  # yobi = 2⁸⁰
))

# SI prefixes with 10^(3N) exponents, magnitude as power of 10
DECIMAL_PREFIXES = PrefixTable(base=10, buckets=(
    PrefixBucket(-30, -27, "q"),  # quecto
    PrefixBucket(-27, -24, "r"),  # ronto
    PrefixBucket(-24, -21, "y"),  # yocto
    PrefixBucket(-21, -18, "z"),  # zepto
    PrefixBucket(-18, -15, "a"),  # atto
    PrefixBucket(-15, -12, "f"),  # femto
    PrefixBucket(-12, -9, "p"),   # pico
    PrefixBucket(-9, -6, "n"),    # nano
    PrefixBucket(-6, -3, "µ"),    # micro
    PrefixBucket(-3, 0, "m"),     # milli
    PrefixBucket(0, 3, ""),       # (no prefix)
    PrefixBucket(3, 6, "k"),      # kilo
    PrefixBucket(6, 9, "M"),      # mega
    PrefixBucket(9, 12, "G"),     # giga
    PrefixBucket(12, 15, "T"),    # tera
    PrefixBucket(15, 18, "P"),    # peta
    PrefixBucket(18, 21, "E"),    # exa
    PrefixBucket(21, 24, "Z"),    # zetta
    PrefixBucket(24, 27, "Y"),    # yotta
    PrefixBucket(27, 30, "R"),    # ronna
    PrefixBucket(30, 33, "Q"),    # quetta
))

# @formatter:on


# Methods --------------------------------------------------------------------------------------------------------------

def value_magnitude(value: float, scaling: Scaling) -> float:
    """
    Real-valued magnitude of a value on the scale of the scaling mode.

    Binary scaling: log2(|value|), all other modes: log10(|value|).
    The magnitude is not floored, values just below a prefix boundary
    (1023 vs 1024) must stay distinguishable.

    Examples:
        >>> value_magnitude(1000.0, Decimal())
        3.0
        >>> value_magnitude(1024.0, Binary())
        10.0
        >>> value_magnitude(0.0, Binary())
        0.0
    """
    if value == 0:
        return 0.0
    if isinstance(scaling, Binary):
        return math.log2(abs(value))
    return math.log10(abs(value))


def prefix_table(scaling: Scaling) -> PrefixTable | None:
    """Prefix table of the scaling mode, None for modes without unit prefixes."""
    if isinstance(scaling, Binary):
        return BINARY_PREFIXES
    if isinstance(scaling, Decimal):
        return DECIMAL_PREFIXES
    return None


def find_bucket(magnitude: float, scaling: Scaling) -> PrefixBucket | None:
    """
    Look up the prefix bucket of a magnitude under the scaling mode.

    Returns:
        The bucket, or None for out-of-range magnitudes and modes without prefixes.

    Raises:
        TypeError: If magnitude is not a real number.
    """
    if isinstance(magnitude, bool) or not isinstance(magnitude, (int, float)):
        raise TypeError(f"magnitude must be int | float, but got {fmt_type(magnitude)}")
    table = prefix_table(scaling)
    if table is None:
        return None
    return table.find(magnitude)


# Module Sanity Checks -------------------------------------------------------------------------------------------------

for _table, _scaling in ((BINARY_PREFIXES, Binary), (DECIMAL_PREFIXES, Decimal)):
    if not _table.is_contiguous():
        raise AssertionError(
            f"Configuration Error: prefix buckets of base {_table.base} must be contiguous and non-overlapping."
        )
    if _table.base != _scaling.base or any(b.upper - b.lower != _scaling.step for b in _table):
        raise AssertionError(
            f"Configuration Error: prefix buckets of base {_table.base} must span {_scaling.step} magnitudes each."
        )
    if any(_table.get_bucket(b.symbol) is not b for b in _table):
        raise AssertionError(f"Configuration Error: prefix symbols of base {_table.base} must be unique.")
