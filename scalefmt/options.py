#
# Scalefmt Formatting Options
#

# Standard library -----------------------------------------------------------------------------------------------------
import warnings
from dataclasses import InitVar, dataclass, field
from enum import StrEnum, unique
from typing import Callable, Self

# Local ----------------------------------------------------------------------------------------------------------------
from .sentinels import UNSET, UnsetType, ifunset
from .utils import fmt_type

DIGITS = "0123456789"


# Rounding -------------------------------------------------------------------------------------------------------------

@dataclass(frozen=True)
class Magnitude:
    """
    Round statically to the digit at 10^exponent.

    Exponent 0 rounds to whole numbers, -2 to hundredths, 3 to thousands.
    """
    exponent: int = 0

    def __post_init__(self):
        if isinstance(self.exponent, bool) or not isinstance(self.exponent, int):
            raise TypeError(f"exponent must be int, but got {fmt_type(self.exponent)}")


@dataclass(frozen=True)
class SignificantDigits:
    """
    Round dynamically to a count of significant digits.

    Rounding to 0 significant digits always yields zero.
    """
    count: int = 4

    def __post_init__(self):
        if isinstance(self.count, bool) or not isinstance(self.count, int):
            raise TypeError(f"count must be int, but got {fmt_type(self.count)}")
        if self.count < 0:
            raise ValueError(f"count must be >= 0, got {self.count}")


Rounding = Magnitude | SignificantDigits


# Scaling --------------------------------------------------------------------------------------------------------------

@dataclass(frozen=True)
class Binary:
    """
    Scale by 2^10 steps with binary prefixes (Ki, Mi, ...).

    Falls back to base 2 scientific notation outside the prefix range.

    Attributes:
        spaced: Put a space between the number and the unit prefix.
    """
    spaced: bool = True

    base = 2
    step = 10

    def __post_init__(self):
        _validate_spaced(self.spaced)


@dataclass(frozen=True)
class Decimal:
    """
    Scale by 10^3 steps with SI prefixes (m, k, M, ...).

    Falls back to base 10 scientific notation outside the prefix range.

    Attributes:
        spaced: Put a space between the number and the unit prefix.
    """
    spaced: bool = True

    base = 10
    step = 3

    def __post_init__(self):
        _validate_spaced(self.spaced)


@dataclass(frozen=True)
class NoScaling:
    """No scaling and no fallback to scientific notation."""

    base = 10


@dataclass(frozen=True)
class Scientific:
    """Always base 10 scientific notation."""

    base = 10


Scaling = Binary | Decimal | NoScaling | Scientific


def _validate_spaced(spaced) -> None:
    if not isinstance(spaced, bool):
        raise TypeError(f"spaced must be bool, but got {fmt_type(spaced)}")


# Sign -----------------------------------------------------------------------------------------------------------------

@unique
class Sign(StrEnum):
    """
    Sign display policy.

    Attributes:
        ALWAYS: Prefix non-negative values with '+', zero included.
        ONLY_MINUS: Only negative values carry a sign.
    """
    ALWAYS = "always"
    ONLY_MINUS = "only_minus"


# Diagnostics ----------------------------------------------------------------------------------------------------------

class SeparatorWarning(UserWarning):
    """Separators that can make formatted numbers ambiguous."""


# Config ---------------------------------------------------------------------------------------------------------------

@dataclass(frozen=True)
class FormatterConfig:
    """
    Immutable formatting policy consumed by fmt_number() and Formatter.

    The default configuration rounds to 4 significant digits, scales with
    spaced SI prefixes, shows the sign only for negative values, keeps trailing
    zeros and uses "." to group digits and "," as decimal separator.

    Attributes:
        decimal_separator: String between integer and fractional digits.
        group_separator: String between groups of 3 integer digits, empty disables grouping.
        rounding: Magnitude(exponent) or SignificantDigits(count).
        scaling: Binary(spaced), Decimal(spaced), NoScaling() or Scientific().
        sign: Sign.ALWAYS or Sign.ONLY_MINUS, plain strings are accepted.
        trailing_zeros: Keep trailing fractional zeros, trim them otherwise.
        on_warning: Diagnostic sink receiving separator warnings as strings.
            Defaults to warnings.warn() with SeparatorWarning category.
        warn_separators: Init-only, False skips the separator report on construction.

    Examples:
        >>> config = FormatterConfig().with_scaling(Binary())
        >>> config.scaling
        Binary(spaced=True)

        >>> config = FormatterConfig.english().merge(sign="always")
        >>> config.sign
        <Sign.ALWAYS: 'always'>

    Note:
        Suspicious separators never block formatting, they are only reported
        through on_warning when the config is created, or by merge() and
        with_*() when they change a separator.
    """
    decimal_separator: str = ","
    group_separator: str = "."
    rounding: Rounding = field(default_factory=SignificantDigits)
    scaling: Scaling = field(default_factory=Decimal)
    sign: Sign = Sign.ONLY_MINUS
    trailing_zeros: bool = True

    on_warning: Callable[[str], None] | None = field(default=None, compare=False, repr=False)
    warn_separators: InitVar[bool] = True

    def __post_init__(self, warn_separators: bool = True):
        """Validate fields and report suspicious separators."""
        if not isinstance(self.decimal_separator, str):
            raise TypeError(f"decimal_separator must be str, but got {fmt_type(self.decimal_separator)}")
        if not isinstance(self.group_separator, str):
            raise TypeError(f"group_separator must be str, but got {fmt_type(self.group_separator)}")

        if not isinstance(self.rounding, (Magnitude, SignificantDigits)):
            raise TypeError(f"rounding must be Magnitude | SignificantDigits, but got {fmt_type(self.rounding)}")
        if not isinstance(self.scaling, (Binary, Decimal, NoScaling, Scientific)):
            raise TypeError(f"scaling must be Binary | Decimal | NoScaling | Scientific, "
                            f"but got {fmt_type(self.scaling)}")

        if not isinstance(self.sign, str):
            raise TypeError(f"sign must be Sign or str, but got {fmt_type(self.sign)}")
        try:
            object.__setattr__(self, "sign", Sign(self.sign))
        except ValueError:
            raise ValueError(f"sign must be one of {[s.value for s in Sign]}, got {self.sign!r}") from None

        if not isinstance(self.trailing_zeros, bool):
            raise TypeError(f"trailing_zeros must be bool, but got {fmt_type(self.trailing_zeros)}")

        if self.on_warning is not None and not callable(self.on_warning):
            raise TypeError(f"on_warning must be callable, but got {fmt_type(self.on_warning)}")

        if warn_separators:
            self._report_separators(stacklevel=3)

    # Presets ----------------------------------------------------------------------------------------------------------

    @classmethod
    def english(cls) -> Self:
        """English separators: "," groups digits and "." separates decimals."""
        return cls(group_separator=",", decimal_separator=".")

    @classmethod
    def data_size(cls) -> Self:
        """Binary prefixes for data sizes, e.g. "1,500 Ki"."""
        return cls(scaling=Binary(spaced=True))

    @classmethod
    def absolute(cls) -> Self:
        """Whole numbers without scaling, e.g. "1.000"."""
        return cls(scaling=NoScaling(), rounding=Magnitude(0))

    @classmethod
    def general(cls, digits: int = 2) -> Self:
        """General display with few significant digits and no scaling, e.g. "4,6"."""
        return cls(scaling=NoScaling(), rounding=SignificantDigits(digits))

    # Overrides --------------------------------------------------------------------------------------------------------

    def merge(self,
              decimal_separator: str | UnsetType = UNSET,
              group_separator: str | UnsetType = UNSET,
              rounding: Rounding | UnsetType = UNSET,
              scaling: Scaling | UnsetType = UNSET,
              sign: Sign | str | UnsetType = UNSET,
              trailing_zeros: bool | UnsetType = UNSET,
              on_warning: Callable[[str], None] | None | UnsetType = UNSET,
              ) -> "FormatterConfig":
        """
        Create a new FormatterConfig instance with merged configuration options.

        Parameters not provided (UNSET) are inherited from the current instance.

        Returns:
            New FormatterConfig instance, the current one is left unchanged.
        """
        return self._merged(
            decimal_separator=decimal_separator,
            group_separator=group_separator,
            rounding=rounding,
            scaling=scaling,
            sign=sign,
            trailing_zeros=trailing_zeros,
            on_warning=on_warning,
        )

    def _merged(self, **overrides) -> "FormatterConfig":
        """Build the merged config, reporting separator issues only if the separators changed."""
        merged = FormatterConfig(
            decimal_separator=ifunset(overrides.get("decimal_separator", UNSET), default=self.decimal_separator),
            group_separator=ifunset(overrides.get("group_separator", UNSET), default=self.group_separator),
            rounding=ifunset(overrides.get("rounding", UNSET), default=self.rounding),
            scaling=ifunset(overrides.get("scaling", UNSET), default=self.scaling),
            sign=ifunset(overrides.get("sign", UNSET), default=self.sign),
            trailing_zeros=ifunset(overrides.get("trailing_zeros", UNSET), default=self.trailing_zeros),
            on_warning=ifunset(overrides.get("on_warning", UNSET), default=self.on_warning),
            warn_separators=False,
        )
        if (merged.group_separator, merged.decimal_separator) != (self.group_separator, self.decimal_separator):
            # Called from merge() or a with_*() setter, point warnings at their caller
            merged._report_separators(stacklevel=3)
        return merged

    def with_separators(self, group_separator: str, decimal_separator: str) -> "FormatterConfig":
        """Set the group and decimal separators, warns on ambiguous combinations."""
        return self._merged(group_separator=group_separator, decimal_separator=decimal_separator)

    def with_rounding(self, rounding: Rounding) -> "FormatterConfig":
        return self._merged(rounding=rounding)

    def with_scaling(self, scaling: Scaling) -> "FormatterConfig":
        return self._merged(scaling=scaling)

    def with_sign(self, sign: Sign | str) -> "FormatterConfig":
        return self._merged(sign=sign)

    def with_trailing_zeros(self, trailing_zeros: bool) -> "FormatterConfig":
        return self._merged(trailing_zeros=trailing_zeros)

    # Diagnostics ------------------------------------------------------------------------------------------------------

    def separator_issues(self) -> list[str]:
        """
        List problems with the configured separators.

        Returns:
            Human-readable messages, empty if separators are unambiguous.

        Examples:
            >>> FormatterConfig().separator_issues()
            []
            >>> FormatterConfig(decimal_separator="", on_warning=lambda m: None).separator_issues()
            ['Decimal separator is empty. This may lead to ambiguous formatting.']
        """
        issues = []
        if self.decimal_separator == "":
            issues.append("Decimal separator is empty. This may lead to ambiguous formatting.")
        elif self.decimal_separator == self.group_separator:
            issues.append(
                f"Group separator \"{self.group_separator}\" and decimal separator "
                f"\"{self.decimal_separator}\" are the same. This may lead to ambiguous formatting."
            )
        for name, separator in (("Group", self.group_separator), ("Decimal", self.decimal_separator)):
            if any(c in DIGITS for c in separator):
                issues.append(
                    f"{name} separator \"{separator}\" contains digits. This may lead to ambiguous formatting."
                )
        return issues

    def _report_separators(self, stacklevel: int) -> None:
        """
        Send separator issues to on_warning, or to warnings.warn() if no sink is set.

        The stacklevel counts frames above the caller of this method, 1 being the caller.
        """
        for message in self.separator_issues():
            if self.on_warning is None:
                warnings.warn(message, SeparatorWarning, stacklevel=stacklevel + 1)
            else:
                self.on_warning(message)
