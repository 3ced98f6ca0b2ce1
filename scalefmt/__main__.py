"""
CLI interface for number formatting.

Usage:
    python -m scalefmt 456789 0.1 1e33
    python -m scalefmt --scaling binary 1023 1024
    python -m scalefmt --scaling none --magnitude 0 --group , --decimal . 1234567.8
    python -m scalefmt --help
"""

import sys
import argparse
from decimal import Decimal as PyDecimal, InvalidOperation

from .formatters import Formatter
from .options import Binary, Decimal, FormatterConfig, Magnitude, NoScaling, Scientific, Sign, SignificantDigits
from .units import BINARY_PREFIXES, DECIMAL_PREFIXES


def _number(text: str) -> PyDecimal:
    """Parse a CLI number argument, keeping all of its digits."""
    try:
        value = PyDecimal(text.replace("_", ""))
    except InvalidOperation:
        raise argparse.ArgumentTypeError(f"invalid number: {text!r}") from None
    # Signaling NaN has no float counterpart
    if value.is_snan():
        raise argparse.ArgumentTypeError(f"invalid number: {text!r}")
    return value


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        description="Format numbers with rounding, unit prefixes and separators", prog="python -m scalefmt"
    )
    parser.add_argument("values", nargs="*", type=_number, help="Numbers to format, inf and nan included")
    parser.add_argument(
        "--scaling", choices=["decimal", "binary", "none", "scientific"], default="decimal",
        help="Scaling mode (default: decimal)"
    )
    parser.add_argument(
        "--compact", action="store_true", help="No space between number and unit prefix"
    )

    rounding = parser.add_mutually_exclusive_group()
    rounding.add_argument("--digits", type=int, help="Round to N significant digits (default: 4)")
    rounding.add_argument("--magnitude", type=int, help="Round to the digit at 10^M")

    parser.add_argument(
        "--sign", choices=[s.value for s in Sign], default=Sign.ONLY_MINUS.value, help="Sign display policy"
    )
    parser.add_argument("--group", default=".", help="Group separator, empty disables grouping (default: '.')")
    parser.add_argument("--decimal", default=",", help="Decimal separator (default: ',')")
    parser.add_argument(
        "--no-trailing-zeros", action="store_true", help="Trim trailing fractional zeros"
    )
    parser.add_argument(
        "--list-prefixes", action="store_true", help="Print the unit prefixes of the scaling mode and exit"
    )
    return parser


def config_from_args(args: argparse.Namespace) -> FormatterConfig:
    """Build a FormatterConfig from parsed CLI arguments."""
    spaced = not args.compact
    scaling = {
        "decimal": Decimal(spaced),
        "binary": Binary(spaced),
        "none": NoScaling(),
        "scientific": Scientific(),
    }[args.scaling]

    if args.magnitude is not None:
        rounding = Magnitude(args.magnitude)
    else:
        rounding = SignificantDigits(4 if args.digits is None else args.digits)

    return FormatterConfig(
        decimal_separator=args.decimal,
        group_separator=args.group,
        rounding=rounding,
        scaling=scaling,
        sign=args.sign,
        trailing_zeros=not args.no_trailing_zeros,
    )


def main(argv: list[str] | None = None) -> int:
    """Main CLI entry point."""
    parser = build_parser()
    args = parser.parse_args(argv)

    if args.list_prefixes:
        table = {"binary": BINARY_PREFIXES, "decimal": DECIMAL_PREFIXES}.get(args.scaling)
        if table is None:
            parser.error(f"scaling mode '{args.scaling}' has no unit prefixes")
        for bucket in table:
            print(f"{bucket.symbol or '-':>2}  {table.base}^{bucket.lower}")
        return 0

    if not args.values:
        parser.print_help()
        return 1

    try:
        config = config_from_args(args)
    except (TypeError, ValueError) as exc:
        parser.error(str(exc))

    formatter = Formatter(config)
    for value in args.values:
        print(formatter(value))
    return 0


if __name__ == "__main__":
    sys.exit(main())
