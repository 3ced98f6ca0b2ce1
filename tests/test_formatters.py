#
# Scalefmt - Formatters Tests
#

# Standard library -----------------------------------------------------------------------------------------------------
import math
from concurrent.futures import ThreadPoolExecutor
from decimal import Decimal as PyDecimal
from fractions import Fraction

# Third Party ----------------------------------------------------------------------------------------------------------
import pytest

# Local ----------------------------------------------------------------------------------------------------------------
from scalefmt.formatters import (
    Formatter,
    apply_sign,
    decimal_places,
    fmt_number,
    inject_separators,
    render,
    round_value,
)
from scalefmt.options import (
    Binary,
    Decimal,
    FormatterConfig,
    Magnitude,
    NoScaling,
    Scientific,
    Sign,
    SignificantDigits,
)


# Tests ----------------------------------------------------------------------------------------------------------------

class TestPractical:

    def test_general_display(self):
        f = Formatter(rounding=SignificantDigits(2))
        assert f(123) == "120"
        assert f(4.56) == "4,6"

    def test_calculation_results(self):
        f = Formatter()
        assert f(456789) == "456,8 k"
        assert f(0.1) == "100,0 m"

    def test_absolute_values(self):
        f = Formatter(FormatterConfig.absolute())
        assert f(0.1) == "0"
        assert f(1) == "1"
        assert f(1000) == "1.000"

    def test_data_sizes(self):
        f = Formatter(FormatterConfig.data_size())
        assert f(0.1) == "1,600 * 2^(-4)"
        assert f(1023) == "1.023"
        assert f(1024) == "1,000 Ki"


class TestSign:

    @pytest.mark.parametrize(
        "value, only_minus, always",
        [
            pytest.param(-1, "-1,000", "-1,000", id="negative"),
            pytest.param(0, "0,000", "+0,000", id="zero"),
            pytest.param(1, "1,000", "+1,000", id="positive"),
            pytest.param(-0.0, "0,000", "+0,000", id="negative-zero"),
            pytest.param(1500, "1,500 k", "+1,500 k", id="prefixed"),
            pytest.param(-1500, "-1,500 k", "-1,500 k", id="prefixed-negative"),
        ],
    )
    def test_policy(self, value, only_minus, always):
        assert fmt_number(value, sign=Sign.ONLY_MINUS) == only_minus
        assert fmt_number(value, sign=Sign.ALWAYS) == always

    @pytest.mark.parametrize(
        "value, only_minus, always",
        [
            pytest.param(-0.4, "-0", "-0", id="negative"),
            pytest.param(0.4, "0", "+0", id="positive"),
        ],
    )
    def test_rounded_to_zero_keeps_sign(self, value, only_minus, always):
        config = FormatterConfig.absolute()
        assert fmt_number(value, config) == only_minus
        assert fmt_number(value, config, sign="always") == always


class TestSpecialValues:

    @pytest.mark.parametrize(
        "value, only_minus, always",
        [
            pytest.param(math.inf, "∞", "+∞", id="pos-inf"),
            pytest.param(-math.inf, "-∞", "-∞", id="neg-inf"),
            pytest.param(math.nan, "NaN", "NaN", id="nan"),
            pytest.param(10 ** 400, "∞", "+∞", id="huge-int"),
        ],
    )
    def test_symbols(self, value, only_minus, always):
        assert fmt_number(value) == only_minus
        assert fmt_number(value, sign="always") == always

    @pytest.mark.parametrize("scaling", [Binary(), Decimal(False), NoScaling(), Scientific()])
    def test_independent_of_scaling(self, scaling):
        assert fmt_number(math.inf, scaling=scaling) == "∞"
        assert fmt_number(math.nan, scaling=scaling, sign="always") == "NaN"


class TestScaling:

    @pytest.mark.parametrize(
        "value, expected",
        [
            pytest.param(2.0 ** -10, "1,000 * 2^(-10)", id="below-range"),
            pytest.param(2, "2,000", id="two"),
            pytest.param(1000, "1.000", id="1000"),
            pytest.param(1023, "1.023", id="1023"),
            pytest.param(1024, "1,000 Ki", id="1024"),
            pytest.param(1536, "1,500 Ki", id="1536"),
            pytest.param(2.0 ** 80, "1,000 Yi", id="yobi"),
            pytest.param(2.0 ** 90, "1,000 * 2^(90)", id="above-range"),
        ],
    )
    def test_binary(self, value, expected):
        assert fmt_number(value, scaling=Binary(True)) == expected

    @pytest.mark.parametrize(
        "value, expected",
        [
            pytest.param(1e-3, "1,000 m", id="milli"),
            pytest.param(10, "10,00", id="ten"),
            pytest.param(999.94, "999,9", id="below-kilo"),
            pytest.param(999.97, "1,000 k", id="rounds-into-kilo"),
            pytest.param(1e3, "1,000 k", id="kilo"),
            pytest.param(-2.5e6, "-2,500 M", id="mega-negative"),
            pytest.param(1e33, "1,000 * 10^(33)", id="above-range"),
            pytest.param(-1e33, "-1,000 * 10^(33)", id="above-range-negative"),
        ],
    )
    def test_decimal(self, value, expected):
        assert fmt_number(value, scaling=Decimal(True)) == expected

    def test_unspaced(self):
        assert fmt_number(1500, scaling=Decimal(False)) == "1,500k"
        assert fmt_number(12, scaling=Decimal(False)) == "12,00"
        assert fmt_number(1536, scaling=Binary(False)) == "1,500Ki"

    @pytest.mark.parametrize(
        "value, expected",
        [
            pytest.param(0.1, "0,1000", id="tenth"),
            pytest.param(1, "1,000", id="one"),
            pytest.param(1000, "1.000", id="thousand"),
            pytest.param(1e10, "10.000.000.000", id="ten-billion"),
        ],
    )
    def test_none(self, value, expected):
        assert fmt_number(value, scaling=NoScaling()) == expected

    @pytest.mark.parametrize(
        "value, expected",
        [
            pytest.param(1e-1, "1,000 * 10^(-1)", id="tenth"),
            pytest.param(1, "1,000 * 10^(0)", id="one"),
            pytest.param(1e3, "1,000 * 10^(3)", id="thousand"),
            pytest.param(0, "0,000 * 10^(0)", id="zero"),
        ],
    )
    def test_scientific(self, value, expected):
        assert fmt_number(value, scaling=Scientific()) == expected


class TestRoundingMagnitude:

    @pytest.mark.parametrize(
        "exponent, value, expected",
        [
            pytest.param(-10, 0.000000123456789, "123,5 n", id="m-10-nano"),
            pytest.param(-10, 123.45, "123,4500000000", id="m-10"),
            pytest.param(-10, 0.9, "900,0000000 m", id="m-10-milli"),
            pytest.param(-1, 123456, "123,4560 k", id="m-1-kilo"),
            pytest.param(-1, 123.456, "123,5", id="m-1"),
            pytest.param(-1, 0.9, "900 m", id="m-1-milli"),
            pytest.param(0, 123456, "123,456 k", id="m0-kilo"),
            pytest.param(0, 123.456, "123", id="m0"),
            pytest.param(0, 0.9, "1", id="m0-rounds-up"),
            pytest.param(1, 123456, "123,46 k", id="m1-kilo"),
            pytest.param(1, 123.456, "120", id="m1"),
            pytest.param(1, 0.9, "0", id="m1-rounds-to-zero"),
        ],
    )
    def test_decimal_scaling(self, exponent, value, expected):
        assert fmt_number(value, rounding=Magnitude(exponent)) == expected

    def test_binary_scaling(self):
        assert fmt_number(1536, rounding=Magnitude(0), scaling=Binary()) == "1,50 Ki"


class TestRoundingSignificantDigits:

    @pytest.mark.parametrize(
        "count, value, expected",
        [
            pytest.param(0, 123456, "0", id="d0-kilo"),
            pytest.param(0, 123.456, "0", id="d0"),
            pytest.param(0, 0.9, "0", id="d0-milli"),
            pytest.param(1, 123456, "100 k", id="d1-kilo"),
            pytest.param(1, 123.456, "100", id="d1"),
            pytest.param(1, 0.9, "900 m", id="d1-milli"),
            pytest.param(10, 123456, "123,4560000 k", id="d10-kilo"),
            pytest.param(10, 123.456, "123,4560000", id="d10"),
            pytest.param(10, 0.9, "900,0000000 m", id="d10-milli"),
        ],
    )
    def test_decimal_scaling(self, count, value, expected):
        assert fmt_number(value, rounding=SignificantDigits(count)) == expected


class TestTrailingZeros:

    @pytest.mark.parametrize(
        "value, scaling, expected",
        [
            pytest.param(1024, Binary(), "1 Ki", id="binary"),
            pytest.param(1000, Decimal(), "1 k", id="decimal"),
            pytest.param(0.1, Decimal(), "100 m", id="decimal-milli"),
            pytest.param(123.4, Decimal(), "123,4", id="decimal-fraction"),
            pytest.param(10, NoScaling(), "10", id="none"),
            pytest.param(1e10, NoScaling(), "10.000.000.000", id="none-integer"),
            pytest.param(1e3, Scientific(), "1 * 10^(3)", id="scientific"),
            pytest.param(1234, Scientific(), "1,234 * 10^(3)", id="scientific-fraction"),
        ],
    )
    def test_trimmed(self, value, scaling, expected):
        assert fmt_number(value, scaling=scaling, trailing_zeros=False) == expected


class TestSeparators:

    def test_point_group_comma_decimal(self):
        f = Formatter(scaling=NoScaling()).merge(group_separator=".", decimal_separator=",")
        assert f(123456) == "123.500"
        assert f(123.456) == "123,5"
        assert f(0.9) == "0,9000"

    def test_comma_group_point_decimal(self):
        f = Formatter(FormatterConfig(scaling=NoScaling()).with_separators(",", "."))
        assert f(123456) == "123,500"
        assert f(123.456) == "123.5"
        assert f(0.9) == "0.9000"

    @pytest.mark.parametrize("value", [123456, 123.456, 0.9, 1234567.891, -98765.4321, 1e20])
    @pytest.mark.parametrize("scaling", [NoScaling(), Decimal(), Scientific()], ids=["none", "decimal", "scientific"])
    def test_swap(self, plain_config, value, scaling):
        config = plain_config.merge(scaling=scaling)
        swapped = fmt_number(value, config.with_separators(",", "."))
        assert fmt_number(value, config.with_separators(".", ",")) == swapped.translate(str.maketrans(".,", ",."))

    def test_multichar_separators(self):
        config = FormatterConfig(scaling=NoScaling(), rounding=SignificantDigits(8)).with_separators(" ", "·")
        assert fmt_number(1234567.5, config) == "1 234 567·5"

    def test_no_grouping(self):
        config = FormatterConfig(scaling=NoScaling(), group_separator="")
        assert fmt_number(1e10, config) == "10000000000"
        assert fmt_number(1234.25, config.merge(rounding=Magnitude(-2))) == "1234,25"


class TestInputTypes:

    @pytest.mark.parametrize(
        "value",
        [
            pytest.param(0.1, id="float"),
            pytest.param(PyDecimal("0.1"), id="decimal"),
            pytest.param(Fraction(1, 10), id="fraction"),
        ],
    )
    def test_numeric_types(self, value):
        assert fmt_number(value) == "100,0 m"

    @pytest.mark.parametrize("value", ["0.1", None, True])
    def test_non_numeric(self, value):
        with pytest.raises(TypeError):
            fmt_number(value)

    def test_config_type(self):
        with pytest.raises(TypeError):
            fmt_number(1, config={"sign": "always"})
        with pytest.raises(TypeError):
            Formatter(config="default")


class TestFormatter:

    def test_call_and_format(self):
        f = Formatter()
        assert f(456789) == f.format(456789) == fmt_number(456789)

    def test_format_many(self):
        f = Formatter(FormatterConfig.absolute())
        assert f.format_many([0.1, 1, 1000]) == ["0", "1", "1.000"]
        assert f.format_many(x for x in (1e6,)) == ["1.000.000"]

    def test_merge(self):
        f = Formatter()
        g = f.merge(scaling=Binary())
        assert f.config.scaling == Decimal()
        assert g.config.scaling == Binary()
        assert g(1023) == "1.023"

    def test_equality(self):
        assert Formatter() == Formatter(FormatterConfig())
        assert Formatter() != Formatter(sign="always")
        assert hash(Formatter()) == hash(Formatter())
        assert repr(Formatter()).startswith("Formatter(FormatterConfig(")

    def test_config_not_mutated(self):
        config = FormatterConfig()
        f = Formatter(config)
        f(123.456)
        f(float("nan"))
        assert f.config is config
        assert config == FormatterConfig()

    def test_concurrent(self):
        f = Formatter(FormatterConfig.data_size())
        values = [2.0 ** k + 0.5 for k in range(-5, 95)]
        expected = [f(v) for v in values]
        with ThreadPoolExecutor(max_workers=8) as pool:
            assert list(pool.map(f, values)) == expected


class TestDecimalPlaces:

    @pytest.mark.parametrize(
        "x, magnitude, scaling, rounding, expected",
        [
            pytest.param(1536.0, math.log2(1536), Binary(), Magnitude(0), 2, id="binary-magnitude"),
            pytest.param(2.0 ** 100, 100.0, Binary(), Magnitude(0), 100, id="binary-magnitude-fallback"),
            pytest.param(1023.0, math.log2(1023), Binary(), SignificantDigits(4), 0, id="binary-digits"),
            pytest.param(0.0, 0.0, Binary(), SignificantDigits(4), 3, id="binary-digits-zero"),
            pytest.param(2.0 ** 100, 100.0, Binary(), SignificantDigits(4), 3, id="binary-digits-fallback"),
            pytest.param(123456.0, math.log10(123456), Decimal(), Magnitude(-1), 4, id="decimal-magnitude"),
            pytest.param(5.0, math.log10(5), Decimal(), Magnitude(2), 0, id="decimal-magnitude-clamped"),
            pytest.param(1e40, 40.0, Decimal(), Magnitude(0), 40, id="decimal-magnitude-fallback"),
            pytest.param(0.1, -1.0, Decimal(), SignificantDigits(4), 1, id="decimal-digits"),
            pytest.param(1e40, 40.0, Decimal(), SignificantDigits(3), 2, id="decimal-digits-fallback"),
            pytest.param(7.0, math.log10(7), NoScaling(), Magnitude(-3), 3, id="none-magnitude"),
            pytest.param(0.001, -3.0, NoScaling(), SignificantDigits(4), 6, id="none-digits"),
            pytest.param(12345.0, math.log10(12345), Scientific(), Magnitude(-5), 4, id="scientific-magnitude"),
            pytest.param(0.01, -2.0, Scientific(), Magnitude(0), 0, id="scientific-magnitude-clamped"),
            pytest.param(12345.0, math.log10(12345), Scientific(), SignificantDigits(6), 5, id="scientific-digits"),
            pytest.param(12345.0, math.log10(12345), Scientific(), SignificantDigits(0), 0, id="scientific-zero"),
        ],
    )
    def test_table(self, x, magnitude, scaling, rounding, expected):
        assert decimal_places(x, magnitude, scaling, rounding) == expected

    def test_unknown_modes(self):
        with pytest.raises(TypeError):
            decimal_places(1.0, 0.0, Decimal(), "digits")
        with pytest.raises(TypeError):
            decimal_places(1.0, 0.0, "decimal", Magnitude(0))


class TestRender:

    @pytest.mark.parametrize(
        "x, magnitude, places, scaling, expected",
        [
            pytest.param(123.4, math.log10(123.4), 1, NoScaling(), "123.4", id="none"),
            pytest.param(1000.0, 3.0, 3, Decimal(), "1.000 k", id="decimal"),
            pytest.param(5.0, math.log10(5), 3, Decimal(), "5.000", id="decimal-empty-prefix"),
            pytest.param(1536.0, math.log2(1536), 3, Binary(), "1.500 Ki", id="binary"),
            pytest.param(1.0, 0.0, 3, Scientific(), "1.000 * 10^(0)", id="scientific"),
            pytest.param(-0.1, -1.0, 3, Scientific(), "-1.000 * 10^(-1)", id="scientific-negative"),
            pytest.param(0.1, math.log2(0.1), 3, Binary(), "1.600 * 2^(-4)", id="binary-fallback"),
        ],
    )
    def test_render(self, x, magnitude, places, scaling, expected):
        assert render(x, magnitude, places, scaling) == expected

    def test_trim(self):
        assert render(100.0, 2.0, 2, NoScaling(), trailing_zeros=False) == "100"
        assert render(100.5, 2.0, 2, NoScaling(), trailing_zeros=False) == "100.5"
        assert render(100.0, 2.0, 0, NoScaling(), trailing_zeros=False) == "100"

    def test_huge_exponent(self):
        assert render(5e-324, math.log10(5e-324), 3, Scientific()) == "4.941 * 10^(-324)"

    def test_unknown_scaling(self):
        with pytest.raises(TypeError):
            render(1.0, 0.0, 0, None)


class TestRoundValue:

    def test_modes(self):
        assert round_value(123.456, Magnitude(-1)) == 123.5
        assert round_value(123.456, SignificantDigits(2)) == 120.0

    def test_unknown(self):
        with pytest.raises(TypeError):
            round_value(1.0, 2)


class TestApplySign:

    @pytest.mark.parametrize(
        "text, x, sign, expected",
        [
            pytest.param("0.000", 0.0, Sign.ALWAYS, "+0.000", id="always-zero"),
            pytest.param("1.000", 1.0, Sign.ALWAYS, "+1.000", id="always-positive"),
            pytest.param("-1.000", -1.0, Sign.ALWAYS, "-1.000", id="always-negative"),
            pytest.param("∞", math.inf, Sign.ALWAYS, "+∞", id="always-inf"),
            pytest.param("NaN", math.nan, Sign.ALWAYS, "NaN", id="always-nan"),
            pytest.param("1.000", 1.0, Sign.ONLY_MINUS, "1.000", id="only-minus"),
            pytest.param("1.000", 1.0, "always", "+1.000", id="str-policy"),
        ],
    )
    def test_apply_sign(self, text, x, sign, expected):
        assert apply_sign(text, x, sign) == expected


class TestInjectSeparators:

    @pytest.mark.parametrize(
        "text, expected",
        [
            pytest.param("1234567.891", "1.234.567,891", id="fraction"),
            pytest.param("123", "123", id="short"),
            pytest.param("1234", "1.234", id="four-digits"),
            pytest.param("-123456", "-123.456", id="negative"),
            pytest.param("+1234.5", "+1.234,5", id="plus"),
            pytest.param("-12345 k", "-12.345 k", id="prefix"),
            pytest.param("12345 * 10^(42)", "12.345 * 10^(42)", id="scientific"),
            pytest.param("12345.6 * 2^(1000)", "12.345,6 * 2^(1000)", id="scientific-fraction"),
            pytest.param("0.0001234", "0,0001234", id="fraction-not-grouped"),
        ],
    )
    def test_default_separators(self, text, expected):
        assert inject_separators(text, ".", ",") == expected

    def test_user_separator_equal_to_decimal_mark(self):
        assert inject_separators("1234567.5", ",", ".") == "1,234,567.5"

    def test_empty_group(self):
        assert inject_separators("1234567.5", "", ",") == "1234567,5"
        assert inject_separators("k", "", ",") == "k"

    def test_no_digits(self):
        with pytest.raises(AssertionError):
            inject_separators("k", ".", ",")
