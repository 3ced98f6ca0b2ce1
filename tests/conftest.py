#
# Pytest Fixtures
#

# Third-party ----------------------------------------------------------------------------------------------------------
import pytest

# Local ----------------------------------------------------------------------------------------------------------------
from scalefmt.options import FormatterConfig, NoScaling, SignificantDigits


# Fixtures -------------------------------------------------------------------------------------------------------------

class WarningSink(list):
    """Collects diagnostic messages passed to FormatterConfig.on_warning."""

    def __call__(self, message: str) -> None:
        self.append(message)


@pytest.fixture
def warning_sink() -> WarningSink:
    """Injectable diagnostic sink recording separator warnings."""
    return WarningSink()


@pytest.fixture
def plain_config() -> FormatterConfig:
    """No scaling, 10 significant digits, default separators."""
    return FormatterConfig(scaling=NoScaling(), rounding=SignificantDigits(10))
