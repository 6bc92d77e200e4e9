"""Tests for market-hours rules."""

from datetime import datetime

import pytest

from empire_ledger.domain.services.market_hours import is_market_open


@pytest.mark.parametrize(
    ("moment", "expected"),
    [
        (datetime(2024, 1, 3, 9, 0), True),
        (datetime(2024, 1, 3, 15, 59), True),
        (datetime(2024, 1, 3, 16, 0), False),
        (datetime(2024, 1, 3, 8, 59), False),
        (datetime(2024, 1, 6, 12, 0), False),
        (datetime(2024, 1, 7, 12, 0), False),
    ],
)
def test_market_open_on_weekdays_between_nine_and_four(moment, expected) -> None:
    """Markets trade Monday to Friday from 09:00 until 16:00."""
    assert is_market_open(moment) is expected
