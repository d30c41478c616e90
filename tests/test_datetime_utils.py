from datetime import date

from src.farm_ledger.farm_ledger.common.datetime_utils import (
    current_month_key,
    in_month_range,
    is_day_key,
    is_month_key,
    month_of,
    shift_month,
)


def test_day_and_month_keys():
    assert is_day_key("2024-12-15")
    assert not is_day_key("2024-12-32")
    assert not is_day_key("15/12/2024")
    assert is_month_key("2024-12")
    assert not is_month_key("2024-13")
    assert month_of("2024-12-15") == "2024-12"
    assert month_of("bad") is None


def test_shift_month_crosses_years():
    assert shift_month("2025-01", -1) == "2024-12"
    assert shift_month("2025-01", -11) == "2024-02"
    assert shift_month("2024-12", 1) == "2025-01"


def test_month_range_is_inclusive_string_compare():
    assert in_month_range("2024-12", "2024-12", "2025-01")
    assert in_month_range("2025-01", None, "2025-01")
    assert not in_month_range("2025-02", "2024-12", "2025-01")


def test_current_month_key():
    assert current_month_key(date(2025, 3, 9)) == "2025-03"
