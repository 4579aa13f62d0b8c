from datetime import datetime

import pytest
import pytz

from src.timeclock.timeclock.common.datetime_utils import (
    ZoneClock,
    minutes_of_day,
    month_key,
    normalize_time_of_day,
    round_hours,
)
from src.timeclock.timeclock.common.validators import (
    require_flag,
    require_iso_date,
    require_non_negative_number,
    require_time_of_day,
)
from src.timeclock.timeclock.core.exceptions import ValidationError


def test_round_hours_is_half_up():
    assert round_hours(8.125) == 8.13
    assert round_hours(1 / 3) == 0.33
    assert round_hours(0) == 0.0


def test_minutes_of_day_compares_times_numerically():
    assert minutes_of_day("09:00") < minutes_of_day("18:00")
    assert minutes_of_day("18:00:59") == minutes_of_day("18:00")


def test_month_key():
    assert month_key("2024-03-01") == "03.2024"
    assert month_key("2023-12-31") == "12.2023"


def test_normalize_time_of_day():
    assert normalize_time_of_day("9:05") == "09:05:00"
    assert normalize_time_of_day("09:05:30") == "09:05:30"


def test_clock_converts_aware_values_to_fixed_zone():
    clock = ZoneClock("Europe/Rome")
    utc_late = pytz.utc.localize(datetime(2024, 3, 1, 23, 30))

    assert clock.today(utc_late) == "2024-03-02"
    assert clock.time_str(utc_late) == "00:30:00"


def test_clock_reads_naive_values_as_local():
    clock = ZoneClock("Europe/Rome")

    assert clock.today(datetime(2024, 3, 1, 23, 30)) == "2024-03-01"
    assert clock.zone == "Europe/Rome"


def test_hours_between_accounts_for_dst_change():
    clock = ZoneClock("Europe/Rome")
    # 2024-03-31: clocks jump from 02:00 to 03:00.
    assert clock.hours_between("2024-03-31", "01:00", "05:00") == 3.0


def test_hours_between_roll_forward_past_midnight():
    clock = ZoneClock("Europe/Rome")

    assert clock.hours_between("2024-03-01", "22:00:00", "02:00:00") == -20.0
    assert clock.hours_between("2024-03-01", "22:00:00", "02:00:00", roll_forward=True) == 4.0


@pytest.mark.parametrize("value", ["", "2024/03/01", "01-03-2024", "2024-02-30"])
def test_require_iso_date_rejects(value):
    with pytest.raises(ValidationError):
        require_iso_date(value)


@pytest.mark.parametrize("value", ["", "25:00", "8h", "12"])
def test_require_time_of_day_rejects(value):
    with pytest.raises(ValidationError):
        require_time_of_day(value)


def test_require_non_negative_number():
    assert require_non_negative_number("12.5", "Paga oraria") == 12.5
    assert require_non_negative_number(None, "Paga oraria") == 0.0
    with pytest.raises(ValidationError):
        require_non_negative_number(-1, "Paga oraria")
    with pytest.raises(ValidationError):
        require_non_negative_number("abc", "Paga oraria")


@pytest.mark.parametrize(
    "value, expected",
    [(True, True), (False, False), (1, True), (0, False), ("false", False), (" On ", True), ("0", False)],
)
def test_require_flag(value, expected):
    assert require_flag(value, "Abilitazione") is expected


@pytest.mark.parametrize("value", ["maybe", "", None, 2, [True]])
def test_require_flag_rejects(value):
    with pytest.raises(ValidationError):
        require_flag(value, "Abilitazione")
