"""Tests for next-occurrence arithmetic on yearly dates."""

from datetime import date, datetime

from kinship.domain.recurrence import days_until, is_within_window, next_occurrence


def test_birthday_today_counts_as_current():
    assert next_occurrence(date(2020, 3, 15), date(2024, 3, 15)) == date(2024, 3, 15)


def test_birthday_passed_rolls_to_next_year():
    assert next_occurrence(date(2020, 3, 15), date(2024, 3, 16)) == date(2025, 3, 15)


def test_birthday_later_this_year():
    assert next_occurrence(date(1990, 12, 1), date(2024, 3, 16)) == date(2024, 12, 1)


def test_year_wraparound_on_new_years_eve():
    assert next_occurrence(date(1985, 1, 1), date(2024, 12, 31)) == date(2025, 1, 1)


def test_datetime_inputs_compare_by_day():
    today = datetime(2024, 3, 15, 23, 59)
    assert next_occurrence(date(2020, 3, 15), today) == date(2024, 3, 15)
    assert days_until(datetime(2020, 3, 15, 8, 0), today) == 0


def test_leap_day_in_leap_year():
    assert next_occurrence(date(2000, 2, 29), date(2024, 1, 10)) == date(2024, 2, 29)


def test_leap_day_rolls_to_march_first_in_common_year():
    assert next_occurrence(date(2000, 2, 29), date(2025, 1, 10)) == date(2025, 3, 1)
    # Rolls to the following year's Mar 1, not to the next leap year.
    assert next_occurrence(date(2000, 2, 29), date(2025, 3, 2)) == date(2026, 3, 1)


def test_days_until():
    assert days_until(date(1990, 3, 20), date(2024, 3, 15)) == 5
    assert days_until(date(1990, 3, 14), date(2024, 3, 15)) == 364


def test_window_is_inclusive_of_last_day():
    today = date(2024, 1, 1)
    assert is_within_window(date(1990, 1, 1), today)
    assert is_within_window(date(1990, 1, 31), today)
    assert not is_within_window(date(1990, 2, 1), today)
    assert is_within_window(date(1990, 2, 1), today, window_days=31)
