"""Day-of-week derivation and date formatting."""
from datetime import date, timedelta

import pytest

from acod.services.calendar import WEEKDAY_NAMES, day_of_week, format_short_date, local_today


@pytest.mark.parametrize(
    "value, expected",
    [
        ("2024-01-01", "Segunda"),
        ("2024-03-15", "Sexta"),
        ("2024-03-17", "Domingo"),
        ("2024-03-16", "Sábado"),
        ("2024-02-29", "Quinta"),
        ("2023-12-31", "Domingo"),
    ],
)
def test_day_of_week_from_iso_string(value, expected):
    assert day_of_week(value) == expected


def test_day_of_week_accepts_date_objects():
    assert day_of_week(date(2024, 1, 3)) == "Quarta"


def test_day_of_week_covers_a_full_week_in_order():
    start = date(2024, 1, 7)  # Sunday
    names = [day_of_week(start + timedelta(days=i)) for i in range(7)]
    assert tuple(names) == WEEKDAY_NAMES


def test_day_of_week_empty_string():
    assert day_of_week("") == ""


def test_day_of_week_rejects_garbage():
    with pytest.raises(ValueError):
        day_of_week("15/03/2024")


def test_format_short_date_is_pt_br():
    assert format_short_date(date(2024, 3, 5)) == "05/03/2024"


def test_local_today_returns_a_date():
    today = local_today("America/Sao_Paulo")
    assert isinstance(today, date)
    assert abs((today - date.today()).days) <= 1
