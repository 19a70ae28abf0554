# acod/services/calendar.py
"""
Calendar helpers shared by the content workflow.

Dates are calendar dates in the agency's local timezone; nothing here
goes through UTC midnight, so "2024-01-01" is always a Monday.
"""
from datetime import date, datetime
from zoneinfo import ZoneInfo

# Indexed Sunday=0 .. Saturday=6
WEEKDAY_NAMES = ("Domingo", "Segunda", "Terça", "Quarta", "Quinta", "Sexta", "Sábado")


def day_of_week(value: date | str) -> str:
    """
    Weekday name (pt-BR) of a calendar date.

    Args:
        value: a date, or an ISO "YYYY-MM-DD" string.

    Returns:
        "Domingo".."Sábado"; "" for an empty string.

    Raises:
        ValueError: if the string is not an ISO date.
    """
    if isinstance(value, str):
        if not value:
            return ""
        value = date.fromisoformat(value)
    # isoweekday(): Monday=1 .. Sunday=7
    return WEEKDAY_NAMES[value.isoweekday() % 7]


def local_today(tz_name: str) -> date:
    """Today's date in the given IANA timezone."""
    return datetime.now(ZoneInfo(tz_name)).date()


def format_short_date(value: date) -> str:
    """pt-BR short date, e.g. 15/03/2024."""
    return value.strftime("%d/%m/%Y")
