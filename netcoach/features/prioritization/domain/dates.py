"""
Calendar-date helpers. The engine works at day granularity only.
"""

from datetime import date, datetime, timedelta

from .errors import InvalidInputError


def parse_iso_date(value: date | datetime | str | None) -> date | None:
    """
    Coerce an ISO-8601 value into a date.

    Args:
        value: date, datetime, ISO string ("2024-03-01" or "2024-03-01T10:00:00Z"), or None

    Returns:
        The calendar date, or None when the value is absent/empty

    Raises:
        InvalidInputError: If the value is not a recognizable ISO date
    """
    if value is None:
        return None
    if isinstance(value, datetime):
        return value.date()
    if isinstance(value, date):
        return value
    if isinstance(value, str):
        text = value.strip()
        if not text:
            return None
        try:
            if len(text) == 10:
                return date.fromisoformat(text)
            return datetime.fromisoformat(text.replace("Z", "+00:00")).date()
        except ValueError as exc:
            raise InvalidInputError(f"Malformed ISO date: {value!r}") from exc
    raise InvalidInputError(f"Unsupported date value: {value!r}")


def days_since(day: date, today: date) -> int:
    """Whole days from day to today, clamped at zero for future dates."""
    return max((today - day).days, 0)


def week_start_for(day: date) -> date:
    """Monday of the ISO week containing day."""
    return day - timedelta(days=day.weekday())
