from __future__ import annotations

from datetime import date, datetime


def parse_iso_date(value: str) -> date:
    """Parse YYYY-MM-DD string into date."""
    return datetime.strptime(value, "%Y-%m-%d").date()


def today_local() -> date:
    """Current local calendar day.

    Note: Wrapped so tests can patch it easily.
    """
    return datetime.now().date()


def format_display_date(value: date) -> str:
    """Render a day the way the history table shows it, e.g. 'Jan 5, 2024'."""
    return f"{value.strftime('%b')} {value.day}, {value.year}"
