# Date display utilities
from datetime import date


def format_date_range(start: date, end: date) -> str:
    """
    Human-readable range, e.g. "July 4, 2025", "July 4 - 8, 2025" or
    "Dec 29, 2025 - Jan 2, 2026".
    """
    if start == end:
        return f"{start.strftime('%B')} {start.day}, {start.year}"
    if start.year == end.year and start.month == end.month:
        return f"{start.strftime('%B')} {start.day} - {end.day}, {end.year}"
    return (
        f"{start.strftime('%b')} {start.day}, {start.year} - "
        f"{end.strftime('%b')} {end.day}, {end.year}"
    )


def format_days(days: float) -> str:
    """Render 4.0 as "4" and 4.5 as "4.5"."""
    return str(int(days)) if float(days).is_integer() else str(days)
