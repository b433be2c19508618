"""
ISO month-key helpers.

Keys are taken by string slicing (YYYY-MM), never by date parsing, so a
non-ISO date silently lands in a different bucket.
"""

from datetime import date


def month_key(date_str: str) -> str:
    """YYYY-MM prefix of an ISO date."""
    return (date_str or "")[:7]


def quarter_key(mk: str) -> str:
    """'2024-05' -> 'Q2 2024'. Keys without a numeric month are kept as-is."""
    try:
        month = int(mk[5:7])
    except ValueError:
        return mk
    return f"Q{(month - 1) // 3 + 1} {mk[:4]}"


def add_months(mk: str, months: int) -> str:
    """Shift a YYYY-MM key by a number of months (negative goes back)."""
    year, month = int(mk[:4]), int(mk[5:7])
    index = year * 12 + (month - 1) + months
    return f"{index // 12:04d}-{index % 12 + 1:02d}"


def trailing_months(today: date, months: int) -> list[str]:
    """The `months` month keys ending with today's month, oldest first."""
    current = today.strftime("%Y-%m")
    return [add_months(current, -i) for i in range(months - 1, -1, -1)]
