"""
Formatting helpers for financial values (en-US, USD).
"""

import math
from datetime import date

from founderhq.config import CURRENCY_SYMBOL

MONTH_NAMES = [
    "January", "February", "March", "April", "May", "June",
    "July", "August", "September", "October", "November", "December",
]


def format_currency(value: float, cents: bool = False) -> str:
    """Format a number as dollars ($150,000 or $150,000.50 with cents)."""
    value = value or 0.0
    body = f"{abs(value):,.{2 if cents else 0}f}"
    if value < 0 and body.strip("0.,"):
        return f"-{CURRENCY_SYMBOL}{body}"
    return f"{CURRENCY_SYMBOL}{body}"


def format_number(value: float, max_decimals: int = 2) -> str:
    """Thousands separators, up to max_decimals fraction digits (1,234.5)."""
    text = f"{(value or 0):,.{max_decimals}f}"
    if "." in text:
        text = text.rstrip("0").rstrip(".")
    return text


def format_percent(value: float, decimals: int = 1) -> str:
    """Format a number as a percentage (23.5%)."""
    return f"{value:.{decimals}f}%"


def format_delta(value: float, currency: bool = False) -> str:
    """Signed change: +$500, -3, ±$0."""
    if value == 0:
        return f"±{CURRENCY_SYMBOL}0" if currency else "±0"
    absolute = format_currency(abs(value)) if currency else format_number(abs(value), 0)
    prefix = "+" if value > 0 else "-"
    return f"{prefix}{absolute}"


def format_spend(value: float) -> str:
    """Expenses shown as negative amounts with cents."""
    if value == 0:
        return format_currency(0, cents=True)
    return format_currency(-abs(value), cents=True)


def format_ratio(value) -> str:
    """Ratio with one decimal (3.2x), N/A when undefined."""
    if value is None:
        return "N/A"
    return f"{value:.1f}x"


def format_months(value) -> str:
    """Whole months, ∞ for unlimited runway, N/A when undefined."""
    if value is None:
        return "N/A"
    if math.isinf(value):
        return "∞"
    return f"{math.floor(max(value, 0))} mo"


def format_month_label(month_key: str, short: bool = True) -> str:
    """'2024-01' -> 'Jan 2024'. Keys that are not YYYY-MM are returned as-is."""
    try:
        year, month = int(month_key[:4]), int(month_key[5:7])
        if not 1 <= month <= 12:
            return month_key
        name = MONTH_NAMES[month - 1]
    except (ValueError, IndexError):
        return month_key
    return f"{name[:3] if short else name} {year}"


def format_date_label(iso_date: str) -> str:
    """'2024-01-05' -> 'January 5, 2024'."""
    try:
        d = date.fromisoformat(iso_date[:10])
    except (ValueError, TypeError):
        return iso_date or ""
    return f"{MONTH_NAMES[d.month - 1]} {d.day}, {d.year}"
