"""
Shared formatting helpers for the ad material dashboard
"""
import pandas as pd

MISSING = "-"


def _is_missing(x) -> bool:
    if x is None:
        return True
    try:
        return bool(pd.isna(x))
    except (TypeError, ValueError):
        return False


def fmt_number(x, decimals=0):
    """Format number with thousands separators."""
    if _is_missing(x):
        return MISSING
    return f"{x:,.{decimals}f}"


def fmt_currency(x, prefix="¥"):
    """Format number as currency with two decimals."""
    if _is_missing(x):
        return MISSING
    return f"{prefix}{fmt_number(x, 2)}"


def fmt_percent(x, decimals=2):
    """Format a 0-1 ratio as percentage."""
    if _is_missing(x):
        return MISSING
    return f"{fmt_number(x * 100, decimals)}%"


def fmt_ratio(x):
    """Format ROI-style ratios (can exceed 1)."""
    return fmt_number(x, 2)


def fmt_text(x):
    if _is_missing(x) or x == "":
        return MISSING
    return str(x)


FORMATTERS = {
    "number": fmt_number,
    "currency": fmt_currency,
    "percent": fmt_percent,
    "ratio": fmt_ratio,
    "text": fmt_text,
}


def format_value(kind: str, value) -> str:
    """Format a cell value by column kind; unknown kinds fall back to text."""
    return FORMATTERS.get(kind, fmt_text)(value)


def safe_divide(numerator, denominator, default=None):
    """Safe division that returns default for zero or missing denominator."""
    if _is_missing(numerator) or _is_missing(denominator) or denominator == 0:
        return default
    return numerator / denominator

