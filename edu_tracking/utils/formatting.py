"""
Presentation helpers for dates, weekdays and currency (vi-VN).
"""

import math
from decimal import Decimal
from typing import Any

from ..models.record import parse_iso_date
from .logger import mask_amount


WEEKDAY_NAMES = ["Thứ 2", "Thứ 3", "Thứ 4", "Thứ 5", "Thứ 6", "Thứ 7", "Chủ Nhật"]

CURRENCY_SYMBOL = "₫"


def format_currency(amount: Any, hide: bool = False) -> str:
    """
    Format an amount in dong with dot grouping.

    Args:
        amount: Amount (None and non-numeric values format as 0)
        hide: Return a masked placeholder instead

    Returns:
        Formatted amount

    Examples:
        >>> format_currency(140000)
        '140.000 ₫'
        >>> format_currency(None)
        '0 ₫'
    """
    if hide:
        return mask_amount(amount)

    if isinstance(amount, bool) or not isinstance(amount, (int, float, Decimal)):
        amount = 0
    elif not math.isfinite(amount):
        amount = 0

    grouped = f"{round(amount):,}".replace(",", ".")
    return f"{grouped} {CURRENCY_SYMBOL}"


def format_date(date_str: str) -> str:
    """
    Format a YYYY-MM-DD date as DD/MM/YYYY.

    Examples:
        >>> format_date("2024-01-05")
        '05/01/2024'
        >>> format_date("")
        ''
    """
    parsed = parse_iso_date(date_str)
    if parsed is None:
        return ""
    return parsed.strftime("%d/%m/%Y")


def weekday_name(weekday: int) -> str:
    """Vietnamese name of a weekday (0 = Monday)."""
    if isinstance(weekday, int) and 0 <= weekday < len(WEEKDAY_NAMES):
        return WEEKDAY_NAMES[weekday]
    return ""
