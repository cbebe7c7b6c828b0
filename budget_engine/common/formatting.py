"""Formatting utilities for amounts and rounding shared by the analytics."""

from __future__ import annotations

import math
from typing import Callable, Optional, Union

from .. import config

AmountFormatter = Callable[[float], str]


def format_currency(amount: Union[float, int], symbol: Optional[str] = None, include_sign: bool = True) -> str:
    """Format a currency amount with thousands separators and two decimals.

    Args:
        amount: The amount to format
        symbol: Currency symbol to prefix; defaults to ``config.CURRENCY_SYMBOL``
        include_sign: Whether to include the currency symbol

    Returns:
        Formatted currency string (e.g., "$1,234.56" or "-$12.00")

    Example:
        >>> format_currency(1234.56)
        '$1,234.56'
        >>> format_currency(-12, symbol='€')
        '-€12.00'
        >>> format_currency(1234.56, include_sign=False)
        '1,234.56'
    """
    formatted = f"{abs(amount):,.2f}"
    prefix = '-' if amount < 0 else ''
    if not include_sign:
        return f"{prefix}{formatted}"
    return f"{prefix}{symbol if symbol is not None else config.CURRENCY_SYMBOL}{formatted}"


def round_half_up(value: float) -> int:
    """Round to the nearest integer with halves going up (``round`` rounds to even)."""
    return int(math.floor(value + 0.5))


def plural(count: int, word: str) -> str:
    return f"{count} {word}{'' if count == 1 else 's'}"
