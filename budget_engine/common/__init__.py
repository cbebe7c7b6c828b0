"""Common utilities shared across the parsing and analytics modules."""

from .formatting import AmountFormatter, format_currency, plural, round_half_up

__all__ = [
    'AmountFormatter',
    'format_currency',
    'plural',
    'round_half_up',
]
