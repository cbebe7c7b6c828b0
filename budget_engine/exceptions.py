"""Exception types raised by the budget engine."""

from __future__ import annotations


class BudgetEngineError(Exception):
    """Base class for every error raised by this package."""


class ParseError(BudgetEngineError, ValueError):
    """Free text could not be turned into a draft expense."""


class AmountNotFound(ParseError):
    """No plausible monetary value was found in the text.

    Values that are non-positive or above the sanity bound are treated the
    same as a missing amount.
    """

    def __init__(self, text: str = ''):
        self.text = text
        super().__init__(
            'Could not detect an amount. Try including a number, '
            'e.g. "Paid $50 for dinner" or "Spent 15k on rent".'
        )


class InvalidRecordError(BudgetEngineError, ValueError):
    """An expense, subscription or insight record failed validation."""


class TaxonomyError(BudgetEngineError):
    """The category taxonomy file is missing labels or malformed."""
