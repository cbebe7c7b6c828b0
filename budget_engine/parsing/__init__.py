"""Free-text expense parsing.

This package turns a sentence like "Spent 15k on rent" into a draft
expense:
- Amount extraction via an ordered pattern cascade
- Category classification via keyword weights
- Note cleanup
- The composed parser
"""

from .amounts import (
    AMOUNT_PATTERNS,
    AmountMatch,
    extract_amount,
    match_amount,
)
from .categorize import (
    CategoryMatch,
    classify,
    keyword_scores,
)
from .notes import extract_note
from .parser import draft_to_expense, parse

__all__ = [
    # Amounts
    'AMOUNT_PATTERNS',
    'AmountMatch',
    'extract_amount',
    'match_amount',
    # Categories
    'CategoryMatch',
    'classify',
    'keyword_scores',
    # Notes
    'extract_note',
    # Parser
    'draft_to_expense',
    'parse',
]
