"""Amount extraction from free-text expense descriptions.

Patterns are tried in a fixed order and the first one that yields a
plausible value wins, so specific shapes ("$45", "15k", "20 dollars")
take precedence over the bare-number fallback.
"""

from __future__ import annotations

import logging
import math
import re
from typing import NamedTuple, Optional, Pattern, Tuple

logger = logging.getLogger(__name__)

CURRENCY_SYMBOLS = '$€£¥₹₦₱₩'
CURRENCY_WORDS = r'(?:dollars?|usd|euro?s?|pounds?|rupees?|naira|pesos?)'
ACTION_VERBS = r'(?:paid|spent|cost|bought|charged|pay)'

THOUSAND_MULTIPLIER = 1000
# A "k" suffix on a value this large is taken to already be the full amount
THOUSAND_SUFFIX_LIMIT = 10_000
MAX_PLAUSIBLE_AMOUNT = 100_000_000

_SYMBOL = f'[{re.escape(CURRENCY_SYMBOLS)}]'
_NUMBER = r'([\d,]+(?:\.\d{1,2})?)'
_FLAGS = re.IGNORECASE | re.ASCII


class AmountPattern(NamedTuple):
    name: str
    regex: Pattern[str]


class AmountMatch(NamedTuple):
    value: float
    pattern: str
    span: Tuple[int, int]
    matched: str


AMOUNT_PATTERNS: Tuple[AmountPattern, ...] = (
    AmountPattern('currency_symbol', re.compile(rf'{_SYMBOL}\s*{_NUMBER}\s*k?\b', _FLAGS)),
    AmountPattern('thousands_suffix', re.compile(r'(\d[\d,]*(?:\.\d{1,2})?)\s*k\b', _FLAGS)),
    AmountPattern('currency_word', re.compile(rf'{_NUMBER}\s*{CURRENCY_WORDS}', _FLAGS)),
    AmountPattern('action_verb', re.compile(rf'{ACTION_VERBS}\s+{_SYMBOL}?\s*{_NUMBER}\s*k?\b', _FLAGS)),
    AmountPattern('preposition', re.compile(rf'(?:for|of)\s+{_SYMBOL}?\s*{_NUMBER}\s*k?\b', _FLAGS)),
    AmountPattern('bare_number', re.compile(_NUMBER, _FLAGS)),
)


def _to_number(raw: str) -> Optional[float]:
    try:
        value = float(raw.replace(',', ''))
    except ValueError:
        return None
    return value if math.isfinite(value) else None


def is_plausible_amount(value: Optional[float]) -> bool:
    return value is not None and 0 < value < MAX_PLAUSIBLE_AMOUNT


def match_amount(text: str) -> Optional[AmountMatch]:
    """Return the winning amount match with the pattern that produced it."""
    if not text:
        return None
    lower = text.lower()

    for pattern in AMOUNT_PATTERNS:
        match = pattern.regex.search(lower)
        if not match:
            continue
        value = _to_number(match.group(1))
        if value is None:
            continue
        if 'k' in match.group(0) and value < THOUSAND_SUFFIX_LIMIT:
            value *= THOUSAND_MULTIPLIER
        if not is_plausible_amount(value):
            logger.debug("Pattern %s matched implausible amount %r", pattern.name, value)
            continue
        logger.debug("Pattern %s matched %r -> %s", pattern.name, match.group(0), value)
        return AmountMatch(value, pattern.name, match.span(), match.group(0))

    return None


def extract_amount(text: str) -> Optional[float]:
    """Extract a monetary magnitude from ``text``.

    Returns ``None`` when no pattern yields a value in ``(0, 100_000_000)``.

    Example:
        >>> extract_amount("Paid $45.99 for lunch")
        45.99
        >>> extract_amount("Spent 15k on rent")
        15000.0
    """
    match = match_amount(text)
    return match.value if match else None
