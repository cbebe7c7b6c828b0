"""Derive a short human-readable label from an expense sentence."""

from __future__ import annotations

import re

from .amounts import CURRENCY_SYMBOLS, CURRENCY_WORDS

MIN_NOTE_LENGTH = 2

_FLAGS = re.IGNORECASE | re.ASCII

_LEADING_VERB = re.compile(r'^(?:i\s+)?(?:paid|spent|bought|purchased|got|charged)\s+(?:for\s+)?', _FLAGS)
_AMOUNT_SPAN = re.compile(
    rf'[{re.escape(CURRENCY_SYMBOLS)}]?\s*[\d,]+\.?\d*\s*(?:k\b)?\s*(?:{CURRENCY_WORDS}\b)?\s*(?:(?:for|on)\b)?\s*',
    _FLAGS,
)
_LEADING_PREPOSITION = re.compile(r'^\s*(?:for|on|at)\s+', _FLAGS)
_WHITESPACE = re.compile(r'\s+')


def extract_note(text: str, category: str) -> str:
    """Strip verbs, amounts and filler words, leaving a capitalised label.

    Falls back to ``"<category> expense"`` when less than two characters
    survive the cleanup.

    Example:
        >>> extract_note("Paid $45.99 for lunch", "Food & Dining")
        'Lunch'
        >>> extract_note("spent 20", "Other")
        'Other expense'
    """
    note = (text or '').strip()
    note = _LEADING_VERB.sub('', note)
    note = _AMOUNT_SPAN.sub(' ', note)
    note = _WHITESPACE.sub(' ', note).strip()
    note = _LEADING_PREPOSITION.sub('', note).strip()

    if len(note) < MIN_NOTE_LENGTH:
        note = f"{category} expense"

    return note[0].upper() + note[1:]
