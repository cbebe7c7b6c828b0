"""Turn one free-text sentence into a draft expense."""

from __future__ import annotations

import logging
from datetime import date, datetime
from typing import Any, Optional

from ..exceptions import AmountNotFound
from ..models import DraftExpense, Expense
from .amounts import extract_amount
from .categorize import classify
from .notes import extract_note

logger = logging.getLogger(__name__)


def parse(text: str) -> DraftExpense:
    """Parse an expense sentence such as ``"Paid $45.99 for lunch"``.

    Args:
        text: Unstructured user input

    Returns:
        DraftExpense with amount, category, confidence and note

    Raises:
        AmountNotFound: If no plausible amount is present (including empty input)
    """
    cleaned = (text or '').strip()
    amount = extract_amount(cleaned)
    if amount is None:
        logger.debug("No amount found in %r", cleaned)
        raise AmountNotFound(cleaned)

    match = classify(cleaned)
    note = extract_note(cleaned, match.category)
    return DraftExpense(amount=amount, category=match.category, confidence=match.confidence, note=note)


def draft_to_expense(
    draft: DraftExpense,
    *,
    expense_id: str,
    on: date,
    created_at: Optional[datetime] = None,
    **overrides: Any,
) -> Expense:
    """Confirm a draft, applying any user edits (``amount``, ``category``, ``note``).

    Raises:
        AmountNotFound: If the draft (after edits) still has no amount
        InvalidRecordError: If the edited values are not a valid expense
    """
    values = {'amount': draft.amount, 'category': draft.category, 'note': draft.note}
    values.update({key: value for key, value in overrides.items() if key in values})
    if values['amount'] is None:
        raise AmountNotFound(draft.note)
    return Expense(
        id=expense_id,
        amount=values['amount'],
        category=values['category'],
        note=values['note'],
        date=on,
        created_at=created_at,
    )
