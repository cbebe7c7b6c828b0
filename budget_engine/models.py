"""Record types exchanged with the storage and presentation collaborators."""

from __future__ import annotations

import math
import numbers
from decimal import Decimal
from dataclasses import asdict, dataclass
from datetime import date, datetime
from typing import Any, Dict, Iterable, List, Optional

from .exceptions import InvalidRecordError
from .taxonomy import OTHER_CATEGORY, is_known_category

SEVERITIES = ('info', 'success', 'warning', 'danger')
MAX_CONFIDENCE = 95


def _is_positive_amount(value: Any) -> bool:
    if isinstance(value, bool) or not isinstance(value, (numbers.Real, Decimal)):
        return False
    return math.isfinite(value) and value > 0


def _coerce_date(value: Any) -> date:
    if isinstance(value, datetime):
        return value.date()
    if isinstance(value, date):
        return value
    if isinstance(value, str):
        try:
            return date.fromisoformat(value[:10])
        except ValueError as exc:
            raise InvalidRecordError(f"Invalid date: {value!r}") from exc
    raise InvalidRecordError(f"Invalid date: {value!r}")


def _coerce_timestamp(value: Any) -> Optional[datetime]:
    if value is None or isinstance(value, datetime):
        return value
    if isinstance(value, str) and value:
        try:
            return datetime.fromisoformat(value.replace('Z', '+00:00'))
        except ValueError as exc:
            raise InvalidRecordError(f"Invalid timestamp: {value!r}") from exc
    raise InvalidRecordError(f"Invalid timestamp: {value!r}")


def normalize_budget(value: Any) -> float:
    """Map an unset, negative or non-numeric budget to the ``0.0`` sentinel."""
    if not _is_positive_amount(value):
        return 0.0
    return float(value)


@dataclass(frozen=True)
class Expense:
    """A confirmed money movement owned by a user."""
    id: str
    amount: float
    category: str
    date: date
    note: str = ''
    created_at: Optional[datetime] = None

    def __post_init__(self) -> None:
        if not _is_positive_amount(self.amount):
            raise InvalidRecordError(f"Expense amount must be a positive number, got {self.amount!r}")
        if not is_known_category(self.category):
            raise InvalidRecordError(f"Unknown category: {self.category!r}")
        if not isinstance(self.date, date) or isinstance(self.date, datetime):
            raise InvalidRecordError(f"Expense date must be a calendar date, got {self.date!r}")
        object.__setattr__(self, 'amount', float(self.amount))
        object.__setattr__(self, 'note', self.note or '')

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> 'Expense':
        """Build an expense from a stored document (ISO dates, camelCase accepted)."""
        try:
            return cls(
                id=str(data['id']),
                amount=data['amount'],
                category=data['category'],
                date=_coerce_date(data['date']),
                note=data.get('note') or '',
                created_at=_coerce_timestamp(data.get('created_at', data.get('createdAt'))),
            )
        except KeyError as exc:
            raise InvalidRecordError(f"Expense is missing field {exc.args[0]!r}") from exc

    def to_dict(self) -> Dict[str, Any]:
        return {
            'id': self.id,
            'amount': self.amount,
            'category': self.category,
            'note': self.note,
            'date': self.date.isoformat(),
            'created_at': self.created_at.isoformat() if self.created_at else None,
        }


@dataclass(frozen=True)
class Subscription:
    """A recurring monthly charge billed on ``due_day``."""
    id: str
    name: str
    amount: float
    due_day: int
    category: str = OTHER_CATEGORY
    active: bool = True
    created_at: Optional[datetime] = None

    def __post_init__(self) -> None:
        if not isinstance(self.name, str) or not self.name.strip():
            raise InvalidRecordError("Subscription name must not be empty")
        if not _is_positive_amount(self.amount):
            raise InvalidRecordError(f"Subscription amount must be a positive number, got {self.amount!r}")
        if isinstance(self.due_day, bool) or not isinstance(self.due_day, int) or not 1 <= self.due_day <= 31:
            raise InvalidRecordError(f"Billing day must be between 1 and 31, got {self.due_day!r}")
        if not is_known_category(self.category):
            raise InvalidRecordError(f"Unknown category: {self.category!r}")
        object.__setattr__(self, 'name', self.name.strip())
        object.__setattr__(self, 'amount', float(self.amount))

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> 'Subscription':
        try:
            raw_day = data['due_day'] if 'due_day' in data else data['dueDay']
        except KeyError as exc:
            raise InvalidRecordError("Subscription is missing field 'due_day'") from exc
        try:
            due_day = int(raw_day)
        except (TypeError, ValueError) as exc:
            raise InvalidRecordError(f"Billing day must be an integer, got {raw_day!r}") from exc
        try:
            return cls(
                id=str(data['id']),
                name=data['name'],
                amount=data['amount'],
                due_day=due_day,
                category=data.get('category') or OTHER_CATEGORY,
                active=bool(data.get('active', True)),
                created_at=_coerce_timestamp(data.get('created_at', data.get('createdAt'))),
            )
        except KeyError as exc:
            raise InvalidRecordError(f"Subscription is missing field {exc.args[0]!r}") from exc

    def to_dict(self) -> Dict[str, Any]:
        return {
            'id': self.id,
            'name': self.name,
            'amount': self.amount,
            'due_day': self.due_day,
            'category': self.category,
            'active': self.active,
            'created_at': self.created_at.isoformat() if self.created_at else None,
        }


@dataclass
class DraftExpense:
    """Parser output awaiting user confirmation; never persisted."""
    amount: Optional[float]
    category: str
    confidence: int
    note: str

    def __post_init__(self) -> None:
        self.confidence = int(max(0, min(MAX_CONFIDENCE, self.confidence)))

    def to_dict(self) -> Dict[str, Any]:
        return asdict(self)


@dataclass(frozen=True)
class Insight:
    """A single rule-triggered observation about spending."""
    type: str
    icon: str
    title: str
    body: str
    severity: str
    metric: Optional[str] = None

    def __post_init__(self) -> None:
        if self.severity not in SEVERITIES:
            raise InvalidRecordError(f"Unknown severity: {self.severity!r}")

    def to_dict(self) -> Dict[str, Any]:
        data = asdict(self)
        if self.metric is None:
            data.pop('metric')
        return data


@dataclass(frozen=True)
class Alert:
    """A short dashboard banner (budget, runway or upcoming bill)."""
    type: str
    icon: str
    text: str

    def to_dict(self) -> Dict[str, Any]:
        return asdict(self)


def coerce_expenses(items: Optional[Iterable[Any]]) -> List[Expense]:
    """Accept expense records or the plain dicts a storage layer returns."""
    return [item if isinstance(item, Expense) else Expense.from_dict(item) for item in (items or ())]


def coerce_subscriptions(items: Optional[Iterable[Any]]) -> List[Subscription]:
    return [item if isinstance(item, Subscription) else Subscription.from_dict(item) for item in (items or ())]
