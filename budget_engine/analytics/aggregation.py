"""Category and daily aggregation of current-month spending.

Expenses are loaded into a pandas DataFrame once and grouped from there.
Results are returned as plain lists of dicts so callers (charts, tables)
do not need pandas themselves.
"""

from __future__ import annotations

import calendar
from datetime import date, timedelta
from typing import Any, Dict, Iterable, List, Tuple

import numpy as np
import pandas as pd

from ..common.formatting import round_half_up
from ..models import Expense, Subscription, coerce_expenses, coerce_subscriptions
from ..taxonomy import SUBSCRIPTION_CATEGORY
from .forecast import active_subscriptions, month_context, monthly_subscription_cost

EXPENSE_COLUMNS = ['id', 'date', 'amount', 'category', 'note']


def expenses_frame(expenses: Iterable[Any]) -> pd.DataFrame:
    """Build a DataFrame of expenses with ``Day`` and ``Weekday`` helper columns.

    Row order follows the input order, which later acts as the tie-break
    for equal totals.
    """
    rows = [
        {
            'id': expense.id,
            'date': pd.Timestamp(expense.date),
            'amount': expense.amount,
            'category': expense.category,
            'note': expense.note,
        }
        for expense in coerce_expenses(expenses)
    ]
    df = pd.DataFrame(rows, columns=EXPENSE_COLUMNS)
    df['date'] = pd.to_datetime(df['date'])
    df['amount'] = df['amount'].astype(float)
    df['Day'] = df['date'].dt.day
    df['Weekday'] = df['date'].dt.day_name()
    return df


def current_month_expenses(expenses: Iterable[Any], today: date) -> List[Expense]:
    """Keep only the expenses dated within ``today``'s calendar month."""
    month = month_context(today)
    return [expense for expense in coerce_expenses(expenses) if month.contains(expense.date)]


def ranked_totals(series: pd.Series) -> List[Tuple[Any, float]]:
    """Sort a grouped series descending; equal values keep first-seen order."""
    return sorted(((key, float(value)) for key, value in series.items()), key=lambda item: -item[1])


def category_breakdown(
    expenses: Iterable[Any],
    subscriptions: Iterable[Any] = (),
    include_subscriptions: bool = True,
) -> List[Dict[str, Any]]:
    """Group spending by category with each group's share of the total.

    Active subscriptions are folded into the ``Subscription`` category when
    ``include_subscriptions`` is set.

    Returns:
        List of ``{'category', 'amount', 'percentage'}`` sorted by amount,
        or an empty list when nothing was spent
    """
    df = expenses_frame(expenses)
    totals = df.groupby('category', sort=False)['amount'].sum()
    expense_total = float(df['amount'].sum())

    subscription_total = 0.0
    if include_subscriptions:
        subscription_total = monthly_subscription_cost(coerce_subscriptions(subscriptions))
        if subscription_total > 0:
            totals[SUBSCRIPTION_CATEGORY] = float(totals.get(SUBSCRIPTION_CATEGORY, 0.0)) + subscription_total

    combined = expense_total + subscription_total
    if combined <= 0:
        return []

    return [
        {
            'category': category,
            'amount': amount,
            'percentage': round_half_up(amount / combined * 100),
        }
        for category, amount in ranked_totals(totals)
    ]


def daily_spending(
    expenses: Iterable[Any],
    subscriptions: Iterable[Any],
    today: date,
    include_subscriptions: bool = True,
) -> List[Dict[str, Any]]:
    """One record per day of ``today``'s month.

    Each record is ``{'day', 'date', 'amount', 'is_future'}``. Subscriptions
    are added on their billing day; a billing day past the end of a short
    month lands on its last day.
    """
    month = month_context(today)
    df = expenses_frame(current_month_expenses(expenses, today))
    days = np.arange(1, month.days_in_month + 1)
    spent = df.groupby('Day')['amount'].sum().reindex(days, fill_value=0.0).to_numpy(dtype=float)

    billed = np.zeros(month.days_in_month)
    if include_subscriptions:
        for sub in active_subscriptions(coerce_subscriptions(subscriptions)):
            billed[min(sub.due_day, month.days_in_month) - 1] += sub.amount

    totals = spent + billed
    return [
        {
            'day': int(day),
            'date': month.month_start.replace(day=int(day)).isoformat(),
            'amount': float(amount),
            'is_future': bool(day > month.day_of_month),
        }
        for day, amount in zip(days, totals)
    ]


def aggregate(expenses: Iterable[Any], subscriptions: Iterable[Any], today: date) -> Dict[str, List[Dict[str, Any]]]:
    expense_list = current_month_expenses(expenses, today)
    subscription_list = coerce_subscriptions(subscriptions)
    return {
        'category_breakdown': category_breakdown(expense_list, subscription_list),
        'daily_spending': daily_spending(expense_list, subscription_list, today),
    }


def days_until_due(due_day: int, today: date) -> int:
    """Days from ``today`` to the next billing date for ``due_day``.

    A billing day beyond the length of a month is treated as that month's
    last day. Billing days already passed roll into next month.
    """
    days_in_month = calendar.monthrange(today.year, today.month)[1]
    diff = min(due_day, days_in_month) - today.day
    if diff >= 0:
        return diff

    next_month = today.replace(day=days_in_month) + timedelta(days=1)
    days_in_next = calendar.monthrange(next_month.year, next_month.month)[1]
    return days_in_month - today.day + min(due_day, days_in_next)


def upcoming_subscriptions(
    subscriptions: Iterable[Any],
    today: date,
    within_days: int = 7,
) -> List[Tuple[Subscription, int]]:
    """Active subscriptions billing within ``within_days``, soonest first."""
    upcoming = []
    for sub in active_subscriptions(coerce_subscriptions(subscriptions)):
        diff = days_until_due(sub.due_day, today)
        if 0 <= diff <= within_days:
            upcoming.append((sub, diff))
    return sorted(upcoming, key=lambda item: item[1])
