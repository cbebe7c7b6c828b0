"""Burn rate, runway and budget utilization for the current month.

Every function here is a pure function of its arguments. The calendar is
always passed in (``today`` or explicit day counts) rather than read from
the system clock.
"""

from __future__ import annotations

import calendar
import math
from dataclasses import asdict, dataclass
from datetime import date
from typing import Any, Dict, Iterable, List

from ..common.formatting import round_half_up
from ..models import Expense, Subscription, coerce_expenses, coerce_subscriptions, normalize_budget

NO_RUNWAY = -1


@dataclass(frozen=True)
class MonthContext:
    """Position of ``today`` within its calendar month."""
    day_of_month: int
    days_in_month: int
    month_start: date
    month_end: date

    @property
    def progress_pct(self) -> float:
        if self.days_in_month <= 0:
            return 0.0
        return self.day_of_month / self.days_in_month * 100

    def contains(self, value: date) -> bool:
        return self.month_start <= value <= self.month_end


def month_context(today: date) -> MonthContext:
    days = calendar.monthrange(today.year, today.month)[1]
    return MonthContext(
        day_of_month=today.day,
        days_in_month=days,
        month_start=today.replace(day=1),
        month_end=today.replace(day=days),
    )


def active_subscriptions(subscriptions: Iterable[Subscription]) -> List[Subscription]:
    return [sub for sub in subscriptions if sub.active]


def total_spend(expenses: Iterable[Expense]) -> float:
    return math.fsum(expense.amount for expense in expenses)


def monthly_subscription_cost(subscriptions: Iterable[Subscription]) -> float:
    """Sum of the amounts of active subscriptions."""
    return math.fsum(sub.amount for sub in subscriptions if sub.active)


def burn_rate(total: float, day_of_month: int, expense_count: int) -> float:
    """Average spend per elapsed day; ``0`` with no expenses or no elapsed days."""
    if day_of_month <= 0 or expense_count == 0:
        return 0.0
    return total / day_of_month


def projected_month_spend(total: float, day_of_month: int, days_in_month: int, expense_count: int) -> float:
    return burn_rate(total, day_of_month, expense_count) * days_in_month


def budget_utilization_pct(total: float, budget: float) -> int:
    """Percentage of the budget already spent, rounded; ``0`` when no budget is set."""
    if budget <= 0:
        return 0
    return round_half_up(total / budget * 100)


def remaining_budget(budget: float, total: float, subscription_cost: float) -> float:
    """Budget left after both variable expenses and active subscriptions."""
    return budget - (total + subscription_cost)


def runway_days(budget: float, total: float, subscription_cost: float, day_of_month: int, days_in_month: int) -> int:
    """Number of days the monthly budget lasts at the current combined daily rate.

    The daily rate is the variable spend per elapsed day plus the monthly
    subscription cost spread across the month. Returns ``-1`` when no budget
    is set or there is no spending pattern yet.
    """
    if budget <= 0 or day_of_month <= 0:
        return NO_RUNWAY

    daily_variable = total / day_of_month if total > 0 else 0.0
    daily_subscriptions = subscription_cost / days_in_month if subscription_cost > 0 and days_in_month > 0 else 0.0
    daily_total = daily_variable + daily_subscriptions
    if daily_total <= 0:
        return NO_RUNWAY

    runway = math.floor(budget / daily_total)
    return runway if runway >= 0 else NO_RUNWAY


def legacy_runway_days(remaining: float, rate: float) -> int:
    """Earlier ``remaining / burn rate`` formulation, ignoring subscriptions.

    Kept for comparison only; ``compute_forecast`` uses :func:`runway_days`.
    """
    if rate <= 0:
        return NO_RUNWAY
    return max(math.floor(remaining / rate), 0)


@dataclass(frozen=True)
class Forecast:
    total_spend: float
    budget: float
    burn_rate: float
    projected_spend: float
    subscription_cost: float
    subscription_count: int
    utilization_pct: int
    remaining: float
    runway_days: int
    expense_count: int
    day_of_month: int
    days_in_month: int

    @property
    def has_budget(self) -> bool:
        return self.budget > 0

    def to_dict(self) -> Dict[str, Any]:
        return asdict(self)


def compute_forecast(expenses: Iterable[Any], subscriptions: Iterable[Any], budget: Any, today: date) -> Forecast:
    """Compute the month-to-date forecast for a snapshot.

    Args:
        expenses: Current-month expenses (records or stored dicts)
        subscriptions: All subscriptions; inactive ones are ignored
        budget: Monthly budget; ``0``/``None`` means no budget
        today: The date the forecast is made for

    Returns:
        Forecast with burn rate, projection, utilization, remaining and runway
    """
    expense_list = coerce_expenses(expenses)
    subscription_list = coerce_subscriptions(subscriptions)
    budget_value = normalize_budget(budget)
    month = month_context(today)

    total = total_spend(expense_list)
    count = len(expense_list)
    subscription_cost = monthly_subscription_cost(subscription_list)

    return Forecast(
        total_spend=total,
        budget=budget_value,
        burn_rate=burn_rate(total, month.day_of_month, count),
        projected_spend=projected_month_spend(total, month.day_of_month, month.days_in_month, count),
        subscription_cost=subscription_cost,
        subscription_count=len(active_subscriptions(subscription_list)),
        utilization_pct=budget_utilization_pct(total, budget_value),
        remaining=remaining_budget(budget_value, total, subscription_cost),
        runway_days=runway_days(budget_value, total, subscription_cost, month.day_of_month, month.days_in_month),
        expense_count=count,
        day_of_month=month.day_of_month,
        days_in_month=month.days_in_month,
    )
