"""Rule-based spending insights.

A fixed battery of detectors runs over one snapshot of the current
month. Each detector looks at a single signal and returns at most one
:class:`Insight`; the output order is the detector order. With no
expenses at all only the empty-state insight is returned.
"""

from __future__ import annotations

import logging
from collections import Counter
from dataclasses import dataclass
from datetime import date
from typing import Any, Callable, Iterable, List, Optional, Tuple

import pandas as pd

from ..common.formatting import AmountFormatter, format_currency, plural, round_half_up
from ..models import Insight, Subscription, coerce_expenses, coerce_subscriptions, normalize_budget
from ..taxonomy import category_icon
from .aggregation import expenses_frame, ranked_totals
from .forecast import (
    MonthContext,
    active_subscriptions,
    budget_utilization_pct,
    month_context,
    monthly_subscription_cost,
)

logger = logging.getLogger(__name__)

TOP_CATEGORY_WARNING_PCT = 40
OVERSPEND_MARGIN_PCT = 15
UNDERSPEND_MARGIN_PCT = 20
SUBSCRIPTION_LOAD_COUNT = 3
DUPLICATE_SUBSCRIPTION_COUNT = 2
WEEKDAY_MIN_EXPENSES = 5
FREQUENCY_MIN_EXPENSES = 3
FREQUENCY_MIN_TRANSACTIONS = 3
OUTLIER_MIN_EXPENSES = 3
OUTLIER_MULTIPLIER = 2.5
SAVINGS_SHARE = 0.3
ENGAGEMENT_MAX_EXPENSES = 4
MONTHS_PER_YEAR = 12


@dataclass(frozen=True)
class InsightContext:
    """Everything a detector may look at, computed once per run."""
    frame: pd.DataFrame
    subscriptions: Tuple[Subscription, ...]
    active: Tuple[Subscription, ...]
    budget: float
    month: MonthContext
    total: float
    formatter: AmountFormatter

    @property
    def expense_count(self) -> int:
        return len(self.frame)

    def money(self, amount: float) -> str:
        return self.formatter(amount)


def build_context(
    expenses: Iterable[Any],
    subscriptions: Iterable[Any],
    budget: Any,
    today: date,
    formatter: Optional[AmountFormatter] = None,
) -> InsightContext:
    frame = expenses_frame(coerce_expenses(expenses))
    subscription_list = tuple(coerce_subscriptions(subscriptions))
    return InsightContext(
        frame=frame,
        subscriptions=subscription_list,
        active=tuple(active_subscriptions(subscription_list)),
        budget=normalize_budget(budget),
        month=month_context(today),
        total=float(frame['amount'].sum()),
        formatter=formatter or format_currency,
    )


def detect_empty_state(ctx: InsightContext) -> Optional[Insight]:
    if ctx.expense_count:
        return None
    return Insight(
        type='info',
        icon='💡',
        title='Start Tracking',
        body='Add your first expense to receive personalized insights about your spending habits.',
        severity='info',
    )


def detect_top_category(ctx: InsightContext) -> Optional[Insight]:
    ranked = ranked_totals(ctx.frame.groupby('category', sort=False)['amount'].sum())
    if not ranked or ctx.total <= 0:
        return None

    category, amount = ranked[0]
    percentage = round_half_up(amount / ctx.total * 100)
    heavy = percentage > TOP_CATEGORY_WARNING_PCT
    advice = (
        'This is a significant portion. Consider if there are ways to optimize.'
        if heavy
        else 'This seems proportional to a balanced budget.'
    )
    return Insight(
        type='pattern',
        icon=category_icon(category),
        title=f"{category} is your top spending category",
        body=f"You spend {percentage}% of your monthly expenses on {category} ({ctx.money(amount)}). {advice}",
        severity='warning' if heavy else 'info',
        metric=f"{percentage}%",
    )


def detect_budget_pace(ctx: InsightContext) -> Optional[Insight]:
    """Compare budget used against how far through the month we are."""
    if ctx.budget <= 0 or ctx.month.day_of_month <= 0:
        return None

    used = budget_utilization_pct(ctx.total, ctx.budget)
    progress = round_half_up(ctx.month.progress_pct)
    projected = ctx.total * ctx.month.days_in_month / ctx.month.day_of_month

    if used > progress + OVERSPEND_MARGIN_PCT:
        return Insight(
            type='warning',
            icon='⚠️',
            title='Spending ahead of schedule',
            body=(
                f"You've used {used}% of your budget but we're only {progress}% through the month. "
                f"At this rate, you'll exceed your budget by {ctx.money(projected - ctx.budget)}."
            ),
            severity='danger',
            metric=f"{used}% used",
        )
    if used < progress - UNDERSPEND_MARGIN_PCT:
        return Insight(
            type='positive',
            icon='🎯',
            title='Under budget, great discipline!',
            body=(
                f"You've only used {used}% of your budget at {progress}% through the month. "
                f"You could save approximately {ctx.money(ctx.budget - projected)} this month."
            ),
            severity='success',
            metric=f"{used}% used",
        )
    return None


def detect_subscription_load(ctx: InsightContext) -> Optional[Insight]:
    if len(ctx.active) < SUBSCRIPTION_LOAD_COUNT:
        return None

    monthly = monthly_subscription_cost(ctx.active)
    cut_one = ctx.active[-1].amount * MONTHS_PER_YEAR
    return Insight(
        type='suggestion',
        icon='🔄',
        title=f"{len(ctx.active)} active subscriptions costing {ctx.money(monthly)}/month",
        body=(
            f"That's {ctx.money(monthly * MONTHS_PER_YEAR)} per year. Review your subscriptions; "
            f"even cutting one could save you {ctx.money(cut_one)}/year. Do you actually use all of them?"
        ),
        severity='warning',
        metric=f"{ctx.money(monthly)}/mo",
    )


def detect_duplicate_subscriptions(ctx: InsightContext) -> Optional[Insight]:
    """Report the first category holding several active subscriptions."""
    counts = Counter(sub.category for sub in ctx.active)
    for category, count in counts.items():
        if count < DUPLICATE_SUBSCRIPTION_COUNT:
            continue
        dupes = [sub for sub in ctx.active if sub.category == category]
        combined = monthly_subscription_cost(dupes)
        return Insight(
            type='suggestion',
            icon='🔍',
            title=f"{count} {category} subscriptions detected",
            body=(
                f"You have {count} subscriptions in {category}: {', '.join(sub.name for sub in dupes)}. "
                f"Combined cost: {ctx.money(combined)}/month. Could you consolidate to just one?"
            ),
            severity='info',
            metric=f"{ctx.money(combined)}/mo",
        )
    return None


def detect_weekday_pattern(ctx: InsightContext) -> Optional[Insight]:
    if ctx.expense_count < WEEKDAY_MIN_EXPENSES:
        return None

    ranked = ranked_totals(ctx.frame.groupby('Weekday', sort=False)['amount'].mean())
    if not ranked:
        return None
    weekday, average = ranked[0]
    return Insight(
        type='pattern',
        icon='📅',
        title=f"{weekday}s are your highest-spend days",
        body=(
            f"You average {ctx.money(average)} on {weekday}s. Consider planning your {weekday} "
            f"activities more carefully or setting a daily limit."
        ),
        severity='info',
        metric=ctx.money(average),
    )


def detect_category_frequency(ctx: InsightContext) -> Optional[Insight]:
    if ctx.expense_count < FREQUENCY_MIN_EXPENSES:
        return None

    ranked = ranked_totals(ctx.frame.groupby('category', sort=False).size())
    if not ranked or ranked[0][1] < FREQUENCY_MIN_TRANSACTIONS:
        return None
    category, count = ranked[0][0], int(ranked[0][1])
    return Insight(
        type='pattern',
        icon=category_icon(category),
        title=f"{count} transactions in {category} this month",
        body=(
            f"{category} is your most frequent expense category. Small purchases add up; "
            f"consider bundling or reducing frequency."
        ),
        severity='info',
        metric=f"{count} transactions",
    )


def detect_large_expense(ctx: InsightContext) -> Optional[Insight]:
    if ctx.expense_count < OUTLIER_MIN_EXPENSES:
        return None

    average = ctx.total / ctx.expense_count
    large = ctx.frame[ctx.frame['amount'] > average * OUTLIER_MULTIPLIER]
    if large.empty:
        return None

    largest = large.loc[large['amount'].idxmax()]
    label = largest['note'] or largest['category']
    multiple = round_half_up(largest['amount'] / average)
    return Insight(
        type='alert',
        icon='💰',
        title='Large expense detected',
        body=(
            f"\"{label}\" at {ctx.money(largest['amount'])} is {multiple}x your average expense "
            f"of {ctx.money(average)}."
        ),
        severity='warning',
        metric=ctx.money(largest['amount']),
    )


def detect_savings_potential(ctx: InsightContext) -> Optional[Insight]:
    if ctx.budget <= 0 or not ctx.subscriptions:
        return None

    potential = round_half_up(monthly_subscription_cost(ctx.active) * SAVINGS_SHARE)
    if potential <= 0:
        return None
    return Insight(
        type='suggestion',
        icon='💡',
        title='Potential monthly savings',
        body=(
            f"By reviewing and optimizing your subscriptions, you could potentially save up to "
            f"{ctx.money(potential)}/month ({ctx.money(potential * MONTHS_PER_YEAR)}/year). "
            f"Even small cuts compound over time."
        ),
        severity='success',
        metric=f"{ctx.money(potential)}/mo",
    )


def detect_engagement(ctx: InsightContext) -> Optional[Insight]:
    if not 0 < ctx.expense_count <= ENGAGEMENT_MAX_EXPENSES:
        return None
    return Insight(
        type='tip',
        icon='🚀',
        title='Keep logging for better insights',
        body=(
            f"You have {plural(ctx.expense_count, 'expense')} logged. The more you log, the more "
            f"accurate and personalized your insights become. Aim for logging daily."
        ),
        severity='info',
    )


Detector = Callable[[InsightContext], Optional[Insight]]

DETECTORS: Tuple[Detector, ...] = (
    detect_top_category,
    detect_budget_pace,
    detect_subscription_load,
    detect_duplicate_subscriptions,
    detect_weekday_pattern,
    detect_category_frequency,
    detect_large_expense,
    detect_savings_potential,
    detect_engagement,
)


def run_detectors(ctx: InsightContext, detectors: Iterable[Detector] = DETECTORS) -> List[Insight]:
    empty = detect_empty_state(ctx)
    if empty is not None:
        return [empty]

    insights = []
    for detector in detectors:
        insight = detector(ctx)
        if insight is not None:
            logger.debug("%s produced %r", detector.__name__, insight.title)
            insights.append(insight)
    return insights


def generate_insights(
    expenses: Iterable[Any],
    subscriptions: Iterable[Any],
    budget: Any,
    today: date,
    *,
    formatter: Optional[AmountFormatter] = None,
) -> List[Insight]:
    """Generate the ordered insight list for a current-month snapshot.

    Args:
        expenses: Current-month expenses (records or stored dicts)
        subscriptions: All subscriptions, active or not
        budget: Monthly budget; ``0``/``None`` disables budget-based detectors
        today: Date used for month progress
        formatter: Renders amounts inside titles and bodies; defaults to
            :func:`format_currency`

    Returns:
        List of Insight records in detector order
    """
    return run_detectors(build_context(expenses, subscriptions, budget, today, formatter))
