from datetime import date
from decimal import Decimal

import pytest

from budget_engine.analytics.forecast import (
    NO_RUNWAY,
    budget_utilization_pct,
    burn_rate,
    compute_forecast,
    legacy_runway_days,
    month_context,
    projected_month_spend,
    remaining_budget,
    runway_days,
)
from budget_engine.models import Expense, Subscription

TODAY = date(2024, 9, 10)  # day 10 of a 30-day month


def _build_expenses():
    return [
        Expense(id='e1', amount=100, category='Groceries', date=date(2024, 9, 1)),
        Expense(id='e2', amount=300, category='Groceries', date=date(2024, 9, 2)),
    ]


def _build_subscription(sub_id='s1', amount=90.0, due_day=15, active=True, name='Netflix'):
    return Subscription(id=sub_id, name=name, amount=amount, due_day=due_day, category='Entertainment', active=active)


def test_month_context():
    month = month_context(TODAY)
    assert month.day_of_month == 10
    assert month.days_in_month == 30
    assert month.month_start == date(2024, 9, 1)
    assert month.month_end == date(2024, 9, 30)
    assert month.contains(date(2024, 9, 30))
    assert not month.contains(date(2024, 10, 1))
    assert month_context(date(2024, 2, 10)).days_in_month == 29


def test_forecast_for_typical_month():
    forecast = compute_forecast(_build_expenses(), [], 1000, TODAY)
    assert forecast.total_spend == 400
    assert forecast.burn_rate == 40
    assert forecast.projected_spend == 1200
    assert forecast.utilization_pct == 40
    assert forecast.remaining == 600
    assert forecast.runway_days == 25
    assert forecast.expense_count == 2
    assert forecast.has_budget


@pytest.mark.parametrize("budget", [0, None, -50, 'abc'])
def test_forecast_without_budget(budget):
    forecast = compute_forecast(_build_expenses(), [], budget, TODAY)
    assert forecast.budget == 0
    assert forecast.runway_days == NO_RUNWAY
    assert forecast.utilization_pct == 0
    assert not forecast.has_budget


def test_subscriptions_are_spread_across_the_month():
    expenses = [Expense(id='e1', amount=300, category='Travel', date=date(2024, 9, 5))]
    subs = [_build_subscription(), _build_subscription('s2', amount=50, active=False, name='Hulu')]
    forecast = compute_forecast(expenses, subs, 900, TODAY)
    # 300 / 10 + 90 / 30 = 33 per day
    assert forecast.runway_days == 27
    assert forecast.subscription_cost == 90
    assert forecast.subscription_count == 1
    assert forecast.remaining == 510
    # subscriptions do not count towards utilization or burn rate
    assert forecast.utilization_pct == 33
    assert forecast.burn_rate == 30


def test_runway_with_only_subscriptions():
    forecast = compute_forecast([], [_build_subscription(amount=30)], 300, TODAY)
    assert forecast.burn_rate == 0
    assert forecast.projected_spend == 0
    assert forecast.runway_days == 300


def test_runway_without_any_spending():
    assert compute_forecast([], [], 500, TODAY).runway_days == NO_RUNWAY


def test_accepts_stored_dicts():
    expenses = [{'id': 'e1', 'amount': 40, 'category': 'Health', 'date': '2024-09-03', 'createdAt': '2024-09-03T10:00:00Z'}]
    subs = [{'id': 's1', 'name': 'Gym', 'amount': 25, 'dueDay': '5', 'category': 'Health'}]
    forecast = compute_forecast(expenses, subs, 1000, TODAY)
    assert forecast.total_spend == 40
    assert forecast.subscription_cost == 25


def test_burn_rate_guards():
    assert burn_rate(100, 0, 3) == 0
    assert burn_rate(100, 5, 0) == 0
    assert burn_rate(100, 5, 2) == 20
    assert projected_month_spend(100, 5, 31, 2) == 620


def test_runway_guards():
    assert runway_days(1000, 400, 0, 0, 30) == NO_RUNWAY
    assert runway_days(0, 400, 0, 10, 30) == NO_RUNWAY
    assert runway_days(1000, 400, 0, 10, 30) == 25


def test_utilization_rounds_half_up():
    assert budget_utilization_pct(125, 1000) == 13
    assert budget_utilization_pct(124, 1000) == 12
    assert budget_utilization_pct(50, 0) == 0


def test_remaining_budget_includes_subscriptions():
    assert remaining_budget(1000, 400, 100) == 500
    assert remaining_budget(0, 400, 100) == -500


def test_legacy_runway():
    assert legacy_runway_days(600, 40) == 15
    assert legacy_runway_days(600, 0) == NO_RUNWAY
    assert legacy_runway_days(-100, 40) == 0


def test_forecast_to_dict_is_plain_data():
    data = compute_forecast(_build_expenses(), [], 1000, TODAY).to_dict()
    assert data['runway_days'] == 25
    assert data['days_in_month'] == 30


def test_decimal_budget_and_amounts():
    expenses = [Expense(id='e1', amount=Decimal('100'), category='Groceries', date=date(2024, 9, 1))]
    forecast = compute_forecast(expenses, [], Decimal('1000'), TODAY)
    assert forecast.budget == 1000
    assert forecast.utilization_pct == 10
    assert forecast.runway_days == 100
    assert forecast.remaining == 900
