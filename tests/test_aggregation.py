from datetime import date

from budget_engine.analytics.aggregation import (
    aggregate,
    category_breakdown,
    current_month_expenses,
    daily_spending,
    days_until_due,
    expenses_frame,
    upcoming_subscriptions,
)
from budget_engine.models import Expense, Subscription

TODAY = date(2024, 9, 10)


def _build_expense(exp_id, amount, category='Groceries', day=1, month=9):
    return Expense(id=exp_id, amount=amount, category=category, date=date(2024, month, day))


def _build_subscription(sub_id, amount, due_day, name=None, active=True, category='Entertainment'):
    return Subscription(
        id=sub_id,
        name=name or sub_id,
        amount=amount,
        due_day=due_day,
        category=category,
        active=active,
    )


def test_expenses_frame_columns():
    df = expenses_frame([_build_expense('e1', 10, day=2)])
    assert list(df['Day']) == [2]
    assert list(df['Weekday']) == ['Monday']
    assert expenses_frame([]).empty


def test_single_category_breakdown():
    expenses = [_build_expense('e1', 100, day=1), _build_expense('e2', 300, day=2)]
    assert category_breakdown(expenses, []) == [
        {'category': 'Groceries', 'amount': 400.0, 'percentage': 100},
    ]


def test_breakdown_folds_in_active_subscriptions():
    expenses = [_build_expense('e1', 60)]
    subs = [_build_subscription('Netflix', 40, 5), _build_subscription('Old', 99, 5, active=False)]
    assert category_breakdown(expenses, subs) == [
        {'category': 'Groceries', 'amount': 60.0, 'percentage': 60},
        {'category': 'Subscription', 'amount': 40.0, 'percentage': 40},
    ]
    assert category_breakdown(expenses, subs, include_subscriptions=False) == [
        {'category': 'Groceries', 'amount': 60.0, 'percentage': 100},
    ]


def test_subscription_category_merges_with_expenses():
    expenses = [_build_expense('e1', 20, category='Subscription'), _build_expense('e2', 50, category='Travel')]
    result = category_breakdown(expenses, [_build_subscription('Spotify', 30, 3)])
    assert result[0] == {'category': 'Subscription', 'amount': 50.0, 'percentage': 50}
    assert result[1]['category'] == 'Travel'


def test_breakdown_of_nothing_is_empty():
    assert category_breakdown([], []) == []
    assert category_breakdown([], [_build_subscription('Old', 10, 1, active=False)]) == []


def test_breakdown_ties_keep_first_seen_order():
    expenses = [
        _build_expense('e1', 50, category='Health'),
        _build_expense('e2', 50, category='Travel'),
        _build_expense('e3', 80, category='Education'),
    ]
    assert [row['category'] for row in category_breakdown(expenses)] == ['Education', 'Health', 'Travel']


def test_current_month_filter():
    expenses = [_build_expense('e1', 10, month=8, day=31), _build_expense('e2', 20, day=30)]
    assert [e.id for e in current_month_expenses(expenses, TODAY)] == ['e2']


def test_daily_spending_covers_the_month():
    expenses = [
        _build_expense('e1', 100, day=1),
        _build_expense('e2', 300, day=2),
        _build_expense('e3', 25, day=2),
        _build_expense('e4', 999, month=8, day=2),
    ]
    subs = [_build_subscription('Gym', 10, 31)]
    daily = daily_spending(expenses, subs, TODAY)

    assert len(daily) == 30
    assert daily[0] == {'day': 1, 'date': '2024-09-01', 'amount': 100.0, 'is_future': False}
    assert daily[1]['amount'] == 325.0
    # billing day 31 falls on the last day of September
    assert daily[29]['amount'] == 10.0
    assert daily[9]['is_future'] is False
    assert daily[10]['is_future'] is True
    assert sum(row['amount'] for row in daily) == 435.0


def test_daily_spending_without_subscriptions():
    subs = [_build_subscription('Gym', 10, 5)]
    daily = daily_spending([], subs, TODAY, include_subscriptions=False)
    assert all(row['amount'] == 0 for row in daily)


def test_aggregate_is_idempotent():
    expenses = [_build_expense('e1', 100), _build_expense('e2', 40, category='Health', day=4)]
    subs = [_build_subscription('Netflix', 15, 20)]
    first = aggregate(expenses, subs, TODAY)
    assert first == aggregate(expenses, subs, TODAY)
    assert set(first) == {'category_breakdown', 'daily_spending'}


def test_days_until_due():
    assert days_until_due(15, date(2024, 9, 10)) == 5
    assert days_until_due(10, date(2024, 9, 10)) == 0
    assert days_until_due(2, date(2024, 9, 28)) == 4
    assert days_until_due(31, date(2024, 9, 28)) == 2
    assert days_until_due(31, date(2024, 1, 30)) == 1
    # January 31st to a billing day of 30 clamps to February 29th
    assert days_until_due(30, date(2024, 1, 31)) == 29


def test_upcoming_subscriptions():
    subs = [
        _build_subscription('Later', 5, 20),
        _build_subscription('Soon', 5, 12),
        _build_subscription('Today', 5, 10),
        _build_subscription('Paused', 5, 11, active=False),
    ]
    upcoming = upcoming_subscriptions(subs, TODAY)
    assert [(sub.name, days) for sub, days in upcoming] == [('Today', 0), ('Soon', 2)]


def test_aggregate_keeps_both_views_on_the_current_month():
    expenses = [_build_expense('e1', 100, day=1), _build_expense('e0', 900, category='Travel', month=8, day=20)]
    result = aggregate(expenses, [], TODAY)
    assert result['category_breakdown'] == [{'category': 'Groceries', 'amount': 100.0, 'percentage': 100}]
    breakdown_total = sum(row['amount'] for row in result['category_breakdown'])
    assert breakdown_total == sum(row['amount'] for row in result['daily_spending'])
