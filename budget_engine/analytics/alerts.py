"""Dashboard alerts for budget limits, short runway and bills due soon."""

from __future__ import annotations

from datetime import date
from typing import Any, Iterable, List, Optional

from ..common.formatting import AmountFormatter, format_currency, plural
from ..models import Alert
from .aggregation import upcoming_subscriptions
from .forecast import Forecast

NEAR_LIMIT_PCT = 80
OVER_LIMIT_PCT = 100
RUNWAY_WARNING_DAYS = 7
UPCOMING_WINDOW_DAYS = 5
DUE_SOON_DAYS = 3


def budget_alerts(
    forecast: Forecast,
    subscriptions: Iterable[Any],
    today: date,
    *,
    formatter: Optional[AmountFormatter] = None,
) -> List[Alert]:
    money = formatter or format_currency
    alerts: List[Alert] = []

    if forecast.has_budget and forecast.utilization_pct >= NEAR_LIMIT_PCT:
        if forecast.utilization_pct >= OVER_LIMIT_PCT:
            alerts.append(Alert(
                type='danger',
                icon='🚨',
                text=(
                    f"You've exceeded your monthly budget by {money(forecast.total_spend - forecast.budget)}. "
                    f"Consider pausing non-essential spending."
                ),
            ))
        else:
            alerts.append(Alert(
                type='warning',
                icon='⚠️',
                text=(
                    f"You've used {forecast.utilization_pct}% of your budget. "
                    f"{money(forecast.remaining)} remaining for the rest of the month."
                ),
            ))

    if 0 < forecast.runway_days < RUNWAY_WARNING_DAYS:
        alerts.append(Alert(
            type='warning',
            icon='⏳',
            text=(
                f"At current spending, you'll run out of budget in {plural(forecast.runway_days, 'day')}. "
                f"Daily burn rate: {money(forecast.burn_rate)}."
            ),
        ))

    for sub, days in upcoming_subscriptions(subscriptions, today, within_days=UPCOMING_WINDOW_DAYS):
        if days == 0:
            alerts.append(Alert(type='info', icon='🔄', text=f"{sub.name} ({money(sub.amount)}) is due today."))
        elif days <= DUE_SOON_DAYS:
            alerts.append(Alert(
                type='info',
                icon='🔔',
                text=f"{sub.name} ({money(sub.amount)}) is due in {plural(days, 'day')}.",
            ))

    return alerts
