"""Forecasting, aggregation and insight generation.

This package provides:
- Burn rate, runway and utilization forecasts
- Category and daily spending aggregates
- Rule-based insights
- Dashboard alerts
"""

from .forecast import (
    Forecast,
    MonthContext,
    budget_utilization_pct,
    burn_rate,
    compute_forecast,
    legacy_runway_days,
    month_context,
    monthly_subscription_cost,
    projected_month_spend,
    remaining_budget,
    runway_days,
)
from .aggregation import (
    aggregate,
    category_breakdown,
    current_month_expenses,
    daily_spending,
    days_until_due,
    expenses_frame,
    upcoming_subscriptions,
)
from .insights import (
    DETECTORS,
    InsightContext,
    build_context,
    generate_insights,
)
from .alerts import budget_alerts

__all__ = [
    # Forecast
    'Forecast',
    'MonthContext',
    'budget_utilization_pct',
    'burn_rate',
    'compute_forecast',
    'legacy_runway_days',
    'month_context',
    'monthly_subscription_cost',
    'projected_month_spend',
    'remaining_budget',
    'runway_days',
    # Aggregation
    'aggregate',
    'category_breakdown',
    'current_month_expenses',
    'daily_spending',
    'days_until_due',
    'expenses_frame',
    'upcoming_subscriptions',
    # Insights
    'DETECTORS',
    'InsightContext',
    'build_context',
    'generate_insights',
    # Alerts
    'budget_alerts',
]
