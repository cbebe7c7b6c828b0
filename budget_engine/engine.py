"""Single entry point used by the UI and storage layers."""

from __future__ import annotations

from datetime import date
from typing import Any, Dict, Iterable, List, Optional

from .analytics.aggregation import aggregate, current_month_expenses
from .analytics.alerts import budget_alerts
from .analytics.forecast import Forecast, compute_forecast
from .analytics.insights import generate_insights
from .common.formatting import AmountFormatter, format_currency
from .models import Alert, DraftExpense, Insight, coerce_subscriptions
from .parsing.parser import parse


class BudgetEngine:
    """Stateless facade over the parser and the analytics.

    The only configuration is the amount formatter used inside insight
    and alert text, so one instance can be shared between callers.
    """

    def __init__(self, formatter: Optional[AmountFormatter] = None):
        self.formatter = formatter or format_currency

    def parse(self, text: str) -> DraftExpense:
        return parse(text)

    def compute_forecast(self, expenses: Iterable[Any], subscriptions: Iterable[Any], budget: Any, today: date) -> Forecast:
        return compute_forecast(expenses, subscriptions, budget, today)

    def aggregate(self, expenses: Iterable[Any], subscriptions: Iterable[Any], today: date) -> Dict[str, List[Dict[str, Any]]]:
        return aggregate(expenses, subscriptions, today)

    def generate_insights(self, expenses: Iterable[Any], subscriptions: Iterable[Any], budget: Any, today: date) -> List[Insight]:
        return generate_insights(expenses, subscriptions, budget, today, formatter=self.formatter)

    def alerts(self, forecast: Forecast, subscriptions: Iterable[Any], today: date) -> List[Alert]:
        return budget_alerts(forecast, subscriptions, today, formatter=self.formatter)

    def snapshot(self, expenses: Iterable[Any], subscriptions: Iterable[Any], budget: Any, today: date) -> Dict[str, Any]:
        """Everything the dashboard shows, as plain data.

        ``expenses`` may span several months; only ``today``'s month is used.
        """
        month_expenses = current_month_expenses(expenses, today)
        subscription_list = coerce_subscriptions(subscriptions)

        forecast = self.compute_forecast(month_expenses, subscription_list, budget, today)
        aggregates = self.aggregate(month_expenses, subscription_list, today)
        return {
            'forecast': forecast.to_dict(),
            'category_breakdown': aggregates['category_breakdown'],
            'daily_spending': aggregates['daily_spending'],
            'insights': [insight.to_dict() for insight in self.generate_insights(month_expenses, subscription_list, budget, today)],
            'alerts': [alert.to_dict() for alert in self.alerts(forecast, subscription_list, today)],
        }
