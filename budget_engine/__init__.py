"""Top-level package for the budget engine.

The engine is the analytical core of a personal budgeting tool. The
primary modules are:

* ``parsing`` – turns a sentence like "Paid $45.99 for lunch" into a draft expense
* ``analytics`` – burn rate, runway, category/daily aggregates and insights
* ``engine`` – the :class:`BudgetEngine` facade tying everything together

Storage, rendering and authentication are left to the caller; every
function here takes plain records and returns plain data.
"""

from .engine import BudgetEngine
from .exceptions import AmountNotFound, BudgetEngineError, InvalidRecordError, ParseError, TaxonomyError
from .models import Alert, DraftExpense, Expense, Insight, Subscription
from .parsing import classify, extract_amount, extract_note, parse
from .analytics import aggregate, compute_forecast, generate_insights

__version__ = '0.1.0'

__all__ = [
    'AmountNotFound',
    'Alert',
    'BudgetEngine',
    'BudgetEngineError',
    'DraftExpense',
    'Expense',
    'Insight',
    'InvalidRecordError',
    'ParseError',
    'Subscription',
    'TaxonomyError',
    'aggregate',
    'classify',
    'compute_forecast',
    'extract_amount',
    'extract_note',
    'generate_insights',
    'parse',
]
