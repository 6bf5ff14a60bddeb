"""
Aggregazione spese per categoria e per mese.
"""

from collections import defaultdict
from typing import Dict, Iterable, List, Mapping, Optional

from config import UNCATEGORIZED
from core.dates import month_key
from core.models import BreakdownItem, Expense, ReportingPeriod


def resolve_category_name(category_id: Optional[str], categories: Mapping[str, str]) -> str:
    """Nome categoria dal lookup; 'Uncategorized' se assente o sconosciuta."""
    if category_id is None:
        return UNCATEGORIZED
    return categories.get(category_id) or UNCATEGORIZED


def aggregate_expenses(expenses: Iterable[Expense], categories: Mapping[str, str]) -> List[BreakdownItem]:
    """
    Somma per categoria con percentuale sul totale.
    Ordine: valore decrescente, a parità di valore l'ordine di prima apparizione.
    """
    totals: Dict[str, float] = {}
    for e in expenses:
        name = resolve_category_name(e.category_id, categories)
        totals[name] = totals.get(name, 0.0) + e.amount

    if not totals:
        return []

    grand_total = sum(totals.values())
    items = [
        BreakdownItem(
            category_name=name,
            value=value,
            percentage=(value / grand_total * 100) if grand_total > 0 else 0.0,
        )
        for name, value in totals.items()
    ]
    # sorted è stabile anche con reverse=True
    return sorted(items, key=lambda item: item.value, reverse=True)


def expenses_in_period(expenses: Iterable[Expense], period: ReportingPeriod) -> List[Expense]:
    return [e for e in expenses if period.contains(e.date)]


def expenses_by_month(expenses: Iterable[Expense]) -> Dict[str, List[Expense]]:
    grouped = defaultdict(list)
    for e in expenses:
        grouped[month_key(e.date)].append(e)
    return dict(grouped)


def total_amount(expenses: Iterable[Expense]) -> float:
    return sum(e.amount for e in expenses)
