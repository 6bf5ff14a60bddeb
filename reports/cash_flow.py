"""
Flusso di cassa: incassi e pagamenti ancora in sospeso.

  - acconti incassati: somma degli acconti di tutte le prenotazioni in sospeso
  - da incassare: saldo (totale - acconto) delle prenotazioni in sospeso
    con check-in entro oggi
  - da pagare: spese in sospeso con data entro oggi, eventualmente di una
    sola categoria
"""

import logging
from typing import Optional

from config import PENDING_STATUS
from core.dates import to_date
from core.errors import InvalidInputError
from core.models import CashFlowSummary
from parsers.records import coerce_bookings, coerce_categories, coerce_expenses
from reports.expenses import resolve_category_name


def _is_pending(status: Optional[str]) -> bool:
    return (status or "").lower() == PENDING_STATUS.lower()


def build_cash_flow_summary(
    bookings,
    expenses,
    categories,
    today,
    category: Optional[str] = None,
    logger: Optional[logging.Logger] = None,
) -> CashFlowSummary:
    """
    category: nome categoria per filtrare le spese; None o "all" = tutte.
    "Uncategorized" seleziona le spese senza categoria (o con categoria sconosciuta).
    """
    day = to_date(today)
    if day is None:
        raise InvalidInputError(f"today: data non valida ({today!r})")

    lookup = coerce_categories(categories)
    pending_bookings = [b for b in coerce_bookings(bookings, logger) if _is_pending(b.payment_status)]
    pending_expenses = [
        e for e in coerce_expenses(expenses, logger)
        if _is_pending(e.payment_status) and e.date <= day
    ]

    names = []
    for e in pending_expenses:
        name = resolve_category_name(e.category_id, lookup)
        if name not in names:
            names.append(name)

    if category is not None and category.lower() != "all":
        wanted = category.lower()
        pending_expenses = [
            e for e in pending_expenses
            if resolve_category_name(e.category_id, lookup).lower() == wanted
        ]

    due = [b for b in pending_bookings if b.start_date <= day]
    return CashFlowSummary(
        total_pending_revenue=sum(b.total_amount - b.prepayment for b in due),
        total_prepaid_revenue=sum(b.prepayment for b in pending_bookings),
        total_pending_expenses=sum(e.amount for e in pending_expenses),
        pending_booking_count=len(due),
        pending_expense_count=len(pending_expenses),
        categories=names,
    )
