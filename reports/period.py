"""
Report di un periodo: ricavo lordo, spese, utile netto, statistiche,
ripartizione spese per categoria e prenotazioni/ricavi per canale.

Il ricavo di una prenotazione a cavallo di più mesi entra nel periodo solo
per le notti che vi cadono; la stessa quota decide se la prenotazione
compare nella ripartizione per canale (anche se il check-in è precedente).
"""

import logging
from typing import Dict, Iterable, List, Mapping, Optional, Sequence, Tuple

from config import DEFAULT_SOURCE
from core.dates import parse_month_key
from core.errors import InvalidInputError
from core.models import Booking, Expense, PeriodReport, ReportingPeriod, SourceBreakdown
from parsers.records import coerce_bookings, coerce_categories, coerce_expenses
from reports.allocation import slice_booking
from reports.expenses import aggregate_expenses, expenses_in_period, total_amount
from reports.metrics import stats_from_nights

# (prenotazione, notti nel periodo, ricavo nel periodo)
BookingSlice = Tuple[Booking, int, float]


def as_period(value) -> ReportingPeriod:
    """Accetta un ReportingPeriod o una chiave 'YYYY-MM'."""
    if isinstance(value, ReportingPeriod):
        return value
    if isinstance(value, str):
        try:
            first = parse_month_key(value)
        except ValueError as e:
            raise InvalidInputError(str(e)) from e
        return ReportingPeriod.for_month(first.year, first.month)
    raise InvalidInputError(f"period: atteso ReportingPeriod o 'YYYY-MM', ricevuto {type(value).__name__}")


def bookings_by_source(slices: Iterable[BookingSlice]) -> List[SourceBreakdown]:
    """Conteggio e ricavo per canale delle prenotazioni con ricavo nel periodo."""
    counts: Dict[str, int] = {}
    revenue: Dict[str, float] = {}
    for booking, _, amount in slices:
        if amount == 0:
            continue
        source = booking.source or DEFAULT_SOURCE
        counts[source] = counts.get(source, 0) + 1
        revenue[source] = revenue.get(source, 0.0) + amount

    total_count = sum(counts.values())
    total_revenue = sum(revenue.values())
    rows = [
        SourceBreakdown(
            source=source,
            booking_count=counts[source],
            booking_percentage=(counts[source] / total_count * 100) if total_count > 0 else 0.0,
            revenue=revenue[source],
            revenue_percentage=(revenue[source] / total_revenue * 100) if total_revenue > 0 else 0.0,
        )
        for source in counts
    ]
    return sorted(rows, key=lambda row: row.revenue, reverse=True)


def compose_report(
    period: ReportingPeriod,
    slices: Sequence[BookingSlice],
    period_expenses: Sequence[Expense],
    categories: Mapping[str, str],
) -> PeriodReport:
    """Assembla il report da prenotazioni già ritagliate e spese già filtrate sul periodo."""
    gross_revenue = sum(amount for _, _, amount in slices)
    expenses_total = total_amount(period_expenses)
    stats = stats_from_nights((nights for _, nights, _ in slices), period)

    return PeriodReport(
        period=period,
        gross_revenue=gross_revenue,
        total_expenses=expenses_total,
        net_profit=gross_revenue - expenses_total,
        nights_reserved=stats.nights_reserved,
        occupancy_rate=stats.occupancy_rate,
        average_stay_nights=stats.average_stay_nights,
        booking_count=stats.booking_count,
        expense_count=len(period_expenses),
        expense_breakdown=aggregate_expenses(period_expenses, categories),
        bookings_by_source=bookings_by_source(slices),
    )


def build_period_report(
    bookings,
    expenses,
    categories,
    period,
    logger: Optional[logging.Logger] = None,
) -> PeriodReport:
    """
    Report di un intervallo chiuso qualsiasi (di solito un mese).

    bookings / expenses: liste di record grezzi o modelli, non filtrate.
    categories: mapping id → nome oppure lista di record {id, name}.
    period: ReportingPeriod o chiave 'YYYY-MM'.
    """
    period = as_period(period)
    valid_bookings = coerce_bookings(bookings, logger)
    valid_expenses = coerce_expenses(expenses, logger)
    lookup = coerce_categories(categories)

    slices = []
    for b in valid_bookings:
        nights, amount = slice_booking(b, period.start, period.end_exclusive)
        if nights > 0:
            slices.append((b, nights, amount))

    return compose_report(period, slices, expenses_in_period(valid_expenses, period), lookup)
