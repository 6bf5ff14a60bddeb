"""
Serie di report mensili (grafico ricavi, indice report) e riepilogo ricavi.

Le prenotazioni vengono ripartite una sola volta e le spese raggruppate per
mese una sola volta; ogni report mensile è poi composto dal proprio bucket.
"""

import logging
from collections import defaultdict
from datetime import date
from typing import Dict, List, Optional

from config import (
    BOOKING_LIST_LIMIT,
    MONTH_SHORT_LABELS,
    SERIES_MONTHS_BACK,
    SERIES_MONTHS_FORWARD,
)
from core.dates import add_months, month_key, month_start, to_date
from core.errors import InvalidInputError
from core.models import (
    Booking,
    BookingSummary,
    ChartPoint,
    ReportIndexEntry,
    ReportingPeriod,
    ReportSeries,
    RevenueOverview,
)
from parsers.records import coerce_bookings, coerce_categories, coerce_expenses
from reports.allocation import allocate_across_periods
from reports.expenses import aggregate_expenses, expenses_by_month
from reports.period import BookingSlice, compose_report


def _as_day(value, what: str) -> date:
    d = to_date(value)
    if d is None:
        raise InvalidInputError(f"{what}: data non valida ({value!r})")
    return d


def _window_size(value, what: str) -> int:
    if isinstance(value, bool) or not isinstance(value, int) or value < 0:
        raise InvalidInputError(f"{what}: atteso intero >= 0, ricevuto {value!r}")
    return value


def _series_from_valid(bookings, expenses, lookup, center: date, months_back: int, months_forward: int) -> ReportSeries:
    slices_by_month: Dict[str, List[BookingSlice]] = defaultdict(list)
    for b in bookings:
        for alloc in allocate_across_periods(b):
            slices_by_month[alloc.period_key].append((b, alloc.nights, alloc.amount))
    expenses_by_key = expenses_by_month(expenses)

    first = month_start(center)
    reports = {}
    series = []
    for offset in range(-months_back, months_forward + 1):
        m = add_months(first, offset)
        key = month_key(m)
        report = compose_report(
            ReportingPeriod.for_month(m.year, m.month),
            slices_by_month.get(key, []),
            expenses_by_key.get(key, []),
            lookup,
        )
        reports[key] = report
        series.append(ChartPoint(
            period_key=key,
            name=MONTH_SHORT_LABELS[m.month - 1],
            revenue=report.gross_revenue,
            expenses=report.total_expenses,
            net_profit=report.net_profit,
        ))

    series.sort(key=lambda p: p.period_key)
    index = [
        ReportIndexEntry(
            period_key=p.period_key,
            year=reports[p.period_key].period.start.year,
            month=reports[p.period_key].period.start.month,
            amount=p.revenue,
        )
        for p in reversed(series)
    ]
    return ReportSeries(series=series, index=index, reports=reports)


def build_report_series(
    bookings,
    expenses,
    categories,
    center_date,
    months_back: int = SERIES_MONTHS_BACK,
    months_forward: int = SERIES_MONTHS_FORWARD,
    logger: Optional[logging.Logger] = None,
) -> ReportSeries:
    """
    Un PeriodReport per ogni mese da center - months_back a center + months_forward
    (months_back + months_forward + 1 mesi), più la serie per il grafico
    (ordine crescente) e l'indice dei report (ordine decrescente).
    """
    center = _as_day(center_date, "center_date")
    months_back = _window_size(months_back, "months_back")
    months_forward = _window_size(months_forward, "months_forward")
    return _series_from_valid(
        coerce_bookings(bookings, logger),
        coerce_expenses(expenses, logger),
        coerce_categories(categories),
        center,
        months_back,
        months_forward,
    )


def _summary(b: Booking) -> BookingSummary:
    return BookingSummary(id=b.id, start_date=b.start_date, total_amount=b.total_amount, source=b.source)


def build_revenue_overview(
    bookings,
    expenses,
    categories,
    today,
    months_back: int = SERIES_MONTHS_BACK,
    months_forward: int = SERIES_MONTHS_FORWARD,
    list_limit: int = BOOKING_LIST_LIMIT,
    logger: Optional[logging.Logger] = None,
) -> RevenueOverview:
    """
    Riepilogo della pagina ricavi: mese corrente, ricavo lordo ancora da
    maturare (check-in dopo oggi), prossime e ultime prenotazioni (chi arriva
    oggi è già tra le ultime), ripartizione di tutte le spese fornite e serie
    mensile centrata su oggi.
    """
    today = _as_day(today, "today")
    months_back = _window_size(months_back, "months_back")
    months_forward = _window_size(months_forward, "months_forward")
    list_limit = _window_size(list_limit, "list_limit")

    valid_bookings = coerce_bookings(bookings, logger)
    valid_expenses = coerce_expenses(expenses, logger)
    lookup = coerce_categories(categories)

    series = _series_from_valid(valid_bookings, valid_expenses, lookup, today, months_back, months_forward)

    future = sorted((b for b in valid_bookings if b.start_date > today), key=lambda b: b.start_date)
    past = sorted((b for b in valid_bookings if b.start_date <= today), key=lambda b: b.start_date, reverse=True)

    return RevenueOverview(
        current_month=series.reports[month_key(today)],
        pending_gross_revenue=sum(b.total_amount for b in future),
        upcoming_bookings=[_summary(b) for b in future[:list_limit]],
        recent_bookings=[_summary(b) for b in past[:list_limit]],
        expense_breakdown=aggregate_expenses(valid_expenses, lookup),
        series=series,
    )
