"""
Tabelle pandas dai report, per grafici, tabelle ed export.

Valori numerici grezzi: nessuna formattazione di valuta o date.
"""

from typing import Iterable, List, Mapping

import pandas as pd

from core.models import Booking, BreakdownItem, Expense, PeriodReport, ReportSeries, SourceBreakdown
from reports.expenses import resolve_category_name


def series_frame(series: ReportSeries) -> pd.DataFrame:
    """Una riga per mese, ordine crescente: ricavi, spese, utile, notti, occupazione."""
    rows = []
    for point in series.series:
        report = series.reports[point.period_key]
        rows.append({
            "periodo": point.period_key,
            "mese": point.name,
            "ricavi": point.revenue,
            "spese": point.expenses,
            "utile_netto": point.net_profit,
            "notti": report.nights_reserved,
            "occupazione": report.occupancy_rate,
        })
    return pd.DataFrame(rows, columns=["periodo", "mese", "ricavi", "spese", "utile_netto", "notti", "occupazione"])


def breakdown_frame(items: List[BreakdownItem]) -> pd.DataFrame:
    return pd.DataFrame(
        [{"categoria": i.category_name, "totale": i.value, "percentuale": i.percentage} for i in items],
        columns=["categoria", "totale", "percentuale"],
    )


def sources_frame(items: List[SourceBreakdown]) -> pd.DataFrame:
    return pd.DataFrame(
        [{
            "canale": s.source,
            "prenotazioni": s.booking_count,
            "prenotazioni_pct": s.booking_percentage,
            "ricavi": s.revenue,
            "ricavi_pct": s.revenue_percentage,
        } for s in items],
        columns=["canale", "prenotazioni", "prenotazioni_pct", "ricavi", "ricavi_pct"],
    )


def summary_frame(report: PeriodReport) -> pd.DataFrame:
    """Riepilogo verticale voce/valore del report."""
    return pd.DataFrame(
        [
            ("periodo_dal", report.period.start.isoformat()),
            ("periodo_al", report.period.end.isoformat()),
            ("ricavo_lordo", report.gross_revenue),
            ("spese_totali", report.total_expenses),
            ("utile_netto", report.net_profit),
            ("notti_prenotate", report.nights_reserved),
            ("occupazione_pct", report.occupancy_rate),
            ("soggiorno_medio", report.average_stay_nights),
            ("prenotazioni", report.booking_count),
            ("spese", report.expense_count),
        ],
        columns=["voce", "valore"],
    )


def bookings_frame(bookings: Iterable[Booking]) -> pd.DataFrame:
    """Lista prenotazioni, check-in più recente per primo."""
    cols = ["id", "ospite", "check_in", "check_out", "notti", "totale", "acconto", "canale", "stato", "note"]
    rows = [{
        "id": b.id,
        "ospite": b.guest_name,
        "check_in": b.start_date,
        "check_out": b.end_date,
        "notti": max(b.nights, 0),
        "totale": b.total_amount,
        "acconto": b.prepayment,
        "canale": b.source,
        "stato": b.payment_status,
        "note": b.notes,
    } for b in bookings]
    df = pd.DataFrame(rows, columns=cols)
    if df.empty:
        return df
    return df.sort_values("check_in", ascending=False, kind="stable").reset_index(drop=True)


def expenses_frame(expenses: Iterable[Expense], categories: Mapping[str, str]) -> pd.DataFrame:
    """Lista spese con nome categoria risolto, data più recente per prima."""
    cols = ["id", "data", "importo", "categoria", "descrizione", "stato"]
    rows = [{
        "id": e.id,
        "data": e.date,
        "importo": e.amount,
        "categoria": resolve_category_name(e.category_id, categories),
        "descrizione": e.description,
        "stato": e.payment_status,
    } for e in expenses]
    df = pd.DataFrame(rows, columns=cols)
    if df.empty:
        return df
    return df.sort_values("data", ascending=False, kind="stable").reset_index(drop=True)
