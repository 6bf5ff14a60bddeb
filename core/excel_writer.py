"""
Export Excel (.xlsx) dei report e del backup dati.

Le funzioni restituiscono i bytes del file: salvarli o inviarli è compito
del chiamante. Strategia:
  1. I dati passano da DataFrame (reports/pivot.py)
  2. pd.ExcelWriter con engine openpyxl scrive i fogli
  3. openpyxl formatta intestazioni e larghezza colonne prima del salvataggio
"""

import io
import logging
from typing import Dict, Optional

import pandas as pd
from openpyxl.styles import Alignment, Border, Font, Side
from openpyxl.utils import get_column_letter

from config import (
    BOOKING_COLUMNS,
    EXPENSE_COLUMNS,
    SHEET_BOOKINGS,
    SHEET_BREAKDOWN,
    SHEET_EXPENSES,
    SHEET_SOURCES,
    SHEET_SUMMARY,
)
from core.models import PeriodReport
from parsers.records import coerce_bookings, coerce_categories, coerce_expenses
from reports.expenses import resolve_category_name
from reports.pivot import breakdown_frame, sources_frame, summary_frame

GRAY_BORDER = Border(
    left=Side(style="thin", color="CCCCCC"),
    right=Side(style="thin", color="CCCCCC"),
    top=Side(style="thin", color="CCCCCC"),
    bottom=Side(style="thin", color="CCCCCC"),
)

CENTER = Alignment(horizontal="center", vertical="center")


def _style_sheet(ws, width: int = 22):
    """Intestazione in grassetto, bordi grigi, colonne a larghezza fissa."""
    for col in range(1, ws.max_column + 1):
        cell = ws.cell(row=1, column=col)
        cell.font = Font(bold=True)
        cell.alignment = CENTER
        ws.column_dimensions[get_column_letter(col)].width = width

    for row in ws.iter_rows():
        for cell in row:
            if cell.value is not None:
                cell.border = GRAY_BORDER


def _write_frames(frames: Dict[str, pd.DataFrame]) -> bytes:
    buf = io.BytesIO()
    with pd.ExcelWriter(buf, engine="openpyxl") as writer:
        for sheet_name, df in frames.items():
            df.to_excel(writer, index=False, sheet_name=sheet_name)
            _style_sheet(writer.sheets[sheet_name])
    return buf.getvalue()


def period_report_to_xlsx(report: PeriodReport) -> bytes:
    """Report di un periodo: fogli Riepilogo, Spese (per categoria), Canali."""
    return _write_frames({
        SHEET_SUMMARY: summary_frame(report),
        SHEET_BREAKDOWN: breakdown_frame(report.expense_breakdown),
        SHEET_SOURCES: sources_frame(report.bookings_by_source),
    })


def backup_to_xlsx(bookings, expenses, categories, logger: Optional[logging.Logger] = None) -> bytes:
    """
    Backup completo: fogli Bookings ed Expenses con le colonne di config.py.
    La colonna Category contiene il nome risolto della categoria.
    """
    lookup = coerce_categories(categories)

    booking_rows = []
    for b in coerce_bookings(bookings, logger):
        booking_rows.append({col: getattr(b, attr) for col, attr in BOOKING_COLUMNS.items()})

    expense_rows = []
    for e in coerce_expenses(expenses, logger):
        row = {col: getattr(e, attr) for col, attr in EXPENSE_COLUMNS.items()}
        row["Category"] = resolve_category_name(e.category_id, lookup)
        expense_rows.append(row)

    return _write_frames({
        SHEET_BOOKINGS: pd.DataFrame(booking_rows, columns=list(BOOKING_COLUMNS)),
        SHEET_EXPENSES: pd.DataFrame(expense_rows, columns=list(EXPENSE_COLUMNS)),
    })
