"""
Lettura del file di backup (.xlsx) prodotto da core/excel_writer.backup_to_xlsx.

Struttura: fogli 'Bookings' ed 'Expenses', intestazioni come in config.py.
Le spese riportano il nome della categoria, non l'id: il nome diventa anche
l'id nel lookup restituito.
"""

import logging
from typing import Dict, List, Optional, Tuple

import pandas as pd

from config import BOOKING_COLUMNS, EXPENSE_COLUMNS, SHEET_BOOKINGS, SHEET_EXPENSES
from core.models import Booking, Expense
from parsers.records import coerce_bookings, coerce_expenses

# Colonne senza le quali il foglio non è utilizzabile
REQUIRED_BOOKING_COLUMNS = ("CheckInDate", "CheckOutDate", "TotalAmount")
REQUIRED_EXPENSE_COLUMNS = ("Date", "Amount")


def _read_sheet(xls: pd.ExcelFile, sheet_name: str, columns: Dict[str, str], required) -> pd.DataFrame:
    if sheet_name not in xls.sheet_names:
        raise ValueError(f"Foglio '{sheet_name}' non trovato nel backup. "
                         f"Fogli presenti: {xls.sheet_names}")
    df = xls.parse(sheet_name)
    df.columns = [str(c).strip() for c in df.columns]

    missing = [c for c in required if c not in df.columns]
    if missing:
        raise ValueError(f"Foglio '{sheet_name}': colonne mancanti {missing}")
    return df.rename(columns=columns)


def load_backup(filepath, logger: Optional[logging.Logger] = None) -> Tuple[List[Booking], List[Expense], Dict[str, str]]:
    """
    Legge il backup (percorso o file-like) e restituisce (bookings, expenses, categories).
    Le righe non valide vengono scartate e segnalate sul logger.
    """
    try:
        xls = pd.ExcelFile(filepath, engine="openpyxl")
    except Exception as e:
        raise ValueError(f"Errore lettura backup: {e}") from e

    with xls:
        df_bookings = _read_sheet(xls, SHEET_BOOKINGS, BOOKING_COLUMNS, REQUIRED_BOOKING_COLUMNS)
        df_expenses = _read_sheet(xls, SHEET_EXPENSES, EXPENSE_COLUMNS, REQUIRED_EXPENSE_COLUMNS)

    bookings = coerce_bookings(df_bookings, logger)
    expenses = coerce_expenses(df_expenses, logger)
    categories = {e.category_id: e.category_id for e in expenses if e.category_id is not None}
    return bookings, expenses, categories
