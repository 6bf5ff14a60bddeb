"""
Normalizzazione dei record grezzi in Booking / Expense.

I record arrivano dal livello dati già filtrati per proprietà: possono essere
dict (righe del database), righe di un DataFrame, oggetti con attributi o
istanze dei modelli. Un singolo record malformato viene scartato e segnalato
sul logger; un argomento con forma sbagliata (None, stringa, dict al posto di
una lista) solleva InvalidInputError.
"""

import logging
import math
from collections.abc import Iterable, Mapping
from typing import Dict, List, Optional

import pandas as pd

from config import DEFAULT_SOURCE, UNCATEGORIZED
from core.dates import to_date
from core.errors import InvalidInputError
from core.models import Booking, Expense

log = logging.getLogger(__name__)

# Nomi alternativi accettati per ogni campo (snake_case del database e camelCase)
_ALIASES = {
    "start_date": ("start_date", "startDate"),
    "end_date": ("end_date", "endDate"),
    "total_amount": ("total_amount", "totalAmount"),
    "category_id": ("category_id", "categoryId"),
    "guest_name": ("guest_name", "guestName"),
    "payment_status": ("payment_status", "paymentStatus"),
}


def _get(row, name: str):
    for key in _ALIASES.get(name, (name,)):
        if isinstance(row, Mapping):
            val = row.get(key)
        else:
            val = getattr(row, key, None)
        if val is not None:
            return val
    return None


def _to_float(val) -> Optional[float]:
    """Converte un importo in float; None se mancante, non numerico o NaN."""
    if val is None or isinstance(val, bool):
        return None
    if isinstance(val, str):
        s = val.strip().replace(" ", "").replace(",", ".")
        if not s:
            return None
        try:
            num = float(s)
        except ValueError:
            return None
    else:
        try:
            num = float(val)
        except (TypeError, ValueError):
            return None
    if math.isnan(num) or math.isinf(num):
        return None
    return num


def _to_text(val, default: str = "") -> str:
    if val is None or (isinstance(val, float) and math.isnan(val)):
        return default
    s = str(val).strip()
    return s if s else default


def _to_optional_text(val) -> Optional[str]:
    s = _to_text(val)
    return s or None


def _to_id(val, default: Optional[str] = None) -> Optional[str]:
    """
    Identificativo come testo. Una colonna di DataFrame con valori mancanti
    diventa float: 3.0 torna "3", così combacia con la chiave del lookup.
    """
    if isinstance(val, float) and not math.isnan(val) and val.is_integer():
        val = int(val)
    s = _to_text(val)
    return s or default


def _as_rows(rows, what: str) -> list:
    """Verifica la forma dell'argomento di primo livello e lo materializza."""
    if isinstance(rows, pd.DataFrame):
        return rows.to_dict("records")
    if rows is None or isinstance(rows, (str, bytes, Mapping)) or not isinstance(rows, Iterable):
        raise InvalidInputError(
            f"{what}: attesa una lista di record, ricevuto {type(rows).__name__}"
        )
    return list(rows)


def coerce_booking(row, position: int = 0, logger: Optional[logging.Logger] = None) -> Optional[Booking]:
    """Costruisce un Booking valido da un record grezzo, o None se da scartare."""
    logger = logger or log
    if row is None:
        logger.warning("Prenotazione #%d vuota, ignorata", position)
        return None

    booking_id = _to_id(_get(row, "id"), default=f"#{position}")
    start = to_date(_get(row, "start_date"))
    end = to_date(_get(row, "end_date"))
    amount = _to_float(_get(row, "total_amount"))

    if start is None or end is None:
        logger.warning("Prenotazione %s: date mancanti o non valide, ignorata", booking_id)
        return None
    if amount is None or amount < 0:
        logger.warning("Prenotazione %s: importo non valido (%r), ignorata",
                       booking_id, _get(row, "total_amount"))
        return None
    if end <= start:
        logger.warning("Prenotazione %s: check-out %s non successivo al check-in %s, "
                       "nessuna notte conteggiata", booking_id, end, start)

    prepayment = _to_float(_get(row, "prepayment"))
    if prepayment is None or prepayment < 0:
        if _get(row, "prepayment") is not None:
            logger.warning("Prenotazione %s: acconto non valido (%r), considerato 0",
                           booking_id, _get(row, "prepayment"))
        prepayment = 0.0

    return Booking(
        id=booking_id,
        start_date=start,
        end_date=end,
        total_amount=amount,
        source=_to_text(_get(row, "source"), default=DEFAULT_SOURCE),
        guest_name=_to_text(_get(row, "guest_name")),
        prepayment=prepayment,
        payment_status=_to_optional_text(_get(row, "payment_status")),
        notes=_to_text(_get(row, "notes")),
    )


def coerce_expense(row, position: int = 0, logger: Optional[logging.Logger] = None) -> Optional[Expense]:
    """Costruisce una Expense valida da un record grezzo, o None se da scartare."""
    logger = logger or log
    if row is None:
        logger.warning("Spesa #%d vuota, ignorata", position)
        return None

    expense_id = _to_id(_get(row, "id"), default=f"#{position}")
    when = to_date(_get(row, "date"))
    amount = _to_float(_get(row, "amount"))

    if when is None:
        logger.warning("Spesa %s: data mancante o non valida, ignorata", expense_id)
        return None
    if amount is None or amount < 0:
        logger.warning("Spesa %s: importo non valido (%r), ignorata", expense_id, _get(row, "amount"))
        return None

    return Expense(
        id=expense_id,
        date=when,
        amount=amount,
        category_id=_to_id(_get(row, "category_id")),
        description=_to_text(_get(row, "description")),
        payment_status=_to_optional_text(_get(row, "payment_status")),
    )


def coerce_bookings(rows, logger: Optional[logging.Logger] = None) -> List[Booking]:
    bookings = []
    for i, row in enumerate(_as_rows(rows, "bookings")):
        b = coerce_booking(row, i, logger)
        if b is not None:
            bookings.append(b)
    return bookings


def coerce_expenses(rows, logger: Optional[logging.Logger] = None) -> List[Expense]:
    expenses = []
    for i, row in enumerate(_as_rows(rows, "expenses")):
        e = coerce_expense(row, i, logger)
        if e is not None:
            expenses.append(e)
    return expenses


def coerce_categories(value) -> Dict[str, str]:
    """
    Lookup id categoria → nome.
    Accetta un mapping {id: nome} oppure una lista di record {id, name}.
    """
    if isinstance(value, Mapping):
        pairs = list(value.items())
    else:
        pairs = [(_get(row, "id"), _get(row, "name"))
                 for row in _as_rows(value, "categories") if row is not None]

    lookup = {}
    for raw_id, name in pairs:
        cat_id = _to_id(raw_id)
        if cat_id is None:
            continue
        lookup[cat_id] = _to_text(name, default=UNCATEGORIZED)
    return lookup
