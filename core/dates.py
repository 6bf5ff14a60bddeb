"""
Utility sulle date di calendario (senza fuso orario).

Tutte le funzioni lavorano su datetime.date costruite da anno/mese/giorno:
nessun passaggio da timestamp con timezone, quindi niente slittamenti di un
giorno attorno al cambio dell'ora legale.

Convenzione intervalli:
  - prenotazioni: [check-in, check-out) → il giorno di check-out non è una notte
  - periodi di report: [inizio, fine] chiusi, lavorati internamente come
    [inizio, fine + 1 giorno)
"""

import calendar
from datetime import date, datetime, timedelta
from typing import Optional, Tuple

ONE_DAY = timedelta(days=1)

Interval = Tuple[date, date]


def to_date(val) -> Optional[date]:
    """
    Converte un valore in date, oppure None se non interpretabile.

    Accetta date, datetime / pandas Timestamp (si tiene solo la parte data),
    stringhe 'YYYY-MM-DD' (anche con orario in coda) e 'DD/MM/YYYY'.
    """
    if val is None or isinstance(val, bool):
        return None
    if isinstance(val, datetime):
        # pd.NaT è un'istanza di datetime ma non ha componenti valide
        if val != val:
            return None
        return date(val.year, val.month, val.day)
    if isinstance(val, date):
        return val
    if not isinstance(val, str):
        return None
    s = val.strip()
    if not s:
        return None
    # '2024-03-10T00:00:00+02:00' → '2024-03-10': la data è quella scritta
    if len(s) > 10 and s[4:5] == "-" and s[10] in ("T", " "):
        s = s[:10]
    for fmt in ("%Y-%m-%d", "%d/%m/%Y"):
        try:
            parsed = datetime.strptime(s, fmt)
        except ValueError:
            continue
        return date(parsed.year, parsed.month, parsed.day)
    return None


def month_start(d: date) -> date:
    return date(d.year, d.month, 1)


def days_in_month(d: date) -> int:
    """Numero di giorni del mese che contiene d."""
    return calendar.monthrange(d.year, d.month)[1]


def month_bounds(d: date) -> Interval:
    """Primo e ultimo giorno del mese che contiene d."""
    return date(d.year, d.month, 1), date(d.year, d.month, days_in_month(d))


def add_months(d: date, n: int) -> date:
    """Sposta d di n mesi; il giorno viene limitato alla lunghezza del mese."""
    index = d.year * 12 + (d.month - 1) + n
    year, month = divmod(index, 12)
    month += 1
    day = min(d.day, calendar.monthrange(year, month)[1])
    return date(year, month, day)


def days_between(a: date, b: date) -> int:
    """Giorni interi da a a b (negativo se b precede a)."""
    return (b - a).days


def clamp(interval: Interval, window: Interval) -> Optional[Interval]:
    """
    Intersezione di due intervalli chiusi.
    Restituisce None se non si sovrappongono.
    """
    start, end = interval
    w_start, w_end = window
    if end < w_start or start > w_end:
        return None
    return max(start, w_start), min(end, w_end)


def month_key(d: date) -> str:
    """Chiave periodo 'YYYY-MM'."""
    return f"{d.year:04d}-{d.month:02d}"


def parse_month_key(key: str) -> date:
    """'YYYY-MM' → primo giorno del mese. Solleva ValueError se malformata."""
    try:
        year, month = (int(part) for part in key.split("-"))
        return date(year, month, 1)
    except (AttributeError, TypeError, ValueError) as e:
        raise ValueError(f"Chiave periodo non valida: {key!r}") from e

