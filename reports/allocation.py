"""
Ripartizione del ricavo di una prenotazione sui mesi che attraversa.

Convenzione unica, usata anche per notti prenotate e ricavi per canale:
la notte appartiene al giorno in cui inizia, il giorno di check-out non è
una notte. Es. 29/03 → 03/04 (5 notti): 3 notti a marzo, 2 ad aprile.
"""

from datetime import date
from typing import List, Tuple

from core.dates import ONE_DAY, clamp, days_between, month_bounds, month_key
from core.models import Booking, MonthlyAllocation, ReportingPeriod


def slice_booking(booking: Booking, window_start: date, window_end: date) -> Tuple[int, float]:
    """
    Notti e ricavo della prenotazione dentro la finestra [window_start, window_end).
    (0, 0.0) se la prenotazione non ha notti o non tocca la finestra.
    """
    nights = booking.nights
    if nights <= 0 or window_end <= window_start:
        return 0, 0.0
    # prima e ultima notte del soggiorno contro primo e ultimo giorno della finestra
    seg = clamp((booking.start_date, booking.end_date - ONE_DAY), (window_start, window_end - ONE_DAY))
    if seg is None:
        return 0, 0.0
    in_window = days_between(seg[0], seg[1]) + 1
    if in_window == nights:
        # Evita l'arrotondamento di rate * notti sul caso più comune
        return nights, booking.total_amount
    return in_window, booking.per_night_rate * in_window


def allocate_across_periods(booking: Booking) -> List[MonthlyAllocation]:
    """Un'allocazione per ogni mese con almeno una notte della prenotazione."""
    if booking is None or booking.nights <= 0:
        return []

    result = []
    cur = booking.start_date
    while cur < booking.end_date:
        first, last = month_bounds(cur)
        nights, amount = slice_booking(booking, first, last + ONE_DAY)
        if nights > 0:
            result.append(MonthlyAllocation(period_key=month_key(first), amount=amount, nights=nights))
        cur = last + ONE_DAY
    return result


def revenue_in_period(booking: Booking, period: ReportingPeriod) -> float:
    return slice_booking(booking, period.start, period.end_exclusive)[1]
