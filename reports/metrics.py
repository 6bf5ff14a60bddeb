"""
Statistiche di performance di un periodo: notti prenotate, occupazione, soggiorno medio.
"""

from typing import Iterable, Sequence

from core.models import Booking, PerformanceStats, ReportingPeriod
from reports.allocation import slice_booking


def stats_from_nights(nights_per_booking: Iterable[int], period: ReportingPeriod) -> PerformanceStats:
    """
    Calcola le statistiche dalle notti nel periodo di ciascuna prenotazione.
    Contano solo le prenotazioni con almeno una notte nel periodo.
    """
    nights = [n for n in nights_per_booking if n > 0]
    nights_reserved = sum(nights)
    booking_count = len(nights)
    period_days = period.days

    return PerformanceStats(
        nights_reserved=nights_reserved,
        booking_count=booking_count,
        occupancy_rate=(nights_reserved / period_days * 100) if period_days > 0 else 0.0,
        average_stay_nights=(nights_reserved / booking_count) if booking_count > 0 else 0.0,
    )


def performance_stats(bookings: Sequence[Booking], period: ReportingPeriod) -> PerformanceStats:
    nights = (slice_booking(b, period.start, period.end_exclusive)[0] for b in bookings)
    return stats_from_nights(nights, period)
