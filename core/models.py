"""
Modelli dati: record in ingresso (Booking, Expense) e valori prodotti dai report.

I record sono snapshot immutabili: il motore li legge, non li modifica mai.
"""

from dataclasses import dataclass, field
from datetime import date
from typing import Dict, List, Optional

from config import DEFAULT_SOURCE
from core.dates import ONE_DAY, days_between, days_in_month, month_key


@dataclass(frozen=True)
class Booking:
    """Una prenotazione: notti da start_date (incluso) a end_date (escluso)."""
    id: str
    start_date: date
    end_date: date
    total_amount: float     # importo dell'intero soggiorno, >= 0
    source: str = DEFAULT_SOURCE   # "DIRECT" | "AIRBNB" | "BOOKING" | ...
    guest_name: str = ""
    prepayment: float = 0.0
    payment_status: Optional[str] = None   # "Pending" | "Paid" | ...
    notes: str = ""

    @property
    def nights(self) -> int:
        return days_between(self.start_date, self.end_date)

    @property
    def per_night_rate(self) -> float:
        nights = self.nights
        if nights <= 0:
            return 0.0
        return self.total_amount / nights


@dataclass(frozen=True)
class Expense:
    """Una spesa datata; category_id None → 'Uncategorized'."""
    id: str
    date: date
    amount: float           # sempre >= 0
    category_id: Optional[str] = None
    description: str = ""
    payment_status: Optional[str] = None


@dataclass(frozen=True)
class ReportingPeriod:
    """Intervallo chiuso [start, end], di solito un mese di calendario."""
    start: date
    end: date

    def __post_init__(self):
        if not isinstance(self.start, date) or not isinstance(self.end, date):
            raise TypeError("start e end devono essere date")
        if self.start > self.end:
            raise ValueError(f"Periodo non valido: {self.start} > {self.end}")

    @classmethod
    def for_month(cls, year: int, month: int) -> "ReportingPeriod":
        first = date(year, month, 1)
        return cls(first, date(year, month, days_in_month(first)))

    @property
    def key(self) -> str:
        return month_key(self.start)

    @property
    def end_exclusive(self) -> date:
        return self.end + ONE_DAY

    @property
    def days(self) -> int:
        return days_between(self.start, self.end) + 1

    def contains(self, d: date) -> bool:
        return self.start <= d <= self.end


@dataclass(frozen=True)
class MonthlyAllocation:
    period_key: str     # "YYYY-MM"
    amount: float
    nights: int


@dataclass(frozen=True)
class BreakdownItem:
    category_name: str
    value: float
    percentage: float


@dataclass(frozen=True)
class SourceBreakdown:
    source: str
    booking_count: int
    booking_percentage: float
    revenue: float
    revenue_percentage: float


@dataclass(frozen=True)
class PerformanceStats:
    nights_reserved: int
    booking_count: int
    occupancy_rate: float
    average_stay_nights: float


@dataclass(frozen=True)
class PeriodReport:
    period: ReportingPeriod
    gross_revenue: float
    total_expenses: float
    net_profit: float
    nights_reserved: int
    occupancy_rate: float
    average_stay_nights: float
    booking_count: int
    expense_count: int
    expense_breakdown: List[BreakdownItem] = field(default_factory=list)
    bookings_by_source: List[SourceBreakdown] = field(default_factory=list)


@dataclass(frozen=True)
class ChartPoint:
    period_key: str
    name: str           # etichetta breve del mese, es. "Mar"
    revenue: float
    expenses: float
    net_profit: float


@dataclass(frozen=True)
class ReportIndexEntry:
    period_key: str
    year: int
    month: int
    amount: float


@dataclass(frozen=True)
class ReportSeries:
    series: List[ChartPoint]            # ordine crescente per period_key
    index: List[ReportIndexEntry]       # ordine decrescente per period_key
    reports: Dict[str, PeriodReport]


@dataclass(frozen=True)
class BookingSummary:
    id: str
    start_date: date
    total_amount: float
    source: str


@dataclass(frozen=True)
class RevenueOverview:
    current_month: PeriodReport
    pending_gross_revenue: float
    upcoming_bookings: List[BookingSummary]
    recent_bookings: List[BookingSummary]
    expense_breakdown: List[BreakdownItem]
    series: ReportSeries


@dataclass(frozen=True)
class CashFlowSummary:
    total_pending_revenue: float
    total_prepaid_revenue: float
    total_pending_expenses: float
    pending_booking_count: int
    pending_expense_count: int
    categories: List[str]
