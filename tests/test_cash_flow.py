from __future__ import annotations

from datetime import date

import pytest

from core.errors import InvalidInputError
from reports.cash_flow import build_cash_flow_summary

CATEGORIES = [{"id": "c1", "name": "Pulizie"}, {"id": "c2", "name": "Utenze"}]

BOOKINGS = [
    {"id": "b1", "start_date": "2024-03-01", "end_date": "2024-03-04", "total_amount": 300,
     "prepayment": 100, "payment_status": "Pending"},
    {"id": "b2", "start_date": "2024-03-20", "end_date": "2024-03-25", "total_amount": 500,
     "prepayment": 150, "payment_status": "Pending"},
    {"id": "b3", "start_date": "2024-03-02", "end_date": "2024-03-05", "total_amount": 400,
     "prepayment": 400, "payment_status": "Paid"},
]

EXPENSES = [
    {"id": "e1", "date": "2024-03-02", "amount": 40, "category_id": "c1", "payment_status": "Pending"},
    {"id": "e2", "date": "2024-03-05", "amount": 90, "category_id": "c2", "payment_status": "Pending"},
    {"id": "e3", "date": "2024-03-06", "amount": 15, "category_id": None, "payment_status": "Pending"},
    {"id": "e4", "date": "2024-03-30", "amount": 70, "category_id": "c1", "payment_status": "Pending"},
    {"id": "e5", "date": "2024-03-01", "amount": 999, "category_id": "c1", "payment_status": "Paid"},
]


def test_cash_flow_summary():
    summary = build_cash_flow_summary(BOOKINGS, EXPENSES, CATEGORIES, date(2024, 3, 10))

    # solo b1 è iniziata entro oggi
    assert summary.total_pending_revenue == pytest.approx(200)
    assert summary.pending_booking_count == 1
    # acconti di tutte le prenotazioni in sospeso, anche future
    assert summary.total_prepaid_revenue == pytest.approx(250)
    assert summary.total_pending_expenses == pytest.approx(40 + 90 + 15)
    assert summary.pending_expense_count == 3
    assert summary.categories == ["Pulizie", "Utenze", "Uncategorized"]


def test_cash_flow_category_filter():
    today = date(2024, 3, 31)
    only_cleaning = build_cash_flow_summary(BOOKINGS, EXPENSES, CATEGORIES, today, category="Pulizie")
    assert only_cleaning.total_pending_expenses == pytest.approx(110)

    uncategorized = build_cash_flow_summary(BOOKINGS, EXPENSES, CATEGORIES, today, category="Uncategorized")
    assert uncategorized.total_pending_expenses == pytest.approx(15)

    everything = build_cash_flow_summary(BOOKINGS, EXPENSES, CATEGORIES, today, category="all")
    assert everything.total_pending_expenses == pytest.approx(40 + 90 + 15 + 70)


def test_cash_flow_requires_a_valid_day():
    with pytest.raises(InvalidInputError):
        build_cash_flow_summary(BOOKINGS, EXPENSES, CATEGORIES, None)
