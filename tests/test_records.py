from __future__ import annotations

import logging
from dataclasses import dataclass
from datetime import date

import pandas as pd
import pytest

from core.errors import InvalidInputError
from core.models import Booking, Expense
from parsers.records import coerce_bookings, coerce_categories, coerce_expenses
from reports.period import build_period_report


@dataclass
class Row:
    id: str
    startDate: str
    endDate: str
    totalAmount: float


def test_bookings_from_dicts_objects_and_models():
    rows = [
        {"id": 7, "start_date": "2024-03-10", "end_date": "2024-03-15", "total_amount": "500,50"},
        Row(id="b2", startDate="2024-04-01", endDate="2024-04-03", totalAmount=120.0),
        Booking(id="b3", start_date=date(2024, 5, 1), end_date=date(2024, 5, 2), total_amount=80.0, source="AIRBNB"),
    ]
    bookings = coerce_bookings(rows)
    assert [b.id for b in bookings] == ["7", "b2", "b3"]
    assert bookings[0].total_amount == pytest.approx(500.5)
    assert bookings[0].source == "DIRECT"
    assert bookings[1].start_date == date(2024, 4, 1)
    assert bookings[2].source == "AIRBNB"


def test_bookings_from_dataframe():
    df = pd.DataFrame([
        {"id": "b1", "start_date": pd.Timestamp("2024-03-10"), "end_date": pd.Timestamp("2024-03-12"),
         "total_amount": 200.0, "notes": float("nan")},
        {"id": "b2", "start_date": pd.NaT, "end_date": pd.Timestamp("2024-03-12"),
         "total_amount": 200.0, "notes": "x"},
    ])
    bookings = coerce_bookings(df)
    assert len(bookings) == 1
    assert bookings[0].notes == ""
    assert bookings[0].nights == 2


def test_invalid_bookings_are_skipped_with_a_warning(caplog):
    rows = [
        None,
        {"id": "nodate", "end_date": "2024-03-15", "total_amount": 10},
        {"id": "negative", "start_date": "2024-03-10", "end_date": "2024-03-15", "total_amount": -1},
        {"id": "nan", "start_date": "2024-03-10", "end_date": "2024-03-15", "total_amount": float("nan")},
        {"id": "flag", "start_date": "2024-03-10", "end_date": "2024-03-15", "total_amount": True},
        {"id": "ok", "start_date": "2024-03-10", "end_date": "2024-03-15", "total_amount": 0},
    ]
    with caplog.at_level(logging.WARNING):
        bookings = coerce_bookings(rows)
    assert [b.id for b in bookings] == ["ok"]
    for record_id in ("nodate", "negative", "nan", "flag"):
        assert record_id in caplog.text


def test_bad_prepayment_falls_back_to_zero():
    rows = [{"id": "b1", "start_date": "2024-03-10", "end_date": "2024-03-15",
             "total_amount": 100, "prepayment": -5}]
    assert coerce_bookings(rows)[0].prepayment == 0.0


def test_expenses():
    rows = [
        {"id": "e1", "date": "2024-03-02", "amount": 12.5, "categoryId": 3},
        {"id": "e2", "date": "2024-03-02", "amount": -3},
        {"id": "e3", "date": None, "amount": 3},
        Expense(id="e4", date=date(2024, 3, 4), amount=9.0),
    ]
    expenses = coerce_expenses(rows)
    assert [e.id for e in expenses] == ["e1", "e4"]
    assert expenses[0].category_id == "3"
    assert expenses[1].category_id is None


def test_categories_from_mapping_or_records():
    assert coerce_categories({1: "Pulizie", "c2": None}) == {"1": "Pulizie", "c2": "Uncategorized"}
    assert coerce_categories([{"id": 1, "name": "Pulizie"}, None, {"name": "senza id"}]) == {"1": "Pulizie"}


@pytest.mark.parametrize("value", [None, "abc", b"abc", {"id": 1}, 42])
def test_wrong_shapes_raise(value):
    with pytest.raises(InvalidInputError):
        coerce_bookings(value)
    with pytest.raises(InvalidInputError):
        coerce_expenses(value)


def test_numeric_ids_from_dataframe_with_missing_values():
    # una colonna intera con un valore mancante viene letta come float
    df = pd.DataFrame({
        "id": [11, None],
        "date": ["2024-03-05", "2024-03-06"],
        "amount": [60.0, 40.0],
        "category_id": [3, None],
    })
    expenses = coerce_expenses(df)
    assert [e.id for e in expenses] == ["11", "#1"]
    assert [e.category_id for e in expenses] == ["3", None]

    lookup = coerce_categories(pd.DataFrame({"id": [3.0, None], "name": ["Pulizie", "Orfana"]}))
    assert lookup == {"3": "Pulizie"}


def test_dataframe_category_ids_resolve_in_report():
    df = pd.DataFrame({
        "date": ["2024-03-05", "2024-03-06"],
        "amount": [60.0, 40.0],
        "category_id": [3, None],
    })
    report = build_period_report([], df, [{"id": 3, "name": "Pulizie"}], "2024-03")
    assert [(i.category_name, i.value) for i in report.expense_breakdown] == [
        ("Pulizie", 60.0), ("Uncategorized", 40.0),
    ]
