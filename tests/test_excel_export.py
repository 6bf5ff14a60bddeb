from __future__ import annotations

import io
from datetime import date

import pytest
from openpyxl import load_workbook

from core.excel_writer import backup_to_xlsx, period_report_to_xlsx
from parsers.backup import load_backup
from reports.period import build_period_report

CATEGORIES = {"c1": "Pulizie"}

BOOKINGS = [
    {"id": "b1", "guest_name": "Rossi", "start_date": "2024-03-10", "end_date": "2024-03-15",
     "total_amount": 500, "prepayment": 100, "source": "AIRBNB", "payment_status": "Pending"},
    {"id": "b2", "start_date": "2024-03-29", "end_date": "2024-04-03", "total_amount": 250},
]

EXPENSES = [
    {"id": "e1", "date": "2024-03-02", "amount": 60, "category_id": "c1", "description": "pulizie marzo"},
    {"id": "e2", "date": "2024-03-20", "amount": 40},
]


def test_period_report_workbook_has_the_three_sheets():
    report = build_period_report(BOOKINGS, EXPENSES, CATEGORIES, "2024-03")
    wb = load_workbook(io.BytesIO(period_report_to_xlsx(report)))

    assert wb.sheetnames == ["Riepilogo", "Spese", "Canali"]

    summary = {row[0]: row[1] for row in wb["Riepilogo"].iter_rows(min_row=2, values_only=True)}
    assert summary["ricavo_lordo"] == pytest.approx(650)
    assert summary["spese_totali"] == pytest.approx(100)
    assert summary["notti_prenotate"] == 8

    spese = list(wb["Spese"].iter_rows(values_only=True))
    assert spese[0] == ("categoria", "totale", "percentuale")
    assert spese[1][0] == "Pulizie"
    assert wb["Spese"]["A1"].font.bold


def test_backup_can_be_loaded_back(tmp_path):
    path = tmp_path / "backup.xlsx"
    path.write_bytes(backup_to_xlsx(BOOKINGS, EXPENSES, CATEGORIES))

    bookings, expenses, categories = load_backup(str(path))

    assert [b.id for b in bookings] == ["b1", "b2"]
    assert bookings[0].guest_name == "Rossi"
    assert bookings[0].start_date == date(2024, 3, 10)
    assert bookings[0].prepayment == pytest.approx(100)
    assert bookings[0].payment_status == "Pending"
    assert bookings[1].source == "DIRECT"
    assert [e.category_id for e in expenses] == ["Pulizie", "Uncategorized"]
    assert categories == {"Pulizie": "Pulizie", "Uncategorized": "Uncategorized"}

    report = build_period_report(BOOKINGS, EXPENSES, CATEGORIES, "2024-03")
    restored = build_period_report(bookings, expenses, categories, "2024-03")
    assert restored.gross_revenue == pytest.approx(report.gross_revenue)
    assert restored.expense_breakdown == report.expense_breakdown


def test_load_backup_rejects_unreadable_or_incomplete_files(tmp_path):
    broken = tmp_path / "broken.xlsx"
    broken.write_bytes(b"not a workbook")
    with pytest.raises(ValueError):
        load_backup(str(broken))

    report = build_period_report(BOOKINGS, EXPENSES, CATEGORIES, "2024-03")
    wrong = tmp_path / "report.xlsx"
    wrong.write_bytes(period_report_to_xlsx(report))
    with pytest.raises(ValueError, match="Bookings"):
        load_backup(str(wrong))
