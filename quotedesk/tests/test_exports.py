"""
Spreadsheet / PDF rendering tests
"""
from datetime import date
from io import BytesIO

from openpyxl import load_workbook

from quotedesk.models.app_settings import AppSettings
from quotedesk.models.quotation import BudgetType, QuotationItemInput, QuotationWithItems
from quotedesk.services.exports import item_type_report_workbook, quotation_pdf, quotations_workbook
from quotedesk.services.finance import price_item


def _quotation():
    return QuotationWithItems(
        id="q1",
        quotation_number="QT-2024-0001",
        project_name="Tower <Upgrade> & Co",
        date=date(2024, 6, 10),
        validity_date=date(2024, 7, 10),
        budget_type=BudgetType.KOREK_COMMUNICATION,
        recipient="Network Dept",
        discount=10,
        note="Prices exclude VAT",
        quotation_items=[
            price_item(QuotationItemInput(name="Antenna", quantity=2, unit_price=100), "q1"),
            price_item(QuotationItemInput(name="Cable", quantity=1, unit_price=50), "q1"),
        ],
    )


def test_quotations_workbook():
    wb = load_workbook(BytesIO(quotations_workbook([_quotation()])))
    ws = wb["Quotations"]
    header = [c.value for c in ws[1]]
    row = [c.value for c in ws[2]]
    assert header[0] == "Quotation Number"
    assert row[0] == "QT-2024-0001"
    assert row[3] == "June 10, 2024"
    assert row[5] == "Draft"
    assert row[6] == "Korek"
    assert row[7] == "IQD"
    assert row[8] == 250


def test_item_type_report_workbook():
    report = {
        "start_date": "2024-06-01",
        "end_date": "2024-06-30",
        "status": "all",
        "rows": [
            {"type_name": "Hardware", "quantity": 3, "total_amount": 250.0, "quotation_count": 1},
        ],
        "totals": {"quantity": 3, "total_amount": 250.0, "quotation_count": 1},
    }
    ws = load_workbook(BytesIO(item_type_report_workbook(report)))["Item Types Report"]
    assert ws["A1"].value == "Item Types Report"
    assert ws["A2"].value == "Date Range: 2024-06-01 - 2024-06-30"
    assert ws["A3"].value == "Status: All"
    assert ws["C5"].value == "Total Amount (IQD)"
    assert ws["A6"].value == "Hardware"
    assert [c.value for c in ws[ws.max_row]] == ["TOTAL", 3, 250, 1]


def test_quotation_pdf():
    pdf = quotation_pdf(_quotation(), AppSettings(company_address="Erbil\nKurdistan"))
    assert pdf.startswith(b"%PDF")
    assert len(pdf) > 1000


def test_quotation_pdf_without_settings():
    assert quotation_pdf(_quotation()).startswith(b"%PDF")
