"""
Spreadsheet and PDF renderings of quotation data
"""
from io import BytesIO
from typing import Iterable, Optional
from xml.sax.saxutils import escape

from openpyxl import Workbook
from openpyxl.styles import Font
from reportlab.lib import colors
from reportlab.lib.pagesizes import A4
from reportlab.lib.styles import getSampleStyleSheet
from reportlab.platypus import Paragraph, SimpleDocTemplate, Spacer, Table, TableStyle

from quotedesk.models.app_settings import AppSettings
from quotedesk.models.quotation import BudgetType, DiscountType, QuotationWithItems
from quotedesk.services.finance import discount_amount, quotation_subtotal

QUOTATION_COLUMNS = [
    "Quotation Number", "Project Name", "Recipient", "Date", "Validity Date",
    "Status", "Budget Type", "Currency", "Total", "Vendor Cost", "Note",
]
BUDGET_LABELS = {BudgetType.MA: "MA", BudgetType.KOREK_COMMUNICATION: "Korek"}
LONG_DATE = "%B %d, %Y"


def _workbook_bytes(wb: Workbook) -> bytes:
    buf = BytesIO()
    wb.save(buf)
    return buf.getvalue()


def quotations_workbook(quotations: Iterable[QuotationWithItems]) -> bytes:
    """One row per quotation, sheet "Quotations" """
    wb = Workbook()
    ws = wb.active
    ws.title = "Quotations"
    ws.append(QUOTATION_COLUMNS)
    for cell in ws[1]:
        cell.font = Font(bold=True)

    for q in quotations:
        ws.append([
            q.quotation_number,
            q.project_name,
            q.recipient,
            q.date.strftime(LONG_DATE),
            q.validity_date.strftime(LONG_DATE),
            q.status.value.capitalize(),
            BUDGET_LABELS.get(q.budget_type, q.budget_type.value),
            q.currency_type.value.upper(),
            quotation_subtotal(q.quotation_items),
            q.vendor_cost,
            q.note or "",
        ])
    return _workbook_bytes(wb)


def item_type_report_workbook(report: dict, currency_label: str = "IQD") -> bytes:
    """Overview report as a sheet with a header block and a TOTAL row"""
    wb = Workbook()
    ws = wb.active
    ws.title = "Item Types Report"

    status = report["status"]
    ws.append(["Item Types Report"])
    ws.append([f"Date Range: {report['start_date']} - {report['end_date']}"])
    ws.append([f"Status: {'All' if status == 'all' else status.capitalize()}"])
    ws.append([])
    ws.append(["Item Type", "Quantity", f"Total Amount ({currency_label})", "Quotations Count"])
    ws["A1"].font = Font(bold=True, size=14)
    for cell in ws[5]:
        cell.font = Font(bold=True)

    for row in report["rows"]:
        ws.append([row["type_name"], row["quantity"], row["total_amount"], row["quotation_count"]])

    totals = report["totals"]
    ws.append([])
    ws.append(["TOTAL", totals["quantity"], totals["total_amount"], totals["quotation_count"]])
    for cell in ws[ws.max_row]:
        cell.font = Font(bold=True)
    return _workbook_bytes(wb)


def _money(amount: float, currency: str) -> str:
    return f"{amount:,.2f} {currency}"


def quotation_pdf(quotation: QuotationWithItems, settings: Optional[AppSettings] = None) -> bytes:
    """Printable quotation: header, item table and totals"""
    buf = BytesIO()
    doc = SimpleDocTemplate(buf, pagesize=A4, rightMargin=36, leftMargin=36, topMargin=36, bottomMargin=36)
    styles = getSampleStyleSheet()
    currency = quotation.currency_type.value.upper()
    elems = []

    elems.append(Paragraph("QUOTATION", styles["Title"]))
    if settings and settings.company_address:
        elems.append(Paragraph(escape(settings.company_address).replace("\n", "<br/>"), styles["Normal"]))
    elems.append(Spacer(1, 8))

    for label, value in [
        ("Quotation No.", quotation.quotation_number),
        ("Project", quotation.project_name),
        ("Recipient", quotation.recipient),
        ("Date", quotation.date.strftime(LONG_DATE)),
        ("Valid Until", quotation.validity_date.strftime(LONG_DATE)),
    ]:
        elems.append(Paragraph(f"<b>{label}:</b> {escape(str(value))}", styles["Normal"]))
    elems.append(Spacer(1, 12))

    data = [["#", "Description", "Qty", "Unit Price", "Total"]]
    for index, item in enumerate(quotation.quotation_items, start=1):
        description = item.name + (f" - {item.description}" if item.description else "")
        data.append([
            str(index),
            Paragraph(escape(description), styles["Normal"]),
            str(item.quantity),
            _money(item.unit_price, currency),
            _money(item.total_price, currency),
        ])

    t = Table(data, colWidths=[24, 220, 40, 110, 110], hAlign="LEFT")
    t.setStyle(TableStyle([
        ("BACKGROUND", (0, 0), (-1, 0), colors.grey),
        ("TEXTCOLOR", (0, 0), (-1, 0), colors.whitesmoke),
        ("ALIGN", (2, 0), (-1, -1), "RIGHT"),
        ("GRID", (0, 0), (-1, -1), 0.5, colors.black),
        ("VALIGN", (0, 0), (-1, -1), "TOP"),
        ("BOTTOMPADDING", (0, 0), (-1, 0), 6),
    ]))
    elems.append(t)
    elems.append(Spacer(1, 12))

    subtotal = quotation_subtotal(quotation.quotation_items)
    discount = discount_amount(subtotal, quotation.discount, quotation.discount_type)
    elems.append(Paragraph(f"Subtotal: {_money(subtotal, currency)}", styles["Normal"]))
    if discount > 0:
        label = "Discount"
        if quotation.discount_type == DiscountType.PERCENTAGE:
            label = f"Discount ({quotation.discount:g}%)"
        elems.append(Paragraph(f"{label}: -{_money(discount, currency)}", styles["Normal"]))
    elems.append(Paragraph(f"<b>Total: {_money(subtotal - discount, currency)}</b>", styles["Normal"]))

    if quotation.note:
        elems.append(Spacer(1, 12))
        elems.append(Paragraph(f"<b>Note:</b> {escape(quotation.note)}", styles["Normal"]))

    doc.build(elems)
    pdf = buf.getvalue()
    buf.close()
    return pdf
