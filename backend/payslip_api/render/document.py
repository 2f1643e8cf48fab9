"""Payslip document rendering.

The document is assembled as HTML and printed to PDF with WeasyPrint, so
pagination, table layout and text wrapping of long notes are left to the
CSS engine.
"""
import html
import logging
import re
from datetime import date, datetime
from decimal import Decimal

from ..config import CURRENCY_SYMBOL
from ..schemas.payslip import PayslipRead

logger = logging.getLogger(__name__)

EARNINGS_ROWS = (
    ("Basic Salary", "basic_salary"),
    ("House Allowance", "house_allowance"),
    ("Transport Allowance", "transport_allowance"),
    ("Other Earnings", "other_earnings"),
)

DEDUCTION_ROWS = (
    ("Tax", "tax"),
    ("Insurance", "insurance"),
    ("Pension", "pension"),
    ("Other Deductions", "other_deductions"),
)

CSS = """
@page { size: A4; margin: 0 0 18mm 0; }
body { font-family: Helvetica, Arial, sans-serif; font-size: 11pt; color: #000; margin: 0; }
.header { background: rgb(59, 130, 246); color: #fff; text-align: center; padding: 8mm 0 6mm; }
.header h1 { font-size: 24pt; margin: 0; }
.header p { font-size: 12pt; margin: 2mm 0 0; }
.content { padding: 0 14mm; }
h2 { font-size: 14pt; margin: 8mm 0 3mm; }
.info td { padding: 1mm 0; }
.info td.label { font-weight: bold; width: 36mm; }
table.amounts { width: 100%; border-collapse: collapse; page-break-inside: avoid; }
table.amounts th, table.amounts td { padding: 2mm 3mm; text-align: left; }
table.amounts td.amount, table.amounts th.amount { text-align: right; }
table.amounts tbody tr:nth-child(even) { background: #f5f5f5; }
table.amounts th { color: #fff; }
table.amounts tfoot td { font-weight: bold; }
table.earnings th { background: rgb(34, 197, 94); }
table.earnings tfoot td { background: rgb(220, 252, 231); }
table.deductions th { background: rgb(239, 68, 68); }
table.deductions tfoot td { background: rgb(254, 226, 226); }
.net-pay { background: rgb(59, 130, 246); color: #fff; font-size: 16pt; font-weight: bold;
           margin-top: 8mm; padding: 5mm 6mm; page-break-inside: avoid; }
.net-pay .amount { float: right; }
.notes h3 { font-size: 12pt; margin: 8mm 0 2mm; }
.notes p { font-size: 10pt; white-space: pre-wrap; overflow-wrap: break-word; margin: 0; }
.footer { position: fixed; bottom: -10mm; left: 0; right: 0; text-align: center;
          font-size: 9pt; color: rgb(128, 128, 128); }
"""


def format_money(value: Decimal, symbol: str = CURRENCY_SYMBOL) -> str:
    return f"{symbol}{value:.2f}"


def format_date(value: date) -> str:
    """``date(2024, 2, 1)`` -> ``"February 1, 2024"``."""
    return f"{value:%B} {value.day}, {value.year}"


def payslip_filename(payslip: PayslipRead) -> str:
    # whitespace and path separators
    name = re.sub(r"[\s/\\]+", "_", payslip.employee.name)
    paid = re.sub(r"\s+", "_", format_date(payslip.pay_date))
    return f"payslip_{name}_{paid}.pdf"


def _amounts_table(css_class: str, rows, total_label: str, total: Decimal, payslip: PayslipRead, symbol: str) -> str:
    body = "".join(
        f"<tr><td>{label}</td><td class='amount'>{format_money(getattr(payslip, attr), symbol)}</td></tr>"
        for label, attr in rows
    )
    return (
        f"<table class='amounts {css_class}'>"
        "<thead><tr><th>Description</th><th class='amount'>Amount</th></tr></thead>"
        f"<tbody>{body}</tbody>"
        f"<tfoot><tr><td>{total_label}</td><td class='amount'>{format_money(total, symbol)}</td></tr></tfoot>"
        "</table>"
    )


def build_payslip_html(
    payslip: PayslipRead,
    generated_at: datetime | None = None,
    currency_symbol: str = CURRENCY_SYMBOL,
) -> str:
    generated_at = generated_at or datetime.now()
    esc = html.escape
    employee = payslip.employee

    info_rows = [
        ("Name:", employee.name),
        ("Position:", employee.position),
        ("Email:", employee.email),
        ("Pay Period:", f"{format_date(payslip.pay_period_start)} - {format_date(payslip.pay_period_end)}"),
        ("Pay Date:", format_date(payslip.pay_date)),
    ]

    parts = []
    parts.append(f"<html><head><meta charset='UTF-8'><style>{CSS}</style></head><body>")

    # --- header ---
    parts.append(
        "<div class='header'><h1>PAYSLIP</h1><p>Employee Payment Statement</p></div>"
        "<div class='content'>"
    )

    # --- employee ---
    parts.append("<h2>Employee Information</h2><table class='info'>")
    for label, value in info_rows:
        parts.append(f"<tr><td class='label'>{label}</td><td>{esc(value)}</td></tr>")
    parts.append("</table>")

    # --- earnings / deductions ---
    parts.append("<h2>Earnings</h2>")
    parts.append(_amounts_table(
        "earnings", EARNINGS_ROWS, "Total Earnings", payslip.total_earnings, payslip, currency_symbol,
    ))
    parts.append("<h2>Deductions</h2>")
    parts.append(_amounts_table(
        "deductions", DEDUCTION_ROWS, "Total Deductions", payslip.total_deductions, payslip, currency_symbol,
    ))

    # --- net pay ---
    parts.append(
        "<div class='net-pay'><span>NET PAY:</span>"
        f"<span class='amount'>{format_money(payslip.net_pay, currency_symbol)}</span></div>"
    )

    if payslip.notes:
        parts.append(f"<div class='notes'><h3>Notes:</h3><p>{esc(payslip.notes)}</p></div>")

    parts.append("</div>")
    parts.append(
        f"<div class='footer'>Generated on {generated_at:%m/%d/%Y} | "
        f"Payslip ID: {esc(payslip.id[:8])}</div>"
    )
    parts.append("</body></html>")
    return "".join(parts)


def render_payslip_pdf(payslip: PayslipRead, generated_at: datetime | None = None) -> bytes:
    """Render one payslip to PDF bytes."""
    try:
        from weasyprint import HTML
    except Exception as e:
        raise RuntimeError("WeasyPrint is required to render payslip PDFs") from e

    html_content = build_payslip_html(payslip, generated_at=generated_at)
    logger.info("Rendering PDF for payslip %s", payslip.id)
    return HTML(string=html_content).write_pdf()
