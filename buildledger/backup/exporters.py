"""
Spreadsheet Exporters

CSV and Excel-compatible HTML renderings of ledger records. Every
function here is pure: records in, text out.

CSV rules: header row first, free text quoted with internal quotes
doubled, numbers unquoted, dates as DD/MM/YYYY.
"""

from datetime import datetime
from html import escape
from typing import Any, Iterable, Optional, Sequence, TypeVar, Union

import structlog
from pydantic import ValidationError

from buildledger.config import get_settings
from buildledger.formatting import (
    csv_text,
    format_currency,
    format_date_ddmmyyyy,
    format_plain_number,
)
from buildledger.models.backup import BackupData
from buildledger.models.base import LedgerModel, utc_now
from buildledger.models.invoice import Invoice
from buildledger.models.records import LaborPayment, Transaction, Worker
from buildledger.queries.summaries import calculate_financial_summary

logger = structlog.get_logger(__name__)

Record = TypeVar("Record", bound=LedgerModel)

# Header colour for exported sheets (Bangladesh flag green).
HEADER_COLOR = "#006A4E"
ACCENT_COLOR = "#F42A41"


def _csv(header: str, rows: Iterable[Iterable[str]]) -> str:
    lines = [header] + [",".join(row) for row in rows]
    return "\n".join(lines) + "\n"


# =============================================================================
# CSV
# =============================================================================

def export_transactions_to_csv(transactions: Iterable[Transaction]) -> str:
    return _csv("Date,Type,Category,Description,Amount", (
        [
            format_date_ddmmyyyy(t.date),
            t.type.value,
            t.category.value,
            csv_text(t.description),
            format_plain_number(t.amount),
        ]
        for t in transactions
    ))


def export_labor_payments_to_csv(payments: Iterable[LaborPayment]) -> str:
    header = (
        "Week Start,Worker Name,Days,Regular Hours,Overtime Hours,"
        "Rate,Overtime Rate,Total,Paid"
    )
    return _csv(header, (
        [
            format_date_ddmmyyyy(p.week_start),
            csv_text(p.worker_name),
            format_plain_number(p.days_worked),
            format_plain_number(p.regular_hours),
            format_plain_number(p.overtime_hours),
            format_plain_number(p.hourly_rate),
            format_plain_number(p.overtime_rate),
            format_plain_number(p.total_amount),
            "Yes" if p.is_paid else "No",
        ]
        for p in payments
    ))


def export_workers_to_csv(workers: Iterable[Worker]) -> str:
    return _csv("Name,Hourly Rate,Created Date", (
        [
            csv_text(w.name),
            format_plain_number(w.hourly_rate),
            format_date_ddmmyyyy(w.created_at),
        ]
        for w in workers
    ))


def export_invoices_to_csv(invoices: Iterable[Invoice]) -> str:
    header = "Invoice Number,Date,Due Date,Buyer,Total,Amount Paid,Balance,Status"
    return _csv(header, (
        [
            csv_text(inv.invoice_number),
            format_date_ddmmyyyy(inv.date),
            format_date_ddmmyyyy(inv.due_date) if inv.due_date else "",
            csv_text(inv.buyer.name),
            format_plain_number(inv.total_amount),
            format_plain_number(inv.amount_paid),
            format_plain_number(inv.balance_due),
            inv.status.value,
        ]
        for inv in invoices
    ))


def parse_records(model: type[Record], raw: Iterable[dict[str, Any]]) -> list[Record]:
    """Parse raw stored dicts, skipping (and logging) any that no longer validate."""
    records = []
    for item in raw:
        try:
            records.append(model.model_validate(item))
        except ValidationError as e:
            logger.warning(
                "export_record_skipped",
                model=model.__name__,
                record_id=item.get("id") if isinstance(item, dict) else None,
                error_count=e.error_count(),
            )
    return records


def _bundle(bundle: Union[BackupData, dict[str, Any]]) -> BackupData:
    if isinstance(bundle, BackupData):
        return bundle
    return BackupData.model_validate(bundle)


def export_all_to_csv(bundle: Union[BackupData, dict[str, Any]]) -> dict[str, str]:
    """One CSV document per collection, keyed by collection name."""
    data = _bundle(bundle)
    return {
        "transactions": export_transactions_to_csv(parse_records(Transaction, data.transactions)),
        "labor_payments": export_labor_payments_to_csv(parse_records(LaborPayment, data.labor_payments)),
        "workers": export_workers_to_csv(parse_records(Worker, data.workers)),
        "invoices": export_invoices_to_csv(parse_records(Invoice, data.invoices)),
    }


# =============================================================================
# EXCEL (HTML)
# =============================================================================

_EXCEL_HEAD = (
    '<html xmlns:o="urn:schemas-microsoft-com:office:office" '
    'xmlns:x="urn:schemas-microsoft-com:office:excel" '
    'xmlns="http://www.w3.org/TR/REC-html40">\n'
    "<head>\n"
    '<meta charset="UTF-8">\n'
    "<style>\n"
    "table { border-collapse: collapse; }\n"
    "th, td { border: 1px solid #ccc; padding: 6px; }\n"
    f"th {{ background: {HEADER_COLOR}; color: #fff; }}\n"
    f"h1 {{ color: {HEADER_COLOR}; }}\n"
    f"h2 {{ color: {ACCENT_COLOR}; }}\n"
    "</style>\n"
    "</head>\n"
)


def _table(headers: Sequence[str], rows: Iterable[Sequence[Any]]) -> str:
    head = "".join(f"<th>{escape(str(h))}</th>" for h in headers)
    body = "\n".join(
        "<tr>" + "".join(f"<td>{escape(str(cell))}</td>" for cell in row) + "</tr>"
        for row in rows
    )
    return f"<table>\n<thead><tr>{head}</tr></thead>\n<tbody>\n{body}\n</tbody>\n</table>\n"


def create_excel_table(title: str, headers: Sequence[str], rows: Iterable[Sequence[Any]]) -> str:
    """A standalone HTML document that Excel opens as a sheet."""
    return (
        _EXCEL_HEAD
        + "<body>\n"
        + f"<h2>{escape(title)}</h2>\n"
        + _table(headers, rows)
        + "</body>\n</html>\n"
    )


def _transaction_rows(transactions: Iterable[Transaction]) -> list[list[str]]:
    return [
        [
            format_date_ddmmyyyy(t.date),
            t.type.value,
            t.category.value,
            t.description,
            format_plain_number(t.amount),
        ]
        for t in transactions
    ]


TRANSACTION_HEADERS = ("Date", "Type", "Category", "Description", "Amount (BDT)")


def export_transactions_to_excel(transactions: Iterable[Transaction]) -> str:
    return create_excel_table("Transactions", TRANSACTION_HEADERS, _transaction_rows(transactions))


def export_financial_summary_to_excel(transactions: Sequence[Transaction], period: str) -> str:
    summary = calculate_financial_summary(transactions)
    rows = [
        ["Total Income", format_currency(summary.total_income)],
        ["Total Expenses", format_currency(summary.total_expenses)],
        ["Net Profit/Loss", format_currency(summary.net_profit)],
    ]
    return create_excel_table(f"Financial Summary - {period}", ("Metric", "Amount"), rows)


def export_complete_report_to_excel(
    bundle: Union[BackupData, dict[str, Any]],
    generated_at: Optional[datetime] = None,
) -> str:
    """Summary counts followed by the transaction and worker tables."""
    data = _bundle(bundle)
    app_name = get_settings().app.app_name
    generated_at = generated_at or utc_now()

    transactions = parse_records(Transaction, data.transactions)
    workers = parse_records(Worker, data.workers)

    summary = "\n".join([
        '<div class="summary">',
        f"<p>Transactions: {len(data.transactions)}</p>",
        f"<p>Labor Payments: {len(data.labor_payments)}</p>",
        f"<p>Workers: {len(data.workers)}</p>",
        f"<p>Invoices: {len(data.invoices)}</p>",
        "</div>",
    ])

    return (
        _EXCEL_HEAD
        + "<body>\n"
        + f"<h1>{escape(app_name)} - Complete Report</h1>\n"
        + f"<p>Generated: {escape(generated_at.isoformat())}</p>\n"
        + f"<p>App Version: {escape(data.app_version)}</p>\n"
        + summary + "\n"
        + "<h2>Transactions</h2>\n"
        + _table(TRANSACTION_HEADERS, _transaction_rows(transactions))
        + "<h2>Workers</h2>\n"
        + _table(
            ("Name", "Hourly Rate (BDT)"),
            [[w.name, format_plain_number(w.hourly_rate)] for w in workers],
        )
        + "</body>\n</html>\n"
    )
