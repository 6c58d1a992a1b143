"""
Invoice Builder

Pure functions over Invoice models. Each returns a new invoice and
leaves its argument untouched.

Totals follow one rule everywhere:
    subtotal        = sum(item.total_price)
    discount_amount = subtotal x discount_percent / 100
    vat_amount      = VAT(subtotal - discount_amount, vat_rate)
    total_amount    = subtotal - discount_amount + vat_amount
    balance_due     = total_amount - amount_paid
"""

import random
from datetime import date
from typing import Iterable, Optional, Union

from pydantic import BaseModel

from buildledger.calculations.tax import calculate_vat
from buildledger.formatting import format_currency
from buildledger.models.base import LedgerModel, utc_now
from buildledger.models.invoice import (
    Invoice,
    InvoiceItem,
    InvoiceItemInput,
    InvoiceStatus,
    Party,
    ProjectInfo,
)
from buildledger.reference.tax_tables import VAT_RATES

ItemLike = Union[InvoiceItemInput, dict]

DEFAULT_TERMS = (
    "Payment Terms: Net 30 days from invoice date.\n"
    "Late payments subject to 2% monthly service charge.\n"
    "All prices are in Bangladeshi Taka (BDT) and include VAT where applicable."
)

DEFAULT_TERMS_BN = (
    "পেমেন্ট শর্তাবলী: চালান তারিখ থেকে ৩০ দিনের মধ্যে পরিশোধ করতে হবে।\n"
    "বিলম্বিত পেমেন্টের জন্য প্রতি মাসে ২% সার্ভিস চার্জ প্রযোজ্য।\n"
    "সমস্ত মূল্য বাংলাদেশী টাকায় (৳) এবং প্রযোজ্য ভ্যাট সহ।"
)


class FormattedInvoice(LedgerModel):
    formatted_subtotal: str
    formatted_discount: str
    formatted_vat: str
    formatted_total: str
    formatted_balance: str
    formatted_amount_paid: str


class InvoiceSummary(LedgerModel):
    total_invoiced: float = 0
    total_paid: float = 0
    total_outstanding: float = 0
    total_overdue: float = 0
    invoice_count: int = 0
    paid_count: int = 0
    overdue_count: int = 0


def get_default_terms() -> str:
    return DEFAULT_TERMS


def get_default_terms_bn() -> str:
    return DEFAULT_TERMS_BN


def generate_invoice_number(today: Optional[date] = None) -> str:
    """
    ``INV-YYMM-NNNN`` with a random 4-digit suffix.

    Not checked for uniqueness against existing invoices.
    """
    today = today or date.today()
    return f"INV-{today:%y%m}-{random.randrange(10000):04d}"


def _price_item(item: ItemLike) -> InvoiceItem:
    data = item.model_dump() if isinstance(item, BaseModel) else dict(item)
    data.pop("id", None)
    data.pop("total_price", None)
    data.pop("totalPrice", None)
    return InvoiceItem.model_validate(data)


def _totals(
    items: list[InvoiceItem],
    discount_percent: float,
    vat_rate: float,
) -> dict:
    subtotal = sum(item.total_price for item in items)
    discount_amount = subtotal * discount_percent / 100
    vat_amount = calculate_vat(subtotal - discount_amount, vat_rate)
    return {
        "subtotal": subtotal,
        "discount_amount": discount_amount,
        "vat_amount": vat_amount,
        "total_amount": subtotal - discount_amount + vat_amount,
    }


def create_invoice(
    seller: Party,
    buyer: Party,
    items: Iterable[ItemLike],
    *,
    project: Optional[ProjectInfo] = None,
    currency: str = "BDT",
    vat_rate: float = VAT_RATES.STANDARD,
    discount_percent: float = 0,
    notes: Optional[str] = None,
    terms: Optional[str] = None,
    due_date: Optional[Union[str, date]] = None,
    today: Optional[date] = None,
) -> Invoice:
    """
    Build a draft invoice with priced items and computed totals.

    Nothing has been paid yet, so the balance is the full total.
    """
    today = today or date.today()
    priced = [_price_item(item) for item in items]
    totals = _totals(priced, discount_percent, vat_rate)
    now = utc_now()

    return Invoice(
        invoice_number=generate_invoice_number(today),
        date=today,
        due_date=due_date,
        seller=seller,
        buyer=buyer,
        project=project,
        items=priced,
        discount_percent=discount_percent,
        vat_rate=vat_rate,
        amount_paid=0,
        balance_due=totals["total_amount"],
        currency=currency or "BDT",
        status=InvoiceStatus.DRAFT,
        notes=notes,
        terms=terms or get_default_terms(),
        created_at=now,
        updated_at=now,
        **totals,
    )


def recalculate_invoice(invoice: Invoice) -> Invoice:
    totals = _totals(invoice.items, invoice.discount_percent, invoice.vat_rate)
    return invoice.model_copy(update={
        **totals,
        "balance_due": totals["total_amount"] - invoice.amount_paid,
        "updated_at": utc_now(),
    })


def add_invoice_item(invoice: Invoice, item: ItemLike) -> Invoice:
    items = list(invoice.items) + [_price_item(item)]
    return recalculate_invoice(invoice.model_copy(update={"items": items}))


def remove_invoice_item(invoice: Invoice, item_id: str) -> Invoice:
    items = [item for item in invoice.items if item.id != item_id]
    return recalculate_invoice(invoice.model_copy(update={"items": items}))


def update_invoice_status(
    invoice: Invoice,
    status: InvoiceStatus,
    amount_paid: Optional[float] = None,
) -> Invoice:
    """
    Set the status, optionally recording a payment.

    A recorded payment overrides the requested status: nothing left to
    pay means PAID, a partial payment means SENT. OVERDUE and CANCELLED
    are never derived here.
    """
    update = {"status": InvoiceStatus(status), "updated_at": utc_now()}

    if amount_paid is not None:
        balance = max(0, invoice.total_amount - amount_paid)
        update["amount_paid"] = amount_paid
        update["balance_due"] = balance
        if balance == 0:
            update["status"] = InvoiceStatus.PAID
        elif balance < invoice.total_amount:
            update["status"] = InvoiceStatus.SENT

    return invoice.model_copy(update=update)


def is_overdue(invoice: Invoice, today: Optional[date] = None) -> bool:
    """Past its due date with money still owed."""
    today = today or date.today()
    return (
        invoice.due_date is not None
        and invoice.due_date < today
        and invoice.balance_due > 0
    )


def format_invoice(invoice: Invoice) -> FormattedInvoice:
    code = invoice.currency
    return FormattedInvoice(
        formatted_subtotal=format_currency(invoice.subtotal, code),
        formatted_discount=format_currency(invoice.discount_amount, code),
        formatted_vat=format_currency(invoice.vat_amount, code),
        formatted_total=format_currency(invoice.total_amount, code),
        formatted_balance=format_currency(invoice.balance_due, code),
        formatted_amount_paid=format_currency(invoice.amount_paid, code),
    )


def generate_invoice_summary(
    invoices: Iterable[Invoice],
    today: Optional[date] = None,
) -> InvoiceSummary:
    summary = InvoiceSummary()
    for invoice in invoices:
        summary.total_invoiced += invoice.total_amount
        summary.total_paid += invoice.amount_paid
        summary.total_outstanding += invoice.balance_due
        summary.invoice_count += 1

        if invoice.status == InvoiceStatus.PAID:
            summary.paid_count += 1

        if is_overdue(invoice, today):
            summary.total_overdue += invoice.balance_due
            summary.overdue_count += 1

    return summary
