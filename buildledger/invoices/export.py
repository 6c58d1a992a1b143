"""Single-invoice CSV export."""

from buildledger.formatting import csv_text, format_date_ddmmyyyy, format_plain_number
from buildledger.models.invoice import Invoice
from buildledger.reference.currency import get_currency

NOT_AVAILABLE = "N/A"


def export_invoice_to_csv(invoice: Invoice) -> str:
    """
    Sectioned CSV: details, seller, buyer, items and summary.

    Free text is quoted with embedded quotes doubled. Money is prefixed
    with the currency symbol; quantities are bare numbers.
    """
    symbol = get_currency(invoice.currency).symbol

    def money(amount: float) -> str:
        return f"{symbol}{format_plain_number(amount)}"

    def optional(value) -> str:
        return csv_text(value) if value else NOT_AVAILABLE

    due = format_date_ddmmyyyy(invoice.due_date) if invoice.due_date else NOT_AVAILABLE

    lines = [
        "Invoice Details",
        f"Invoice Number,{csv_text(invoice.invoice_number)}",
        f"Date,{format_date_ddmmyyyy(invoice.date)}",
        f"Due Date,{due}",
        f"Status,{invoice.status.value}",
        "",
        "Seller Information",
        f"Name,{csv_text(invoice.seller.name)}",
        f"Address,{csv_text(invoice.seller.address)}",
        f"Phone,{optional(invoice.seller.phone)}",
        f"BIN,{optional(invoice.seller.bin)}",
        "",
        "Buyer Information",
        f"Name,{csv_text(invoice.buyer.name)}",
        f"Address,{csv_text(invoice.buyer.address)}",
        f"Phone,{optional(invoice.buyer.phone)}",
        "",
        "Items",
        "Description,Quantity,Unit,Unit Price,Total",
    ]
    for item in invoice.items:
        lines.append(
            f"{csv_text(item.description)},{format_plain_number(item.quantity)},"
            f"{csv_text(item.unit)},{money(item.unit_price)},{money(item.total_price)}"
        )

    lines += [
        "",
        "Summary",
        f"Subtotal,{money(invoice.subtotal)}",
        f"Discount ({format_plain_number(invoice.discount_percent)}%),{money(invoice.discount_amount)}",
        f"VAT ({format_plain_number(invoice.vat_rate)}%),{money(invoice.vat_amount)}",
        f"Total,{money(invoice.total_amount)}",
        f"Amount Paid,{money(invoice.amount_paid)}",
        f"Balance Due,{money(invoice.balance_due)}",
    ]
    return "\n".join(lines) + "\n"
