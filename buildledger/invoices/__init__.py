"""
Invoice Package

Invoice construction, recalculation, payment status, templates and CSV
export. All functions are pure and return new Invoice models.
"""

from buildledger.invoices.builder import (
    DEFAULT_TERMS,
    DEFAULT_TERMS_BN,
    FormattedInvoice,
    InvoiceSummary,
    add_invoice_item,
    create_invoice,
    format_invoice,
    generate_invoice_number,
    generate_invoice_summary,
    get_default_terms,
    get_default_terms_bn,
    is_overdue,
    recalculate_invoice,
    remove_invoice_item,
    update_invoice_status,
)
from buildledger.invoices.export import export_invoice_to_csv
from buildledger.invoices.templates import (
    INVOICE_TEMPLATES,
    InvoiceTemplate,
    create_invoice_from_template,
    get_invoice_template,
)

__all__ = [
    # Builder
    "DEFAULT_TERMS",
    "DEFAULT_TERMS_BN",
    "FormattedInvoice",
    "InvoiceSummary",
    "add_invoice_item",
    "create_invoice",
    "format_invoice",
    "generate_invoice_number",
    "generate_invoice_summary",
    "get_default_terms",
    "get_default_terms_bn",
    "is_overdue",
    "recalculate_invoice",
    "remove_invoice_item",
    "update_invoice_status",
    # Export
    "export_invoice_to_csv",
    # Templates
    "INVOICE_TEMPLATES",
    "InvoiceTemplate",
    "create_invoice_from_template",
    "get_invoice_template",
]
