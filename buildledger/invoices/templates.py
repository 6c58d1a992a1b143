"""Ready-made invoice line sets for common construction jobs."""

from datetime import date
from typing import Optional, Union

from pydantic import Field

from buildledger.invoices.builder import create_invoice
from buildledger.models.base import ReferenceModel
from buildledger.models.invoice import Invoice, InvoiceItemInput, Party, ProjectInfo
from buildledger.reference.tax_tables import VAT_RATES


class InvoiceTemplate(ReferenceModel):
    id: str
    name: str
    name_bn: str
    description: str
    items: tuple[InvoiceItemInput, ...]
    default_vat_rate: float = Field(default=VAT_RATES.STANDARD, ge=0)
    notes: Optional[str] = None


def _lines(*rows: tuple[str, float, str, float]) -> tuple[InvoiceItemInput, ...]:
    return tuple(
        InvoiceItemInput(description=d, quantity=q, unit=u, unit_price=p)
        for d, q, u, p in rows
    )


INVOICE_TEMPLATES: tuple[InvoiceTemplate, ...] = (
    InvoiceTemplate(
        id="construction-full",
        name="Full Construction",
        name_bn="সম্পূর্ণ নির্মাণ",
        description="Complete construction project invoice",
        default_vat_rate=VAT_RATES.STANDARD,
        items=_lines(
            ("Cement (100 bags)", 100, "bags", 520),
            ("Steel Rods (1000 kg)", 1000, "kg", 95),
            ("Bricks (5000 pcs)", 5000, "pcs", 12),
            ("Masonry Labor", 1, "job", 50000),
        ),
    ),
    InvoiceTemplate(
        id="renovation",
        name="Renovation",
        name_bn="পুনর্নির্মাণ",
        description="Renovation project invoice",
        default_vat_rate=VAT_RATES.STANDARD,
        items=_lines(
            ("Tile Work", 500, "sqft", 85),
            ("Painting Work", 1000, "sqft", 18),
            ("Electrical Work", 1, "job", 15000),
            ("Plumbing Work", 1, "job", 12000),
        ),
    ),
    InvoiceTemplate(
        id="consulting",
        name="Consulting Services",
        name_bn="পরামর্শ সেবা",
        description="Professional consulting services",
        default_vat_rate=VAT_RATES.STANDARD,
        items=_lines(
            ("Architectural Design", 1, "project", 50000),
            ("Structural Engineering", 1, "project", 40000),
            ("Site Supervision (per month)", 3, "months", 30000),
        ),
    ),
    InvoiceTemplate(
        id="labor-only",
        name="Labor Only",
        name_bn="শুধু শ্রমিক",
        description="Labor charges only",
        # Labor is often VAT exempt
        default_vat_rate=0,
        items=_lines(
            ("Master Mason", 30, "days", 1200),
            ("Helper", 30, "days", 700),
            ("Carpenter", 15, "days", 1100),
        ),
    ),
)


def get_invoice_template(template_id: str) -> Optional[InvoiceTemplate]:
    for template in INVOICE_TEMPLATES:
        if template.id == template_id:
            return template
    return None


def create_invoice_from_template(
    template_id: str,
    seller: Party,
    buyer: Party,
    *,
    project: Optional[ProjectInfo] = None,
    currency: str = "BDT",
    due_date: Optional[Union[str, date]] = None,
    today: Optional[date] = None,
) -> Optional[Invoice]:
    """A draft invoice with the template's lines and VAT rate, or None."""
    template = get_invoice_template(template_id)
    if template is None:
        return None

    return create_invoice(
        seller,
        buyer,
        template.items,
        project=project,
        currency=currency,
        vat_rate=template.default_vat_rate,
        notes=template.notes,
        due_date=due_date,
        today=today,
    )
