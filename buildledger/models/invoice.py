"""
Invoice Models

An invoice carries its own derived totals (subtotal, discount, VAT,
total, balance). The functions in ``buildledger.invoices`` keep those
totals consistent; the models only describe the shape.
"""

from datetime import datetime
from enum import Enum
from typing import Optional

from pydantic import Field, model_validator

from buildledger.ids import generate_id
from buildledger.models.base import IsoDate, LedgerModel, utc_now


class InvoiceStatus(str, Enum):
    """
    Invoice lifecycle status.

    NOTE: OVERDUE and CANCELLED are only ever set explicitly by the
    caller. Payments can move an invoice to SENT or PAID.
    """
    DRAFT = "draft"
    SENT = "sent"
    PAID = "paid"
    OVERDUE = "overdue"
    CANCELLED = "cancelled"


class Party(LedgerModel):
    """Seller or buyer on an invoice."""

    name: str = Field(..., min_length=1, max_length=200)
    address: str = Field(default="", max_length=500)
    phone: Optional[str] = None
    email: Optional[str] = None
    bin: Optional[str] = Field(
        default=None,
        description="Business Identification Number (VAT registration)"
    )
    logo: Optional[str] = None


class ProjectInfo(LedgerModel):
    """Construction project an invoice relates to."""

    name: str = Field(..., min_length=1)
    address: Optional[str] = None
    description: Optional[str] = None


class InvoiceItemInput(LedgerModel):
    """An invoice line before it is assigned an id and total."""

    description: str = Field(..., min_length=1, max_length=300)
    description_bn: Optional[str] = None
    quantity: float = Field(..., ge=0)
    unit: str = Field(default="", max_length=30)
    unit_bn: Optional[str] = None
    unit_price: float = Field(..., ge=0)


class InvoiceItem(InvoiceItemInput):
    """A priced invoice line."""

    id: str = Field(default_factory=generate_id)
    total_price: Optional[float] = Field(
        default=None,
        ge=0,
        description="quantity x unit_price"
    )

    @model_validator(mode='after')
    def fill_total(self) -> 'InvoiceItem':
        if self.total_price is None:
            self.total_price = self.quantity * self.unit_price
        return self


class Invoice(LedgerModel):
    """A customer invoice."""

    id: str = Field(default_factory=generate_id)
    invoice_number: str
    date: IsoDate
    due_date: Optional[IsoDate] = None

    seller: Party
    buyer: Party
    project: Optional[ProjectInfo] = None

    items: list[InvoiceItem] = Field(default_factory=list)

    # Totals
    subtotal: float = 0
    discount_amount: float = 0
    discount_percent: float = Field(default=0, ge=0, le=100)
    vat_amount: float = 0
    vat_rate: float = Field(default=15, ge=0)
    total_amount: float = 0
    amount_paid: float = Field(default=0, ge=0)
    balance_due: float = 0

    currency: str = "BDT"
    status: InvoiceStatus = InvoiceStatus.DRAFT

    notes: Optional[str] = None
    terms: Optional[str] = None

    created_at: datetime = Field(default_factory=utc_now)
    updated_at: datetime = Field(default_factory=utc_now)

    @model_validator(mode='after')
    def validate_dates(self) -> 'Invoice':
        if self.due_date and self.due_date < self.date:
            raise ValueError("Due date cannot be before invoice date")
        return self
