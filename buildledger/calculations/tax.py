"""
Bangladesh VAT and Income Tax Arithmetic

All functions are pure. Rates are percentages (15 means 15%).

Income tax is marginal: each slab taxes only the part of income that
falls inside it. A slab's width is measured from the previous slab's
upper bound, so the published ``min`` (e.g. 350,001) never leaves a
one-taka gap between brackets.
"""

from datetime import date
from typing import Iterable, Optional, Sequence

from pydantic import Field

from buildledger.models.base import LedgerModel
from buildledger.reference.tax_tables import (
    INCOME_TAX_SLABS,
    INVESTMENT_REBATE,
    VAT_RATES,
    TaxSlab,
)

TAX_YEAR_START_MONTH = 7


class SlabTax(LedgerModel):
    slab: TaxSlab
    taxable_amount: float
    tax: float


class IncomeTaxResult(LedgerModel):
    tax_breakdown: list[SlabTax] = Field(default_factory=list)
    total_tax: float = 0
    effective_rate: float = 0


class TaxSummary(LedgerModel):
    gross_income: float
    deductions: float
    taxable_income: float
    tax_before_rebate: float
    investment_rebate: float
    final_tax: float
    monthly_tax: float


class TaxInvoiceLine(LedgerModel):
    description: str
    quantity: float
    unit: str = ""
    unit_price: float
    total_price: float


class TaxInvoice(LedgerModel):
    """VAT computation for a list of lines, without parties or numbering."""
    items: list[TaxInvoiceLine]
    subtotal: float
    vat_amount: float
    vat_rate: float
    total_amount: float


# =============================================================================
# VAT
# =============================================================================

def calculate_vat(amount: float, vat_rate: float = VAT_RATES.STANDARD) -> float:
    return amount * vat_rate / 100


def calculate_price_with_vat(amount: float, vat_rate: float = VAT_RATES.STANDARD) -> float:
    return amount + calculate_vat(amount, vat_rate)


def calculate_price_without_vat(
    amount_with_vat: float,
    vat_rate: float = VAT_RATES.STANDARD,
) -> float:
    return amount_with_vat / (1 + vat_rate / 100)


def extract_vat_from_inclusive(
    amount_with_vat: float,
    vat_rate: float = VAT_RATES.STANDARD,
) -> tuple[float, float]:
    """Split a VAT-inclusive amount into ``(base_amount, vat_amount)``."""
    base = calculate_price_without_vat(amount_with_vat, vat_rate)
    return base, amount_with_vat - base


# =============================================================================
# INCOME TAX
# =============================================================================

def calculate_income_tax(
    annual_income: float,
    slabs: Sequence[TaxSlab] = INCOME_TAX_SLABS,
) -> IncomeTaxResult:
    """
    Progressive income tax over ordered slabs.

    Every slab the income reaches is reported, including the 0% one.
    Income of zero or less owes nothing.
    """
    remaining = annual_income
    total_tax = 0.0
    breakdown = []
    previous_max = 0.0

    for slab in slabs:
        if remaining <= 0:
            break

        if slab.max is None:
            width = remaining
        else:
            width = slab.max - previous_max
            previous_max = slab.max

        taxable = min(remaining, width)
        tax = taxable * slab.rate / 100

        if taxable > 0:
            breakdown.append(SlabTax(slab=slab, taxable_amount=taxable, tax=tax))
            total_tax += tax

        remaining -= taxable

    effective_rate = total_tax / annual_income * 100 if annual_income > 0 else 0
    return IncomeTaxResult(
        tax_breakdown=breakdown,
        total_tax=total_tax,
        effective_rate=effective_rate,
    )


def calculate_investment_rebate(investment_amount: float) -> tuple[float, float]:
    """
    Rebate on eligible investment.

    Returns:
        ``(eligible_amount, rebate_amount)``
    """
    eligible = min(investment_amount, INVESTMENT_REBATE.max_limit)
    rebate = min(
        eligible * INVESTMENT_REBATE.rate / 100,
        INVESTMENT_REBATE.max_rebate_amount,
    )
    return eligible, rebate


def calculate_tax_summary(
    gross_income: float,
    deductions: float = 0,
    investment_amount: float = 0,
) -> TaxSummary:
    taxable_income = max(0, gross_income - deductions)
    tax_before_rebate = calculate_income_tax(taxable_income).total_tax
    _, rebate = calculate_investment_rebate(investment_amount)
    final_tax = max(0, tax_before_rebate - rebate)

    return TaxSummary(
        gross_income=gross_income,
        deductions=deductions,
        taxable_income=taxable_income,
        tax_before_rebate=tax_before_rebate,
        investment_rebate=rebate,
        final_tax=final_tax,
        monthly_tax=final_tax / 12,
    )


def get_current_tax_year(today: Optional[date] = None) -> tuple[str, str]:
    """
    The July-June fiscal year containing ``today``.

    Returns:
        ``(start_iso, end_iso)``, e.g. ``("2024-07-01", "2025-06-30")``
    """
    today = today or date.today()
    start_year = today.year if today.month >= TAX_YEAR_START_MONTH else today.year - 1
    return f"{start_year}-07-01", f"{start_year + 1}-06-30"


def generate_tax_invoice(
    items: Iterable[dict],
    vat_rate: float = VAT_RATES.STANDARD,
) -> TaxInvoice:
    """
    Price lines given as dicts with description, quantity, unit and
    unit price (snake_case or camelCase keys) and add VAT on the subtotal.
    """
    lines = []
    for item in items:
        data = dict(item)
        quantity = data.get("quantity", 0)
        unit_price = data.get("unit_price", data.get("unitPrice", 0))
        data["total_price"] = quantity * unit_price
        data.pop("totalPrice", None)
        lines.append(TaxInvoiceLine.model_validate(data))

    subtotal = sum(line.total_price for line in lines)
    vat_amount = calculate_vat(subtotal, vat_rate)
    return TaxInvoice(
        items=lines,
        subtotal=subtotal,
        vat_amount=vat_amount,
        vat_rate=vat_rate,
        total_amount=subtotal + vat_amount,
    )
