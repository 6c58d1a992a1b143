"""
Bangladesh Tax & VAT Tables

Rates published by the National Board of Revenue for FY 2024-25.
The arithmetic that uses them lives in ``buildledger.calculations.tax``.
"""

from typing import Optional

from pydantic import Field

from buildledger.models.base import ReferenceModel


class VATRates:
    """VAT rates in percent. EXEMPT means no VAT line at all."""
    STANDARD = 15
    REDUCED = 5
    ZERO = 0
    EXEMPT = None


VAT_RATES = VATRates


class VATCategory(ReferenceModel):
    id: str
    name: str
    name_bn: str
    rate: Optional[float] = None
    description: str


class TaxSlab(ReferenceModel):
    """
    One income-tax bracket.

    ``min`` and ``max`` are the published bounds. The taxable width of a
    bounded slab is measured from the previous slab's ``max``, so the
    published 350,001 lower bound does not drop one taka per bracket.
    """
    min: float = Field(..., ge=0)
    max: Optional[float] = Field(default=None, description="None = no upper bound")
    rate: float = Field(..., ge=0, le=100)
    description: str


class InvestmentRebate(ReferenceModel):
    rate: float = 15
    max_limit: float = 10_000_000
    max_rebate_amount: float = 1_000_000


VAT_CATEGORIES: tuple[VATCategory, ...] = (
    VATCategory(id="standard", name="Standard Rate", name_bn="সাধারণ হার", rate=15, description="Most goods and services"),
    VATCategory(id="reduced", name="Reduced Rate", name_bn="হ্রাসকৃত হার", rate=5, description="Essential goods"),
    VATCategory(id="zero", name="Zero Rated", name_bn="শূন্য হার", rate=0, description="Exports, medicines"),
    VATCategory(id="exempt", name="VAT Exempt", name_bn="ভ্যাট মুক্ত", rate=None, description="Basic food, education"),
)

MATERIAL_VAT_RATES: dict[str, float] = {
    # Standard 15%
    "cement": 15,
    "steel": 15,
    "tiles": 15,
    "paint": 15,
    "electrical": 15,
    "plumbing": 15,
    "glass": 15,
    "aluminum": 15,
    # Reduced 5%
    "bricks": 5,
    "sand": 5,
    # Raw materials
    "wood": 0,
}

INCOME_TAX_SLABS: tuple[TaxSlab, ...] = (
    TaxSlab(min=0, max=350_000, rate=0, description="Tax Free"),
    TaxSlab(min=350_001, max=450_000, rate=5, description="Next 1,00,000"),
    TaxSlab(min=450_001, max=750_000, rate=10, description="Next 3,00,000"),
    TaxSlab(min=750_001, max=1_150_000, rate=15, description="Next 4,00,000"),
    TaxSlab(min=1_150_001, max=1_550_000, rate=20, description="Next 4,00,000"),
    TaxSlab(min=1_550_001, max=None, rate=25, description="Above 15,50,000"),
)

INVESTMENT_REBATE = InvestmentRebate()

CORPORATE_TAX_RATES: dict[str, float] = {
    "PUBLIC_LIMITED": 25,
    "PRIVATE_LIMITED": 27.5,
    "BANK_INSURANCE": 40,
    "CIGARETTE": 45,
    "MOBILE_OPERATOR": 45,
}

# Advance Income Tax on imports (reference only, never computed here)
AIT_RATES: dict[str, float] = {
    "COMMERCIAL_IMPORT": 5,
    "INDUSTRIAL_IMPORT": 3,
}

ADVANCE_TAX: dict[str, dict[str, float]] = {
    "ELECTRICITY": {"residential": 0, "commercial": 2.5, "industrial": 2.5},
    "GAS": {"residential": 0, "commercial": 2.5, "industrial": 2.5},
}

NBR_INFO: dict[str, str] = {
    "website": "https://www.nbr.gov.bd",
    "vat_helpline": "16409",
    "tax_helpline": "16408",
    "email": "info@nbr.gov.bd",
}


def get_vat_category(category_id: str) -> Optional[VATCategory]:
    for category in VAT_CATEGORIES:
        if category.id == category_id:
            return category
    return None


def get_material_vat_rate(material: str) -> float:
    """VAT rate for a material, standard rate if it is not classified."""
    return MATERIAL_VAT_RATES.get(material.lower(), VAT_RATES.STANDARD)
