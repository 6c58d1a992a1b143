"""
Calculations Package

Pure arithmetic: payroll, material quantities, VAT and income tax.
Nothing here touches storage.
"""

from buildledger.calculations.labor import (
    calculate_labor_amount,
    calculate_work_amount,
    create_labor_payment,
    get_week_end,
    get_week_start,
    summarize_week,
    work_formula_text,
)
from buildledger.calculations.materials import (
    MaterialQuantities,
    calculate_materials,
    create_material_estimate,
    estimate_material_cost,
)
from buildledger.calculations.tax import (
    IncomeTaxResult,
    SlabTax,
    TaxInvoice,
    TaxSummary,
    calculate_income_tax,
    calculate_investment_rebate,
    calculate_price_with_vat,
    calculate_price_without_vat,
    calculate_tax_summary,
    calculate_vat,
    extract_vat_from_inclusive,
    generate_tax_invoice,
    get_current_tax_year,
)

__all__ = [
    # Labor
    "calculate_labor_amount",
    "calculate_work_amount",
    "create_labor_payment",
    "get_week_end",
    "get_week_start",
    "summarize_week",
    "work_formula_text",
    # Materials
    "MaterialQuantities",
    "calculate_materials",
    "create_material_estimate",
    "estimate_material_cost",
    # Tax
    "IncomeTaxResult",
    "SlabTax",
    "TaxInvoice",
    "TaxSummary",
    "calculate_income_tax",
    "calculate_investment_rebate",
    "calculate_price_with_vat",
    "calculate_price_without_vat",
    "calculate_tax_summary",
    "calculate_vat",
    "extract_vat_from_inclusive",
    "generate_tax_invoice",
    "get_current_tax_year",
]
