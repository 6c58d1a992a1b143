"""
Reference Data Package

Read-only lookup tables: expense categories, the construction price
list, Bangladesh tax tables, currencies and the plugin catalog.
"""

from buildledger.reference.categories import (
    CATEGORY_COLORS,
    EXPENSE_CATEGORIES,
    INCOME_CATEGORIES,
    QUICK_EXPENSES,
    CategoryRef,
    ExpenseCategory,
    QuickExpense,
    SubCategory,
    get_all_categories,
    get_category,
    get_subcategory,
)
from buildledger.reference.currency import (
    CURRENCIES,
    DEFAULT_CURRENCY_CODE,
    DEFAULT_CURRENCY_SETTINGS,
    EXCHANGE_RATES,
    Currency,
    convert_currency,
    get_all_currencies,
    get_currency,
)
from buildledger.reference.plugins import DEFAULT_PLUGIN_IDS, get_default_plugins
from buildledger.reference.pricelist import (
    LABOR_RATES,
    MATERIAL_PRICES,
    PRICE_LIST_DISCLAIMER,
    PRICE_LIST_UPDATED,
    MaterialCost,
    PriceCategory,
    PriceItem,
    calculate_material_cost,
    get_all_price_categories,
    get_price_category,
    get_price_item,
    search_price_items,
)
from buildledger.reference.tax_tables import (
    ADVANCE_TAX,
    AIT_RATES,
    CORPORATE_TAX_RATES,
    INCOME_TAX_SLABS,
    INVESTMENT_REBATE,
    MATERIAL_VAT_RATES,
    NBR_INFO,
    VAT_CATEGORIES,
    VAT_RATES,
    TaxSlab,
    VATCategory,
    get_material_vat_rate,
    get_vat_category,
)

__all__ = [
    # Categories
    "CATEGORY_COLORS",
    "EXPENSE_CATEGORIES",
    "INCOME_CATEGORIES",
    "QUICK_EXPENSES",
    "CategoryRef",
    "ExpenseCategory",
    "QuickExpense",
    "SubCategory",
    "get_all_categories",
    "get_category",
    "get_subcategory",
    # Currency
    "CURRENCIES",
    "DEFAULT_CURRENCY_CODE",
    "DEFAULT_CURRENCY_SETTINGS",
    "EXCHANGE_RATES",
    "Currency",
    "convert_currency",
    "get_all_currencies",
    "get_currency",
    # Plugins
    "DEFAULT_PLUGIN_IDS",
    "get_default_plugins",
    # Price list
    "LABOR_RATES",
    "MATERIAL_PRICES",
    "PRICE_LIST_DISCLAIMER",
    "PRICE_LIST_UPDATED",
    "MaterialCost",
    "PriceCategory",
    "PriceItem",
    "calculate_material_cost",
    "get_all_price_categories",
    "get_price_category",
    "get_price_item",
    "search_price_items",
    # Tax tables
    "ADVANCE_TAX",
    "AIT_RATES",
    "CORPORATE_TAX_RATES",
    "INCOME_TAX_SLABS",
    "INVESTMENT_REBATE",
    "MATERIAL_VAT_RATES",
    "NBR_INFO",
    "VAT_CATEGORIES",
    "VAT_RATES",
    "TaxSlab",
    "VATCategory",
    "get_material_vat_rate",
    "get_vat_category",
]
