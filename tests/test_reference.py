"""Tests for the read-only reference tables."""

import pytest

from pydantic import ValidationError

from buildledger.reference import (
    CURRENCIES,
    DEFAULT_PLUGIN_IDS,
    EXPENSE_CATEGORIES,
    INCOME_CATEGORIES,
    INCOME_TAX_SLABS,
    LABOR_RATES,
    MATERIAL_PRICES,
    QUICK_EXPENSES,
    VAT_RATES,
    calculate_material_cost,
    convert_currency,
    get_all_categories,
    get_all_price_categories,
    get_category,
    get_currency,
    get_default_plugins,
    get_material_vat_rate,
    get_price_category,
    get_price_item,
    get_subcategory,
    get_vat_category,
    search_price_items,
)


class TestCategories:
    """Tests for expense and income categories."""

    def test_lookup(self):
        category = get_category("materials")
        assert category.name == "Materials"
        assert category.name_bn == "নির্মাণ সামগ্রী"

    def test_unknown_category(self):
        assert get_category("nope") is None

    def test_subcategory_lookup(self):
        assert get_subcategory("materials", "mat-cement").name == "Cement"
        assert get_subcategory("materials", "lab-mason") is None
        assert get_subcategory("nope", "mat-cement") is None

    def test_all_categories_expense_first(self):
        refs = get_all_categories()
        assert len(refs) == len(EXPENSE_CATEGORIES) + len(INCOME_CATEGORIES)
        assert refs[0].type == "expense"
        assert refs[-1].type == "income"

    def test_quick_expenses_point_at_real_categories(self):
        for preset in QUICK_EXPENSES:
            assert get_subcategory(preset.category_id, preset.subcategory_id) is not None

    def test_tables_are_frozen(self):
        with pytest.raises(ValidationError):
            EXPENSE_CATEGORIES[0].name = "Changed"


class TestPriceList:
    """Tests for construction prices."""

    def test_all_categories(self):
        assert len(get_all_price_categories()) == len(MATERIAL_PRICES) + len(LABOR_RATES)

    def test_item_lookup(self):
        item = get_price_item("cement-1")
        assert item.price == 520
        assert item.unit == "bag"

    def test_category_lookup(self):
        assert get_price_category("steel").name == "Steel & Rod"
        assert get_price_category("nope") is None

    def test_search_english_case_insensitive(self):
        ids = {item.id for item in search_price_items("PORTLAND")}
        assert {"cement-1", "cement-2"} <= ids

    def test_search_bengali(self):
        ids = {item.id for item in search_price_items("বালি")}
        assert "sand-1" in ids

    def test_material_cost_adds_vat(self):
        cost = calculate_material_cost([("cement-1", 10), ("brick-1", 100)])
        assert cost.subtotal == 6400
        assert cost.vat == 960
        assert cost.total == 7360
        assert len(cost.details) == 2

    def test_material_cost_skips_unknown_items(self):
        cost = calculate_material_cost([("cement-1", 1), ("missing", 50)])
        assert cost.subtotal == 520
        assert len(cost.details) == 1


class TestTaxTables:
    """Tests for VAT and income-tax tables."""

    def test_vat_rates(self):
        assert VAT_RATES.STANDARD == 15
        assert VAT_RATES.REDUCED == 5
        assert VAT_RATES.EXEMPT is None

    def test_vat_category(self):
        assert get_vat_category("reduced").rate == 5
        assert get_vat_category("exempt").rate is None

    def test_material_vat_rate(self):
        assert get_material_vat_rate("Bricks") == 5
        assert get_material_vat_rate("unobtainium") == 15

    def test_six_slabs_last_unbounded(self):
        assert len(INCOME_TAX_SLABS) == 6
        assert INCOME_TAX_SLABS[0].rate == 0
        assert INCOME_TAX_SLABS[-1].max is None


class TestCurrency:
    """Tests for the currency table."""

    def test_bdt_has_no_decimals(self):
        assert get_currency("BDT").decimal_places == 0
        assert get_currency("BDT").symbol == "৳"

    def test_unknown_code_falls_back_to_bdt(self):
        assert get_currency("XXX").code == "BDT"

    def test_ten_currencies(self):
        assert len(CURRENCIES) == 10

    def test_convert_same_currency(self):
        assert convert_currency(123.456, "USD", "USD") == 123.456

    def test_convert_through_bdt(self):
        assert convert_currency(10000, "BDT", "USD") == 83.0
        assert convert_currency(1000, "BDT", "INR") == 750

    def test_convert_unknown_rate_is_one(self):
        assert convert_currency(100, "XXX", "BDT") == 100


class TestPlugins:
    """Tests for the default plugin catalog."""

    def test_defaults_are_uninstalled(self):
        plugins = get_default_plugins()
        assert [p.id for p in plugins] == list(DEFAULT_PLUGIN_IDS)
        assert not any(p.is_installed or p.is_enabled for p in plugins)

    def test_defaults_are_fresh_copies(self):
        first = get_default_plugins()
        first[0].is_installed = True
        assert get_default_plugins()[0].is_installed is False


if __name__ == "__main__":
    pytest.main([__file__, "-v"])
