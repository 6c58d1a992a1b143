"""Tests for tax, material and payroll arithmetic."""

import pytest
from datetime import date

from buildledger.calculations import (
    calculate_income_tax,
    calculate_investment_rebate,
    calculate_labor_amount,
    calculate_materials,
    calculate_price_with_vat,
    calculate_price_without_vat,
    calculate_tax_summary,
    calculate_vat,
    calculate_work_amount,
    create_labor_payment,
    create_material_estimate,
    estimate_material_cost,
    extract_vat_from_inclusive,
    generate_tax_invoice,
    get_current_tax_year,
    get_week_end,
    get_week_start,
    summarize_week,
    work_formula_text,
)
from buildledger.models.records import Worker


class TestVAT:
    """Tests for VAT arithmetic."""

    def test_standard_vat(self):
        assert calculate_vat(1000) == 150
        assert calculate_price_with_vat(1000) == 1150

    def test_reduced_vat(self):
        assert calculate_vat(1000, 5) == 50

    @pytest.mark.parametrize("amount,rate", [(1000, 15), (333.33, 5), (0.01, 15), (98765, 0)])
    def test_price_without_vat_inverts(self, amount, rate):
        assert calculate_price_without_vat(calculate_price_with_vat(amount, rate), rate) == pytest.approx(amount)

    def test_extract_from_inclusive(self):
        base, vat = extract_vat_from_inclusive(1150)
        assert base == pytest.approx(1000)
        assert vat == pytest.approx(150)


class TestIncomeTax:
    """Tests for the progressive slab walk."""

    def test_tax_free_income(self):
        result = calculate_income_tax(350000)
        assert result.total_tax == 0
        assert len(result.tax_breakdown) == 1
        assert result.tax_breakdown[0].slab.rate == 0

    def test_second_slab(self):
        result = calculate_income_tax(450000)
        assert result.total_tax == 5000
        assert result.tax_breakdown[1].taxable_amount == 100000

    def test_every_slab_contributes(self):
        result = calculate_income_tax(1600000)
        assert len(result.tax_breakdown) == 6
        assert all(s.taxable_amount > 0 for s in result.tax_breakdown)
        assert result.total_tax == 187500
        assert sum(s.taxable_amount for s in result.tax_breakdown) == 1600000

    def test_boundary_stays_in_lower_slab(self):
        result = calculate_income_tax(750000)
        assert len(result.tax_breakdown) == 3
        assert result.total_tax == 35000

    @pytest.mark.parametrize("income", [0, -5000])
    def test_no_income_no_tax(self, income):
        result = calculate_income_tax(income)
        assert result.total_tax == 0
        assert result.effective_rate == 0
        assert result.tax_breakdown == []

    def test_effective_rate(self):
        result = calculate_income_tax(450000)
        assert result.effective_rate == pytest.approx(5000 / 450000 * 100)


class TestRebateAndSummary:
    """Tests for investment rebate and the annual summary."""

    def test_rebate(self):
        assert calculate_investment_rebate(100000) == (100000, 15000)

    def test_rebate_caps(self):
        eligible, rebate = calculate_investment_rebate(50_000_000)
        assert eligible == 10_000_000
        assert rebate == 1_000_000

    def test_summary(self):
        summary = calculate_tax_summary(500000, deductions=50000, investment_amount=20000)
        assert summary.taxable_income == 450000
        assert summary.tax_before_rebate == 5000
        assert summary.investment_rebate == 3000
        assert summary.final_tax == 2000
        assert summary.monthly_tax == pytest.approx(2000 / 12)

    def test_summary_never_negative(self):
        summary = calculate_tax_summary(400000, investment_amount=1_000_000)
        assert summary.final_tax == 0

    def test_deductions_above_income(self):
        assert calculate_tax_summary(100000, deductions=200000).taxable_income == 0


class TestTaxYearAndInvoice:
    """Tests for the fiscal year and bare tax invoices."""

    def test_tax_year_after_july(self):
        assert get_current_tax_year(date(2025, 7, 1)) == ("2025-07-01", "2026-06-30")

    def test_tax_year_before_july(self):
        assert get_current_tax_year(date(2025, 6, 30)) == ("2024-07-01", "2025-06-30")

    def test_tax_invoice_accepts_both_key_styles(self):
        invoice = generate_tax_invoice([
            {"description": "Cement", "quantity": 10, "unit": "bag", "unit_price": 520},
            {"description": "Bricks", "quantity": 1000, "unitPrice": 12},
        ])
        assert invoice.subtotal == 17200
        assert invoice.vat_amount == 2580
        assert invoice.total_amount == 19780


class TestMaterials:
    """Tests for material estimation."""

    def test_one_thousand_square_feet(self):
        q = calculate_materials(1000, 1)
        assert (q.cement, q.sand, q.bricks, q.steel, q.aggregate) == (400, 816, 8000, 4000, 608)

    def test_floors_multiply(self):
        assert calculate_materials(500, 2) == calculate_materials(1000, 1)

    def test_rounds_up(self):
        q = calculate_materials(999.5)
        assert q.sand == 816
        assert q.cement == 400

    def test_estimate_record(self):
        estimate = create_material_estimate("Mirpur house", 1200, 2)
        assert estimate.floors == 2
        assert estimate.cement == 960
        assert estimate.id

    def test_estimate_cost(self):
        cost = estimate_material_cost(calculate_materials(1000))
        expected = 400 * 520 + 816 * 45 + 8000 * 12 + 4000 * 95 + 608 * 85
        assert cost.subtotal == expected
        assert cost.total == pytest.approx(expected * 1.15)


class TestLabor:
    """Tests for weekly payroll helpers."""

    def test_week_start_is_monday(self):
        assert get_week_start("2025-01-09") == "2025-01-06"
        assert get_week_start(date(2025, 1, 6)) == "2025-01-06"
        assert get_week_start("2025-01-12") == "2025-01-06"

    def test_week_end(self):
        assert get_week_end("2025-01-06") == "2025-01-12"

    def test_labor_amount(self):
        assert calculate_labor_amount(40, 100, 4) == 4600
        assert calculate_labor_amount(40, 100, 4, 200) == 4800

    def test_work_amount_prefers_days_hours_rate(self):
        assert calculate_work_amount(days=5, hours_per_day=8, hourly_rate=100, quantity=2, unit_price=10) == 4000

    def test_work_amount_quantity_price(self):
        assert calculate_work_amount(quantity=3, unit_price=250) == 750

    def test_formula_text(self):
        assert work_formula_text(5, 8, 100) == "5×8×100"
        assert work_formula_text(None, 8, 100) == ""

    def test_create_payment_snaps_to_monday(self):
        worker = Worker(name="Karim", hourly_rate=100)
        payment = create_labor_payment(worker, "2025-01-08", days_worked=5, regular_hours=40, overtime_hours=2)
        assert payment.week_start == date(2025, 1, 6)
        assert payment.total_amount == 4300
        assert payment.worker_id == worker.id

    def test_summarize_week(self):
        worker = Worker(name="Karim", hourly_rate=100)
        paid = create_labor_payment(worker, "2025-01-06", 5, 40, is_paid=True)
        unpaid = create_labor_payment(worker, "2025-01-06", 2, 16)
        other_week = create_labor_payment(worker, "2025-01-13", 5, 40)

        summary = summarize_week([paid, unpaid, other_week], "2025-01-10")
        assert summary.total_payroll == 5600
        assert summary.paid_amount == 4000
        assert summary.unpaid_amount == 1600
        assert summary.week_end == date(2025, 1, 12)
        assert len(summary.payments) == 2


if __name__ == "__main__":
    pytest.main([__file__, "-v"])
