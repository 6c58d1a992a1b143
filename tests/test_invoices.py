"""Tests for invoice construction, payment status and export."""

import re

import pytest
from datetime import date

from buildledger.invoices import (
    DEFAULT_TERMS,
    INVOICE_TEMPLATES,
    add_invoice_item,
    create_invoice,
    create_invoice_from_template,
    export_invoice_to_csv,
    format_invoice,
    generate_invoice_number,
    generate_invoice_summary,
    is_overdue,
    recalculate_invoice,
    remove_invoice_item,
    update_invoice_status,
)
from buildledger.models.invoice import InvoiceItemInput, InvoiceStatus, Party

TODAY = date(2025, 1, 15)


@pytest.fixture
def seller():
    return Party(name="Rahman Builders", address="Mirpur, Dhaka", phone="01711000000", bin="000123456-0101")


@pytest.fixture
def buyer():
    return Party(name='Karim "KB" Ahmed', address="Uttara, Dhaka")


@pytest.fixture
def invoice(seller, buyer):
    return create_invoice(
        seller,
        buyer,
        [
            {"description": "Cement", "quantity": 100, "unit": "bags", "unitPrice": 520},
            InvoiceItemInput(description="Masonry Labor", quantity=1, unit="job", unit_price=48000),
        ],
        discount_percent=10,
        due_date="2025-02-14",
        today=TODAY,
    )


def assert_totals_consistent(invoice):
    assert invoice.subtotal == pytest.approx(sum(i.total_price for i in invoice.items))
    assert invoice.total_amount == pytest.approx(
        invoice.subtotal - invoice.discount_amount + invoice.vat_amount
    )
    assert invoice.balance_due == pytest.approx(invoice.total_amount - invoice.amount_paid)


class TestCreateInvoice:
    """Tests for building invoices."""

    def test_totals(self, invoice):
        assert invoice.subtotal == 100000
        assert invoice.discount_amount == 10000
        assert invoice.vat_amount == 13500
        assert invoice.total_amount == 103500
        assert invoice.balance_due == 103500
        assert invoice.status == InvoiceStatus.DRAFT
        assert_totals_consistent(invoice)

    def test_defaults(self, invoice):
        assert invoice.terms == DEFAULT_TERMS
        assert invoice.date == TODAY
        assert invoice.currency == "BDT"

    def test_invoice_number_format(self):
        assert re.fullmatch(r"INV-2501-\d{4}", generate_invoice_number(TODAY))

    def test_items_get_ids(self, invoice):
        ids = [item.id for item in invoice.items]
        assert all(ids)
        assert len(set(ids)) == 2


class TestItemChanges:
    """Tests for item add/remove recalculation."""

    def test_add_item(self, invoice):
        updated = add_invoice_item(invoice, {"description": "Sand", "quantity": 200, "unit_price": 50})
        assert updated.subtotal == 110000
        assert len(invoice.items) == 2
        assert_totals_consistent(updated)

    def test_remove_item(self, invoice):
        updated = remove_invoice_item(invoice, invoice.items[1].id)
        assert updated.subtotal == 52000
        assert_totals_consistent(updated)

    def test_recalculate_keeps_payment(self, invoice):
        paid = update_invoice_status(invoice, InvoiceStatus.SENT, amount_paid=3500)
        updated = recalculate_invoice(remove_invoice_item(paid, paid.items[0].id))
        assert updated.amount_paid == 3500
        assert_totals_consistent(updated)

    def test_item_supplied_total_is_ignored(self, invoice):
        updated = add_invoice_item(invoice, {"description": "X", "quantity": 2, "unitPrice": 10, "totalPrice": 999})
        assert updated.items[-1].total_price == 20


class TestStatus:
    """Tests for payment-driven status changes."""

    def test_full_payment_is_paid(self, invoice):
        updated = update_invoice_status(invoice, InvoiceStatus.SENT, amount_paid=invoice.total_amount)
        assert updated.status == InvoiceStatus.PAID
        assert updated.balance_due == 0

    def test_partial_payment_is_sent(self, invoice):
        updated = update_invoice_status(invoice, InvoiceStatus.CANCELLED, amount_paid=50000)
        assert updated.status == InvoiceStatus.SENT
        assert updated.balance_due == 53500

    def test_overpayment_clamps_balance(self, invoice):
        updated = update_invoice_status(invoice, InvoiceStatus.SENT, amount_paid=200000)
        assert updated.balance_due == 0
        assert updated.status == InvoiceStatus.PAID

    def test_status_only(self, invoice):
        updated = update_invoice_status(invoice, InvoiceStatus.OVERDUE)
        assert updated.status == InvoiceStatus.OVERDUE
        assert updated.amount_paid == 0

    def test_is_overdue(self, invoice):
        assert not is_overdue(invoice, date(2025, 2, 14))
        assert is_overdue(invoice, date(2025, 2, 15))
        paid = update_invoice_status(invoice, InvoiceStatus.PAID, amount_paid=invoice.total_amount)
        assert not is_overdue(paid, date(2025, 3, 1))


class TestSummaryAndFormatting:
    """Tests for summaries, display and CSV."""

    def test_summary(self, invoice):
        paid = update_invoice_status(invoice, InvoiceStatus.SENT, amount_paid=invoice.total_amount)
        summary = generate_invoice_summary([invoice, paid], today=date(2025, 3, 1))
        assert summary.invoice_count == 2
        assert summary.paid_count == 1
        assert summary.overdue_count == 1
        assert summary.total_invoiced == 207000
        assert summary.total_outstanding == 103500
        assert summary.total_overdue == 103500

    def test_format(self, invoice):
        formatted = format_invoice(invoice)
        assert formatted.formatted_total == "৳1,03,500"

    def test_csv_export(self, invoice):
        text = export_invoice_to_csv(invoice)
        lines = text.splitlines()
        assert lines[0] == "Invoice Details"
        assert "Date,15/01/2025" in lines
        assert "Due Date,14/02/2025" in lines
        assert 'Name,"Karim ""KB"" Ahmed"' in lines
        assert "Phone,N/A" in lines
        assert '"Cement",100,"bags",৳520,৳52000' in lines
        assert "Total,৳103500" in lines


class TestTemplates:
    """Tests for invoice templates."""

    def test_four_templates(self):
        assert len(INVOICE_TEMPLATES) == 4

    def test_labor_only_has_no_vat(self, seller, buyer):
        invoice = create_invoice_from_template("labor-only", seller, buyer, today=TODAY)
        assert invoice.vat_rate == 0
        assert invoice.vat_amount == 0
        assert invoice.subtotal == 30 * 1200 + 30 * 700 + 15 * 1100

    def test_unknown_template(self, seller, buyer):
        assert create_invoice_from_template("nope", seller, buyer) is None


if __name__ == "__main__":
    pytest.main([__file__, "-v"])
