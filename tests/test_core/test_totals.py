"""Tests for VAT breakdown and totals recalculation."""

from datetime import date
from decimal import Decimal

from einvoice.core.models import AllowanceCharge, Invoice, InvoiceLine, TradeTax
from einvoice.core.totals import calculate_tax, round_half_up
from einvoice.validators.calculation import CalculationValidator


def make_line(line_id: str, category: str, rate: str, total: str) -> InvoiceLine:
    return InvoiceLine(
        line_id=line_id,
        item_name=f"Item {line_id}",
        billed_quantity=Decimal("1"),
        billed_quantity_unit="C62",
        net_price=Decimal(total),
        tax_category_code=category,
        tax_rate=Decimal(rate),
        total=Decimal(total),
    )


class TestRounding:
    """Commercial rounding of amounts."""

    def test_half_rounds_up(self):
        """Test that a half cent rounds away from zero."""
        assert round_half_up(Decimal("2.345")) == Decimal("2.35")
        assert round_half_up(Decimal("0.005")) == Decimal("0.01")

    def test_below_half_rounds_down(self):
        assert round_half_up(Decimal("2.344")) == Decimal("2.34")

    def test_calculate_tax(self):
        """Test basis x rate / 100 rounded to cents."""
        assert calculate_tax(Decimal("280.00"), Decimal("20")) == Decimal("56.00")
        assert calculate_tax(Decimal("10.05"), Decimal("19")) == Decimal("1.91")


class TestUpdateApplicableTradeTax:
    """Test cases for rebuilding the VAT breakdown."""

    def test_rebuild_matches_sample(self, sample_invoice):
        """Test that the rebuilt breakdown equals the hand written one."""
        sample_invoice.trade_taxes = []
        sample_invoice.update_applicable_trade_tax()

        assert len(sample_invoice.trade_taxes) == 1
        tax = sample_invoice.trade_taxes[0]
        assert tax.category_code == "S"
        assert tax.percent == Decimal("20")
        assert tax.basis_amount == Decimal("280.00")
        assert tax.calculated_amount == Decimal("56.00")

    def test_same_rate_different_categories_stay_apart(self):
        """Test that (S, 19) and (AE, 19) produce two breakdown entries."""
        invoice = Invoice(
            lines=[
                make_line("1", "S", "19", "1000.00"),
                make_line("2", "AE", "19", "500.00"),
            ]
        )
        invoice.update_applicable_trade_tax()

        keys = [(tax.category_code, tax.basis_amount) for tax in invoice.trade_taxes]
        assert keys == [("S", Decimal("1000.00")), ("AE", Decimal("500.00"))]

    def test_rates_compared_by_value(self):
        """Test that 19 and 19.00 fall into one group."""
        invoice = Invoice(
            lines=[
                make_line("1", "S", "19", "100.00"),
                make_line("2", "S", "19.00", "50.00"),
            ]
        )
        invoice.update_applicable_trade_tax()

        assert len(invoice.trade_taxes) == 1
        assert invoice.trade_taxes[0].basis_amount == Decimal("150.00")
        assert invoice.trade_taxes[0].calculated_amount == Decimal("28.50")

    def test_allowance_without_lines_opens_group(self):
        """Test that an allowance in a category no line uses gets its own entry."""
        invoice = Invoice(
            lines=[make_line("1", "S", "19", "100.00")],
            allowance_charges=[
                AllowanceCharge(
                    actual_amount=Decimal("10.00"),
                    reason="Bonus",
                    tax_category_code="S",
                    tax_rate=Decimal("7"),
                )
            ],
        )
        invoice.update_applicable_trade_tax()

        assert len(invoice.trade_taxes) == 2
        assert invoice.trade_taxes[1].percent == Decimal("7")
        assert invoice.trade_taxes[1].basis_amount == Decimal("-10.00")

    def test_exemption_reason_for_zero_rate(self):
        """Test that zero rated groups pick up their exemption reason."""
        invoice = Invoice(lines=[make_line("1", "E", "0", "100.00")])
        invoice.update_applicable_trade_tax({"E": "Exempt under Article 132"})

        assert invoice.trade_taxes[0].exemption_reason == "Exempt under Article 132"
        assert invoice.trade_taxes[0].calculated_amount == Decimal("0.00")

    def test_existing_breakdown_details_survive_rebuild(self):
        """Test that exemption reason, code, BT-7 and BT-8 stay with their (category, rate) group."""
        invoice = Invoice(
            lines=[
                make_line("1", "AE", "0", "100.00"),
                make_line("2", "S", "19", "50.00"),
            ],
            trade_taxes=[
                TradeTax(
                    category_code="AE",
                    percent=Decimal("0.00"),
                    basis_amount=Decimal("999.00"),
                    exemption_reason="Reverse charge",
                    exemption_reason_code="VATEX-EU-AE",
                    tax_point_date=date(2024, 1, 31),
                    due_date_type_code="5",
                ),
            ],
        )
        invoice.update_applicable_trade_tax()

        reverse_charge, standard = invoice.trade_taxes
        assert reverse_charge.basis_amount == Decimal("100.00")
        assert reverse_charge.exemption_reason == "Reverse charge"
        assert reverse_charge.exemption_reason_code == "VATEX-EU-AE"
        assert reverse_charge.tax_point_date == date(2024, 1, 31)
        assert reverse_charge.due_date_type_code == "5"
        assert standard.exemption_reason == ""
        assert standard.tax_point_date is None

    def test_explicit_exemption_reason_wins(self):
        invoice = Invoice(
            lines=[make_line("1", "E", "0", "100.00")],
            trade_taxes=[TradeTax(category_code="E", exemption_reason="Old reason")],
        )
        invoice.update_applicable_trade_tax({"E": "Exempt under Article 132"})

        assert invoice.trade_taxes[0].exemption_reason == "Exempt under Article 132"


class TestUpdateTotals:
    """Test cases for document totals."""

    def setup_method(self):
        """Setup test fixtures."""
        self.validator = CalculationValidator()

    def test_totals_from_scratch(self, sample_invoice):
        """Test that recalculated totals equal the sample's totals."""
        for name in ("line_total", "allowance_total", "charge_total", "tax_basis_total",
                     "tax_total", "grand_total", "due_payable_amount"):
            setattr(sample_invoice, name, Decimal("0"))

        sample_invoice.update_totals()

        assert sample_invoice.line_total == Decimal("285.00")
        assert sample_invoice.allowance_total == Decimal("10.00")
        assert sample_invoice.charge_total == Decimal("5.00")
        assert sample_invoice.tax_basis_total == Decimal("280.00")
        assert sample_invoice.tax_total == Decimal("56.00")
        assert sample_invoice.grand_total == Decimal("336.00")
        assert sample_invoice.due_payable_amount == Decimal("336.00")

    def test_prepaid_and_rounding_are_inputs(self, sample_invoice):
        """Test that the amount due honours prepaid and rounding amounts."""
        sample_invoice.total_prepaid = Decimal("100.00")
        sample_invoice.rounding_amount = Decimal("0.40")

        sample_invoice.update_totals()

        assert sample_invoice.due_payable_amount == Decimal("236.40")

    def test_sets_presence_flags(self):
        invoice = Invoice()
        invoice.update_totals()

        assert invoice.line_total_present
        assert invoice.tax_basis_total_present
        assert invoice.grand_total_present
        assert invoice.due_payable_amount_present

    def test_recalculated_invoice_passes_arithmetic_rules(self):
        """Test that BR-CO-10 to BR-CO-16 hold after recalculation."""
        invoice = Invoice(
            lines=[
                make_line("1", "S", "19", "33.33"),
                make_line("2", "S", "7", "12.10"),
                make_line("3", "Z", "0", "8.00"),
            ],
            allowance_charges=[
                AllowanceCharge(
                    charge_indicator=True,
                    actual_amount=Decimal("4.95"),
                    reason="Packaging",
                    tax_category_code="S",
                    tax_rate=Decimal("19"),
                )
            ],
            total_prepaid=Decimal("5.00"),
        )
        invoice.update_applicable_trade_tax()
        invoice.update_totals()

        result = self.validator.validate(invoice)

        assert result.violations == []
