# backend/modules/payroll/tests/test_money.py

"""
Tests for GrossSalary, NetSalary and Deductions.
"""

from decimal import Decimal

import pytest

from modules.payroll.domain.money import Deductions, GrossSalary, NetSalary, validate_currency


class TestGrossSalary:
    def test_amount_is_rounded_to_cents(self):
        assert GrossSalary("1000.005").amount == Decimal("1000.01")

    @pytest.mark.parametrize("amount", [0, -5, "-0.01"])
    def test_must_be_positive(self, amount):
        with pytest.raises(ValueError, match="positive"):
            GrossSalary(amount)

    def test_rejects_unsupported_currency(self):
        with pytest.raises(ValueError, match="Invalid currency: ARS"):
            GrossSalary(100, "ARS")

    def test_currency_is_normalized(self):
        assert validate_currency(" eur ") == "EUR"

    @pytest.mark.parametrize(
        "left,right,total",
        [("100.10", "0.90", "101.00"), ("2500", "2500", "5000.00"), ("0.01", "0.02", "0.03")],
    )
    def test_add_preserves_currency(self, left, right, total):
        result = GrossSalary(left, "EUR").add(GrossSalary(right, "EUR"))
        assert result.amount == Decimal(total)
        assert result.currency == "EUR"

    def test_subtract(self):
        result = GrossSalary(5000, "GBP").subtract(GrossSalary(1250.5, "GBP"))
        assert result == GrossSalary("3749.50", "GBP")

    def test_subtract_to_zero_is_invalid(self):
        with pytest.raises(ValueError):
            GrossSalary(100).subtract(GrossSalary(100))

    @pytest.mark.parametrize("operation", ["add", "subtract", "is_greater_than", "is_less_than"])
    def test_mixed_currencies_raise(self, operation):
        with pytest.raises(ValueError, match="different currencies"):
            getattr(GrossSalary(100, "USD"), operation)(GrossSalary(50, "EUR"))

    def test_multiply(self):
        assert GrossSalary(1000).multiply("1.5").amount == Decimal("1500.00")
        with pytest.raises(ValueError):
            GrossSalary(1000).multiply(0)

    def test_comparisons(self):
        assert GrossSalary(200).is_greater_than(GrossSalary(100))
        assert GrossSalary(100).is_less_than(GrossSalary(200))

    def test_operations_return_new_values(self):
        original = GrossSalary(100)
        original.add(GrossSalary(50))
        assert original.amount == Decimal("100.00")

    def test_format(self):
        assert GrossSalary(1234.5, "USD").format() == "1234.50 USD"


class TestNetSalary:
    def test_must_be_positive(self):
        with pytest.raises(ValueError):
            NetSalary(0)
        assert NetSalary("10.499").amount == Decimal("10.50")


class TestDeductions:
    def test_total(self):
        deductions = Deductions("750", "400", "200.55")
        assert deductions.total == Decimal("1350.55")

    @pytest.mark.parametrize(
        "field,label",
        [("taxes", "Taxes"), ("social_security", "Social security"), ("health_insurance", "Health insurance")],
    )
    def test_negative_amounts_are_rejected(self, field, label):
        with pytest.raises(ValueError, match=f"{label} cannot be negative"):
            Deductions(**{field: Decimal("-1")})

    def test_none_is_zero(self):
        assert Deductions.none("EUR").total == Decimal("0.00")

    def test_from_rates(self):
        deductions = Deductions.from_rates(GrossSalary(4000), "0.20", "0.10", "0.05")
        assert deductions.taxes == Decimal("800.00")
        assert deductions.social_security == Decimal("400.00")
        assert deductions.health_insurance == Decimal("200.00")

    def test_from_dict_defaults_missing_values(self):
        deductions = Deductions.from_dict({"taxes": "100"}, currency="CAD")
        assert deductions.total == Decimal("100.00")
        assert deductions.currency == "CAD"

    def test_add_and_percentage(self):
        combined = Deductions(100, 50, 25).add(Deductions(100, 50, 25))
        assert combined.total == Decimal("350.00")
        assert combined.percentage_of(GrossSalary(1000)) == Decimal("35.00")

    def test_add_requires_same_currency(self):
        with pytest.raises(ValueError):
            Deductions(currency="USD").add(Deductions(currency="EUR"))
