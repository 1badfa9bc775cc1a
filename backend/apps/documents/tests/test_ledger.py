from __future__ import annotations

import random
from decimal import Decimal

from django.test import SimpleTestCase

from apps.documents import ledger


class CalculateLineTests(SimpleTestCase):
    def test_discount_then_tax_on_net(self):
        amounts = ledger.calculate_line(Decimal("10"), Decimal("100"), Decimal("10"), Decimal("5"))
        self.assertEqual(amounts.gross_amount, Decimal("1000.00"))
        self.assertEqual(amounts.discount_amount, Decimal("100.00"))
        self.assertEqual(amounts.tax_amount, Decimal("45.00"))
        self.assertEqual(amounts.line_amount, Decimal("945.00"))

    def test_missing_rates_default_to_zero(self):
        amounts = ledger.calculate_line(5, "50", None, None)
        self.assertEqual(amounts.discount_amount, Decimal("0.00"))
        self.assertEqual(amounts.tax_amount, Decimal("0.00"))
        self.assertEqual(amounts.line_amount, Decimal("250.00"))

    def test_rounds_half_up_to_two_places(self):
        amounts = ledger.calculate_line(Decimal("1"), Decimal("0.05"), Decimal("50"), Decimal("0"))
        # 0.025 rounds up
        self.assertEqual(amounts.discount_amount, Decimal("0.03"))
        self.assertEqual(amounts.line_amount, Decimal("0.02"))

    def test_fractional_quantity(self):
        amounts = ledger.calculate_line(Decimal("2.5"), Decimal("19.99"), Decimal("0"), Decimal("18"))
        self.assertEqual(amounts.gross_amount, Decimal("49.98"))
        self.assertEqual(amounts.tax_amount, Decimal("9.00"))
        self.assertEqual(amounts.line_amount, Decimal("58.98"))


class SummariseTests(SimpleTestCase):
    def test_order_scenario_totals(self):
        lines = [
            ledger.calculate_line(10, 100, 10, 5),
            ledger.calculate_line(5, 50),
        ]
        totals = ledger.summarise(lines)
        self.assertEqual(totals.subtotal, Decimal("1250.00"))
        self.assertEqual(totals.discount_amount, Decimal("100.00"))
        self.assertEqual(totals.tax_amount, Decimal("45.00"))
        self.assertEqual(totals.shipping_charges, Decimal("0.00"))
        self.assertEqual(totals.total_amount, Decimal("1195.00"))

    def test_shipping_is_added_to_total(self):
        totals = ledger.summarise([ledger.calculate_line(1, 100)], Decimal("25.50"))
        self.assertEqual(totals.total_amount, Decimal("125.50"))

    def test_empty_document(self):
        totals = ledger.summarise([])
        self.assertEqual(totals.as_dict(), {
            "subtotal": Decimal("0.00"),
            "discount_amount": Decimal("0.00"),
            "tax_amount": Decimal("0.00"),
            "shipping_charges": Decimal("0.00"),
            "total_amount": Decimal("0.00"),
        })

    def test_balance_due(self):
        self.assertEqual(ledger.balance_due(Decimal("1195"), Decimal("195")), Decimal("1000.00"))
        self.assertEqual(ledger.balance_due(Decimal("100"), Decimal("100")), Decimal("0.00"))


class LedgerPropertyTests(SimpleTestCase):
    """Randomised checks over a fixed seed so failures reproduce."""

    iterations = 200

    def _random_line(self, rng):
        quantity = Decimal(rng.randint(1, 100_000)) / Decimal("1000")
        price = Decimal(rng.randint(0, 1_000_000)) / Decimal("100")
        discount = Decimal(rng.randint(0, 10_000)) / Decimal("100")
        tax = Decimal(rng.randint(0, 3_000)) / Decimal("100")
        return quantity, price, discount, tax

    def test_total_equals_subtotal_less_discount_plus_tax_plus_shipping(self):
        rng = random.Random(20240601)
        for _ in range(self.iterations):
            count = rng.randint(1, 6)
            lines = [ledger.calculate_line(*self._random_line(rng)) for _ in range(count)]
            shipping = Decimal(rng.randint(0, 50_000)) / Decimal("100")
            totals = ledger.summarise(lines, shipping)
            with self.subTest(totals=totals):
                self.assertEqual(
                    totals.total_amount,
                    totals.subtotal - totals.discount_amount + totals.tax_amount + totals.shipping_charges,
                )
                self.assertEqual(totals.subtotal, sum((line.gross_amount for line in lines), Decimal("0")))

    def test_every_amount_has_two_decimal_places(self):
        rng = random.Random(7)
        for _ in range(self.iterations):
            amounts = ledger.calculate_line(*self._random_line(rng))
            with self.subTest(amounts=amounts):
                for value in (amounts.gross_amount, amounts.discount_amount, amounts.tax_amount, amounts.line_amount):
                    self.assertEqual(value, value.quantize(Decimal("0.01")))
                    self.assertEqual(value.as_tuple().exponent, -2)

    def test_calculation_is_deterministic(self):
        rng = random.Random(99)
        for _ in range(50):
            args = self._random_line(rng)
            self.assertEqual(ledger.calculate_line(*args), ledger.calculate_line(*args))

    def test_discount_never_exceeds_gross(self):
        rng = random.Random(3)
        for _ in range(self.iterations):
            amounts = ledger.calculate_line(*self._random_line(rng))
            with self.subTest(amounts=amounts):
                self.assertGreaterEqual(amounts.discount_amount, Decimal("0"))
                self.assertLessEqual(amounts.discount_amount, amounts.gross_amount + Decimal("0.01"))
