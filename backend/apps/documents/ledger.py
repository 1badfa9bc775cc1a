"""
Line and document arithmetic for commercial documents.

Everything here is pure: no database access, ``Decimal`` in and out. Each line
rounds its own discount, tax and amount to two places before the document sums
them, so a stored line always reproduces from its inputs.
"""
from __future__ import annotations

from dataclasses import dataclass
from decimal import ROUND_HALF_UP, Decimal
from typing import Iterable

ZERO = Decimal("0.00")
HUNDRED = Decimal("100")
TWO_PLACES = Decimal("0.01")


def to_decimal(value) -> Decimal:
    if value is None or value == "":
        return Decimal("0")
    if isinstance(value, Decimal):
        return value
    return Decimal(str(value))


def round2(value) -> Decimal:
    return to_decimal(value).quantize(TWO_PLACES, rounding=ROUND_HALF_UP)


@dataclass(frozen=True)
class LineAmounts:
    gross_amount: Decimal
    discount_amount: Decimal
    tax_amount: Decimal
    line_amount: Decimal


@dataclass(frozen=True)
class DocumentTotals:
    subtotal: Decimal
    discount_amount: Decimal
    tax_amount: Decimal
    shipping_charges: Decimal
    total_amount: Decimal

    def as_dict(self) -> dict:
        return {
            "subtotal": self.subtotal,
            "discount_amount": self.discount_amount,
            "tax_amount": self.tax_amount,
            "shipping_charges": self.shipping_charges,
            "total_amount": self.total_amount,
        }


def calculate_line(quantity, price, discount_percent=None, tax_rate=None) -> LineAmounts:
    quantity = to_decimal(quantity)
    price = to_decimal(price)
    discount_percent = to_decimal(discount_percent)
    tax_rate = to_decimal(tax_rate)

    base = quantity * price
    discount_amount = round2(base * discount_percent / HUNDRED)
    net_amount = base - discount_amount
    tax_amount = round2(net_amount * tax_rate / HUNDRED)
    return LineAmounts(
        gross_amount=round2(base),
        discount_amount=discount_amount,
        tax_amount=tax_amount,
        line_amount=round2(net_amount + tax_amount),
    )


def document_total(subtotal, discount_amount, tax_amount, shipping_charges) -> Decimal:
    return round2(
        to_decimal(subtotal) - to_decimal(discount_amount) + to_decimal(tax_amount) + to_decimal(shipping_charges)
    )


def summarise(lines: Iterable[LineAmounts], shipping_charges=None) -> DocumentTotals:
    subtotal = ZERO
    discount = ZERO
    tax = ZERO
    for line in lines:
        subtotal += line.gross_amount
        discount += line.discount_amount
        tax += line.tax_amount
    shipping = round2(shipping_charges)
    return DocumentTotals(
        subtotal=round2(subtotal),
        discount_amount=round2(discount),
        tax_amount=round2(tax),
        shipping_charges=shipping,
        total_amount=document_total(subtotal, discount, tax, shipping),
    )


def balance_due(total_amount, amount_paid) -> Decimal:
    return round2(to_decimal(total_amount) - to_decimal(amount_paid))
