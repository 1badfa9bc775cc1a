from __future__ import annotations

from decimal import Decimal

from django.conf import settings
from django.core.validators import MaxValueValidator, MinValueValidator
from django.db import models
from django.utils import timezone

from shared.models import CompanyAwareModel

from . import ledger


def default_currency() -> str:
    return getattr(settings, "DOCUMENTS_DEFAULT_CURRENCY", "INR")


class PaymentTerms(models.TextChoices):
    IMMEDIATE = "IMMEDIATE", "Immediate"
    NET_15 = "NET_15", "Net 15"
    NET_30 = "NET_30", "Net 30"
    NET_60 = "NET_60", "Net 60"
    NET_90 = "NET_90", "Net 90"
    ADVANCE = "ADVANCE", "Advance"
    COD = "COD", "Cash on Delivery"
    CREDIT = "CREDIT", "Credit"


class PaymentMethod(models.TextChoices):
    CASH = "CASH", "Cash"
    CHEQUE = "CHEQUE", "Cheque"
    BANK_TRANSFER = "BANK_TRANSFER", "Bank Transfer"
    UPI = "UPI", "UPI"
    CARD = "CARD", "Card"
    OTHER = "OTHER", "Other"


class Priority(models.TextChoices):
    URGENT = "URGENT", "Urgent"
    HIGH = "HIGH", "High"
    NORMAL = "NORMAL", "Normal"
    LOW = "LOW", "Low"


PERCENT_VALIDATORS = [MinValueValidator(Decimal("0")), MaxValueValidator(Decimal("100"))]


class DocumentSequence(models.Model):
    """Last number handed out per company and document prefix."""

    company = models.ForeignKey("companies.Company", on_delete=models.CASCADE, related_name="document_sequences")
    doc_type = models.CharField(max_length=16)
    current_value = models.PositiveIntegerField(default=0)
    updated_at = models.DateTimeField(auto_now=True)

    class Meta:
        db_table = "document_sequence"
        unique_together = ("company", "doc_type")

    def __str__(self) -> str:
        return f"{self.company_id}:{self.doc_type}={self.current_value}"


class CommercialDocument(CompanyAwareModel):
    """
    Header fields shared by orders, purchase orders, invoices and bills.

    Concrete models add ``status`` (with their own choices), the counterparty
    foreign key with its name/code snapshot, and any type-specific fields.
    """

    number = models.CharField(max_length=32, blank=True, db_index=True)
    location = models.ForeignKey(
        "companies.CompanyLocation",
        on_delete=models.PROTECT,
        null=True,
        blank=True,
        related_name="+",
    )
    issue_date = models.DateField(default=timezone.localdate)
    currency = models.CharField(max_length=3, default=default_currency)
    payment_terms = models.CharField(max_length=16, choices=PaymentTerms.choices, blank=True)
    reference_number = models.CharField(max_length=64, blank=True)
    subtotal = models.DecimalField(max_digits=20, decimal_places=2, default=Decimal("0"))
    discount_amount = models.DecimalField(max_digits=20, decimal_places=2, default=Decimal("0"))
    tax_amount = models.DecimalField(max_digits=20, decimal_places=2, default=Decimal("0"))
    shipping_charges = models.DecimalField(max_digits=20, decimal_places=2, default=Decimal("0"))
    total_amount = models.DecimalField(max_digits=20, decimal_places=2, default=Decimal("0"))
    notes = models.TextField(blank=True)
    is_active = models.BooleanField(default=True)

    TOTAL_FIELDS = ["subtotal", "discount_amount", "tax_amount", "shipping_charges", "total_amount"]

    class Meta:
        abstract = True
        ordering = ["-issue_date", "-created_at"]
        constraints = [
            models.UniqueConstraint(fields=["company", "number"], name="%(app_label)s_%(class)s_unique_number"),
        ]

    def __str__(self) -> str:
        number = self.number or f"#{self.pk}"
        return f"{number} ({self.get_status_display()})"

    def _apply_totals(self, totals: ledger.DocumentTotals) -> list:
        for field, value in totals.as_dict().items():
            setattr(self, field, value)
        return list(self.TOTAL_FIELDS)

    def refresh_totals(self, commit: bool = True) -> ledger.DocumentTotals:
        """Recompute every aggregate from the stored lines."""
        amounts = [
            ledger.calculate_line(line.quantity, line.price, line.discount_percent, line.tax_rate)
            for line in self.lines.all()
        ]
        totals = ledger.summarise(amounts, self.shipping_charges)
        fields = self._apply_totals(totals)
        if commit:
            self.save(update_fields=fields + ["updated_at"])
        return totals

    def recalculate_total(self, commit: bool = True):
        """Recompute the grand total from the stored aggregates (shipping-only edits)."""
        totals = ledger.DocumentTotals(
            subtotal=ledger.round2(self.subtotal),
            discount_amount=ledger.round2(self.discount_amount),
            tax_amount=ledger.round2(self.tax_amount),
            shipping_charges=ledger.round2(self.shipping_charges),
            total_amount=ledger.document_total(
                self.subtotal, self.discount_amount, self.tax_amount, self.shipping_charges
            ),
        )
        fields = self._apply_totals(totals)
        if commit:
            self.save(update_fields=fields + ["updated_at"])
        return totals


class PayableDocument(CommercialDocument):
    """Invoices and bills: always issued from a location, and they track payment."""

    location = models.ForeignKey(
        "companies.CompanyLocation",
        on_delete=models.PROTECT,
        related_name="+",
    )
    due_date = models.DateField()
    payment_terms = models.CharField(max_length=16, choices=PaymentTerms.choices, default=PaymentTerms.NET_30)
    amount_paid = models.DecimalField(max_digits=20, decimal_places=2, default=Decimal("0"))
    balance_due = models.DecimalField(max_digits=20, decimal_places=2, default=Decimal("0"))
    payment_method = models.CharField(max_length=16, choices=PaymentMethod.choices, blank=True)
    payment_date = models.DateField(null=True, blank=True)
    transaction_ref = models.CharField(max_length=64, blank=True)

    class Meta(CommercialDocument.Meta):
        abstract = True

    def _apply_totals(self, totals: ledger.DocumentTotals) -> list:
        fields = super()._apply_totals(totals)
        self.balance_due = ledger.balance_due(self.total_amount, self.amount_paid)
        return fields + ["balance_due"]


class LineItem(models.Model):
    """
    One priced row of a document. Concrete models add the ``document`` and
    ``product`` foreign keys and name the price column through ``PRICE_FIELD``.
    """

    PRICE_FIELD = "unit_price"

    line_number = models.PositiveIntegerField()
    item_code = models.CharField(max_length=64)
    description = models.CharField(max_length=255, blank=True)
    quantity = models.DecimalField(max_digits=15, decimal_places=3)
    unit_of_measure = models.CharField(max_length=20, blank=True)
    discount_percent = models.DecimalField(
        max_digits=5, decimal_places=2, default=Decimal("0"), validators=PERCENT_VALIDATORS
    )
    tax_rate = models.DecimalField(max_digits=5, decimal_places=2, default=Decimal("0"), validators=PERCENT_VALIDATORS)
    discount_amount = models.DecimalField(max_digits=20, decimal_places=2, default=Decimal("0"))
    tax_amount = models.DecimalField(max_digits=20, decimal_places=2, default=Decimal("0"))
    line_amount = models.DecimalField(max_digits=20, decimal_places=2, default=Decimal("0"))
    notes = models.TextField(blank=True)

    class Meta:
        abstract = True
        ordering = ["line_number"]
        constraints = [
            models.UniqueConstraint(fields=["document", "line_number"], name="%(app_label)s_%(class)s_unique_line"),
        ]

    def __str__(self) -> str:
        return f"{self.line_number}: {self.item_code}"

    @property
    def price(self) -> Decimal:
        return getattr(self, self.PRICE_FIELD)

    def apply_amounts(self) -> ledger.LineAmounts:
        amounts = ledger.calculate_line(self.quantity, self.price, self.discount_percent, self.tax_rate)
        self.discount_amount = amounts.discount_amount
        self.tax_amount = amounts.tax_amount
        self.line_amount = amounts.line_amount
        return amounts

    def save(self, *args, **kwargs):
        self.apply_amounts()
        super().save(*args, **kwargs)
