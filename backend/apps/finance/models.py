from __future__ import annotations

from django.db import models
from django.utils import timezone

from apps.documents.models import LineItem, PayableDocument
from apps.documents.transitions import StatusGraph


class Invoice(PayableDocument):
    """Customer invoice (accounts receivable), optionally raised from a sales order."""

    class Status(models.TextChoices):
        DRAFT = "DRAFT", "Draft"
        SENT = "SENT", "Sent"
        PARTIALLY_PAID = "PARTIALLY_PAID", "Partially Paid"
        PAID = "PAID", "Paid"
        OVERDUE = "OVERDUE", "Overdue"
        CANCELLED = "CANCELLED", "Cancelled"

    TRANSITIONS = StatusGraph(
        {
            Status.DRAFT: [Status.SENT, Status.CANCELLED],
            Status.SENT: [Status.PARTIALLY_PAID, Status.PAID, Status.OVERDUE, Status.CANCELLED],
            Status.PARTIALLY_PAID: [Status.PAID, Status.OVERDUE],
            Status.OVERDUE: [Status.PARTIALLY_PAID, Status.PAID],
        },
        initial=Status.DRAFT,
    )

    customer = models.ForeignKey(
        "sales.Customer",
        on_delete=models.PROTECT,
        null=True,
        blank=True,
        related_name="invoices",
    )
    customer_name = models.CharField(max_length=255)
    customer_code = models.CharField(max_length=20, blank=True)
    sales_order = models.ForeignKey(
        "sales.SalesOrder",
        on_delete=models.PROTECT,
        null=True,
        blank=True,
        related_name="invoices",
        help_text="Sales order this invoice was raised from",
    )
    status = models.CharField(max_length=20, choices=Status.choices, default=Status.DRAFT)
    terms_conditions = models.TextField(blank=True)
    bank_details = models.TextField(blank=True)

    class Meta(PayableDocument.Meta):
        db_table = "finance_invoice"
        indexes = [
            models.Index(fields=["company", "status"], name="finance_invoice_status_idx"),
            models.Index(fields=["company", "due_date"], name="finance_invoice_due_idx"),
        ]

    @property
    def is_overdue(self) -> bool:
        return self.balance_due > 0 and timezone.localdate() > self.due_date


class InvoiceLine(LineItem):
    document = models.ForeignKey(Invoice, on_delete=models.CASCADE, related_name="lines")
    product = models.ForeignKey(
        "sales.Product",
        on_delete=models.PROTECT,
        null=True,
        blank=True,
        related_name="invoice_lines",
    )
    unit_price = models.DecimalField(max_digits=20, decimal_places=2)

    class Meta(LineItem.Meta):
        db_table = "finance_invoice_line"


class Bill(PayableDocument):
    """Supplier bill (accounts payable), optionally recorded against a purchase order."""

    class Status(models.TextChoices):
        DRAFT = "DRAFT", "Draft"
        RECEIVED = "RECEIVED", "Received"
        PARTIALLY_PAID = "PARTIALLY_PAID", "Partially Paid"
        PAID = "PAID", "Paid"
        OVERDUE = "OVERDUE", "Overdue"
        CANCELLED = "CANCELLED", "Cancelled"

    TRANSITIONS = StatusGraph(
        {
            Status.DRAFT: [Status.RECEIVED, Status.CANCELLED],
            Status.RECEIVED: [Status.PARTIALLY_PAID, Status.PAID, Status.OVERDUE, Status.CANCELLED],
            Status.PARTIALLY_PAID: [Status.PAID, Status.OVERDUE],
            Status.OVERDUE: [Status.PARTIALLY_PAID, Status.PAID],
        },
        initial=Status.DRAFT,
    )

    supplier = models.ForeignKey(
        "procurement.Supplier",
        on_delete=models.PROTECT,
        null=True,
        blank=True,
        related_name="bills",
    )
    supplier_name = models.CharField(max_length=255)
    supplier_code = models.CharField(max_length=20, blank=True)
    purchase_order = models.ForeignKey(
        "procurement.PurchaseOrder",
        on_delete=models.PROTECT,
        null=True,
        blank=True,
        related_name="bills",
        help_text="Purchase order this bill was recorded against",
    )
    status = models.CharField(max_length=20, choices=Status.choices, default=Status.DRAFT)
    supplier_invoice_no = models.CharField(max_length=64, blank=True)

    class Meta(PayableDocument.Meta):
        db_table = "finance_bill"
        indexes = [
            models.Index(fields=["company", "status"], name="finance_bill_status_idx"),
            models.Index(fields=["company", "due_date"], name="finance_bill_due_idx"),
        ]


class BillLine(LineItem):
    PRICE_FIELD = "unit_cost"

    document = models.ForeignKey(Bill, on_delete=models.CASCADE, related_name="lines")
    product = models.ForeignKey(
        "sales.Product",
        on_delete=models.PROTECT,
        null=True,
        blank=True,
        related_name="bill_lines",
    )
    unit_cost = models.DecimalField(max_digits=20, decimal_places=2)

    class Meta(LineItem.Meta):
        db_table = "finance_bill_line"
