from __future__ import annotations

from django.db import models

from apps.documents.models import CommercialDocument, LineItem, Priority
from apps.documents.transitions import StatusGraph
from shared.models import CompanyAwareModel


class Supplier(CompanyAwareModel):
    class SupplierType(models.TextChoices):
        LOCAL = "local", "Local"
        IMPORT = "import", "Import"
        SERVICE = "service", "Service"
        SUB_CONTRACTOR = "sub_contractor", "Sub-Contractor"

    code = models.CharField(max_length=20)
    name = models.CharField(max_length=255)
    email = models.EmailField(blank=True)
    phone = models.CharField(max_length=32, blank=True)
    address = models.TextField(blank=True)
    supplier_type = models.CharField(max_length=20, choices=SupplierType.choices, default=SupplierType.LOCAL)
    is_active = models.BooleanField(default=True)

    class Meta:
        db_table = "procurement_supplier"
        unique_together = ("company", "code")
        ordering = ["company", "code"]

    def __str__(self) -> str:
        return f"{self.code} - {self.name}"


class PurchaseOrder(CommercialDocument):
    class Status(models.TextChoices):
        DRAFT = "DRAFT", "Draft"
        SENT = "SENT", "Sent"
        CONFIRMED = "CONFIRMED", "Confirmed"
        PARTIALLY_RECEIVED = "PARTIALLY_RECEIVED", "Partially Received"
        RECEIVED = "RECEIVED", "Received"
        CANCELLED = "CANCELLED", "Cancelled"

    TRANSITIONS = StatusGraph(
        {
            Status.DRAFT: [Status.SENT, Status.CANCELLED],
            Status.SENT: [Status.CONFIRMED, Status.CANCELLED],
            Status.CONFIRMED: [Status.PARTIALLY_RECEIVED, Status.RECEIVED, Status.CANCELLED],
            Status.PARTIALLY_RECEIVED: [Status.RECEIVED],
        },
        initial=Status.DRAFT,
    )

    supplier = models.ForeignKey(
        Supplier,
        on_delete=models.PROTECT,
        null=True,
        blank=True,
        related_name="purchase_orders",
    )
    supplier_name = models.CharField(max_length=255)
    supplier_code = models.CharField(max_length=20, blank=True)
    status = models.CharField(max_length=32, choices=Status.choices, default=Status.DRAFT)
    priority = models.CharField(max_length=10, choices=Priority.choices, default=Priority.NORMAL)
    expected_delivery_date = models.DateField(null=True, blank=True)
    terms_conditions = models.TextField(blank=True)
    delivery_address = models.TextField(blank=True)
    shipping_method = models.CharField(max_length=50, blank=True)
    incoterms = models.CharField(max_length=20, blank=True)

    class Meta(CommercialDocument.Meta):
        db_table = "procurement_purchase_order"
        indexes = [
            models.Index(fields=["company", "status"], name="purchase_order_status_idx"),
            models.Index(fields=["company", "issue_date"], name="purchase_order_issue_idx"),
        ]


class PurchaseOrderLine(LineItem):
    PRICE_FIELD = "unit_cost"

    document = models.ForeignKey(PurchaseOrder, on_delete=models.CASCADE, related_name="lines")
    product = models.ForeignKey(
        "sales.Product",
        on_delete=models.PROTECT,
        related_name="purchase_order_lines",
        null=True,
        blank=True,
    )
    unit_cost = models.DecimalField(max_digits=20, decimal_places=2)
    expected_delivery = models.DateField(null=True, blank=True)

    class Meta(LineItem.Meta):
        db_table = "procurement_purchase_order_line"
