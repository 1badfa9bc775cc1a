from django.db import models

from apps.documents.models import CommercialDocument, Priority
from apps.documents.transitions import StatusGraph

from .customer import Customer


class SalesOrder(CommercialDocument):
    class Status(models.TextChoices):
        DRAFT = "DRAFT", "Draft"
        CONFIRMED = "CONFIRMED", "Confirmed"
        IN_PRODUCTION = "IN_PRODUCTION", "In Production"
        READY_TO_SHIP = "READY_TO_SHIP", "Ready to Ship"
        SHIPPED = "SHIPPED", "Shipped"
        DELIVERED = "DELIVERED", "Delivered"
        CANCELLED = "CANCELLED", "Cancelled"

    TRANSITIONS = StatusGraph(
        {
            Status.DRAFT: [Status.CONFIRMED, Status.CANCELLED],
            Status.CONFIRMED: [Status.IN_PRODUCTION, Status.CANCELLED],
            Status.IN_PRODUCTION: [Status.READY_TO_SHIP, Status.CANCELLED],
            Status.READY_TO_SHIP: [Status.SHIPPED],
            Status.SHIPPED: [Status.DELIVERED],
        },
        initial=Status.DRAFT,
    )

    customer = models.ForeignKey(
        Customer,
        on_delete=models.PROTECT,
        null=True,
        blank=True,
        related_name='sales_orders',
    )
    customer_name = models.CharField(max_length=255)
    customer_code = models.CharField(max_length=20, blank=True)
    status = models.CharField(max_length=20, choices=Status.choices, default=Status.DRAFT)
    priority = models.CharField(max_length=10, choices=Priority.choices, default=Priority.NORMAL)
    expected_delivery_date = models.DateField(null=True, blank=True)
    delivery_date = models.DateField(null=True, blank=True)
    customer_notes = models.TextField(blank=True)

    # Shipping
    shipping_address = models.TextField(blank=True)
    shipping_carrier = models.CharField(max_length=100, blank=True)
    tracking_number = models.CharField(max_length=100, blank=True)
    shipping_method = models.CharField(max_length=50, blank=True)
    delivery_window_start = models.DateTimeField(null=True, blank=True)
    delivery_window_end = models.DateTimeField(null=True, blank=True)

    class Meta(CommercialDocument.Meta):
        db_table = 'sales_order'
        indexes = [
            models.Index(fields=['company', 'issue_date'], name='sales_order_issue_idx'),
            models.Index(fields=['company', 'customer', 'status'], name='sales_order_status_idx'),
        ]
