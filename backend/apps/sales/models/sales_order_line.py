from django.db import models

from apps.documents.models import LineItem

from .sales_order import SalesOrder


class SalesOrderLine(LineItem):
    PRICE_FIELD = "unit_price"

    document = models.ForeignKey(SalesOrder, on_delete=models.CASCADE, related_name='lines')
    product = models.ForeignKey(
        'sales.Product',
        on_delete=models.PROTECT,
        null=True,
        blank=True,
        related_name='sales_order_lines',
        help_text="Product being sold"
    )
    unit_price = models.DecimalField(max_digits=20, decimal_places=2)

    class Meta(LineItem.Meta):
        db_table = 'sales_order_line'
