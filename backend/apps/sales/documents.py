from apps.documents.engine import DocumentService, DocumentType, register

from .models import Customer, SalesOrder, SalesOrderLine

ORDER_HEADER_FIELDS = (
    "priority",
    "expected_delivery_date",
    "delivery_date",
    "customer_notes",
    "shipping_address",
    "shipping_carrier",
    "tracking_number",
    "shipping_method",
    "delivery_window_start",
    "delivery_window_end",
)

# Fields a status change may carry along (e.g. tracking details when shipping).
ORDER_STATUS_FIELDS = (
    "delivery_date",
    "shipping_carrier",
    "tracking_number",
    "shipping_method",
    "delivery_window_start",
    "delivery_window_end",
)

SALES_ORDER = register(
    DocumentType(
        key="sales_order",
        label="sales order",
        prefix="SO",
        model=SalesOrder,
        line_model=SalesOrderLine,
        graph=SalesOrder.TRANSITIONS,
        counterparty_field="customer",
        counterparty_model=Customer,
        price_field="unit_price",
        header_fields=ORDER_HEADER_FIELDS,
        status_fields=ORDER_STATUS_FIELDS,
        cancelled_status=SalesOrder.Status.CANCELLED,
    )
)

sales_orders = DocumentService(SALES_ORDER)
