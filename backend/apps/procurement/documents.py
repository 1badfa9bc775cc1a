from apps.documents.engine import DocumentService, DocumentType, register

from .models import PurchaseOrder, PurchaseOrderLine, Supplier

PURCHASE_ORDER = register(
    DocumentType(
        key="purchase_order",
        label="purchase order",
        prefix="PO",
        model=PurchaseOrder,
        line_model=PurchaseOrderLine,
        graph=PurchaseOrder.TRANSITIONS,
        counterparty_field="supplier",
        counterparty_model=Supplier,
        price_field="unit_cost",
        header_fields=(
            "priority",
            "expected_delivery_date",
            "terms_conditions",
            "delivery_address",
            "shipping_method",
            "incoterms",
        ),
        line_fields=("expected_delivery",),
        status_fields=("expected_delivery_date", "shipping_method"),
        cancelled_status=PurchaseOrder.Status.CANCELLED,
    )
)

purchase_orders = DocumentService(PURCHASE_ORDER)
