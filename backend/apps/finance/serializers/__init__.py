from .bill_serializers import (
    BillFromPurchaseOrderSerializer,
    BillInputSerializer,
    BillLineSerializer,
    BillListSerializer,
    BillSerializer,
    BillStatusSerializer,
)
from .invoice_serializers import (
    InvoiceFromOrderSerializer,
    InvoiceInputSerializer,
    InvoiceLineSerializer,
    InvoiceListSerializer,
    InvoiceSerializer,
    InvoiceStatusSerializer,
)
