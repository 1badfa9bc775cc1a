from __future__ import annotations

from apps.documents.views import DocumentViewSet

from .documents import purchase_orders
from .serializers import (
    PurchaseOrderInputSerializer,
    PurchaseOrderListSerializer,
    PurchaseOrderSerializer,
    PurchaseOrderStatusSerializer,
)


class PurchaseOrderViewSet(DocumentViewSet):
    """
    Purchase orders, addressed by number (``PO001``).

    Query params: status, priority, supplier, supplier_name, location,
    date_from, date_to.
    """

    service = purchase_orders
    serializer_class = PurchaseOrderSerializer
    list_serializer_class = PurchaseOrderListSerializer
    input_serializer_class = PurchaseOrderInputSerializer
    status_serializer_class = PurchaseOrderStatusSerializer
