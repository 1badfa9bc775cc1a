from rest_framework.decorators import action

from apps.documents.views import PayableDocumentViewSet

from ..documents import invoices
from ..serializers.invoice_serializers import (
    InvoiceFromOrderSerializer,
    InvoiceInputSerializer,
    InvoiceListSerializer,
    InvoiceSerializer,
    InvoiceStatusSerializer,
)


class InvoiceViewSet(PayableDocumentViewSet):
    """
    Customer invoices, addressed by number (``INV001``).

    Query params: status, customer, customer_name, location, sales_order,
    date_from, date_to.
    """

    service = invoices
    serializer_class = InvoiceSerializer
    list_serializer_class = InvoiceListSerializer
    input_serializer_class = InvoiceInputSerializer
    status_serializer_class = InvoiceStatusSerializer
    derive_serializer_class = InvoiceFromOrderSerializer

    @action(detail=False, methods=["post"], url_path="from-order")
    def from_order(self, request):
        """Raise an invoice from a confirmed (or later) sales order."""
        return self.derive(request)
