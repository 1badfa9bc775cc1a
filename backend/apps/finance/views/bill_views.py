from rest_framework.decorators import action

from apps.documents.views import PayableDocumentViewSet

from ..documents import bills
from ..serializers.bill_serializers import (
    BillFromPurchaseOrderSerializer,
    BillInputSerializer,
    BillListSerializer,
    BillSerializer,
    BillStatusSerializer,
)


class BillViewSet(PayableDocumentViewSet):
    """
    Supplier bills, addressed by number (``BILL001``).

    Query params: status, supplier, supplier_name, location, purchase_order,
    date_from, date_to.
    """

    service = bills
    serializer_class = BillSerializer
    list_serializer_class = BillListSerializer
    input_serializer_class = BillInputSerializer
    status_serializer_class = BillStatusSerializer
    derive_serializer_class = BillFromPurchaseOrderSerializer

    @action(detail=False, methods=["post"], url_path="from-purchase-order")
    def from_purchase_order(self, request):
        return self.derive(request)
