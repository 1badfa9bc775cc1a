from apps.documents.views import DocumentViewSet

from ..documents import sales_orders
from ..serializers.sales_order_serializers import (
    SalesOrderInputSerializer,
    SalesOrderListSerializer,
    SalesOrderSerializer,
    SalesOrderStatusSerializer,
)


class SalesOrderViewSet(DocumentViewSet):
    """
    Sales orders, addressed by number (``SO001``).

    Query params: status, priority, customer, customer_name, location,
    date_from, date_to.
    """

    service = sales_orders
    serializer_class = SalesOrderSerializer
    list_serializer_class = SalesOrderListSerializer
    input_serializer_class = SalesOrderInputSerializer
    status_serializer_class = SalesOrderStatusSerializer
