from .sales_order_serializers import (
    SalesOrderInputSerializer,
    SalesOrderLineSerializer,
    SalesOrderListSerializer,
    SalesOrderSerializer,
    SalesOrderStatusSerializer,
)
