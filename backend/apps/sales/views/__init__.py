from .sales_order_views import SalesOrderViewSet
