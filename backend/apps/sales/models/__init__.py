from .customer import Customer
from .product import Product
from .sales_order import SalesOrder
from .sales_order_line import SalesOrderLine

__all__ = ["Customer", "Product", "SalesOrder", "SalesOrderLine"]
