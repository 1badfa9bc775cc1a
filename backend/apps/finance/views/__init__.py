from .bill_views import BillViewSet
from .invoice_views import InvoiceViewSet
