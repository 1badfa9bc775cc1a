from apps.documents.engine import DocumentService, DocumentType, register
from apps.procurement.documents import PURCHASE_ORDER
from apps.procurement.models import Supplier
from apps.sales.documents import SALES_ORDER
from apps.sales.models import Customer

from .models import Bill, BillLine, Invoice, InvoiceLine

INVOICE_DELETE_MESSAGES = {
    Invoice.Status.SENT: "Cannot delete invoice that has been sent. Cancel it instead to maintain audit trail.",
    Invoice.Status.PARTIALLY_PAID: "Cannot delete invoice with partial payments. This would affect financial records.",
    Invoice.Status.PAID: "Cannot delete paid invoice. This would affect financial records and audit trail.",
    Invoice.Status.OVERDUE: "Cannot delete overdue invoice. Cancel it instead to maintain audit trail.",
    Invoice.Status.CANCELLED: "Cannot delete cancelled invoice. It must be kept for audit purposes.",
}

PAYMENT_LOCKED = ("PARTIALLY_PAID", "PAID", "OVERDUE", "CANCELLED")

INVOICE = register(
    DocumentType(
        key="invoice",
        label="invoice",
        prefix="INV",
        model=Invoice,
        line_model=InvoiceLine,
        graph=Invoice.TRANSITIONS,
        counterparty_field="customer",
        counterparty_model=Customer,
        price_field="unit_price",
        header_fields=("due_date", "terms_conditions", "bank_details"),
        source_type=SALES_ORDER,
        source_field="sales_order",
        cancelled_status=Invoice.Status.CANCELLED,
        paid_status=Invoice.Status.PAID,
        partially_paid_status=Invoice.Status.PARTIALLY_PAID,
        payment_locked_statuses=PAYMENT_LOCKED,
        location_required=True,
        delete_messages=INVOICE_DELETE_MESSAGES,
    )
)

BILL = register(
    DocumentType(
        key="bill",
        label="bill",
        prefix="BILL",
        model=Bill,
        line_model=BillLine,
        graph=Bill.TRANSITIONS,
        counterparty_field="supplier",
        counterparty_model=Supplier,
        price_field="unit_cost",
        header_fields=("due_date", "supplier_invoice_no"),
        source_type=PURCHASE_ORDER,
        source_field="purchase_order",
        cancelled_status=Bill.Status.CANCELLED,
        paid_status=Bill.Status.PAID,
        partially_paid_status=Bill.Status.PARTIALLY_PAID,
        payment_locked_statuses=PAYMENT_LOCKED,
        location_required=True,
    )
)

invoices = DocumentService(INVOICE)
bills = DocumentService(BILL)
