from decimal import Decimal

from rest_framework import serializers

from apps.documents.serializers import (
    LINE_OUTPUT_FIELDS,
    MONEY,
    DeriveDocumentSerializer,
    DocumentInputSerializer,
    DocumentLineInputSerializer,
    DocumentStatusSerializer,
    PaymentUpdateFieldsMixin,
)

from ..models import Invoice, InvoiceLine


class InvoiceLineSerializer(serializers.ModelSerializer):
    class Meta:
        model = InvoiceLine
        fields = LINE_OUTPUT_FIELDS + ["unit_price"]
        read_only_fields = fields


class InvoiceListSerializer(serializers.ModelSerializer):
    status_display = serializers.CharField(source="get_status_display", read_only=True)
    sales_order_number = serializers.CharField(source="sales_order.number", read_only=True, default=None)

    class Meta:
        model = Invoice
        fields = [
            "id",
            "number",
            "customer",
            "customer_name",
            "customer_code",
            "location",
            "sales_order",
            "sales_order_number",
            "status",
            "status_display",
            "issue_date",
            "due_date",
            "currency",
            "total_amount",
            "amount_paid",
            "balance_due",
            "created_at",
        ]
        read_only_fields = fields


class InvoiceSerializer(serializers.ModelSerializer):
    lines = InvoiceLineSerializer(many=True, read_only=True)
    status_display = serializers.CharField(source="get_status_display", read_only=True)
    sales_order_number = serializers.CharField(source="sales_order.number", read_only=True, default=None)
    is_overdue = serializers.BooleanField(read_only=True)

    class Meta:
        model = Invoice
        fields = [
            "id",
            "company",
            "number",
            "customer",
            "customer_name",
            "customer_code",
            "location",
            "sales_order",
            "sales_order_number",
            "status",
            "status_display",
            "issue_date",
            "due_date",
            "is_overdue",
            "currency",
            "payment_terms",
            "reference_number",
            "subtotal",
            "discount_amount",
            "tax_amount",
            "shipping_charges",
            "total_amount",
            "amount_paid",
            "balance_due",
            "payment_method",
            "payment_date",
            "transaction_ref",
            "notes",
            "terms_conditions",
            "bank_details",
            "is_active",
            "lines",
            "created_by",
            "created_at",
            "updated_at",
        ]
        read_only_fields = fields


class InvoiceLineInputSerializer(DocumentLineInputSerializer):
    unit_price = serializers.DecimalField(min_value=Decimal("0"), **MONEY)


class InvoiceInputSerializer(PaymentUpdateFieldsMixin, DocumentInputSerializer):
    customer = serializers.IntegerField(required=False, allow_null=True)
    customer_name = serializers.CharField(max_length=255, required=False)
    customer_code = serializers.CharField(max_length=20, required=False, allow_blank=True)
    location = serializers.IntegerField()
    due_date = serializers.DateField()
    terms_conditions = serializers.CharField(required=False, allow_blank=True)
    bank_details = serializers.CharField(required=False, allow_blank=True)
    lines = InvoiceLineInputSerializer(many=True)


class InvoiceFromOrderSerializer(DeriveDocumentSerializer):
    sales_order = serializers.CharField(max_length=32)
    terms_conditions = serializers.CharField(required=False, allow_blank=True)
    bank_details = serializers.CharField(required=False, allow_blank=True)


class InvoiceStatusSerializer(DocumentStatusSerializer):
    status = serializers.ChoiceField(choices=Invoice.Status.choices)
