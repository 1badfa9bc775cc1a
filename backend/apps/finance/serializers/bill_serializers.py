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

from ..models import Bill, BillLine


class BillLineSerializer(serializers.ModelSerializer):
    class Meta:
        model = BillLine
        fields = LINE_OUTPUT_FIELDS + ["unit_cost"]
        read_only_fields = fields


class BillListSerializer(serializers.ModelSerializer):
    status_display = serializers.CharField(source="get_status_display", read_only=True)
    purchase_order_number = serializers.CharField(source="purchase_order.number", read_only=True, default=None)

    class Meta:
        model = Bill
        fields = [
            "id",
            "number",
            "supplier",
            "supplier_name",
            "supplier_code",
            "supplier_invoice_no",
            "location",
            "purchase_order",
            "purchase_order_number",
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


class BillSerializer(serializers.ModelSerializer):
    lines = BillLineSerializer(many=True, read_only=True)
    status_display = serializers.CharField(source="get_status_display", read_only=True)
    purchase_order_number = serializers.CharField(source="purchase_order.number", read_only=True, default=None)

    class Meta:
        model = Bill
        fields = [
            "id",
            "company",
            "number",
            "supplier",
            "supplier_name",
            "supplier_code",
            "supplier_invoice_no",
            "location",
            "purchase_order",
            "purchase_order_number",
            "status",
            "status_display",
            "issue_date",
            "due_date",
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
            "is_active",
            "lines",
            "created_by",
            "created_at",
            "updated_at",
        ]
        read_only_fields = fields


class BillLineInputSerializer(DocumentLineInputSerializer):
    unit_cost = serializers.DecimalField(min_value=Decimal("0"), **MONEY)


class BillInputSerializer(PaymentUpdateFieldsMixin, DocumentInputSerializer):
    supplier = serializers.IntegerField(required=False, allow_null=True)
    supplier_name = serializers.CharField(max_length=255, required=False)
    supplier_code = serializers.CharField(max_length=20, required=False, allow_blank=True)
    supplier_invoice_no = serializers.CharField(max_length=64, required=False, allow_blank=True)
    location = serializers.IntegerField()
    due_date = serializers.DateField()
    lines = BillLineInputSerializer(many=True)


class BillFromPurchaseOrderSerializer(DeriveDocumentSerializer):
    purchase_order = serializers.CharField(max_length=32)
    supplier_invoice_no = serializers.CharField(max_length=64, required=False, allow_blank=True)


class BillStatusSerializer(DocumentStatusSerializer):
    status = serializers.ChoiceField(choices=Bill.Status.choices)
