from decimal import Decimal

from rest_framework import serializers

from apps.documents.models import Priority
from apps.documents.serializers import (
    LINE_OUTPUT_FIELDS,
    MONEY,
    DocumentInputSerializer,
    DocumentLineInputSerializer,
    DocumentStatusSerializer,
)

from ..models import SalesOrder, SalesOrderLine


class SalesOrderLineSerializer(serializers.ModelSerializer):
    class Meta:
        model = SalesOrderLine
        fields = LINE_OUTPUT_FIELDS + ["unit_price"]
        read_only_fields = fields


SUMMARY_FIELDS = [
    "id",
    "number",
    "customer",
    "customer_name",
    "customer_code",
    "location",
    "status",
    "status_display",
    "priority",
    "issue_date",
    "expected_delivery_date",
    "currency",
    "total_amount",
    "created_at",
]


class SalesOrderListSerializer(serializers.ModelSerializer):
    status_display = serializers.CharField(source="get_status_display", read_only=True)

    class Meta:
        model = SalesOrder
        fields = SUMMARY_FIELDS
        read_only_fields = fields


class SalesOrderSerializer(serializers.ModelSerializer):
    lines = SalesOrderLineSerializer(many=True, read_only=True)
    status_display = serializers.CharField(source="get_status_display", read_only=True)

    class Meta:
        model = SalesOrder
        fields = [
            "id",
            "company",
            "number",
            "customer",
            "customer_name",
            "customer_code",
            "location",
            "status",
            "status_display",
            "priority",
            "issue_date",
            "expected_delivery_date",
            "delivery_date",
            "currency",
            "payment_terms",
            "reference_number",
            "subtotal",
            "discount_amount",
            "tax_amount",
            "shipping_charges",
            "total_amount",
            "notes",
            "customer_notes",
            "shipping_address",
            "shipping_carrier",
            "tracking_number",
            "shipping_method",
            "delivery_window_start",
            "delivery_window_end",
            "is_active",
            "lines",
            "created_by",
            "created_at",
            "updated_at",
        ]
        read_only_fields = fields


class SalesOrderLineInputSerializer(DocumentLineInputSerializer):
    unit_price = serializers.DecimalField(min_value=Decimal("0"), **MONEY)


class SalesOrderInputSerializer(DocumentInputSerializer):
    customer = serializers.IntegerField(required=False, allow_null=True)
    customer_name = serializers.CharField(max_length=255, required=False)
    customer_code = serializers.CharField(max_length=20, required=False, allow_blank=True)
    priority = serializers.ChoiceField(choices=Priority.choices, required=False)
    expected_delivery_date = serializers.DateField(required=False, allow_null=True)
    delivery_date = serializers.DateField(required=False, allow_null=True)
    customer_notes = serializers.CharField(required=False, allow_blank=True)
    shipping_address = serializers.CharField(required=False, allow_blank=True)
    shipping_carrier = serializers.CharField(max_length=100, required=False, allow_blank=True)
    tracking_number = serializers.CharField(max_length=100, required=False, allow_blank=True)
    shipping_method = serializers.CharField(max_length=50, required=False, allow_blank=True)
    delivery_window_start = serializers.DateTimeField(required=False, allow_null=True)
    delivery_window_end = serializers.DateTimeField(required=False, allow_null=True)
    lines = SalesOrderLineInputSerializer(many=True)

    def validate(self, attrs):
        start = attrs.get("delivery_window_start")
        end = attrs.get("delivery_window_end")
        if start and end and end < start:
            raise serializers.ValidationError({"delivery_window_end": "Delivery window cannot end before it starts."})
        return attrs


class SalesOrderStatusSerializer(DocumentStatusSerializer):
    status = serializers.ChoiceField(choices=SalesOrder.Status.choices)
    delivery_date = serializers.DateField(required=False, allow_null=True)
    shipping_carrier = serializers.CharField(max_length=100, required=False, allow_blank=True)
    tracking_number = serializers.CharField(max_length=100, required=False, allow_blank=True)
    shipping_method = serializers.CharField(max_length=50, required=False, allow_blank=True)
    delivery_window_start = serializers.DateTimeField(required=False, allow_null=True)
    delivery_window_end = serializers.DateTimeField(required=False, allow_null=True)
