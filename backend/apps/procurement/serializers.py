from __future__ import annotations

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

from .models import PurchaseOrder, PurchaseOrderLine


class PurchaseOrderLineSerializer(serializers.ModelSerializer):
    class Meta:
        model = PurchaseOrderLine
        fields = LINE_OUTPUT_FIELDS + ["unit_cost", "expected_delivery"]
        read_only_fields = fields


class PurchaseOrderListSerializer(serializers.ModelSerializer):
    status_display = serializers.CharField(source="get_status_display", read_only=True)

    class Meta:
        model = PurchaseOrder
        fields = [
            "id",
            "number",
            "supplier",
            "supplier_name",
            "supplier_code",
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
        read_only_fields = fields


class PurchaseOrderSerializer(serializers.ModelSerializer):
    lines = PurchaseOrderLineSerializer(many=True, read_only=True)
    status_display = serializers.CharField(source="get_status_display", read_only=True)

    class Meta:
        model = PurchaseOrder
        fields = [
            "id",
            "company",
            "number",
            "supplier",
            "supplier_name",
            "supplier_code",
            "location",
            "status",
            "status_display",
            "priority",
            "issue_date",
            "expected_delivery_date",
            "currency",
            "payment_terms",
            "reference_number",
            "subtotal",
            "discount_amount",
            "tax_amount",
            "shipping_charges",
            "total_amount",
            "notes",
            "terms_conditions",
            "delivery_address",
            "shipping_method",
            "incoterms",
            "is_active",
            "lines",
            "created_by",
            "created_at",
            "updated_at",
        ]
        read_only_fields = fields


class PurchaseOrderLineInputSerializer(DocumentLineInputSerializer):
    unit_cost = serializers.DecimalField(min_value=Decimal("0"), **MONEY)
    expected_delivery = serializers.DateField(required=False, allow_null=True)


class PurchaseOrderInputSerializer(DocumentInputSerializer):
    supplier = serializers.IntegerField(required=False, allow_null=True)
    supplier_name = serializers.CharField(max_length=255, required=False)
    supplier_code = serializers.CharField(max_length=20, required=False, allow_blank=True)
    priority = serializers.ChoiceField(choices=Priority.choices, required=False)
    expected_delivery_date = serializers.DateField(required=False, allow_null=True)
    terms_conditions = serializers.CharField(required=False, allow_blank=True)
    delivery_address = serializers.CharField(required=False, allow_blank=True)
    shipping_method = serializers.CharField(max_length=50, required=False, allow_blank=True)
    incoterms = serializers.CharField(max_length=20, required=False, allow_blank=True)
    lines = PurchaseOrderLineInputSerializer(many=True)


class PurchaseOrderStatusSerializer(DocumentStatusSerializer):
    status = serializers.ChoiceField(choices=PurchaseOrder.Status.choices)
    expected_delivery_date = serializers.DateField(required=False, allow_null=True)
    shipping_method = serializers.CharField(max_length=50, required=False, allow_blank=True)
