from __future__ import annotations

from decimal import Decimal

from rest_framework import serializers

from .models import PaymentMethod, PaymentTerms

MONEY = {"max_digits": 20, "decimal_places": 2}
PERCENT = {"max_digits": 5, "decimal_places": 2, "min_value": Decimal("0"), "max_value": Decimal("100")}


class DocumentLineInputSerializer(serializers.Serializer):
    """
    One input line. Subclasses add the price column (``unit_price`` or
    ``unit_cost``). Computed amounts are never accepted from the caller.
    """

    product = serializers.IntegerField(required=False, allow_null=True)
    item_code = serializers.CharField(max_length=64)
    description = serializers.CharField(max_length=255, required=False, allow_blank=True)
    quantity = serializers.DecimalField(max_digits=15, decimal_places=3)
    unit_of_measure = serializers.CharField(max_length=20, required=False, allow_blank=True)
    discount_percent = serializers.DecimalField(required=False, default=Decimal("0"), **PERCENT)
    tax_rate = serializers.DecimalField(required=False, default=Decimal("0"), **PERCENT)
    notes = serializers.CharField(required=False, allow_blank=True)

    def validate_quantity(self, value):
        if value <= 0:
            raise serializers.ValidationError("Quantity must be greater than zero.")
        return value


class DocumentInputSerializer(serializers.Serializer):
    """
    Header input shared by every document type. ``total_amount`` and
    ``balance_due`` are not declared, so they cannot be set by callers.
    """

    location = serializers.IntegerField(required=False, allow_null=True)
    issue_date = serializers.DateField(required=False)
    currency = serializers.CharField(max_length=3, required=False)
    payment_terms = serializers.ChoiceField(choices=PaymentTerms.choices, required=False, allow_blank=True)
    reference_number = serializers.CharField(max_length=64, required=False, allow_blank=True)
    shipping_charges = serializers.DecimalField(required=False, min_value=Decimal("0"), **MONEY)
    notes = serializers.CharField(required=False, allow_blank=True)

    def validate_lines(self, value):
        if not value:
            raise serializers.ValidationError("At least one line is required.")
        return value


class PaymentInputSerializer(serializers.Serializer):
    amount_paid = serializers.DecimalField(min_value=Decimal("0"), **MONEY)
    payment_method = serializers.ChoiceField(choices=PaymentMethod.choices, required=False, allow_blank=True)
    payment_date = serializers.DateField(required=False, allow_null=True)
    transaction_ref = serializers.CharField(max_length=64, required=False, allow_blank=True)


class PaymentUpdateFieldsMixin(serializers.Serializer):
    """Payment fields accepted inside a regular invoice/bill update."""

    amount_paid = serializers.DecimalField(required=False, min_value=Decimal("0"), **MONEY)
    payment_method = serializers.ChoiceField(choices=PaymentMethod.choices, required=False, allow_blank=True)
    payment_date = serializers.DateField(required=False, allow_null=True)
    transaction_ref = serializers.CharField(max_length=64, required=False, allow_blank=True)


class DocumentStatusSerializer(serializers.Serializer):
    status = serializers.CharField(max_length=32)


class DocumentListFilterSerializer(serializers.Serializer):
    """
    Query-string filters for a document list. Counterparty and source filters
    are named after the document type, so they are added per type.
    """

    status = serializers.ChoiceField(choices=(), required=False, allow_blank=True)
    location = serializers.IntegerField(required=False, min_value=1)
    priority = serializers.CharField(max_length=16, required=False, allow_blank=True)
    date_from = serializers.DateField(required=False)
    date_to = serializers.DateField(required=False)

    def __init__(self, *args, doc_type, **kwargs):
        super().__init__(*args, **kwargs)
        self.fields["status"].choices = sorted(doc_type.graph.statuses)
        self.fields[doc_type.counterparty_field] = serializers.IntegerField(required=False, min_value=1)
        self.fields[doc_type.counterparty_name_field] = serializers.CharField(required=False, allow_blank=True)
        if doc_type.source_field:
            self.fields[doc_type.source_field] = serializers.CharField(max_length=32, required=False, allow_blank=True)

    def validate(self, attrs):
        date_from, date_to = attrs.get("date_from"), attrs.get("date_to")
        if date_from and date_to and date_from > date_to:
            raise serializers.ValidationError({"date_to": ["Must be on or after date_from."]})
        return attrs


class DeriveDocumentSerializer(serializers.Serializer):
    """Overrides accepted when creating an invoice or bill from its source document."""

    location = serializers.IntegerField(required=False, allow_null=True)
    issue_date = serializers.DateField(required=False)
    due_date = serializers.DateField(required=False)
    payment_terms = serializers.ChoiceField(choices=PaymentTerms.choices, required=False, allow_blank=True)
    currency = serializers.CharField(max_length=3, required=False)
    shipping_charges = serializers.DecimalField(required=False, min_value=Decimal("0"), **MONEY)
    reference_number = serializers.CharField(max_length=64, required=False, allow_blank=True)
    notes = serializers.CharField(required=False, allow_blank=True)


LINE_OUTPUT_FIELDS = [
    "id",
    "line_number",
    "product",
    "item_code",
    "description",
    "quantity",
    "unit_of_measure",
    "discount_percent",
    "discount_amount",
    "tax_rate",
    "tax_amount",
    "line_amount",
    "notes",
]
