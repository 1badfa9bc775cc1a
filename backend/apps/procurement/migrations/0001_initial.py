from decimal import Decimal

import django.core.validators
import django.db.models.deletion
import django.utils.timezone
from django.conf import settings
from django.db import migrations, models

import apps.documents.models


def company_aware_fields():
    return [
        ("created_at", models.DateTimeField(auto_now_add=True)),
        ("updated_at", models.DateTimeField(auto_now=True)),
        (
            "company",
            models.ForeignKey(
                help_text="Company this record belongs to",
                on_delete=django.db.models.deletion.PROTECT,
                to="companies.company",
            ),
        ),
        (
            "created_by",
            models.ForeignKey(
                blank=True,
                null=True,
                on_delete=django.db.models.deletion.SET_NULL,
                related_name="+",
                to=settings.AUTH_USER_MODEL,
            ),
        ),
    ]


PERCENT_VALIDATORS = [
    django.core.validators.MinValueValidator(Decimal("0")),
    django.core.validators.MaxValueValidator(Decimal("100")),
]


class Migration(migrations.Migration):

    initial = True

    dependencies = [
        ("companies", "0001_initial"),
        ("sales", "0001_initial"),
        migrations.swappable_dependency(settings.AUTH_USER_MODEL),
    ]

    operations = [
        migrations.CreateModel(
            name="Supplier",
            fields=[
                ("id", models.BigAutoField(auto_created=True, primary_key=True, serialize=False, verbose_name="ID")),
                *company_aware_fields(),
                ("code", models.CharField(max_length=20)),
                ("name", models.CharField(max_length=255)),
                ("email", models.EmailField(blank=True, max_length=254)),
                ("phone", models.CharField(blank=True, max_length=32)),
                ("address", models.TextField(blank=True)),
                (
                    "supplier_type",
                    models.CharField(
                        choices=[
                            ("local", "Local"),
                            ("import", "Import"),
                            ("service", "Service"),
                            ("sub_contractor", "Sub-Contractor"),
                        ],
                        default="local",
                        max_length=20,
                    ),
                ),
                ("is_active", models.BooleanField(default=True)),
            ],
            options={
                "db_table": "procurement_supplier",
                "ordering": ["company", "code"],
                "unique_together": {("company", "code")},
            },
        ),
        migrations.CreateModel(
            name="PurchaseOrder",
            fields=[
                ("id", models.BigAutoField(auto_created=True, primary_key=True, serialize=False, verbose_name="ID")),
                *company_aware_fields(),
                ("number", models.CharField(blank=True, db_index=True, max_length=32)),
                ("issue_date", models.DateField(default=django.utils.timezone.localdate)),
                ("currency", models.CharField(default=apps.documents.models.default_currency, max_length=3)),
                (
                    "payment_terms",
                    models.CharField(blank=True, choices=apps.documents.models.PaymentTerms.choices, max_length=16),
                ),
                ("reference_number", models.CharField(blank=True, max_length=64)),
                ("subtotal", models.DecimalField(decimal_places=2, default=Decimal("0"), max_digits=20)),
                ("discount_amount", models.DecimalField(decimal_places=2, default=Decimal("0"), max_digits=20)),
                ("tax_amount", models.DecimalField(decimal_places=2, default=Decimal("0"), max_digits=20)),
                ("shipping_charges", models.DecimalField(decimal_places=2, default=Decimal("0"), max_digits=20)),
                ("total_amount", models.DecimalField(decimal_places=2, default=Decimal("0"), max_digits=20)),
                ("notes", models.TextField(blank=True)),
                ("is_active", models.BooleanField(default=True)),
                (
                    "location",
                    models.ForeignKey(
                        blank=True,
                        null=True,
                        on_delete=django.db.models.deletion.PROTECT,
                        related_name="+",
                        to="companies.companylocation",
                    ),
                ),
                (
                    "supplier",
                    models.ForeignKey(
                        blank=True,
                        null=True,
                        on_delete=django.db.models.deletion.PROTECT,
                        related_name="purchase_orders",
                        to="procurement.supplier",
                    ),
                ),
                ("supplier_name", models.CharField(max_length=255)),
                ("supplier_code", models.CharField(blank=True, max_length=20)),
                (
                    "status",
                    models.CharField(
                        choices=[
                            ("DRAFT", "Draft"),
                            ("SENT", "Sent"),
                            ("CONFIRMED", "Confirmed"),
                            ("PARTIALLY_RECEIVED", "Partially Received"),
                            ("RECEIVED", "Received"),
                            ("CANCELLED", "Cancelled"),
                        ],
                        default="DRAFT",
                        max_length=32,
                    ),
                ),
                (
                    "priority",
                    models.CharField(
                        choices=apps.documents.models.Priority.choices, default="NORMAL", max_length=10
                    ),
                ),
                ("expected_delivery_date", models.DateField(blank=True, null=True)),
                ("terms_conditions", models.TextField(blank=True)),
                ("delivery_address", models.TextField(blank=True)),
                ("shipping_method", models.CharField(blank=True, max_length=50)),
                ("incoterms", models.CharField(blank=True, max_length=20)),
            ],
            options={
                "db_table": "procurement_purchase_order",
                "ordering": ["-issue_date", "-created_at"],
                "abstract": False,
                "indexes": [
                    models.Index(fields=["company", "status"], name="purchase_order_status_idx"),
                    models.Index(fields=["company", "issue_date"], name="purchase_order_issue_idx"),
                ],
                "constraints": [
                    models.UniqueConstraint(
                        fields=("company", "number"), name="procurement_purchaseorder_unique_number"
                    ),
                ],
            },
        ),
        migrations.CreateModel(
            name="PurchaseOrderLine",
            fields=[
                ("id", models.BigAutoField(auto_created=True, primary_key=True, serialize=False, verbose_name="ID")),
                ("line_number", models.PositiveIntegerField()),
                ("item_code", models.CharField(max_length=64)),
                ("description", models.CharField(blank=True, max_length=255)),
                ("quantity", models.DecimalField(decimal_places=3, max_digits=15)),
                ("unit_of_measure", models.CharField(blank=True, max_length=20)),
                (
                    "discount_percent",
                    models.DecimalField(
                        decimal_places=2, default=Decimal("0"), max_digits=5, validators=PERCENT_VALIDATORS
                    ),
                ),
                (
                    "tax_rate",
                    models.DecimalField(
                        decimal_places=2, default=Decimal("0"), max_digits=5, validators=PERCENT_VALIDATORS
                    ),
                ),
                ("discount_amount", models.DecimalField(decimal_places=2, default=Decimal("0"), max_digits=20)),
                ("tax_amount", models.DecimalField(decimal_places=2, default=Decimal("0"), max_digits=20)),
                ("line_amount", models.DecimalField(decimal_places=2, default=Decimal("0"), max_digits=20)),
                ("notes", models.TextField(blank=True)),
                (
                    "document",
                    models.ForeignKey(
                        on_delete=django.db.models.deletion.CASCADE,
                        related_name="lines",
                        to="procurement.purchaseorder",
                    ),
                ),
                (
                    "product",
                    models.ForeignKey(
                        blank=True,
                        null=True,
                        on_delete=django.db.models.deletion.PROTECT,
                        related_name="purchase_order_lines",
                        to="sales.product",
                    ),
                ),
                ("unit_cost", models.DecimalField(decimal_places=2, max_digits=20)),
                ("expected_delivery", models.DateField(blank=True, null=True)),
            ],
            options={
                "db_table": "procurement_purchase_order_line",
                "ordering": ["line_number"],
                "abstract": False,
                "constraints": [
                    models.UniqueConstraint(
                        fields=("document", "line_number"), name="procurement_purchaseorderline_unique_line"
                    ),
                ],
            },
        ),
    ]
