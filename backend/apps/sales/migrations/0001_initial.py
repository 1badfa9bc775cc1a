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
        migrations.swappable_dependency(settings.AUTH_USER_MODEL),
    ]

    operations = [
        migrations.CreateModel(
            name="Customer",
            fields=[
                ("id", models.BigAutoField(auto_created=True, primary_key=True, serialize=False, verbose_name="ID")),
                *company_aware_fields(),
                ("code", models.CharField(max_length=20)),
                ("name", models.CharField(max_length=255)),
                ("email", models.EmailField(blank=True, max_length=254)),
                ("phone", models.CharField(blank=True, max_length=20)),
                ("billing_address", models.TextField(blank=True)),
                ("shipping_address", models.TextField(blank=True)),
                ("is_active", models.BooleanField(default=True)),
            ],
            options={
                "db_table": "sales_customer",
                "ordering": ["code"],
                "unique_together": {("company", "code")},
            },
        ),
        migrations.CreateModel(
            name="Product",
            fields=[
                ("id", models.BigAutoField(auto_created=True, primary_key=True, serialize=False, verbose_name="ID")),
                *company_aware_fields(),
                ("code", models.CharField(db_index=True, max_length=50)),
                ("name", models.CharField(max_length=255)),
                ("description", models.TextField(blank=True)),
                (
                    "product_type",
                    models.CharField(
                        choices=[("GOODS", "Goods"), ("SERVICE", "Service")],
                        default="GOODS",
                        help_text="Type of product",
                        max_length=20,
                    ),
                ),
                ("unit_of_measure", models.CharField(blank=True, default="PCS", max_length=20)),
                (
                    "selling_price",
                    models.DecimalField(decimal_places=2, default=0, help_text="Standard selling price", max_digits=20),
                ),
                (
                    "cost_price",
                    models.DecimalField(decimal_places=2, default=0, help_text="Reference purchase cost", max_digits=20),
                ),
                (
                    "hsn_code",
                    models.CharField(
                        blank=True, help_text="Harmonized System Nomenclature code for GST/VAT", max_length=20
                    ),
                ),
                ("is_active", models.BooleanField(default=True)),
            ],
            options={
                "db_table": "sales_product",
                "verbose_name": "Product",
                "verbose_name_plural": "Products",
                "ordering": ["code"],
                "unique_together": {("company", "code")},
            },
        ),
        migrations.CreateModel(
            name="SalesOrder",
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
                    "customer",
                    models.ForeignKey(
                        blank=True,
                        null=True,
                        on_delete=django.db.models.deletion.PROTECT,
                        related_name="sales_orders",
                        to="sales.customer",
                    ),
                ),
                ("customer_name", models.CharField(max_length=255)),
                ("customer_code", models.CharField(blank=True, max_length=20)),
                (
                    "status",
                    models.CharField(
                        choices=[
                            ("DRAFT", "Draft"),
                            ("CONFIRMED", "Confirmed"),
                            ("IN_PRODUCTION", "In Production"),
                            ("READY_TO_SHIP", "Ready to Ship"),
                            ("SHIPPED", "Shipped"),
                            ("DELIVERED", "Delivered"),
                            ("CANCELLED", "Cancelled"),
                        ],
                        default="DRAFT",
                        max_length=20,
                    ),
                ),
                (
                    "priority",
                    models.CharField(
                        choices=apps.documents.models.Priority.choices, default="NORMAL", max_length=10
                    ),
                ),
                ("expected_delivery_date", models.DateField(blank=True, null=True)),
                ("delivery_date", models.DateField(blank=True, null=True)),
                ("customer_notes", models.TextField(blank=True)),
                ("shipping_address", models.TextField(blank=True)),
                ("shipping_carrier", models.CharField(blank=True, max_length=100)),
                ("tracking_number", models.CharField(blank=True, max_length=100)),
                ("shipping_method", models.CharField(blank=True, max_length=50)),
                ("delivery_window_start", models.DateTimeField(blank=True, null=True)),
                ("delivery_window_end", models.DateTimeField(blank=True, null=True)),
            ],
            options={
                "db_table": "sales_order",
                "ordering": ["-issue_date", "-created_at"],
                "abstract": False,
                "indexes": [
                    models.Index(fields=["company", "issue_date"], name="sales_order_issue_idx"),
                    models.Index(fields=["company", "customer", "status"], name="sales_order_status_idx"),
                ],
                "constraints": [
                    models.UniqueConstraint(fields=("company", "number"), name="sales_salesorder_unique_number"),
                ],
            },
        ),
        migrations.CreateModel(
            name="SalesOrderLine",
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
                        to="sales.salesorder",
                    ),
                ),
                (
                    "product",
                    models.ForeignKey(
                        blank=True,
                        help_text="Product being sold",
                        null=True,
                        on_delete=django.db.models.deletion.PROTECT,
                        related_name="sales_order_lines",
                        to="sales.product",
                    ),
                ),
                ("unit_price", models.DecimalField(decimal_places=2, max_digits=20)),
            ],
            options={
                "db_table": "sales_order_line",
                "ordering": ["line_number"],
                "abstract": False,
                "constraints": [
                    models.UniqueConstraint(fields=("document", "line_number"), name="sales_salesorderline_unique_line"),
                ],
            },
        ),
    ]
