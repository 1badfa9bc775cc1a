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


def payable_document_fields():
    return [
        ("number", models.CharField(blank=True, db_index=True, max_length=32)),
        ("issue_date", models.DateField(default=django.utils.timezone.localdate)),
        ("currency", models.CharField(default=apps.documents.models.default_currency, max_length=3)),
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
                on_delete=django.db.models.deletion.PROTECT,
                related_name="+",
                to="companies.companylocation",
            ),
        ),
        ("due_date", models.DateField()),
        (
            "payment_terms",
            models.CharField(
                choices=apps.documents.models.PaymentTerms.choices, default="NET_30", max_length=16
            ),
        ),
        ("amount_paid", models.DecimalField(decimal_places=2, default=Decimal("0"), max_digits=20)),
        ("balance_due", models.DecimalField(decimal_places=2, default=Decimal("0"), max_digits=20)),
        (
            "payment_method",
            models.CharField(blank=True, choices=apps.documents.models.PaymentMethod.choices, max_length=16),
        ),
        ("payment_date", models.DateField(blank=True, null=True)),
        ("transaction_ref", models.CharField(blank=True, max_length=64)),
    ]


PERCENT_VALIDATORS = [
    django.core.validators.MinValueValidator(Decimal("0")),
    django.core.validators.MaxValueValidator(Decimal("100")),
]


def line_item_fields():
    return [
        ("id", models.BigAutoField(auto_created=True, primary_key=True, serialize=False, verbose_name="ID")),
        ("line_number", models.PositiveIntegerField()),
        ("item_code", models.CharField(max_length=64)),
        ("description", models.CharField(blank=True, max_length=255)),
        ("quantity", models.DecimalField(decimal_places=3, max_digits=15)),
        ("unit_of_measure", models.CharField(blank=True, max_length=20)),
        (
            "discount_percent",
            models.DecimalField(decimal_places=2, default=Decimal("0"), max_digits=5, validators=PERCENT_VALIDATORS),
        ),
        (
            "tax_rate",
            models.DecimalField(decimal_places=2, default=Decimal("0"), max_digits=5, validators=PERCENT_VALIDATORS),
        ),
        ("discount_amount", models.DecimalField(decimal_places=2, default=Decimal("0"), max_digits=20)),
        ("tax_amount", models.DecimalField(decimal_places=2, default=Decimal("0"), max_digits=20)),
        ("line_amount", models.DecimalField(decimal_places=2, default=Decimal("0"), max_digits=20)),
        ("notes", models.TextField(blank=True)),
    ]


class Migration(migrations.Migration):

    initial = True

    dependencies = [
        ("companies", "0001_initial"),
        ("sales", "0001_initial"),
        ("procurement", "0001_initial"),
        migrations.swappable_dependency(settings.AUTH_USER_MODEL),
    ]

    operations = [
        migrations.CreateModel(
            name="Invoice",
            fields=[
                ("id", models.BigAutoField(auto_created=True, primary_key=True, serialize=False, verbose_name="ID")),
                *company_aware_fields(),
                *payable_document_fields(),
                (
                    "customer",
                    models.ForeignKey(
                        blank=True,
                        null=True,
                        on_delete=django.db.models.deletion.PROTECT,
                        related_name="invoices",
                        to="sales.customer",
                    ),
                ),
                ("customer_name", models.CharField(max_length=255)),
                ("customer_code", models.CharField(blank=True, max_length=20)),
                (
                    "sales_order",
                    models.ForeignKey(
                        blank=True,
                        help_text="Sales order this invoice was raised from",
                        null=True,
                        on_delete=django.db.models.deletion.PROTECT,
                        related_name="invoices",
                        to="sales.salesorder",
                    ),
                ),
                (
                    "status",
                    models.CharField(
                        choices=[
                            ("DRAFT", "Draft"),
                            ("SENT", "Sent"),
                            ("PARTIALLY_PAID", "Partially Paid"),
                            ("PAID", "Paid"),
                            ("OVERDUE", "Overdue"),
                            ("CANCELLED", "Cancelled"),
                        ],
                        default="DRAFT",
                        max_length=20,
                    ),
                ),
                ("terms_conditions", models.TextField(blank=True)),
                ("bank_details", models.TextField(blank=True)),
            ],
            options={
                "db_table": "finance_invoice",
                "ordering": ["-issue_date", "-created_at"],
                "abstract": False,
                "indexes": [
                    models.Index(fields=["company", "status"], name="finance_invoice_status_idx"),
                    models.Index(fields=["company", "due_date"], name="finance_invoice_due_idx"),
                ],
                "constraints": [
                    models.UniqueConstraint(fields=("company", "number"), name="finance_invoice_unique_number"),
                ],
            },
        ),
        migrations.CreateModel(
            name="InvoiceLine",
            fields=[
                *line_item_fields(),
                (
                    "document",
                    models.ForeignKey(
                        on_delete=django.db.models.deletion.CASCADE,
                        related_name="lines",
                        to="finance.invoice",
                    ),
                ),
                (
                    "product",
                    models.ForeignKey(
                        blank=True,
                        null=True,
                        on_delete=django.db.models.deletion.PROTECT,
                        related_name="invoice_lines",
                        to="sales.product",
                    ),
                ),
                ("unit_price", models.DecimalField(decimal_places=2, max_digits=20)),
            ],
            options={
                "db_table": "finance_invoice_line",
                "ordering": ["line_number"],
                "abstract": False,
                "constraints": [
                    models.UniqueConstraint(fields=("document", "line_number"), name="finance_invoiceline_unique_line"),
                ],
            },
        ),
        migrations.CreateModel(
            name="Bill",
            fields=[
                ("id", models.BigAutoField(auto_created=True, primary_key=True, serialize=False, verbose_name="ID")),
                *company_aware_fields(),
                *payable_document_fields(),
                (
                    "supplier",
                    models.ForeignKey(
                        blank=True,
                        null=True,
                        on_delete=django.db.models.deletion.PROTECT,
                        related_name="bills",
                        to="procurement.supplier",
                    ),
                ),
                ("supplier_name", models.CharField(max_length=255)),
                ("supplier_code", models.CharField(blank=True, max_length=20)),
                (
                    "purchase_order",
                    models.ForeignKey(
                        blank=True,
                        help_text="Purchase order this bill was recorded against",
                        null=True,
                        on_delete=django.db.models.deletion.PROTECT,
                        related_name="bills",
                        to="procurement.purchaseorder",
                    ),
                ),
                (
                    "status",
                    models.CharField(
                        choices=[
                            ("DRAFT", "Draft"),
                            ("RECEIVED", "Received"),
                            ("PARTIALLY_PAID", "Partially Paid"),
                            ("PAID", "Paid"),
                            ("OVERDUE", "Overdue"),
                            ("CANCELLED", "Cancelled"),
                        ],
                        default="DRAFT",
                        max_length=20,
                    ),
                ),
                ("supplier_invoice_no", models.CharField(blank=True, max_length=64)),
            ],
            options={
                "db_table": "finance_bill",
                "ordering": ["-issue_date", "-created_at"],
                "abstract": False,
                "indexes": [
                    models.Index(fields=["company", "status"], name="finance_bill_status_idx"),
                    models.Index(fields=["company", "due_date"], name="finance_bill_due_idx"),
                ],
                "constraints": [
                    models.UniqueConstraint(fields=("company", "number"), name="finance_bill_unique_number"),
                ],
            },
        ),
        migrations.CreateModel(
            name="BillLine",
            fields=[
                *line_item_fields(),
                (
                    "document",
                    models.ForeignKey(
                        on_delete=django.db.models.deletion.CASCADE,
                        related_name="lines",
                        to="finance.bill",
                    ),
                ),
                (
                    "product",
                    models.ForeignKey(
                        blank=True,
                        null=True,
                        on_delete=django.db.models.deletion.PROTECT,
                        related_name="bill_lines",
                        to="sales.product",
                    ),
                ),
                ("unit_cost", models.DecimalField(decimal_places=2, max_digits=20)),
            ],
            options={
                "db_table": "finance_bill_line",
                "ordering": ["line_number"],
                "abstract": False,
                "constraints": [
                    models.UniqueConstraint(fields=("document", "line_number"), name="finance_billline_unique_line"),
                ],
            },
        ),
    ]
