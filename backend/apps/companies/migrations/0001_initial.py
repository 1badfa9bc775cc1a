import django.core.validators
import django.db.models.deletion
from django.conf import settings
from django.db import migrations, models


class Migration(migrations.Migration):

    initial = True

    dependencies = [
        migrations.swappable_dependency(settings.AUTH_USER_MODEL),
    ]

    operations = [
        migrations.CreateModel(
            name="Company",
            fields=[
                ("id", models.BigAutoField(primary_key=True, serialize=False)),
                (
                    "code",
                    models.CharField(
                        help_text="Unique company code",
                        max_length=20,
                        unique=True,
                        validators=[django.core.validators.RegexValidator("^[A-Z0-9]+$")],
                    ),
                ),
                ("name", models.CharField(max_length=255)),
                ("legal_name", models.CharField(blank=True, max_length=255)),
                ("currency_code", models.CharField(default="INR", max_length=3)),
                ("is_active", models.BooleanField(default=True)),
                ("created_at", models.DateTimeField(auto_now_add=True)),
                ("updated_at", models.DateTimeField(auto_now=True)),
                (
                    "users",
                    models.ManyToManyField(
                        blank=True,
                        help_text="Users allowed to work inside this company",
                        related_name="companies",
                        to=settings.AUTH_USER_MODEL,
                    ),
                ),
            ],
            options={
                "db_table": "company",
                "verbose_name_plural": "Companies",
                "ordering": ["code"],
                "indexes": [models.Index(fields=["code"], name="company_code_idx")],
            },
        ),
        migrations.CreateModel(
            name="CompanyLocation",
            fields=[
                ("id", models.BigAutoField(primary_key=True, serialize=False)),
                ("code", models.CharField(max_length=20)),
                ("name", models.CharField(max_length=255)),
                ("address_line_1", models.CharField(blank=True, max_length=255)),
                ("city", models.CharField(blank=True, max_length=100)),
                ("state_province", models.CharField(blank=True, max_length=100)),
                ("country", models.CharField(blank=True, max_length=100)),
                ("postal_code", models.CharField(blank=True, max_length=20)),
                ("is_headquarters", models.BooleanField(default=False)),
                ("is_default", models.BooleanField(default=False)),
                ("is_active", models.BooleanField(default=True)),
                ("created_at", models.DateTimeField(auto_now_add=True)),
                ("updated_at", models.DateTimeField(auto_now=True)),
                (
                    "company",
                    models.ForeignKey(
                        help_text="Owning company",
                        on_delete=django.db.models.deletion.CASCADE,
                        related_name="locations",
                        to="companies.company",
                    ),
                ),
            ],
            options={
                "db_table": "company_location",
                "ordering": ["company", "code"],
                "unique_together": {("company", "code")},
                "indexes": [models.Index(fields=["company", "is_active"], name="company_loc_active_idx")],
            },
        ),
    ]
