from django.db import models
from django.core.validators import RegexValidator
from django.conf import settings as django_settings


class Company(models.Model):
    """
    Legal business entity and tenant boundary. Every commercial document,
    counterparty and product belongs to exactly one company, and users only
    see the companies they are members of.
    """
    # Identifiers
    id = models.BigAutoField(primary_key=True)
    code = models.CharField(
        max_length=20,
        unique=True,
        validators=[RegexValidator(r'^[A-Z0-9]+$')],
        help_text="Unique company code"
    )
    name = models.CharField(max_length=255)
    legal_name = models.CharField(max_length=255, blank=True)
    currency_code = models.CharField(max_length=3, default='INR')

    # Access
    users = models.ManyToManyField(
        django_settings.AUTH_USER_MODEL,
        related_name='companies',
        blank=True,
        help_text='Users allowed to work inside this company'
    )

    # Status
    is_active = models.BooleanField(default=True)

    # Audit
    created_at = models.DateTimeField(auto_now_add=True)
    updated_at = models.DateTimeField(auto_now=True)

    class Meta:
        db_table = 'company'
        verbose_name_plural = "Companies"
        ordering = ['code']
        indexes = [
            models.Index(fields=['code'], name='company_code_idx'),
        ]

    def __str__(self):
        return f"{self.code} - {self.name}"

    def get_default_headquarters(self):
        """The active location flagged as both headquarters and default, if any."""
        return (
            self.locations.filter(is_headquarters=True, is_default=True, is_active=True)
            .order_by('id')
            .first()
        )


class CompanyLocation(models.Model):
    """
    Physical site of a company (head office, plant, warehouse, branch office).
    Invoices and bills are always issued from a location.
    """
    id = models.BigAutoField(primary_key=True)
    company = models.ForeignKey(
        Company,
        on_delete=models.CASCADE,
        related_name='locations',
        help_text='Owning company'
    )
    code = models.CharField(max_length=20)
    name = models.CharField(max_length=255)

    # Geographic
    address_line_1 = models.CharField(max_length=255, blank=True)
    city = models.CharField(max_length=100, blank=True)
    state_province = models.CharField(max_length=100, blank=True)
    country = models.CharField(max_length=100, blank=True)
    postal_code = models.CharField(max_length=20, blank=True)

    # Flags
    is_headquarters = models.BooleanField(default=False)
    is_default = models.BooleanField(default=False)
    is_active = models.BooleanField(default=True)

    # Audit
    created_at = models.DateTimeField(auto_now_add=True)
    updated_at = models.DateTimeField(auto_now=True)

    class Meta:
        db_table = 'company_location'
        unique_together = [['company', 'code']]
        ordering = ['company', 'code']
        indexes = [
            models.Index(fields=['company', 'is_active'], name='company_loc_active_idx'),
        ]

    def __str__(self):
        return f"{self.company.code}/{self.code} - {self.name}"
