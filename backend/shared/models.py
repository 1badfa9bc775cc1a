from django.conf import settings
from django.db import models

from .managers import CompanyManager


class CompanyAwareModel(models.Model):
    """
    Abstract base model that adds company isolation
    to all transactional data
    """
    company = models.ForeignKey(
        'companies.Company',
        on_delete=models.PROTECT,
        db_index=True,
        help_text="Company this record belongs to"
    )
    created_at = models.DateTimeField(auto_now_add=True)
    updated_at = models.DateTimeField(auto_now=True)
    created_by = models.ForeignKey(
        settings.AUTH_USER_MODEL,
        on_delete=models.SET_NULL,
        null=True,
        blank=True,
        related_name='+'
    )

    objects = CompanyManager()

    class Meta:
        abstract = True

    def save(self, *args, **kwargs):
        # Validate company access
        if not self.company_id:
            raise ValueError("Company must be specified")
        super().save(*args, **kwargs)
