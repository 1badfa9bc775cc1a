"""
Product Model - items that appear on order, purchase, invoice and bill lines.
"""
from django.db import models

from shared.models import CompanyAwareModel


class Product(CompanyAwareModel):
    """
    Saleable or purchasable item. Lines keep their own item code and price, so
    a product only anchors the line to master data.
    """

    PRODUCT_TYPE_CHOICES = [
        ('GOODS', 'Goods'),
        ('SERVICE', 'Service'),
    ]

    # Identification
    code = models.CharField(max_length=50, db_index=True)
    name = models.CharField(max_length=255)
    description = models.TextField(blank=True)

    # Classification
    product_type = models.CharField(
        max_length=20,
        choices=PRODUCT_TYPE_CHOICES,
        default='GOODS',
        help_text="Type of product"
    )
    unit_of_measure = models.CharField(max_length=20, blank=True, default='PCS')

    # Pricing
    selling_price = models.DecimalField(
        max_digits=20,
        decimal_places=2,
        default=0,
        help_text="Standard selling price"
    )
    cost_price = models.DecimalField(
        max_digits=20,
        decimal_places=2,
        default=0,
        help_text="Reference purchase cost"
    )
    hsn_code = models.CharField(
        max_length=20,
        blank=True,
        help_text="Harmonized System Nomenclature code for GST/VAT"
    )

    is_active = models.BooleanField(default=True)

    class Meta:
        db_table = 'sales_product'
        unique_together = ('company', 'code')
        verbose_name = 'Product'
        verbose_name_plural = 'Products'
        ordering = ['code']

    def __str__(self):
        return f"{self.code} - {self.name}"
