from django.db import models


class CompanyQuerySet(models.QuerySet):
    def for_company(self, company):
        """Filter by company"""
        return self.filter(company=company)

    def active(self):
        return self.filter(is_active=True)


class CompanyManager(models.Manager.from_queryset(CompanyQuerySet)):
    pass
