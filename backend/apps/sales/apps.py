from django.apps import AppConfig


class SalesConfig(AppConfig):
    default_auto_field = 'django.db.models.BigAutoField'
    name = 'apps.sales'
    verbose_name = 'Sales'

    def ready(self):
        # Register the sales order document type with the document engine
        from . import documents  # noqa: F401
