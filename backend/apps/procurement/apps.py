from django.apps import AppConfig


class ProcurementConfig(AppConfig):
    default_auto_field = 'django.db.models.BigAutoField'
    name = 'apps.procurement'
    verbose_name = 'Procurement'

    def ready(self):
        # Register the purchase order document type with the document engine
        from . import documents  # noqa: F401
