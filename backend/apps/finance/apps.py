from django.apps import AppConfig


class FinanceConfig(AppConfig):
    default_auto_field = 'django.db.models.BigAutoField'
    name = 'apps.finance'

    def ready(self):
        # Register invoice and bill document types with the engine.
        from . import documents  # noqa: F401
