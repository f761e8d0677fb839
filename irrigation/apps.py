from django.apps import AppConfig


class IrrigationConfig(AppConfig):
    default_auto_field = 'django.db.models.BigAutoField'
    name = 'irrigation'
    verbose_name = 'Irrigation'
