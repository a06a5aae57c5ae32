from django.apps import AppConfig


class PaymentsConfig(AppConfig):
    """Hostel fee payments and their Remita references."""
    default_auto_field = 'django.db.models.BigAutoField'
    name = 'apps.payments'
    verbose_name = 'Hostel Payments'
