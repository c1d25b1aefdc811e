from django.apps import AppConfig


class PinningInternalsConfig(AppConfig):
    default_auto_field = 'django.db.models.BigAutoField'
    name = 'pinning_internals'
