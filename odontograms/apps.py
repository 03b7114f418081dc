from django.apps import AppConfig


class OdontogramsConfig(AppConfig):
    default_auto_field = 'django.db.models.BigAutoField'
    name = 'odontograms'
    verbose_name = 'Odontograms'
