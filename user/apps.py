from django.apps import AppConfig


class UserConfig(AppConfig):
    default_auto_field = 'django.db.models.BigAutoField'
    name = 'user'
    verbose_name = 'Staff accounts'

    def ready(self):
        # register signal handlers
        from . import signals  # noqa: F401
