from django.apps import AppConfig


class GolinksConfig(AppConfig):
    default_auto_field = 'django.db.models.BigAutoField'
    name = 'golinks'
    verbose_name = "Go Links"
