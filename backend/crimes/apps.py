from django.apps import AppConfig


class CrimesConfig(AppConfig):
    default_auto_field = "django.db.models.BigAutoField"
    name = "crimes"
    verbose_name = "Crimes"
