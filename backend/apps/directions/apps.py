from django.apps import AppConfig


class DirectionsConfig(AppConfig):
    default_auto_field = "django.db.models.BigAutoField"
    name = "apps.directions"
    label = "directions"
    verbose_name = "方向"
