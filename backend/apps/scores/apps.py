from django.apps import AppConfig


class ScoresConfig(AppConfig):
    default_auto_field = "django.db.models.BigAutoField"
    name = "apps.scores"
    label = "scores"
    verbose_name = "评分"
