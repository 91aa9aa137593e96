from django.apps import AppConfig


class SubmissionsConfig(AppConfig):
    """
    Submissions 应用配置：
    - 声明应用路径与默认主键类型，供 Django 注册模型
    """

    default_auto_field = "django.db.models.BigAutoField"
    name = "apps.submissions"
    label = "submissions"
    verbose_name = "提交"
