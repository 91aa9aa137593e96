from django.apps import AppConfig


class CommonConfig(AppConfig):
    """
    Common 应用：只承载跨模块基础设施（异常、响应、认证、日志等），不定义模型
    """

    default_auto_field = "django.db.models.BigAutoField"
    name = "apps.common"
    label = "common"
    verbose_name = "通用组件"
