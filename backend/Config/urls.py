"""
URL configuration for Config project.

业务接口统一挂在 /api/ 下，各模块 urls 内的路径均不带结尾斜杠
"""
from django.conf import settings
from django.contrib import admin
from django.urls import include, path
from drf_spectacular.views import SpectacularAPIView, SpectacularRedocView, SpectacularSwaggerView

from apps.common.health import HealthCheckView

# Admin 中文化：修改后台标题/页眉/站点名称，避免默认英文显示
_brand = getattr(settings, "SITE_BRAND", "GlimGate")
admin.site.site_header = f"{_brand} 管理后台"
admin.site.site_title = _brand
admin.site.index_title = "管理控制台"

urlpatterns = [
    path('admin/', admin.site.urls),
    path('health', HealthCheckView.as_view(), name='health'),
    path('api/', include('apps.accounts.urls')),
    path('api/', include('apps.directions.urls')),
    path('api/', include('apps.problems.urls')),
    path('api/', include('apps.submissions.urls')),
    path('api/', include('apps.scores.urls')),
    # OpenAPI 文档：提供 schema JSON 及 UI，仅供内部/前端获取接口定义
    path('api/schema/', SpectacularAPIView.as_view(), name='schema'),
    path('api/schema/swagger-ui/', SpectacularSwaggerView.as_view(url_name='schema'), name='swagger-ui'),
    path('api/schema/redoc/', SpectacularRedocView.as_view(url_name='schema'), name='redoc'),
]
