from __future__ import annotations

from django.db import connection
from drf_spectacular.utils import extend_schema
from rest_framework import serializers
from rest_framework.request import Request
from rest_framework.response import Response
from rest_framework.views import APIView

from apps.common import response
from apps.common.permissions import AllowAny
from apps.common.schema_utils import api_response_schema


class HealthCheckView(APIView):
    """探活：不做认证，只对数据库执行一次 SELECT 1；数据库不可用时由异常处理器返回 5001"""

    permission_classes = [AllowAny]
    authentication_classes: list = []

    @extend_schema(
        summary="健康检查",
        tags=["system"],
        request=None,
        responses=api_response_schema(
            "Health",
            {"status": serializers.CharField(), "database": serializers.CharField()},
        ),
    )
    def get(self, request: Request) -> Response:
        _ = request
        with connection.cursor() as cursor:
            cursor.execute("SELECT 1")
        return response.success({"status": "ok", "database": "ok"})
