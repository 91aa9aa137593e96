"""方向模块的 API 视图层"""

from __future__ import annotations

from rest_framework import serializers
from rest_framework.request import Request
from rest_framework.response import Response
from rest_framework.views import APIView
from drf_spectacular.utils import OpenApiExample, extend_schema, inline_serializer

from apps.common import response
from apps.common.permissions import AllowAny, IsAdmin
from apps.common.schema_utils import api_response_schema, direction_serializer, list_response
from apps.common.utils.helpers import to_payload

from .schemas import DirectionCreateSchema, DirectionUpdateSchema
from .services import (
    CreateDirectionService,
    DeleteDirectionService,
    DirectionDetailService,
    DirectionListService,
    UpdateDirectionService,
    serialize_direction,
)


def _direction_request(name: str, *, partial: bool) -> serializers.Serializer:
    return inline_serializer(
        name=name,
        fields={
            "name": serializers.CharField(required=not partial, allow_blank=partial),
            "description": serializers.CharField(required=False, allow_blank=True),
            "manager_ids": serializers.ListField(
                child=serializers.IntegerField(),
                required=False,
                help_text="负责人用户 ID；修改时传 [] 清空，省略不修改",
            ),
        },
    )


class DirectionListView(APIView):
    """方向列表（公开）"""

    permission_classes = [AllowAny]

    @extend_schema(
        summary="获取方向列表",
        tags=["directions"],
        responses=list_response("DirectionList", direction_serializer(many=True)),
    )
    def get(self, request: Request) -> Response:
        _ = (self, request)
        directions = DirectionListService().execute()
        return response.success([serialize_direction(item) for item in directions])


class DirectionDetailView(APIView):
    """方向详情（公开），附带负责人与题目"""

    permission_classes = [AllowAny]

    @extend_schema(
        summary="获取方向详情",
        tags=["directions"],
        responses=api_response_schema("DirectionDetail", data=direction_serializer()),
    )
    def get(self, request: Request, direction_id: int) -> Response:
        _ = (self, request)
        direction = DirectionDetailService().execute(direction_id)
        return response.success(serialize_direction(direction, include_problems=True))


class AdminDirectionCreateView(APIView):
    """创建方向（管理员）"""

    permission_classes = [IsAdmin]

    @extend_schema(
        summary="创建方向",
        tags=["admin-directions"],
        request=_direction_request("DirectionCreateRequest", partial=False),
        responses=api_response_schema("DirectionCreate", data=direction_serializer()),
        examples=[
            OpenApiExample(
                "创建方向示例",
                value={"name": "后端", "description": "服务端开发", "manager_ids": [2, 3]},
                request_only=True,
            )
        ],
    )
    def post(self, request: Request) -> Response:
        _ = self
        schema = DirectionCreateSchema.from_dict(to_payload(request.data), auto_validate=True)
        direction = CreateDirectionService().execute(schema)
        return response.success(serialize_direction(direction))


class AdminDirectionDetailView(APIView):
    """修改、删除方向（管理员）"""

    permission_classes = [IsAdmin]

    @extend_schema(
        summary="更新方向",
        tags=["admin-directions"],
        request=_direction_request("DirectionUpdateRequest", partial=True),
        responses=api_response_schema("DirectionUpdate", data=direction_serializer()),
    )
    def put(self, request: Request, direction_id: int) -> Response:
        _ = self
        schema = DirectionUpdateSchema.from_dict(to_payload(request.data), auto_validate=True)
        direction = UpdateDirectionService().execute(direction_id, schema)
        return response.success(serialize_direction(direction))

    @extend_schema(
        summary="删除方向",
        description="方向下仍有题目时返回 3003",
        tags=["admin-directions"],
        responses=api_response_schema("DirectionDelete"),
    )
    def delete(self, request: Request, direction_id: int) -> Response:
        _ = (self, request)
        DeleteDirectionService().execute(direction_id)
        return response.success(None)
