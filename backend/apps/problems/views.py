"""题目模块的 API 视图层

公开接口：题目列表 / 详情 / 提交点列表
管理接口：题目与提交点的增删改，需管理员身份且通过方向授权
"""

from __future__ import annotations

from rest_framework import serializers
from rest_framework.request import Request
from rest_framework.response import Response
from rest_framework.views import APIView
from drf_spectacular.utils import OpenApiExample, extend_schema, inline_serializer

from apps.common import response
from apps.common.capabilities import Actor
from apps.common.permissions import AllowAny, IsAdmin
from apps.common.schema_utils import (
    api_response_schema,
    id_query_parameter,
    list_response,
    problem_serializer,
    submission_point_serializer,
)
from apps.common.utils.helpers import to_payload
from apps.common.utils.validators import parse_optional_id

from .schemas import (
    ProblemCreateSchema,
    ProblemUpdateSchema,
    SubmissionPointCreateSchema,
    SubmissionPointUpdateSchema,
)
from .services import (
    CreateProblemService,
    CreateSubmissionPointService,
    DeleteProblemService,
    DeleteSubmissionPointService,
    ProblemDetailService,
    ProblemListService,
    SubmissionPointListService,
    UpdateProblemService,
    UpdateSubmissionPointService,
    serialize_problem,
    serialize_submission_point,
)


class ProblemListView(APIView):
    """题目列表（公开）"""

    permission_classes = [AllowAny]

    @extend_schema(
        summary="获取题目列表",
        tags=["problems"],
        parameters=[id_query_parameter("direction_id", "按方向过滤")],
        responses=list_response("ProblemList", problem_serializer(many=True)),
    )
    def get(self, request: Request) -> Response:
        _ = self
        direction_id = parse_optional_id(request.query_params.get("direction_id"))
        problems = ProblemListService().execute(direction_id)
        return response.success([serialize_problem(item) for item in problems])


class ProblemDetailView(APIView):
    permission_classes = [AllowAny]

    @extend_schema(
        summary="获取题目详情",
        tags=["problems"],
        responses=api_response_schema("ProblemDetail", data=problem_serializer()),
    )
    def get(self, request: Request, problem_id: int) -> Response:
        _ = (self, request)
        problem = ProblemDetailService().execute(problem_id)
        return response.success(serialize_problem(problem))


class SubmissionPointListView(APIView):
    permission_classes = [AllowAny]

    @extend_schema(
        summary="获取题目的提交点",
        tags=["problems"],
        responses=list_response("SubmissionPointList", submission_point_serializer(many=True)),
    )
    def get(self, request: Request, problem_id: int) -> Response:
        _ = (self, request)
        points = SubmissionPointListService().execute(problem_id)
        return response.success([serialize_submission_point(item) for item in points])


class AdminProblemCreateView(APIView):
    """创建题目（管理员；非超级权限时需为方向负责人）"""

    permission_classes = [IsAdmin]

    @extend_schema(
        summary="创建题目",
        tags=["admin-problems"],
        request=inline_serializer(
            name="ProblemCreateRequest",
            fields={
                "title": serializers.CharField(),
                "description": serializers.CharField(),
                "direction_id": serializers.IntegerField(),
            },
        ),
        responses=api_response_schema("ProblemCreate", data=problem_serializer()),
        examples=[
            OpenApiExample(
                "创建题目示例",
                value={"title": "实现一个 REST API", "description": "使用任意框架", "direction_id": 1},
                request_only=True,
            )
        ],
    )
    def post(self, request: Request) -> Response:
        _ = self
        schema = ProblemCreateSchema.from_dict(to_payload(request.data), auto_validate=True)
        problem = CreateProblemService().execute(Actor.from_user(request.user), schema)
        return response.success(serialize_problem(problem))


class AdminProblemDetailView(APIView):
    permission_classes = [IsAdmin]

    @extend_schema(
        summary="更新题目",
        tags=["admin-problems"],
        request=inline_serializer(
            name="ProblemUpdateRequest",
            fields={
                "title": serializers.CharField(required=False, allow_blank=True),
                "description": serializers.CharField(required=False, allow_blank=True),
            },
        ),
        responses=api_response_schema("ProblemUpdate", data=problem_serializer()),
    )
    def put(self, request: Request, problem_id: int) -> Response:
        _ = self
        schema = ProblemUpdateSchema.from_dict(to_payload(request.data), auto_validate=True)
        problem = UpdateProblemService().execute(Actor.from_user(request.user), problem_id, schema)
        return response.success(serialize_problem(problem))

    @extend_schema(
        summary="删除题目",
        description="已有提交记录时返回 3003；提交点随题目一并删除",
        tags=["admin-problems"],
        responses=api_response_schema("ProblemDelete"),
    )
    def delete(self, request: Request, problem_id: int) -> Response:
        _ = self
        DeleteProblemService().execute(Actor.from_user(request.user), problem_id)
        return response.success(None)


class AdminSubmissionPointCreateView(APIView):
    permission_classes = [IsAdmin]

    @extend_schema(
        summary="创建提交点",
        tags=["admin-problems"],
        request=inline_serializer(
            name="SubmissionPointCreateRequest",
            fields={
                "name": serializers.CharField(),
                "max_score": serializers.IntegerField(min_value=1),
            },
        ),
        responses=api_response_schema("SubmissionPointCreate", data=submission_point_serializer()),
    )
    def post(self, request: Request, problem_id: int) -> Response:
        _ = self
        schema = SubmissionPointCreateSchema.from_dict(to_payload(request.data), auto_validate=True)
        point = CreateSubmissionPointService().execute(Actor.from_user(request.user), problem_id, schema)
        return response.success(serialize_submission_point(point))


class AdminSubmissionPointDetailView(APIView):
    permission_classes = [IsAdmin]

    @extend_schema(
        summary="更新提交点",
        tags=["admin-problems"],
        request=inline_serializer(
            name="SubmissionPointUpdateRequest",
            fields={
                "name": serializers.CharField(required=False, allow_blank=True),
                "max_score": serializers.IntegerField(required=False, min_value=1),
            },
        ),
        responses=api_response_schema("SubmissionPointUpdate", data=submission_point_serializer()),
    )
    def put(self, request: Request, point_id: int) -> Response:
        _ = self
        schema = SubmissionPointUpdateSchema.from_dict(to_payload(request.data), auto_validate=True)
        point = UpdateSubmissionPointService().execute(Actor.from_user(request.user), point_id, schema)
        return response.success(serialize_submission_point(point))

    @extend_schema(
        summary="删除提交点",
        description="已有提交记录时返回 3003",
        tags=["admin-problems"],
        responses=api_response_schema("SubmissionPointDelete"),
    )
    def delete(self, request: Request, point_id: int) -> Response:
        _ = self
        DeleteSubmissionPointService().execute(Actor.from_user(request.user), point_id)
        return response.success(None)
