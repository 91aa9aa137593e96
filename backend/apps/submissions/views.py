"""提交模块的 API 视图层"""

from __future__ import annotations

from rest_framework import serializers
from rest_framework.request import Request
from rest_framework.response import Response
from rest_framework.views import APIView
from drf_spectacular.utils import OpenApiExample, extend_schema, inline_serializer

from apps.common import response
from apps.common.capabilities import Actor
from apps.common.permissions import IsAdmin, IsAuthenticated
from apps.common.schema_utils import (
    api_response_schema,
    id_query_parameter,
    list_response,
    submission_serializer,
)
from apps.common.utils.helpers import to_payload
from apps.common.utils.validators import parse_optional_id

from .schemas import SubmissionCreateSchema
from .services import (
    CreateSubmissionService,
    DeleteSubmissionService,
    MySubmissionListService,
    ReviewSubmissionListService,
    SubmissionDetailService,
    serialize_submission,
)


class SubmissionCreateView(APIView):
    """提交答案：同一提交点重复提交会覆盖之前的内容"""

    permission_classes = [IsAuthenticated]

    @extend_schema(
        summary="提交",
        tags=["submissions"],
        request=inline_serializer(
            name="SubmissionCreateRequest",
            fields={
                "content": serializers.CharField(help_text="提交内容，如仓库链接"),
                "problem_id": serializers.IntegerField(),
                "submission_point_id": serializers.IntegerField(),
            },
        ),
        responses=api_response_schema("SubmissionCreate", data=submission_serializer()),
        examples=[
            OpenApiExample(
                "提交示例",
                value={"content": "https://github.com/user/repo", "problem_id": 1, "submission_point_id": 1},
                request_only=True,
            )
        ],
    )
    def post(self, request: Request) -> Response:
        _ = self
        schema = SubmissionCreateSchema.from_dict(to_payload(request.data), auto_validate=True)
        submission = CreateSubmissionService().execute(Actor.from_user(request.user), schema)
        return response.success(serialize_submission(submission))


class MySubmissionListView(APIView):
    permission_classes = [IsAuthenticated]

    @extend_schema(
        summary="我的提交",
        tags=["submissions"],
        parameters=[id_query_parameter("problem_id", "按题目过滤")],
        responses=list_response("MySubmissionList", submission_serializer(many=True)),
    )
    def get(self, request: Request) -> Response:
        _ = self
        problem_id = parse_optional_id(request.query_params.get("problem_id"))
        submissions = MySubmissionListService().execute(request.user.pk, problem_id)
        return response.success([serialize_submission(item) for item in submissions])


class SubmissionDetailView(APIView):
    """查看（本人或管理员）与删除（仅本人）提交"""

    permission_classes = [IsAuthenticated]

    @extend_schema(
        summary="获取提交详情",
        tags=["submissions"],
        responses=api_response_schema("SubmissionDetail", data=submission_serializer()),
    )
    def get(self, request: Request, submission_id: int) -> Response:
        _ = self
        submission = SubmissionDetailService().execute(Actor.from_user(request.user), submission_id)
        return response.success(serialize_submission(submission))

    @extend_schema(
        summary="删除提交",
        description="提交不存在或不属于当前用户时返回 2003；提交的评分一并删除",
        tags=["submissions"],
        responses=api_response_schema("SubmissionDelete"),
    )
    def delete(self, request: Request, submission_id: int) -> Response:
        _ = self
        DeleteSubmissionService().execute(Actor.from_user(request.user), submission_id)
        return response.success(None)


class AdminReviewSubmissionListView(APIView):
    """评审队列（管理员）：只返回自己负责方向下的提交"""

    permission_classes = [IsAdmin]

    @extend_schema(
        summary="待评审提交",
        tags=["admin-submissions"],
        parameters=[id_query_parameter("problem_id", "按题目过滤；不在负责范围内时返回空列表")],
        responses=list_response("ReviewSubmissionList", submission_serializer(many=True)),
    )
    def get(self, request: Request) -> Response:
        _ = self
        problem_id = parse_optional_id(request.query_params.get("problem_id"))
        submissions = ReviewSubmissionListService().execute(request.user.pk, problem_id)
        return response.success([serialize_submission(item) for item in submissions])
