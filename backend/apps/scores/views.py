"""评分模块的 API 视图层"""

from __future__ import annotations

from drf_spectacular.utils import OpenApiExample, OpenApiParameter, extend_schema, inline_serializer
from rest_framework import serializers
from rest_framework.request import Request
from rest_framework.response import Response
from rest_framework.views import APIView

from apps.common import response
from apps.common.capabilities import Actor
from apps.common.pagination import clamp_limit
from apps.common.permissions import AllowAny, IsAdmin, IsAuthenticated
from apps.common.schema_utils import (
    api_response_schema,
    id_query_parameter,
    list_response,
    ranking_entry_serializer,
    score_serializer,
)
from apps.common.utils.helpers import to_payload
from apps.common.utils.validators import parse_optional_id

from .schemas import ScoreCreateSchema, ScoreUpdateSchema
from .services import (
    CreateScoreService,
    DeleteScoreService,
    RankingService,
    ReviewerScoreListService,
    SubmissionScoreListService,
    UpdateScoreService,
    UserScoreListService,
    serialize_score,
)

PROBLEM_FILTER = id_query_parameter("problem_id", "按题目过滤")


def _serialize_all(scores) -> list[dict]:
    return [serialize_score(item) for item in scores]


class RankingView(APIView):
    """排行榜（公开）"""

    permission_classes = [AllowAny]

    @extend_schema(
        summary="获取排行榜",
        tags=["ranking"],
        parameters=[
            id_query_parameter("direction_id", "只统计该方向题目下的评分"),
            OpenApiParameter(
                name="limit",
                location=OpenApiParameter.QUERY,
                description="返回条数（1-100，默认 10）",
                required=False,
                type=int,
            ),
        ],
        responses=list_response("Ranking", ranking_entry_serializer(many=True)),
    )
    def get(self, request: Request) -> Response:
        _ = self
        direction_id = parse_optional_id(request.query_params.get("direction_id"))
        limit = clamp_limit(request.query_params.get("limit"))
        return response.success(RankingService().execute(direction_id, limit))


class SubmissionScoreListView(APIView):
    permission_classes = [IsAuthenticated]

    @extend_schema(
        summary="获取提交的评分",
        tags=["scores"],
        responses=list_response("SubmissionScoreList", score_serializer(many=True)),
    )
    def get(self, request: Request, submission_id: int) -> Response:
        _ = (self, request)
        return response.success(_serialize_all(SubmissionScoreListService().execute(submission_id)))


class MyScoreListView(APIView):
    """当前用户收到的评分"""

    permission_classes = [IsAuthenticated]

    @extend_schema(
        summary="我的评分",
        tags=["scores"],
        parameters=[PROBLEM_FILTER],
        responses=list_response("MyScoreList", score_serializer(many=True)),
    )
    def get(self, request: Request) -> Response:
        _ = self
        problem_id = parse_optional_id(request.query_params.get("problem_id"))
        return response.success(_serialize_all(UserScoreListService().execute(request.user.pk, problem_id)))


class UserScoreListView(APIView):
    permission_classes = [IsAuthenticated]

    @extend_schema(
        summary="获取用户的评分",
        tags=["scores"],
        parameters=[PROBLEM_FILTER],
        responses=list_response("UserScoreList", score_serializer(many=True)),
    )
    def get(self, request: Request, user_id: int) -> Response:
        _ = self
        problem_id = parse_optional_id(request.query_params.get("problem_id"))
        return response.success(_serialize_all(UserScoreListService().execute(user_id, problem_id)))


class AdminScoreCreateView(APIView):
    """评分（管理员且为提交所属方向负责人）"""

    permission_classes = [IsAdmin]

    @extend_schema(
        summary="评分",
        description="同一评审人重复评分会覆盖原评分；分数超过提交点最大分值返回 3001",
        tags=["admin-scores"],
        request=inline_serializer(
            name="ScoreCreateRequest",
            fields={
                "score": serializers.IntegerField(min_value=0),
                "comment": serializers.CharField(required=False, allow_blank=True),
                "submission_id": serializers.IntegerField(),
            },
        ),
        responses=api_response_schema("ScoreCreate", data=score_serializer()),
        examples=[
            OpenApiExample(
                "评分示例",
                value={"score": 85, "comment": "结构清晰", "submission_id": 1},
                request_only=True,
            )
        ],
    )
    def post(self, request: Request) -> Response:
        _ = self
        schema = ScoreCreateSchema.from_dict(to_payload(request.data), auto_validate=True)
        score = CreateScoreService().execute(Actor.from_user(request.user), schema)
        return response.success(serialize_score(score))


class AdminMyReviewedScoreListView(APIView):
    permission_classes = [IsAdmin]

    @extend_schema(
        summary="我给出的评分",
        tags=["admin-scores"],
        parameters=[PROBLEM_FILTER],
        responses=list_response("ReviewerScoreList", score_serializer(many=True)),
    )
    def get(self, request: Request) -> Response:
        _ = self
        problem_id = parse_optional_id(request.query_params.get("problem_id"))
        return response.success(_serialize_all(ReviewerScoreListService().execute(request.user.pk, problem_id)))


class AdminScoreDetailView(APIView):
    """修改、删除自己给出的评分"""

    permission_classes = [IsAdmin]

    @extend_schema(
        summary="更新评分",
        tags=["admin-scores"],
        request=inline_serializer(
            name="ScoreUpdateRequest",
            fields={
                "score": serializers.IntegerField(required=False, min_value=0),
                "comment": serializers.CharField(required=False, allow_blank=True),
            },
        ),
        responses=api_response_schema("ScoreUpdate", data=score_serializer()),
    )
    def put(self, request: Request, score_id: int) -> Response:
        _ = self
        schema = ScoreUpdateSchema.from_dict(to_payload(request.data), auto_validate=True)
        score = UpdateScoreService().execute(Actor.from_user(request.user), score_id, schema)
        return response.success(serialize_score(score))

    @extend_schema(
        summary="删除评分",
        tags=["admin-scores"],
        responses=api_response_schema("ScoreDelete"),
    )
    def delete(self, request: Request, score_id: int) -> Response:
        _ = self
        DeleteScoreService().execute(Actor.from_user(request.user), score_id)
        return response.success(None)
