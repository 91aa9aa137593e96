# apps/common/schema_utils.py
from __future__ import annotations

from typing import Callable

from rest_framework import serializers
from drf_spectacular.utils import inline_serializer, OpenApiParameter


_CACHE: dict[str, type[serializers.Serializer]] = {}


def _cached(name: str, fields_builder: Callable[[], dict], **kwargs) -> serializers.Serializer:
    """
    同名 inline serializer 只生成一次类，之后按需实例化（many/required 等参数）
    """
    if name not in _CACHE:
        _CACHE[name] = type(inline_serializer(name=name, fields=fields_builder()))
    return _CACHE[name](**kwargs)


def api_response_schema(
    name: str,
    data_fields: dict | None = None,
    *,
    data: serializers.Field | None = None,
    extra_serializer: serializers.Field | None = None,
) -> serializers.Serializer:
    """
    构造统一响应 Schema：code/message/data/extra
    - name 用于生成唯一的响应/数据命名
    - data_fields 为 data 内部的字段定义；data 直接指定 data 字段（列表、已有 serializer）
    - 两者都不提供时 data 为 null
    """
    if data is None and data_fields:
        normalized_fields = {}
        for key, value in data_fields.items():
            if isinstance(value, type) and issubclass(value, serializers.Serializer):
                normalized_fields[key] = value()
            else:
                normalized_fields[key] = value
        data = inline_serializer(name=f"{name}Data", fields=normalized_fields)
    if data is None:
        data = serializers.JSONField(allow_null=True, required=False, help_text="无数据时为 null")
    return inline_serializer(
        name=f"{name}Response",
        fields={
            "code": serializers.IntegerField(help_text="业务状态码，0 表示成功"),
            "message": serializers.CharField(help_text="提示信息"),
            "data": data,
            "extra": extra_serializer
            if extra_serializer
            else serializers.DictField(required=False, allow_null=True, help_text="附加信息"),
        },
    )


def pagination_meta_serializer():
    return _cached(
        "PaginationMeta",
        lambda: {
            "page": serializers.IntegerField(help_text="当前页码（从 1 开始）"),
            "page_size": serializers.IntegerField(help_text="每页条数"),
            "total": serializers.IntegerField(help_text="总条数"),
            "total_pages": serializers.IntegerField(help_text="总页数", required=False, allow_null=True),
            "has_next": serializers.BooleanField(help_text="是否有下一页"),
            "has_previous": serializers.BooleanField(help_text="是否有上一页"),
        },
    )


def pagination_parameters() -> list[OpenApiParameter]:
    """通用分页查询参数"""
    return [
        OpenApiParameter(
            name="page",
            location=OpenApiParameter.QUERY,
            description="页码（从 1 开始，默认 1）",
            required=False,
            type=int,
        ),
        OpenApiParameter(
            name="page_size",
            location=OpenApiParameter.QUERY,
            description="每页条数（1-100，默认 10）",
            required=False,
            type=int,
        ),
    ]


def id_query_parameter(name: str, description: str) -> OpenApiParameter:
    """可选的整数过滤参数（direction_id / problem_id）"""
    return OpenApiParameter(
        name=name,
        location=OpenApiParameter.QUERY,
        description=description,
        required=False,
        type=int,
    )


def list_response(
    name: str,
    item_serializer: serializers.Serializer,
    *,
    paginated: bool = False,
):
    """列表响应：data 为数组，支持分页元信息"""
    return api_response_schema(
        name,
        data=item_serializer,
        extra_serializer=pagination_meta_serializer() if paginated else None,
    )


# 常用数据结构
def _user_fields() -> dict:
    return {
        "id": serializers.IntegerField(),
        "username": serializers.CharField(),
        "nickname": serializers.CharField(),
        "real_name": serializers.CharField(),
        "college": serializers.CharField(),
        "student_id": serializers.CharField(),
        "qq": serializers.CharField(allow_blank=True),
        "email": serializers.CharField(allow_blank=True),
        "is_admin": serializers.BooleanField(),
        "created_at": serializers.DateTimeField(),
        "updated_at": serializers.DateTimeField(),
    }


def user_serializer(**kwargs):
    """用户信息（不含密码）"""
    return _cached("User", _user_fields, **kwargs)


def login_result_serializer(**kwargs):
    return _cached(
        "LoginResult",
        lambda: {
            "token": serializers.CharField(help_text="Bearer 访问令牌"),
            "user": user_serializer(),
        },
        **kwargs,
    )


def _direction_fields() -> dict:
    return {
        "id": serializers.IntegerField(),
        "name": serializers.CharField(),
        "description": serializers.CharField(allow_blank=True),
        "created_at": serializers.DateTimeField(),
        "updated_at": serializers.DateTimeField(),
    }


def direction_summary_serializer(**kwargs):
    return _cached("DirectionSummary", _direction_fields, **kwargs)


def direction_serializer(**kwargs):
    """方向：列表附带负责人，详情额外附带题目"""
    return _cached(
        "Direction",
        lambda: {
            **_direction_fields(),
            "managers": user_serializer(many=True),
            "problems": problem_summary_serializer(many=True, required=False),
        },
        **kwargs,
    )


def submission_point_serializer(**kwargs):
    return _cached(
        "SubmissionPoint",
        lambda: {
            "id": serializers.IntegerField(),
            "name": serializers.CharField(),
            "max_score": serializers.IntegerField(),
            "problem_id": serializers.IntegerField(),
            "created_at": serializers.DateTimeField(),
            "updated_at": serializers.DateTimeField(),
        },
        **kwargs,
    )


def _problem_fields() -> dict:
    return {
        "id": serializers.IntegerField(),
        "title": serializers.CharField(),
        "description": serializers.CharField(allow_blank=True),
        "direction_id": serializers.IntegerField(),
        "created_at": serializers.DateTimeField(),
        "updated_at": serializers.DateTimeField(),
    }


def problem_summary_serializer(**kwargs):
    return _cached("ProblemSummary", _problem_fields, **kwargs)


def problem_serializer(**kwargs):
    """题目：附带所属方向与提交点"""
    return _cached(
        "Problem",
        lambda: {
            **_problem_fields(),
            "direction": direction_summary_serializer(required=False),
            "submission_points": submission_point_serializer(many=True, required=False),
        },
        **kwargs,
    )


def _submission_fields() -> dict:
    return {
        "id": serializers.IntegerField(),
        "content": serializers.CharField(),
        "user_id": serializers.IntegerField(),
        "problem_id": serializers.IntegerField(),
        "submission_point_id": serializers.IntegerField(),
        "created_at": serializers.DateTimeField(),
        "updated_at": serializers.DateTimeField(),
    }


def submission_summary_serializer(**kwargs):
    return _cached("SubmissionSummary", _submission_fields, **kwargs)


def _score_fields() -> dict:
    return {
        "id": serializers.IntegerField(),
        "score": serializers.IntegerField(),
        "comment": serializers.CharField(allow_blank=True),
        "user_id": serializers.IntegerField(help_text="被评分用户"),
        "submission_id": serializers.IntegerField(),
        "reviewer_id": serializers.IntegerField(),
        "created_at": serializers.DateTimeField(),
        "updated_at": serializers.DateTimeField(),
    }


def score_summary_serializer(**kwargs):
    return _cached("ScoreSummary", _score_fields, **kwargs)


def score_serializer(**kwargs):
    """评分：附带被评分用户、提交与评分人"""
    return _cached(
        "Score",
        lambda: {
            **_score_fields(),
            "user": user_serializer(),
            "submission": submission_summary_serializer(),
            "reviewer": user_serializer(),
        },
        **kwargs,
    )


def submission_serializer(**kwargs):
    """提交：附带用户、题目、提交点、评分列表与总分"""
    return _cached(
        "Submission",
        lambda: {
            **_submission_fields(),
            "user": user_serializer(),
            "problem": problem_summary_serializer(),
            "submission_point": submission_point_serializer(),
            "scores": score_summary_serializer(many=True),
            "total_score": serializers.IntegerField(required=False, help_text="所有评分之和"),
        },
        **kwargs,
    )


def ranking_entry_serializer(**kwargs):
    return _cached(
        "RankingEntry",
        lambda: {
            "user_id": serializers.IntegerField(),
            "nickname": serializers.CharField(),
            "score": serializers.IntegerField(help_text="累计得分"),
        },
        **kwargs,
    )
