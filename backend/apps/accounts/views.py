"""账户模块的 API 视图层

每个接口仅负责：
- 接收并校验参数（Schema）
- 调用对应业务 Service
- 使用统一响应封装成功结果
"""

from __future__ import annotations

from rest_framework import serializers
from rest_framework.request import Request
from rest_framework.response import Response
from rest_framework.views import APIView
from drf_spectacular.utils import OpenApiExample, extend_schema, inline_serializer

from apps.common import response
from apps.common.pagination import clamp_page, clamp_page_size, paginated_response
from apps.common.permissions import AllowAny, IsAdmin, IsAuthenticated
from apps.common.schema_utils import (
    api_response_schema,
    list_response,
    login_result_serializer,
    pagination_parameters,
    user_serializer,
)
from apps.common.utils.helpers import to_payload

from .schemas import LoginSchema, RegisterSchema, UserUpdateSchema
from .services import (
    DeleteUserService,
    LoginService,
    RegisterService,
    UpdateUserService,
    UserDetailService,
    UserListService,
    serialize_user,
)


class RegisterView(APIView):
    """用户注册接口：校验必填项与用户名唯一后创建账户"""

    permission_classes = [AllowAny]

    @extend_schema(
        summary="注册账户",
        tags=["auth"],
        request=inline_serializer(
            name="RegisterRequest",
            fields={
                "username": serializers.CharField(),
                "password": serializers.CharField(min_length=6),
                "nickname": serializers.CharField(),
                "real_name": serializers.CharField(),
                "college": serializers.CharField(),
                "student_id": serializers.CharField(),
                "qq": serializers.CharField(required=False, allow_blank=True),
                "email": serializers.EmailField(required=False, allow_blank=True),
            },
        ),
        responses=api_response_schema("Register", data=user_serializer()),
        examples=[
            OpenApiExample(
                "注册请求示例",
                value={
                    "username": "user123",
                    "password": "password123",
                    "nickname": "小明",
                    "real_name": "张三",
                    "college": "计算机学院",
                    "student_id": "2021001001",
                    "qq": "123456789",
                    "email": "user@example.com",
                },
                request_only=True,
            )
        ],
    )
    def post(self, request: Request) -> Response:
        _ = self
        schema = RegisterSchema.from_dict(to_payload(request.data), auto_validate=True)
        user = RegisterService().execute(schema)
        return response.success(serialize_user(user))


class LoginView(APIView):
    """用户登录接口：返回访问令牌与用户信息"""

    permission_classes = [AllowAny]

    @extend_schema(
        summary="登录账户",
        tags=["auth"],
        request=inline_serializer(
            name="LoginRequest",
            fields={
                "username": serializers.CharField(),
                "password": serializers.CharField(),
            },
        ),
        responses=api_response_schema("Login", data=login_result_serializer()),
    )
    def post(self, request: Request) -> Response:
        _ = self
        schema = LoginSchema.from_dict(to_payload(request.data))
        data = LoginService().execute(schema)
        return response.success(data)


class ProfileView(APIView):
    """当前登录用户资料"""

    permission_classes = [IsAuthenticated]

    @extend_schema(
        summary="获取当前用户资料",
        tags=["user"],
        request=None,
        responses=api_response_schema("Profile", data=user_serializer()),
    )
    def get(self, request: Request) -> Response:
        _ = self
        user = UserDetailService().execute(request.user.pk)
        return response.success(serialize_user(user))


class AdminUserListView(APIView):
    """用户分页列表（管理员）"""

    permission_classes = [IsAdmin]

    @extend_schema(
        summary="获取用户列表",
        tags=["admin-users"],
        parameters=pagination_parameters(),
        responses=list_response("UserList", user_serializer(many=True), paginated=True),
    )
    def get(self, request: Request) -> Response:
        _ = self
        page = clamp_page(request.query_params.get("page"))
        page_size = clamp_page_size(request.query_params.get("page_size"))
        result = UserListService().execute(page, page_size)
        return paginated_response(result, serialize_user)


class AdminUserDetailView(APIView):
    """单个用户的查看、修改与删除（管理员）"""

    permission_classes = [IsAdmin]

    @extend_schema(
        summary="获取用户详情",
        tags=["admin-users"],
        responses=api_response_schema("UserDetail", data=user_serializer()),
    )
    def get(self, request: Request, user_id: int) -> Response:
        _ = (self, request)
        user = UserDetailService().execute(user_id)
        return response.success(serialize_user(user))

    @extend_schema(
        summary="更新用户",
        description="空字符串视为未提供；is_admin 省略时不修改",
        tags=["admin-users"],
        request=inline_serializer(
            name="UserUpdateRequest",
            fields={
                "nickname": serializers.CharField(required=False, allow_blank=True),
                "real_name": serializers.CharField(required=False, allow_blank=True),
                "college": serializers.CharField(required=False, allow_blank=True),
                "student_id": serializers.CharField(required=False, allow_blank=True),
                "qq": serializers.CharField(required=False, allow_blank=True),
                "email": serializers.CharField(required=False, allow_blank=True),
                "is_admin": serializers.BooleanField(required=False, allow_null=True),
            },
        ),
        responses=api_response_schema("UserUpdate", data=user_serializer()),
    )
    def put(self, request: Request, user_id: int) -> Response:
        _ = self
        schema = UserUpdateSchema.from_dict(to_payload(request.data), auto_validate=True)
        user = UpdateUserService().execute(user_id, schema)
        return response.success(serialize_user(user))

    @extend_schema(
        summary="删除用户",
        tags=["admin-users"],
        responses=api_response_schema("UserDelete"),
    )
    def delete(self, request: Request, user_id: int) -> Response:
        _ = (self, request)
        DeleteUserService().execute(user_id)
        return response.success(None)
