"""账户模块的业务服务层

职责：
- 用户注册、登录（JWT）
- 管理员查看、分页列出、修改、删除用户
- 统一封装业务流程与异常抛出，视图层仅做参数接收与结果返回
"""

from __future__ import annotations

from django.db import IntegrityError

from apps.common.base.base_service import BaseService
from apps.common.exceptions import (
    InvalidCredentialsError,
    UserExistsError,
    UserNotFoundError,
)
from apps.common.infra.jwt_provider import issue_token
from apps.common.infra.logger import get_logger, logger_extra
from apps.common.pagination import PageResult, paginate
from apps.common.utils.helpers import isoformat

from .models import User
from .repo import UserRepo
from .schemas import LoginSchema, RegisterSchema, UserUpdateSchema

logger = get_logger(__name__)


def serialize_user(user: User) -> dict[str, object]:
    """
    用户序列化工具：将 User 模型转换为 API 输出字典
    - 任何读路径都不输出密码哈希
    """
    return {
        "id": user.pk,
        "username": user.username,
        "nickname": user.nickname,
        "real_name": user.real_name,
        "college": user.college,
        "student_id": user.student_id,
        "qq": user.qq,
        "email": user.email,
        "is_admin": user.is_admin,
        "created_at": isoformat(user.created_at),
        "updated_at": isoformat(user.updated_at),
    }


class RegisterService(BaseService[User]):
    """
    注册服务：
    - 用户名唯一性校验，冲突时抛 UserExistsError 且不修改已有账号
    - 创建普通用户（非管理员）
    """

    def __init__(self, user_repo: UserRepo | None = None):
        self.user_repo = user_repo or UserRepo()

    def perform(self, schema: RegisterSchema) -> User:
        if self.user_repo.username_exists(schema.username):
            logger.warning(
                "注册失败：用户名已存在",
                extra=logger_extra({"username": schema.username}),
            )
            raise UserExistsError()

        try:
            user = self.user_repo.create_user(
                username=schema.username,
                password=schema.password,
                nickname=schema.nickname,
                real_name=schema.real_name,
                college=schema.college,
                student_id=schema.student_id,
                qq=schema.qq or "",
                email=schema.email or "",
            )
        except IntegrityError as exc:
            # 并发注册同名账号时由唯一索引兜底
            raise UserExistsError() from exc
        logger.info("用户注册成功", extra=logger_extra({"user_id": user.pk, "username": user.username}))
        return user


class LoginService(BaseService[dict[str, object]]):
    """
    登录服务：
    - 用户不存在 → UserNotFoundError；密码错误 → InvalidCredentialsError
    - 成功后颁发携带 user_id / username / is_admin 的访问令牌
    """

    atomic_enabled = False

    def __init__(self, user_repo: UserRepo | None = None):
        self.user_repo = user_repo or UserRepo()

    def perform(self, schema: LoginSchema) -> dict[str, object]:
        user = self.user_repo.get_by_username(schema.username)
        if user is None:
            logger.warning("登录失败：用户不存在", extra=logger_extra({"username": schema.username}))
            raise UserNotFoundError()

        if not user.check_password(schema.password):
            logger.warning(
                "登录失败：密码错误",
                extra=logger_extra({"user_id": user.pk, "username": schema.username}),
            )
            raise InvalidCredentialsError()

        token = issue_token(user)
        logger.info("登录成功", extra=logger_extra({"user_id": user.pk, "username": user.username}))
        return {"token": token, "user": serialize_user(user)}


class UserDetailService(BaseService[User]):
    """按 ID 获取用户，不存在或已删除时抛 UserNotFoundError"""

    atomic_enabled = False

    def __init__(self, user_repo: UserRepo | None = None):
        self.user_repo = user_repo or UserRepo()

    def perform(self, user_id: int) -> User:
        return self.user_repo.get_or_raise(user_id)


class UserListService(BaseService[PageResult]):
    """
    用户分页列表（管理员）
    - page / page_size 的默认值与上下限由视图层收敛后传入
    """

    atomic_enabled = False

    def __init__(self, user_repo: UserRepo | None = None):
        self.user_repo = user_repo or UserRepo()

    def perform(self, page: int, page_size: int) -> PageResult:
        return paginate(self.user_repo.get_queryset(), page=page, page_size=page_size)


class UpdateUserService(BaseService[User]):
    """
    管理员修改用户资料：只写入请求中实际提供的字段
    """

    def __init__(self, user_repo: UserRepo | None = None):
        self.user_repo = user_repo or UserRepo()

    def perform(self, user_id: int, schema: UserUpdateSchema) -> User:
        user = self.user_repo.get_or_raise(user_id)
        changes = schema.changes()
        user = self.user_repo.update(user, changes)
        logger.info(
            "用户资料已更新",
            extra=logger_extra({"user_id": user.pk, "fields": sorted(changes.keys())}),
        )
        return user


class DeleteUserService(BaseService[None]):
    """
    管理员删除用户：软删除并释放用户名
    """

    def __init__(self, user_repo: UserRepo | None = None):
        self.user_repo = user_repo or UserRepo()

    def perform(self, user_id: int) -> None:
        user = self.user_repo.get_or_raise(user_id)
        self.user_repo.delete(user)
        logger.info("用户已删除", extra=logger_extra({"user_id": user_id}))
