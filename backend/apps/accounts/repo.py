"""账户模块的数据访问层

封装 User 的查询、创建与软删除，避免视图/服务直接操作 ORM
"""

from __future__ import annotations

from typing import Optional

from django.contrib.auth import get_user_model
from django.db.models import QuerySet

from apps.common.base.base_repo import BaseRepo
from apps.common.exceptions import UserNotFoundError

User = get_user_model()


class UserRepo(BaseRepo[User]):
    """
    用户仓储：
    - 业务场景：注册、登录、管理员维护用户资料
    - 默认管理器已过滤软删除账号，已删除用户视为不存在
    """

    model = User
    not_found_error = UserNotFoundError

    def get_queryset(self) -> QuerySet[User]:
        return super().get_queryset().order_by("id")

    def username_exists(self, username: str) -> bool:
        """注册时唯一性校验"""
        return self.filter(username=username).exists()

    def get_by_username(self, username: str) -> Optional[User]:
        return self.get_or_none(username=username)

    def create_user(self, *, username: str, password: str, **extra) -> User:
        """
        创建普通用户，密码经 Django 内置哈希后存储
        """
        extra.setdefault("is_admin", False)
        return self.model.objects.create_user(  # type: ignore[attr-defined]
            username=username,
            password=password,
            **extra,
        )

    def filter_by_ids(self, ids) -> QuerySet[User]:
        """按 ID 批量获取存在的用户，未知 ID 自动忽略"""
        return self.filter(pk__in=list(ids))
