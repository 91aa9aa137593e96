"""方向模块的数据访问层"""

from __future__ import annotations

from typing import Iterable

from django.db.models import QuerySet

from apps.common.base.base_repo import BaseRepo
from apps.common.exceptions import DirectionNotFoundError

from .models import Direction


class DirectionRepo(BaseRepo[Direction]):
    """
    方向仓储：
    - 默认预加载负责人，列表接口直接输出
    - 负责人关系读写集中在这里，授权判断只依赖 is_manager
    """

    model = Direction
    not_found_error = DirectionNotFoundError

    def get_queryset(self) -> QuerySet[Direction]:
        return super().get_queryset().prefetch_related("managers").order_by("id")

    def get_detail(self, direction_id: int) -> Direction:
        """详情：额外预加载未删除的题目"""
        return self.get_or_raise(direction_id, queryset=self.get_queryset().prefetch_related("problems"))

    @staticmethod
    def has_problems(direction: Direction) -> bool:
        return direction.problems.exists()

    @staticmethod
    def set_managers(direction: Direction, users: Iterable) -> None:
        """整体替换负责人集合，空集合即清空"""
        direction.managers.set(list(users))

    @staticmethod
    def clear_managers(direction: Direction) -> None:
        direction.managers.clear()

    def is_manager(self, direction_id: int, user_id: int) -> bool:
        return self.model.managers.through.objects.filter(
            direction_id=direction_id,
            user_id=user_id,
        ).exists()

    def managed_direction_ids(self, user_id: int) -> list[int]:
        """用户负责的方向 ID 列表（忽略已删除方向）"""
        return list(
            self.filter(managers__id=user_id).values_list("id", flat=True).distinct()
        )
