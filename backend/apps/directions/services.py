"""方向模块的业务服务层

职责：
- 方向的增删改查（写操作仅管理员）
- 维护方向负责人集合
- 提供负责人判断，供资源级授权（capabilities）复用
"""

from __future__ import annotations

from django.db.models import QuerySet

from apps.accounts.repo import UserRepo
from apps.accounts.services import serialize_user
from apps.common.base.base_service import BaseService
from apps.common.exceptions import ConflictError
from apps.common.infra.logger import get_logger, logger_extra
from apps.common.utils.helpers import isoformat

from .models import Direction
from .repo import DirectionRepo
from .schemas import DirectionCreateSchema, DirectionUpdateSchema

logger = get_logger(__name__)


def serialize_direction_summary(direction: Direction) -> dict[str, object]:
    return {
        "id": direction.pk,
        "name": direction.name,
        "description": direction.description,
        "created_at": isoformat(direction.created_at),
        "updated_at": isoformat(direction.updated_at),
    }


def serialize_direction(direction: Direction, *, include_problems: bool = False) -> dict[str, object]:
    """
    方向序列化：
    - 始终附带负责人
    - include_problems=True 时附带未删除的题目（详情接口）
    """
    data = serialize_direction_summary(direction)
    data["managers"] = [serialize_user(user) for user in direction.managers.all()]
    if include_problems:
        # 题目模块依赖方向模块，这里延迟导入
        from apps.problems.services import serialize_problem_summary

        data["problems"] = [serialize_problem_summary(problem) for problem in direction.problems.all()]
    return data


class CreateDirectionService(BaseService[Direction]):
    """
    创建方向（管理员）：写入方向后按 manager_ids 设置负责人
    """

    def __init__(self, direction_repo: DirectionRepo | None = None, user_repo: UserRepo | None = None):
        self.direction_repo = direction_repo or DirectionRepo()
        self.user_repo = user_repo or UserRepo()

    def perform(self, schema: DirectionCreateSchema) -> Direction:
        direction = self.direction_repo.create(
            {"name": schema.name, "description": schema.description or ""}
        )
        if schema.manager_ids:
            self.direction_repo.set_managers(direction, self.user_repo.filter_by_ids(schema.manager_ids))
        logger.info(
            "方向已创建",
            extra=logger_extra({"direction_id": direction.pk, "manager_ids": schema.manager_ids or []}),
        )
        return self.direction_repo.get_or_raise(direction.pk)


class DirectionListService(BaseService[QuerySet]):
    """全部方向（含负责人），按 ID 升序"""

    atomic_enabled = False

    def __init__(self, direction_repo: DirectionRepo | None = None):
        self.direction_repo = direction_repo or DirectionRepo()

    def perform(self) -> QuerySet:
        return self.direction_repo.get_queryset()


class DirectionDetailService(BaseService[Direction]):
    """单个方向（含负责人与题目）"""

    atomic_enabled = False

    def __init__(self, direction_repo: DirectionRepo | None = None):
        self.direction_repo = direction_repo or DirectionRepo()

    def perform(self, direction_id: int) -> Direction:
        return self.direction_repo.get_detail(direction_id)


class UpdateDirectionService(BaseService[Direction]):
    """
    修改方向（管理员）：
    - 只写入实际提供的 name / description
    - manager_ids 存在时整体替换负责人，[] 清空，缺省不动
    """

    def __init__(self, direction_repo: DirectionRepo | None = None, user_repo: UserRepo | None = None):
        self.direction_repo = direction_repo or DirectionRepo()
        self.user_repo = user_repo or UserRepo()

    def perform(self, direction_id: int, schema: DirectionUpdateSchema) -> Direction:
        direction = self.direction_repo.get_or_raise(direction_id)
        changes = schema.changes(exclude=["manager_ids"])
        self.direction_repo.update(direction, changes)
        if schema.manager_ids is not None:
            self.direction_repo.set_managers(direction, self.user_repo.filter_by_ids(schema.manager_ids))
        logger.info(
            "方向已更新",
            extra=logger_extra(
                {
                    "direction_id": direction_id,
                    "fields": sorted(changes.keys()),
                    "manager_ids": schema.manager_ids,
                }
            ),
        )
        return self.direction_repo.get_or_raise(direction_id)


class DeleteDirectionService(BaseService[None]):
    """
    删除方向（管理员）：
    - 仍有未删除题目时拒绝
    - 清空负责人后软删除
    """

    def __init__(self, direction_repo: DirectionRepo | None = None):
        self.direction_repo = direction_repo or DirectionRepo()

    def perform(self, direction_id: int) -> None:
        direction = self.direction_repo.get_or_raise(direction_id)
        if self.direction_repo.has_problems(direction):
            raise ConflictError(message="该方向下还有题目，无法删除")
        self.direction_repo.clear_managers(direction)
        self.direction_repo.delete(direction)
        logger.info("方向已删除", extra=logger_extra({"direction_id": direction_id}))


class CheckDirectionManagerService(BaseService[bool]):
    """user_id 是否为 direction_id 的负责人"""

    atomic_enabled = False

    def __init__(self, direction_repo: DirectionRepo | None = None):
        self.direction_repo = direction_repo or DirectionRepo()

    def perform(self, direction_id: int, user_id: int) -> bool:
        return self.direction_repo.is_manager(direction_id, user_id)
