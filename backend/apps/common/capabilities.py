"""
资源级授权（apps.common.capabilities）

权限类（permissions.py）只回答“是否登录 / 是否管理员”，
涉及具体资源的判断统一走 can(actor, action, resource)：

- MANAGE_PROBLEM    作用于方向：管理员，或该方向负责人
- SCORE_SUBMISSION  作用于方向：仅该方向负责人（管理员不自动放行）
- VIEW_SUBMISSION   作用于归属资源：资源所有者或管理员
- MUTATE_OWN        作用于归属资源：仅资源所有者

负责人判断默认委托给 apps.directions.services.CheckDirectionManagerService，
测试或脚本可通过 is_manager 参数替换。
"""

from __future__ import annotations

from dataclasses import dataclass
from enum import Enum
from typing import Any, Callable, Optional, Union

from .exceptions import BizError, PermissionDeniedError

ManagerCheck = Callable[[int, int], bool]


class Action(str, Enum):
    MANAGE_PROBLEM = "manage_problem"
    SCORE_SUBMISSION = "score_submission"
    VIEW_SUBMISSION = "view_submission"
    MUTATE_OWN = "mutate_own"


@dataclass(frozen=True)
class Actor:
    """当前操作者：只携带授权需要的身份信息，不依赖 request"""

    user_id: int
    is_admin: bool = False

    @classmethod
    def from_user(cls, user: Any) -> "Actor":
        return cls(user_id=user.pk, is_admin=bool(getattr(user, "is_admin", False)))


@dataclass(frozen=True)
class DirectionResource:
    """以方向为边界的资源（题目、提交点、提交的评分）"""

    direction_id: int


@dataclass(frozen=True)
class OwnedResource:
    """归属于某个用户的资源（提交、评分）"""

    owner_id: int


Resource = Union[DirectionResource, OwnedResource]


def _default_manager_check(direction_id: int, user_id: int) -> bool:
    # 延迟导入，避免 common 在应用加载阶段依赖 directions
    from apps.directions.services import CheckDirectionManagerService

    return CheckDirectionManagerService().execute(direction_id, user_id)


def _expect(resource: Resource, kind: type, action: Action) -> None:
    if not isinstance(resource, kind):
        raise TypeError(f"{action.value} 需要 {kind.__name__}，实际为 {type(resource).__name__}")


def can(
        actor: Actor,
        action: Action,
        resource: Resource,
        *,
        is_manager: Optional[ManagerCheck] = None,
) -> bool:
    """判断 actor 能否对 resource 执行 action"""
    check = is_manager or _default_manager_check

    if action is Action.MANAGE_PROBLEM:
        _expect(resource, DirectionResource, action)
        return actor.is_admin or check(resource.direction_id, actor.user_id)

    if action is Action.SCORE_SUBMISSION:
        _expect(resource, DirectionResource, action)
        return check(resource.direction_id, actor.user_id)

    if action is Action.VIEW_SUBMISSION:
        _expect(resource, OwnedResource, action)
        return actor.is_admin or resource.owner_id == actor.user_id

    if action is Action.MUTATE_OWN:
        _expect(resource, OwnedResource, action)
        return resource.owner_id == actor.user_id

    raise ValueError(f"未知的授权动作：{action}")


def ensure(
        actor: Actor,
        action: Action,
        resource: Resource,
        *,
        error: Optional[BizError] = None,
        is_manager: Optional[ManagerCheck] = None,
) -> None:
    """
    can() 的断言版本：不满足时抛出 error（默认 PermissionDeniedError）
    """
    if not can(actor, action, resource, is_manager=is_manager):
        raise error or PermissionDeniedError()
