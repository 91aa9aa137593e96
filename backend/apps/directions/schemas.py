"""方向相关的入参校验 Schema"""

from __future__ import annotations

from dataclasses import dataclass
from typing import Any, ClassVar, Optional

from apps.common.base.base_schema import BaseSchema
from apps.common.exceptions import ValidationError
from apps.common.utils.validators import ensure_max_length, require_int, require_text

DIRECTION_LABELS = {
    "name": "方向名称",
    "description": "方向描述",
    "manager_ids": "负责人",
}


def _normalize_manager_ids(value: Any) -> Optional[list[int]]:
    """
    负责人 ID 列表：None 表示未提供，空列表表示清空
    """
    if value is None:
        return None
    if not isinstance(value, (list, tuple)):
        raise ValidationError(message="manager_ids 必须是数组")
    ids: list[int] = []
    for raw in value:
        user_id = require_int(raw, field_name="负责人 ID", minimum=1)
        if user_id not in ids:
            ids.append(user_id)
    return ids


def _normalize_description(value: Any) -> Optional[str]:
    if value is None:
        return None
    if not isinstance(value, str):
        raise ValidationError(message="方向描述格式不正确")
    return value.strip()


@dataclass
class DirectionCreateSchema(BaseSchema[None]):
    """
    创建方向：
    - name 必填
    - manager_ids 可选，未知用户 ID 直接忽略
    """

    LABELS: ClassVar[dict[str, str]] = DIRECTION_LABELS

    name: str
    description: Optional[str] = None
    manager_ids: Optional[list[int]] = None

    def validate(self) -> None:
        self.name = require_text(self.name, field_name="方向名称")
        ensure_max_length(self.name, 100, field_name="方向名称")
        self.description = _normalize_description(self.description) or ""
        self.manager_ids = _normalize_manager_ids(self.manager_ids)


@dataclass
class DirectionUpdateSchema(BaseSchema[None]):
    """
    修改方向：
    - name / description 为空字符串视为未提供
    - manager_ids 提供时整体替换负责人集合，[] 表示清空
    """

    BLANK_AS_NONE: ClassVar[bool] = True

    name: Optional[str] = None
    description: Optional[str] = None
    manager_ids: Optional[list[int]] = None

    def validate(self) -> None:
        if self.name is not None:
            self.name = require_text(self.name, field_name="方向名称")
            ensure_max_length(self.name, 100, field_name="方向名称")
        self.description = _normalize_description(self.description)
        self.manager_ids = _normalize_manager_ids(self.manager_ids)
