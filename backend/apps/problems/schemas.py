"""题目与提交点的入参校验 Schema"""

from __future__ import annotations

from dataclasses import dataclass
from typing import ClassVar, Optional

from apps.common.base.base_schema import BaseSchema
from apps.common.utils.validators import ensure_max_length, require_int, require_text

PROBLEM_LABELS = {
    "title": "题目标题",
    "description": "题目描述",
    "direction_id": "方向",
}

POINT_LABELS = {
    "name": "提交点名称",
    "max_score": "最大分值",
}


@dataclass
class ProblemCreateSchema(BaseSchema[None]):
    """
    创建题目：标题、描述、方向均必填
    """

    LABELS: ClassVar[dict[str, str]] = PROBLEM_LABELS

    title: str
    description: str
    direction_id: int

    def validate(self) -> None:
        self.title = require_text(self.title, field_name="题目标题")
        ensure_max_length(self.title, 200, field_name="题目标题")
        self.description = require_text(self.description, field_name="题目描述")
        self.direction_id = require_int(self.direction_id, field_name="方向 ID", minimum=1)


@dataclass
class ProblemUpdateSchema(BaseSchema[None]):
    """修改题目：只允许改标题与描述，空字符串视为未提供"""

    BLANK_AS_NONE: ClassVar[bool] = True

    title: Optional[str] = None
    description: Optional[str] = None

    def validate(self) -> None:
        if self.title is not None:
            self.title = require_text(self.title, field_name="题目标题")
            ensure_max_length(self.title, 200, field_name="题目标题")
        if self.description is not None:
            self.description = require_text(self.description, field_name="题目描述")


@dataclass
class SubmissionPointCreateSchema(BaseSchema[None]):
    """
    创建提交点：
    - name 必填
    - max_score 为不小于 1 的整数
    """

    LABELS: ClassVar[dict[str, str]] = POINT_LABELS

    name: str
    max_score: int

    def validate(self) -> None:
        self.name = require_text(self.name, field_name="提交点名称")
        ensure_max_length(self.name, 100, field_name="提交点名称")
        self.max_score = require_int(self.max_score, field_name="最大分值", minimum=1)


@dataclass
class SubmissionPointUpdateSchema(BaseSchema[None]):
    BLANK_AS_NONE: ClassVar[bool] = True

    name: Optional[str] = None
    max_score: Optional[int] = None

    def validate(self) -> None:
        if self.name is not None:
            self.name = require_text(self.name, field_name="提交点名称")
            ensure_max_length(self.name, 100, field_name="提交点名称")
        if self.max_score is not None:
            self.max_score = require_int(self.max_score, field_name="最大分值", minimum=1)
