"""评分相关的入参校验 Schema"""

from __future__ import annotations

from dataclasses import dataclass
from typing import Any, ClassVar, Optional

from apps.common.base.base_schema import BaseSchema
from apps.common.exceptions import ValidationError
from apps.common.utils.validators import require_int


def _normalize_comment(value: Any) -> Optional[str]:
    if value is None:
        return None
    if not isinstance(value, str):
        raise ValidationError(message="评语格式不正确")
    return value.strip()


@dataclass
class ScoreCreateSchema(BaseSchema[None]):
    """
    评分入参：
    - score 为不小于 0 的整数，上限由提交点的最大分值决定（在 Service 中校验）
    - comment 可选
    """

    LABELS: ClassVar[dict[str, str]] = {"score": "分数", "submission_id": "提交"}

    score: int
    submission_id: int
    comment: Optional[str] = None

    def validate(self) -> None:
        self.score = require_int(self.score, field_name="分数", minimum=0)
        self.submission_id = require_int(self.submission_id, field_name="提交 ID", minimum=1)
        self.comment = _normalize_comment(self.comment) or ""


@dataclass
class ScoreUpdateSchema(BaseSchema[None]):
    """修改评分：score / comment 均可选，省略或空字符串不修改"""

    BLANK_AS_NONE: ClassVar[bool] = True

    score: Optional[int] = None
    comment: Optional[str] = None

    def validate(self) -> None:
        if self.score is not None:
            self.score = require_int(self.score, field_name="分数", minimum=0)
        self.comment = _normalize_comment(self.comment)
