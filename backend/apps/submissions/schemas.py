from __future__ import annotations

from dataclasses import dataclass
from typing import ClassVar

from apps.common.base.base_schema import BaseSchema
from apps.common.utils.validators import require_int, require_text


# Schema：约束提交入参，交由 Service 直接使用


@dataclass
class SubmissionCreateSchema(BaseSchema[None]):
    """
    提交入参：
    - content 为提交内容（链接等），不能为空白
    - problem_id / submission_point_id 为正整数
    """

    LABELS: ClassVar[dict[str, str]] = {
        "content": "提交内容",
        "problem_id": "题目",
        "submission_point_id": "提交点",
    }

    content: str
    problem_id: int
    submission_point_id: int

    def validate(self) -> None:
        self.content = require_text(self.content, field_name="提交内容")
        self.problem_id = require_int(self.problem_id, field_name="题目 ID", minimum=1)
        self.submission_point_id = require_int(self.submission_point_id, field_name="提交点 ID", minimum=1)
