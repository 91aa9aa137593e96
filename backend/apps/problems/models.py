"""
题目与提交点模型

- Problem 归属于某个方向
- SubmissionPoint 是题目下的评分单元，max_score 为单次评分上限
"""

from __future__ import annotations

from django.core.validators import MinValueValidator
from django.db import models

from apps.common.base.base_model import TimestampedModel


class Problem(TimestampedModel):
    """题目：仍有提交记录时不可删除，删除时连带软删除其提交点"""

    title = models.CharField("标题", max_length=200)
    description = models.TextField("描述")
    direction = models.ForeignKey(
        "directions.Direction",
        on_delete=models.PROTECT,
        related_name="problems",
        verbose_name="方向",
    )

    class Meta:
        db_table = "problems"
        ordering = ["id"]
        verbose_name = "题目"
        verbose_name_plural = "题目"

    def __str__(self) -> str:
        return self.title


class SubmissionPoint(TimestampedModel):
    name = models.CharField("名称", max_length=100)
    max_score = models.PositiveIntegerField("最大分值", validators=[MinValueValidator(1)])
    problem = models.ForeignKey(
        Problem,
        on_delete=models.PROTECT,
        related_name="submission_points",
        verbose_name="题目",
    )

    class Meta:
        db_table = "submission_points"
        ordering = ["id"]
        verbose_name = "提交点"
        verbose_name_plural = "提交点"

    def __str__(self) -> str:
        return f"{self.problem_id}:{self.name}"
