"""
提交模型

同一用户对同一题目的同一提交点只保留一条有效提交，重复提交覆盖内容
"""

from __future__ import annotations

from django.conf import settings
from django.db import models

from apps.common.base.base_model import TimestampedModel


class Submission(TimestampedModel):
    """
    提交记录：
    - content 为自由文本（通常是仓库或文档链接）
    - (user, problem, submission_point) 在未删除记录中唯一
    - 删除时连带软删除其评分
    """

    content = models.TextField("提交内容")
    user = models.ForeignKey(
        settings.AUTH_USER_MODEL,
        on_delete=models.CASCADE,
        related_name="submissions",
        verbose_name="提交者",
    )
    problem = models.ForeignKey(
        "problems.Problem",
        on_delete=models.PROTECT,
        related_name="submissions",
        verbose_name="题目",
    )
    submission_point = models.ForeignKey(
        "problems.SubmissionPoint",
        on_delete=models.PROTECT,
        related_name="submissions",
        verbose_name="提交点",
    )

    class Meta:
        db_table = "submissions"
        ordering = ["id"]
        verbose_name = "提交"
        verbose_name_plural = "提交"
        constraints = [
            models.UniqueConstraint(
                fields=["user", "problem", "submission_point"],
                condition=models.Q(deleted_at__isnull=True),
                name="uniq_active_submission_per_point",
            ),
        ]

    def __str__(self) -> str:
        return f"Submission#{self.pk} user={self.user_id} problem={self.problem_id}"
