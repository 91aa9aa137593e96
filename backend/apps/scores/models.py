"""
评分模型

- 每位评审人对同一提交只保留一条有效评分，重复评分覆盖
- user 冗余记录被评分的提交者，排行榜直接按它汇总
"""

from __future__ import annotations

from django.conf import settings
from django.db import models

from apps.common.base.base_model import TimestampedModel


class Score(TimestampedModel):
    score = models.PositiveIntegerField("分数")
    comment = models.TextField("评语", blank=True, default="")
    user = models.ForeignKey(
        settings.AUTH_USER_MODEL,
        on_delete=models.CASCADE,
        related_name="received_scores",
        verbose_name="被评分用户",
    )
    submission = models.ForeignKey(
        "submissions.Submission",
        on_delete=models.CASCADE,
        related_name="scores",
        verbose_name="提交",
    )
    reviewer = models.ForeignKey(
        settings.AUTH_USER_MODEL,
        on_delete=models.CASCADE,
        related_name="reviewed_scores",
        verbose_name="评审人",
    )

    class Meta:
        db_table = "scores"
        ordering = ["id"]
        verbose_name = "评分"
        verbose_name_plural = "评分"
        constraints = [
            models.UniqueConstraint(
                fields=["submission", "reviewer"],
                condition=models.Q(deleted_at__isnull=True),
                name="uniq_active_score_per_reviewer",
            ),
        ]

    def __str__(self) -> str:
        return f"Score#{self.pk} submission={self.submission_id} reviewer={self.reviewer_id}"
