"""
方向模型：题目按技术方向分组，每个方向可指定多名负责人
"""

from __future__ import annotations

from django.conf import settings
from django.db import models

from apps.common.base.base_model import TimestampedModel


class Direction(TimestampedModel):
    """
    技术方向：
    - managers 为方向负责人，决定谁可以管理该方向的题目、为该方向的提交评分
    - 仍有题目时不可删除
    """

    name = models.CharField("名称", max_length=100)
    description = models.TextField("描述", blank=True, default="")
    managers = models.ManyToManyField(
        settings.AUTH_USER_MODEL,
        related_name="managed_directions",
        blank=True,
        db_table="direction_managers",
        verbose_name="负责人",
    )

    class Meta:
        db_table = "directions"
        ordering = ["id"]
        verbose_name = "方向"
        verbose_name_plural = "方向"

    def __str__(self) -> str:
        return self.name
