# apps/common/base/base_model.py

from __future__ import annotations

from django.db import models
from django.utils import timezone


class SoftDeleteQuerySet(models.QuerySet):
    """
    支持批量软删除的 QuerySet：
    - soft_delete() 只写 deleted_at，不真正删除行，保证历史引用完整
    """

    def soft_delete(self) -> int:
        now = timezone.now()
        return self.update(deleted_at=now, updated_at=now)


class SoftDeleteManager(models.Manager.from_queryset(SoftDeleteQuerySet)):
    """
    默认管理器：隐藏已软删除的记录
    - 业务代码通过 Model.objects 访问时天然看不到已删除数据
    """

    def get_queryset(self):
        return super().get_queryset().filter(deleted_at__isnull=True)


class TimestampedModel(models.Model):
    """
    时间戳 + 软删除抽象基类：
    - created_at / updated_at 自动维护
    - deleted_at 非空表示已删除；objects 过滤已删除行，all_objects 可查看全部
    """

    created_at = models.DateTimeField("创建时间", auto_now_add=True)
    updated_at = models.DateTimeField("更新时间", auto_now=True)
    deleted_at = models.DateTimeField("删除时间", null=True, blank=True, db_index=True, editable=False)

    objects = SoftDeleteManager()
    all_objects = models.Manager.from_queryset(SoftDeleteQuerySet)()

    class Meta:
        abstract = True

    def soft_delete(self) -> None:
        """标记删除并保存，仅写 deleted_at / updated_at"""
        self.deleted_at = timezone.now()
        self.save(update_fields=["deleted_at", "updated_at"])
