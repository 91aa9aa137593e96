from __future__ import annotations

from abc import ABC
from typing import Any, Generic, Optional, TypeVar

from django.db.models import Model, QuerySet

from apps.common.exceptions import NotFoundError

T = TypeVar("T", bound=Model)


class BaseRepo(ABC, Generic[T]):
    """
    仓储基类：服务层只通过仓储读写数据库

    - model 的默认管理器已隐藏软删除的行，因此这里的所有读取天然只看“有效”数据
    - 子类覆盖 get_queryset() 挂上 select_related / prefetch_related
    - not_found_error 决定 get_or_raise 未命中时的错误码（方向 2001、题目 2002 ...）
    """

    model: type[T]
    not_found_error: type[NotFoundError] = NotFoundError

    def get_queryset(self) -> QuerySet[T]:
        return self.model._default_manager.all()

    def filter(self, *, queryset: Optional[QuerySet[T]] = None, **filters) -> QuerySet[T]:
        base = self.get_queryset() if queryset is None else queryset
        return base.filter(**filters)

    def get_or_raise(self, pk: Any, *, queryset: Optional[QuerySet[T]] = None) -> T:
        obj = self.filter(queryset=queryset, pk=pk).first()
        if obj is None:
            raise self.not_found_error()
        return obj

    def get_or_none(self, *, queryset: Optional[QuerySet[T]] = None, **filters) -> Optional[T]:
        return self.filter(queryset=queryset, **filters).first()

    def exists(self, **filters) -> bool:
        return self.filter(**filters).exists()

    def create(self, data: dict) -> T:
        return self.model._default_manager.create(**data)

    def update(self, instance: T, data: dict) -> T:
        """只保存 data 中出现的字段；data 为空时不触发写入"""
        if not data:
            return instance
        for field, value in data.items():
            setattr(instance, field, value)
        instance.save(update_fields=[*data.keys(), "updated_at"])
        return instance

    def delete(self, instance: T) -> None:
        """所有业务模型都是软删除"""
        instance.soft_delete()
