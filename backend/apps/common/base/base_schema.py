from __future__ import annotations

from abc import ABC, abstractmethod
from dataclasses import MISSING, asdict, dataclass, fields
from typing import Any, ClassVar, Generic, Iterable, Mapping, Optional, TypeVar

from apps.common.exceptions import ValidationError

T = TypeVar("T")
S = TypeVar("S", bound="BaseSchema[Any]")


@dataclass
class BaseSchema(ABC, Generic[T]):
    """
    入参 DTO 基类：视图把请求体交给 from_dict()，服务层只接触强类型的 Schema

    - 必填字段 = 没有默认值的字段；缺失时报 3001「缺少必填参数：<中文名>」
    - 部分更新的字段默认 None，表示“未提供”；changes() 只返回提供了的字段
    - BLANK_AS_NONE=True 时空白字符串也视为未提供（修改接口传 "" 不会清空原值）
    """

    auto_validate: ClassVar[bool] = False
    BLANK_AS_NONE: ClassVar[bool] = False
    LABELS: ClassVar[dict[str, str]] = {}

    def __post_init__(self):
        if self.auto_validate:
            self.validate()

    @abstractmethod
    def validate(self) -> None:
        """校验失败抛 BizError（通常是 ValidationError）"""

    def changes(self, *, exclude: Iterable[str] | None = None) -> dict[str, Any]:
        skipped = set(exclude or ())
        return {k: v for k, v in asdict(self).items() if v is not None and k not in skipped}

    @classmethod
    def _is_required(cls, f) -> bool:
        return f.default is MISSING and f.default_factory is MISSING  # type: ignore[misc]

    @classmethod
    def from_dict(cls: type[S], data: Mapping[str, Any], *, auto_validate: Optional[bool] = None) -> S:
        if not isinstance(data, Mapping):
            raise ValidationError(message="请求体必须是 JSON 对象")

        kwargs: dict[str, Any] = {}
        for f in fields(cls):
            if f.name in data:
                value = data[f.name]
                if cls.BLANK_AS_NONE and isinstance(value, str) and not value.strip():
                    value = None
                kwargs[f.name] = value
            elif cls._is_required(f):
                raise ValidationError(message=f"缺少必填参数：{cls.LABELS.get(f.name, f.name)}")

        schema = cls(**kwargs)
        # 类级 auto_validate 已在 __post_init__ 校验过
        if auto_validate and not cls.auto_validate:
            schema.validate()
        return schema
