"""
通用辅助函数：
- 请求体转换、时间格式化等纯工具方法，避免各视图/Presenter 重复代码
- 不包含业务逻辑，便于在各模块安全复用
"""

from __future__ import annotations

from datetime import datetime
from typing import Any, Mapping, Optional

from apps.common.exceptions import BindError


def to_payload(data: Any) -> dict:
    """
    将 request.data 转为普通 dict（兼容 QueryDict / dict）
    - 请求体不是 JSON 对象（数组、字符串等）时抛 BindError
    """
    if hasattr(data, "dict"):
        return data.dict()
    if isinstance(data, Mapping):
        return dict(data)
    raise BindError()


def isoformat(value: Optional[datetime]) -> Optional[str]:
    """时间字段统一输出 ISO 格式，空值保持 None"""
    return value.isoformat() if value else None
