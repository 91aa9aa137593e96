"""
校验工具集合：提供常用字段格式校验与查询参数解析
"""

from __future__ import annotations

from typing import Any, Optional

from django.core.validators import validate_email as django_validate_email
from django.core.exceptions import ValidationError as DjangoValidationError

from apps.common.exceptions import ValidationError


def validate_email(email: str) -> None:
    """校验邮箱格式，不通过抛出 ValidationError"""
    try:
        django_validate_email(email)
    except DjangoValidationError as exc:
        raise ValidationError(message="邮箱格式不正确") from exc


def validate_password_length(password: str, min_length: int = 6) -> None:
    """密码长度下限校验"""
    if len(password or "") < min_length:
        raise ValidationError(message=f"密码长度不能少于 {min_length} 位")


def require_text(value: Any, *, field_name: str) -> str:
    """必填文本：非字符串或去空白后为空均视为缺失"""
    if not isinstance(value, str) or not value.strip():
        raise ValidationError(message=f"{field_name}不能为空")
    return value.strip()


def ensure_max_length(value: Optional[str], max_length: int, *, field_name: str) -> None:
    if value is not None and len(value) > max_length:
        raise ValidationError(message=f"{field_name}长度不能超过 {max_length}")


def require_int(value: Any, *, field_name: str, minimum: Optional[int] = None) -> int:
    """
    必填整数：拒绝 bool 与无法解析的字符串
    """
    if isinstance(value, bool):
        raise ValidationError(message=f"{field_name}必须是整数")
    try:
        number = int(value)
    except (TypeError, ValueError) as exc:
        raise ValidationError(message=f"{field_name}必须是整数") from exc
    if isinstance(value, float) and value != number:
        raise ValidationError(message=f"{field_name}必须是整数")
    if minimum is not None and number < minimum:
        raise ValidationError(message=f"{field_name}不能小于 {minimum}")
    return number


def parse_int(raw: Any, *, default: int) -> int:
    """查询参数转整数，缺失或无法解析时返回默认值"""
    if raw is None or raw == "":
        return default
    try:
        return int(raw)
    except (TypeError, ValueError):
        return default


def parse_optional_id(raw: Any) -> Optional[int]:
    """
    可选的 ID 过滤参数：缺失、无法解析或不大于 0 时视为未提供
    """
    value = parse_int(raw, default=0)
    return value if value > 0 else None
