"""账户相关的入参校验 Schema

定义注册、登录、管理员修改用户资料等请求的输入结构与校验规则
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import ClassVar, Optional

from apps.common.base.base_schema import BaseSchema
from apps.common.exceptions import ValidationError
from apps.common.utils.validators import (
    ensure_max_length,
    require_text,
    validate_email,
    validate_password_length,
)

USER_LABELS = {
    "username": "用户名",
    "password": "密码",
    "nickname": "昵称",
    "real_name": "真实姓名",
    "college": "学院",
    "student_id": "学号",
    "qq": "QQ",
    "email": "邮箱",
}

# 与模型字段长度保持一致
MAX_LENGTHS = {
    "username": 50,
    "nickname": 50,
    "real_name": 50,
    "college": 100,
    "student_id": 20,
    "qq": 20,
    "email": 100,
}


@dataclass
class RegisterSchema(BaseSchema[None]):
    """
    注册入参 Schema：
    - 用户名、密码、昵称、真实姓名、学院、学号必填且不能为空白
    - 密码至少 6 位；QQ / 邮箱可选，邮箱提供时校验格式
    """

    LABELS: ClassVar[dict[str, str]] = USER_LABELS

    username: str
    password: str
    nickname: str
    real_name: str
    college: str
    student_id: str
    qq: Optional[str] = None
    email: Optional[str] = None

    def validate(self) -> None:
        for name in ("username", "nickname", "real_name", "college", "student_id"):
            setattr(self, name, require_text(getattr(self, name), field_name=USER_LABELS[name]))
        if not isinstance(self.password, str) or not self.password:
            raise ValidationError(message="密码不能为空")
        validate_password_length(self.password, min_length=6)

        for name in ("qq", "email"):
            value = getattr(self, name)
            if value is not None and not isinstance(value, str):
                raise ValidationError(message=f"{USER_LABELS[name]}格式不正确")
            setattr(self, name, (value or "").strip())
        if self.email:
            validate_email(self.email)

        for name, limit in MAX_LENGTHS.items():
            ensure_max_length(getattr(self, name), limit, field_name=USER_LABELS[name])


@dataclass
class LoginSchema(BaseSchema[None]):
    """
    登录入参 Schema：用户名 + 密码
    """

    auto_validate: ClassVar[bool] = True
    LABELS: ClassVar[dict[str, str]] = USER_LABELS

    username: str
    password: str

    def validate(self) -> None:
        self.username = require_text(self.username, field_name="用户名")
        if not isinstance(self.password, str) or not self.password:
            raise ValidationError(message="密码不能为空")


@dataclass
class UserUpdateSchema(BaseSchema[None]):
    """
    管理员修改用户资料：
    - 文本字段为空字符串视为未提供，不会覆盖原值
    - is_admin 三态：缺省不修改，true/false 显式设置
    """

    BLANK_AS_NONE: ClassVar[bool] = True

    nickname: Optional[str] = None
    real_name: Optional[str] = None
    college: Optional[str] = None
    student_id: Optional[str] = None
    qq: Optional[str] = None
    email: Optional[str] = None
    is_admin: Optional[bool] = None

    def validate(self) -> None:
        for name in ("nickname", "real_name", "college", "student_id", "qq", "email"):
            value = getattr(self, name)
            if value is None:
                continue
            if not isinstance(value, str):
                raise ValidationError(message=f"{USER_LABELS[name]}格式不正确")
            setattr(self, name, value.strip())
            ensure_max_length(getattr(self, name), MAX_LENGTHS[name], field_name=USER_LABELS[name])
        if self.email:
            validate_email(self.email)
        if self.is_admin is not None and not isinstance(self.is_admin, bool):
            raise ValidationError(message="is_admin 必须是布尔值")
