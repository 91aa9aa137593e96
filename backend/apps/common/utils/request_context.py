"""
请求级日志上下文

中间件在请求开始时写入 request_id / path / method / ip，
JWT 认证通过后补充当前用户；日志格式化器通过 get_request_context() 读取
"""

from __future__ import annotations

import contextvars
import uuid
from typing import Any

_EMPTY: dict[str, Any] = {
    "request_id": "",
    "user_id": None,
    "username": "",
    "path": "",
    "method": "",
    "ip": "",
}

_request_ctx: contextvars.ContextVar[dict[str, Any]] = contextvars.ContextVar("glimgate_request", default=_EMPTY)


def generate_request_id() -> str:
    return uuid.uuid4().hex[:12]


def bind_request(*, request_id: str, path: str = "", method: str = "", ip: str = "") -> None:
    """请求开始：重置上下文，用户信息留空"""
    _request_ctx.set({**_EMPTY, "request_id": request_id, "path": path, "method": method, "ip": ip})


def bind_user(user: Any) -> None:
    """认证完成后补充用户；中间件执行时 request.user 尚未解析"""
    current = _request_ctx.get()
    _request_ctx.set(
        {
            **current,
            "request_id": current["request_id"] or generate_request_id(),
            "user_id": getattr(user, "pk", None),
            "username": getattr(user, "username", "") or "",
        }
    )


def clear_request_context() -> None:
    _request_ctx.set(_EMPTY)


def get_request_context() -> dict[str, Any]:
    return dict(_request_ctx.get())
