"""
统一响应结构（common.response）

GlimGate 所有接口（成功与失败）都返回同一个外壳：
{
    "code": 0,            # 0 为成功；其余取值见 exceptions.py 的错误码表
    "message": "success",
    "data": ...,          # 对象、列表或 null
    "extra": {...}        # 仅在需要时出现：分页信息、错误定位信息
}

视图只调用 success / page_success；失败统一由异常处理器调用 error_response
"""

from typing import Any, Mapping, Optional

from rest_framework import status
from rest_framework.response import Response

from .exceptions import BizError

SUCCESS_CODE = 0
SUCCESS_MESSAGE = "success"

Envelope = dict[str, Any]


def build_envelope(
        *,
        code: int = SUCCESS_CODE,
        message: str = SUCCESS_MESSAGE,
        data: Any = None,
        extra: Optional[Mapping[str, Any]] = None,
) -> Envelope:
    """组装外壳字典；extra 为空时不输出该字段"""
    envelope: Envelope = {"code": code, "message": message, "data": data}
    if extra:
        envelope["extra"] = dict(extra)
    return envelope


def success(data: Any = None, message: str = SUCCESS_MESSAGE) -> Response:
    """
    成功返回，HTTP 固定 200

    创建、修改、删除都走这里，删除时 data 为 None
    """
    return Response(build_envelope(message=message, data=data), status=status.HTTP_200_OK)


def page_success(
        *,
        items: list,
        page: int,
        page_size: int,
        total: int,
        total_pages: int,
        has_next: bool,
        has_previous: bool,
) -> Response:
    """
    分页成功返回：data 为当前页列表，分页信息放在 extra
    """
    extra = {
        "page": page,
        "page_size": page_size,
        "total": total,
        "total_pages": total_pages,
        "has_next": has_next,
        "has_previous": has_previous,
    }
    return Response(build_envelope(data=items, extra=extra), status=status.HTTP_200_OK)


def error_response(exc: BizError) -> Response:
    """
    BizError → 响应

    HTTP 状态取 exc.http_status：认证类 401、授权类 403，其余业务错误保持 200
    """
    envelope = build_envelope(code=exc.code, message=exc.message, extra=exc.extra)
    return Response(envelope, status=exc.http_status)
