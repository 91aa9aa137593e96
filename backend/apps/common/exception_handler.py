"""
全局异常处理器（REST_FRAMEWORK['EXCEPTION_HANDLER']）

任何异常最终都变成统一外壳 {code, message, data: null, extra?}：
1) BizError 及子类            → 原样输出 code / message / http_status
2) DRF 内置异常               → 先翻译成对应的 BizError
3) Django DatabaseError       → 5001，记录堆栈
4) DRF 能识别的其他异常（405 等）→ 保留其 HTTP 状态，code 取通用错误码
5) 其余未知异常              → 5002，记录堆栈，不向调用方暴露细节
"""

from __future__ import annotations

from typing import Any

from django.db import DatabaseError as DjangoDatabaseError
from django.http import Http404
from rest_framework.exceptions import (
    AuthenticationFailed,
    NotAuthenticated,
    NotFound as DRFNotFound,
    ParseError,
    PermissionDenied as DRFPermissionDenied,
    ValidationError as DRFValidationError,
)
from rest_framework.response import Response
from rest_framework.views import exception_handler as drf_exception_handler

from .exceptions import (
    AuthError,
    BindError,
    BizError,
    DatabaseError,
    InternalError,
    NotFoundError,
    PermissionDeniedError,
    ValidationError,
)
from .infra.logger import get_logger
from .response import build_envelope, error_response
from .utils.request_context import get_request_context

logger = get_logger(__name__)


def first_message(detail: Any) -> str:
    """DRF 的 detail 可能是字符串、列表或 {字段: [错误]}，取第一条可读信息"""
    if isinstance(detail, dict) and detail:
        return first_message(next(iter(detail.values())))
    if isinstance(detail, list) and detail:
        return first_message(detail[0])
    return str(detail)


def _translate(exc: Exception) -> BizError | None:
    if isinstance(exc, ParseError):
        return BindError(message=first_message(exc.detail))
    if isinstance(exc, DRFValidationError):
        return ValidationError(message=first_message(exc.detail))
    if isinstance(exc, (NotAuthenticated, AuthenticationFailed)):
        return AuthError(message=first_message(exc.detail))
    if isinstance(exc, DRFPermissionDenied):
        return PermissionDeniedError(message=first_message(exc.detail))
    if isinstance(exc, (DRFNotFound, Http404)):
        return NotFoundError()
    return None


def _locate(context: dict) -> dict:
    view = context.get("view")
    return {
        "view": type(view).__name__ if view is not None else None,
        "path": getattr(context.get("request"), "path", None),
        "request_id": get_request_context().get("request_id"),
    }


def custom_exception_handler(exc: Exception, context: dict) -> Response | None:
    if isinstance(exc, BizError):
        return error_response(exc)

    translated = _translate(exc)
    if translated is not None:
        return error_response(translated)

    where = _locate(context)

    if isinstance(exc, DjangoDatabaseError):
        logger.exception("数据库异常", exc_info=exc, extra=where)
        return error_response(DatabaseError(extra={"request_id": where["request_id"]}))

    fallback = drf_exception_handler(exc, context)
    if fallback is not None:
        envelope = build_envelope(code=BizError.default_code, message=first_message(fallback.data))
        return Response(envelope, status=fallback.status_code)

    logger.exception("未处理的异常", exc_info=exc, extra=where)
    return error_response(InternalError(extra={"request_id": where["request_id"]}))
