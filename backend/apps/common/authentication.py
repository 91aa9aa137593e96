"""
JWT 认证（apps.common.authentication）

在 SimpleJWT 的 JWTAuthentication 之上只改一件事：把它的异常换成 GlimGate 错误码
- 未带 Authorization 头或前缀不是 Bearer → 匿名，交给权限类决定
- 令牌签名错误、过期、签发方不符 → TokenError（1006，HTTP 401）
- 令牌有效但用户已被删除 → AuthError（1004，HTTP 401）
"""

from __future__ import annotations

from typing import Any, Optional

from rest_framework.request import Request
from rest_framework_simplejwt.authentication import JWTAuthentication as SimpleJWTAuthentication
from rest_framework_simplejwt.exceptions import AuthenticationFailed, InvalidToken

from .exceptions import AuthError, TokenError
from .infra.logger import get_logger, logger_extra
from .utils.request_context import bind_user

logger = get_logger(__name__)


class JWTAuthentication(SimpleJWTAuthentication):
    def authenticate(self, request: Request) -> Optional[tuple[Any, Any]]:
        header = self.get_header(request)
        raw_token = self.get_raw_token(header) if header is not None else None
        if raw_token is None:
            return None

        try:
            token = self.get_validated_token(raw_token)
        except InvalidToken as exc:
            logger.warning("拒绝无效令牌", extra=logger_extra({"path": request.path}))
            raise TokenError() from exc

        try:
            user = self.get_user(token)
        except (InvalidToken, AuthenticationFailed) as exc:
            # 用户被软删除后，旧令牌同样失效
            logger.warning("令牌对应的用户不存在", extra=logger_extra({"path": request.path}))
            raise AuthError(message="用户不存在或已被删除") from exc

        bind_user(user)
        return user, token
