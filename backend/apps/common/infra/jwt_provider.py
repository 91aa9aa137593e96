"""
JWT 工具封装：颁发访问令牌

- 依赖 SimpleJWT，在 accounts 服务层或测试中可直接调用 issue_token；校验由 DRF 认证类完成
- 只颁发单个 access token（无刷新令牌），有效期由 SIMPLE_JWT['ACCESS_TOKEN_LIFETIME'] 控制
- 令牌内附带 username / is_admin，签发方由 SIMPLE_JWT['ISSUER'] 决定
"""

from __future__ import annotations

from typing import Any

from rest_framework_simplejwt.tokens import AccessToken, TokenError as SimpleJWTError

from apps.common.exceptions import InternalError


def issue_token(user: Any) -> str:
    """
    为指定用户颁发 access token，附带用户名与管理员标记
    """
    try:
        token = AccessToken.for_user(user)
    except SimpleJWTError as exc:
        raise InternalError(message="颁发令牌失败") from exc
    token["username"] = user.username
    token["is_admin"] = bool(user.is_admin)
    return str(token)
