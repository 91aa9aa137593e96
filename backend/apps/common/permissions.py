"""
路由级权限类

只区分三档：公开 / 已登录 / 管理员。涉及具体方向或资源归属的判断在服务层通过
apps.common.capabilities 完成。不满足时直接抛 BizError，交给全局异常处理器输出
"""

from __future__ import annotations

from rest_framework.permissions import BasePermission

from .exceptions import AuthError, PermissionDeniedError


def current_user(request):
    """已登录用户；匿名请求抛 AuthError（1004，HTTP 401）"""
    user = getattr(request, "user", None)
    if user is None or not user.is_authenticated:
        raise AuthError()
    return user


class AllowAny(BasePermission):
    def has_permission(self, request, view) -> bool:
        return True


class IsAuthenticated(BasePermission):
    def has_permission(self, request, view) -> bool:
        current_user(request)
        return True


class IsAdmin(BasePermission):
    """管理员接口：未登录 401，已登录但 is_admin 为假 403"""

    def has_permission(self, request, view) -> bool:
        if not getattr(current_user(request), "is_admin", False):
            raise PermissionDeniedError(message="需要管理员权限")
        return True
