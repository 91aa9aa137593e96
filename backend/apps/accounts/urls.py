from __future__ import annotations

from django.urls import path

from .views import (
    AdminUserDetailView,
    AdminUserListView,
    LoginView,
    ProfileView,
    RegisterView,
)

app_name = "accounts"

urlpatterns = [
    # 注册 / 登录：公开接口
    path("auth/register", RegisterView.as_view(), name="register"),
    path("auth/login", LoginView.as_view(), name="login"),
    # 当前用户资料：需要登录
    path("user/profile", ProfileView.as_view(), name="profile"),
    # 用户管理：仅管理员
    path("admin/users", AdminUserListView.as_view(), name="admin-user-list"),
    path("admin/users/<int:user_id>", AdminUserDetailView.as_view(), name="admin-user-detail"),
]
