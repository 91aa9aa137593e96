"""
后台账户管理：
- 列表展示报名信息与管理员标记，支持按学院/管理员筛选
- 删除动作走软删除，释放用户名
"""

from __future__ import annotations

from django.contrib import admin
from django.contrib.auth.admin import UserAdmin as DjangoUserAdmin

from .models import User


@admin.register(User)
class UserAdmin(DjangoUserAdmin):
    list_display = ("id", "username", "nickname", "real_name", "college", "student_id", "is_admin", "created_at")
    list_filter = ("is_admin", "college")
    search_fields = ("username", "nickname", "real_name", "student_id")
    ordering = ("id",)
    readonly_fields = ("created_at", "updated_at", "last_login", "date_joined")
    fieldsets = (
        (None, {"fields": ("username", "password")}),
        ("报名信息", {"fields": ("nickname", "real_name", "college", "student_id", "qq", "email")}),
        ("权限", {"fields": ("is_admin", "is_active", "is_superuser")}),
        ("时间", {"fields": ("last_login", "date_joined", "created_at", "updated_at")}),
    )
    add_fieldsets = (
        (
            None,
            {
                "classes": ("wide",),
                "fields": (
                    "username",
                    "password1",
                    "password2",
                    "nickname",
                    "real_name",
                    "college",
                    "student_id",
                    "is_admin",
                ),
            },
        ),
    )

    def delete_model(self, request, obj):
        obj.soft_delete()

    def delete_queryset(self, request, queryset):
        for obj in queryset:
            obj.soft_delete()
