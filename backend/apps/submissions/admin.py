from __future__ import annotations

from django.contrib import admin

from .models import Submission


# Admin 配置：查看提交记录


@admin.register(Submission)
class SubmissionAdmin(admin.ModelAdmin):
    """提交记录后台：只读，修改与删除统一走 API 以保证评分联动"""

    list_display = ("id", "user", "problem", "submission_point", "created_at", "updated_at")
    list_filter = ("problem",)
    list_select_related = ("user", "problem", "submission_point")
    search_fields = ("user__username", "content")
    readonly_fields = ("user", "problem", "submission_point", "content", "created_at", "updated_at")

    def has_add_permission(self, request):
        return False

    def has_change_permission(self, request, obj=None):
        return False

    def has_delete_permission(self, request, obj=None):
        return False
